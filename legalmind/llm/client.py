"""Generation client with OpenAI integration.

Security: the credential comes from the settings table via AssistantConfig,
never hardcoded. Callers fall back to ``legalmind.llm.fallback`` whenever
this module raises.
"""

import asyncio
import logging
from typing import Protocol

from openai import AsyncOpenAI

from legalmind.config import Settings, get_settings
from legalmind.errors import GenerationFailedError, GenerationUnavailableError
from legalmind.models.assistant import AssistantConfig

logger = logging.getLogger(__name__)

MAX_RESPONSE_CHARS = 10000


class GenerationClient(Protocol):
    """Protocol for text generation backends."""

    source: str

    async def complete(self, system_prompt: str, turns: list[dict[str, str]]) -> str:
        """Generate a completion.

        Args:
            system_prompt: Assembled system prompt
            turns: Ordered role/content messages, oldest first, ending with
                the current user message

        Returns:
            Completion text

        Raises:
            GenerationFailedError: On provider errors, timeouts or empty output
        """
        ...


class OpenAIGenerationClient:
    """OpenAI chat-completions backed generation client."""

    source = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        *,
        temperature: float = 0.8,
        top_p: float = 0.9,
        timeout_seconds: float = 30.0,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            model: Model name to use
            temperature: Sampling temperature
            top_p: Nucleus sampling cutoff
            timeout_seconds: Hard bound on a single completion call
        """
        self.client = AsyncOpenAI(api_key=api_key, timeout=timeout_seconds, max_retries=0)
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.timeout_seconds = timeout_seconds

    async def complete(self, system_prompt: str, turns: list[dict[str, str]]) -> str:
        """Generate a completion using the OpenAI API."""
        messages = [{"role": "system", "content": system_prompt}, *turns]

        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=self.temperature,
                    top_p=self.top_p,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise GenerationFailedError(
                f"OpenAI call timed out after {self.timeout_seconds}s"
            ) from e
        except Exception as e:
            raise GenerationFailedError(f"OpenAI API call failed: {e}") from e

        content = (response.choices[0].message.content or "").strip() if response.choices else ""
        if not content:
            raise GenerationFailedError("OpenAI returned empty response")

        if len(content) > MAX_RESPONSE_CHARS:
            logger.warning(
                f"OpenAI response unexpectedly large ({len(content)} chars), "
                f"truncating to {MAX_RESPONSE_CHARS}"
            )
            content = content[:MAX_RESPONSE_CHARS] + "\n\n[Truncated]"

        return content


def get_generation_client(
    config: AssistantConfig, settings: Settings | None = None
) -> GenerationClient:
    """Factory for the generation client configured for this request.

    Raises:
        GenerationUnavailableError: If no credential is configured
    """
    if not config.has_credential or config.openai_api_key is None:
        raise GenerationUnavailableError("No OpenAI API key configured")

    settings = settings or get_settings()
    return OpenAIGenerationClient(
        api_key=config.openai_api_key.get_secret_value().strip(),
        model=settings.openai_model,
        temperature=settings.generation_temperature,
        top_p=settings.generation_top_p,
        timeout_seconds=settings.generation_timeout_seconds,
    )

"""Tests for the generation client.

All tests are deterministic and do not make real network calls.
"""

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr

from legalmind.config import Settings
from legalmind.errors import GenerationFailedError, GenerationUnavailableError
from legalmind.llm.client import OpenAIGenerationClient, get_generation_client
from legalmind.models.assistant import AssistantConfig


def _mock_response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


@pytest.mark.asyncio
async def test_complete_sends_system_prompt_then_turns() -> None:
    """Test that OpenAI is called with system prompt first and returns content."""
    client = OpenAIGenerationClient(api_key="test_key")
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(
        return_value=_mock_response("  The lease was breached.  ")
    )
    client.client = mock_openai_client

    turns = [
        {"role": "user", "content": "earlier"},
        {"role": "assistant", "content": "reply"},
        {"role": "user", "content": "now"},
    ]
    text = await client.complete("SYSTEM", turns)

    assert text == "The lease was breached."
    kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["messages"][0] == {"role": "system", "content": "SYSTEM"}
    assert kwargs["messages"][1:] == turns
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["temperature"] == 0.8
    assert kwargs["top_p"] == 0.9


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", "   ", None])
async def test_empty_response_raises(content: str | None) -> None:
    """Test that empty completions are treated as failures."""
    client = OpenAIGenerationClient(api_key="test_key")
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(return_value=_mock_response(content))
    client.client = mock_openai_client

    with pytest.raises(GenerationFailedError):
        await client.complete("SYSTEM", [{"role": "user", "content": "hi"}])


@pytest.mark.asyncio
async def test_api_error_raises_generation_failed() -> None:
    """Test that provider exceptions are wrapped."""
    client = OpenAIGenerationClient(api_key="test_key")
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(side_effect=Exception("API error"))
    client.client = mock_openai_client

    with pytest.raises(GenerationFailedError, match="API error"):
        await client.complete("SYSTEM", [{"role": "user", "content": "hi"}])


@pytest.mark.asyncio
async def test_hung_call_is_abandoned_after_timeout() -> None:
    """Test that a provider that never answers is cut off."""

    async def hang(**kwargs: Any) -> None:
        await asyncio.sleep(10)

    client = OpenAIGenerationClient(api_key="test_key", timeout_seconds=0.05)
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = hang
    client.client = mock_openai_client

    with pytest.raises(GenerationFailedError, match="timed out"):
        await client.complete("SYSTEM", [{"role": "user", "content": "hi"}])


@pytest.mark.asyncio
async def test_long_response_is_truncated() -> None:
    """Test that oversized completions are capped."""
    client = OpenAIGenerationClient(api_key="test_key")
    mock_openai_client = AsyncMock()
    mock_openai_client.chat.completions.create = AsyncMock(
        return_value=_mock_response("a" * 12000)
    )
    client.client = mock_openai_client

    text = await client.complete("SYSTEM", [{"role": "user", "content": "hi"}])

    assert text.endswith("[Truncated]")
    assert len(text) < 12000


def test_factory_requires_credential() -> None:
    """Test that a missing key makes the backend unavailable."""
    with pytest.raises(GenerationUnavailableError):
        get_generation_client(AssistantConfig(), Settings())


def test_factory_builds_openai_client() -> None:
    """Test that settings flow into the OpenAI client."""
    config = AssistantConfig(openai_api_key=SecretStr("sk-test"))
    settings = Settings(openai_model="gpt-4o", generation_timeout_seconds=12.0)

    client = get_generation_client(config, settings)

    assert isinstance(client, OpenAIGenerationClient)
    assert client.model == "gpt-4o"
    assert client.timeout_seconds == 12.0
    assert client.source == "openai"

"""Per-request assistant configuration derived from stored settings."""

from collections.abc import Mapping

from pydantic import BaseModel, SecretStr

CUSTOM_PROMPT_KEY = "custom_system_prompt"


class AssistantConfig(BaseModel):
    """Explicit configuration for context assembly and generation.

    Built from the settings table at call time and passed down, so the
    assembler and orchestrator never read ambient global state.
    """

    openai_api_key: SecretStr | None = None
    custom_system_prompt: str | None = None

    @property
    def has_credential(self) -> bool:
        """True when a non-blank generation credential is configured."""
        return bool(self.openai_api_key and self.openai_api_key.get_secret_value().strip())

    @classmethod
    def from_settings(cls, values: Mapping[str, str]) -> "AssistantConfig":
        """Build config from raw settings key/value pairs.

        The credential is the first key mentioning "openai" (case-insensitive);
        the overlay is the ``custom_system_prompt`` key.
        """
        api_key: str | None = None
        overlay: str | None = None

        for key, value in values.items():
            lowered = key.lower()
            if api_key is None and "openai" in lowered:
                api_key = (value or "").strip() or None
            if lowered == CUSTOM_PROMPT_KEY:
                overlay = (value or "").strip() or None

        return cls(
            openai_api_key=SecretStr(api_key) if api_key else None,
            custom_system_prompt=overlay,
        )

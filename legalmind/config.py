"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/legal_assistant.db"

    # Local storage
    data_dir: str = "data"
    collections_dir: str = "data/vectors"
    evidence_dir: str = "data/evidence"

    # Generation backend
    openai_model: str = "gpt-4o-mini"
    generation_temperature: float = 0.8
    generation_top_p: float = 0.9
    generation_timeout_seconds: float = 30.0

    # Memory
    max_document_chars: int = 10000
    retrieval_top_n: int = 3
    conversation_window: int = 6

    # External integrations (seconds)
    baserow_timeout_seconds: float = 5.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

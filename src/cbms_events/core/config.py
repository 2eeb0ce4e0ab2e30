"""Application settings.

Values come from environment variables prefixed with CBMS_ (or a local
.env file). The OpenAI API key is read separately by OpenAIConfig from
OPENAI_API_KEY.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default database path
DEFAULT_DB_PATH = Path("data/cbms_events.db")


class Settings(BaseSettings):
    """Runtime configuration for the dashboard service."""

    model_config = SettingsConfigDict(
        env_prefix="CBMS_",
        env_file=".env",
        extra="ignore",
    )

    db_path: Path = DEFAULT_DB_PATH
    store_backend: Literal["sql", "memory"] = "sql"

    # Sync loop
    poll_interval_sec: float = 30.0

    # Insight collaborator
    summarizer: Literal["openai", "mock"] = "openai"
    openai_model: str = "gpt-4o-mini"
    openai_timeout_sec: float = 30.0

    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings()

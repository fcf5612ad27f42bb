"""Configuration management using pydantic-settings."""

import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

# Backends with a native single-statement upsert
SUPPORTED_DATABASE_BACKENDS = ("sqlite", "postgresql", "mysql", "mariadb")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Graph Registry"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./graph_registry.db"

    # OpenAI-compatible completion API
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o-mini"
    LLM_TIMEOUT: float = 60.0  # API timeout in seconds

    # Title/description generation
    DETAILS_TEMPERATURE: float = 0.5
    DETAILS_MAX_TOKENS: int = 300

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.DATABASE_URL.startswith("sqlite")

    @field_validator("DATABASE_URL")
    @classmethod
    def check_database_backend(cls, value: str) -> str:
        """Reject database URLs the repository cannot upsert into."""
        try:
            backend = make_url(value).get_backend_name()
        except ArgumentError as e:
            raise ValueError(f"Invalid DATABASE_URL: {e}") from e
        if backend not in SUPPORTED_DATABASE_BACKENDS:
            supported = ", ".join(SUPPORTED_DATABASE_BACKENDS)
            raise ValueError(
                f"Unsupported database backend '{backend}'. Supported: {supported}"
            )
        return value

    @model_validator(mode="after")
    def check_llm_settings(self) -> "Settings":
        """Warn about settings that break details generation."""
        if not self.OPENAI_API_KEY:
            logging.warning(
                "OPENAI_API_KEY is not set; details generation will be unavailable"
            )
        return self


settings = Settings()

"""
Application Settings for College Advisor

Centralized configuration using Pydantic Settings with .env support.
All environment variables are validated at startup.
"""

from functools import lru_cache
from typing import Optional
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The completion API is any OpenAI-compatible chat/completions endpoint.
    The lookup store is a local SQLite file opened read-only by default.
    """

    # Completion API Configuration
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-3.5-turbo"

    # Completion request parameters
    completion_temperature: float = 0.7
    completion_max_tokens: int = 256
    completion_top_p: float = 1.0
    completion_frequency_penalty: float = 0.0
    completion_presence_penalty: float = 0.0
    completion_timeout_seconds: float = Field(default=600.0, gt=0)

    # Lookup store Configuration
    database_url: str = "sqlite+aiosqlite:///./db/mydb.sqlite"
    database_read_only: bool = True
    database_echo: bool = False

    # Enrichment steps for the profile submission
    enrich_sat_data: bool = True
    enrich_colleges: bool = True

    # Application Settings
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # CORS Configuration
    allowed_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_database_url(self) -> "Settings":
        """Only async SQLite drivers are supported for the lookup store."""
        if not self.database_url.startswith("sqlite+aiosqlite://"):
            raise ValueError(
                "DATABASE_URL must use the sqlite+aiosqlite:// driver"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience export for direct import
settings = get_settings()

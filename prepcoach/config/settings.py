"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading.
"""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from prepcoach.models.evaluation import Difficulty


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "PrepCoach"
    app_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # AI gateway (OpenAI-compatible chat completions)
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1"
    ai_gateway_api_key: str = ""
    ai_model: str = "google/gemini-2.5-flash"
    chat_completions_path: str = "/chat/completions"
    request_timeout_seconds: float = 60.0

    # Per-call generation settings
    scoring_temperature: float = 0.3  # Low for consistent scores
    scoring_max_tokens: int = 200
    question_temperature: float = 0.7  # Higher for question variety
    question_max_tokens: int = 150
    coaching_temperature: float = 0.7

    # Interview settings
    max_questions: int = 5
    starting_difficulty: Difficulty = Difficulty.EASY

    # CORS - stored as comma-separated string in env
    # Uses validation_alias to read from CORS_ORIGINS env var
    cors_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:8000",
        validation_alias="cors_origins"
    )

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

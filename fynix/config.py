"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage for the serialized app state
    DATABASE_URL: str = "sqlite:///./fynix.db"

    # API (constants, not from env)
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "fynix API"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Logging; defaults to DEBUG in development and INFO elsewhere
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None

    # Feed refresh
    FEED_REFRESH_INTERVAL_SECONDS: float = 60.0

    # OCR
    OCR_LANGUAGE: str = "deu+eng"

    # AI configuration
    AI_PROVIDER: (
        Literal["ollama"] | Literal["openai"] | Literal["anthropic"] | Literal["google"] | None
    ) = None
    AI_MODEL_NAME: str | None = None
    AI_VISION_MODEL_NAME: str | None = None
    AI_RETRY_DELAY_SECONDS: float = 0.5

    # ollama
    OPENAI_BASE_URL: str | None = None
    # openai
    OPENAI_API_KEY: str | None = None
    # anthropic
    ANTHROPIC_API_KEY: str | None = None
    # google
    GEMINI_API_KEY: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ai_enabled(self) -> bool:
        """Whether AI features are enabled."""
        return self.AI_PROVIDER is not None

    @model_validator(mode="after")
    def validate_ai_provider_config(self) -> "Settings":
        """Validate that the chosen AI provider has a model and credentials."""
        if self.AI_PROVIDER is not None and self.AI_MODEL_NAME is None:
            msg = f"AI_MODEL_NAME is required when AI_PROVIDER is '{self.AI_PROVIDER}'"
            raise ValueError(msg)

        required = {
            "ollama": "OPENAI_BASE_URL",
            "openai": "OPENAI_API_KEY",
            "anthropic": "ANTHROPIC_API_KEY",
            "google": "GEMINI_API_KEY",
        }
        if self.AI_PROVIDER is not None:
            field = required[self.AI_PROVIDER]
            if not getattr(self, field):
                msg = f"{field} is required when AI_PROVIDER is '{self.AI_PROVIDER}'"
                raise ValueError(msg)
        return self


def configure_logging(environment: str = "development", level: str | None = None) -> None:
    """
    Configure structured logging with structlog.

    Args:
        environment: JSON output in production, colored console output otherwise
        level: Overrides the environment default (DEBUG in development, INFO elsewhere)
    """
    # Determine if we should use JSON output (production) or console output (dev)
    use_json = environment == "production"
    if level is None:
        level = "DEBUG" if environment == "development" else "INFO"

    # Configure stdlib logging
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    # APScheduler logs every refresh tick at INFO
    logging.getLogger("apscheduler").setLevel(logging.WARNING)

    # Configure structlog
    processors: list[Callable[..., Any]] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        # Production: JSON output
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Development: Console output with colors
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

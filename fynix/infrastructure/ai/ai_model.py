from functools import lru_cache

from pydantic_ai.models import Model
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.anthropic import AnthropicProvider
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.ollama import OllamaProvider
from pydantic_ai.providers.openai import OpenAIProvider

from fynix.config import Settings, get_settings
from fynix.exceptions import ServiceError


def build_ai_model(settings: Settings, model_name: str | None = None) -> Model:
    """
    Build a Pydantic AI model for the configured provider.

    Args:
        settings: Application settings; provider credentials are validated there
        model_name: Overrides AI_MODEL_NAME, e.g. for a dedicated vision model

    Raises:
        ServiceError: If no AI provider is configured
    """
    name = model_name or settings.AI_MODEL_NAME
    if settings.AI_PROVIDER is None or name is None:
        raise ServiceError("AI provider is not configured")

    if settings.AI_PROVIDER == "ollama":
        # Guaranteed by the settings validator
        assert settings.OPENAI_BASE_URL is not None
        return OpenAIChatModel(
            model_name=name,
            provider=OllamaProvider(base_url=settings.OPENAI_BASE_URL),
        )

    if settings.AI_PROVIDER == "openai":
        assert settings.OPENAI_API_KEY is not None
        return OpenAIChatModel(
            model_name=name,
            provider=OpenAIProvider(api_key=settings.OPENAI_API_KEY),
        )

    if settings.AI_PROVIDER == "anthropic":
        assert settings.ANTHROPIC_API_KEY is not None
        return AnthropicModel(
            model_name=name,
            provider=AnthropicProvider(api_key=settings.ANTHROPIC_API_KEY),
        )

    assert settings.GEMINI_API_KEY is not None
    return GoogleModel(
        model_name=name,
        provider=GoogleProvider(api_key=settings.GEMINI_API_KEY),
    )


@lru_cache
def get_ai_model() -> Model:
    """
    Get cached text model. Built lazily so the provider SDKs are only touched
    once AI features are actually used.
    """
    return build_ai_model(get_settings())


@lru_cache
def get_ai_vision_model() -> Model:
    """Get cached vision model; falls back to the text model name."""
    settings = get_settings()
    return build_ai_model(settings, settings.AI_VISION_MODEL_NAME)

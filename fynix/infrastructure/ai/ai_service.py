"""AI completion and vision services backed by Pydantic AI agents."""

import asyncio
from collections.abc import Callable

import structlog
from pydantic_ai import BinaryContent
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from fynix.application.learning.protocols.ai_completion_service import AIResponse
from fynix.config import get_settings
from fynix.exceptions import ServiceError
from fynix.infrastructure.ai.ai_agents import get_completion_agent, get_transcription_agent
from fynix.infrastructure.ai.ai_model import get_ai_model, get_ai_vision_model

logger = structlog.get_logger(__name__)

TRANSIENT_ERROR_MARKERS = ("empty response", "invalid json", "failed")
NOT_CONFIGURED = "AI provider is not configured"

_IMAGE_SIGNATURES = (
    (b"\x89PNG", "image/png"),
    (b"\xff\xd8", "image/jpeg"),
    (b"GIF8", "image/gif"),
)


def is_transient_error(error: str | None) -> bool:
    message = (error or "").lower()
    return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)


def detect_image_media_type(image: bytes) -> str:
    if image[:4] == b"RIFF" and image[8:12] == b"WEBP":
        return "image/webp"
    for signature, media_type in _IMAGE_SIGNATURES:
        if image.startswith(signature):
            return media_type
    return "image/jpeg"


def _configured_model(factory: Callable[[], Model]) -> Model | None:
    if not get_settings().ai_enabled:
        return None
    return factory()


class AIService:
    def __init__(self, model: Model | None = None, retry_delay_seconds: float = 0.5) -> None:
        self.model = model
        self.retry_delay_seconds = retry_delay_seconds

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
    ) -> AIResponse:
        """Run one completion. Failures are reported in the response, never raised."""
        model = self.model or _configured_model(get_ai_model)
        if model is None:
            return AIResponse(text="", success=False, error=NOT_CONFIGURED)

        agent = get_completion_agent(model, system_prompt)
        model_settings = ModelSettings(temperature=temperature) if temperature is not None else None
        try:
            result = await agent.run(prompt, model_settings=model_settings)
        except Exception as e:
            logger.warning("ai_completion_failed", error=str(e))
            return AIResponse(text="", success=False, error=f"AI request failed: {e}")

        text = result.output.strip()
        if not text:
            return AIResponse(text="", success=False, error="AI returned an empty response")
        return AIResponse(text=text, success=True)

    async def complete_with_retry(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        retries: int = 2,
    ) -> AIResponse:
        """
        Run a completion, retrying transient failures.

        Only failures whose error mentions an empty response, invalid JSON or
        a failed request are retried, with a fixed delay between attempts.

        Args:
            prompt: User prompt
            system_prompt: Optional instructions for the model
            temperature: Optional sampling temperature
            retries: Extra attempts after the first one

        Returns:
            The first successful response, or the last failure
        """
        response = await self.complete(prompt, system_prompt, temperature)
        attempt = 0
        while not response.success and attempt < retries and is_transient_error(response.error):
            attempt += 1
            logger.info("ai_completion_retry", attempt=attempt, error=response.error)
            await asyncio.sleep(self.retry_delay_seconds)
            response = await self.complete(prompt, system_prompt, temperature)
        return response


class AIVisionService:
    def __init__(self, model: Model | None = None) -> None:
        self.model = model

    async def transcribe(self, prompt: str, images: list[bytes]) -> str:
        """
        Ask the vision model about one or more images.

        Raises:
            ServiceError: If AI is not configured or the model returned nothing
        """
        model = self.model or _configured_model(get_ai_vision_model)
        if model is None:
            raise ServiceError(NOT_CONFIGURED)

        agent = get_transcription_agent(model)
        content = [
            BinaryContent(data=image, media_type=detect_image_media_type(image)) for image in images
        ]
        result = await agent.run([prompt, *content])

        text = result.output.strip()
        if not text:
            raise ServiceError("No response received from the vision model")
        return text

"""Use case for quizzes generated from study material."""

import structlog

from fynix.application.common.fallback_pipeline import FallbackPipeline
from fynix.application.learning.strategies.material_quiz_strategies import MaterialQuizRequest
from fynix.application.learning.strategies.transcription_strategies import ImageTextRequest
from fynix.application.learning.use_cases.dtos import GeneratedQuiz
from fynix.application.state.state_store import StateStore
from fynix.domain.common.exceptions import ValidationError
from fynix.domain.learning.entities.quiz_item import QuizItem

logger = structlog.get_logger(__name__)

MIN_MATERIAL_CHARS = 30


class MaterialQuizUseCase:
    def __init__(
        self,
        store: StateStore,
        quiz_pipeline: FallbackPipeline[MaterialQuizRequest, list[QuizItem]],
        transcription_pipeline: FallbackPipeline[ImageTextRequest, str],
    ) -> None:
        self.store = store
        self.quiz_pipeline = quiz_pipeline
        self.transcription_pipeline = transcription_pipeline

    async def from_text(self, text: str) -> GeneratedQuiz:
        """
        Build a quiz from pasted material.

        Raises:
            ValidationError: If the material is shorter than 30 characters or
                has nothing to ask about
        """
        text = text.strip()
        if len(text) < MIN_MATERIAL_CHARS:
            raise ValidationError(
                f"Material needs at least {MIN_MATERIAL_CHARS} characters", field="text"
            )
        return await self._build(text)

    async def from_image(self, image: bytes) -> GeneratedQuiz:
        """
        Transcribe a photographed page, then build a quiz from its text.

        Raises:
            ValidationError: If no readable text was found in the image
        """
        result = await self.transcription_pipeline.run(ImageTextRequest(image=image))
        if not result.is_success:
            logger.info("material_transcription_failed", error=result.unwrap_error())
            raise ValidationError("No readable text found in the image", field="image")

        outcome = result.unwrap()
        logger.info("material_transcribed", source=outcome.strategy, chars=len(outcome.value))
        return await self._build(outcome.value)

    async def _build(self, text: str) -> GeneratedQuiz:
        language = self.store.snapshot().preferences.language.value
        result = await self.quiz_pipeline.run(MaterialQuizRequest(source_text=text, language=language))
        if not result.is_success:
            raise ValidationError("The material has no sentences to quiz on", field="text")

        outcome = result.unwrap()
        logger.info("material_quiz_built", source=outcome.strategy, item_count=len(outcome.value))
        return GeneratedQuiz(items=outcome.value, source=outcome.strategy)

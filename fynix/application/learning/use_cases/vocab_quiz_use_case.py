"""Use case for starting a vocabulary quiz."""

import structlog

from fynix.application.common.fallback_pipeline import FallbackPipeline
from fynix.application.learning.strategies.vocab_quiz_strategies import VocabQuizRequest
from fynix.application.learning.use_cases.dtos import GeneratedQuiz
from fynix.application.state.state_store import StateStore
from fynix.domain.common.exceptions import DomainError, ValidationError
from fynix.domain.learning.entities.quiz_item import QuizDirection, QuizItem, QuizMode
from fynix.exceptions import VocabListNotFoundError

logger = structlog.get_logger(__name__)

MIN_QUIZ_ENTRIES = 2


class VocabQuizUseCase:
    def __init__(
        self,
        store: StateStore,
        pipeline: FallbackPipeline[VocabQuizRequest, list[QuizItem]],
    ) -> None:
        self.store = store
        self.pipeline = pipeline

    async def start_quiz(
        self, list_id: str, mode: QuizMode, direction: QuizDirection
    ) -> GeneratedQuiz:
        """
        Build a quiz for a vocabulary list, AI first with a local fallback.

        Args:
            list_id: ID of the vocabulary list
            mode: Multiple choice or free input
            direction: Which side is asked; mixed picks per question

        Returns:
            The quiz and the strategy that produced it

        Raises:
            VocabListNotFoundError: If the list does not exist
            ValidationError: If the list has fewer than two entries
        """
        vocab_list = self.store.find_vocab_list(list_id)
        if vocab_list is None:
            raise VocabListNotFoundError(list_id)
        if len(vocab_list.entries) < MIN_QUIZ_ENTRIES:
            raise ValidationError("Add at least two words to start a quiz", field="entries")

        request = VocabQuizRequest(
            entries=tuple(vocab_list.pairs()),
            source_lang=vocab_list.source_lang,
            target_lang=vocab_list.target_lang,
            mode=QuizMode(mode),
            direction=QuizDirection(direction),
        )
        result = await self.pipeline.run(request)
        if not result.is_success:
            raise DomainError(f"Could not build a quiz: {result.unwrap_error()}")

        outcome = result.unwrap()
        logger.info(
            "vocab_quiz_started",
            list_id=list_id,
            source=outcome.strategy,
            item_count=len(outcome.value),
        )
        return GeneratedQuiz(items=outcome.value, source=outcome.strategy)

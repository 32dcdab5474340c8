"""Use case for checking quiz answers and settling XP."""

import structlog

from fynix.application.learning.use_cases.dtos import AnswerResult
from fynix.application.state.state_store import StateStore
from fynix.domain.common.exceptions import ValidationError
from fynix.domain.learning.entities.quiz_item import QuizKind, is_correct_answer
from fynix.domain.learning.services.scoring import ANSWER_REWARDS
from fynix.exceptions import FeedItemNotFoundError

logger = structlog.get_logger(__name__)


class AnswerQuizUseCase:
    def __init__(self, store: StateStore) -> None:
        self.store = store

    def answer(self, kind: QuizKind, given: str, expected: str) -> AnswerResult:
        """
        Check an answer and credit or debit XP for the quiz kind.

        Args:
            kind: Material, vocabulary or feed quiz
            given: The learner's answer
            expected: The correct answer of the question

        Returns:
            Whether the answer was right and the signed XP change
        """
        correct = is_correct_answer(given, expected)
        return AnswerResult(
            correct=correct, xp_delta=self._settle(QuizKind(kind), correct), expected=expected
        )

    def answer_feed(self, index: int, selected: int) -> AnswerResult:
        """
        Answer the quiz of the feed card at ``index``.

        Raises:
            FeedItemNotFoundError: If there is no card at that position
            ValidationError: If ``selected`` is not one of the card's options
        """
        with self.store.atomic():
            feed = self.store.snapshot().feed
            if not 0 <= index < len(feed):
                raise FeedItemNotFoundError(index)

            quiz = feed[index].quiz
            if not 0 <= selected < len(quiz.options):
                raise ValidationError(
                    "Selected option does not exist", field="selected", value=selected
                )

            correct = selected == quiz.correct
            return AnswerResult(
                correct=correct,
                xp_delta=self._settle(QuizKind.FEED, correct),
                expected=quiz.correct_option,
            )

    def _settle(self, kind: QuizKind, correct: bool) -> int:
        reward = ANSWER_REWARDS[kind]
        if correct:
            delta = self.store.add_xp(reward.correct_xp)
        elif reward.wrong_penalty:
            delta = -self.store.remove_xp(reward.wrong_penalty)
        else:
            delta = 0
        logger.info("quiz_answered", kind=kind.value, correct=correct, xp_delta=delta)
        return delta

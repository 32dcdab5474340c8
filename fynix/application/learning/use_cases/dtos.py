"""DTOs for quiz use cases."""

from dataclasses import dataclass

from fynix.domain.learning.entities.quiz_item import QuizItem


@dataclass(frozen=True)
class GeneratedQuiz:
    """A quiz and the name of the strategy that produced it."""

    items: list[QuizItem]
    source: str


@dataclass(frozen=True)
class AnswerResult:
    correct: bool
    xp_delta: int
    expected: str

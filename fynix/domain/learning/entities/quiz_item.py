"""
Quiz item value object and quiz enums.
"""

from dataclasses import dataclass
from enum import StrEnum

from fynix.domain.common.exceptions import DomainError


class QuizMode(StrEnum):
    MULTIPLE_CHOICE = "mc"
    INPUT = "input"


class QuizDirection(StrEnum):
    SOURCE_TARGET = "source-target"
    TARGET_SOURCE = "target-source"
    MIXED = "mixed"


class QuizKind(StrEnum):
    """Where a quiz answer came from; decides how it is scored."""

    MATERIAL = "material"
    VOCABULARY = "vocabulary"
    FEED = "feed"


def normalize_answer(answer: str) -> str:
    return answer.strip().lower()


def is_correct_answer(given: str, expected: str) -> bool:
    """Answers match after trimming and lowercasing."""
    return normalize_answer(given) == normalize_answer(expected)


@dataclass(frozen=True)
class QuizItem:
    """
    A single quiz question.

    Business Rules:
    - Question and answer cannot be empty
    - Options, when present, contain the answer exactly once
    """

    question: str
    answer: str
    options: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.question.strip():
            raise DomainError("Question cannot be empty")
        if not self.answer.strip():
            raise DomainError("Answer cannot be empty")
        if self.options is not None and self.options.count(self.answer) != 1:
            raise DomainError("Options must contain the answer exactly once")

    def check(self, given: str) -> bool:
        return is_correct_answer(given, self.answer)

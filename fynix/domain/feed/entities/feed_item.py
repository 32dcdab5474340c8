"""
Feed card entities: AI generated facts with a short quiz, and saved facts.
"""

from dataclasses import dataclass
from enum import StrEnum

from fynix.domain.common.exceptions import ValidationError
from fynix.domain.common.identifiers import generate_id


class FeedQuizType(StrEnum):
    MULTIPLE_CHOICE = "mc"
    TRUE_FALSE = "tf"


@dataclass
class FeedQuiz:
    type: FeedQuizType
    question: str
    options: list[str]
    correct: int

    def __post_init__(self) -> None:
        """Validate invariants."""
        if len(self.options) < 2:
            raise ValidationError("A feed quiz needs at least two options", field="options")
        if not 0 <= self.correct < len(self.options):
            raise ValidationError(
                "Correct index is outside the options", field="correct", value=self.correct
            )

    @property
    def correct_option(self) -> str:
        return self.options[self.correct]


@dataclass
class AIFeedItem:
    """A knowledge card in the feed."""

    category: str
    title: str
    content: str
    quiz: FeedQuiz


@dataclass
class SavedFact:
    """A feed card the learner bookmarked. Titles are unique among saved facts."""

    id: str
    category: str
    title: str
    content: str
    saved_at: str

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise ValidationError("Title cannot be empty", field="title")

    @classmethod
    def create(cls, category: str, title: str, content: str, saved_at: str) -> "SavedFact":
        return cls(
            id=generate_id(),
            category=category.strip(),
            title=title.strip(),
            content=content.strip(),
            saved_at=saved_at,
        )


"""Pydantic schemas for AI generated quiz payloads."""

from typing import Any

import structlog
from pydantic import BaseModel, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from fynix.domain.learning.entities.quiz_item import QuizItem, is_correct_answer

logger = structlog.get_logger(__name__)


class QuizQuestionPayload(BaseModel):
    """One question as returned by the model; loosely typed on input."""

    question: str
    answer: str
    options: list[str] | None = None

    @field_validator("question", "answer", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value).strip()

    @field_validator("options", mode="before")
    @classmethod
    def coerce_options(cls, value: Any) -> list[str] | None:
        if not isinstance(value, list):
            return None
        options = [str(option).strip() for option in value if option is not None]
        return list(dict.fromkeys(option for option in options if option)) or None

    @model_validator(mode="after")
    def require_question_and_answer(self) -> "QuizQuestionPayload":
        if not self.question or not self.answer:
            raise ValueError("question and answer are required")
        return self

    def to_quiz_item(self, require_options: bool) -> QuizItem | None:
        """
        Convert to a QuizItem.

        The answer is matched against the options case-insensitively and
        replaced by the matching option. Options that do not contain the
        answer are dropped.
        """
        answer = self.answer
        options = self.options
        if options is not None:
            match = next((option for option in options if is_correct_answer(option, answer)), None)
            if match is None:
                options = None
            else:
                answer = match
        if require_options and options is None:
            return None
        return QuizItem(
            question=self.question,
            answer=answer,
            options=tuple(options) if options is not None else None,
        )


def parse_quiz_items(
    payload: Any, require_options: bool, limit: int | None = None
) -> list[QuizItem]:
    """
    Validate the ``questions`` array of a quiz payload item by item.

    Malformed items are skipped; the rest are kept in order.
    """
    raw_items = payload.get("questions") if isinstance(payload, dict) else payload
    if not isinstance(raw_items, list):
        return []

    items: list[QuizItem] = []
    for raw in raw_items:
        try:
            question = QuizQuestionPayload.model_validate(raw)
        except PydanticValidationError as e:
            logger.debug("quiz_item_discarded", errors=e.error_count())
            continue
        item = question.to_quiz_item(require_options)
        if item is not None:
            items.append(item)

    return items[:limit] if limit is not None else items

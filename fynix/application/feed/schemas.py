"""Pydantic schema for AI generated feed facts."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from fynix.domain.feed.entities.feed_item import AIFeedItem, FeedQuiz, FeedQuizType


class FeedQuizPayload(BaseModel):
    type: Literal["mc", "tf"] = "mc"
    question: str = Field(min_length=1)
    options: list[str] = Field(min_length=2)
    correct: int = Field(ge=0)

    @model_validator(mode="after")
    def correct_within_options(self) -> "FeedQuizPayload":
        if self.correct >= len(self.options):
            raise ValueError("correct index is outside the options")
        return self


class FeedFactPayload(BaseModel):
    category: str = Field(min_length=1)
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    quiz: FeedQuizPayload

    def to_feed_item(self) -> AIFeedItem:
        return AIFeedItem(
            category=self.category.strip(),
            title=self.title.strip(),
            content=self.content.strip(),
            quiz=FeedQuiz(
                type=FeedQuizType(self.quiz.type),
                question=self.quiz.question.strip(),
                options=[option.strip() for option in self.quiz.options],
                correct=self.quiz.correct,
            ),
        )

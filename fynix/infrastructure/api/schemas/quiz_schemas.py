"""Pydantic schemas for quiz endpoints."""

from pydantic import BaseModel, Field

from fynix.domain.learning.entities.quiz_item import QuizKind


class QuizItemSchema(BaseModel):
    question: str
    answer: str
    options: list[str] | None = None

    model_config = {"from_attributes": True}


class QuizResponse(BaseModel):
    """Schema for a generated quiz."""

    items: list[QuizItemSchema]
    source: str = Field(..., description="Strategy that produced the quiz (ai or local)")

    model_config = {"from_attributes": True}


class MaterialTextRequest(BaseModel):
    text: str = Field(..., description="Study material to quiz on")


class AnswerRequest(BaseModel):
    kind: QuizKind
    given: str
    expected: str


class AnswerResponse(BaseModel):
    correct: bool
    xp_delta: int = Field(..., description="Signed XP change caused by the answer")
    expected: str
    comment: str | None = None

    model_config = {"from_attributes": True}


class FeedbackRequest(BaseModel):
    question: str
    user_answer: str
    correct_answer: str
    is_correct: bool


class VocabFeedbackRequest(BaseModel):
    term: str = Field(..., min_length=1)
    is_correct: bool


class FeedbackResponse(BaseModel):
    comment: str

"""Pydantic schemas for the fact feed and saved facts."""

from pydantic import BaseModel, Field

from fynix.domain.feed.entities.feed_item import FeedQuizType


class FeedQuizSchema(BaseModel):
    type: FeedQuizType
    question: str
    options: list[str]
    correct: int

    model_config = {"from_attributes": True}


class FeedItemSchema(BaseModel):
    category: str
    title: str
    content: str
    quiz: FeedQuizSchema

    model_config = {"from_attributes": True}


class FeedResponse(BaseModel):
    items: list[FeedItemSchema]
    refreshing: bool = Field(..., description="Whether background refresh is active")


class FeedAnswerRequest(BaseModel):
    selected: int = Field(..., ge=0, description="Index of the chosen option")


class FeedRefreshResponse(BaseModel):
    added: bool


class SavedFactSchema(BaseModel):
    id: str
    category: str
    title: str
    content: str
    saved_at: str

    model_config = {"from_attributes": True}


class SavedFactCreateRequest(BaseModel):
    category: str = ""
    title: str = Field(..., min_length=1)
    content: str = ""

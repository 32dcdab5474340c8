"""Pydantic schemas for money log endpoints."""

from pydantic import BaseModel, Field

from fynix.domain.money.entities.money_entry import MoneyDirection


class MoneyEntrySchema(BaseModel):
    id: str
    amount: float
    direction: MoneyDirection
    category: str
    note: str
    date: str

    model_config = {"from_attributes": True}


class MonthlyStatsSchema(BaseModel):
    income: float
    expense: float
    balance: float

    model_config = {"from_attributes": True}


class MoneyOverviewResponse(BaseModel):
    entries: list[MoneyEntrySchema]
    month: MonthlyStatsSchema


class MoneyEntryCreateRequest(BaseModel):
    amount: float = Field(..., description="Positive amount")
    direction: MoneyDirection
    category: str | None = Field(None, description="Suggested from the note when omitted")
    note: str = ""


class MoneyEntryCreateResponse(BaseModel):
    entry: MoneyEntrySchema
    xp_awarded: int
    milestone_reached: bool


class CategorySuggestionResponse(BaseModel):
    category: str
    categories: list[str]

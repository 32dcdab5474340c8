"""Pydantic schemas for habit endpoints."""

from pydantic import BaseModel, Field

from fynix.domain.habits.entities.habit import HabitPolarity


class HabitSchema(BaseModel):
    id: str
    name: str
    polarity: HabitPolarity
    xp_value: int
    reps: int
    completed_today: bool
    streak: int
    last_completed_on: str | None

    model_config = {"from_attributes": True}


class HabitCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    polarity: HabitPolarity = HabitPolarity.POSITIVE
    xp_value: int = Field(..., description="Signed XP per repetition; negative habits cost XP")
    reps: int = Field(1, ge=1)


class HabitCompletionResponse(BaseModel):
    success: bool
    message: str
    xp_delta: int = 0
    habit: HabitSchema | None = None

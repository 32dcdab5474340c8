"""Pydantic schemas for profile, progression and reward endpoints."""

from pydantic import BaseModel, Field

from fynix.domain.gamification.services.mascot import MascotMood
from fynix.domain.identity.entities.user_profile import MAX_ROAST_LEVEL, MIN_ROAST_LEVEL


class UserProfileSchema(BaseModel):
    """Schema for the active profile."""

    name: str
    email: str
    avatar: str
    xp: int
    streak: int
    sessions: int
    last_active: str
    onboarded: bool
    grade: str
    style: str
    motivation: str
    habits: list[str]
    roast_level: int
    goal30: str
    learn_time: str
    school_problem: str
    interests: str | None
    is_private: bool
    is_guest: bool

    model_config = {"from_attributes": True}


class LevelInfoSchema(BaseModel):
    level: int
    title: str
    percent_to_next: int
    current_threshold: int
    next_threshold: int

    model_config = {"from_attributes": True}


class AppStateSummary(BaseModel):
    """Schema for the overall session state shown on the home screen."""

    screen: str
    user: UserProfileSchema | None
    level: LevelInfoSchema | None
    mascot_mood: MascotMood
    jokers: int
    chests: int


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, description="Email used as the profile key")
    name: str = Field(..., min_length=1, description="Display name for a new profile")


class ProfileUpdateRequest(BaseModel):
    """Schema for updating profile fields. Only provided fields are changed."""

    name: str | None = Field(None, min_length=1)
    avatar: str | None = None
    onboarded: bool | None = None
    grade: str | None = None
    style: str | None = None
    motivation: str | None = None
    habits: list[str] | None = None
    roast_level: int | None = Field(None, ge=MIN_ROAST_LEVEL, le=MAX_ROAST_LEVEL)
    goal30: str | None = None
    learn_time: str | None = None
    school_problem: str | None = None
    interests: str | None = None
    is_private: bool | None = None


class ScreenRequest(BaseModel):
    screen: str = Field(..., min_length=1, description="Screen token to navigate to")


class ResumeResponse(BaseModel):
    streak: int | None = Field(None, description="Streak after evaluation, if a profile is active")


class RoastResponse(BaseModel):
    line: str
    mood: MascotMood


class XPRequest(BaseModel):
    amount: int = Field(..., ge=0, description="Base XP before the streak bonus")


class XPResponse(BaseModel):
    credited: int
    xp: int


class JokerResponse(BaseModel):
    success: bool
    jokers: int


class ChestResponse(BaseModel):
    reward: str | None = Field(None, description="Reward label, None when no chest was left")
    chests: int
    jokers: int


class MessageResponse(BaseModel):
    success: bool
    message: str

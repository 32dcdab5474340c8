"""Pydantic schemas for app preferences."""

from pydantic import BaseModel, Field

from fynix.domain.app_state import AccentColor, AppLanguage, ThemeMode


class PreferencesSchema(BaseModel):
    theme: ThemeMode
    language: AppLanguage
    accent: AccentColor
    ai_url: str
    music_enabled: bool

    model_config = {"from_attributes": True}


class PreferencesUpdateRequest(BaseModel):
    """Only provided fields are changed."""

    theme: ThemeMode | None = None
    language: AppLanguage | None = None
    accent: AccentColor | None = None
    ai_url: str | None = Field(None, min_length=1)
    music_enabled: bool | None = None

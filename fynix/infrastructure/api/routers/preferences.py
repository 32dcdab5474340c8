"""API routes for app preferences."""

from fastapi import APIRouter, Depends, status

from fynix.application.state.state_store import StateStore
from fynix.core import container
from fynix.infrastructure.api.schemas.preferences_schemas import (
    PreferencesSchema,
    PreferencesUpdateRequest,
)
from fynix.infrastructure.common.di import inject_use_case

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesSchema, status_code=status.HTTP_200_OK)
def get_preferences(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> PreferencesSchema:
    return PreferencesSchema.model_validate(store.snapshot().preferences)


@router.patch("", response_model=PreferencesSchema, status_code=status.HTTP_200_OK)
def update_preferences(
    request: PreferencesUpdateRequest,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> PreferencesSchema:
    """Change theme, language, accent, AI URL or music. Omitted fields stay as they are."""
    if request.theme is not None:
        store.set_theme(request.theme)
    if request.language is not None:
        store.set_language(request.language)
    if request.accent is not None:
        store.set_accent(request.accent)
    if request.ai_url is not None:
        store.set_ai_url(request.ai_url)
    if request.music_enabled is not None:
        store.set_music_enabled(request.music_enabled)
    return PreferencesSchema.model_validate(store.snapshot().preferences)

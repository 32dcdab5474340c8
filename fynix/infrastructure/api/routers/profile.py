"""API routes for the session, the profile and XP rewards."""

import random

from fastapi import APIRouter, Depends, status

from fynix.application.state.state_store import StateStore
from fynix.core import container
from fynix.domain.gamification.services.mascot import mascot_mood, roast_line
from fynix.domain.gamification.services.progression import level_info
from fynix.exceptions import NotFoundError
from fynix.infrastructure.api.schemas.profile_schemas import (
    AppStateSummary,
    ChestResponse,
    JokerResponse,
    LevelInfoSchema,
    LoginRequest,
    MessageResponse,
    ProfileUpdateRequest,
    ResumeResponse,
    RoastResponse,
    ScreenRequest,
    UserProfileSchema,
    XPRequest,
    XPResponse,
)
from fynix.infrastructure.common.di import inject_use_case

router = APIRouter(prefix="/profile", tags=["profile"])

_rng = random.Random()


def _summary(store: StateStore) -> AppStateSummary:
    state = store.snapshot()
    return AppStateSummary(
        screen=state.screen,
        user=UserProfileSchema.model_validate(state.user) if state.user else None,
        level=LevelInfoSchema.model_validate(level_info(state.user.xp)) if state.user else None,
        mascot_mood=mascot_mood(state.user),
        jokers=state.jokers,
        chests=state.chests,
    )


def _active_profile(store: StateStore) -> UserProfileSchema:
    user = store.user
    if user is None:
        raise NotFoundError("No active profile")
    return UserProfileSchema.model_validate(user)


@router.get("", response_model=AppStateSummary, status_code=status.HTTP_200_OK)
def get_session(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> AppStateSummary:
    """Get the active profile with its level, mascot mood and reward counters."""
    return _summary(store)


@router.post("/login", response_model=UserProfileSchema, status_code=status.HTTP_200_OK)
def login(
    request: LoginRequest,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> UserProfileSchema:
    """
    Log in with an email.

    Returning users get their stored profile back; new emails start onboarding.
    """
    return UserProfileSchema.model_validate(store.login(email=request.email, name=request.name))


@router.post("/guest", response_model=UserProfileSchema, status_code=status.HTTP_200_OK)
def login_as_guest(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> UserProfileSchema:
    return UserProfileSchema.model_validate(store.login_as_guest())


@router.post("/logout", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def logout(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> MessageResponse:
    store.logout()
    return MessageResponse(success=True, message="Logged out")


@router.patch("", response_model=UserProfileSchema, status_code=status.HTTP_200_OK)
def update_profile(
    request: ProfileUpdateRequest,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> UserProfileSchema:
    """
    Update profile fields, e.g. the onboarding answers.

    Raises:
        NotFoundError: If no profile is active
    """
    profile = store.update_user(**request.model_dump(exclude_unset=True))
    if profile is None:
        raise NotFoundError("No active profile")
    return UserProfileSchema.model_validate(profile)


@router.put("/screen", response_model=AppStateSummary, status_code=status.HTTP_200_OK)
def set_screen(
    request: ScreenRequest,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> AppStateSummary:
    store.set_screen(request.screen)
    return _summary(store)


@router.post("/resume", response_model=ResumeResponse, status_code=status.HTTP_200_OK)
def resume(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> ResumeResponse:
    """Evaluate the daily streak and reset yesterday's habit completions."""
    return ResumeResponse(streak=store.resume())


@router.get("/roast", response_model=RoastResponse, status_code=status.HTTP_200_OK)
def get_roast(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> RoastResponse:
    profile = _active_profile(store)
    return RoastResponse(line=roast_line(profile.roast_level, _rng), mood=mascot_mood(store.user))


@router.post("/xp", response_model=XPResponse, status_code=status.HTTP_200_OK)
def add_xp(
    request: XPRequest,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> XPResponse:
    """Credit XP for a finished activity, with the streak bonus applied."""
    _active_profile(store)
    credited = store.add_xp(request.amount)
    return XPResponse(credited=credited, xp=_active_profile(store).xp)


@router.post("/jokers/use", response_model=JokerResponse, status_code=status.HTTP_200_OK)
def use_joker(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> JokerResponse:
    success = store.use_joker()
    return JokerResponse(success=success, jokers=store.snapshot().jokers)


@router.post("/jokers/buy", response_model=JokerResponse, status_code=status.HTTP_200_OK)
def buy_joker(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> JokerResponse:
    success = store.buy_joker()
    return JokerResponse(success=success, jokers=store.snapshot().jokers)


@router.post("/chests/open", response_model=ChestResponse, status_code=status.HTTP_200_OK)
def open_chest(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> ChestResponse:
    reward = store.open_chest()
    state = store.snapshot()
    return ChestResponse(reward=reward, chests=state.chests, jokers=state.jokers)

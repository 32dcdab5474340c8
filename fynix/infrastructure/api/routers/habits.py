"""API routes for habit tracking."""

from fastapi import APIRouter, Depends, status

from fynix.application.habits.complete_habit_use_case import CompleteHabitUseCase
from fynix.application.state.state_store import StateStore
from fynix.core import container
from fynix.exceptions import NotFoundError
from fynix.infrastructure.api.schemas.habit_schemas import (
    HabitCompletionResponse,
    HabitCreateRequest,
    HabitSchema,
)
from fynix.infrastructure.api.schemas.profile_schemas import MessageResponse
from fynix.infrastructure.common.di import inject_use_case

router = APIRouter(prefix="/habits", tags=["habits"])


@router.get("", response_model=list[HabitSchema], status_code=status.HTTP_200_OK)
def list_habits(
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> list[HabitSchema]:
    return [HabitSchema.model_validate(habit) for habit in store.snapshot().habits]


@router.post("", response_model=HabitSchema, status_code=status.HTTP_201_CREATED)
def create_habit(
    request: HabitCreateRequest,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> HabitSchema:
    habit = store.add_habit(
        name=request.name,
        polarity=request.polarity,
        xp_value=request.xp_value,
        reps=request.reps,
    )
    return HabitSchema.model_validate(habit)


@router.post(
    "/{habit_id}/complete",
    response_model=HabitCompletionResponse,
    status_code=status.HTTP_200_OK,
)
def complete_habit(
    habit_id: str,
    use_case: CompleteHabitUseCase = Depends(
        inject_use_case(container.complete_habit_use_case)
    ),
) -> HabitCompletionResponse:
    """
    Complete a habit for today.

    Completing twice on the same day is a no-op reported with success=False.

    Raises:
        NotFoundError: If the habit does not exist
    """
    if use_case.store.snapshot().find_habit(habit_id) is None:
        raise NotFoundError(f"Habit with id {habit_id} not found")

    completion = use_case.execute(habit_id)
    if completion is None:
        return HabitCompletionResponse(success=False, message="Habit already completed today")
    return HabitCompletionResponse(
        success=True,
        message="Habit completed",
        xp_delta=completion.xp_delta,
        habit=HabitSchema.model_validate(completion.habit),
    )


@router.delete("/{habit_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_habit(
    habit_id: str,
    store: StateStore = Depends(inject_use_case(container.state_store)),
) -> MessageResponse:
    if not store.remove_habit(habit_id):
        raise NotFoundError(f"Habit with id {habit_id} not found")
    return MessageResponse(success=True, message="Habit deleted")

"""Use case for completing a habit and settling its XP."""

from dataclasses import dataclass

import structlog

from fynix.application.state.state_store import StateStore
from fynix.domain.habits.entities.habit import Habit

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class HabitCompletion:
    habit: Habit
    xp_delta: int


class CompleteHabitUseCase:
    def __init__(self, store: StateStore) -> None:
        self.store = store

    def execute(self, habit_id: str) -> HabitCompletion | None:
        """
        Complete a habit for today and apply its XP.

        Positive habits credit ``xp_value * reps`` (streak bonus included),
        negative habits debit the absolute value.

        Args:
            habit_id: ID of the habit

        Returns:
            The completed habit with the signed XP change, or None when the
            habit is unknown or already done today
        """
        with self.store.atomic():
            habit = self.store.complete_habit(habit_id)
            if habit is None:
                return None

            xp = habit.xp_per_completion
            if xp > 0:
                delta = self.store.add_xp(xp)
            else:
                delta = -self.store.remove_xp(abs(xp))

        logger.info("habit_completed", habit_id=habit.id, xp_delta=delta, streak=habit.streak)
        return HabitCompletion(habit=habit, xp_delta=delta)

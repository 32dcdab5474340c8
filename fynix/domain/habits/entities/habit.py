"""
Habit entity.

Positive habits earn XP when completed, negative habits cost XP.
"""

from dataclasses import dataclass
from enum import StrEnum

from fynix.domain.common.exceptions import ValidationError
from fynix.domain.common.identifiers import generate_id


class HabitPolarity(StrEnum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass
class Habit:
    """
    A daily habit.

    Business Rules:
    - Name cannot be empty
    - reps is at least 1
    - A habit completes at most once per calendar day
    """

    id: str
    name: str
    polarity: HabitPolarity
    xp_value: int
    reps: int = 1
    completed_today: bool = False
    streak: int = 0
    last_completed_on: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.name or not self.name.strip():
            raise ValidationError("Habit name cannot be empty", field="name")
        if self.reps < 1:
            raise ValidationError("Repetitions must be at least 1", field="reps", value=self.reps)
        if self.streak < 0:
            raise ValidationError("Streak cannot be negative", field="streak", value=self.streak)

    @property
    def xp_per_completion(self) -> int:
        return self.xp_value * max(1, self.reps)

    def is_completed_on(self, day: str) -> bool:
        """A completion flag only counts for the day it was set."""
        return self.completed_today and self.last_completed_on == day

    def complete(self, day: str) -> None:
        self.completed_today = True
        self.last_completed_on = day
        self.streak += 1

    def roll_over(self, day: str) -> bool:
        """Clear a completion flag left over from an earlier day.

        Returns:
            True if the flag was cleared
        """
        if self.completed_today and self.last_completed_on != day:
            self.completed_today = False
            return True
        return False

    @classmethod
    def create(
        cls,
        name: str,
        polarity: HabitPolarity,
        xp_value: int,
        reps: int = 1,
    ) -> "Habit":
        """Create a new habit with a fresh id."""
        return cls(
            id=generate_id(),
            name=name.strip(),
            polarity=HabitPolarity(polarity),
            xp_value=xp_value,
            reps=reps,
        )

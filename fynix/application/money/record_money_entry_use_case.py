"""Use case for recording income and expenses."""

from dataclasses import dataclass

import structlog

from fynix.application.state.state_store import StateStore
from fynix.domain.money.entities.money_entry import MoneyDirection, MoneyEntry
from fynix.domain.money.services import (
    MILESTONE_XP,
    crosses_milestone,
    income_xp,
    monthly_stats,
    suggest_category,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MoneyRecord:
    entry: MoneyEntry
    xp_awarded: int
    milestone_reached: bool


class RecordMoneyEntryUseCase:
    def __init__(self, store: StateStore) -> None:
        self.store = store

    def execute(
        self,
        amount: float,
        direction: MoneyDirection,
        category: str | None = None,
        note: str = "",
    ) -> MoneyRecord:
        """
        Record an entry and award XP for saving.

        Income earns a tenth of the amount as XP (5 to 30). Pushing this
        month's balance from below 100 to 100 or more earns a 50 XP bonus.

        Args:
            amount: Positive amount
            direction: Income or expense
            category: Category name; suggested from the note when omitted
            note: Free text note

        Returns:
            The stored entry and the XP that was credited

        Raises:
            ValidationError: If the amount is not positive or no category applies
        """
        if category is None:
            category = suggest_category(direction, note)

        with self.store.atomic():
            before = monthly_stats(self.store.snapshot().money, self.store.current_date())
            entry = self.store.add_money_entry(
                amount=amount, direction=direction, category=category, note=note
            )
            after = monthly_stats(self.store.snapshot().money, self.store.current_date())

            xp_awarded = 0
            if entry.direction == MoneyDirection.INCOME:
                xp_awarded += self.store.add_xp(income_xp(entry.amount))

            milestone = crosses_milestone(before.balance, after.balance)
            if milestone:
                xp_awarded += self.store.add_xp(MILESTONE_XP)

        logger.info(
            "money_entry_recorded",
            direction=entry.direction.value,
            xp_awarded=xp_awarded,
            milestone=milestone,
        )
        return MoneyRecord(entry=entry, xp_awarded=xp_awarded, milestone_reached=milestone)

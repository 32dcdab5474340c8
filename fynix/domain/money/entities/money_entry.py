"""
Money entry entity for the income and expense log.
"""

from dataclasses import dataclass
from enum import StrEnum

from fynix.domain.common.exceptions import ValidationError
from fynix.domain.common.identifiers import generate_id


class MoneyDirection(StrEnum):
    INCOME = "income"
    EXPENSE = "expense"


@dataclass
class MoneyEntry:
    """
    A single income or expense record.

    Business Rules:
    - Amount must be positive
    - Category is required
    """

    id: str
    amount: float
    direction: MoneyDirection
    category: str
    note: str
    date: str

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.amount > 0:
            raise ValidationError("Enter a valid amount", field="amount", value=self.amount)
        if not self.category or not self.category.strip():
            raise ValidationError("Pick a category", field="category")

    @classmethod
    def create(
        cls,
        amount: float,
        direction: MoneyDirection,
        category: str,
        note: str,
        date: str,
    ) -> "MoneyEntry":
        return cls(
            id=generate_id(),
            amount=amount,
            direction=MoneyDirection(direction),
            category=category.strip(),
            note=note.strip(),
            date=date,
        )
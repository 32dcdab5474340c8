"""Money log helpers: category suggestions, monthly totals and XP for saving."""

import re
from dataclasses import dataclass
from datetime import date, datetime

from fynix.domain.money.entities.money_entry import MoneyDirection, MoneyEntry

CATEGORIES: dict[MoneyDirection, tuple[str, ...]] = {
    MoneyDirection.INCOME: ("Taschengeld", "Nebenjob", "Geschenk", "Verkauf", "Sonstiges"),
    MoneyDirection.EXPENSE: (
        "Essen",
        "Kleidung",
        "Gaming",
        "Handy",
        "Transport",
        "Freizeit",
        "Sonstiges",
    ),
}
FALLBACK_CATEGORY = "Sonstiges"

_CATEGORY_RULES: dict[MoneyDirection, tuple[tuple[re.Pattern[str], str], ...]] = {
    MoneyDirection.EXPENSE: (
        (re.compile(r"döner|burger|pizza|snack|essen|kebab", re.I), "Essen"),
        (re.compile(r"steam|ps|xbox|game|gaming", re.I), "Gaming"),
        (re.compile(r"handy|phone|iphone|android|vertrag|prepaid", re.I), "Handy"),
        (re.compile(r"bus|bahn|uber|taxi|ticket", re.I), "Transport"),
        (re.compile(r"kino|party|festival|konzert|freizeit", re.I), "Freizeit"),
        (re.compile(r"hoodie|shirt|schuhe|jacke|kleidung", re.I), "Kleidung"),
    ),
    MoneyDirection.INCOME: (
        (re.compile(r"job|lohn|arbeit|gagen", re.I), "Nebenjob"),
        (re.compile(r"taschen|eltern|pocket", re.I), "Taschengeld"),
        (re.compile(r"geschenk|geburtstag", re.I), "Geschenk"),
        (re.compile(r"verkauf|vinted|ebay|secondhand", re.I), "Verkauf"),
    ),
}

MILESTONE_BALANCE = 100
MILESTONE_XP = 50


@dataclass(frozen=True)
class MonthlyStats:
    income: float
    expense: float

    @property
    def balance(self) -> float:
        return self.income - self.expense


def suggest_category(direction: MoneyDirection, note: str) -> str:
    """Guess a category from the note; the first category of the direction when empty."""
    if not note.strip():
        return CATEGORIES[direction][0]
    for pattern, category in _CATEGORY_RULES[direction]:
        if pattern.search(note):
            return category
    return FALLBACK_CATEGORY


def monthly_stats(entries: list[MoneyEntry], today: date) -> MonthlyStats:
    income = 0.0
    expense = 0.0
    for entry in entries:
        recorded = datetime.fromisoformat(entry.date)
        if (recorded.year, recorded.month) != (today.year, today.month):
            continue
        if entry.direction == MoneyDirection.INCOME:
            income += entry.amount
        else:
            expense += entry.amount
    return MonthlyStats(income=income, expense=expense)


def income_xp(amount: float) -> int:
    """XP for saving money: a tenth of the amount, between 5 and 30."""
    return min(30, max(5, int(amount / 10 + 0.5)))


def crosses_milestone(balance_before: float, balance_after: float) -> bool:
    return balance_before < MILESTONE_BALANCE <= balance_after

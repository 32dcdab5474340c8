"""
Level and streak arithmetic.

Pure functions over XP and streak counters. Level thresholds are cumulative:
reaching level ``n + 1`` costs ``tier_cost(n)`` XP on top of the threshold of
level ``n``.
"""

from dataclasses import dataclass

LEVEL_TITLES = (
    "Newbie",
    "Scholar",
    "Learner",
    "Explorer",
    "Thinker",
    "Achiever",
    "Master",
    "Expert",
    "Legend",
    "Champion",
    "GOD",
)
MAX_LEVEL = 200

# (minimum streak, bonus percent), highest first
STREAK_BONUS_STEPS = ((21, 50), (14, 10), (7, 5))


@dataclass(frozen=True)
class LevelInfo:
    level: int
    title: str
    percent_to_next: int
    current_threshold: int
    next_threshold: int


def round_half_up(numerator: int, denominator: int) -> int:
    """Integer division rounding halves away from zero for non-negative inputs."""
    return (2 * numerator + denominator) // (2 * denominator)


def tier_cost(level: int) -> int:
    """XP needed to go from ``level`` to ``level + 1``."""
    if level <= 5:
        return 50 + 50 * level
    if level <= 15:
        return 300 + 100 * (level - 5)
    if level <= 40:
        return 1300 + 200 * (level - 15)
    return 6300 + 500 * (level - 40)


def level_title(level: int) -> str:
    return LEVEL_TITLES[min(level - 1, len(LEVEL_TITLES) - 1)]


def level_info(xp: int) -> LevelInfo:
    """
    Resolve the level band that contains ``xp``.

    Args:
        xp: Non-negative XP total

    Returns:
        LevelInfo with the band thresholds and the percent progress inside it
    """
    xp = max(0, xp)
    level = 1
    current = 0
    upcoming = tier_cost(level)
    while xp >= upcoming and level < MAX_LEVEL:
        level += 1
        current = upcoming
        upcoming = current + tier_cost(level)

    percent = round_half_up((xp - current) * 100, upcoming - current)
    return LevelInfo(
        level=level,
        title=level_title(level),
        percent_to_next=max(0, min(100, percent)),
        current_threshold=current,
        next_threshold=upcoming,
    )


def streak_bonus(streak: int) -> int:
    """Percent bonus applied to XP credits for the given streak length."""
    for minimum, bonus in STREAK_BONUS_STEPS:
        if streak >= minimum:
            return bonus
    return 0


def apply_streak_bonus(amount: int, streak: int) -> int:
    """XP actually credited for ``amount`` at ``streak``, rounded half up."""
    return round_half_up(amount * (100 + streak_bonus(streak)), 100)

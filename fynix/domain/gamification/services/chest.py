"""Treasure chest rewards."""

import random
from dataclasses import dataclass
from enum import StrEnum


class ChestRewardKind(StrEnum):
    XP = "xp"
    JOKER = "joker"
    BOOSTER = "booster"


@dataclass(frozen=True)
class ChestReward:
    label: str
    kind: ChestRewardKind
    value: int


CHEST_REWARDS = (
    ChestReward("+50 XP Bonus!", ChestRewardKind.XP, 50),
    ChestReward("+100 XP Bonus!", ChestRewardKind.XP, 100),
    ChestReward("Joker received!", ChestRewardKind.JOKER, 1),
    # cosmetic only
    ChestReward("Mystic Booster!", ChestRewardKind.BOOSTER, 0),
)


def draw_chest_reward(rng: random.Random) -> ChestReward:
    """Pick one of the rewards with equal weight."""
    return rng.choice(CHEST_REWARDS)

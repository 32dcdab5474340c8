"""Mascot mood and roast lines derived from the profile."""

import random
from enum import StrEnum

from fynix.domain.gamification.services.progression import level_info
from fynix.domain.identity.entities.user_profile import UserProfile


class MascotMood(StrEnum):
    NEUTRAL = "neutral"
    THRONE = "throne"
    LAUGHING = "laughing"
    HAPPY = "happy"
    SLEEPY = "sleepy"
    CRYING = "crying"
    THINKING = "thinking"
    SMUG = "smug"


ROASTS: dict[str, tuple[str, ...]] = {
    "mild": (
        "Close, but close is still a miss 😅",
        "Almost! But almost only counts in horseshoes 🐴",
        "No worries, next time it clicks! 💪",
    ),
    "medium": (
        "Bruh... not your finest moment 💀",
        "Did you guess? Be honest 😤",
        "My hamster would have known that 🐹",
    ),
    "hard": (
        "Dude... I'm speechless. And that says something 💀💀",
        "Did you even read the card?! 🤡",
        "I think you need a break... from everything 😭",
    ),
}


def roast_tier(roast_level: int) -> str:
    if roast_level <= 2:
        return "mild"
    if roast_level <= 3:
        return "medium"
    return "hard"


def mascot_mood(profile: UserProfile | None) -> MascotMood:
    if profile is None:
        return MascotMood.NEUTRAL
    if profile.streak >= 21:
        return MascotMood.THRONE
    if profile.streak >= 14:
        return MascotMood.LAUGHING
    if profile.streak >= 7:
        return MascotMood.HAPPY
    if profile.sessions == 0:
        return MascotMood.SLEEPY
    if profile.streak == 0:
        return MascotMood.CRYING
    if level_info(profile.xp).level >= 10:
        return MascotMood.THINKING
    return MascotMood.SMUG


def roast_line(roast_level: int, rng: random.Random) -> str:
    return rng.choice(ROASTS[roast_tier(roast_level)])

"""
Canned feedback lines.

Per-term vocabulary feedback is generated locally and picked by roast tier.
The quiz comment fallbacks are used when the AI comment is unavailable.
"""

import random

from fynix.domain.gamification.services.mascot import roast_tier

_CORRECT_LINES: dict[str, tuple[str, ...]] = {
    "mild": (
        "Yes bro, that's it. Guess you did prepare after all.",
        "Correct. I knew that 300 years ago already.",
        "Solid. See, it works.",
    ),
    "medium": (
        "Pretty okay for a mortal.",
        "Correct. If you'd missed that I would have gone to sleep.",
        "Nice. Finally no time wasted here.",
    ),
    "hard": (
        "Right. Even a blind chicken finds a grain sometimes, huh?",
        "Surprisingly correct. I'm almost a little proud. Almost.",
        "Yep, correct. Maybe something harder next time?",
    ),
}

_WRONG_LINES: dict[str, tuple[str, ...]] = {
    "mild": (
        '"{term}"? Bruh... were you even listening?',
        'Close. But "close" never saved an empire.',
        "No. Think hard again. I'll wait... (not forever).",
    ),
    "medium": (
        '"{term}" is wrong. I have seen dragon eggs that knew better.',
        "Missed. Try again before I fall asleep completely.",
        'Seriously? "{term}"? That is fourth grade level.',
    ),
    "hard": (
        'Haha, no clue what "{term}" means? Embarrassing, bro.',
        'Getting "{term}" wrong is an achievement. Sadly not a good one.',
        "I carry 800 years of knowledge and you can't manage this? Bruh.",
    ),
}


def vocab_feedback(term: str, correct: bool, roast_level: int, rng: random.Random) -> str:
    """One feedback line for a vocabulary answer, personalized with the term."""
    pool = (_CORRECT_LINES if correct else _WRONG_LINES)[roast_tier(roast_level)]
    return rng.choice(pool).format(term=term)


def fallback_quiz_comment(is_correct: bool, correct_answer: str) -> str:
    if is_correct:
        return "Solid, bro. ✅"
    return f'Nah, "{correct_answer}" would have been right. 💀'

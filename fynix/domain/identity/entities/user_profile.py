"""
User profile entity.

A profile is keyed by email. Guests get a synthetic ``guest_<millis>`` email and
are never written to the per-identity store.
"""

from dataclasses import dataclass, field

from fynix.domain.common.exceptions import ValidationError

GUEST_EMAIL_PREFIX = "guest_"
GUEST_NAME = "Guest"
DEFAULT_AVATAR = "gamer"
MIN_ROAST_LEVEL = 1
MAX_ROAST_LEVEL = 5
DEFAULT_ROAST_LEVEL = 3


@dataclass
class UserProfile:
    """
    Learner profile with progression counters and onboarding answers.

    Business Rules:
    - xp, streak and sessions are never negative
    - roast_level stays within 1..5
    """

    name: str
    email: str
    avatar: str = DEFAULT_AVATAR
    xp: int = 0
    streak: int = 0
    sessions: int = 0
    last_active: str = ""
    onboarded: bool = False
    grade: str = ""
    style: str = ""
    motivation: str = ""
    habits: list[str] = field(default_factory=list)
    roast_level: int = DEFAULT_ROAST_LEVEL
    goal30: str = ""
    learn_time: str = ""
    school_problem: str = ""
    interests: str | None = None
    is_private: bool = False

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.xp < 0:
            raise ValidationError("XP cannot be negative", field="xp", value=self.xp)
        if self.streak < 0:
            raise ValidationError("Streak cannot be negative", field="streak", value=self.streak)
        if self.sessions < 0:
            raise ValidationError(
                "Sessions cannot be negative", field="sessions", value=self.sessions
            )
        if not MIN_ROAST_LEVEL <= self.roast_level <= MAX_ROAST_LEVEL:
            raise ValidationError(
                f"Roast level must be between {MIN_ROAST_LEVEL} and {MAX_ROAST_LEVEL}",
                field="roast_level",
                value=self.roast_level,
            )

    @property
    def is_guest(self) -> bool:
        return self.email.startswith(GUEST_EMAIL_PREFIX)

    def credit_xp(self, amount: int, today: str) -> None:
        """Credit XP and count the session as activity for ``today``."""
        self.xp += amount
        self.sessions += 1
        self.last_active = today

    def debit_xp(self, amount: int) -> int:
        """Debit XP, flooring at zero. Returns the amount actually removed."""
        removed = min(self.xp, max(0, amount))
        self.xp -= removed
        return removed

    @classmethod
    def create(cls, email: str, name: str) -> "UserProfile":
        """Create a fresh profile for a new identity."""
        email = email.strip()
        name = name.strip()
        if not email:
            raise ValidationError("Email is required", field="email")
        if not name:
            raise ValidationError("Name is required", field="name")
        return cls(name=name, email=email)

    @classmethod
    def create_guest(cls, millis: int) -> "UserProfile":
        return cls(name=GUEST_NAME, email=f"{GUEST_EMAIL_PREFIX}{millis}")

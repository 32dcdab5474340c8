"""
Application state aggregate.

AppState is the single unit of persistence: the store serializes the whole
aggregate on every transition.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from fynix.domain.common.exceptions import ValidationError
from fynix.domain.feed.entities.feed_item import AIFeedItem, SavedFact
from fynix.domain.habits.entities.habit import Habit
from fynix.domain.identity.entities.user_profile import UserProfile
from fynix.domain.money.entities.money_entry import MoneyEntry
from fynix.domain.vocabulary.entities.vocab_list import VocabList

DEFAULT_JOKERS = 3
DEFAULT_AI_URL = "http://localhost:11434"


class Screen(StrEnum):
    """Screens the store itself navigates to. Any other token is accepted as is."""

    SPLASH = "splash"
    ONBOARDING = "onboarding"
    HOME = "home"


class ThemeMode(StrEnum):
    DARK = "dark"
    LIGHT = "light"


class AppLanguage(StrEnum):
    DE = "de"
    EN = "en"
    ES = "es"


class AccentColor(StrEnum):
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"
    RED = "red"


LANGUAGE_NAMES = {AppLanguage.DE: "German", AppLanguage.EN: "English", AppLanguage.ES: "Spanish"}


@dataclass
class AppPreferences:
    theme: ThemeMode = ThemeMode.DARK
    language: AppLanguage = AppLanguage.DE
    accent: AccentColor = AccentColor.PURPLE
    ai_url: str = DEFAULT_AI_URL
    music_enabled: bool = True


@dataclass
class AppState:
    """
    Aggregate root of the client.

    Business Rules:
    - jokers and chests are never negative
    """

    user: UserProfile | None = None
    screen: str = Screen.SPLASH.value
    habits: list[Habit] = field(default_factory=list)
    money: list[MoneyEntry] = field(default_factory=list)
    jokers: int = DEFAULT_JOKERS
    chests: int = 0
    vocab_lists: list[VocabList] = field(default_factory=list)
    preferences: AppPreferences = field(default_factory=AppPreferences)
    saved_facts: list[SavedFact] = field(default_factory=list)
    feed: list[AIFeedItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.jokers < 0:
            raise ValidationError("Jokers cannot be negative", field="jokers", value=self.jokers)
        if self.chests < 0:
            raise ValidationError("Chests cannot be negative", field="chests", value=self.chests)

    def find_habit(self, habit_id: str) -> Habit | None:
        return next((habit for habit in self.habits if habit.id == habit_id), None)

    def find_vocab_list(self, list_id: str) -> VocabList | None:
        return next((vocab for vocab in self.vocab_lists if vocab.id == list_id), None)

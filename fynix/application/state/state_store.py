"""
Application state store.

The store is the only owner of AppState. Every operation works on a deep
copy of the current state and swaps it in only after the copy has been
persisted, so a failing operation leaves the previous state untouched.
Listeners receive a snapshot after each committed transition.

Mutations are serialized by a reentrant lock held from the guard checks
through the swap, since requests run on worker threads while the feed
refresh mutates the store from the event loop. Reads return deep copies of
committed states, which are never modified after the swap.
"""

import copy
import functools
import random
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import fields, replace
from datetime import date, datetime, timedelta
from typing import Concatenate, ParamSpec, TypeVar

import structlog

from fynix.application.state.protocols.state_repository import StateRepositoryProtocol
from fynix.domain.app_state import AccentColor, AppLanguage, AppState, Screen, ThemeMode
from fynix.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from fynix.domain.feed.entities.feed_item import AIFeedItem, SavedFact
from fynix.domain.gamification.services.chest import ChestRewardKind, draw_chest_reward
from fynix.domain.gamification.services.progression import apply_streak_bonus
from fynix.domain.habits.entities.habit import Habit, HabitPolarity
from fynix.domain.identity.entities.user_profile import UserProfile
from fynix.domain.money.entities.money_entry import MoneyDirection, MoneyEntry
from fynix.domain.vocabulary.entities.vocab_list import VocabEntry, VocabList, VocabPair

logger = structlog.get_logger(__name__)

StateListener = Callable[[AppState], None]
Clock = Callable[[], datetime]

DEFAULT_JOKER_COST = 50
EDITABLE_PROFILE_FIELDS = frozenset(f.name for f in fields(UserProfile))

P = ParamSpec("P")
R = TypeVar("R")


def _synchronized(
    method: Callable[Concatenate["StateStore", P], R],
) -> Callable[Concatenate["StateStore", P], R]:
    """Run a store operation, guard checks included, under the store lock."""

    @functools.wraps(method)
    def wrapper(self: "StateStore", /, *args: P.args, **kwargs: P.kwargs) -> R:
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class StateStore:
    """Single source of truth for the client state."""

    def __init__(
        self,
        repository: StateRepositoryProtocol,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._repository = repository
        self._clock = clock or datetime.now
        self._rng = rng or random.Random()
        self._state = repository.load()
        self._listeners: list[StateListener] = []
        self._lock = threading.RLock()

    # -- reading ---------------------------------------------------------

    def snapshot(self) -> AppState:
        return copy.deepcopy(self._state)

    @property
    def user(self) -> UserProfile | None:
        return copy.deepcopy(self._state.user)

    def find_vocab_list(self, list_id: str) -> VocabList | None:
        return copy.deepcopy(self._state.find_vocab_list(list_id))

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def current_date(self) -> date:
        return self._clock().date()

    def today(self) -> str:
        return self.current_date().isoformat()

    def _timestamp(self) -> str:
        return self._clock().isoformat(timespec="seconds")

    # -- transactions ----------------------------------------------------

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Hold the store lock across several operations, e.g. a mutation and the XP it awards."""
        with self._lock:
            yield

    @contextmanager
    def _transaction(self) -> Iterator[AppState]:
        with self._lock:
            draft = copy.deepcopy(self._state)
            yield draft
            self._commit(draft)

    def _commit(self, draft: AppState) -> None:
        # Aggregate document last: a transition is durable once it is written
        if draft.user is not None and not draft.user.is_guest:
            self._repository.save_profile(draft.user)
        self._repository.save(draft)
        self._state = draft

        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("state_listener_failed")

    # -- navigation and identity -----------------------------------------

    @_synchronized
    def set_screen(self, screen: str) -> None:
        with self._transaction() as draft:
            draft.screen = screen

    @_synchronized
    def login(self, email: str, name: str) -> UserProfile:
        """
        Log in with an email, creating the profile on first use.

        Args:
            email: Identity key of the profile
            name: Display name used when a new profile is created

        Returns:
            The active profile

        Raises:
            ValidationError: If email or name is empty
        """
        profile = UserProfile.create(email=email, name=name)
        existing = self._repository.load_profile(profile.email)

        with self._transaction() as draft:
            if existing is not None:
                draft.user = existing
                draft.screen = Screen.HOME.value if existing.onboarded else Screen.ONBOARDING.value
            else:
                draft.user = profile
                draft.screen = Screen.ONBOARDING.value

        logger.info("user_logged_in", returning=existing is not None)
        return copy.deepcopy(draft.user)

    @_synchronized
    def login_as_guest(self) -> UserProfile:
        millis = int(self._clock().timestamp() * 1000)
        with self._transaction() as draft:
            draft.user = UserProfile.create_guest(millis)
            draft.screen = Screen.ONBOARDING.value
        logger.info("guest_logged_in")
        return copy.deepcopy(draft.user)

    @_synchronized
    def logout(self) -> None:
        """Drop the session state. The identity record stays in storage."""
        with self._transaction() as draft:
            draft.user = None
            draft.screen = Screen.SPLASH.value
            draft.habits = []
            draft.money = []
            draft.jokers = AppState().jokers
            draft.chests = 0
        logger.info("user_logged_out")

    @_synchronized
    def update_user(self, **changes: object) -> UserProfile | None:
        """
        Update profile fields.

        Returns:
            The updated profile, or None without an active profile

        Raises:
            ValidationError: If a field is unknown or a value breaks a profile rule
        """
        unknown = set(changes) - EDITABLE_PROFILE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
        if self._state.user is None:
            return None

        with self._transaction() as draft:
            draft.user = replace(draft.user, **changes)  # type: ignore[arg-type]
        return copy.deepcopy(draft.user)

    # -- XP and streaks --------------------------------------------------

    @_synchronized
    def add_xp(self, amount: int) -> int:
        """
        Credit XP with the current streak bonus applied.

        Args:
            amount: Base XP before the bonus

        Returns:
            XP actually credited; 0 without an active profile

        Raises:
            ValidationError: If amount is negative
        """
        if amount < 0:
            raise ValidationError("XP amount cannot be negative", field="amount", value=amount)
        if self._state.user is None:
            return 0

        with self._transaction() as draft:
            assert draft.user is not None
            credited = apply_streak_bonus(amount, draft.user.streak)
            draft.user.credit_xp(credited, self.today())
        logger.debug("xp_credited", amount=amount, credited=credited)
        return credited

    @_synchronized
    def remove_xp(self, amount: int) -> int:
        """Debit XP, flooring at zero. Returns the amount actually removed."""
        if amount < 0:
            raise ValidationError("XP amount cannot be negative", field="amount", value=amount)
        if self._state.user is None:
            return 0

        with self._transaction() as draft:
            assert draft.user is not None
            removed = draft.user.debit_xp(amount)
        return removed

    @_synchronized
    def resume(self) -> int | None:
        """
        Evaluate the daily streak and roll habits over to today.

        Called once per load or resume. A login on the day after the last
        activity extends the streak and awards a chest; any larger gap starts
        the count again at 1.

        Returns:
            The profile streak after evaluation, or None when no onboarded
            profile is active
        """
        today = self.today()
        yesterday = (self.current_date() - timedelta(days=1)).isoformat()
        user = self._state.user
        profile = user if user is not None and user.onboarded else None

        stale_habits = any(
            habit.completed_today and habit.last_completed_on != today
            for habit in self._state.habits
        )
        if not stale_habits and (profile is None or profile.last_active == today):
            return profile.streak if profile is not None else None

        with self._transaction() as draft:
            for habit in draft.habits:
                habit.roll_over(today)

            if profile is not None and draft.user is not None:
                if draft.user.last_active == yesterday:
                    draft.user.streak += 1
                    draft.chests += 1
                    logger.info("streak_extended", streak=draft.user.streak)
                elif draft.user.last_active != today:
                    draft.user.streak = 1
                    logger.info("streak_restarted")
                draft.user.last_active = today

        if profile is None or draft.user is None:
            return None
        return draft.user.streak

    # -- habits ----------------------------------------------------------

    @_synchronized
    def add_habit(
        self, name: str, polarity: HabitPolarity, xp_value: int, reps: int = 1
    ) -> Habit:
        habit = Habit.create(name=name, polarity=polarity, xp_value=xp_value, reps=reps)
        with self._transaction() as draft:
            draft.habits.append(habit)
        return copy.deepcopy(habit)

    @_synchronized
    def complete_habit(self, habit_id: str) -> Habit | None:
        """
        Mark a habit done for today.

        Returns:
            The updated habit, or None if it does not exist or is already
            completed today
        """
        today = self.today()
        habit = self._state.find_habit(habit_id)
        if habit is None or habit.is_completed_on(today):
            return None

        with self._transaction() as draft:
            completed = draft.find_habit(habit_id)
            assert completed is not None
            completed.complete(today)
        return copy.deepcopy(completed)

    @_synchronized
    def remove_habit(self, habit_id: str) -> bool:
        if self._state.find_habit(habit_id) is None:
            return False
        with self._transaction() as draft:
            draft.habits = [habit for habit in draft.habits if habit.id != habit_id]
        return True

    # -- money -----------------------------------------------------------

    @_synchronized
    def add_money_entry(
        self,
        amount: float,
        direction: MoneyDirection,
        category: str,
        note: str = "",
    ) -> MoneyEntry:
        """
        Record an income or expense.

        Raises:
            ValidationError: If the amount is not positive or the category is empty
        """
        entry = MoneyEntry.create(
            amount=amount,
            direction=direction,
            category=category,
            note=note,
            date=self._timestamp(),
        )
        with self._transaction() as draft:
            draft.money.append(entry)
        return copy.deepcopy(entry)

    @_synchronized
    def remove_money_entry(self, entry_id: str) -> bool:
        if not any(entry.id == entry_id for entry in self._state.money):
            return False
        with self._transaction() as draft:
            draft.money = [entry for entry in draft.money if entry.id != entry_id]
        return True

    # -- jokers and chests -----------------------------------------------

    @_synchronized
    def use_joker(self) -> bool:
        if self._state.jokers <= 0:
            return False
        with self._transaction() as draft:
            draft.jokers -= 1
        return True

    @_synchronized
    def buy_joker(self, cost: int = DEFAULT_JOKER_COST) -> bool:
        """Trade XP for a joker. Returns False without a profile or enough XP."""
        user = self._state.user
        if user is None or user.xp < cost:
            return False
        with self._transaction() as draft:
            assert draft.user is not None
            draft.user.xp -= cost
            draft.jokers += 1
        return True

    @_synchronized
    def open_chest(self) -> str | None:
        """Open one chest. Returns the reward label, or None when there is no chest."""
        if self._state.chests <= 0:
            return None

        reward = draw_chest_reward(self._rng)
        with self._transaction() as draft:
            draft.chests -= 1
            if reward.kind == ChestRewardKind.XP and draft.user is not None:
                draft.user.xp += reward.value
            elif reward.kind == ChestRewardKind.JOKER:
                draft.jokers += reward.value
        logger.info("chest_opened", reward=reward.label)
        return reward.label

    # -- vocabulary ------------------------------------------------------

    @_synchronized
    def add_vocab_list(self, name: str, source_lang: str, target_lang: str) -> str:
        vocab_list = VocabList.create(
            name=name,
            source_lang=source_lang,
            target_lang=target_lang,
            created_at=self._timestamp(),
        )
        with self._transaction() as draft:
            draft.vocab_lists.append(vocab_list)
        return vocab_list.id

    @_synchronized
    def add_vocab_entries(self, list_id: str, pairs: Iterable[VocabPair]) -> int:
        """Append pairs to a list. Returns how many were added; 0 for an unknown list."""
        pairs = list(pairs)
        if not pairs or self._state.find_vocab_list(list_id) is None:
            return 0

        with self._transaction() as draft:
            vocab_list = draft.find_vocab_list(list_id)
            assert vocab_list is not None
            added = vocab_list.add_entries(pairs, created_at=self._timestamp())
        logger.info("vocab_entries_added", list_id=list_id, count=len(added))
        return len(added)

    @_synchronized
    def add_vocab_entry(self, list_id: str, term: str, translation: str) -> VocabEntry | None:
        if self._state.find_vocab_list(list_id) is None:
            return None
        with self._transaction() as draft:
            vocab_list = draft.find_vocab_list(list_id)
            assert vocab_list is not None
            (entry,) = vocab_list.add_entries(
                [VocabPair(term=term, translation=translation)], created_at=self._timestamp()
            )
        return copy.deepcopy(entry)

    @_synchronized
    def remove_vocab_entry(self, list_id: str, entry_id: str) -> bool:
        vocab_list = self._state.find_vocab_list(list_id)
        if vocab_list is None or vocab_list.find_entry(entry_id) is None:
            return False
        with self._transaction() as draft:
            draft_list = draft.find_vocab_list(list_id)
            assert draft_list is not None
            draft_list.remove_entry(entry_id)
        return True

    @_synchronized
    def update_vocab_entry(
        self,
        list_id: str,
        entry_id: str,
        term: str | None = None,
        translation: str | None = None,
    ) -> VocabEntry | None:
        vocab_list = self._state.find_vocab_list(list_id)
        if vocab_list is None or vocab_list.find_entry(entry_id) is None:
            return None
        with self._transaction() as draft:
            draft_list = draft.find_vocab_list(list_id)
            assert draft_list is not None
            entry = draft_list.update_entry(entry_id, term=term, translation=translation)
        return copy.deepcopy(entry)

    # -- saved facts -----------------------------------------------------

    @_synchronized
    def add_saved_fact(self, category: str, title: str, content: str) -> SavedFact:
        """
        Bookmark a fact.

        Raises:
            BusinessRuleViolationError: If a fact with the same title is already saved
        """
        if any(fact.title == title.strip() for fact in self._state.saved_facts):
            raise BusinessRuleViolationError("unique_saved_fact_title", "Already saved!")

        fact = SavedFact.create(
            category=category, title=title, content=content, saved_at=self._timestamp()
        )
        with self._transaction() as draft:
            draft.saved_facts.insert(0, fact)
        return copy.deepcopy(fact)

    @_synchronized
    def remove_saved_fact(self, fact_id: str) -> bool:
        if not any(fact.id == fact_id for fact in self._state.saved_facts):
            return False
        with self._transaction() as draft:
            draft.saved_facts = [fact for fact in draft.saved_facts if fact.id != fact_id]
        return True

    # -- preferences -----------------------------------------------------

    @_synchronized
    def set_theme(self, theme: ThemeMode) -> None:
        with self._transaction() as draft:
            draft.preferences.theme = ThemeMode(theme)

    @_synchronized
    def set_language(self, language: AppLanguage) -> None:
        with self._transaction() as draft:
            draft.preferences.language = AppLanguage(language)

    @_synchronized
    def set_accent(self, accent: AccentColor) -> None:
        with self._transaction() as draft:
            draft.preferences.accent = AccentColor(accent)

    @_synchronized
    def set_ai_url(self, url: str) -> None:
        if not url.strip():
            raise ValidationError("AI URL cannot be empty", field="ai_url")
        with self._transaction() as draft:
            draft.preferences.ai_url = url.strip()

    @_synchronized
    def set_music_enabled(self, enabled: bool) -> None:
        with self._transaction() as draft:
            draft.preferences.music_enabled = enabled

    # -- feed ------------------------------------------------------------

    @_synchronized
    def seed_feed(self, items: Iterable[AIFeedItem]) -> None:
        """Replace the feed, used at startup with the shuffled seed pool."""
        with self._transaction() as draft:
            draft.feed = list(items)

    @_synchronized
    def add_feed_items(self, items: Iterable[AIFeedItem], top: bool = False) -> None:
        items = list(items)
        if not items:
            return
        with self._transaction() as draft:
            draft.feed = [*items, *draft.feed] if top else [*draft.feed, *items]

"""Tests for the state store."""

import random
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import FakeClock
from fynix.application.habits.complete_habit_use_case import CompleteHabitUseCase
from fynix.application.state.state_store import StateStore
from fynix.domain.app_state import AccentColor, AppLanguage, AppState, Screen, ThemeMode
from fynix.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from fynix.domain.gamification.services.chest import CHEST_REWARDS
from fynix.domain.habits.entities.habit import HabitPolarity
from fynix.domain.identity.entities.user_profile import UserProfile
from fynix.domain.vocabulary.entities.vocab_list import VocabPair
from fynix.infrastructure.persistence.key_value_backends import InMemoryKeyValueBackend
from fynix.infrastructure.persistence.state_repository import StateRepository


class FailingRepository(StateRepository):
    def save(self, state):
        raise OSError("disk full")


class FailingProfileRepository(StateRepository):
    def save_profile(self, profile):
        raise OSError("disk full")


class SlowBackend(InMemoryKeyValueBackend):
    """Backend with a write delay, so that unsynchronized writers would interleave."""

    def set(self, key, value):
        time.sleep(0.001)
        super().set(key, value)


class TestIdentity:
    def test_login_creates_profile_and_starts_onboarding(self, store):
        profile = store.login(email="mia@example.com", name="Mia")
        assert profile.email == "mia@example.com"
        assert store.snapshot().screen == Screen.ONBOARDING

    def test_returning_user_gets_progress_back_after_logout(self, store):
        store.login(email="mia@example.com", name="Mia")
        store.update_user(onboarded=True)
        store.add_xp(40)
        store.logout()

        assert store.user is None
        assert store.snapshot().screen == Screen.SPLASH

        profile = store.login(email="mia@example.com", name="Someone else")
        assert profile.xp == 40
        assert profile.name == "Mia"
        assert store.snapshot().screen == Screen.HOME

    def test_guest_is_not_persisted_per_identity(self, store, backend):
        guest = store.login_as_guest()
        assert guest.is_guest
        store.add_xp(10)
        assert not any(key.startswith("fynix_user_") for key in backend.data)

    def test_logout_resets_session_counters(self, store):
        store.login_as_guest()
        store.add_habit("Read", HabitPolarity.POSITIVE, 10)
        store.use_joker()
        store.logout()
        state = store.snapshot()
        assert state.habits == []
        assert state.jokers == 3

    def test_update_user_rejects_unknown_fields(self, store):
        store.login_as_guest()
        with pytest.raises(ValidationError):
            store.update_user(favourite_color="red")

    def test_update_user_without_profile(self, store):
        assert store.update_user(grade="9") is None


class TestXP:
    def test_habit_scenario_with_ten_percent_bonus(self, store):
        store.login_as_guest()
        store.update_user(streak=14)
        habit = store.add_habit("Pushups", HabitPolarity.POSITIVE, xp_value=20, reps=3)

        completion = CompleteHabitUseCase(store).execute(habit.id)

        assert completion is not None
        assert completion.xp_delta == 66
        assert store.user.xp == 66

    def test_streak_of_ten_earns_five_percent(self, store):
        store.login_as_guest()
        store.update_user(streak=10)
        assert store.add_xp(60) == 63

    def test_add_xp_counts_session_and_stamps_today(self, store):
        store.login_as_guest()
        store.add_xp(5)
        assert store.user.sessions == 1
        assert store.user.last_active == "2024-05-15"

    def test_remove_xp_floors_at_zero(self, store):
        store.login_as_guest()
        store.add_xp(20)
        assert store.remove_xp(50) == 20
        assert store.user.xp == 0

    def test_negative_amounts_rejected(self, store):
        store.login_as_guest()
        with pytest.raises(ValidationError):
            store.add_xp(-1)

    def test_without_profile_nothing_happens(self, store):
        assert store.add_xp(10) == 0
        assert store.remove_xp(10) == 0

    @pytest.mark.parametrize("streak", [0, 7, 14, 21])
    def test_add_then_remove_never_goes_below_start(self, store, streak):
        store.login_as_guest()
        store.update_user(xp=12, streak=streak)
        credited = store.add_xp(33)
        store.remove_xp(credited)
        assert store.user.xp == 12


class TestHabits:
    def test_completing_twice_a_day_is_a_no_op(self, store):
        store.login_as_guest()
        habit = store.add_habit("Read", HabitPolarity.POSITIVE, 10)
        assert store.complete_habit(habit.id) is not None
        assert store.complete_habit(habit.id) is None
        assert store.snapshot().find_habit(habit.id).streak == 1

    def test_negative_habit_costs_xp(self, store):
        store.login_as_guest()
        store.add_xp(30)
        habit = store.add_habit("Doomscrolling", HabitPolarity.NEGATIVE, xp_value=-10, reps=2)
        completion = CompleteHabitUseCase(store).execute(habit.id)
        assert completion.xp_delta == -20
        assert store.user.xp == 10

    def test_next_day_allows_completion_again(self, store, clock):
        store.login_as_guest()
        habit = store.add_habit("Read", HabitPolarity.POSITIVE, 10)
        store.complete_habit(habit.id)
        clock.advance(days=1)
        assert store.complete_habit(habit.id) is not None

    def test_remove_habit(self, store):
        habit = store.add_habit("Read", HabitPolarity.POSITIVE, 10)
        assert store.remove_habit(habit.id)
        assert not store.remove_habit(habit.id)


class TestResume:
    def test_login_on_next_day_extends_streak_and_awards_chest(self, onboarded_store, clock):
        onboarded_store.add_xp(5)
        onboarded_store.update_user(streak=3)
        clock.advance(days=1)

        assert onboarded_store.resume() == 4
        state = onboarded_store.snapshot()
        assert state.chests == 1
        assert state.user.last_active == "2024-05-16"

    def test_gap_restarts_streak_at_one(self, onboarded_store, clock):
        onboarded_store.add_xp(5)
        onboarded_store.update_user(streak=9)
        clock.advance(days=3)

        assert onboarded_store.resume() == 1
        assert onboarded_store.snapshot().chests == 0

    def test_first_activation_starts_at_one(self, onboarded_store):
        assert onboarded_store.resume() == 1

    def test_same_day_keeps_streak(self, onboarded_store):
        onboarded_store.add_xp(5)
        onboarded_store.update_user(streak=2)
        assert onboarded_store.resume() == 2
        assert onboarded_store.snapshot().chests == 0

    def test_clears_yesterdays_habit_completions(self, store, clock):
        habit = store.add_habit("Read", HabitPolarity.POSITIVE, 10)
        store.complete_habit(habit.id)
        clock.advance(days=1)
        assert store.resume() is None
        assert not store.snapshot().find_habit(habit.id).completed_today


class TestJokersAndChests:
    def test_use_joker(self, store):
        for remaining in (2, 1, 0):
            assert store.use_joker()
            assert store.snapshot().jokers == remaining
        assert not store.use_joker()
        assert store.snapshot().jokers == 0

    def test_buy_joker_requires_xp(self, store):
        assert not store.buy_joker()
        store.login_as_guest()
        store.add_xp(49)
        assert not store.buy_joker()
        store.add_xp(1)
        assert store.buy_joker()
        state = store.snapshot()
        assert state.user.xp == 0
        assert state.jokers == 4

    def test_open_chest_without_chest(self, store):
        before = store.snapshot()
        assert store.open_chest() is None
        assert store.snapshot() == before

    @pytest.mark.parametrize("seed", range(8))
    def test_open_chest_applies_reward(self, repository, clock, seed):
        repository.save(AppState(user=UserProfile.create_guest(1), chests=1))
        store = StateStore(repository, clock=clock, rng=random.Random(seed))

        label = store.open_chest()

        state = store.snapshot()
        assert label in {reward.label for reward in CHEST_REWARDS}
        assert state.chests == 0
        expected_xp = {"+50 XP Bonus!": 50, "+100 XP Bonus!": 100}.get(label, 0)
        assert state.user.xp == expected_xp
        assert state.jokers == (4 if label == "Joker received!" else 3)


class TestVocabulary:
    def test_bulk_add_and_edit(self, store):
        list_id = store.add_vocab_list("Animals", "de", "en")
        added = store.add_vocab_entries(list_id, [VocabPair("Hund", "dog"), VocabPair("Katze", "cat")])
        assert added == 2

        entry = store.find_vocab_list(list_id).entries[0]
        updated = store.update_vocab_entry(list_id, entry.id, translation="hound")
        assert updated.translation == "hound"
        assert store.remove_vocab_entry(list_id, entry.id)
        assert len(store.find_vocab_list(list_id).entries) == 1

    def test_unknown_list_is_a_no_op(self, store):
        assert store.add_vocab_entries("missing", [VocabPair("a", "b")]) == 0
        assert store.add_vocab_entry("missing", "a", "b") is None
        assert not store.remove_vocab_entry("missing", "x")
        assert store.update_vocab_entry("missing", "x", term="y") is None


class TestSavedFacts:
    def test_duplicate_title_is_rejected(self, store):
        store.add_saved_fact("Science", "Octopus hearts", "Three of them.")
        with pytest.raises(BusinessRuleViolationError, match="Already saved!"):
            store.add_saved_fact("Science", "Octopus hearts", "Still three.")
        assert len(store.snapshot().saved_facts) == 1

    def test_newest_first(self, store):
        store.add_saved_fact("A", "First", "")
        store.add_saved_fact("B", "Second", "")
        assert [fact.title for fact in store.snapshot().saved_facts] == ["Second", "First"]


class TestPreferences:
    def test_setters(self, store):
        store.set_theme(ThemeMode.LIGHT)
        store.set_language(AppLanguage.EN)
        store.set_accent(AccentColor.GREEN)
        store.set_music_enabled(False)
        preferences = store.snapshot().preferences
        assert preferences.theme == ThemeMode.LIGHT
        assert preferences.language == AppLanguage.EN
        assert preferences.accent == AccentColor.GREEN
        assert preferences.music_enabled is False

    def test_empty_ai_url_rejected(self, store):
        with pytest.raises(ValidationError):
            store.set_ai_url("   ")


class TestTransactions:
    def test_failed_save_leaves_state_unchanged(self, clock):
        store = StateStore(FailingRepository(InMemoryKeyValueBackend()), clock=clock)
        with pytest.raises(OSError):
            store.login_as_guest()
        assert store.user is None

    def test_failed_profile_write_leaves_stored_state_unchanged(self, clock):
        repository = FailingProfileRepository(InMemoryKeyValueBackend())
        store = StateStore(repository, clock=clock)
        with pytest.raises(OSError):
            store.login(email="mia@example.com", name="Mia")

        assert store.user is None
        assert repository.load().user is None

    def test_invalid_update_leaves_state_unchanged(self, store):
        store.login_as_guest()
        with pytest.raises(ValidationError):
            store.update_user(roast_level=9)
        assert store.user.roast_level == 3

    def test_listeners_receive_snapshots(self, store):
        seen = []
        unsubscribe = store.subscribe(lambda state: seen.append(state.screen))
        store.set_screen("quiz")
        unsubscribe()
        store.set_screen("home")
        assert seen == ["quiz"]

    def test_failing_listener_does_not_break_the_store(self, store):
        def broken(_):
            raise RuntimeError("boom")

        store.subscribe(broken)
        store.set_screen("money")
        assert store.snapshot().screen == "money"

    def test_state_survives_a_restart(self, repository, clock):
        first = StateStore(repository, clock=clock)
        first.login(email="mia@example.com", name="Mia")
        first.add_vocab_list("Animals", "de", "en")

        second = StateStore(repository, clock=FakeClock())
        assert second.user.email == "mia@example.com"
        assert second.snapshot().vocab_lists[0].name == "Animals"


class TestConcurrentMutations:
    @pytest.fixture
    def slow_store(self, clock):
        store = StateStore(StateRepository(SlowBackend()), clock=clock, rng=random.Random(3))
        store.login(email="mia@example.com", name="Mia")
        store.update_user(onboarded=True)
        return store

    def test_parallel_xp_credits_are_not_lost(self, slow_store):
        with ThreadPoolExecutor(max_workers=8) as pool:
            credited = list(pool.map(lambda _: slow_store.add_xp(10), range(200)))

        assert sum(credited) == 2000
        assert slow_store.user.xp == 2000
        assert slow_store.user.sessions == 200

    def test_jokers_are_not_spent_twice(self, slow_store):
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: slow_store.use_joker(), range(8)))

        assert results.count(True) == 3
        assert slow_store.snapshot().jokers == 0

    def test_chests_are_not_opened_twice(self, clock):
        repository = StateRepository(SlowBackend())
        repository.save(AppState(user=UserProfile.create_guest(1), chests=2))
        store = StateStore(repository, clock=clock, rng=random.Random(5))

        with ThreadPoolExecutor(max_workers=8) as pool:
            rewards = list(pool.map(lambda _: store.open_chest(), range(8)))

        assert len([reward for reward in rewards if reward is not None]) == 2
        assert store.snapshot().chests == 0

    def test_habit_completes_once_under_contention(self, slow_store):
        habit = slow_store.add_habit("Read", HabitPolarity.POSITIVE, xp_value=10)
        use_case = CompleteHabitUseCase(slow_store)

        with ThreadPoolExecutor(max_workers=8) as pool:
            completions = list(pool.map(lambda _: use_case.execute(habit.id), range(8)))

        assert len([c for c in completions if c is not None]) == 1
        assert slow_store.user.xp == 10

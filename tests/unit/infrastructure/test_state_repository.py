"""Tests for the persistence codec and key-value backends."""

import json

import pytest

from fynix.domain.app_state import AppLanguage, AppState
from fynix.domain.habits.entities.habit import Habit, HabitPolarity
from fynix.domain.identity.entities.user_profile import UserProfile
from fynix.infrastructure.persistence.database import create_database_engine, create_session_factory
from fynix.infrastructure.persistence.key_value_backends import (
    InMemoryKeyValueBackend,
    SqlAlchemyKeyValueBackend,
)
from fynix.infrastructure.persistence.state_repository import (
    STATE_KEY,
    StateRepository,
    decode_state,
    encode_state,
)


@pytest.fixture
def sqlite_backend() -> SqlAlchemyKeyValueBackend:
    engine = create_database_engine("sqlite:///:memory:")
    return SqlAlchemyKeyValueBackend(create_session_factory(engine))


class TestCodec:
    def test_encode_decode_keeps_nested_entities(self):
        state = AppState(
            user=UserProfile(name="Mia", email="mia@example.com", xp=120, streak=4),
            habits=[Habit.create(name="Read", polarity=HabitPolarity.POSITIVE, xp_value=10)],
            jokers=1,
            chests=2,
        )
        decoded = decode_state(encode_state(state))
        assert decoded == state
        assert isinstance(decoded.habits[0].polarity, HabitPolarity)

    def test_backfills_documents_from_older_versions(self):
        legacy = {
            "user": {"name": "Mia", "email": "mia@example.com", "xp": 10},
            "screen": "home",
            "jokers": 2,
            "chests": 0,
        }
        state = decode_state(json.dumps(legacy))
        assert state.user.is_private is False
        assert state.vocab_lists == []
        assert state.preferences.language == AppLanguage.DE
        assert state.habits == []


class TestStateRepository:
    def test_missing_document_yields_default_state(self):
        assert StateRepository(InMemoryKeyValueBackend()).load() == AppState()

    @pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '{"jokers": -4}', '{"user": {"xp": 1}}'])
    def test_corrupt_document_yields_default_state(self, raw):
        backend = InMemoryKeyValueBackend({STATE_KEY: raw})
        assert StateRepository(backend).load() == AppState()

    def test_profiles_are_stored_per_identity(self):
        repository = StateRepository(InMemoryKeyValueBackend())
        profile = UserProfile(name="Mia", email="mia@example.com", xp=77)
        repository.save_profile(profile)
        assert repository.load_profile("mia@example.com") == profile
        assert repository.load_profile("other@example.com") is None

    def test_guest_profiles_are_skipped(self):
        backend = InMemoryKeyValueBackend()
        StateRepository(backend).save_profile(UserProfile.create_guest(1))
        assert backend.data == {}


class TestSqlAlchemyKeyValueBackend:
    def test_set_get_overwrite_delete(self, sqlite_backend):
        assert sqlite_backend.get("k") is None
        sqlite_backend.set("k", "one")
        sqlite_backend.set("k", "two")
        assert sqlite_backend.get("k") == "two"
        sqlite_backend.delete("k")
        assert sqlite_backend.get("k") is None

    def test_repository_round_trip(self, sqlite_backend):
        repository = StateRepository(sqlite_backend)
        state = AppState(user=UserProfile(name="Mia", email="mia@example.com"), chests=1)
        repository.save(state)
        assert repository.load() == state

"""
Persistence codec for the app state.

The whole AppState is stored as one JSON document under ``fynix_state``.
Profiles are additionally stored per identity under ``fynix_user_<email>`` so
that logging in again restores progress after a logout.
"""

import json
from typing import Any

import structlog
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from fynix.domain.app_state import AppPreferences, AppState
from fynix.domain.common.exceptions import DomainError
from fynix.domain.identity.entities.user_profile import UserProfile
from fynix.infrastructure.persistence.key_value_backends import KeyValueBackend

logger = structlog.get_logger(__name__)

STATE_KEY = "fynix_state"
PROFILE_KEY_PREFIX = "fynix_user_"

_state_adapter = TypeAdapter(AppState)
_profile_adapter = TypeAdapter(UserProfile)
_preferences_adapter = TypeAdapter(AppPreferences)

_DECODE_ERRORS = (ValueError, TypeError, PydanticValidationError, DomainError)


def profile_key(email: str) -> str:
    return f"{PROFILE_KEY_PREFIX}{email}"


def backfill_state(data: dict[str, Any]) -> dict[str, Any]:
    """
    Fill in fields that older documents do not have.

    Args:
        data: Decoded state document

    Returns:
        A copy of ``data`` safe to validate against the current schema
    """
    data = dict(data)
    user = data.get("user")
    if isinstance(user, dict) and "is_private" not in user:
        data["user"] = {**user, "is_private": False}
    if not isinstance(data.get("vocab_lists"), list):
        data["vocab_lists"] = []
    if not isinstance(data.get("preferences"), dict):
        data["preferences"] = _preferences_adapter.dump_python(AppPreferences(), mode="json")
    for collection in ("habits", "money", "saved_facts", "feed"):
        if not isinstance(data.get(collection), list):
            data[collection] = []
    return data


def encode_state(state: AppState) -> str:
    return _state_adapter.dump_json(state).decode()


def decode_state(raw: str) -> AppState:
    """
    Decode a state document.

    Raises:
        ValueError: If the document is not a JSON object or fails validation
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("state document is not a JSON object")
    return _state_adapter.validate_python(backfill_state(data))


class StateRepository:
    """Loads and saves AppState documents through a key-value backend."""

    def __init__(self, backend: KeyValueBackend) -> None:
        self.backend = backend

    def load(self) -> AppState:
        """Load the saved state; a missing or corrupt document yields a fresh state."""
        raw = self.backend.get(STATE_KEY)
        if raw is None:
            return AppState()
        try:
            return decode_state(raw)
        except _DECODE_ERRORS as e:
            logger.warning("state_load_failed", error=str(e))
            return AppState()

    def save(self, state: AppState) -> None:
        self.backend.set(STATE_KEY, encode_state(state))

    def load_profile(self, email: str) -> UserProfile | None:
        raw = self.backend.get(profile_key(email))
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("profile document is not a JSON object")
            data.setdefault("is_private", False)
            return _profile_adapter.validate_python(data)
        except _DECODE_ERRORS as e:
            logger.warning("profile_load_failed", email=email, error=str(e))
            return None

    def save_profile(self, profile: UserProfile) -> None:
        if profile.is_guest:
            return
        self.backend.set(profile_key(profile.email), _profile_adapter.dump_json(profile).decode())

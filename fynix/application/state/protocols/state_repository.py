from typing import Protocol

from fynix.domain.app_state import AppState
from fynix.domain.identity.entities.user_profile import UserProfile


class StateRepositoryProtocol(Protocol):
    def load(self) -> AppState: ...

    def save(self, state: AppState) -> None: ...

    def load_profile(self, email: str) -> UserProfile | None: ...

    def save_profile(self, profile: UserProfile) -> None: ...

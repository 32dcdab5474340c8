"""Pytest configuration and shared fixtures."""

import random
from collections.abc import Generator
from datetime import datetime, timedelta
from typing import Any

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from fynix.application.learning.protocols.ai_completion_service import AIResponse
from fynix.application.state.state_store import StateStore
from fynix.infrastructure.persistence.key_value_backends import InMemoryKeyValueBackend
from fynix.infrastructure.persistence.state_repository import StateRepository

# A Wednesday in the middle of a month
START = datetime(2024, 5, 15, 9, 30)


class FakeClock:
    """Settable clock for day-based rules."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self.now += timedelta(days=days, hours=hours)


class FakeAIService:
    """AI completion stub returning queued responses, or an offline error when drained."""

    def __init__(self, *responses: str | Exception) -> None:
        self.responses = list(responses)
        self.prompts: list[str] = []
        self.system_prompts: list[str | None] = []

    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
    ) -> AIResponse:
        self.prompts.append(prompt)
        self.system_prompts.append(system_prompt)
        if not self.responses:
            return AIResponse(text="", success=False, error="AI provider is not configured")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return AIResponse(text=response, success=True)

    async def complete_with_retry(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        retries: int = 2,
    ) -> AIResponse:
        return await self.complete(prompt, system_prompt, temperature)


class FakeVisionService:
    def __init__(self, reply: str | Exception = "") -> None:
        self.reply = reply
        self.calls = 0

    async def transcribe(self, prompt: str, images: list[bytes]) -> str:
        self.calls += 1
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


class FakeOCRService:
    def __init__(self, text: str = "") -> None:
        self.text = text
        self.calls = 0

    async def extract_text(self, image: bytes, lang: str | None = None) -> str:
        self.calls += 1
        return self.text


class FakeImageCommentService:
    async def comment(self, image: bytes, roast_level: int) -> str:
        return "Nice picture."


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend() -> InMemoryKeyValueBackend:
    return InMemoryKeyValueBackend()


@pytest.fixture
def repository(backend: InMemoryKeyValueBackend) -> StateRepository:
    return StateRepository(backend)


@pytest.fixture
def store(repository: StateRepository, clock: FakeClock) -> StateStore:
    """Store over an in-memory backend with a fixed clock and seeded RNG."""
    return StateStore(repository, clock=clock, rng=random.Random(7))


@pytest.fixture
def onboarded_store(store: StateStore) -> StateStore:
    store.login(email="mia@example.com", name="Mia")
    store.update_user(onboarded=True, grade="9", interests="Space")
    return store


@pytest.fixture
def fake_ai() -> FakeAIService:
    return FakeAIService()


@pytest.fixture
def client(fake_ai: FakeAIService) -> Generator[TestClient, Any, None]:
    """Test client with an in-memory backend and offline AI, OCR and vision collaborators."""
    from fynix.core import container
    from fynix.main import app

    container.reset_singletons()
    container.key_value_backend.override(providers.Singleton(InMemoryKeyValueBackend))
    container.ai_service.override(providers.Object(fake_ai))
    container.vision_service.override(providers.Object(FakeVisionService(RuntimeError("offline"))))
    container.ocr_service.override(providers.Object(FakeOCRService()))
    container.image_comment_service.override(providers.Object(FakeImageCommentService()))

    with TestClient(app) as test_client:
        yield test_client

    container.reset_override()
    container.reset_singletons()

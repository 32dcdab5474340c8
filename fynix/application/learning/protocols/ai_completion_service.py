from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class AIResponse:
    text: str
    success: bool
    error: str | None = None


class AICompletionServiceProtocol(Protocol):
    async def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
    ) -> AIResponse: ...

    async def complete_with_retry(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        retries: int = 2,
    ) -> AIResponse: ...

"""
Result type for fallible pipeline steps.

Quiz and scan strategies report expected failures (AI offline, malformed
JSON, nothing recognized) as values instead of exceptions, so a pipeline can
move on to the next strategy.

Example:
    async def generate(self, request: MaterialQuizRequest) -> Result[list[QuizItem], str]:
        items = build_local_material_quiz(request.source_text, self._rng)
        if not items:
            return Failure("Material has no usable sentences")
        return Success(items)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful outcome carrying a value."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_error(self) -> None:
        raise ValueError("Cannot get error from Success result")


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A failed outcome carrying an error description."""

    error: E

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self) -> None:
        raise ValueError(f"Cannot get value from Failure result: {self.error!r}")

    def unwrap_error(self) -> E:
        return self.error


Result = Success[T] | Failure[E]

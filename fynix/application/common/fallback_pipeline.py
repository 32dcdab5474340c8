"""
Ordered strategy pipeline.

Each strategy is tried in turn and the first Success wins. Exceptions raised
by a strategy count as a Failure of that strategy, so a crashing AI client
never prevents the local fallback from running.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

import structlog

from fynix.application.common.result import Failure, Result, Success

logger = structlog.get_logger(__name__)

RequestT = TypeVar("RequestT", contravariant=True)
ValueT = TypeVar("ValueT", covariant=True)
V = TypeVar("V")
R = TypeVar("R")


class Strategy(Protocol[RequestT, ValueT]):
    name: str

    async def generate(self, request: RequestT) -> "Result[ValueT, str]": ...


@dataclass(frozen=True)
class PipelineOutcome(Generic[V]):
    value: V
    strategy: str


class FallbackPipeline(Generic[R, V]):
    def __init__(self, strategies: Sequence[Strategy[R, V]]) -> None:
        if not strategies:
            raise ValueError("A pipeline needs at least one strategy")
        self.strategies = list(strategies)

    async def run(self, request: R) -> Result[PipelineOutcome[V], str]:
        """
        Run strategies in order until one succeeds.

        Args:
            request: Input handed to every strategy unchanged

        Returns:
            Success with the winning value and strategy name, or Failure
            listing every strategy error
        """
        errors: list[str] = []
        for strategy in self.strategies:
            try:
                result = await strategy.generate(request)
            except Exception as e:
                logger.warning("strategy_raised", strategy=strategy.name, error=str(e))
                result = Failure(f"{type(e).__name__}: {e}")

            if isinstance(result, Success):
                logger.debug("strategy_succeeded", strategy=strategy.name)
                return Success(PipelineOutcome(value=result.value, strategy=strategy.name))

            logger.info("strategy_failed", strategy=strategy.name, error=result.error)
            errors.append(f"{strategy.name}: {result.error}")

        return Failure("; ".join(errors))

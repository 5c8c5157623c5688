"""
Fallback mechanism for the Metafield Translation Proxy.
Runs ordered, named strategies and reports a tagged outcome for each.
"""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, List, Optional, TypeVar
import logging


T = TypeVar('T')

StrategyCallable = Callable[[], Awaitable[Optional[T]]]


@dataclass
class FallbackStrategy(Generic[T]):
    """A named step in a fallback chain.

    The callable returns a value on success and ``None`` on failure; an
    exception also counts as failure.
    """
    name: str
    run: StrategyCallable


@dataclass
class StrategyOutcome(Generic[T]):
    """Tagged result of one strategy attempt."""
    name: str
    succeeded: bool
    value: Optional[T] = None
    error: Optional[str] = None


class FallbackChain(Generic[T]):
    """
    Tries strategies in order and stops at the first success.
    """

    def __init__(self, operation_key: str, logger: logging.Logger):
        """
        Initialize the chain.

        Args:
            operation_key: Name of the operation, used in log messages
            logger: Logger instance for fallback operations
        """
        self.operation_key = operation_key
        self.logger = logger
        self.strategies: List[FallbackStrategy[T]] = []
        self.outcomes: List[StrategyOutcome[T]] = []

    def add_strategy(self, name: str, run: StrategyCallable) -> "FallbackChain[T]":
        self.strategies.append(FallbackStrategy(name=name, run=run))
        return self

    async def execute(self) -> List[StrategyOutcome[T]]:
        """
        Run strategies in order until one succeeds.

        Returns:
            List[StrategyOutcome]: One outcome per attempted strategy; the
            last one is the success, if any.
        """
        outcomes: List[StrategyOutcome[T]] = []
        self.outcomes = outcomes

        for strategy in self.strategies:
            outcome = await self._attempt(strategy)
            outcomes.append(outcome)
            if outcome.succeeded:
                self.logger.info(
                    f"Strategy '{strategy.name}' succeeded for operation '{self.operation_key}'"
                )
                break

            self.logger.warning(
                f"Strategy '{strategy.name}' failed for operation '{self.operation_key}': "
                f"{outcome.error}. Trying next strategy if available."
            )

        return outcomes

    async def first_success(self) -> Optional[StrategyOutcome[T]]:
        """Run the chain and return the successful outcome, or None.

        Every attempt stays available in ``outcomes`` afterwards.
        """
        outcomes = await self.execute()
        if outcomes and outcomes[-1].succeeded:
            return outcomes[-1]
        return None

    async def _attempt(self, strategy: FallbackStrategy[T]) -> StrategyOutcome[T]:
        try:
            value = await strategy.run()
        except Exception as e:
            return StrategyOutcome(name=strategy.name, succeeded=False, error=str(e))

        if value is None or value is False:
            return StrategyOutcome(name=strategy.name, succeeded=False, error="no result")
        return StrategyOutcome(name=strategy.name, succeeded=True, value=value)


def describe_outcomes(outcomes: List[StrategyOutcome[Any]]) -> str:
    """Compact summary of attempted strategies for log lines and messages."""
    return ", ".join(
        f"{o.name}={'ok' if o.succeeded else 'failed'}" for o in outcomes
    )

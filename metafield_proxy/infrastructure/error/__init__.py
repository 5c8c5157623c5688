"""
Error handling package for the Metafield Translation Proxy.
Provides the ordered fallback chain used by the translation workflow.
"""

from metafield_proxy.infrastructure.error.fallback import (
    FallbackChain,
    FallbackStrategy,
    StrategyOutcome,
    describe_outcomes,
)

__all__ = [
    "FallbackChain",
    "FallbackStrategy",
    "StrategyOutcome",
    "describe_outcomes",
]

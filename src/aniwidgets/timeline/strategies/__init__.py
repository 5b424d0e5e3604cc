"""Scheduling strategies for animating widget timelines."""

from .base_strategy import BaseStrategy, ScheduleContext, ScheduleResult
from .precomputed_strategy import PrecomputedStrategy
from .stepped_strategy import SteppedStrategy

DEFAULT_STRATEGY_NAME = "precomputed"
STRATEGY_TYPES: dict[str, type[BaseStrategy]] = {
    "precomputed": PrecomputedStrategy,
    "stepped": SteppedStrategy,
}


def supported_strategy_names() -> tuple[str, ...]:
    """Return supported strategy names in deterministic order."""
    return tuple(STRATEGY_TYPES.keys())


def create_strategy(name: str, default: str | None = None, **options) -> BaseStrategy:
    """Create a strategy instance by name, passing ``options`` to its constructor."""
    strategy_name = name if name in STRATEGY_TYPES else default
    if strategy_name is None:
        available = ", ".join(supported_strategy_names())
        raise ValueError(f"Unknown strategy '{name}'. Available: {available}")

    strategy_class = STRATEGY_TYPES[strategy_name]
    return strategy_class(**options)


__all__ = [
    "BaseStrategy",
    "ScheduleContext",
    "ScheduleResult",
    "PrecomputedStrategy",
    "SteppedStrategy",
    "DEFAULT_STRATEGY_NAME",
    "STRATEGY_TYPES",
    "supported_strategy_names",
    "create_strategy",
]

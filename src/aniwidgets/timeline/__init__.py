"""Timeline computation for animated widgets."""

from .entry import RefreshPolicy, Timeline, TimelineEntry
from .scheduler import TimelineScheduler
from .strategies import (
    DEFAULT_STRATEGY_NAME,
    BaseStrategy,
    PrecomputedStrategy,
    SteppedStrategy,
    create_strategy,
    supported_strategy_names,
)

__all__ = [
    "TimelineEntry",
    "RefreshPolicy",
    "Timeline",
    "TimelineScheduler",
    "BaseStrategy",
    "PrecomputedStrategy",
    "SteppedStrategy",
    "DEFAULT_STRATEGY_NAME",
    "create_strategy",
    "supported_strategy_names",
]

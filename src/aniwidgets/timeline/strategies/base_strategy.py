"""Base scheduling strategy interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...state.instance import WidgetInstance
from ..entry import RefreshPolicy, Timeline, TimelineEntry


@dataclass(frozen=True)
class ScheduleContext:
    """Inputs of one scheduling pass besides the instance itself."""

    slot_index: int
    frame_count: int | None
    now: datetime


@dataclass(frozen=True)
class ScheduleResult:
    """
    A timeline plus the instance state to persist for it.

    ``update`` is ``None`` when the pass changed nothing.
    """

    timeline: Timeline
    update: WidgetInstance | None = None


class BaseStrategy(ABC):
    """Abstract base class for timeline scheduling strategies."""

    @abstractmethod
    def schedule(self, instance: WidgetInstance, context: ScheduleContext) -> ScheduleResult:
        """
        Compute the timeline for an instance.

        Strategies are pure: they never touch storage and return the state
        change (if any) for the caller to persist.

        Args:
            instance: Current persisted state of the widget instance
            context: Slot, design frame count and the current time

        Returns:
            The timeline to hand to the host and the state to persist
        """
        raise NotImplementedError

    def idle(
        self, instance: WidgetInstance, context: ScheduleContext, update: WidgetInstance | None = None
    ) -> ScheduleResult:
        """Single entry showing the instance's current frame, no auto refresh."""
        frame = instance.current_frame
        if context.frame_count is not None:
            frame = min(frame, context.frame_count)
        entry = self._entry(instance, context, context.now, frame, is_animating=False)
        return ScheduleResult(Timeline((entry,), RefreshPolicy.never()), update)

    def _entry(
        self,
        instance: WidgetInstance,
        context: ScheduleContext,
        date: datetime,
        frame_index: int,
        is_animating: bool,
    ) -> TimelineEntry:
        return TimelineEntry(
            date=date,
            slot_index=context.slot_index,
            design_id=instance.design_id,
            frame_index=frame_index,
            instance_id=instance.instance_id,
            is_animating=is_animating,
        )

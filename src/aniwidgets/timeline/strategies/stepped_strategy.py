"""Stepped strategy: one frame per scheduling pass for low-capability hosts."""

from ...constants import STEP_DELAY, TOTAL_FRAMES
from ...state.instance import WidgetInstance
from ..entry import RefreshPolicy, Timeline
from .base_strategy import BaseStrategy, ScheduleContext, ScheduleResult


class SteppedStrategy(BaseStrategy):
    """
    Advances the persisted frame by one on every pass while animating and asks
    to be called again after ``step_delay``. Once the last frame has been
    shown the instance goes back to idle.
    """

    def __init__(self, step_delay: float = STEP_DELAY, default_frame_count: int = TOTAL_FRAMES):
        self.step_delay = step_delay
        self.default_frame_count = default_frame_count

    def schedule(self, instance: WidgetInstance, context: ScheduleContext) -> ScheduleResult:
        if not instance.is_animating:
            return self.idle(instance, context)

        frame_count = context.frame_count or self.default_frame_count
        if instance.current_frame >= frame_count:
            finished = instance.stopped(context.now)
            return self.idle(finished, context, update=finished)

        advanced = instance.at_frame(instance.current_frame + 1, context.now)
        entry = self._entry(
            advanced, context, context.now, advanced.current_frame, is_animating=True
        )
        return ScheduleResult(
            Timeline((entry,), RefreshPolicy.after(self.step_delay)), advanced
        )

"""Precomputed strategy: hand the host the whole animation up front."""

from datetime import timedelta

from ...constants import FRAME_INTERVAL, RESET_PAD, START_GRACE, TOTAL_FRAMES
from ...state.instance import WidgetInstance
from ..entry import RefreshPolicy, Timeline
from .base_strategy import BaseStrategy, ScheduleContext, ScheduleResult


class PrecomputedStrategy(BaseStrategy):
    """
    Emits every frame of an animation run as one timeline.

    For an animation started at ``t0`` the entries are frames ``1..N`` at
    ``t0 + (i - 1) * interval``, then a reset entry showing frame 1 at
    ``t0 + N * interval + reset_pad``. The host refreshes once the reset entry
    is due; that pass finds the run finished and persists the idle state.

    A start that lags "now" by at most ``start_grace`` (the time between the
    start request and the host asking for the timeline) is shown from "now" so
    the whole run is visible. The shift is never persisted: the stored start
    stays put, so the run ends at most ``start_grace`` late however often the
    host polls. Beyond the grace window the run is already in flight and
    entries that are due are dropped.
    """

    def __init__(
        self,
        total_frames: int = TOTAL_FRAMES,
        frame_interval: float = FRAME_INTERVAL,
        reset_pad: float = RESET_PAD,
        start_grace: float = START_GRACE,
    ):
        self.total_frames = total_frames
        self.frame_interval = frame_interval
        self.reset_pad = reset_pad
        self.start_grace = start_grace

    def run_length(self, frame_count: int | None) -> int:
        """Number of animated entries for a design with ``frame_count`` frames."""
        if frame_count is None:
            return self.total_frames
        return min(self.total_frames, frame_count)

    def schedule(self, instance: WidgetInstance, context: ScheduleContext) -> ScheduleResult:
        if not instance.is_animating or instance.animation_start_time is None:
            return self.idle(instance, context)

        now = context.now
        frames = self.run_length(context.frame_count)
        interval = timedelta(seconds=self.frame_interval)
        reset_offset = frames * interval + timedelta(seconds=self.reset_pad)

        start = instance.animation_start_time
        if start + reset_offset <= now:
            finished = instance.stopped(now)
            return self.idle(finished, context, update=finished)

        lag = now - start
        in_flight = lag > timedelta(seconds=self.start_grace)
        if timedelta(0) < lag and not in_flight:
            start = now

        entries = []
        for frame_index in range(1, frames + 1):
            date = start + (frame_index - 1) * interval
            if in_flight and date <= now:
                continue
            entries.append(self._entry(instance, context, date, frame_index, is_animating=True))
        entries.append(
            self._entry(instance, context, start + reset_offset, 1, is_animating=False)
        )
        return ScheduleResult(Timeline(tuple(entries), RefreshPolicy.at_end()))

"""Command-line stand-in for the platform widget scheduler."""

import logging
import sched
import time
from datetime import datetime
from typing import Callable

from .clock import Clock, utc_now
from .signals import ReloadCenter
from .timeline import Timeline, TimelineEntry
from .widgets import FeaturedWidgetProvider, PlacementContext

logger = logging.getLogger(__name__)

EntryCallback = Callable[[TimelineEntry], None]

# Entries due at the same instant as a refresh are shown first.
_SHOW_PRIORITY = 1
_POLL_PRIORITY = 2


class HostSimulator:
    """
    Drives one widget the way a host would.

    Every pass asks the provider for a timeline, schedules each entry for its
    date and schedules the next pass as the refresh policy requests. A
    ``never`` policy ends the run unless a reload signal for the widget's kind
    is pending. Passes are capped by ``max_passes``.
    """

    def __init__(
        self,
        provider: FeaturedWidgetProvider,
        reload_center: ReloadCenter,
        clock: Clock = utc_now,
        timefunc: Callable[[], float] = time.monotonic,
        delayfunc: Callable[[float], object] = time.sleep,
        max_passes: int = 100,
        on_entry: EntryCallback | None = None,
    ):
        self.provider = provider
        self.reload_center = reload_center
        self.clock = clock
        self.max_passes = max_passes
        self.on_entry = on_entry
        self.scheduler = sched.scheduler(timefunc, delayfunc)
        self.passes = 0
        self.shown: list[TimelineEntry] = []

    def run(self) -> list[TimelineEntry]:
        """Run until no further pass is due; returns every entry shown, in order."""
        self.scheduler.enter(0, _POLL_PRIORITY, self._poll)
        self.scheduler.run()
        logger.info(
            "Host run for %s finished after %d pass(es), %d entries shown",
            self.provider.kind,
            self.passes,
            len(self.shown),
        )
        return self.shown

    def _poll(self) -> None:
        self.passes += 1
        self.reload_center.consume(self.provider.kind)
        timeline = self.provider.get_timeline(PlacementContext(self.provider.kind))
        now = self.clock()
        self._schedule_entries(timeline, now)

        if self.passes >= self.max_passes:
            logger.warning("Stopping %s after %d passes", self.provider.kind, self.passes)
            return

        refresh = timeline.next_refresh(now)
        if refresh is None:
            if self.reload_center.pending(self.provider.kind) is not None:
                self.scheduler.enter(0, _POLL_PRIORITY, self._poll)
            return
        self.scheduler.enter(_seconds_until(refresh, now), _POLL_PRIORITY, self._poll)

    def _schedule_entries(self, timeline: Timeline, now: datetime) -> None:
        # A new timeline replaces whatever the previous one still had queued.
        for event in list(self.scheduler.queue):
            if event.priority == _SHOW_PRIORITY:
                self.scheduler.cancel(event)
        for entry in timeline.entries:
            self.scheduler.enter(_seconds_until(entry.date, now), _SHOW_PRIORITY, self._show, (entry,))

    def _show(self, entry: TimelineEntry) -> None:
        self.shown.append(entry)
        if self.on_entry is not None:
            self.on_entry(entry)


def _seconds_until(when: datetime, now: datetime) -> float:
    return max(0.0, (when - now).total_seconds())

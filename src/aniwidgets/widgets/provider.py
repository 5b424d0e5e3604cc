"""Host-facing timeline provider for one featured widget kind."""

import logging
from dataclasses import dataclass

from ..timeline import RefreshPolicy, Timeline, TimelineEntry, TimelineScheduler
from .kinds import kind_for_slot, slot_for_kind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementContext:
    """Opaque description of where the host placed a widget."""

    kind: str
    family: str = "systemSmall"
    is_preview: bool = False


class FeaturedWidgetProvider:
    """Implements the host's timeline callbacks for the widget bound to one slot."""

    def __init__(self, slot_index: int, scheduler: TimelineScheduler):
        self.slot_index = slot_index
        self.kind = kind_for_slot(slot_index)
        self.scheduler = scheduler

    @classmethod
    def for_kind(cls, kind: str, scheduler: TimelineScheduler) -> "FeaturedWidgetProvider":
        return cls(slot_for_kind(kind), scheduler)

    def placeholder(self) -> TimelineEntry:
        return self.scheduler.placeholder(self.slot_index)

    def snapshot(self, context: PlacementContext) -> TimelineEntry:
        return self.scheduler.snapshot(self.slot_index)

    def get_timeline(self, context: PlacementContext) -> Timeline:
        logger.info("Timeline requested for slot %d (%s)", self.slot_index, context.family)
        if context.is_preview:
            return Timeline((self.snapshot(context),), RefreshPolicy.never())
        return self.scheduler.timeline_for_slot(self.slot_index)

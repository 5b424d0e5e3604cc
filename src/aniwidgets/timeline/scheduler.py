"""Timeline scheduler: what a widget slot shows now and next."""

import logging
from typing import Callable

from ..clock import Clock, utc_now
from ..constants import EMPTY_SLOT_RECHECK
from ..designs import DesignCatalog
from ..signals import ReloadCenter
from ..state import FeaturedRegistryStore, InstanceRepository, InstanceResolver
from .entry import RefreshPolicy, Timeline, TimelineEntry
from .strategies import BaseStrategy, ScheduleContext

logger = logging.getLogger(__name__)


class TimelineScheduler:
    """
    Computes timelines for widget slots and handles animation start requests.

    Holds no state between calls: every pass reads the registry and the
    instance document, lets the strategy compute the timeline, and writes back
    whatever state change the strategy reports.
    """

    def __init__(
        self,
        repository: InstanceRepository,
        registry: FeaturedRegistryStore,
        resolver: InstanceResolver,
        catalog: DesignCatalog,
        strategy: BaseStrategy,
        reload_center: ReloadCenter,
        kind_for_slot: Callable[[int], str],
        clock: Clock = utc_now,
    ):
        self.repository = repository
        self.registry = registry
        self.resolver = resolver
        self.catalog = catalog
        self.strategy = strategy
        self.reload_center = reload_center
        self.kind_for_slot = kind_for_slot
        self.clock = clock

    def timeline_for_slot(self, slot_index: int) -> Timeline:
        now = self.clock()
        design_id = self.registry.design_at(slot_index)
        if design_id is None:
            logger.debug("Slot %d has no design", slot_index)
            return Timeline(
                (self.placeholder(slot_index),), RefreshPolicy.after(EMPTY_SLOT_RECHECK)
            )

        instance_id = self.resolver.resolve_instance(slot_index, design_id)
        if instance_id is None:
            # Slot map unreadable; show the first frame and check back later.
            entry = TimelineEntry(
                date=now,
                slot_index=slot_index,
                design_id=design_id,
                frame_index=1,
                instance_id=None,
                is_animating=False,
            )
            return Timeline((entry,), RefreshPolicy.after(EMPTY_SLOT_RECHECK))

        instance = self.repository.load(instance_id)
        if instance is None:
            # State could not be persisted; show the first frame and wait.
            entry = TimelineEntry(
                date=now,
                slot_index=slot_index,
                design_id=design_id,
                frame_index=1,
                instance_id=instance_id,
                is_animating=False,
            )
            return Timeline((entry,), RefreshPolicy.never())

        context = ScheduleContext(
            slot_index=slot_index,
            frame_count=self.catalog.frame_count(design_id),
            now=now,
        )
        result = self.strategy.schedule(instance, context)
        if result.update is not None:
            self.repository.save(result.update)

        logger.debug(
            "Slot %d timeline: %d entries, policy %s",
            slot_index,
            len(result.timeline.entries),
            result.timeline.policy,
        )
        return result.timeline

    def placeholder(self, slot_index: int) -> TimelineEntry:
        return TimelineEntry(
            date=self.clock(),
            slot_index=slot_index,
            design_id=None,
            frame_index=1,
            instance_id=None,
            is_animating=False,
        )

    def snapshot(self, slot_index: int) -> TimelineEntry:
        """First frame of the slot's design, for previews; persists nothing."""
        design_id = self.registry.design_at(slot_index)
        if design_id is None:
            return self.placeholder(slot_index)
        return TimelineEntry(
            date=self.clock(),
            slot_index=slot_index,
            design_id=design_id,
            frame_index=1,
            instance_id=self.resolver.instance_for_slot(slot_index),
            is_animating=False,
        )

    def start_animation(self, instance_id: str) -> bool:
        """
        Start animating an idle instance.

        Returns:
            False if the instance is unknown, already animating, or the new
            state could not be saved; True once the start is persisted and the
            host has been asked to re-poll
        """
        instance = self.repository.load(instance_id)
        if instance is None:
            logger.error("Cannot start animation, unknown instance %s", instance_id)
            return False
        if instance.is_animating:
            logger.info("Instance %s is already animating", instance_id)
            return False

        if not self.repository.save(instance.started(self.clock())):
            return False

        slots = self.resolver.slots_for_instance(instance_id)
        reason = f"animation started for {instance_id}"
        if slots:
            for slot_index in slots:
                self.reload_center.reload_timelines(self.kind_for_slot(slot_index), reason)
        else:
            self.reload_center.reload_all_timelines(reason)
        logger.info("Animation started for instance %s", instance_id)
        return True

"""Stable instance identity per widget slot."""

import logging
from typing import Callable

from ..errors import DecodeFailure, IOFailure, NotFoundError
from ..storage import SharedContainer, layout
from .repository import InstanceRepository

logger = logging.getLogger(__name__)

FrameCountLookup = Callable[[str], int | None]


class InstanceResolver:
    """
    Maps a widget slot to the instance that renders it.

    The slot map is a small persisted document, ``{"slots": {"0": "<id>"}}``.
    The first request for a slot creates an instance; later requests return
    the same id. When the slot's design changes, the existing instance is moved
    to the new design in place so the widget keeps its identity and any
    animation already in flight.
    """

    def __init__(
        self,
        container: SharedContainer,
        repository: InstanceRepository,
        frame_count: FrameCountLookup = lambda design_id: None,
    ):
        self.container = container
        self.repository = repository
        self.frame_count = frame_count

    def resolve_instance(self, slot_index: int, design_id: str) -> str | None:
        """
        Instance id for ``slot_index``, creating one on first use.

        Returns ``None`` when the slot map cannot be read; nothing is created
        or overwritten in that case.
        """
        slots = self._load_slots()
        if slots is None:
            return None
        instance_id = slots.get(str(slot_index))

        if instance_id is not None:
            instance = self.repository.load(instance_id)
            if instance is not None:
                if instance.design_id != design_id:
                    updated = instance.reassigned(
                        design_id, self.frame_count(design_id), self.repository.clock()
                    )
                    self.repository.save(updated)
                    logger.info(
                        "Slot %d instance %s moved from design %s to %s",
                        slot_index,
                        instance_id,
                        instance.design_id,
                        design_id,
                    )
                return instance_id
            logger.info("Instance %s for slot %d is gone, creating a new one", instance_id, slot_index)

        instance = self.repository.create(design_id)
        slots[str(slot_index)] = instance.instance_id
        self._save_slots(slots)
        return instance.instance_id

    def instance_for_slot(self, slot_index: int) -> str | None:
        return self.mapping().get(slot_index)

    def slots_for_instance(self, instance_id: str) -> list[int]:
        return sorted(slot for slot, mapped in self.mapping().items() if mapped == instance_id)

    def mapping(self) -> dict[int, str]:
        slots = self._load_slots() or {}
        return {int(slot): instance_id for slot, instance_id in slots.items()}

    def _load_slots(self) -> dict[str, str] | None:
        """The persisted slot map, or ``None`` if it exists but cannot be read."""
        try:
            document = self.container.read_json(layout.SLOT_MAP_PATH)
        except NotFoundError:
            return {}
        except DecodeFailure as e:
            logger.warning("Slot map is corrupt, starting fresh: %s", e)
            return {}
        except IOFailure as e:
            logger.error("Failed to read slot map: %s", e)
            return None

        slots = document.get("slots") if isinstance(document, dict) else None
        if not isinstance(slots, dict):
            logger.warning("Slot map has no 'slots' object, starting fresh")
            return {}
        return {
            str(slot): str(instance_id)
            for slot, instance_id in slots.items()
            if str(slot).isdigit() and isinstance(instance_id, str)
        }

    def _save_slots(self, slots: dict[str, str]) -> None:
        try:
            self.container.write_json(layout.SLOT_MAP_PATH, {"slots": slots})
        except IOFailure as e:
            logger.error("Failed to save slot map: %s", e)

"""Featured-slot registry: which design occupies which widget slot."""

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from ..constants import MAX_FEATURED_DESIGNS
from ..errors import DecodeFailure, IOFailure, NotFoundError
from ..signals import ReloadCenter
from ..storage import SharedContainer, layout

logger = logging.getLogger(__name__)


@dataclass
class FeaturedRegistry:
    """Ordered, duplicate-free list of design ids; list position is the slot index."""

    designs: list[str] = field(default_factory=list)
    max_count: int = MAX_FEATURED_DESIGNS

    def __post_init__(self) -> None:
        unique: list[str] = []
        for design_id in self.designs:
            if design_id not in unique:
                unique.append(design_id)
        self.designs = unique[: self.max_count]

    def add_design(self, design_id: str) -> bool:
        """Append a design; False (list unchanged) if present or full."""
        if design_id in self.designs or len(self.designs) >= self.max_count:
            return False
        self.designs.append(design_id)
        return True

    def remove_design(self, design_id: str) -> bool:
        if design_id not in self.designs:
            return False
        self.designs.remove(design_id)
        return True

    def reorder(self, new_order: Sequence[str]) -> None:
        """Adopt ``new_order``, keeping only ids already featured."""
        ordered: list[str] = []
        for design_id in new_order:
            if design_id in self.designs and design_id not in ordered:
                ordered.append(design_id)
        self.designs = ordered[: self.max_count]

    def move(self, source: int, destination: int) -> bool:
        if not (0 <= source < len(self.designs) and 0 <= destination < len(self.designs)):
            return False
        design_id = self.designs.pop(source)
        self.designs.insert(destination, design_id)
        return True

    def design_at(self, slot_index: int) -> str | None:
        if 0 <= slot_index < len(self.designs):
            return self.designs[slot_index]
        return None

    def to_document(self) -> dict[str, Any]:
        return {"designs": list(self.designs), "maxCount": self.max_count}

    @classmethod
    def from_document(cls, document: Any) -> "FeaturedRegistry":
        if not isinstance(document, dict) or not isinstance(document.get("designs"), list):
            raise ValueError("Featured registry document must contain a 'designs' list")
        designs = [str(design_id) for design_id in document["designs"]]
        # Slot count is fixed by the number of widget kinds, not by the document.
        return cls(designs=designs)


class FeaturedRegistryStore:
    """
    Persists the registry as a single document.

    Mutations are read-modify-write of the whole document; each successful one
    asks every widget kind to re-poll its timeline.
    """

    def __init__(self, container: SharedContainer, reload_center: ReloadCenter | None = None):
        self.container = container
        self.reload_center = reload_center

    def load(self) -> FeaturedRegistry:
        """The persisted registry, or an empty one if missing or corrupt."""
        try:
            return FeaturedRegistry.from_document(
                self.container.read_json(layout.FEATURED_CONFIG_PATH)
            )
        except NotFoundError:
            logger.debug("No featured registry found, using default")
        except (DecodeFailure, ValueError) as e:
            logger.warning("Corrupt featured registry, using default: %s", e)
        except IOFailure as e:
            logger.error("Failed to load featured registry: %s", e)
        return FeaturedRegistry()

    def save(self, registry: FeaturedRegistry) -> bool:
        try:
            self.container.write_json(layout.FEATURED_CONFIG_PATH, registry.to_document())
        except IOFailure as e:
            logger.error("Failed to save featured registry: %s", e)
            return False
        logger.info("Saved featured registry: %s", ", ".join(registry.designs) or "(empty)")
        if self.reload_center is not None:
            self.reload_center.reload_all_timelines("featured registry changed")
        return True

    def add_design(self, design_id: str) -> bool:
        registry = self.load()
        if not registry.add_design(design_id):
            logger.info("Design %s not added (already featured or registry full)", design_id)
            return False
        return self.save(registry)

    def remove_design(self, design_id: str) -> bool:
        registry = self.load()
        if not registry.remove_design(design_id):
            return False
        return self.save(registry)

    def reorder(self, new_order: Sequence[str]) -> FeaturedRegistry | None:
        """The reordered registry, or ``None`` if it could not be saved."""
        registry = self.load()
        registry.reorder(new_order)
        if not self.save(registry):
            return None
        return registry

    def move(self, source: int, destination: int) -> bool:
        registry = self.load()
        if not registry.move(source, destination):
            return False
        return self.save(registry)

    def design_at(self, slot_index: int) -> str | None:
        return self.load().design_at(slot_index)

"""Instance state repository: CRUD over one JSON document per widget placement."""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Callable

from ..clock import Clock, utc_now
from ..errors import DecodeFailure, IOFailure, NotFoundError
from ..storage import SharedContainer, layout
from .instance import WidgetInstance

logger = logging.getLogger(__name__)


def new_instance_id() -> str:
    return str(uuid.uuid4()).upper()


class InstanceRepository:
    """
    Owns the on-disk instance documents.

    ``save`` always overwrites the complete document. Peers writing the same
    instance concurrently resolve as last-writer-wins; a document is never
    patched field by field. Reads never raise: a missing, corrupt or unreadable
    document is reported as ``None``.
    """

    def __init__(
        self,
        container: SharedContainer,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = new_instance_id,
    ):
        self.container = container
        self.clock = clock
        self.id_factory = id_factory

    def load(self, instance_id: str) -> WidgetInstance | None:
        try:
            path = layout.instance_state_path(instance_id)
            return WidgetInstance.from_document(self.container.read_json(path))
        except NotFoundError:
            logger.debug("No state document for instance %s", instance_id)
        except (DecodeFailure, ValueError) as e:
            logger.warning("Discarding corrupt state for instance %s: %s", instance_id, e)
        except IOFailure as e:
            logger.error("Failed to load instance %s: %s", instance_id, e)
        return None

    def save(self, instance: WidgetInstance) -> bool:
        path = layout.instance_state_path(instance.instance_id)
        try:
            self.container.write_json(path, instance.to_document())
        except IOFailure as e:
            logger.error("Failed to save instance %s: %s", instance.instance_id, e)
            return False
        logger.debug(
            "Saved instance %s (design=%s frame=%d animating=%s)",
            instance.instance_id,
            instance.design_id,
            instance.current_frame,
            instance.is_animating,
        )
        return True

    def create(self, design_id: str) -> WidgetInstance:
        """
        Create and persist a fresh idle instance for ``design_id``.

        The instance is returned even when the write fails so the caller can
        still render; the next scheduling pass will create it again.
        """
        instance = WidgetInstance.new(self.id_factory(), design_id, self.clock())
        if self.save(instance):
            logger.info("Created instance %s for design %s", instance.instance_id, design_id)
        return instance

    def delete(self, instance_id: str) -> bool:
        try:
            self.container.delete(layout.instance_state_path(instance_id))
        except IOFailure as e:
            logger.error("Failed to delete instance %s: %s", instance_id, e)
            return False
        logger.info("Deleted instance %s", instance_id)
        return True

    def list_all(self) -> list[WidgetInstance]:
        """All decodable instance documents, in file name order."""
        try:
            paths = self.container.list_files(layout.INSTANCES_DIR, suffix=".json")
        except IOFailure as e:
            logger.error("Failed to list instances: %s", e)
            return []

        instances = []
        for path in paths:
            try:
                instances.append(WidgetInstance.from_document(self.container.read_json(path)))
            except NotFoundError:
                continue  # deleted by a peer since listing
            except (DecodeFailure, ValueError, IOFailure) as e:
                logger.warning("Skipping unreadable instance document %s: %s", path, e)
        return instances

    def instances_for_design(self, design_id: str) -> list[WidgetInstance]:
        return [instance for instance in self.list_all() if instance.design_id == design_id]

    def cleanup_stale(
        self, retention: timedelta, now: datetime | None = None
    ) -> list[str]:
        """
        Purge instances whose last interaction is older than ``retention``.

        Returns:
            Ids of the purged instances
        """
        cutoff = (now or self.clock()) - retention
        purged = []
        for instance in self.list_all():
            if instance.last_interaction < cutoff and self.delete(instance.instance_id):
                purged.append(instance.instance_id)
        if purged:
            logger.info("Cleaned up %d stale instance(s)", len(purged))
        return purged

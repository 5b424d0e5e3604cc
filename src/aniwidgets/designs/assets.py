"""Frame image lookup through an ordered chain of storage tiers."""

import logging

from ..constants import SENTINEL_DESIGN_ID
from ..errors import IOFailure, NotFoundError
from ..storage import SharedContainer, layout
from .placeholder import PlaceholderRenderer

logger = logging.getLogger(__name__)


class FrameAssetResolver:
    """
    Locates the image bytes of one frame of one design.

    Tiers, first hit wins:

    1. the process-local render cache, ``<design_id>/frame_XX.png``
    2. the shared container, ``Designs/<design_id>/frames/frame_XX.png``
    3. bundled ``frame_XX.png`` files, for the sentinel design only

    Hits from tiers 2 and 3 are copied into the cache. Cached frames are never
    evicted, only overwritten by a later upstream hit; published frames are
    treated as immutable.
    """

    def __init__(
        self,
        container: SharedContainer,
        cache: SharedContainer,
        bundle: SharedContainer | None = None,
        sentinel_design_id: str = SENTINEL_DESIGN_ID,
        placeholder: PlaceholderRenderer | None = None,
    ):
        self.container = container
        self.cache = cache
        self.bundle = bundle
        self.sentinel_design_id = sentinel_design_id
        self.placeholder = placeholder or PlaceholderRenderer()

    def resolve(self, design_id: str, frame_index: int) -> bytes | None:
        """The frame's image bytes, or ``None`` if no tier has it."""
        try:
            cache_key = f"{layout.checked_id(design_id)}/{layout.frame_file_name(frame_index)}"
        except ValueError as e:
            logger.warning("Cannot resolve frame: %s", e)
            return None

        data = self._read(self.cache, cache_key)
        if data is not None:
            return data

        data = self._read(self.container, layout.frame_image_path(design_id, frame_index))
        if data is None and self.bundle is not None and design_id == self.sentinel_design_id:
            data = self._read(self.bundle, layout.frame_file_name(frame_index))

        if data is None:
            logger.warning("No frame found for %s index %d", design_id, frame_index)
            return None

        try:
            self.cache.write(cache_key, data)
        except IOFailure as e:
            logger.warning("Could not cache frame %s: %s", cache_key, e)
        return data

    def resolve_or_placeholder(
        self, design_id: str | None, frame_index: int, label: str | None = None
    ) -> bytes:
        """
        Frame bytes, falling back to a rendered placeholder.

        Args:
            design_id: Design to resolve; ``None`` for an empty slot
            frame_index: 1-based frame number
            label: Placeholder title; defaults to the design id
        """
        if design_id is not None:
            data = self.resolve(design_id, frame_index)
            if data is not None:
                return data
        return self.placeholder.render_png(label or design_id or "Empty slot", frame_index)

    def _read(self, store: SharedContainer, path: str) -> bytes | None:
        try:
            return store.read(path)
        except NotFoundError:
            return None
        except IOFailure as e:
            logger.warning("Skipping unreadable tier for %s: %s", path, e)
            return None

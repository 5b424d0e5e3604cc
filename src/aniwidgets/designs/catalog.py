"""Design discovery across the shared container and the read-only bundle."""

import logging
import re
from typing import Iterable

from ..errors import DecodeFailure, IOFailure, NotFoundError
from ..storage import SharedContainer, layout
from .design import AnimationDesign, DesignSource, design_from_manifest

logger = logging.getLogger(__name__)

BUNDLE_DESIGNS_DIR = "designs"
_FRAME_FILE = re.compile(r"(?:^|[/_])frame_(\d{2,})\.png$")


class DesignCatalog:
    """
    Enumerates designs by scanning directories.

    A design folder with a readable manifest is described by it; without one
    (or with a broken one) the frame files are counted instead. Designs in the
    shared container shadow bundled designs with the same id. Nothing is
    cached: every call rescans.
    """

    def __init__(self, container: SharedContainer, bundle: SharedContainer | None = None):
        self.container = container
        self.bundle = bundle

    def designs(self) -> list[AnimationDesign]:
        found: dict[str, AnimationDesign] = {}
        if self.bundle is not None:
            for design in self._scan(self.bundle, BUNDLE_DESIGNS_DIR, "bundle"):
                found[design.design_id] = design
        for design in self._scan(self.container, layout.DESIGNS_DIR, "container"):
            found[design.design_id] = design
        return sorted(found.values(), key=lambda design: design.design_id)

    def get(self, design_id: str) -> AnimationDesign | None:
        try:
            folder = layout.design_dir(design_id)
        except ValueError:
            logger.warning("Invalid design id %r", design_id)
            return None
        design = self._load(self.container, folder, design_id, "container")
        if design is None and self.bundle is not None:
            design = self._load(
                self.bundle, f"{BUNDLE_DESIGNS_DIR}/{design_id}", design_id, "bundle"
            )
        return design

    def frame_count(self, design_id: str) -> int | None:
        design = self.get(design_id)
        return design.frame_count if design is not None else None

    def is_provisioned(self, design_id: str) -> bool:
        """Whether the design has a manifest in the shared container."""
        return self.container.exists(layout.design_manifest_path(design_id))

    def delete_design(self, design_id: str) -> bool:
        try:
            self.container.remove_tree(layout.design_dir(design_id))
        except IOFailure as e:
            logger.error("Failed to delete design %s: %s", design_id, e)
            return False
        logger.info("Deleted design %s", design_id)
        return True

    def remove_unused(self, keep: Iterable[str]) -> list[str]:
        """Delete container designs not in ``keep``; returns the removed ids."""
        keep_ids = set(keep)
        removed = []
        for design_id in self._design_dirs(self.container, layout.DESIGNS_DIR):
            if design_id not in keep_ids and self.delete_design(design_id):
                removed.append(design_id)
        return removed

    def _scan(
        self, store: SharedContainer, root: str, source: DesignSource
    ) -> list[AnimationDesign]:
        designs = []
        for design_id in self._design_dirs(store, root):
            design = self._load(store, f"{root}/{design_id}", design_id, source)
            if design is not None:
                designs.append(design)
        return designs

    def _design_dirs(self, store: SharedContainer, root: str) -> list[str]:
        try:
            return store.list_dirs(root)
        except IOFailure as e:
            logger.error("Failed to scan %s: %s", root, e)
            return []

    def _load(
        self, store: SharedContainer, folder: str, design_id: str, source: DesignSource
    ) -> AnimationDesign | None:
        try:
            manifest = store.read_json(f"{folder}/{layout.MANIFEST_NAME}")
            return design_from_manifest(manifest, design_id, source)
        except NotFoundError:
            pass
        except (DecodeFailure, ValueError) as e:
            logger.warning("Ignoring broken manifest for %s: %s", design_id, e)
        except IOFailure as e:
            logger.error("Failed to read manifest for %s: %s", design_id, e)

        frame_count = self._count_frames(store, folder)
        if frame_count == 0:
            return None
        return AnimationDesign(
            design_id=design_id,
            name=design_id.capitalize(),
            frame_count=frame_count,
            source=source,
        )

    def _count_frames(self, store: SharedContainer, folder: str) -> int:
        count = 0
        for directory in (f"{folder}/frames", folder):
            try:
                names = store.list_files(directory, suffix=".png")
            except IOFailure:
                continue
            count = max(count, sum(1 for name in names if _FRAME_FILE.search(name)))
        return count

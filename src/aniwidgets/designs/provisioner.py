"""Simulated design download: writes frames and a manifest into the container."""

import logging
from typing import Callable

from ..constants import DEFAULT_FRAME_RATE, SENTINEL_DESIGN_ID, TOTAL_FRAMES
from ..errors import IOFailure, NotFoundError
from ..storage import SharedContainer, layout
from .catalog import BUNDLE_DESIGNS_DIR, DesignCatalog
from .design import AnimationDesign
from .placeholder import PlaceholderRenderer

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


class ProvisioningError(Exception):
    """Raised when a design could not be written to the container."""


class DesignProvisioner:
    """
    Stands in for a real asset download.

    Frames are copied from the bundle when it has them (bundled design folder,
    or the root bundle frames for the sentinel design); otherwise labelled
    placeholder frames are generated. The manifest is written last, so a
    design only counts as provisioned once all of its frames are in place.
    """

    def __init__(
        self,
        container: SharedContainer,
        catalog: DesignCatalog,
        bundle: SharedContainer | None = None,
        renderer: PlaceholderRenderer | None = None,
        sentinel_design_id: str = SENTINEL_DESIGN_ID,
    ):
        self.container = container
        self.catalog = catalog
        self.bundle = bundle
        self.renderer = renderer or PlaceholderRenderer()
        self.sentinel_design_id = sentinel_design_id

    def provision(
        self,
        design_id: str,
        name: str | None = None,
        frame_count: int | None = None,
        frame_rate: float | None = None,
        progress: ProgressCallback | None = None,
    ) -> AnimationDesign:
        """
        Write ``design_id``'s frames and manifest into the shared container.

        Metadata not given explicitly comes from the bundled design when one
        exists, otherwise from the defaults.

        Raises:
            ProvisioningError: If any frame or the manifest cannot be written
        """
        layout.checked_id(design_id)
        bundled = self.catalog.get(design_id) if self.bundle is not None else None
        design = AnimationDesign(
            design_id=design_id,
            name=name or (bundled.name if bundled else design_id.capitalize()),
            frame_count=frame_count or (bundled.frame_count if bundled else TOTAL_FRAMES),
            frame_rate=frame_rate or (bundled.frame_rate if bundled else DEFAULT_FRAME_RATE),
        )

        logger.info("Provisioning design %s (%d frames)", design_id, design.frame_count)
        copied = 0
        for frame_index in range(1, design.frame_count + 1):
            data = self._bundled_frame(design_id, frame_index)
            if data is None:
                data = self.renderer.render_png(design.name, frame_index)
            else:
                copied += 1
            try:
                self.container.write(layout.frame_image_path(design_id, frame_index), data)
            except IOFailure as e:
                raise ProvisioningError(f"Failed to save frame {frame_index} of {design_id}: {e}")
            if progress is not None:
                progress(frame_index / design.frame_count)

        try:
            self.container.write_json(layout.design_manifest_path(design_id), design.to_manifest())
        except IOFailure as e:
            raise ProvisioningError(f"Failed to save manifest of {design_id}: {e}")

        logger.info(
            "Design %s provisioned (%d bundled, %d placeholder frames)",
            design_id,
            copied,
            design.frame_count - copied,
        )
        return design

    def _bundled_frame(self, design_id: str, frame_index: int) -> bytes | None:
        if self.bundle is None:
            return None
        file_name = layout.frame_file_name(frame_index)
        candidates = [
            f"{BUNDLE_DESIGNS_DIR}/{design_id}/{file_name}",
            f"{BUNDLE_DESIGNS_DIR}/{design_id}/{design_id}_{file_name}",
        ]
        if design_id == self.sentinel_design_id:
            candidates.append(file_name)
        for path in candidates:
            try:
                return self.bundle.read(path)
            except NotFoundError:
                continue
            except IOFailure as e:
                logger.warning("Unreadable bundled frame %s: %s", path, e)
        return None

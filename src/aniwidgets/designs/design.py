"""Animation design metadata and manifest decoding."""

from dataclasses import dataclass
from typing import Any, Literal

from ..constants import DEFAULT_FRAME_RATE

DesignSource = Literal["container", "bundle"]


@dataclass(frozen=True)
class AnimationDesign:
    """A named, ordered set of frames forming one animation."""

    design_id: str
    name: str
    frame_count: int
    frame_rate: float = DEFAULT_FRAME_RATE
    source: DesignSource = "container"

    def __post_init__(self) -> None:
        if self.frame_count <= 0:
            raise ValueError(f"Design {self.design_id} must have at least one frame")
        if self.frame_rate <= 0:
            raise ValueError(f"Design {self.design_id} frame rate must be positive")

    @property
    def frame_duration(self) -> float:
        """Seconds each frame is shown at the design's native rate."""
        return 1.0 / self.frame_rate

    def to_manifest(self) -> dict[str, Any]:
        return {
            "designId": self.design_id,
            "name": self.name,
            "frameCount": self.frame_count,
            "frameRate": self.frame_rate,
            "frameUrls": [f"frame_{index:02d}.png" for index in range(1, self.frame_count + 1)],
        }


def design_from_manifest(
    document: Any, design_id: str, source: DesignSource = "container"
) -> AnimationDesign:
    """
    Build a design from a manifest document.

    Accepts both camelCase and snake_case keys, and either a frame rate or a
    per-frame interval. The folder name wins over any id in the manifest.

    Raises:
        ValueError: If the manifest lacks a usable frame count
    """
    if not isinstance(document, dict):
        raise ValueError("Manifest must be a JSON object")

    frame_count = _first(document, "frameCount", "frame_count")
    if not isinstance(frame_count, int) or isinstance(frame_count, bool):
        raise ValueError(f"Manifest for {design_id} has no integer frameCount")

    frame_rate = _first(document, "frameRate", "frame_rate")
    if frame_rate is None:
        interval = _first(document, "frameInterval", "frameDuration", "frame_duration")
        frame_rate = 1.0 / float(interval) if interval else DEFAULT_FRAME_RATE

    name = _first(document, "name") or design_id.capitalize()
    return AnimationDesign(
        design_id=design_id,
        name=str(name),
        frame_count=frame_count,
        frame_rate=float(frame_rate),
        source=source,
    )


def _first(document: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if document.get(key) is not None:
            return document[key]
    return None

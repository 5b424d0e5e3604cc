"""Widget instance state: one persisted document per widget placement."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, TypedDict

from ..clock import from_iso, to_iso
from ..errors import InvalidInstanceState


class InstanceDocument(TypedDict):
    instanceId: str
    designId: str
    currentFrame: int
    isAnimating: bool
    animationStartTime: str | None
    lastInteraction: str


@dataclass(frozen=True)
class WidgetInstance:
    """
    Animation state of one widget placement.

    ``animation_start_time`` is set exactly when ``is_animating`` is true;
    construction fails otherwise, so no violating value can be saved.
    """

    instance_id: str
    design_id: str
    current_frame: int
    is_animating: bool
    animation_start_time: datetime | None
    last_interaction: datetime

    def __post_init__(self) -> None:
        if self.is_animating != (self.animation_start_time is not None):
            raise InvalidInstanceState(
                f"Instance {self.instance_id}: animation_start_time must be set "
                f"exactly when animating (is_animating={self.is_animating})"
            )
        if self.current_frame < 1:
            raise InvalidInstanceState(
                f"Instance {self.instance_id}: current_frame must be >= 1, "
                f"got {self.current_frame}"
            )

    @classmethod
    def new(cls, instance_id: str, design_id: str, now: datetime) -> "WidgetInstance":
        """A fresh idle instance showing the first frame."""
        return cls(
            instance_id=instance_id,
            design_id=design_id,
            current_frame=1,
            is_animating=False,
            animation_start_time=None,
            last_interaction=now,
        )

    def started(self, now: datetime) -> "WidgetInstance":
        return replace(
            self,
            current_frame=1,
            is_animating=True,
            animation_start_time=now,
            last_interaction=now,
        )

    def stopped(self, now: datetime) -> "WidgetInstance":
        return replace(
            self,
            current_frame=1,
            is_animating=False,
            animation_start_time=None,
            last_interaction=now,
        )

    def at_frame(self, frame: int, now: datetime) -> "WidgetInstance":
        return replace(self, current_frame=frame, last_interaction=now)

    def reassigned(self, design_id: str, frame_count: int | None, now: datetime) -> "WidgetInstance":
        """Move to another design, keeping identity and any in-flight animation."""
        frame = self.current_frame
        if frame_count is not None:
            frame = min(frame, frame_count)
        return replace(self, design_id=design_id, current_frame=frame, last_interaction=now)

    def to_document(self) -> InstanceDocument:
        return {
            "instanceId": self.instance_id,
            "designId": self.design_id,
            "currentFrame": self.current_frame,
            "isAnimating": self.is_animating,
            "animationStartTime": (
                to_iso(self.animation_start_time) if self.animation_start_time else None
            ),
            "lastInteraction": to_iso(self.last_interaction),
        }

    @classmethod
    def from_document(cls, document: Any) -> "WidgetInstance":
        """
        Decode a persisted document.

        Raises:
            ValueError: If fields are missing, mistyped or violate the invariants
        """
        if not isinstance(document, dict):
            raise ValueError("Instance document must be a JSON object")
        try:
            start = document.get("animationStartTime")
            current_frame = document["currentFrame"]
            is_animating = document["isAnimating"]
            if not isinstance(current_frame, int) or isinstance(current_frame, bool):
                raise ValueError(f"currentFrame must be an integer, got {current_frame!r}")
            if not isinstance(is_animating, bool):
                raise ValueError(f"isAnimating must be a boolean, got {is_animating!r}")
            return cls(
                instance_id=str(document["instanceId"]),
                design_id=str(document["designId"]),
                current_frame=current_frame,
                is_animating=is_animating,
                animation_start_time=from_iso(start) if start else None,
                last_interaction=from_iso(document["lastInteraction"]),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed instance document: {e}")

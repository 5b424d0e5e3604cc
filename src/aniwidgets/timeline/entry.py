"""Timeline payloads handed to the host scheduler."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal

PolicyKind = Literal["never", "at_end", "after"]


@dataclass(frozen=True)
class TimelineEntry:
    """One frame the host should render at or after ``date``."""

    date: datetime
    slot_index: int
    design_id: str | None
    frame_index: int
    instance_id: str | None
    is_animating: bool

    @property
    def is_placeholder(self) -> bool:
        return self.design_id is None


@dataclass(frozen=True)
class RefreshPolicy:
    """When the host should next ask for a timeline."""

    kind: PolicyKind
    seconds: float | None = None

    @classmethod
    def never(cls) -> "RefreshPolicy":
        return cls("never")

    @classmethod
    def at_end(cls) -> "RefreshPolicy":
        return cls("at_end")

    @classmethod
    def after(cls, seconds: float) -> "RefreshPolicy":
        if seconds <= 0:
            raise ValueError(f"Refresh delay must be positive, got {seconds}")
        return cls("after", seconds)

    def __str__(self) -> str:
        if self.kind == "after":
            return f"after({self.seconds:g}s)"
        return self.kind


@dataclass(frozen=True)
class Timeline:
    entries: tuple[TimelineEntry, ...]
    policy: RefreshPolicy

    def next_refresh(self, now: datetime) -> datetime | None:
        """
        Time at which the host should call again, or ``None`` to wait for a
        reload signal.
        """
        if self.policy.kind == "never":
            return None
        if self.policy.kind == "at_end":
            return self.entries[-1].date if self.entries else now
        return now + timedelta(seconds=self.policy.seconds or 0.0)

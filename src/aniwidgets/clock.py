"""Wall-clock helpers shared by every component that stamps or compares times."""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Serialize an aware datetime as ISO-8601 in UTC."""
    return value.astimezone(timezone.utc).isoformat()


def from_iso(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp; naive values are taken to be UTC.

    A trailing ``Z`` (as written by Foundation's ISO-8601 encoder) is accepted.
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)

"""Cross-process "please re-poll timelines of kind K" signals."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from .clock import Clock, from_iso, to_iso, utc_now
from .errors import DecodeFailure, IOFailure, NotFoundError
from .storage import SharedContainer, layout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReloadRequest:
    kind: str
    requested_at: datetime
    reason: str


class ReloadCenter:
    """
    Raises and consumes reload requests through the shared container.

    Each widget kind has its own signal document, so raising a signal for one
    kind never overwrites a pending signal for another. Raising a signal for a
    kind that already has one pending simply refreshes its timestamp.
    """

    def __init__(self, container: SharedContainer, kinds: Iterable[str], clock: Clock = utc_now):
        self.container = container
        self.kinds = tuple(kinds)
        self.clock = clock

    def reload_timelines(self, kind: str, reason: str = "") -> bool:
        """Ask the host to re-poll every widget of ``kind``; False on I/O failure."""
        document = {"kind": kind, "requestedAt": to_iso(self.clock()), "reason": reason}
        try:
            self.container.write_json(layout.signal_path(kind), document)
        except IOFailure as e:
            logger.error("Failed to raise reload signal for %s: %s", kind, e)
            return False
        logger.info("Reload requested for %s%s", kind, f" ({reason})" if reason else "")
        return True

    def reload_all_timelines(self, reason: str = "") -> bool:
        results = [self.reload_timelines(kind, reason) for kind in self.kinds]
        return all(results)

    def pending(self, kind: str) -> ReloadRequest | None:
        """The outstanding request for ``kind``, if any."""
        path = layout.signal_path(kind)
        try:
            document = self.container.read_json(path)
            return ReloadRequest(
                kind=document["kind"],
                requested_at=from_iso(document["requestedAt"]),
                reason=document.get("reason", ""),
            )
        except NotFoundError:
            return None
        except (DecodeFailure, KeyError, TypeError, AttributeError, ValueError) as e:
            logger.warning("Ignoring malformed reload signal %s: %s", path, e)
            return ReloadRequest(kind=kind, requested_at=self.clock(), reason="malformed signal")
        except IOFailure as e:
            logger.error("Failed to read reload signal for %s: %s", kind, e)
            return None

    def consume(self, kind: str) -> ReloadRequest | None:
        """Take the outstanding request for ``kind``, clearing it."""
        request = self.pending(kind)
        if request is None:
            return None
        try:
            self.container.delete(layout.signal_path(kind))
        except IOFailure as e:
            logger.error("Failed to clear reload signal for %s: %s", kind, e)
        return request

    def pending_kinds(self) -> list[str]:
        return [kind for kind in self.kinds if self.pending(kind) is not None]

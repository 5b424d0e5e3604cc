"""Error taxonomy for the shared container and the state built on it."""


class StoreError(Exception):
    """Base class for shared container failures."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class NotFoundError(StoreError):
    """Document or asset does not exist."""

    def __init__(self, path: str):
        super().__init__(path, "File not found")


class DecodeFailure(StoreError):
    """Document exists but is not valid JSON or has the wrong shape."""

    def __init__(self, path: str, reason: str = "invalid data"):
        super().__init__(path, f"Failed to decode ({reason})")
        self.reason = reason


class IOFailure(StoreError):
    """Permission, disk or other OS level failure."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(path, f"I/O error ({cause.strerror or cause})")
        self.cause = cause


class InvalidInstanceState(ValueError):
    """Instance fields violate the animating/start-time invariant."""

"""Runtime settings loaded from the environment (and an optional .env file)."""

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

from .constants import FRAME_INTERVAL, INSTANCE_RETENTION_DAYS

DEFAULT_HOME = Path("~/.aniwidgets")
DEFAULT_STRATEGY = "precomputed"


@dataclass(frozen=True)
class Settings:
    """Paths and policies shared by every process of a deployment."""

    container_dir: Path
    cache_dir: Path
    bundle_dir: Path | None = None
    strategy: str = DEFAULT_STRATEGY
    retention_days: int = INSTANCE_RETENTION_DAYS
    frame_interval: float = FRAME_INTERVAL

    def with_overrides(self, **overrides: object) -> "Settings":
        """Return a copy with the non-None overrides applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def load_settings(env_file: str | None = None) -> Settings:
    """
    Build settings from ``ANIWIDGETS_*`` environment variables.

    Args:
        env_file: Optional path of a dotenv file; defaults to ``.env`` lookup

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    load_dotenv(env_file)

    container = os.getenv("ANIWIDGETS_CONTAINER")
    cache = os.getenv("ANIWIDGETS_CACHE")
    bundle = os.getenv("ANIWIDGETS_BUNDLE")

    return Settings(
        container_dir=_expand(container) if container else _expand(DEFAULT_HOME / "container"),
        cache_dir=_expand(cache) if cache else _expand(DEFAULT_HOME / "cache"),
        bundle_dir=_expand(bundle) if bundle else None,
        strategy=os.getenv("ANIWIDGETS_STRATEGY", DEFAULT_STRATEGY),
        retention_days=_env_number("ANIWIDGETS_RETENTION_DAYS", INSTANCE_RETENTION_DAYS, int),
        frame_interval=_env_number("ANIWIDGETS_FRAME_INTERVAL", FRAME_INTERVAL, float),
    )


def _expand(path: str | Path) -> Path:
    return Path(path).expanduser()


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value

"""Shared fixtures for aniwidgets tests."""

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator

import pytest

from aniwidgets.config import Settings
from aniwidgets.designs import AnimationDesign
from aniwidgets.services import Services, build_services
from aniwidgets.storage import SharedContainer, layout

ENV_NAMES = (
    "ANIWIDGETS_CONTAINER",
    "ANIWIDGETS_CACHE",
    "ANIWIDGETS_BUNDLE",
    "ANIWIDGETS_STRATEGY",
    "ANIWIDGETS_RETENTION_DAYS",
    "ANIWIDGETS_FRAME_INTERVAL",
)

T0 = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced time, usable as wall clock and as ``sched`` time source."""

    def __init__(self, start: datetime = T0):
        self.current = start
        self.elapsed = 0.0

    def __call__(self) -> datetime:
        return self.current

    def monotonic(self) -> float:
        return self.elapsed

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)
        self.elapsed += seconds

    def sleep(self, seconds: float) -> None:
        self.advance(seconds)


def add_design(container: SharedContainer, design_id: str, frame_count: int = 24) -> AnimationDesign:
    """Publish a design manifest without rendering any frames."""
    design = AnimationDesign(design_id=design_id, name=design_id.title(), frame_count=frame_count)
    container.write_json(layout.design_manifest_path(design_id), design.to_manifest())
    return design


def make_services(
    tmp_path: Path, clock: FakeClock, strategy: str = "precomputed", bundle: bool = False
) -> Services:
    settings = Settings(
        container_dir=tmp_path / "container",
        cache_dir=tmp_path / "cache",
        bundle_dir=tmp_path / "bundle" if bundle else None,
        strategy=strategy,
    )
    return build_services(settings, clock=clock)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Hide the developer's settings and drop whatever a loaded .env file set."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    yield
    for name in ENV_NAMES:
        os.environ.pop(name, None)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def container(tmp_path: Path) -> SharedContainer:
    return SharedContainer(tmp_path / "container")


@pytest.fixture
def cache(tmp_path: Path) -> SharedContainer:
    return SharedContainer(tmp_path / "cache")


@pytest.fixture
def bundle(tmp_path: Path) -> SharedContainer:
    return SharedContainer(tmp_path / "bundle")


@pytest.fixture
def broken_container(tmp_path: Path) -> SharedContainer:
    """A container whose root is a regular file, so every write fails."""
    root = tmp_path / "not-a-directory"
    root.write_text("occupied")
    return SharedContainer(root)


@pytest.fixture
def services(tmp_path: Path, clock: FakeClock) -> Services:
    return make_services(tmp_path, clock)

"""Tests for the instance state repository."""

import re
from datetime import timedelta

from aniwidgets.state import InstanceRepository, WidgetInstance
from aniwidgets.state.repository import new_instance_id
from aniwidgets.storage import SharedContainer, layout

from conftest import T0, FakeClock


def test_new_instance_ids_are_uppercase_uuids() -> None:
    first, second = new_instance_id(), new_instance_id()

    assert first != second
    assert re.fullmatch(r"[0-9A-F]{8}-[0-9A-F]{4}-4[0-9A-F]{3}-[0-9A-F]{4}-[0-9A-F]{12}", first)


def test_create_persists_idle_instance(container: SharedContainer, clock: FakeClock) -> None:
    repository = InstanceRepository(container, clock=clock, id_factory=lambda: "INST-1")

    created = repository.create("cat")

    assert created == WidgetInstance.new("INST-1", "cat", T0)
    assert container.exists(layout.instance_state_path("INST-1"))
    assert repository.load("INST-1") == created


def test_load_returns_none_for_missing_corrupt_or_invalid(container: SharedContainer) -> None:
    """Reads never raise; anything unusable is reported as None."""
    repository = InstanceRepository(container)
    container.write(layout.instance_state_path("CORRUPT"), b"{{{")
    container.write_json(
        layout.instance_state_path("VIOLATING"),
        {
            "instanceId": "VIOLATING",
            "designId": "cat",
            "currentFrame": 1,
            "isAnimating": True,
            "animationStartTime": None,
            "lastInteraction": "2025-03-01T12:00:00+00:00",
        },
    )

    assert repository.load("MISSING") is None
    assert repository.load("CORRUPT") is None
    assert repository.load("VIOLATING") is None
    assert repository.load("../escape") is None


def test_save_overwrites_whole_document(container: SharedContainer, clock: FakeClock) -> None:
    repository = InstanceRepository(container, clock=clock, id_factory=lambda: "INST-1")
    instance = repository.create("cat")

    clock.advance(5)
    assert repository.save(instance.started(clock()))

    loaded = repository.load("INST-1")
    assert loaded is not None
    assert loaded.is_animating
    assert loaded.animation_start_time == T0 + timedelta(seconds=5)


def test_save_failure_returns_false(broken_container: SharedContainer) -> None:
    repository = InstanceRepository(broken_container)

    assert repository.save(WidgetInstance.new("INST-1", "cat", T0)) is False


def test_create_still_returns_instance_when_write_fails(broken_container: SharedContainer) -> None:
    repository = InstanceRepository(broken_container, id_factory=lambda: "INST-1")

    instance = repository.create("cat")

    assert instance.instance_id == "INST-1"
    assert repository.load("INST-1") is None


def test_list_all_skips_unreadable_documents(container: SharedContainer, clock: FakeClock) -> None:
    ids = iter(["A", "B"])
    repository = InstanceRepository(container, clock=clock, id_factory=lambda: next(ids))
    repository.create("cat")
    repository.create("dog")
    container.write(layout.instance_state_path("C"), b"garbage")

    assert [instance.instance_id for instance in repository.list_all()] == ["A", "B"]
    assert [instance.instance_id for instance in repository.instances_for_design("dog")] == ["B"]


def test_delete_removes_document(container: SharedContainer, clock: FakeClock) -> None:
    repository = InstanceRepository(container, clock=clock, id_factory=lambda: "INST-1")
    repository.create("cat")

    assert repository.delete("INST-1")
    assert repository.load("INST-1") is None


class TestCleanupStale:
    """Instances untouched for longer than the retention window are purged."""

    def test_purges_only_old_instances(self, container: SharedContainer, clock: FakeClock) -> None:
        ids = iter(["OLD", "FRESH"])
        repository = InstanceRepository(container, clock=clock, id_factory=lambda: next(ids))
        repository.create("cat")
        clock.advance(timedelta(days=20).total_seconds())
        repository.create("dog")
        clock.advance(timedelta(days=15).total_seconds())

        purged = repository.cleanup_stale(timedelta(days=30))

        assert purged == ["OLD"]
        assert [instance.instance_id for instance in repository.list_all()] == ["FRESH"]

    def test_nothing_to_purge(self, container: SharedContainer, clock: FakeClock) -> None:
        repository = InstanceRepository(container, clock=clock, id_factory=lambda: "A")
        repository.create("cat")

        assert repository.cleanup_stale(timedelta(days=30), now=T0 + timedelta(days=1)) == []

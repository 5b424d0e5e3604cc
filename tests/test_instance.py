"""Tests for widget instance state."""

from datetime import timedelta

import pytest

from aniwidgets.clock import from_iso
from aniwidgets.errors import InvalidInstanceState
from aniwidgets.state import WidgetInstance

from conftest import T0


def make_instance(**overrides) -> WidgetInstance:
    fields = dict(
        instance_id="INST-1",
        design_id="cat",
        current_frame=1,
        is_animating=False,
        animation_start_time=None,
        last_interaction=T0,
    )
    fields.update(overrides)
    return WidgetInstance(**fields)


class TestAnimatingInvariant:
    """An instance animates exactly when it has a start time."""

    def test_animating_without_start_time_is_rejected(self) -> None:
        with pytest.raises(InvalidInstanceState):
            make_instance(is_animating=True, animation_start_time=None)

    def test_start_time_while_idle_is_rejected(self) -> None:
        with pytest.raises(InvalidInstanceState):
            make_instance(is_animating=False, animation_start_time=T0)

    def test_frame_below_one_is_rejected(self) -> None:
        with pytest.raises(InvalidInstanceState):
            make_instance(current_frame=0)

    def test_transitions_keep_invariant(self) -> None:
        """started/stopped move both fields together and stamp the interaction."""
        idle = make_instance(current_frame=5)
        later = T0 + timedelta(seconds=30)

        running = idle.started(later)
        assert running.is_animating and running.animation_start_time == later
        assert running.current_frame == 1
        assert running.last_interaction == later

        stopped = running.stopped(later + timedelta(seconds=13))
        assert not stopped.is_animating
        assert stopped.animation_start_time is None
        assert stopped.current_frame == 1

    def test_invalid_state_is_a_value_error(self) -> None:
        assert issubclass(InvalidInstanceState, ValueError)


def test_reassigned_keeps_identity_and_clamps_frame() -> None:
    instance = make_instance(current_frame=20, is_animating=True, animation_start_time=T0)

    moved = instance.reassigned("dog", frame_count=8, now=T0 + timedelta(seconds=1))

    assert moved.instance_id == instance.instance_id
    assert moved.design_id == "dog"
    assert moved.current_frame == 8
    assert moved.is_animating
    assert moved.animation_start_time == T0


def test_document_uses_camel_case_keys() -> None:
    instance = make_instance(is_animating=True, animation_start_time=T0)

    document = instance.to_document()

    assert set(document) == {
        "instanceId",
        "designId",
        "currentFrame",
        "isAnimating",
        "animationStartTime",
        "lastInteraction",
    }
    assert from_iso(document["animationStartTime"]) == T0
    assert WidgetInstance.from_document(document) == instance


def test_from_document_accepts_zulu_timestamps() -> None:
    """Timestamps written with a trailing Z decode as UTC."""
    document = {
        "instanceId": "INST-1",
        "designId": "cat",
        "currentFrame": 3,
        "isAnimating": False,
        "animationStartTime": None,
        "lastInteraction": "2025-03-01T12:00:00Z",
    }

    instance = WidgetInstance.from_document(document)

    assert instance.last_interaction == T0
    assert instance.current_frame == 3


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"instanceId": "X"},
        {
            "instanceId": "X",
            "designId": "cat",
            "currentFrame": "1",
            "isAnimating": False,
            "lastInteraction": "2025-03-01T12:00:00+00:00",
        },
        {
            "instanceId": "X",
            "designId": "cat",
            "currentFrame": 1,
            "isAnimating": True,
            "animationStartTime": None,
            "lastInteraction": "2025-03-01T12:00:00+00:00",
        },
        {
            "instanceId": "X",
            "designId": "cat",
            "currentFrame": 1,
            "isAnimating": False,
            "lastInteraction": 12,
        },
    ],
)
def test_from_document_rejects_malformed(document) -> None:
    with pytest.raises(ValueError):
        WidgetInstance.from_document(document)

"""Tests for the aniwidgets CLI."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from aniwidgets.cli import app
from aniwidgets.state import InstanceRepository
from aniwidgets.storage import SharedContainer, layout
from aniwidgets.widgets import supported_widget_kinds

runner = CliRunner()


@pytest.fixture
def cli(tmp_path: Path):
    """Invoke the CLI against a container and cache under ``tmp_path``."""
    base = [
        "--container", str(tmp_path / "container"),
        "--cache", str(tmp_path / "cache"),
        "--env-file", str(tmp_path / "none.env"),
    ]

    def invoke(*args: str):
        return runner.invoke(app, [*base, *args])

    return invoke


def test_provision_and_feature(cli, container: SharedContainer) -> None:
    result = cli("provision", "cat", "--frames", "3", "--feature")

    assert result.exit_code == 0, result.output
    assert container.exists(layout.design_manifest_path("cat"))
    assert container.read_json(layout.FEATURED_CONFIG_PATH)["designs"] == ["cat"]


def test_feature_unknown_design_fails(cli) -> None:
    result = cli("featured", "add", "ghost")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_fifth_featured_design_fails(cli) -> None:
    for design_id in ["a", "b", "c", "d", "e"]:
        assert cli("provision", design_id, "--frames", "1").exit_code == 0
    for design_id in ["a", "b", "c", "d"]:
        assert cli("featured", "add", design_id).exit_code == 0

    result = cli("featured", "add", "e")

    assert result.exit_code == 1
    assert "Could not feature" in result.output


def test_featured_move_and_remove(cli, container: SharedContainer) -> None:
    for design_id in ["a", "b"]:
        cli("provision", design_id, "--frames", "1", "--feature")

    assert cli("featured", "move", "A", "B").exit_code == 0
    assert container.read_json(layout.FEATURED_CONFIG_PATH)["designs"] == ["b", "a"]

    assert cli("featured", "remove", "b").exit_code == 0
    assert cli("featured", "remove", "b").exit_code == 1
    assert cli("featured", "list").exit_code == 0


def test_start_slot(cli, container: SharedContainer) -> None:
    cli("provision", "cat", "--frames", "2", "--feature")

    result = cli("start", "A")

    assert result.exit_code == 0, result.output
    (instance,) = InstanceRepository(container).list_all()
    assert instance.is_animating
    assert cli("start", "0").exit_code == 0
    assert cli("timeline", "A").exit_code == 0


def test_start_empty_slot_fails(cli) -> None:
    result = cli("start", "C")

    assert result.exit_code == 1
    assert "no featured design" in result.output


def test_invalid_slot(cli) -> None:
    result = cli("timeline", "Z")

    assert result.exit_code == 1
    assert "Invalid slot" in result.output


def test_unknown_strategy(cli) -> None:
    result = cli("--strategy", "bogus", "designs")

    assert result.exit_code == 1
    assert "Unknown strategy" in result.output


def test_frame_export_uses_placeholder(cli, tmp_path: Path) -> None:
    out = tmp_path / "frame.png"

    result = cli("frame", "ghost", "1", str(out))

    assert result.exit_code == 0, result.output
    assert out.read_bytes().startswith(b"\x89PNG")


def test_reload_raises_signals(cli, container: SharedContainer) -> None:
    assert cli("reload", "B").exit_code == 0
    assert container.exists(layout.signal_path("FeaturedWidgetSlotB"))

    assert cli("reload").exit_code == 0
    for kind in supported_widget_kinds():
        assert container.exists(layout.signal_path(kind))


def test_maintenance_commands(cli) -> None:
    cli("provision", "cat", "--frames", "1", "--feature")
    cli("provision", "dog", "--frames", "1")
    cli("timeline", "A")

    assert cli("designs").exit_code == 0
    assert cli("instances").exit_code == 0
    assert cli("stats").exit_code == 0

    result = cli("cleanup", "--designs")

    assert result.exit_code == 0, result.output
    assert "Removed 0 stale instance(s)" in result.output
    assert "Removed 1 unused design(s)" in result.output


def test_reorder_reports_failed_save(tmp_path: Path) -> None:
    blocked = tmp_path / "blocked"
    blocked.write_text("not a directory")

    result = runner.invoke(
        app,
        [
            "--container", str(blocked),
            "--cache", str(tmp_path / "cache"),
            "--env-file", str(tmp_path / "none.env"),
            "featured", "reorder", "cat",
        ],
    )

    assert result.exit_code == 1
    assert "Could not save" in result.output

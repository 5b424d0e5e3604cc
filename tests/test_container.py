"""Tests for the shared container."""

import pytest

from aniwidgets.errors import DecodeFailure, IOFailure, NotFoundError, StoreError
from aniwidgets.storage import SharedContainer


def test_write_then_read_blob(container: SharedContainer) -> None:
    """Blobs are readable after a write, with parent directories created."""
    container.write("Designs/cat/frames/frame_01.png", b"\x89PNG data")

    assert container.read("Designs/cat/frames/frame_01.png") == b"\x89PNG data"
    assert container.exists("Designs/cat/frames/frame_01.png")


def test_read_missing_raises_not_found(container: SharedContainer) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        container.read("State/instances/nope.json")

    assert exc_info.value.path == "State/instances/nope.json"
    assert isinstance(exc_info.value, StoreError)


def test_read_json_corrupt_raises_decode_failure(container: SharedContainer) -> None:
    """A document that is not JSON is a decode failure, not a missing document."""
    container.write("Config/featured.json", b"{not json")

    with pytest.raises(DecodeFailure):
        container.read_json("Config/featured.json")


def test_write_replaces_whole_document_without_temp_files(container: SharedContainer) -> None:
    container.write_json("State/slots.json", {"slots": {"0": "A", "1": "B"}})
    container.write_json("State/slots.json", {"slots": {}})

    assert container.read_json("State/slots.json") == {"slots": {}}
    leftovers = [p.name for p in (container.root / "State").iterdir() if p.name != "slots.json"]
    assert leftovers == []


def test_write_json_is_pretty_printed(container: SharedContainer) -> None:
    container.write_json("Config/featured.json", {"maxCount": 4, "designs": []})

    text = (container.root / "Config" / "featured.json").read_text()
    assert text.endswith("\n")
    assert text.index('"designs"') < text.index('"maxCount"')


def test_list_files_filters_suffix_and_hidden(container: SharedContainer) -> None:
    """Hidden in-progress temp files never show up in listings."""
    container.write("State/instances/B.json", b"{}")
    container.write("State/instances/A.json", b"{}")
    container.write("State/instances/notes.txt", b"")
    (container.root / "State" / "instances" / ".A.json.123.tmp").write_bytes(b"")

    assert container.list_files("State/instances", suffix=".json") == [
        "State/instances/A.json",
        "State/instances/B.json",
    ]
    assert container.list_files("Missing") == []


def test_list_dirs(container: SharedContainer) -> None:
    container.write("Designs/cat/manifest.json", b"{}")
    container.write("Designs/astro/manifest.json", b"{}")
    container.write("Designs/readme.txt", b"")

    assert container.list_dirs("Designs") == ["astro", "cat"]
    assert container.list_dirs("Nothing") == []


def test_delete_is_idempotent(container: SharedContainer) -> None:
    container.write("Signals/kind.json", b"{}")

    container.delete("Signals/kind.json")
    container.delete("Signals/kind.json")

    assert not container.exists("Signals/kind.json")


def test_remove_tree_and_size(container: SharedContainer) -> None:
    container.write("Designs/cat/frames/frame_01.png", b"12345")
    container.write("Designs/cat/manifest.json", b"123")
    container.write("Config/featured.json", b"12")

    assert container.size("Designs") == 8
    assert container.size() == 10

    container.remove_tree("Designs/cat")

    assert container.list_dirs("Designs") == []
    assert container.size("Designs") == 0
    container.remove_tree("Designs/cat")


@pytest.mark.parametrize("path", ["../escape.json", "/etc/passwd", ""])
def test_resolve_rejects_paths_outside_container(container: SharedContainer, path: str) -> None:
    with pytest.raises(ValueError):
        container.resolve(path)


def test_write_failure_raises_io_failure(broken_container: SharedContainer) -> None:
    """OS errors surface as IOFailure carrying the logical path."""
    with pytest.raises(IOFailure) as exc_info:
        broken_container.write_json("Config/featured.json", {"designs": []})

    assert exc_info.value.path == "Config/featured.json"
    assert isinstance(exc_info.value.cause, OSError)

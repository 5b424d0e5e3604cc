"""Tests for frame asset resolution."""

from aniwidgets.designs import FrameAssetResolver
from aniwidgets.storage import SharedContainer, layout

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def test_cache_hit_wins_over_container(container: SharedContainer, cache: SharedContainer) -> None:
    """The cache tier is consulted first and short-circuits the lookup."""
    container.write(layout.frame_image_path("cat", 3), b"container bytes")
    cache.write("cat/frame_03.png", b"cached bytes")
    resolver = FrameAssetResolver(container, cache)

    assert resolver.resolve("cat", 3) == b"cached bytes"


def test_container_hit_populates_cache(container: SharedContainer, cache: SharedContainer) -> None:
    container.write(layout.frame_image_path("cat", 12), b"frame twelve")
    resolver = FrameAssetResolver(container, cache)

    assert resolver.resolve("cat", 12) == b"frame twelve"
    assert cache.read("cat/frame_12.png") == b"frame twelve"

    container.delete(layout.frame_image_path("cat", 12))
    assert resolver.resolve("cat", 12) == b"frame twelve"


def test_bundle_fallback_only_for_sentinel_design(
    container: SharedContainer, cache: SharedContainer, bundle: SharedContainer
) -> None:
    bundle.write("frame_01.png", b"bundled")
    resolver = FrameAssetResolver(container, cache, bundle, sentinel_design_id="test01")

    assert resolver.resolve("test01", 1) == b"bundled"
    assert resolver.resolve("cat", 1) is None


def test_missing_frame_resolves_to_none(container: SharedContainer, cache: SharedContainer) -> None:
    resolver = FrameAssetResolver(container, cache)

    assert resolver.resolve("cat", 1) is None
    assert resolver.resolve("../cat", 1) is None
    assert cache.list_files("cat") == []


def test_placeholder_fallback_is_png(container: SharedContainer, cache: SharedContainer) -> None:
    resolver = FrameAssetResolver(container, cache)

    assert resolver.resolve_or_placeholder("cat", 4).startswith(PNG_MAGIC)
    assert resolver.resolve_or_placeholder(None, 1, label="Slot A").startswith(PNG_MAGIC)


def test_resolve_or_placeholder_prefers_real_frame(container: SharedContainer, cache: SharedContainer) -> None:
    container.write(layout.frame_image_path("cat", 1), b"real")
    resolver = FrameAssetResolver(container, cache)

    assert resolver.resolve_or_placeholder("cat", 1) == b"real"


def test_unwritable_cache_still_returns_frame(container: SharedContainer, broken_container: SharedContainer) -> None:
    container.write(layout.frame_image_path("cat", 2), b"frame two")
    resolver = FrameAssetResolver(container, broken_container)

    assert resolver.resolve("cat", 2) == b"frame two"

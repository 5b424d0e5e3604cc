"""Well-known logical paths inside the shared container."""

from ..constants import FRAME_FILE_TEMPLATE

DESIGNS_DIR = "Designs"
STATE_DIR = "State"
INSTANCES_DIR = f"{STATE_DIR}/instances"
CONFIG_DIR = "Config"
SIGNALS_DIR = "Signals"

FEATURED_CONFIG_PATH = f"{CONFIG_DIR}/featured.json"
SLOT_MAP_PATH = f"{STATE_DIR}/slots.json"
MANIFEST_NAME = "manifest.json"


def checked_id(identifier: str) -> str:
    """Reject ids that would not map onto a single path component."""
    if not identifier or identifier in (".", "..") or "/" in identifier or "\\" in identifier:
        raise ValueError(f"Invalid identifier: {identifier!r}")
    return identifier


def frame_file_name(frame_index: int) -> str:
    """Zero-padded two digit frame file name, e.g. ``frame_07.png``."""
    return FRAME_FILE_TEMPLATE.format(frame_index)


def design_dir(design_id: str) -> str:
    return f"{DESIGNS_DIR}/{checked_id(design_id)}"


def design_frames_dir(design_id: str) -> str:
    return f"{design_dir(design_id)}/frames"


def design_manifest_path(design_id: str) -> str:
    return f"{design_dir(design_id)}/{MANIFEST_NAME}"


def frame_image_path(design_id: str, frame_index: int) -> str:
    return f"{design_frames_dir(design_id)}/{frame_file_name(frame_index)}"


def instance_state_path(instance_id: str) -> str:
    return f"{INSTANCES_DIR}/{checked_id(instance_id)}.json"


def signal_path(kind: str) -> str:
    return f"{SIGNALS_DIR}/{checked_id(kind)}.json"

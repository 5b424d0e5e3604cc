"""Global constants for the application."""

# Featured registry
MAX_FEATURED_DESIGNS = 4  # Number of featured slots (one widget kind per slot)

# Animation timeline (seconds)
TOTAL_FRAMES = 24  # Frames shown per animation run
FRAME_INTERVAL = 0.5  # Seconds between timeline entries
RESET_PAD = 1.0  # Extra delay before the terminal reset entry
START_GRACE = 2.0  # Start lag treated as process delay and clamped to "now"
STEP_DELAY = 0.1  # Re-invoke delay for the stepped strategy
EMPTY_SLOT_RECHECK = 300.0  # Seconds before re-polling a slot with no design

# Designs
DEFAULT_FRAME_RATE = 10.0  # Frames per second when a manifest omits it
FRAME_FILE_TEMPLATE = "frame_{:02d}.png"
SENTINEL_DESIGN_ID = "test01"  # Only design with bundled fallback frames
PLACEHOLDER_SIZE = (300, 300)
PLACEHOLDER_BACKGROUND = (199, 199, 204)
PLACEHOLDER_TEXT = (142, 142, 147)

# Instance maintenance
INSTANCE_RETENTION_DAYS = 30  # Instances untouched this long are purged

# Slot names shown on empty-slot placeholders
SLOT_NAMES = ("A", "B", "C", "D")

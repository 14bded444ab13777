"""Shared control-layer constants — single source of truth.

Centralises the literal values that form the observable contract of the
control layer: status colours, user-facing messages, progress markers,
area thresholds and the job-parameter defaults.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Status colours (hex codes; empty string means the view's default colour)
# ---------------------------------------------------------------------------

COLOR_ERROR: str = "#fa7878"
COLOR_WARNING: str = "#fecc44"
COLOR_SUCCESS: str = "#7bd864"
COLOR_NEUTRAL: str = ""

# ---------------------------------------------------------------------------
# Area thresholds (square metres)
# ---------------------------------------------------------------------------

LARGE_AREA_THRESHOLD_M2: float = 12332660.00
"""Areas at or above this are classified ``LARGE``."""

TOO_LARGE_AREA_THRESHOLD_M2: float = 36084700.00
"""Areas at or above this are classified ``TOO_LARGE``."""

EARTH_RADIUS_M: float = 6_371_000.0

# ---------------------------------------------------------------------------
# Generation job parameters
# ---------------------------------------------------------------------------

DEFAULT_FLOODFILL_TIMEOUT_S: int = 20
DEFAULT_GROUND_LEVEL: int = 20
MIN_GROUND_LEVEL: int = -62
DEFAULT_WORLD_SCALE: float = 1.0

# ---------------------------------------------------------------------------
# Progress stream markers
# ---------------------------------------------------------------------------

ERROR_MARKER: str = "Error!"
SUCCESS_MARKER: str = "Done!"

UNCHANGED_PERCENT: float = -1
"""Wire value of ``progress`` meaning "leave the displayed percent as is"."""

# ---------------------------------------------------------------------------
# User-facing messages
# ---------------------------------------------------------------------------

MSG_FORMAT_INVALID = "Invalid format. Please use 'lat,lng,lat,lng' or 'lat lng lat lng'."
MSG_RANGE_OR_ORDER_INVALID = (
    "Error: Coordinates are out of range or incorrectly ordered (Lat before Lng required)."
)
MSG_CUSTOM_SELECTION_CONFIRMED = "Custom selection confirmed!"
MSG_SELECTION_CONFIRMED = "Selection confirmed!"
MSG_AREA_LARGE = "The area is quite extensive and may take significant time and resources."
MSG_AREA_TOO_LARGE = "This area is very large and could exceed typical calculation limits."
MSG_SELECT_LOCATION_FIRST = "Please select a location first!"
MSG_SELECT_TARGET_FIRST = "Please select a Minecraft world first!"

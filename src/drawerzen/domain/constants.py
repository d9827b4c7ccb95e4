"""Layout constants.

All linear values are millimeters unless the name says otherwise.
"""

from __future__ import annotations

# Grid pitch: every placement snaps to a 21mm cell.
GRID_PITCH_MM: float = 21.0

MM_PER_INCH: float = 25.4

DEFAULT_BIN_HEIGHT_MM: float = 21.0

# Default bin size constraints
MIN_BIN_WIDTH_MM: float = 21.0
MAX_BIN_WIDTH_MM: float = 420.0
MIN_BIN_LENGTH_MM: float = 21.0
MAX_BIN_LENGTH_MM: float = 420.0
MIN_BIN_AREA_MM2: float = 882.0

# Gap fill limits
DEFAULT_MIN_GAP_CELLS: int = 2
MAX_FILL_ITERATIONS: int = 200

# Cell pixel size bounds for the viewport fit routine
MIN_CELL_PIXELS: float = 12.0
MAX_CELL_PIXELS: float = 80.0
FALLBACK_CELL_PIXELS: float = 20.0

DEFAULT_BIN_COLOR: str = "#F5E6C8"
DEFAULT_COLORWAY: str = "cream"

# Standard sizes offered to gap fill, (width, length) largest area first
STANDARD_BIN_SIZES_MM: tuple[tuple[float, float], ...] = (
    (84.0, 84.0),
    (84.0, 63.0),
    (63.0, 63.0),
    (84.0, 42.0),
    (63.0, 42.0),
    (42.0, 42.0),
    (84.0, 21.0),
    (63.0, 21.0),
    (42.0, 21.0),
)

# Colors assigned to auto-generated bins, cycled by creation order
AUTO_BIN_PALETTE: tuple[str, ...] = (
    "#F5E6C8",
    "#90CAF9",
    "#A5D6A7",
    "#FFCC80",
    "#CE93D8",
    "#80CBC4",
    "#EF9A9A",
    "#B0BEC5",
)

# Colorways: (id, bin color, bed color)
COLORWAYS: tuple[tuple[str, str, str], ...] = (
    ("cream", "#F5E6C8", "#4A4A58"),
    ("blue", "#1A237E", "#90CAF9"),
    ("black", "#222222", "#B2FF59"),
)

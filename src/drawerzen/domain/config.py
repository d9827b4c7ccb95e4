"""Engine configuration.

Configuration is an explicit value handed to every component at
construction. Nothing in the engine reads module-level mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import (
    AUTO_BIN_PALETTE,
    COLORWAYS,
    DEFAULT_BIN_COLOR,
    DEFAULT_BIN_HEIGHT_MM,
    DEFAULT_COLORWAY,
    DEFAULT_MIN_GAP_CELLS,
    GRID_PITCH_MM,
    MAX_BIN_LENGTH_MM,
    MAX_BIN_WIDTH_MM,
    MAX_FILL_ITERATIONS,
    MIN_BIN_AREA_MM2,
    MIN_BIN_LENGTH_MM,
    MIN_BIN_WIDTH_MM,
    STANDARD_BIN_SIZES_MM,
)
from .value_objects import CatalogSize, Colorway


@dataclass(frozen=True)
class BinConstraints:
    """Allowed bin dimensions.

    Attributes:
        min_width: Minimum width in millimeters.
        max_width: Maximum width in millimeters.
        min_length: Minimum length in millimeters.
        max_length: Maximum length in millimeters.
        min_area: Minimum footprint area in square millimeters.
    """

    min_width: float = MIN_BIN_WIDTH_MM
    max_width: float = MAX_BIN_WIDTH_MM
    min_length: float = MIN_BIN_LENGTH_MM
    max_length: float = MAX_BIN_LENGTH_MM
    min_area: float = MIN_BIN_AREA_MM2

    def __post_init__(self) -> None:
        if self.min_width <= 0 or self.min_length <= 0:
            raise ValueError("Minimum bin dimensions must be positive")
        if self.max_width < self.min_width:
            raise ValueError("max_width must be at least min_width")
        if self.max_length < self.min_length:
            raise ValueError("max_length must be at least min_length")
        if self.min_area < 0:
            raise ValueError("Minimum area must be non-negative")

    def allows(self, width: float, length: float) -> bool:
        """Check a width/length pair in millimeters against the table."""
        return (
            self.min_width <= width <= self.max_width
            and self.min_length <= length <= self.max_length
            and width * length >= self.min_area
        )


def _default_catalog_sizes() -> tuple[CatalogSize, ...]:
    return tuple(
        CatalogSize(width=width, length=length)
        for width, length in STANDARD_BIN_SIZES_MM
    )


def _default_colorways() -> tuple[Colorway, ...]:
    return tuple(
        Colorway(id=colorway_id, bin=bin_color, bed=bed_color)
        for colorway_id, bin_color, bed_color in COLORWAYS
    )


@dataclass(frozen=True)
class LayoutConfig:
    """Configuration for the placement and packing engine.

    Attributes:
        pitch: Grid cell size in millimeters.
        constraints: Allowed bin dimensions.
        catalog_sizes: Standard sizes used by gap fill.
        default_bin_height: Height given to newly created bins.
        default_color: Bin color when the default colorway is unknown.
        default_colorway: Colorway id of drawn bins; its bin color is used.
        min_gap_cells: Smallest gap area, in cells, gap fill considers.
        max_fill_iterations: Hard ceiling on gap fill iterations.
        palette: Colors assigned to auto-generated bins.
        colorways: Known colorways.
    """

    pitch: float = GRID_PITCH_MM
    constraints: BinConstraints = field(default_factory=BinConstraints)
    catalog_sizes: tuple[CatalogSize, ...] = field(
        default_factory=_default_catalog_sizes
    )
    default_bin_height: float = DEFAULT_BIN_HEIGHT_MM
    default_color: str = DEFAULT_BIN_COLOR
    default_colorway: str = DEFAULT_COLORWAY
    min_gap_cells: int = DEFAULT_MIN_GAP_CELLS
    max_fill_iterations: int = MAX_FILL_ITERATIONS
    palette: tuple[str, ...] = AUTO_BIN_PALETTE
    colorways: tuple[Colorway, ...] = field(default_factory=_default_colorways)

    def __post_init__(self) -> None:
        if self.pitch <= 0:
            raise ValueError("Grid pitch must be positive")
        if self.default_bin_height < 0:
            raise ValueError("Default bin height must be non-negative")
        if self.min_gap_cells < 1:
            raise ValueError("Minimum gap area must be at least one cell")
        if self.max_fill_iterations < 1:
            raise ValueError("Fill iteration ceiling must be at least 1")
        if not self.palette:
            raise ValueError("Palette must contain at least one color")

    def colorway(self, colorway_id: str | None) -> Colorway:
        """Look up a colorway, falling back to the default one."""
        for colorway in self.colorways:
            if colorway.id == colorway_id:
                return colorway
        for colorway in self.colorways:
            if colorway.id == self.default_colorway:
                return colorway
        return Colorway(
            id=self.default_colorway, bin=self.default_color, bed=self.default_color
        )


DEFAULT_LAYOUT_CONFIG = LayoutConfig()

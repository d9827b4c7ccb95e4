"""Value objects for the drawer layout domain.

Immutable data types describing the drawer footprint, the grid derived
from it, catalog reference data and the geometry handed between the
validator, the gesture controllers and the packing engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .constants import GRID_PITCH_MM, MM_PER_INCH


class LengthUnit(str, Enum):
    """Display unit a drawer was entered in."""

    MM = "mm"
    INCHES = "inches"


class PlacementErrorKind(str, Enum):
    """Reasons a placement or mutation is rejected.

    Attributes:
        OUT_OF_BOUNDS: Candidate rectangle exceeds the drawer grid extents.
        COLLISION: Candidate overlaps an existing bin.
        SIZE_INVALID: Below minimum area or outside width/length constraints.
        NOT_FOUND: Operation referenced a bin id that no longer exists.
    """

    OUT_OF_BOUNDS = "out_of_bounds"
    COLLISION = "collision"
    SIZE_INVALID = "size_invalid"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Drawer:
    """Physical drawer footprint.

    Attributes:
        width: Interior width in millimeters (grid columns run along it).
        length: Interior depth in millimeters (grid rows run along it).
        height: Interior height in millimeters.
        unit: Unit the dimensions were entered in, for display only.
    """

    width: float
    length: float
    height: float = 0.0
    unit: LengthUnit = LengthUnit.MM

    def __post_init__(self) -> None:
        if self.width < GRID_PITCH_MM or self.length < GRID_PITCH_MM:
            raise ValueError(
                f"Drawer width and length must be at least {GRID_PITCH_MM:g}mm"
            )
        if self.height < 0:
            raise ValueError("Drawer height must be non-negative")

    @classmethod
    def from_units(
        cls,
        width: float,
        length: float,
        height: float = 0.0,
        unit: LengthUnit | str = LengthUnit.MM,
    ) -> Drawer:
        """Create a drawer from dimensions entered in ``unit``.

        Inch input is converted to millimeters; the original unit is kept
        for display.
        """
        unit = LengthUnit(unit)
        factor = MM_PER_INCH if unit == LengthUnit.INCHES else 1.0
        return cls(
            width=width * factor,
            length=length * factor,
            height=height * factor,
            unit=unit,
        )


@dataclass(frozen=True)
class GridSpec:
    """Cell grid laid over a drawer.

    Attributes:
        cols: Number of whole cells across the drawer width.
        rows: Number of whole cells along the drawer length.
        pitch: Cell size in millimeters.
    """

    cols: int
    rows: int
    pitch: float = GRID_PITCH_MM

    def __post_init__(self) -> None:
        if self.cols < 0 or self.rows < 0:
            raise ValueError("Grid dimensions must be non-negative")
        if self.pitch <= 0:
            raise ValueError("Grid pitch must be positive")

    @classmethod
    def for_drawer(cls, drawer: Drawer, pitch: float = GRID_PITCH_MM) -> GridSpec:
        """Derive the grid that fits inside ``drawer``."""
        return cls(
            cols=math.floor(drawer.width / pitch),
            rows=math.floor(drawer.length / pitch),
            pitch=pitch,
        )

    @property
    def width_mm(self) -> float:
        """Usable grid width in millimeters."""
        return self.cols * self.pitch

    @property
    def length_mm(self) -> float:
        """Usable grid length in millimeters."""
        return self.rows * self.pitch

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows

    @property
    def aspect_ratio(self) -> float:
        """Columns per row, 1.0 for an empty grid."""
        return self.cols / self.rows if self.rows > 0 else 1.0

    def contains_cell(self, cell: Cell) -> bool:
        """Check whether ``cell`` addresses a cell of this grid."""
        return 0 <= cell.x < self.cols and 0 <= cell.y < self.rows

    def clamp_cell(self, cell: Cell) -> Cell:
        """Clamp ``cell`` onto the nearest cell of this grid."""
        return Cell(
            x=max(0, min(cell.x, self.cols - 1)),
            y=max(0, min(cell.y, self.rows - 1)),
        )


@dataclass(frozen=True)
class Cell:
    """Integer grid cell address (column, row)."""

    x: int
    y: int


@dataclass(frozen=True)
class Footprint:
    """Axis-aligned rectangle in millimeters.

    Used for candidate placements that are not (yet) bins, such as a
    drawing preview or a drop shadow.
    """

    x: float
    y: float
    width: float
    length: float
    id: str | None = None

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.length

    @property
    def area(self) -> float:
        return self.width * self.length


@dataclass(frozen=True)
class CatalogEntry:
    """Template for a bin that has not been placed yet.

    Catalog entries are reference data owned by the surrounding UI. The
    engine only reads their sizes and moves them in and out of the
    available pool.

    Attributes:
        id: Stable catalog identifier.
        label: Display label, copied to the bin name on placement.
        width: Bin width in millimeters.
        length: Bin length in millimeters.
        color: Display color, copied to the bin on placement.
    """

    id: str
    label: str
    width: float
    length: float
    color: str

    def __post_init__(self) -> None:
        if self.width <= 0 or self.length <= 0:
            raise ValueError("Catalog entry dimensions must be positive")


@dataclass(frozen=True)
class CatalogSize:
    """Standard bin size offered to gap fill, in millimeters."""

    width: float
    length: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.length <= 0:
            raise ValueError("Catalog size dimensions must be positive")

    @property
    def area(self) -> float:
        return self.width * self.length


@dataclass(frozen=True)
class Colorway:
    """Cosmetic bin/bed color pairing. Carries no placement meaning."""

    id: str
    bin: str
    bed: str


@dataclass(frozen=True)
class Gap:
    """Maximal free rectangle of the grid, measured in cells.

    Attributes:
        x: Left column.
        y: Top row.
        width: Width in cells.
        length: Length in cells.
    """

    x: int
    y: int
    width: int
    length: int

    @property
    def area(self) -> int:
        """Area in cells."""
        return self.width * self.length


@dataclass(frozen=True)
class PreviewDescriptor:
    """Live preview rectangle in pixel space for the caller to render.

    Attributes:
        left: Left offset from the grid origin in pixels.
        top: Top offset from the grid origin in pixels.
        width: Width in pixels.
        height: Height in pixels.
        error_kind: Why the previewed placement would be rejected, or
            None when it is valid.
    """

    left: float
    top: float
    width: float
    height: float
    error_kind: PlacementErrorKind | None = None

    @property
    def has_error(self) -> bool:
        return self.error_kind is not None

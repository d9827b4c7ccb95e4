"""Conversions between millimeters, grid cells and display pixels.

Every function here is pure and total for finite input. Functions that
would divide by a cell pixel size return None when that size is not
positive instead of raising.
"""

from __future__ import annotations

import math

from .constants import (
    FALLBACK_CELL_PIXELS,
    GRID_PITCH_MM,
    MAX_CELL_PIXELS,
    MIN_CELL_PIXELS,
)
from .value_objects import Cell, PlacementErrorKind, PreviewDescriptor

__all__ = [
    "cell_to_mm",
    "covered_cells",
    "fit_cell_size",
    "footprint_to_preview",
    "mm_to_cell",
    "mm_to_pixel",
    "pixel_to_cell",
    "pixel_to_mm",
]


def mm_to_cell(value: float, pitch: float = GRID_PITCH_MM) -> int:
    """Grid cell index containing the millimeter offset ``value``."""
    return math.floor(value / pitch)


def cell_to_mm(cell: int, pitch: float = GRID_PITCH_MM) -> float:
    """Millimeter offset of the leading edge of ``cell``."""
    return cell * pitch


def covered_cells(
    x: float,
    y: float,
    width: float,
    length: float,
    cols: int,
    rows: int,
    pitch: float = GRID_PITCH_MM,
) -> tuple[range, range]:
    """Column and row ranges of the cells a rectangle touches.

    A partially covered cell counts as covered. Ranges are clipped to a
    ``cols`` x ``rows`` grid and may be empty.
    """
    first_col = max(0, math.floor(x / pitch))
    first_row = max(0, math.floor(y / pitch))
    last_col = min(cols, math.ceil((x + width) / pitch))
    last_row = min(rows, math.ceil((y + length) / pitch))
    return range(first_col, last_col), range(first_row, last_row)


def mm_to_pixel(
    value: float, cell_pixel_size: float, pitch: float = GRID_PITCH_MM
) -> float:
    """Convert millimeters to pixels at the given cell scale."""
    return (value / pitch) * cell_pixel_size


def pixel_to_mm(
    value: float, cell_pixel_size: float, pitch: float = GRID_PITCH_MM
) -> float | None:
    """Convert pixels to millimeters at the given cell scale."""
    if cell_pixel_size <= 0:
        return None
    return (value / cell_pixel_size) * pitch


def pixel_to_cell(px: float, py: float, cell_pixel_size: float) -> Cell | None:
    """Cell under a pointer position relative to the grid origin.

    The result may lie outside the grid; callers check containment.
    """
    if cell_pixel_size <= 0:
        return None
    return Cell(x=math.floor(px / cell_pixel_size), y=math.floor(py / cell_pixel_size))


def fit_cell_size(
    cols: int,
    rows: int,
    available_width: float,
    available_height: float,
    min_cell: float = MIN_CELL_PIXELS,
    max_cell: float = MAX_CELL_PIXELS,
) -> float:
    """Largest square cell size fitting the grid into an available box.

    Keeps the grid aspect ratio and clamps the result to
    ``[min_cell, max_cell]`` so cells stay usable as touch targets. The
    engine never calls this itself; callers compute the scale and hand
    it in.

    Args:
        cols: Grid columns.
        rows: Grid rows.
        available_width: Horizontal space in pixels.
        available_height: Vertical space in pixels.
        min_cell: Lower bound for the cell size.
        max_cell: Upper bound for the cell size.

    Returns:
        Cell size in pixels.
    """
    if cols <= 0 or rows <= 0:
        return FALLBACK_CELL_PIXELS

    available_width = max(available_width, 0.0)
    available_height = max(available_height, 0.0)
    grid_ratio = cols / rows
    box_ratio = available_width / available_height if available_height > 0 else math.inf

    if grid_ratio > box_ratio:
        scaled_width = available_width
        scaled_height = available_width / grid_ratio
    else:
        scaled_height = available_height
        scaled_width = available_height * grid_ratio

    cell = min(scaled_width / cols, scaled_height / rows)
    return max(min_cell, min(cell, max_cell))


def footprint_to_preview(
    x: float,
    y: float,
    width: float,
    length: float,
    cell_pixel_size: float,
    error_kind: PlacementErrorKind | None = None,
    pitch: float = GRID_PITCH_MM,
) -> PreviewDescriptor:
    """Pixel-space preview of a millimeter rectangle."""
    return PreviewDescriptor(
        left=mm_to_pixel(x, cell_pixel_size, pitch),
        top=mm_to_pixel(y, cell_pixel_size, pitch),
        width=mm_to_pixel(width, cell_pixel_size, pitch),
        height=mm_to_pixel(length, cell_pixel_size, pitch),
        error_kind=error_kind,
    )

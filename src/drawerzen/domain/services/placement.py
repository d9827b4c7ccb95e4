"""Placement validation.

Stateless predicates deciding whether a rectangle may occupy a position
in the drawer grid. Every mutation path (store, gesture controllers and
packing engine) goes through these functions; none of them re-implements
the overlap test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ..config import DEFAULT_LAYOUT_CONFIG, BinConstraints, LayoutConfig
from ..constants import GRID_PITCH_MM
from ..value_objects import GridSpec, PlacementErrorKind

if TYPE_CHECKING:
    from drawerzen.contracts.protocols import Placeable

__all__ = [
    "PlacementValidator",
    "check_bounds",
    "check_collision",
    "is_valid_placement",
    "rectangles_overlap",
    "validate_bin_dimensions",
    "validate_bin_size",
]


def rectangles_overlap(a: Placeable, b: Placeable) -> bool:
    """Check whether two rectangles share a nonzero area.

    Edge-touching rectangles do not overlap.
    """
    a_right = a.x + a.width
    a_bottom = a.y + a.length
    b_right = b.x + b.width
    b_bottom = b.y + b.length
    return not (
        a_right <= b.x or a.x >= b_right or a_bottom <= b.y or a.y >= b_bottom
    )


def check_bounds(item: Placeable, grid: GridSpec) -> bool:
    """Check that all four corners of ``item`` lie inside the grid."""
    return (
        item.x >= 0
        and item.y >= 0
        and item.x + item.width <= grid.width_mm
        and item.y + item.length <= grid.length_mm
    )


def check_collision(
    item: Placeable,
    bins: Iterable[Placeable],
    exclude_id: str | None = None,
) -> bool:
    """Check whether ``item`` overlaps any of ``bins``.

    Args:
        item: Candidate rectangle.
        bins: Rectangles already placed.
        exclude_id: Id to skip, typically the bin being relocated.

    Returns:
        True if there is an overlap with nonzero area.
    """
    for other in bins:
        if exclude_id is not None and other.id == exclude_id:
            continue
        if rectangles_overlap(item, other):
            return True
    return False


def is_valid_placement(
    item: Placeable,
    bins: Iterable[Placeable],
    grid: GridSpec,
    exclude_id: str | None = None,
) -> bool:
    """Bounds check and collision check combined."""
    return check_bounds(item, grid) and not check_collision(item, bins, exclude_id)


def validate_bin_dimensions(
    width: float,
    length: float,
    constraints: BinConstraints | None = None,
    pitch: float = GRID_PITCH_MM,
) -> bool:
    """Validate bin dimensions given in millimeters.

    Anything no larger than a single cell is rejected before the
    constraint table is consulted, so a one-cell bin is never accepted
    whatever the constraints say.
    """
    if width * length <= pitch * pitch:
        return False
    constraints = constraints or DEFAULT_LAYOUT_CONFIG.constraints
    return constraints.allows(width, length)


def validate_bin_size(
    width_cells: int,
    length_cells: int,
    constraints: BinConstraints | None = None,
    pitch: float = GRID_PITCH_MM,
) -> bool:
    """Validate bin dimensions given in grid cells."""
    return validate_bin_dimensions(
        width_cells * pitch, length_cells * pitch, constraints, pitch
    )


class PlacementValidator:
    """Placement predicates bound to a layout configuration.

    Attributes:
        config: Configuration supplying pitch and size constraints.
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or DEFAULT_LAYOUT_CONFIG

    def check_bounds(self, item: Placeable, grid: GridSpec) -> bool:
        return check_bounds(item, grid)

    def check_collision(
        self,
        item: Placeable,
        bins: Iterable[Placeable],
        exclude_id: str | None = None,
    ) -> bool:
        return check_collision(item, bins, exclude_id)

    def is_valid_placement(
        self,
        item: Placeable,
        bins: Iterable[Placeable],
        grid: GridSpec,
        exclude_id: str | None = None,
    ) -> bool:
        return is_valid_placement(item, bins, grid, exclude_id)

    def validate_bin_size(self, width_cells: int, length_cells: int) -> bool:
        return validate_bin_size(
            width_cells, length_cells, self.config.constraints, self.config.pitch
        )

    def validate_bin_dimensions(self, width: float, length: float) -> bool:
        return validate_bin_dimensions(
            width, length, self.config.constraints, self.config.pitch
        )

    def placement_error(
        self,
        item: Placeable,
        bins: Iterable[Placeable],
        grid: GridSpec,
        exclude_id: str | None = None,
        check_size: bool = False,
    ) -> PlacementErrorKind | None:
        """Classify why ``item`` cannot be placed.

        Checks run in the order size (only when ``check_size`` is set),
        bounds, collision; the first failure is reported.

        Returns:
            The error kind, or None when the placement is valid.
        """
        if check_size and not self.validate_bin_dimensions(item.width, item.length):
            return PlacementErrorKind.SIZE_INVALID
        if not check_bounds(item, grid):
            return PlacementErrorKind.OUT_OF_BOUNDS
        if check_collision(item, bins, exclude_id):
            return PlacementErrorKind.COLLISION
        return None

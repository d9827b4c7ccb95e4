"""Domain entities for drawer layouts."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .constants import DEFAULT_BIN_COLOR, DEFAULT_BIN_HEIGHT_MM
from .value_objects import Footprint


@dataclass(frozen=True)
class Bin:
    """A storage bin placed in the drawer.

    Bins are immutable; moving or editing a bin produces a new value that
    keeps the same ``id``. The id is stable for the lifetime of the
    placement.

    Attributes:
        id: Unique identifier of this placement.
        x: Left edge in millimeters, grid aligned.
        y: Top edge in millimeters, grid aligned.
        width: Extent along the drawer width in millimeters.
        length: Extent along the drawer length in millimeters.
        height: Bin height in millimeters.
        name: Display name.
        color: Display color.
        colorway: Optional colorway id (see ``Colorway``).
        shadow_board: Whether the bin is rendered as a shadow board.
        original_id: Catalog entry this bin was placed from, if any. A
            back-reference only, the catalog does not own the bin.
    """

    id: str
    x: float
    y: float
    width: float
    length: float
    height: float = DEFAULT_BIN_HEIGHT_MM
    name: str = ""
    color: str = DEFAULT_BIN_COLOR
    colorway: str | None = None
    shadow_board: bool = False
    original_id: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Bin id must not be empty")
        if self.width <= 0 or self.length <= 0:
            raise ValueError("Bin width and length must be positive")
        if self.height < 0:
            raise ValueError("Bin height must be non-negative")

    @property
    def right(self) -> float:
        """X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Y coordinate of the bottom edge."""
        return self.y + self.length

    @property
    def area(self) -> float:
        """Footprint area in square millimeters."""
        return self.width * self.length

    @property
    def footprint(self) -> Footprint:
        return Footprint(
            x=self.x, y=self.y, width=self.width, length=self.length, id=self.id
        )

    def moved_to(self, x: float, y: float) -> Bin:
        """Return this bin at a new position, identity preserved."""
        return replace(self, x=x, y=y)

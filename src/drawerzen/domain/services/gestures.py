"""Gesture state shared by the draw and drag controllers.

The active gesture lives in a single slot holding one of ``Idle``,
``Drawing`` or ``Dragging``. Because there is only one slot, a drawing
gesture and a drag gesture can never be active at the same time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..value_objects import CatalogEntry, Cell

__all__ = [
    "DragPayload",
    "Dragging",
    "Drawing",
    "GestureState",
    "GestureTracker",
    "Idle",
]


@dataclass(frozen=True)
class Idle:
    """No gesture in progress."""


@dataclass(frozen=True)
class Drawing:
    """A bin is being drawn.

    Attributes:
        start: Cell where the pointer went down.
        end: Cell under the pointer, clamped to the grid.
    """

    start: Cell
    end: Cell


@dataclass(frozen=True)
class DragPayload:
    """What is being dragged.

    Exactly one of ``bin_id`` (a placed bin) and ``entry`` (a catalog
    entry) is set.
    """

    width: float
    length: float
    bin_id: str | None = None
    entry: CatalogEntry | None = None

    def __post_init__(self) -> None:
        if (self.bin_id is None) == (self.entry is None):
            raise ValueError("Drag payload needs exactly one of bin_id or entry")

    @property
    def from_catalog(self) -> bool:
        return self.entry is not None


@dataclass(frozen=True)
class Dragging:
    """A placed bin or catalog entry is being dragged."""

    payload: DragPayload


GestureState = Union[Idle, Drawing, Dragging]

IDLE = Idle()


class GestureTracker:
    """Holds the single active gesture state."""

    def __init__(self) -> None:
        self.state: GestureState = IDLE

    @property
    def is_idle(self) -> bool:
        return isinstance(self.state, Idle)

    def begin(self, state: Drawing | Dragging) -> bool:
        """Enter a gesture state if no other gesture is active."""
        if not self.is_idle:
            return False
        self.state = state
        return True

    def update(self, state: Drawing | Dragging) -> None:
        """Replace the payload of the gesture already in progress."""
        if type(self.state) is not type(state):
            raise ValueError(
                f"Cannot update {type(self.state).__name__} "
                f"with {type(state).__name__}"
            )
        self.state = state

    def end(self) -> None:
        """Return to idle."""
        self.state = IDLE

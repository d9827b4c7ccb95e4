"""Draw-to-create gesture.

Converts a pointer drag across the grid into a new bin::

    Idle --pointer_down--> Drawing --pointer_up--> Committed | Cancelled --> Idle

While drawing, every pointer move produces a preview rectangle with an
error flag. Nothing is mutated until the pointer goes up.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from ..config import LayoutConfig
from ..coordinates import cell_to_mm, pixel_to_cell
from ..entities import Bin
from ..results import GestureOutcome, GestureResult
from ..value_objects import Cell, Footprint, PlacementErrorKind, PreviewDescriptor
from .bin_store import BinStore
from .gestures import Drawing, GestureTracker
from .placement import PlacementValidator

logger = logging.getLogger(__name__)

__all__ = ["DrawController"]


def _new_bin_id() -> str:
    return str(uuid.uuid4())


class DrawController:
    """State machine drawing new bins on the grid.

    Pointer coordinates are pixels relative to the grid origin and are
    mapped to cells with ``cell_pixel_size``, which the caller supplies
    and may change at any time.

    Attributes:
        store: Bin store receiving committed bins.
        tracker: Gesture slot shared with the drag controller.
        validator: Placement predicates.
        config: Layout configuration.
        cell_pixel_size: Current on-screen size of one cell in pixels.
    """

    def __init__(
        self,
        store: BinStore,
        tracker: GestureTracker,
        validator: PlacementValidator | None = None,
        config: LayoutConfig | None = None,
        cell_pixel_size: float = 20.0,
        id_factory: Callable[[], str] = _new_bin_id,
    ) -> None:
        self.store = store
        self.tracker = tracker
        self.validator = validator or store.validator
        self.config = config or self.validator.config
        self.cell_pixel_size = cell_pixel_size
        self._id_factory = id_factory
        self._preview: PreviewDescriptor | None = None

    @property
    def is_drawing(self) -> bool:
        return isinstance(self.tracker.state, Drawing)

    @property
    def preview(self) -> PreviewDescriptor | None:
        """Most recent preview, None when not drawing."""
        return self._preview

    def pointer_down(self, px: float, py: float) -> bool:
        """Start drawing at the cell under the pointer.

        Returns:
            True if a drawing gesture started. The press is ignored when
            it falls outside the grid or another gesture is active.
        """
        cell = pixel_to_cell(px, py, self.cell_pixel_size)
        if cell is None or not self.store.grid.contains_cell(cell):
            return False
        if not self.tracker.begin(Drawing(start=cell, end=cell)):
            logger.debug("Ignoring draw start while another gesture is active")
            return False
        self._preview = None
        return True

    def pointer_move(self, px: float, py: float) -> PreviewDescriptor | None:
        """Track the pointer and report the rectangle that would be drawn."""
        state = self.tracker.state
        if not isinstance(state, Drawing):
            return None
        cell = pixel_to_cell(px, py, self.cell_pixel_size)
        if cell is None:
            return self._preview

        end = self.store.grid.clamp_cell(cell)
        self.tracker.update(Drawing(start=state.start, end=end))

        x, y, width, length = self._normalize(state.start, end)
        error = self._evaluate(x, y, width, length)
        self._preview = PreviewDescriptor(
            left=x * self.cell_pixel_size,
            top=y * self.cell_pixel_size,
            width=width * self.cell_pixel_size,
            height=length * self.cell_pixel_size,
            error_kind=error,
        )
        return self._preview

    def pointer_up(self) -> GestureResult | None:
        """Finish the gesture, creating a bin if the rectangle is valid.

        Returns:
            The gesture result, or None if no drawing was in progress.
        """
        state = self.tracker.state
        if not isinstance(state, Drawing):
            return None

        x, y, width, length = self._normalize(state.start, state.end)
        error = self._evaluate(x, y, width, length)
        self._finish()

        if error is not None:
            return GestureResult(outcome=GestureOutcome.CANCELLED, error_kind=error)

        pitch = self.config.pitch
        width_mm = cell_to_mm(width, pitch)
        length_mm = cell_to_mm(length, pitch)
        colorway = self.config.colorway(self.config.default_colorway)
        new_bin = Bin(
            id=self._id_factory(),
            x=cell_to_mm(x, pitch),
            y=cell_to_mm(y, pitch),
            width=width_mm,
            length=length_mm,
            height=self.config.default_bin_height,
            name=f"Custom {round(width_mm)}x{round(length_mm)}mm",
            color=colorway.bin,
            colorway=colorway.id,
        )
        result = self.store.add_bin(new_bin)
        if not result.success:
            return GestureResult(
                outcome=GestureOutcome.CANCELLED, error_kind=result.error_kind
            )

        logger.info(
            "Drew bin %s at (%g, %g) size %gx%g",
            new_bin.id,
            new_bin.x,
            new_bin.y,
            new_bin.width,
            new_bin.length,
        )
        return GestureResult(outcome=GestureOutcome.COMMITTED, bin=result.bin)

    def cancel(self) -> None:
        """Abandon the drawing gesture without creating a bin."""
        if self.is_drawing:
            self._finish()

    def _normalize(self, start: Cell, end: Cell) -> tuple[int, int, int, int]:
        return (
            min(start.x, end.x),
            min(start.y, end.y),
            abs(end.x - start.x) + 1,
            abs(end.y - start.y) + 1,
        )

    def _evaluate(
        self, x: int, y: int, width: int, length: int
    ) -> PlacementErrorKind | None:
        if not self.validator.validate_bin_size(width, length):
            return PlacementErrorKind.SIZE_INVALID
        pitch = self.config.pitch
        candidate = Footprint(
            x=cell_to_mm(x, pitch),
            y=cell_to_mm(y, pitch),
            width=cell_to_mm(width, pitch),
            length=cell_to_mm(length, pitch),
        )
        if self.validator.check_collision(candidate, self.store.bins):
            return PlacementErrorKind.COLLISION
        return None

    def _finish(self) -> None:
        self.tracker.end()
        self._preview = None

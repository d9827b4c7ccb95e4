"""Drag-to-move gesture.

Moves placed bins around the grid and transfers bins between the grid
and the catalog pool::

    Idle --start_*_drag--> Dragging --drop_*--> Dropped | Reverted --> Idle

Hovering over the grid yields a drop shadow with a validity flag. The
store and the pool change only when a drop is accepted.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from ..config import LayoutConfig
from ..coordinates import cell_to_mm, footprint_to_preview, pixel_to_cell
from ..entities import Bin
from ..results import GestureOutcome, GestureResult, PlacementResult
from ..value_objects import (
    CatalogEntry,
    Footprint,
    PlacementErrorKind,
    PreviewDescriptor,
)
from .bin_store import BinStore
from .catalog_pool import CatalogPool
from .gestures import DragPayload, Dragging, GestureTracker
from .placement import PlacementValidator

logger = logging.getLogger(__name__)

__all__ = ["DragController"]


def _new_bin_id() -> str:
    return str(uuid.uuid4())


class DragController:
    """State machine relocating bins and moving them to and from the pool.

    Attributes:
        store: Bin store holding placed bins.
        pool: Catalog entries available for placement.
        tracker: Gesture slot shared with the draw controller.
        validator: Placement predicates.
        config: Layout configuration.
        cell_pixel_size: Current on-screen size of one cell in pixels.
    """

    def __init__(
        self,
        store: BinStore,
        pool: CatalogPool,
        tracker: GestureTracker,
        validator: PlacementValidator | None = None,
        config: LayoutConfig | None = None,
        cell_pixel_size: float = 20.0,
        id_factory: Callable[[], str] = _new_bin_id,
    ) -> None:
        self.store = store
        self.pool = pool
        self.tracker = tracker
        self.validator = validator or store.validator
        self.config = config or self.validator.config
        self.cell_pixel_size = cell_pixel_size
        self._id_factory = id_factory
        self._shadow: PreviewDescriptor | None = None

    @property
    def payload(self) -> DragPayload | None:
        """What is being dragged, None when idle."""
        state = self.tracker.state
        return state.payload if isinstance(state, Dragging) else None

    @property
    def is_dragging(self) -> bool:
        return self.payload is not None

    @property
    def shadow(self) -> PreviewDescriptor | None:
        """Most recent drop shadow, None when not hovering the grid."""
        return self._shadow

    def start_bin_drag(self, bin_id: str) -> bool:
        """Pick up a placed bin."""
        existing = self.store.get(bin_id)
        if existing is None:
            return False
        payload = DragPayload(
            width=existing.width, length=existing.length, bin_id=existing.id
        )
        return self._begin(payload)

    def start_catalog_drag(self, entry_id: str) -> bool:
        """Pick up an available catalog entry."""
        entry = self.pool.get(entry_id)
        if entry is None:
            return False
        payload = DragPayload(width=entry.width, length=entry.length, entry=entry)
        return self._begin(payload)

    def hover(self, px: float, py: float) -> PreviewDescriptor | None:
        """Compute the drop shadow for the pointer position over the grid."""
        payload = self.payload
        if payload is None:
            return None
        candidate = self._candidate(payload, px, py)
        if candidate is None:
            self._shadow = None
            return None

        error = self.validator.placement_error(
            candidate, self.store.bins, self.store.grid, exclude_id=payload.bin_id
        )
        self._shadow = footprint_to_preview(
            candidate.x,
            candidate.y,
            candidate.width,
            candidate.length,
            self.cell_pixel_size,
            error_kind=error,
            pitch=self.config.pitch,
        )
        return self._shadow

    def leave_grid(self) -> None:
        """Pointer left the grid while dragging; hide the shadow."""
        self._shadow = None

    def drop_on_grid(self, px: float, py: float) -> GestureResult | None:
        """Drop the payload at the cell under the pointer.

        A placed bin is moved in place and keeps its id. A catalog entry
        becomes a new bin with a fresh id and leaves the pool. An invalid
        drop changes nothing and reports the rejection.

        Returns:
            The gesture result, or None if nothing was being dragged.
        """
        payload = self.payload
        if payload is None:
            return None
        candidate = self._candidate(payload, px, py)
        self._finish()

        if candidate is None:
            return GestureResult(
                outcome=GestureOutcome.REVERTED,
                error_kind=PlacementErrorKind.OUT_OF_BOUNDS,
            )

        if payload.entry is None:
            result = self.store.move_bin(payload.bin_id, candidate.x, candidate.y)
        else:
            result = self._place_entry(payload.entry, candidate)

        if not result.success:
            logger.info(
                "Rejected drop at (%g, %g): %s",
                candidate.x,
                candidate.y,
                result.error_kind.value,
            )
            return GestureResult(
                outcome=GestureOutcome.REVERTED, error_kind=result.error_kind
            )
        return GestureResult(outcome=GestureOutcome.DROPPED, bin=result.bin)

    def drop_on_catalog(self) -> GestureResult | None:
        """Drop the payload on the catalog region.

        A placed bin is removed from the store and an equivalent catalog
        entry is put back into the pool. Dropping a catalog entry back on
        the catalog changes nothing.
        """
        payload = self.payload
        if payload is None:
            return None
        self._finish()

        if payload.bin_id is None:
            return GestureResult(outcome=GestureOutcome.REVERTED)

        result = self.store.remove_bin(payload.bin_id)
        if not result.success:
            return GestureResult(
                outcome=GestureOutcome.REVERTED, error_kind=result.error_kind
            )
        self.pool.restore(self.pool.entry_for_bin(result.bin))
        logger.info("Returned bin %s to the catalog", payload.bin_id)
        return GestureResult(outcome=GestureOutcome.DROPPED, bin=result.bin)

    def cancel(self) -> None:
        """Drag ended outside any drop target; nothing changes."""
        if self.is_dragging:
            self._finish()

    def _begin(self, payload: DragPayload) -> bool:
        if not self.tracker.begin(Dragging(payload=payload)):
            logger.debug("Ignoring drag start while another gesture is active")
            return False
        self._shadow = None
        return True

    def _candidate(
        self, payload: DragPayload, px: float, py: float
    ) -> Footprint | None:
        cell = pixel_to_cell(px, py, self.cell_pixel_size)
        if cell is None:
            return None
        return Footprint(
            x=cell_to_mm(cell.x, self.config.pitch),
            y=cell_to_mm(cell.y, self.config.pitch),
            width=payload.width,
            length=payload.length,
            id=payload.bin_id,
        )

    def _place_entry(
        self, entry: CatalogEntry, candidate: Footprint
    ) -> PlacementResult:
        new_bin = Bin(
            id=self._id_factory(),
            x=candidate.x,
            y=candidate.y,
            width=entry.width,
            length=entry.length,
            height=self.config.default_bin_height,
            name=entry.label,
            color=entry.color,
            original_id=entry.id,
        )
        result = self.store.add_bin(new_bin, check_size=False)
        if result.success:
            self.pool.take(entry.id)
        return result

    def _finish(self) -> None:
        self.tracker.end()
        self._shadow = None

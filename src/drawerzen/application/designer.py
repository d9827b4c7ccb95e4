"""Layout designer session.

``LayoutDesigner`` wires one drawer's grid, bin store, catalog pool,
gesture controllers and packing engine together. It is the object a UI
or a command drives; every component it owns shares the same
configuration and validator.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable

from drawerzen.domain.config import DEFAULT_LAYOUT_CONFIG, LayoutConfig
from drawerzen.domain.coordinates import fit_cell_size
from drawerzen.domain.entities import Bin
from drawerzen.domain.results import LayoutSummary, PlacementResult, SortResult
from drawerzen.domain.services import (
    AutoPackingEngine,
    BinStore,
    CatalogPool,
    DragController,
    DrawController,
    GestureTracker,
    PlacementValidator,
)
from drawerzen.domain.value_objects import (
    CatalogEntry,
    CatalogSize,
    Drawer,
    GridSpec,
)

if TYPE_CHECKING:
    from drawerzen.contracts.protocols import UndoHook

logger = logging.getLogger(__name__)

__all__ = ["LayoutDesigner"]


class LayoutDesigner:
    """Editing session for the bins of a single drawer.

    Attributes:
        drawer: Drawer being laid out.
        config: Engine configuration shared by every component.
        grid: Grid derived from the drawer.
        store: Placed bins and selection.
        pool: Catalog entries still available for placement.
        draw: Draw-to-create gesture controller.
        drag: Drag-to-move gesture controller.
        engine: Auto-sort and gap fill.

    Example:
        >>> designer = LayoutDesigner(Drawer(width=126.0, length=84.0))
        >>> created = designer.generate_bins()
        >>> designer.summary().bin_count == len(created)
        True
    """

    def __init__(
        self,
        drawer: Drawer,
        catalog: Iterable[CatalogEntry] = (),
        config: LayoutConfig | None = None,
        undo_hook: UndoHook | None = None,
        cell_pixel_size: float = 20.0,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.drawer = drawer
        self.config = config or DEFAULT_LAYOUT_CONFIG
        self.grid = GridSpec.for_drawer(drawer, self.config.pitch)
        self.validator = PlacementValidator(self.config)
        self.store = BinStore(self.grid, self.validator, undo_hook)
        self.pool = CatalogPool(catalog)
        self.tracker = GestureTracker()

        id_kwargs = {} if id_factory is None else {"id_factory": id_factory}
        self.draw = DrawController(
            self.store,
            self.tracker,
            self.validator,
            self.config,
            cell_pixel_size,
            **id_kwargs,
        )
        self.drag = DragController(
            self.store,
            self.pool,
            self.tracker,
            self.validator,
            self.config,
            cell_pixel_size,
            **id_kwargs,
        )
        self.engine = AutoPackingEngine(self.config, self.validator, **id_kwargs)
        self._cell_pixel_size = cell_pixel_size

    # -- snapshot reads ----------------------------------------------------

    @property
    def bins(self) -> tuple[Bin, ...]:
        return self.store.bins

    @property
    def selected_bin(self) -> Bin | None:
        return self.store.selected_bin

    @property
    def available_entries(self) -> tuple[CatalogEntry, ...]:
        """Catalog entries not currently placed."""
        return self.pool.available

    @property
    def cell_pixel_size(self) -> float:
        """On-screen size of one grid cell in pixels.

        Supplied by the caller; the engine never computes it on its own.
        Setting it rescales both gesture controllers.
        """
        return self._cell_pixel_size

    @cell_pixel_size.setter
    def cell_pixel_size(self, value: float) -> None:
        self._cell_pixel_size = value
        self.draw.cell_pixel_size = value
        self.drag.cell_pixel_size = value

    def fit_to_viewport(self, available_width: float, available_height: float) -> float:
        """Pick the cell pixel size that fits the grid into a viewport."""
        self.cell_pixel_size = fit_cell_size(
            self.grid.cols, self.grid.rows, available_width, available_height
        )
        return self.cell_pixel_size

    # -- mutations ---------------------------------------------------------

    def add_bin(self, bin: Bin) -> PlacementResult:
        """Place a bin after validating size, bounds and collision."""
        return self.store.add_bin(bin)

    def remove_bin(self, bin_id: str) -> PlacementResult:
        """Remove a bin.

        A bin that was placed from the catalog goes back into the pool.
        """
        result = self.store.remove_bin(bin_id)
        if result.success and result.bin is not None:
            known = self.pool.find_known(result.bin.original_id)
            if known is not None:
                self.pool.restore(known)
        return result

    def move_bin(self, bin_id: str, x: float, y: float) -> PlacementResult:
        return self.store.move_bin(bin_id, x, y)

    def select_bin(self, bin_id: str | None) -> PlacementResult:
        return self.store.select_bin(bin_id)

    def update_bin(self, bin: Bin) -> PlacementResult:
        """Replace a placed bin's attributes (same id)."""
        return self.store.update_bin(bin)

    def load_bins(self, bins: Iterable[Bin]) -> None:
        """Replace the layout wholesale without validation.

        Used when importing a saved layout. Catalog entries the bins were
        placed from leave the pool. Pass the bins to ``find_layout_issues``
        to see whether they are consistent.
        """
        bins = list(bins)
        self.store.replace_all(bins)
        for placed in bins:
            if placed.original_id is not None:
                self.pool.take(placed.original_id)

    # -- batch operations --------------------------------------------------

    def auto_sort(self) -> SortResult:
        """Repack the placed bins and return leftovers to the catalog.

        Bins that no longer fit are removed from the grid and an
        equivalent catalog entry is put back into the pool for each.
        """
        result = self.engine.auto_sort(self.store.bins, self.grid.cols, self.grid.rows)
        self.store.replace_all(result.placed_bins)
        for leftover in result.unplaced_bins:
            self.pool.restore(self.pool.entry_for_bin(leftover))

        logger.info(
            "Auto-sorted %d bins, %d returned to catalog",
            len(result.placed_bins),
            len(result.unplaced_bins),
        )
        return result

    def generate_bins(
        self, catalog_sizes: Iterable[CatalogSize] | None = None
    ) -> list[Bin]:
        """Fill the free space with standard-size bins.

        Args:
            catalog_sizes: Sizes to use instead of the configured ones.

        Returns:
            The bins that were added, in creation order.
        """
        created = self.engine.generate_bins(
            self.store.bins, self.grid.cols, self.grid.rows, catalog_sizes
        )
        if created:
            self.store.add_bins(created)
        return created

    def reset(self) -> None:
        """Abandon any gesture, clear all bins and restore the catalog."""
        self.draw.cancel()
        self.drag.cancel()
        self.store.clear()
        self.pool.reset()
        logger.info("Layout reset")

    def summary(self) -> LayoutSummary:
        """Bin count and area usage of the current layout."""
        bins = self.store.bins
        return LayoutSummary(
            bin_count=len(bins),
            used_area=sum(b.area for b in bins),
            grid_area=self.grid.width_mm * self.grid.length_mm,
        )

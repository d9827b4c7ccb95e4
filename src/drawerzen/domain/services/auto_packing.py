"""Automatic layout: compaction of placed bins and gap filling.

Two batch operations over a snapshot of bins:

- ``auto_sort`` repacks existing bins first-fit decreasing, scanning the
  grid row-major, and reports bins that no longer fit instead of
  dropping them.
- ``generate_bins`` finds maximal empty rectangles (gaps) and fills them
  greedily with the largest standard size that fits, recomputing gaps
  after every placement.

Neither operation mutates its input, and both are deterministic for a
fixed input order and size list. Placement validity is always decided
by the placement validator.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Iterable, Sequence

from ..config import DEFAULT_LAYOUT_CONFIG, LayoutConfig
from ..coordinates import cell_to_mm, covered_cells
from ..entities import Bin
from ..results import SortResult
from ..value_objects import CatalogSize, Gap, GridSpec
from .placement import PlacementValidator

logger = logging.getLogger(__name__)

__all__ = ["AutoPackingEngine", "auto_sort", "find_gaps", "generate_bins"]


def _new_bin_id() -> str:
    return str(uuid.uuid4())


class AutoPackingEngine:
    """Batch packing algorithms over a grid of ``cols`` x ``rows`` cells.

    Attributes:
        config: Layout configuration (pitch, standard sizes, palette,
            gap threshold and iteration ceiling).
        validator: Placement predicates.
    """

    def __init__(
        self,
        config: LayoutConfig | None = None,
        validator: PlacementValidator | None = None,
        id_factory: Callable[[], str] = _new_bin_id,
    ) -> None:
        self.config = config or DEFAULT_LAYOUT_CONFIG
        self.validator = validator or PlacementValidator(self.config)
        self._id_factory = id_factory
        self.ceiling_hits = 0

    def auto_sort(self, bins: Sequence[Bin], cols: int, rows: int) -> SortResult:
        """Repack bins to minimize wasted space.

        Bins are ordered by area, then width (both descending), then
        input order. Each bin goes to the first row-major cell where it
        fits inside the grid without overlapping a bin committed earlier
        in the same pass. Bins are never rotated.

        Args:
            bins: Bins to repack.
            cols: Grid columns.
            rows: Grid rows.

        Returns:
            SortResult with the repositioned bins (ids preserved) and the
            bins that could not be placed anywhere.
        """
        grid = GridSpec(cols=cols, rows=rows, pitch=self.config.pitch)
        ordered = self._sort_for_packing(bins)
        placed: list[Bin] = []
        unplaced: list[Bin] = []

        for item in ordered:
            position = self._first_fit(item, placed, grid)
            if position is None:
                unplaced.append(item)
            else:
                placed.append(item.moved_to(*position))

        logger.debug(
            "Auto-sort placed %d of %d bins on %dx%d grid",
            len(placed),
            len(ordered),
            cols,
            rows,
        )
        return SortResult(placed_bins=tuple(placed), unplaced_bins=tuple(unplaced))

    def find_gaps(
        self,
        cols: int,
        rows: int,
        bins: Iterable[Bin],
        min_area: int | None = None,
    ) -> list[Gap]:
        """Find the maximal empty rectangles of the grid.

        A cell counts as occupied when any bin covers part of it. A gap
        is maximal when it cannot grow in any direction without covering
        an occupied cell or leaving the grid.

        Args:
            cols: Grid columns.
            rows: Grid rows.
            bins: Bins occupying the grid.
            min_area: Smallest gap area in cells to report. Defaults to
                the configured minimum.

        Returns:
            Gaps ordered by area (largest first), then top row, then left
            column, then width (widest first).
        """
        if min_area is None:
            min_area = self.config.min_gap_cells
        occupied = self._occupancy(cols, rows, bins)
        heights = [0] * cols
        gaps: list[Gap] = []

        for bottom in range(rows):
            for col in range(cols):
                heights[col] = 0 if occupied[bottom][col] else heights[col] + 1

            for left in range(cols):
                height = heights[left]
                if height == 0:
                    continue
                for right in range(left, cols):
                    height = min(height, heights[right])
                    if height == 0:
                        break
                    # Column left of the span is at least as tall, so any
                    # rectangle from here on can still grow leftwards.
                    if left > 0 and heights[left - 1] >= height:
                        break
                    if right + 1 < cols and heights[right + 1] >= height:
                        continue
                    if bottom + 1 < rows and not any(
                        occupied[bottom + 1][left : right + 1]
                    ):
                        continue
                    width = right - left + 1
                    if width * height >= min_area:
                        gaps.append(
                            Gap(
                                x=left,
                                y=bottom - height + 1,
                                width=width,
                                length=height,
                            )
                        )

        gaps.sort(key=lambda g: (-g.area, g.y, g.x, -g.width))
        return gaps

    def generate_bins(
        self,
        bins: Sequence[Bin],
        cols: int,
        rows: int,
        catalog_sizes: Iterable[CatalogSize] | None = None,
    ) -> list[Bin]:
        """Fill free space with new bins of standard sizes.

        Each iteration recomputes the gaps and places one bin: the
        largest size that fits the first gap able to take one, anchored
        at the gap's top-left cell. The loop stops when no gap accepts a
        bin or after ``max_fill_iterations`` iterations.

        Args:
            bins: Bins already placed; they are not modified.
            cols: Grid columns.
            rows: Grid rows.
            catalog_sizes: Sizes to choose from. Defaults to the
                configured standard sizes. Order does not matter, and
                sizes the bin constraints reject are skipped.

        Returns:
            The newly created bins, in creation order.
        """
        grid = GridSpec(cols=cols, rows=rows, pitch=self.config.pitch)
        sizes = self._sort_sizes(
            self.config.catalog_sizes if catalog_sizes is None else catalog_sizes
        )
        working = list(bins)
        created: list[Bin] = []
        iterations = 0

        while iterations < self.config.max_fill_iterations:
            iterations += 1
            gaps = self.find_gaps(cols, rows, working)
            if not gaps:
                break

            new_bin = None
            for gap in gaps:
                new_bin = self._fill_gap(gap, sizes, working, grid, len(created))
                if new_bin is not None:
                    break
            if new_bin is None:
                break

            working.append(new_bin)
            created.append(new_bin)
        else:
            self.ceiling_hits += 1
            logger.warning(
                "Gap fill stopped at iteration ceiling (%d) after placing %d bins",
                self.config.max_fill_iterations,
                len(created),
            )

        logger.info(
            "Generated %d bins in %d iterations on %dx%d grid",
            len(created),
            iterations,
            cols,
            rows,
        )
        return created

    def _sort_for_packing(self, bins: Sequence[Bin]) -> list[Bin]:
        # sorted() is stable, so equal keys keep input order
        return sorted(bins, key=lambda b: (-b.area, -b.width))

    def _sort_sizes(self, sizes: Iterable[CatalogSize]) -> list[CatalogSize]:
        # Sizes outside the bin constraints would create invalid bins
        allowed = [
            s for s in sizes if self.validator.validate_bin_dimensions(s.width, s.length)
        ]
        return sorted(allowed, key=lambda s: (-s.area, -s.width))

    def _first_fit(
        self, item: Bin, placed: list[Bin], grid: GridSpec
    ) -> tuple[float, float] | None:
        pitch = grid.pitch
        for row in range(grid.rows):
            y = cell_to_mm(row, pitch)
            if y + item.length > grid.length_mm:
                return None
            for col in range(grid.cols):
                x = cell_to_mm(col, pitch)
                if x + item.width > grid.width_mm:
                    break
                candidate = item.moved_to(x, y)
                if self.validator.is_valid_placement(candidate, placed, grid):
                    return x, y
        return None

    def _fill_gap(
        self,
        gap: Gap,
        sizes: list[CatalogSize],
        working: list[Bin],
        grid: GridSpec,
        counter: int,
    ) -> Bin | None:
        pitch = grid.pitch
        gap_width = cell_to_mm(gap.width, pitch)
        gap_length = cell_to_mm(gap.length, pitch)

        for size in sizes:
            if size.width > gap_width or size.length > gap_length:
                continue
            candidate = Bin(
                id=self._id_factory(),
                x=cell_to_mm(gap.x, pitch),
                y=cell_to_mm(gap.y, pitch),
                width=size.width,
                length=size.length,
                height=self.config.default_bin_height,
                name=f"Auto {counter + 1}",
                color=self.config.palette[counter % len(self.config.palette)],
            )
            if self.validator.is_valid_placement(candidate, working, grid):
                return candidate
        return None

    def _occupancy(
        self, cols: int, rows: int, bins: Iterable[Bin]
    ) -> list[list[bool]]:
        pitch = self.config.pitch
        occupied = [[False] * cols for _ in range(rows)]
        for b in bins:
            col_span, row_span = covered_cells(
                b.x, b.y, b.width, b.length, cols, rows, pitch
            )
            for row in row_span:
                for col in col_span:
                    occupied[row][col] = True
        return occupied


def auto_sort(
    bins: Sequence[Bin],
    cols: int,
    rows: int,
    config: LayoutConfig | None = None,
) -> SortResult:
    """Repack ``bins`` on a ``cols`` x ``rows`` grid. See ``AutoPackingEngine``."""
    return AutoPackingEngine(config).auto_sort(bins, cols, rows)


def find_gaps(
    cols: int,
    rows: int,
    bins: Iterable[Bin],
    min_area: int | None = None,
    config: LayoutConfig | None = None,
) -> list[Gap]:
    """Maximal empty rectangles of the grid. See ``AutoPackingEngine``."""
    return AutoPackingEngine(config).find_gaps(cols, rows, bins, min_area)


def generate_bins(
    bins: Sequence[Bin],
    cols: int,
    rows: int,
    catalog_sizes: Iterable[CatalogSize] | None = None,
    config: LayoutConfig | None = None,
) -> list[Bin]:
    """Fill the free space of the grid. See ``AutoPackingEngine``."""
    return AutoPackingEngine(config).generate_bins(bins, cols, rows, catalog_sizes)

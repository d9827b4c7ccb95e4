"""Application commands (use cases) for saved drawer layouts."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from drawerzen.domain import (
    Bin,
    CatalogEntry,
    CatalogSize,
    Drawer,
    GridSpec,
    LayoutConfig,
    PlacementErrorKind,
    PlacementValidator,
)

from .designer import LayoutDesigner
from .dtos import LayoutIssue, LayoutOutput

logger = logging.getLogger(__name__)


def find_layout_issues(
    bins: Sequence[Bin],
    grid: GridSpec,
    validator: PlacementValidator | None = None,
) -> list[LayoutIssue]:
    """Check placed bins against the layout invariants.

    Every bin is checked for a duplicate id, its size, its bounds and
    collisions with the bins listed before it, so each overlapping pair
    is reported once. Bins taken from the catalog (``original_id`` set)
    keep the catalog entry's size and are not size checked, as on drop.

    Args:
        bins: Bins in layout order.
        grid: Grid the bins are placed on.
        validator: Placement predicates. Defaults to the standard ones.

    Returns:
        Issues in bin order; empty when the layout is consistent.
    """
    validator = validator or PlacementValidator()
    issues: list[LayoutIssue] = []
    seen: set[str] = set()

    for index, item in enumerate(bins):
        if item.id in seen:
            issues.append(
                LayoutIssue(
                    bin_id=item.id,
                    error_kind=PlacementErrorKind.COLLISION,
                    message=f"Bin '{item.id}' appears more than once",
                )
            )
        seen.add(item.id)

        if item.original_id is None and not validator.validate_bin_dimensions(
            item.width, item.length
        ):
            issues.append(
                LayoutIssue(
                    bin_id=item.id,
                    error_kind=PlacementErrorKind.SIZE_INVALID,
                    message=(
                        f"Bin '{item.id}' size {item.width:g}x{item.length:g}mm "
                        "is outside the bin constraints"
                    ),
                )
            )
        if not validator.check_bounds(item, grid):
            issues.append(
                LayoutIssue(
                    bin_id=item.id,
                    error_kind=PlacementErrorKind.OUT_OF_BOUNDS,
                    message=(
                        f"Bin '{item.id}' at ({item.x:g}, {item.y:g}) extends past "
                        f"the {grid.width_mm:g}x{grid.length_mm:g}mm grid"
                    ),
                )
            )
        for other in bins[:index]:
            if other.id != item.id and validator.check_collision(item, [other]):
                issues.append(
                    LayoutIssue(
                        bin_id=item.id,
                        error_kind=PlacementErrorKind.COLLISION,
                        message=f"Bin '{item.id}' overlaps bin '{other.id}'",
                        other_id=other.id,
                    )
                )
    return issues


class LayoutCommand:
    """Validate, auto-sort or gap-fill a saved layout.

    Each method builds a fresh ``LayoutDesigner`` for the drawer, loads
    the saved bins into it and reports the resulting layout.
    """

    def __init__(
        self,
        config: LayoutConfig | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.config = config
        self.id_factory = id_factory

    def validate(
        self,
        drawer: Drawer,
        bins: Iterable[Bin],
        catalog: Iterable[CatalogEntry] = (),
    ) -> LayoutOutput:
        """Report invariant violations of a saved layout without changing it."""
        designer = self._designer(drawer, bins, catalog)
        return self._output(designer)

    def sort(
        self,
        drawer: Drawer,
        bins: Iterable[Bin],
        catalog: Iterable[CatalogEntry] = (),
    ) -> LayoutOutput:
        """Repack a saved layout.

        Only bin dimensions matter, so the saved positions may be
        inconsistent. Bins that do not fit are returned to the catalog.
        """
        designer = self._designer(drawer, bins, catalog)
        result = designer.auto_sort()
        return self._output(designer, unplaced=result.unplaced_bins)

    def fill(
        self,
        drawer: Drawer,
        bins: Iterable[Bin],
        catalog: Iterable[CatalogEntry] = (),
        catalog_sizes: Iterable[CatalogSize] | None = None,
    ) -> LayoutOutput:
        """Fill the free space of a saved layout with standard bins.

        A layout that already violates an invariant is left untouched and
        its issues are reported instead.
        """
        designer = self._designer(drawer, bins, catalog)
        issues = find_layout_issues(designer.bins, designer.grid, designer.validator)
        if issues:
            logger.warning(
                "Refusing to fill a layout with %d invariant violations", len(issues)
            )
            return self._output(designer, issues=issues)

        created = designer.generate_bins(catalog_sizes)
        return self._output(designer, created=tuple(created))

    def _designer(
        self,
        drawer: Drawer,
        bins: Iterable[Bin],
        catalog: Iterable[CatalogEntry],
    ) -> LayoutDesigner:
        designer = LayoutDesigner(
            drawer, catalog, config=self.config, id_factory=self.id_factory
        )
        designer.load_bins(bins)
        return designer

    def _output(
        self,
        designer: LayoutDesigner,
        created: tuple[Bin, ...] = (),
        unplaced: tuple[Bin, ...] = (),
        issues: list[LayoutIssue] | None = None,
    ) -> LayoutOutput:
        if issues is None:
            issues = find_layout_issues(
                designer.bins, designer.grid, designer.validator
            )
        return LayoutOutput(
            drawer=designer.drawer,
            grid=designer.grid,
            bins=designer.bins,
            summary=designer.summary(),
            available_entries=designer.available_entries,
            created_bins=created,
            unplaced_bins=unplaced,
            issues=issues,
        )

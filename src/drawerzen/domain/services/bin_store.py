"""Authoritative in-memory collection of placed bins."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator

from ..entities import Bin
from ..results import PlacementResult
from ..value_objects import GridSpec, PlacementErrorKind
from .placement import PlacementValidator

if TYPE_CHECKING:
    from drawerzen.contracts.protocols import UndoHook

logger = logging.getLogger(__name__)

__all__ = ["BinStore"]


class BinStore:
    """Placed bins plus the current selection.

    Every mutating method validates first and applies second. A rejected
    mutation leaves the store untouched and reports the reason through
    the returned ``PlacementResult``. The optional undo hook receives the
    bin list immediately before each applied mutation.

    Attributes:
        grid: Grid the bins are placed on.
        validator: Placement predicates.
        undo_hook: Optional receiver of pre-mutation snapshots.
    """

    def __init__(
        self,
        grid: GridSpec,
        validator: PlacementValidator | None = None,
        undo_hook: UndoHook | None = None,
    ) -> None:
        self.grid = grid
        self.validator = validator or PlacementValidator()
        self.undo_hook = undo_hook
        self._bins: list[Bin] = []
        self._selected_id: str | None = None

    def __len__(self) -> int:
        return len(self._bins)

    def __iter__(self) -> Iterator[Bin]:
        return iter(tuple(self._bins))

    def __contains__(self, bin_id: object) -> bool:
        return any(b.id == bin_id for b in self._bins)

    @property
    def bins(self) -> tuple[Bin, ...]:
        """Snapshot of the placed bins in insertion order."""
        return tuple(self._bins)

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected_bin(self) -> Bin | None:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def get(self, bin_id: str) -> Bin | None:
        """Look up a placed bin by id."""
        for b in self._bins:
            if b.id == bin_id:
                return b
        return None

    def add_bin(self, bin: Bin, check_size: bool = True) -> PlacementResult:
        """Place a new bin.

        Args:
            bin: The bin to add. Its id must not already be placed.
            check_size: Validate the bin dimensions against the size
                constraints as well as bounds and collisions.

        Returns:
            PlacementResult carrying the stored bin.

        Raises:
            ValueError: If a bin with the same id is already placed.
        """
        if bin.id in self:
            raise ValueError(f"Bin '{bin.id}' is already placed")

        error = self.validator.placement_error(
            bin, self._bins, self.grid, check_size=check_size
        )
        if error is not None:
            logger.debug("Rejected bin %s: %s", bin.id, error.value)
            return PlacementResult.failed(error, bin)

        self._push_undo()
        self._bins.append(bin)
        return PlacementResult.ok(bin)

    def add_bins(self, bins: Iterable[Bin]) -> list[PlacementResult]:
        """Place several bins behind a single undo snapshot.

        Each bin is validated against the store including the bins added
        before it in the same call. Rejected bins are skipped.
        """
        results: list[PlacementResult] = []
        accepted: list[Bin] = []
        for bin in bins:
            if bin.id in self or any(b.id == bin.id for b in accepted):
                raise ValueError(f"Bin '{bin.id}' is already placed")
            error = self.validator.placement_error(
                bin, [*self._bins, *accepted], self.grid, check_size=False
            )
            if error is None:
                accepted.append(bin)
                results.append(PlacementResult.ok(bin))
            else:
                results.append(PlacementResult.failed(error, bin))

        if accepted:
            self._push_undo()
            self._bins.extend(accepted)
        return results

    def remove_bin(self, bin_id: str) -> PlacementResult:
        """Remove a placed bin, clearing the selection if it pointed at it."""
        existing = self.get(bin_id)
        if existing is None:
            return PlacementResult.failed(PlacementErrorKind.NOT_FOUND)

        self._push_undo()
        self._bins = [b for b in self._bins if b.id != bin_id]
        if self._selected_id == bin_id:
            self._selected_id = None
        return PlacementResult.ok(existing)

    def move_bin(self, bin_id: str, x: float, y: float) -> PlacementResult:
        """Move a placed bin to a new top-left position, keeping its id."""
        existing = self.get(bin_id)
        if existing is None:
            return PlacementResult.failed(PlacementErrorKind.NOT_FOUND)

        moved = existing.moved_to(x, y)
        error = self.validator.placement_error(
            moved, self._bins, self.grid, exclude_id=bin_id
        )
        if error is not None:
            return PlacementResult.failed(error, existing)

        self._push_undo()
        self._replace(moved)
        return PlacementResult.ok(moved)

    def update_bin(self, bin: Bin) -> PlacementResult:
        """Replace a placed bin with an edited version carrying the same id.

        Size, bounds and collision are validated for the edited bin.
        """
        if self.get(bin.id) is None:
            return PlacementResult.failed(PlacementErrorKind.NOT_FOUND)

        error = self.validator.placement_error(
            bin, self._bins, self.grid, exclude_id=bin.id, check_size=True
        )
        if error is not None:
            return PlacementResult.failed(error, bin)

        self._push_undo()
        self._replace(bin)
        return PlacementResult.ok(bin)

    def select_bin(self, bin_id: str | None) -> PlacementResult:
        """Select a bin, or clear the selection with ``None``."""
        if bin_id is None:
            self._selected_id = None
            return PlacementResult.ok()

        existing = self.get(bin_id)
        if existing is None:
            return PlacementResult.failed(PlacementErrorKind.NOT_FOUND)
        self._selected_id = bin_id
        return PlacementResult.ok(existing)

    def replace_all(self, bins: Iterable[Bin]) -> None:
        """Swap in a complete layout, such as an auto-sort result.

        The caller is responsible for the layout being valid; packing
        results are validated by the engine that produced them.
        """
        new_bins = list(bins)
        self._push_undo()
        self._bins = new_bins
        if self._selected_id is not None and self._selected_id not in self:
            self._selected_id = None

    def clear(self) -> None:
        """Remove every bin and the selection."""
        if self._bins:
            self._push_undo()
        self._bins = []
        self._selected_id = None

    def _replace(self, bin: Bin) -> None:
        self._bins = [bin if b.id == bin.id else b for b in self._bins]

    def _push_undo(self) -> None:
        if self.undo_hook is not None:
            self.undo_hook.push_snapshot(tuple(self._bins))

"""Result types returned by mutations, gestures and packing passes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .entities import Bin
from .value_objects import PlacementErrorKind


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of a mutating operation on the bin store.

    A failed result guarantees the store was left unchanged.

    Attributes:
        success: Whether the mutation was applied.
        error_kind: Why the mutation was rejected, None on success.
        bin: The bin as stored after the mutation (or the bin that was
            removed), None when no bin is involved.
    """

    success: bool
    error_kind: PlacementErrorKind | None = None
    bin: Bin | None = None

    def __post_init__(self) -> None:
        if self.success and self.error_kind is not None:
            raise ValueError("Successful result cannot carry an error kind")
        if not self.success and self.error_kind is None:
            raise ValueError("Failed result requires an error kind")

    @classmethod
    def ok(cls, bin: Bin | None = None) -> PlacementResult:
        return cls(success=True, bin=bin)

    @classmethod
    def failed(
        cls, error_kind: PlacementErrorKind, bin: Bin | None = None
    ) -> PlacementResult:
        return cls(success=False, error_kind=error_kind, bin=bin)


@dataclass(frozen=True)
class SortResult:
    """Result of an auto-sort pass.

    ``len(placed_bins) + len(unplaced_bins)`` always equals the number
    of bins passed in.
    """

    placed_bins: tuple[Bin, ...]
    unplaced_bins: tuple[Bin, ...]

    @property
    def total(self) -> int:
        return len(self.placed_bins) + len(self.unplaced_bins)


class GestureOutcome(str, Enum):
    """Terminal state a gesture ended in before returning to idle."""

    COMMITTED = "committed"
    CANCELLED = "cancelled"
    DROPPED = "dropped"
    REVERTED = "reverted"


@dataclass(frozen=True)
class GestureResult:
    """How a draw or drag gesture ended.

    Attributes:
        outcome: Terminal state of the gesture.
        error_kind: Rejection reason for a cancelled or reverted gesture
            that attempted a placement.
        bin: Bin created, moved or removed by the gesture.
    """

    outcome: GestureOutcome
    error_kind: PlacementErrorKind | None = None
    bin: Bin | None = None

    @property
    def mutated(self) -> bool:
        """True when the gesture changed the bin store."""
        return self.outcome in (GestureOutcome.COMMITTED, GestureOutcome.DROPPED)


@dataclass(frozen=True)
class LayoutSummary:
    """Occupancy figures for a layout."""

    bin_count: int
    used_area: float
    grid_area: float

    @property
    def fill_percentage(self) -> float:
        """Share of the grid area covered by bins."""
        if self.grid_area <= 0:
            return 0.0
        return self.used_area / self.grid_area * 100

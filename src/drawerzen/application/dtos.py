"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from drawerzen.domain import (
    Bin,
    CatalogEntry,
    Drawer,
    GridSpec,
    LayoutSummary,
    PlacementErrorKind,
)


@dataclass(frozen=True)
class LayoutIssue:
    """A placed bin that breaks a layout invariant.

    Attributes:
        bin_id: Offending bin.
        error_kind: Which invariant is broken.
        message: Human-readable description.
        other_id: The bin it collides with, for collisions.
    """

    bin_id: str
    error_kind: PlacementErrorKind
    message: str
    other_id: str | None = None


@dataclass
class LayoutOutput:
    """Output DTO for a layout command."""

    drawer: Drawer
    grid: GridSpec
    bins: tuple[Bin, ...]
    summary: LayoutSummary
    available_entries: tuple[CatalogEntry, ...] = ()
    created_bins: tuple[Bin, ...] = ()
    unplaced_bins: tuple[Bin, ...] = ()
    issues: list[LayoutIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the layout has no invariant violations."""
        return not self.issues

"""Pool of catalog entries waiting to be placed (the carousel)."""

from __future__ import annotations

from typing import Iterable

from ..entities import Bin
from ..value_objects import CatalogEntry

__all__ = ["CatalogPool"]


class CatalogPool:
    """Tracks which catalog entries are still available for placement.

    The known catalog is reference data and never changes. Only the list
    of available entries grows and shrinks as bins move between the pool
    and the grid.

    Attributes:
        catalog: Every entry the pool was created with.
    """

    def __init__(self, entries: Iterable[CatalogEntry] = ()) -> None:
        self.catalog: tuple[CatalogEntry, ...] = tuple(entries)
        self._available: list[CatalogEntry] = list(self.catalog)

    def __len__(self) -> int:
        return len(self._available)

    def __contains__(self, entry_id: object) -> bool:
        return any(e.id == entry_id for e in self._available)

    @property
    def available(self) -> tuple[CatalogEntry, ...]:
        """Entries not currently placed, in pool order."""
        return tuple(self._available)

    def get(self, entry_id: str) -> CatalogEntry | None:
        """Find an available entry by id."""
        for entry in self._available:
            if entry.id == entry_id:
                return entry
        return None

    def find_known(self, entry_id: str | None) -> CatalogEntry | None:
        """Find an entry of the original catalog by id."""
        if entry_id is None:
            return None
        for entry in self.catalog:
            if entry.id == entry_id:
                return entry
        return None

    def take(self, entry_id: str) -> CatalogEntry | None:
        """Remove an entry from the pool and return it."""
        entry = self.get(entry_id)
        if entry is not None:
            self._available.remove(entry)
        return entry

    def restore(self, entry: CatalogEntry) -> None:
        """Put an entry back into the pool unless it is already there."""
        if entry.id not in self:
            self._available.append(entry)

    def entry_for_bin(self, bin: Bin) -> CatalogEntry:
        """Catalog entry equivalent to a placed bin.

        Uses the original catalog entry when the bin came from one,
        otherwise synthesizes an entry from the bin's attributes.
        """
        known = self.find_known(bin.original_id)
        if known is not None:
            return known
        return CatalogEntry(
            id=bin.original_id or bin.id,
            label=bin.name,
            width=bin.width,
            length=bin.length,
            color=bin.color,
        )

    def reset(self) -> None:
        """Make every catalog entry available again."""
        self._available = list(self.catalog)

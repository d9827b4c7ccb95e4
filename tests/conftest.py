"""Pytest configuration and shared fixtures for drawer layout tests."""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Callable

import pytest

from drawerzen.application import LayoutDesigner
from drawerzen.domain import Bin, CatalogEntry, Drawer, GridSpec

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "layouts"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests that drive the CLI or the REST API end to end"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Undo hook double
# =============================================================================


class RecordingUndoHook:
    """Undo hook that keeps every snapshot it receives."""

    def __init__(self) -> None:
        self.snapshots: list[tuple[Bin, ...]] = []

    def push_snapshot(self, bins: tuple[Bin, ...]) -> None:
        self.snapshots.append(bins)


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def fixtures_path() -> Path:
    """Directory holding the JSON layout fixtures."""
    return FIXTURES_PATH


@pytest.fixture
def drawer() -> Drawer:
    """A 400 x 300 mm drawer (19 x 14 cells)."""
    return Drawer(width=400.0, length=300.0)


@pytest.fixture
def grid(drawer: Drawer) -> GridSpec:
    return GridSpec.for_drawer(drawer)


@pytest.fixture
def make_bin() -> Callable[..., Bin]:
    """Factory for bins with sequential ids.

    Positions and sizes are given in cells and converted to millimeters.
    """
    counter = itertools.count(1)

    def _make(x: int, y: int, width: int, length: int, **kwargs) -> Bin:
        kwargs.setdefault("id", f"bin-{next(counter)}")
        return Bin(x=x * 21.0, y=y * 21.0, width=width * 21.0, length=length * 21.0, **kwargs)

    return _make


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic id factory producing new-1, new-2, ..."""
    counter = itertools.count(1)
    return lambda: f"new-{next(counter)}"


@pytest.fixture
def catalog() -> list[CatalogEntry]:
    return [
        CatalogEntry(id="cat-a", label="Utensils", width=84.0, length=42.0, color="#90CAF9"),
        CatalogEntry(id="cat-b", label="Spices", width=42.0, length=42.0, color="#A5D6A7"),
    ]


@pytest.fixture
def undo_hook() -> RecordingUndoHook:
    return RecordingUndoHook()


@pytest.fixture
def designer(
    drawer: Drawer,
    catalog: list[CatalogEntry],
    undo_hook: RecordingUndoHook,
    id_factory: Callable[[], str],
) -> LayoutDesigner:
    """Designer over the 400 x 300 drawer with a 20px cell size."""
    return LayoutDesigner(
        drawer,
        catalog,
        undo_hook=undo_hook,
        cell_pixel_size=20.0,
        id_factory=id_factory,
    )

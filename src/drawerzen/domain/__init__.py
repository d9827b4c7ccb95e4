"""Domain layer - grid placement and packing engine."""

from .config import DEFAULT_LAYOUT_CONFIG, BinConstraints, LayoutConfig
from .entities import Bin
from .results import (
    GestureOutcome,
    GestureResult,
    LayoutSummary,
    PlacementResult,
    SortResult,
)
from .services import (
    AutoPackingEngine,
    BinStore,
    CatalogPool,
    DragController,
    DrawController,
    GestureTracker,
    PlacementValidator,
)
from .value_objects import (
    CatalogEntry,
    CatalogSize,
    Cell,
    Colorway,
    Drawer,
    Footprint,
    Gap,
    GridSpec,
    LengthUnit,
    PlacementErrorKind,
    PreviewDescriptor,
)

__all__ = [
    "AutoPackingEngine",
    "Bin",
    "BinConstraints",
    "BinStore",
    "CatalogEntry",
    "CatalogPool",
    "CatalogSize",
    "Cell",
    "Colorway",
    "DEFAULT_LAYOUT_CONFIG",
    "DragController",
    "DrawController",
    "Drawer",
    "Footprint",
    "Gap",
    "GestureOutcome",
    "GestureResult",
    "GestureTracker",
    "GridSpec",
    "LayoutConfig",
    "LayoutSummary",
    "LengthUnit",
    "PlacementErrorKind",
    "PlacementResult",
    "PlacementValidator",
    "PreviewDescriptor",
    "SortResult",
]

"""Domain services for drawer layouts.

This package provides the engine behind the layout designer:
- Placement validation (bounds, collision, bin size)
- The bin store and the catalog pool
- Draw and drag gesture controllers
- Auto-sort and gap fill
"""

from .auto_packing import AutoPackingEngine, auto_sort, find_gaps, generate_bins
from .bin_store import BinStore
from .catalog_pool import CatalogPool
from .drag_controller import DragController
from .draw_controller import DrawController
from .gestures import DragPayload, Dragging, Drawing, GestureState, GestureTracker, Idle
from .placement import (
    PlacementValidator,
    check_bounds,
    check_collision,
    is_valid_placement,
    rectangles_overlap,
    validate_bin_dimensions,
    validate_bin_size,
)

__all__ = [
    "AutoPackingEngine",
    "BinStore",
    "CatalogPool",
    "DragController",
    "DragPayload",
    "Dragging",
    "DrawController",
    "Drawing",
    "GestureState",
    "GestureTracker",
    "Idle",
    "PlacementValidator",
    "auto_sort",
    "check_bounds",
    "check_collision",
    "find_gaps",
    "generate_bins",
    "is_valid_placement",
    "rectangles_overlap",
    "validate_bin_dimensions",
    "validate_bin_size",
]

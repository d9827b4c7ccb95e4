"""Infrastructure layer - formatters and exporters."""

from .formatters import GridDiagramFormatter, JsonExporter, LayoutSummaryFormatter

__all__ = [
    "GridDiagramFormatter",
    "JsonExporter",
    "LayoutSummaryFormatter",
]

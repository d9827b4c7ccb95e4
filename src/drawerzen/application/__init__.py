"""Application layer - designer session and use cases."""

from .commands import LayoutCommand, find_layout_issues
from .designer import LayoutDesigner
from .dtos import LayoutIssue, LayoutOutput

__all__ = [
    "LayoutCommand",
    "LayoutDesigner",
    "LayoutIssue",
    "LayoutOutput",
    "find_layout_issues",
]

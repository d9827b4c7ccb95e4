"""Output formatters and exporters for drawer layouts."""

from __future__ import annotations

import json
import string
from typing import Any

from drawerzen.application.dtos import LayoutIssue, LayoutOutput
from drawerzen.domain import Bin, GridSpec
from drawerzen.domain.coordinates import covered_cells

# Glyphs assigned to bins in layout order
_BIN_GLYPHS = string.ascii_uppercase + string.ascii_lowercase + string.digits


class GridDiagramFormatter:
    """Formats ASCII diagrams of the drawer grid.

    Each grid cell is one character: ``.`` for a free cell, a letter for
    the bin covering it, ``*`` where bins overlap.
    """

    def __init__(self, max_cols: int = 120) -> None:
        self.max_cols = max_cols

    def format(self, output: LayoutOutput) -> str:
        """Generate an ASCII diagram and legend for a layout."""
        grid = output.grid
        lines = [
            "DRAWER GRID DIAGRAM",
            "=" * 60,
            "",
        ]
        if grid.cols == 0 or grid.rows == 0:
            lines.append("Grid is empty.")
            return "\n".join(lines)
        if grid.cols > self.max_cols:
            lines.append(f"Grid too wide to draw ({grid.cols} columns).")
            return "\n".join(lines)

        glyphs = self._assign_glyphs(output.bins)
        canvas = [["." for _ in range(grid.cols)] for _ in range(grid.rows)]
        for b in output.bins:
            self._paint(canvas, grid, b, glyphs[b.id])

        border = "+" + "-" * grid.cols + "+"
        lines.append(border)
        for row in canvas:
            lines.append("|" + "".join(row) + "|")
        lines.append(border)

        lines.append("")
        for b in output.bins:
            label = b.name or b.id
            lines.append(
                f"  {glyphs[b.id]}  {label:<24} {b.width:g}x{b.length:g}mm "
                f"at ({b.x:g}, {b.y:g})"
            )
        return "\n".join(lines)

    def _assign_glyphs(self, bins: tuple[Bin, ...]) -> dict[str, str]:
        glyphs: dict[str, str] = {}
        for index, b in enumerate(bins):
            glyphs[b.id] = _BIN_GLYPHS[index] if index < len(_BIN_GLYPHS) else "#"
        return glyphs

    def _paint(
        self, canvas: list[list[str]], grid: GridSpec, bin: Bin, glyph: str
    ) -> None:
        """Mark the cells ``bin`` covers, clipped to the grid."""
        col_span, row_span = covered_cells(
            bin.x, bin.y, bin.width, bin.length, grid.cols, grid.rows, grid.pitch
        )
        for row in row_span:
            for col in col_span:
                canvas[row][col] = "*" if canvas[row][col] != "." else glyph


class LayoutSummaryFormatter:
    """Formats a text summary of a layout and its issues."""

    def format(self, output: LayoutOutput) -> str:
        drawer = output.drawer
        grid = output.grid
        summary = output.summary
        lines = [
            "LAYOUT SUMMARY",
            "=" * 60,
            f"Drawer: {drawer.width:g} x {drawer.length:g} mm"
            + (f" x {drawer.height:g} mm" if drawer.height else ""),
            f"Grid: {grid.cols} x {grid.rows} cells ({grid.pitch:g}mm pitch)",
            f"Bins placed: {summary.bin_count}",
            f"Fill: {summary.fill_percentage:.1f}%",
        ]
        if output.created_bins:
            lines.append(f"Bins generated: {len(output.created_bins)}")
        if output.unplaced_bins:
            lines.append(
                f"Bins returned to catalog: {len(output.unplaced_bins)} "
                f"({', '.join(b.name or b.id for b in output.unplaced_bins)})"
            )
        if output.available_entries:
            lines.append(f"Catalog entries available: {len(output.available_entries)}")

        if output.issues:
            lines.append("")
            lines.append(f"Layout issues ({len(output.issues)}):")
            for issue in output.issues:
                lines.append(f"  - [{issue.error_kind.value}] {issue.message}")
        return "\n".join(lines)


class JsonExporter:
    """Exports layout data as JSON."""

    def export(self, output: LayoutOutput) -> str:
        """Export layout output as JSON string."""
        return json.dumps(self.to_dict(output), indent=2)

    def to_dict(self, output: LayoutOutput) -> dict[str, Any]:
        drawer = output.drawer
        grid = output.grid
        return {
            "is_valid": output.is_valid,
            "drawer": {
                "width": drawer.width,
                "length": drawer.length,
                "height": drawer.height,
                "unit": drawer.unit.value,
            },
            "grid": {"cols": grid.cols, "rows": grid.rows, "pitch": grid.pitch},
            "summary": {
                "bin_count": output.summary.bin_count,
                "used_area": output.summary.used_area,
                "fill_percentage": round(output.summary.fill_percentage, 2),
            },
            "bins": [self._format_bin(b) for b in output.bins],
            "created_bin_ids": [b.id for b in output.created_bins],
            "unplaced_bins": [self._format_bin(b) for b in output.unplaced_bins],
            "issues": [self._format_issue(i) for i in output.issues],
        }

    def _format_bin(self, bin: Bin) -> dict[str, Any]:
        return {
            "id": bin.id,
            "x": bin.x,
            "y": bin.y,
            "width": bin.width,
            "length": bin.length,
            "height": bin.height,
            "name": bin.name,
            "color": bin.color,
            "colorway": bin.colorway,
            "shadow_board": bin.shadow_board,
            "original_id": bin.original_id,
        }

    def _format_issue(self, issue: LayoutIssue) -> dict[str, Any]:
        return {
            "bin_id": issue.bin_id,
            "error_kind": issue.error_kind.value,
            "message": issue.message,
            "other_id": issue.other_id,
        }

"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from drawerzen.web.schemas.common import GridSchema


class BinSchema(BaseModel):
    """Placed bin."""

    id: str = Field(..., description="Bin id")
    x: float = Field(..., description="Left edge in mm")
    y: float = Field(..., description="Top edge in mm")
    width: float = Field(..., description="Width in mm")
    length: float = Field(..., description="Length in mm")
    height: float = Field(..., description="Height in mm")
    name: str = Field(default="", description="Display name")
    color: str = Field(..., description="Display color")
    original_id: str | None = Field(
        default=None, description="Catalog entry the bin was placed from"
    )


class LayoutIssueSchema(BaseModel):
    """Layout invariant violation."""

    bin_id: str = Field(..., description="Offending bin")
    error_kind: str = Field(..., description="Violated invariant")
    message: str = Field(..., description="Human-readable description")
    other_id: str | None = Field(default=None, description="Colliding bin")


class LayoutSummarySchema(BaseModel):
    """Occupancy figures."""

    bin_count: int = Field(..., description="Number of placed bins")
    used_area: float = Field(..., description="Area covered by bins in mm^2")
    fill_percentage: float = Field(..., description="Share of the grid covered")


class LayoutResultSchema(BaseModel):
    """Response for layout validation, sort and fill."""

    is_valid: bool = Field(..., description="Whether the layout has no issues")
    grid: GridSchema = Field(..., description="Drawer grid")
    summary: LayoutSummarySchema = Field(..., description="Occupancy figures")
    bins: list[BinSchema] = Field(default_factory=list, description="Placed bins")
    created_bin_ids: list[str] = Field(
        default_factory=list, description="Bins added by gap fill"
    )
    unplaced_bins: list[BinSchema] = Field(
        default_factory=list, description="Bins returned to the catalog"
    )
    issues: list[LayoutIssueSchema] = Field(
        default_factory=list, description="Layout invariant violations"
    )
    layout: dict[str, Any] | None = Field(
        default=None, description="Updated layout file (sort and fill only)"
    )


class PlacementCheckSchema(BaseModel):
    """Response for a placement check."""

    is_valid: bool = Field(..., description="Whether the placement is allowed")
    error_kind: str | None = Field(
        default=None, description="Why the placement is rejected"
    )


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )

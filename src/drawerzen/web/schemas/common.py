"""Shared Pydantic schemas for the REST API."""

from pydantic import BaseModel, Field


class RectangleSchema(BaseModel):
    """Candidate rectangle in millimeters."""

    x: float = Field(..., description="Left edge in mm")
    y: float = Field(..., description="Top edge in mm")
    width: float = Field(..., gt=0, description="Width in mm")
    length: float = Field(..., gt=0, description="Length in mm")


class GridSchema(BaseModel):
    """Grid derived from the drawer."""

    cols: int = Field(..., description="Columns across the drawer width")
    rows: int = Field(..., description="Rows along the drawer length")
    pitch: float = Field(..., description="Cell size in mm")

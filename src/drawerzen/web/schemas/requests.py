"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from drawerzen.application.config.schema import (
    BinConstraintsSchema,
    DrawerSchema,
    PlacedBinSchema,
)
from drawerzen.web.schemas.common import RectangleSchema


class LayoutRequest(BaseModel):
    """Request carrying a complete layout file."""

    config: dict[str, Any] = Field(..., description="Layout file JSON")


class PlacementCheckRequest(BaseModel):
    """Request for checking a single candidate placement."""

    drawer: DrawerSchema = Field(..., description="Drawer footprint")
    constraints: BinConstraintsSchema = Field(
        default_factory=BinConstraintsSchema, description="Allowed bin dimensions"
    )
    bins: list[PlacedBinSchema] = Field(
        default_factory=list, description="Bins already placed"
    )
    candidate: RectangleSchema = Field(..., description="Rectangle to check")
    exclude_id: str | None = Field(
        default=None, description="Bin to ignore, usually the one being moved"
    )
    check_size: bool = Field(
        default=False, description="Also check the candidate against the constraints"
    )

"""Pydantic schemas for the REST API."""

from drawerzen.web.schemas.common import GridSchema, RectangleSchema
from drawerzen.web.schemas.requests import LayoutRequest, PlacementCheckRequest
from drawerzen.web.schemas.responses import (
    BinSchema,
    ErrorResponseSchema,
    LayoutIssueSchema,
    LayoutResultSchema,
    LayoutSummarySchema,
    PlacementCheckSchema,
)

__all__ = [
    # Common
    "GridSchema",
    "RectangleSchema",
    # Requests
    "LayoutRequest",
    "PlacementCheckRequest",
    # Responses
    "BinSchema",
    "ErrorResponseSchema",
    "LayoutIssueSchema",
    "LayoutResultSchema",
    "LayoutSummarySchema",
    "PlacementCheckSchema",
]

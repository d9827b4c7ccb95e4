"""Single placement check endpoint."""

from fastapi import APIRouter

from drawerzen.application.config import ConfigError
from drawerzen.domain import (
    Bin,
    BinConstraints,
    Drawer,
    Footprint,
    GridSpec,
    LayoutConfig,
    PlacementValidator,
)
from drawerzen.web.schemas.requests import PlacementCheckRequest
from drawerzen.web.schemas.responses import PlacementCheckSchema

router = APIRouter(prefix="/placement", tags=["placement"])


@router.post("/check", response_model=PlacementCheckSchema)
async def check_placement(request: PlacementCheckRequest) -> PlacementCheckSchema:
    """Check whether a rectangle may be placed among existing bins.

    Checks run in the order size (when requested), bounds, collision and
    the first failure is reported.
    """
    try:
        drawer = Drawer.from_units(
            width=request.drawer.width,
            length=request.drawer.length,
            height=request.drawer.height,
            unit=request.drawer.unit,
        )
        config = LayoutConfig(
            constraints=BinConstraints(**request.constraints.model_dump())
        )
        bins = [
            Bin(id=b.id, x=b.x, y=b.y, width=b.width, length=b.length)
            for b in request.bins
        ]
    except ValueError as e:
        raise ConfigError(message=str(e), error_type="layout") from e

    candidate = Footprint(**request.candidate.model_dump())
    grid = GridSpec.for_drawer(drawer, config.pitch)
    error = PlacementValidator(config).placement_error(
        candidate,
        bins,
        grid,
        exclude_id=request.exclude_id,
        check_size=request.check_size,
    )
    return PlacementCheckSchema(
        is_valid=error is None,
        error_kind=error.value if error is not None else None,
    )

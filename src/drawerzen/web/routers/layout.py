"""Layout file endpoints: validate, auto-sort and gap fill."""

import logging

from fastapi import APIRouter

from drawerzen.application import LayoutCommand, LayoutOutput
from drawerzen.application.config import (
    LayoutConfiguration,
    config_to_domain,
    layout_to_config,
    load_config_from_dict,
)
from drawerzen.infrastructure import JsonExporter
from drawerzen.web.dependencies import JsonExporterDep
from drawerzen.web.schemas.requests import LayoutRequest
from drawerzen.web.schemas.responses import LayoutResultSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/layout", tags=["layout"])


def _to_schema(
    output: LayoutOutput,
    exporter: JsonExporter,
    source: LayoutConfiguration | None = None,
) -> LayoutResultSchema:
    """Convert a layout command result to the response schema.

    When ``source`` is given the updated layout file is included.
    """
    result = LayoutResultSchema.model_validate(exporter.to_dict(output))
    if source is not None:
        result.layout = layout_to_config(source, output).model_dump(
            mode="json", exclude_none=True
        )
    return result


@router.post("/validate", response_model=LayoutResultSchema)
async def validate_layout(
    request: LayoutRequest, exporter: JsonExporterDep
) -> LayoutResultSchema:
    """Check a layout file's placed bins against the layout invariants.

    Raises:
        ConfigError: If the layout cannot be parsed (mapped to 422).
    """
    config = load_config_from_dict(request.config)
    drawer, layout_config, bins, catalog = config_to_domain(config)
    output = LayoutCommand(layout_config).validate(drawer, bins, catalog)
    return _to_schema(output, exporter)


@router.post("/sort", response_model=LayoutResultSchema)
async def sort_layout(
    request: LayoutRequest, exporter: JsonExporterDep
) -> LayoutResultSchema:
    """Repack the placed bins; leftovers are returned to the catalog."""
    config = load_config_from_dict(request.config)
    drawer, layout_config, bins, catalog = config_to_domain(config)
    output = LayoutCommand(layout_config).sort(drawer, bins, catalog)
    return _to_schema(output, exporter, source=config)


@router.post("/fill", response_model=LayoutResultSchema)
async def fill_layout(
    request: LayoutRequest, exporter: JsonExporterDep
) -> LayoutResultSchema:
    """Fill the free space with standard-size bins.

    A layout with issues is returned unchanged with ``is_valid`` false.
    """
    config = load_config_from_dict(request.config)
    drawer, layout_config, bins, catalog = config_to_domain(config)
    output = LayoutCommand(layout_config).fill(drawer, bins, catalog)
    if not output.is_valid:
        logger.info("Fill refused: %d layout issues", len(output.issues))
        return _to_schema(output, exporter)
    return _to_schema(output, exporter, source=config)

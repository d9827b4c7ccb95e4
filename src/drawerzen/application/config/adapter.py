"""Adapter between the layout file schema and domain objects.

Conversion functions turn a validated ``LayoutConfiguration`` into the
domain values the engine works with, and turn a processed layout back
into a ``LayoutConfiguration`` ready to be written out.
"""

from drawerzen.application.config.schema import (
    BinConstraintsSchema,
    CatalogEntrySchema,
    CatalogSizeSchema,
    DrawerSchema,
    LayoutConfiguration,
    PlacedBinSchema,
)
from drawerzen.application.config.loader import ConfigError
from drawerzen.application.dtos import LayoutOutput
from drawerzen.domain.config import BinConstraints, LayoutConfig
from drawerzen.domain.entities import Bin
from drawerzen.domain.value_objects import CatalogEntry, CatalogSize, Drawer


def config_to_drawer(config: LayoutConfiguration) -> Drawer:
    """Convert the drawer section to a ``Drawer`` in millimeters."""
    drawer = config.drawer
    return Drawer.from_units(
        width=drawer.width,
        length=drawer.length,
        height=drawer.height,
        unit=drawer.unit,
    )


def config_to_layout_config(config: LayoutConfiguration) -> LayoutConfig:
    """Build the engine configuration.

    Sections missing from the file keep the engine defaults.
    """
    constraints = config.constraints
    kwargs: dict = {
        "constraints": BinConstraints(
            min_width=constraints.min_width,
            max_width=constraints.max_width,
            min_length=constraints.min_length,
            max_length=constraints.max_length,
            min_area=constraints.min_area,
        )
    }
    if config.catalog_sizes is not None:
        kwargs["catalog_sizes"] = tuple(
            CatalogSize(width=s.width, length=s.length) for s in config.catalog_sizes
        )
    if config.packing is not None:
        kwargs["min_gap_cells"] = config.packing.min_gap_cells
        kwargs["max_fill_iterations"] = config.packing.max_fill_iterations
        if config.packing.palette is not None:
            kwargs["palette"] = tuple(config.packing.palette)
    return LayoutConfig(**kwargs)


def config_to_bins(config: LayoutConfiguration) -> list[Bin]:
    """Convert the placed bins, preserving file order."""
    return [
        Bin(
            id=b.id,
            x=b.x,
            y=b.y,
            width=b.width,
            length=b.length,
            height=b.height,
            name=b.name,
            color=b.color,
            colorway=b.colorway,
            shadow_board=b.shadow_board,
            original_id=b.original_id,
        )
        for b in config.bins
    ]


def config_to_catalog(config: LayoutConfiguration) -> list[CatalogEntry]:
    """Convert the catalog entries, preserving file order."""
    return [
        CatalogEntry(
            id=e.id,
            label=e.label or e.id,
            width=e.width,
            length=e.length,
            color=e.color,
        )
        for e in config.catalog
    ]


def config_to_domain(
    config: LayoutConfiguration,
) -> tuple[Drawer, LayoutConfig, list[Bin], list[CatalogEntry]]:
    """Convert a whole layout file to domain objects.

    Returns:
        The drawer, engine configuration, placed bins and catalog.

    Raises:
        ConfigError: With error_type "layout" when a domain constructor
            rejects a value the schema accepted.
    """
    try:
        return (
            config_to_drawer(config),
            config_to_layout_config(config),
            config_to_bins(config),
            config_to_catalog(config),
        )
    except ValueError as e:
        raise ConfigError(message=str(e), error_type="layout") from e


def bin_to_schema(bin: Bin) -> PlacedBinSchema:
    return PlacedBinSchema(
        id=bin.id,
        x=bin.x,
        y=bin.y,
        width=bin.width,
        length=bin.length,
        height=bin.height,
        name=bin.name,
        color=bin.color,
        colorway=bin.colorway,
        shadow_board=bin.shadow_board,
        original_id=bin.original_id,
    )


def layout_to_config(
    source: LayoutConfiguration, output: LayoutOutput
) -> LayoutConfiguration:
    """Write a processed layout back into the file schema.

    The drawer, constraints, sizes and packing options of ``source`` are
    kept as they are. The placed bins come from ``output``. Bins returned
    to the pool without a known catalog entry are appended to the
    catalog, so reloading the file makes them available again.

    Args:
        source: Layout file the output was computed from.
        output: Result of a layout command.

    Returns:
        A new LayoutConfiguration; ``source`` is not modified.
    """
    known_ids = {entry.id for entry in source.catalog}
    return LayoutConfiguration(
        schema_version=source.schema_version,
        drawer=DrawerSchema.model_validate(source.drawer.model_dump()),
        constraints=BinConstraintsSchema.model_validate(
            source.constraints.model_dump()
        ),
        catalog=[
            *(entry.model_copy() for entry in source.catalog),
            *(
                CatalogEntrySchema(
                    id=e.id,
                    label=e.label,
                    width=e.width,
                    length=e.length,
                    color=e.color,
                )
                for e in output.available_entries
                if e.id not in known_ids
            ),
        ],
        catalog_sizes=(
            None
            if source.catalog_sizes is None
            else [
                CatalogSizeSchema(width=s.width, length=s.length)
                for s in source.catalog_sizes
            ]
        ),
        packing=source.packing.model_copy() if source.packing is not None else None,
        bins=[bin_to_schema(b) for b in output.bins],
    )

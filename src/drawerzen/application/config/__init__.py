"""Layout file schema and loading system.

This package provides JSON-based layout loading and validation. It
includes Pydantic models for schema validation, a loader with
comprehensive error handling and adapters to and from domain objects.

Public API:
    - LayoutConfiguration: Root layout file model
    - DrawerSchema, BinConstraintsSchema, CatalogEntrySchema,
      CatalogSizeSchema, PlacedBinSchema, PackingSchema: Section models
    - load_config: Load a layout from a JSON file
    - load_config_from_dict: Load a layout from a dictionary
    - save_config: Write a layout to a JSON file
    - ConfigError: Exception for configuration errors
    - config_to_drawer, config_to_layout_config, config_to_bins,
      config_to_catalog, config_to_domain: Convert a layout file to domain objects
    - layout_to_config: Convert a processed layout back to the schema

Example:
    >>> from pathlib import Path
    >>> from drawerzen.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("drawer.json"))
    ...     print(f"Drawer: {config.drawer.width}x{config.drawer.length}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from drawerzen.application.config.adapter import (
    bin_to_schema,
    config_to_bins,
    config_to_catalog,
    config_to_domain,
    config_to_drawer,
    config_to_layout_config,
    layout_to_config,
)
from drawerzen.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
    save_config,
)
from drawerzen.application.config.schema import (
    SUPPORTED_VERSIONS,
    BinConstraintsSchema,
    CatalogEntrySchema,
    CatalogSizeSchema,
    DrawerSchema,
    LayoutConfiguration,
    PackingSchema,
    PlacedBinSchema,
)

__all__ = [
    "BinConstraintsSchema",
    "CatalogEntrySchema",
    "CatalogSizeSchema",
    "ConfigError",
    "DrawerSchema",
    "LayoutConfiguration",
    "PackingSchema",
    "PlacedBinSchema",
    "SUPPORTED_VERSIONS",
    "bin_to_schema",
    "config_to_bins",
    "config_to_catalog",
    "config_to_domain",
    "config_to_drawer",
    "config_to_layout_config",
    "layout_to_config",
    "load_config",
    "load_config_from_dict",
    "save_config",
]

"""Pydantic schema for saved drawer layout files.

A layout file describes one drawer, the bin size constraints, the
catalog of bins waiting to be placed, the standard sizes used by gap
fill and the bins already placed. All linear values are millimeters
except the drawer dimensions, which are given in ``drawer.unit``.
"""

from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from drawerzen.domain.constants import (
    DEFAULT_BIN_COLOR,
    DEFAULT_BIN_HEIGHT_MM,
    DEFAULT_MIN_GAP_CELLS,
    GRID_PITCH_MM,
    MAX_BIN_LENGTH_MM,
    MAX_BIN_WIDTH_MM,
    MAX_FILL_ITERATIONS,
    MIN_BIN_AREA_MM2,
    MIN_BIN_LENGTH_MM,
    MIN_BIN_WIDTH_MM,
    MM_PER_INCH,
)
from drawerzen.domain.value_objects import LengthUnit

# Supported schema versions for layout files
# Version 1.0: Drawer, constraints, catalog, catalog sizes and placed bins
# Version 1.1: Added packing options (gap threshold, fill ceiling, palette)
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})

_HEX_COLOR = r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$"

HexColor = Annotated[str, Field(pattern=_HEX_COLOR)]


class DrawerSchema(BaseModel):
    """Drawer footprint.

    Attributes:
        width: Interior width in ``unit``.
        length: Interior depth in ``unit``.
        height: Interior height in ``unit`` (optional).
        unit: Unit the dimensions are given in.
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0, le=5000.0)
    length: float = Field(..., gt=0, le=5000.0)
    height: float = Field(default=0.0, ge=0, le=1000.0)
    unit: LengthUnit = LengthUnit.MM

    @model_validator(mode="after")
    def validate_minimum_footprint(self) -> "DrawerSchema":
        """Ensure the drawer holds at least one grid cell each way."""
        factor = MM_PER_INCH if self.unit == LengthUnit.INCHES else 1.0
        if self.width * factor < GRID_PITCH_MM or self.length * factor < GRID_PITCH_MM:
            raise ValueError(
                f"Drawer width and length must be at least {GRID_PITCH_MM:g}mm"
            )
        return self


class BinConstraintsSchema(BaseModel):
    """Allowed bin dimensions in millimeters."""

    model_config = ConfigDict(extra="forbid")

    min_width: float = Field(default=MIN_BIN_WIDTH_MM, gt=0)
    max_width: float = Field(default=MAX_BIN_WIDTH_MM, gt=0)
    min_length: float = Field(default=MIN_BIN_LENGTH_MM, gt=0)
    max_length: float = Field(default=MAX_BIN_LENGTH_MM, gt=0)
    min_area: float = Field(
        default=MIN_BIN_AREA_MM2, ge=0, description="Minimum footprint in mm^2"
    )

    @model_validator(mode="after")
    def validate_ranges(self) -> "BinConstraintsSchema":
        """Ensure every maximum is at least its minimum."""
        if self.max_width < self.min_width:
            raise ValueError("max_width must be at least min_width")
        if self.max_length < self.min_length:
            raise ValueError("max_length must be at least min_length")
        return self


class CatalogEntrySchema(BaseModel):
    """A bin template waiting to be placed."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    label: str = ""
    width: float = Field(..., gt=0)
    length: float = Field(..., gt=0)
    color: HexColor = DEFAULT_BIN_COLOR


class CatalogSizeSchema(BaseModel):
    """Standard size offered to gap fill."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0)
    length: float = Field(..., gt=0)


class PlacedBinSchema(BaseModel):
    """A bin placed in the drawer.

    Positions are not range checked here; a bin outside the drawer is a
    layout issue reported by ``validate``, not a malformed file.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    x: float
    y: float
    width: float = Field(..., gt=0)
    length: float = Field(..., gt=0)
    height: float = Field(default=DEFAULT_BIN_HEIGHT_MM, ge=0)
    name: str = ""
    color: HexColor = DEFAULT_BIN_COLOR
    colorway: str | None = None
    shadow_board: bool = False
    original_id: str | None = Field(
        default=None, description="Catalog entry the bin was placed from"
    )


class PackingSchema(BaseModel):
    """Gap fill options (v1.1+)."""

    model_config = ConfigDict(extra="forbid")

    min_gap_cells: int = Field(default=DEFAULT_MIN_GAP_CELLS, ge=1)
    max_fill_iterations: int = Field(default=MAX_FILL_ITERATIONS, ge=1, le=10000)
    palette: list[HexColor] | None = Field(
        default=None,
        min_length=1,
        description="Colors cycled over auto-generated bins",
    )


class LayoutConfiguration(BaseModel):
    """Root model of a layout file.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        drawer: Drawer footprint
        constraints: Allowed bin dimensions
        catalog: Bins waiting to be placed
        catalog_sizes: Standard sizes for gap fill (defaults to the
            built-in list when omitted)
        packing: Gap fill options (v1.1+)
        bins: Bins already placed

    Example:
        >>> config = LayoutConfiguration(
        ...     schema_version="1.0",
        ...     drawer=DrawerSchema(width=400.0, length=300.0),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    drawer: DrawerSchema
    constraints: BinConstraintsSchema = Field(default_factory=BinConstraintsSchema)
    catalog: list[CatalogEntrySchema] = Field(default_factory=list)
    catalog_sizes: list[CatalogSizeSchema] | None = Field(
        default=None, description="Standard sizes for gap fill (optional)"
    )
    packing: PackingSchema | None = Field(
        default=None, description="Gap fill options (optional)"
    )
    bins: list[PlacedBinSchema] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions of a supported major version are accepted.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "LayoutConfiguration":
        """Ensure bin ids and catalog ids are unique."""
        for label, ids in (
            ("bin", [b.id for b in self.bins]),
            ("catalog entry", [e.id for e in self.catalog]),
        ):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            if duplicates:
                raise ValueError(f"Duplicate {label} ids: {', '.join(duplicates)}")
        return self

"""FastAPI dependency injection for layout services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from drawerzen.infrastructure import JsonExporter


@lru_cache(maxsize=1)
def get_json_exporter() -> JsonExporter:
    """Get cached JsonExporter instance."""
    return JsonExporter()


# Type aliases for cleaner endpoint signatures
JsonExporterDep = Annotated[JsonExporter, Depends(get_json_exporter)]

"""Reading and writing layout files.

Every failure (missing file, unreadable file, bad JSON, schema
violation, failed write) surfaces as one ``ConfigError`` whose
``error_type`` tells the CLI and the API how to present it.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from drawerzen.application.config.schema import LayoutConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """A layout file could not be loaded, validated or written.

    ``error_type`` is one of file_not_found, permission_denied,
    file_read_error, json_parse, validation, layout or file_write_error.
    ``details`` holds one dict per problem: line and column for JSON
    errors, path/message/value/error_type for schema errors.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []


def _json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location, e.g. ``bins[0].width``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _validate(data: Any, path: Path | None = None) -> LayoutConfiguration:
    try:
        return LayoutConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {
                "path": _json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
            for err in e.errors()
        ]
        lines = ["Layout validation failed:"]
        for detail in details:
            value = detail["value"]
            # model-level errors carry the whole input as value
            suffix = (
                f" (got: {value!r})"
                if value is not None and not isinstance(value, (dict, list))
                else ""
            )
            lines.append(f"  - {detail['path']}: {detail['message']}{suffix}")
        raise ConfigError(
            message="\n".join(lines),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def _read_text(path: Path) -> str:
    if not path.exists():
        raise ConfigError(
            message=f"Layout file not found: {path}",
            error_type="file_not_found",
            path=path,
        )
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading layout file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading layout file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e


def load_config(path: Path) -> LayoutConfiguration:
    """Load and validate a layout file.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON or
            does not match the layout schema.
    """
    content = _read_text(path)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in layout file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    config = _validate(data, path)
    logger.debug("Loaded layout %s with %d bins", path, len(config.bins))
    return config


def load_config_from_dict(data: dict[str, Any]) -> LayoutConfiguration:
    """Validate a layout that arrived as a request body."""
    return _validate(data)


def save_config(config: LayoutConfiguration, path: Path) -> None:
    """Write a layout as indented JSON, omitting unset optional fields."""
    try:
        path.write_text(
            config.model_dump_json(indent=2, exclude_none=True) + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error writing layout file: {path}: {e}",
            error_type="file_write_error",
            path=path,
        ) from e
    logger.debug("Wrote layout %s with %d bins", path, len(config.bins))

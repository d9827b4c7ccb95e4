"""FastAPI REST API for drawer layouts.

This module provides a REST API for validating, auto-sorting and
gap-filling drawer layouts and for checking single placements.

Usage:
    uvicorn drawerzen.web:app --reload
"""

from drawerzen.web.app import app, create_app

__all__ = ["app", "create_app"]

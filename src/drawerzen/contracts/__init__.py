"""Contracts shared between the engine and its callers."""

from drawerzen.contracts.protocols import Placeable, UndoHook

__all__ = ["Placeable", "UndoHook"]

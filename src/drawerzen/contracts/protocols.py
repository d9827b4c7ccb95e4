"""Protocols the engine depends on.

The engine accepts any object satisfying these protocols, which keeps it
free of a hard dependency on a particular undo/history implementation or
rectangle type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from drawerzen.domain.entities import Bin


class Placeable(Protocol):
    """Axis-aligned rectangle in millimeters with an optional identity.

    Both ``Bin`` and ``Footprint`` satisfy this protocol, so the
    validator can check stored bins and transient candidates alike.
    """

    @property
    def id(self) -> str | None: ...

    @property
    def x(self) -> float: ...

    @property
    def y(self) -> float: ...

    @property
    def width(self) -> float: ...

    @property
    def length(self) -> float: ...


@runtime_checkable
class UndoHook(Protocol):
    """Receives the bin list right before every applied mutation.

    Implementations typically push the snapshot onto an undo stack.

    Example:
        ```python
        class History:
            def __init__(self) -> None:
                self.stack: list[tuple[Bin, ...]] = []

            def push_snapshot(self, bins: tuple[Bin, ...]) -> None:
                self.stack.append(bins)
        ```
    """

    def push_snapshot(self, bins: tuple[Bin, ...]) -> None:
        """Record the layout as it was before the pending mutation."""
        ...

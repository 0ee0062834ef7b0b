"""Protocols for the collaborators the navigation operations talk to.

``Renderer`` is the diagram runtime that executes the tree layout, owns the
viewport and draws the nodes.  ``SearchListener`` is the host UI element that
displays the search counter.  Both are injected at construction time; any
object with conformant methods satisfies them without inheritance.

Example::

    class StatusBar:
        def on_search_update(self, current: int, total: int) -> None:
            print(f"{current} of {total}")

        def on_search_clear(self) -> None:
            print("")

    assert isinstance(StatusBar(), SearchListener)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json_diagram.layout.config import Orientation

__all__ = ["Renderer", "SearchListener"]


@runtime_checkable
class Renderer(Protocol):
    """Structural protocol for the external diagram renderer.

    All methods are requests: the renderer re-reads node fields (sizes,
    styles, expansion state, icons) from the shared graph when it acts on them.
    """

    def refresh(self) -> None:
        """Re-run the tree layout over the current node/edge collection."""
        ...

    def fit_to_page(self) -> None:
        """Zoom and pan so the whole diagram is visible."""
        ...

    def bring_to_center(self, node_id: str) -> None:
        """Pan so that ``node_id`` sits in the centre of the viewport."""
        ...

    def reset_view(self) -> None:
        """Restore the default zoom and pan."""
        ...

    def zoom(self, factor: float) -> None:
        """Multiply the current zoom level by ``factor``."""
        ...

    def set_orientation(self, orientation: Orientation) -> None:
        """Use ``orientation`` for subsequent layouts."""
        ...


@runtime_checkable
class SearchListener(Protocol):
    """Structural protocol for the host's search counter display."""

    def on_search_update(self, current: int, total: int) -> None:
        """Show ``current`` (1-based, 0 when none) of ``total`` matches."""
        ...

    def on_search_clear(self) -> None:
        """Clear the search input and its counter."""
        ...

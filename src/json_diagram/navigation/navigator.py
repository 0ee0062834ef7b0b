"""GraphNavigator: whole-graph collapse/expand and orientation rotation.

Both operations mutate the live graph in place and then ask the renderer to
re-run its layout; no nodes are created or removed.

Collapse/expand is a binary toggle over the whole graph:

- expand-all sets every collapsed node back to expanded;
- collapse-all visits the root-level nodes (no incoming edge).  A node that
  carries an expand icon is collapsed itself.  A node without one (the
  synthetic root never has an icon) cannot be collapsed individually, so the
  collapse is pushed one level down onto the targets of its outgoing edges.

With ``CollapsePolicy.TOGGLE`` the branch is chosen by a flag flipped on each
call, independent of the actual node state.  ``CollapsePolicy.DERIVED``
scans the nodes instead.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from json_diagram.layout.config import CollapsePolicy, Orientation
from json_diagram.tree.nodes import NodeKind

if TYPE_CHECKING:
    from json_diagram.layout.geometry import GeometryEngine
    from json_diagram.navigation.protocols import Renderer
    from json_diagram.tree.nodes import DiagramGraph, DiagramNode

logger = logging.getLogger(__name__)

__all__ = ["GraphNavigator"]


class GraphNavigator:
    """Collapse/expand and rotation over the live graph.

    Args:
        graph: The live node/edge collection.
        geometry: Engine that owns the current orientation and re-places icons.
        renderer: Asked to re-run layout after each operation.  Optional.
        policy: How ``toggle_collapse`` picks its branch.
    """

    def __init__(
        self,
        graph: DiagramGraph,
        geometry: GeometryEngine,
        renderer: Renderer | None = None,
        policy: CollapsePolicy = CollapsePolicy.TOGGLE,
    ) -> None:
        self.graph = graph
        self._geometry = geometry
        self._renderer = renderer
        self.policy = policy
        self.is_graph_collapsed = False

    @property
    def orientation(self) -> Orientation:
        return self._geometry.options.orientation

    # ------------------------------------------------------------------
    # Collapse / expand
    # ------------------------------------------------------------------

    def toggle_collapse(self) -> bool:
        """Expand or collapse the whole graph.

        Returns:
            The new value of ``is_graph_collapsed``.
        """
        if self.policy == CollapsePolicy.DERIVED:
            self.is_graph_collapsed = any(
                node.is_expanded is False for node in self.graph.nodes
            )

        if self.is_graph_collapsed:
            self.expand_all()
        else:
            self.collapse_all()
        self.is_graph_collapsed = not self.is_graph_collapsed

        if self._renderer is not None:
            self._renderer.refresh()
        return self.is_graph_collapsed

    def expand_all(self) -> None:
        for node in self.graph.nodes:
            if node.is_expanded is False:
                node.is_expanded = True

    def collapse_all(self) -> None:
        for node in self.graph.roots():
            if node.has_expand_icon:
                self._collapse(node)
                continue
            for edge in self.graph.out_edges(node.id):
                self._collapse(self.graph.node(edge.target_id))

    @staticmethod
    def _collapse(node: DiagramNode) -> None:
        # Leaves carry no expansion state.
        if node.kind != NodeKind.LEAF:
            node.is_expanded = False

    # ------------------------------------------------------------------
    # Orientation
    # ------------------------------------------------------------------

    def rotate(self) -> Orientation:
        """Advance to the next orientation and re-place every container's icons.

        Returns:
            The new orientation.
        """
        orientation = self.orientation.next()
        self._geometry.options = self._geometry.options.with_orientation(orientation)
        for node in self.graph.containers():
            self._geometry.place_icons(node, orientation)
        logger.debug("layout orientation is now %s", orientation)

        if self._renderer is not None:
            self._renderer.set_orientation(orientation)
            self._renderer.refresh()
            self._renderer.fit_to_page()
        return orientation

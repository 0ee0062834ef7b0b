"""SearchController: substring search over leaf nodes with cyclic focus.

Matching is a case-insensitive substring test against each leaf's display
text (containers and the root are never matched).  Matches are kept in
document order.  Styling is two-tier and written to each node's ``style``
field:

- focused: the match under the cursor (focus fill, highlight stroke, width 2),
  recentred in the viewport;
- matched: every other match (highlight fill, highlight stroke, width 1.5).

Every other node is restored to the theme default.  The counter shown by the
host is pushed through the injected ``SearchListener``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from json_diagram.tree.nodes import NodeKind, NodeStyle

if TYPE_CHECKING:
    from json_diagram.layout.geometry import GeometryEngine
    from json_diagram.navigation.protocols import Renderer, SearchListener
    from json_diagram.tree.nodes import DiagramGraph, DiagramNode

logger = logging.getLogger(__name__)

__all__ = ["SearchController", "SearchState"]

FOCUSED_STROKE_WIDTH = 2.0
MATCHED_STROKE_WIDTH = 1.5


@dataclass(frozen=True, slots=True)
class SearchState:
    """Snapshot of the search results.

    Attributes:
        query: The query that produced the matches ("" when cleared).
        matches: Matching node ids in document order.
        cursor: Index of the focused match in ``matches``.
    """

    query: str = ""
    matches: tuple[str, ...] = field(default_factory=tuple)
    cursor: int = 0

    @property
    def total(self) -> int:
        return len(self.matches)

    @property
    def current(self) -> int:
        """1-based position of the focused match, 0 when there are no matches."""
        return self.cursor + 1 if self.matches else 0

    @property
    def focused_id(self) -> str | None:
        return self.matches[self.cursor] if self.matches else None


class SearchController:
    """Search state machine over an already-built graph.

    Args:
        graph: The live node/edge collection.
        geometry: Source of the default node style (current theme).
        listener: Receives counter updates.  Optional.
        renderer: Recentres the viewport on the focused match.  Optional.
    """

    def __init__(
        self,
        graph: DiagramGraph,
        geometry: GeometryEngine,
        listener: SearchListener | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self.graph = graph
        self._geometry = geometry
        self._listener = listener
        self._renderer = renderer
        self.state = SearchState()

    @property
    def state(self) -> SearchState:
        return self._state

    @state.setter
    def state(self, value: SearchState) -> None:
        self._state = value
        self._matched = frozenset(value.matches)

    def search(self, query: str) -> SearchState:
        """Run a new search and focus the first match.

        An empty query clears every highlight and resets the counter to (0, 0).
        """
        self._reset_styles()
        if self._renderer is not None:
            self._renderer.reset_view()

        if not query:
            self.state = SearchState()
            self._notify()
            return self.state

        needle = query.lower()
        matches = tuple(
            node.id
            for node in self.graph.nodes
            if node.kind == NodeKind.LEAF and needle in node.display_text.lower()
        )
        self.state = SearchState(query=query, matches=matches, cursor=0)
        logger.debug("search %r: %d matches", query, len(matches))
        self._apply_highlight()
        self._notify()
        return self.state

    def advance(self) -> SearchState:
        """Move the focus to the next match, wrapping after the last one."""
        if not self.state.matches:
            return self.state
        cursor = (self.state.cursor + 1) % self.state.total
        self.state = SearchState(self.state.query, self.state.matches, cursor)
        self._apply_highlight()
        self._notify()
        return self.state

    def restyle(self, node: DiagramNode) -> DiagramNode:
        """Re-apply the highlight to one node whose style was just recomputed."""
        if node.id in self._matched:
            node.style = self._highlight_style(node.id == self.state.focused_id)
        return node

    def reapply(self) -> None:
        """Re-apply the current highlight after node styles were recomputed."""
        if self.state.matches:
            self._apply_highlight(recenter=False)

    def clear(self) -> None:
        """Drop the search entirely and ask the host to clear its input."""
        self._reset_styles()
        self.state = SearchState()
        if self._listener is not None:
            self._listener.on_search_clear()

    # ------------------------------------------------------------------
    # Styling
    # ------------------------------------------------------------------

    def _reset_styles(self) -> None:
        for node in self.graph.nodes:
            node.style = self._geometry.default_style()

    def _highlight_style(self, focused: bool) -> NodeStyle:
        theme = self._geometry.theme
        if focused:
            return NodeStyle(
                fill=theme.highlight_focus_color,
                stroke_color=theme.highlight_stroke_color,
                stroke_width=FOCUSED_STROKE_WIDTH,
            )
        return NodeStyle(
            fill=theme.highlight_fill_color,
            stroke_color=theme.highlight_stroke_color,
            stroke_width=MATCHED_STROKE_WIDTH,
        )

    def _apply_highlight(self, recenter: bool = True) -> None:
        focused_id = self.state.focused_id
        for node_id in self.state.matches:
            self.graph.node(node_id).style = self._highlight_style(node_id == focused_id)
        if recenter and focused_id is not None and self._renderer is not None:
            self._renderer.bring_to_center(focused_id)

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener.on_search_update(self.state.current, self.state.total)

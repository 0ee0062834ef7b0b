"""DiagramSession: orchestrator that wires parsing, building, layout and navigation.

This is the layer the host UI talks to.  It owns the one live node/edge
collection and hands it to the renderer by reference.

Architecture:
- ``load()`` parses the editor text, builds a fresh graph with TreeBuilder,
  lays out every node with GeometryEngine and swaps it in wholesale.  A parse
  failure leaves the previous graph untouched and marks the session invalid;
  nothing is raised to the host.
- ``switch_format()`` converts the editor text (JSON <-> XML) and reloads it;
  on failure the previous text is kept.
- Display-option toggles re-run layout on every node and then schedule one
  deferred renderer refresh, so the renderer re-reads the mutated fields
  after its own state has settled.
- ``node_defaults()`` / ``edge_defaults()`` are the renderer's hook points
  and answer purely from the built graph.
- ``dispatch()`` routes the closed set of actions from ``actions.py``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from json_diagram.actions import (
    AdvanceSearch,
    ChangeTheme,
    LoadDocument,
    RotateLayout,
    Search,
    SwitchFormat,
    ToggleGraphCollapse,
    ToggleViewOption,
    Viewport,
    ViewportCommand,
)
from json_diagram.convert import DocumentFormat, convert_document, parse_document
from json_diagram.details import NodeDetails, node_details
from json_diagram.errors import BuilderInvariantViolation, ConversionError, ParseError
from json_diagram.layout.config import (
    CollapsePolicy,
    DiagramConstants,
    DisplayOptions,
    Orientation,
    ThemeName,
    ViewOption,
)
from json_diagram.layout.geometry import GeometryEngine
from json_diagram.navigation.navigator import GraphNavigator
from json_diagram.navigation.search import SearchController, SearchState
from json_diagram.scheduler import DeferredScheduler
from json_diagram.tree.builder import TreeBuilder

if TYPE_CHECKING:
    from json_diagram.actions import Action
    from json_diagram.metrics.protocols import TextMeasurer
    from json_diagram.navigation.protocols import Renderer, SearchListener
    from json_diagram.scheduler import Scheduler
    from json_diagram.tree.nodes import DiagramEdge, DiagramGraph, DiagramNode

logger = logging.getLogger(__name__)

__all__ = ["DiagramSession"]


class DiagramSession:
    """One editor document and its diagram.

    Example::

        session = DiagramSession()
        session.load('{"user": {"name": "Ann", "tags": ["a", "b"]}}')
        session.is_valid            # True
        len(session.graph)          # 5
        session.search("ann").total # 1

    Args:
        renderer: External diagram runtime.  Optional; without one the
            session still maintains the model.
        listener: Receives search counter updates.  Optional.
        measurer: TextMeasurer for node sizing.  Defaults to a cached
            ``StaticMeasurer``.
        constants: Sizing parameters.  Defaults to ``DiagramConstants()``.
        options: Initial display options.  Defaults to ``DisplayOptions()``.
        scheduler: Runs deferred renderer refreshes.  Defaults to a
            ``DeferredScheduler`` that the host drains with ``run_pending()``.
        collapse_policy: Branch selection for the whole-graph collapse toggle.
        document_format: Initial document type.
    """

    def __init__(
        self,
        renderer: Renderer | None = None,
        listener: SearchListener | None = None,
        measurer: TextMeasurer | None = None,
        constants: DiagramConstants | None = None,
        options: DisplayOptions | None = None,
        scheduler: Scheduler | None = None,
        collapse_policy: CollapsePolicy = CollapsePolicy.TOGGLE,
        document_format: DocumentFormat | str = DocumentFormat.JSON,
    ) -> None:
        self._renderer = renderer
        self._geometry = GeometryEngine(measurer, constants, options)
        self._builder = TreeBuilder()
        self._scheduler: Any = scheduler if scheduler is not None else DeferredScheduler()

        self.text = ""
        self.format = DocumentFormat(document_format)
        self.is_valid = True
        self.graph: DiagramGraph = self._geometry.layout_graph(self._builder.build({}))

        self._search = SearchController(self.graph, self._geometry, listener, renderer)
        self._navigator = GraphNavigator(
            self.graph, self._geometry, renderer, policy=collapse_policy
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def options(self) -> DisplayOptions:
        return self._geometry.options

    @property
    def geometry(self) -> GeometryEngine:
        return self._geometry

    @property
    def scheduler(self) -> Any:
        return self._scheduler

    @property
    def search_state(self) -> SearchState:
        return self._search.state

    @property
    def is_graph_collapsed(self) -> bool:
        return self._navigator.is_graph_collapsed

    @property
    def node_count(self) -> int:
        return len(self.graph)

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def load(self, text: str) -> bool:
        """Parse ``text`` in the current format and rebuild the diagram.

        Returns:
            True if the diagram was rebuilt; False if the text is invalid, in
            which case the previous diagram stays in place.
        """
        self.text = text
        try:
            value = parse_document(text, self.format)
            graph = self._builder.build(value)
        except ParseError as exc:
            logger.warning("invalid %s content: %s", self.format.upper(), exc)
            self.is_valid = False
            return False
        except BuilderInvariantViolation:
            logger.exception("diagram builder produced an invalid graph")
            self.is_valid = False
            return False

        self._install(graph)
        self.is_valid = True
        return True

    def switch_format(self, target: DocumentFormat | str) -> bool:
        """Convert the document to ``target`` and rebuild the diagram.

        Returns:
            True on success.  On a conversion failure the editor text is kept
            and the session is marked invalid.
        """
        target = DocumentFormat(target)
        source = self.format
        self.format = target
        try:
            converted = convert_document(self.text, source, target)
        except ConversionError as exc:
            logger.warning("conversion error: %s", exc)
            self.is_valid = False
            return False
        return self.load(converted)

    def _install(self, graph: DiagramGraph) -> None:
        self._geometry.layout_graph(graph)
        self.graph = graph
        self._navigator.graph = graph
        self._search.graph = graph
        self._search.clear()
        logger.debug("diagram rebuilt with %d nodes", len(graph))
        if self._renderer is not None:
            self._renderer.refresh()
            self._renderer.fit_to_page()

    # ------------------------------------------------------------------
    # Renderer hooks
    # ------------------------------------------------------------------

    def node_defaults(self, node_id: str) -> DiagramNode:
        """Size and style ``node_id`` for the renderer and return it."""
        return self._search.restyle(self._geometry.layout(self.graph.node(node_id)))

    def edge_defaults(self, edge_id: str) -> DiagramEdge:
        """Style ``edge_id`` for the renderer and return it."""
        return self._geometry.style_edge(self.graph.edge(edge_id))

    def details(self, node_id: str) -> NodeDetails | None:
        """Details of a leaf for the host's details dialog; None otherwise."""
        return node_details(self.graph, node_id)

    # ------------------------------------------------------------------
    # View options
    # ------------------------------------------------------------------

    def toggle_view_option(self, option: ViewOption) -> DisplayOptions:
        """Flip one display toggle and re-lay out the nodes it affects."""
        self._geometry.options = self._geometry.options.toggled(option)
        if option != ViewOption.GRID:
            self._relayout()
            self._scheduler.call_soon(self._refresh_renderer)
        return self._geometry.options

    def change_theme(self, theme: ThemeName | str) -> DisplayOptions:
        """Switch the colour palette and restyle every node and edge."""
        theme = ThemeName(theme)
        if theme == self._geometry.options.theme:
            return self._geometry.options
        self._geometry.options = self._geometry.options.with_theme(theme)
        self._geometry.layout_graph(self.graph)
        self._search.clear()
        return self._geometry.options

    def _relayout(self) -> None:
        for node in self.graph.nodes:
            self._geometry.layout(node)
        self._search.reapply()

    def _refresh_renderer(self) -> None:
        if self._renderer is not None:
            self._renderer.refresh()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def search(self, query: str) -> SearchState:
        return self._search.search(query)

    def advance_search(self) -> SearchState:
        return self._search.advance()

    def toggle_collapse(self) -> bool:
        return self._navigator.toggle_collapse()

    def rotate(self) -> Orientation:
        return self._navigator.rotate()

    def viewport(self, command: Viewport) -> None:
        """Forward a zoom/pan command to the renderer."""
        if self._renderer is None:
            return
        step = self._geometry.constants.zoom_step
        if command == Viewport.RESET:
            self._renderer.reset_view()
        elif command == Viewport.FIT_TO_PAGE:
            self._renderer.fit_to_page()
        elif command == Viewport.ZOOM_IN:
            self._renderer.zoom(1 + step)
        else:
            self._renderer.zoom(1 / (1 + step))

    # ------------------------------------------------------------------
    # Action routing
    # ------------------------------------------------------------------

    def dispatch(self, action: Action) -> Any:
        """Route one action to its operation and return the operation's result.

        Raises:
            TypeError: If ``action`` is not one of the action variants.
        """
        if isinstance(action, LoadDocument):
            return self.load(action.text)
        if isinstance(action, SwitchFormat):
            return self.switch_format(action.target)
        if isinstance(action, ToggleViewOption):
            return self.toggle_view_option(action.option)
        if isinstance(action, ChangeTheme):
            return self.change_theme(action.theme)
        if isinstance(action, RotateLayout):
            return self.rotate()
        if isinstance(action, ToggleGraphCollapse):
            return self.toggle_collapse()
        if isinstance(action, Search):
            return self.search(action.query)
        if isinstance(action, AdvanceSearch):
            return self.advance_search()
        if isinstance(action, ViewportCommand):
            return self.viewport(action.command)
        raise TypeError(f"Unsupported action: {action!r}")

"""Tests for SearchController.

Covers case-insensitive leaf matching in document order, containers never
matching, the two-tier highlight, cyclic advance, listener notifications,
renderer recentring, empty queries, clear(), reapply() and per-node restyle().
"""

from __future__ import annotations

import pytest

from json_diagram.layout.geometry import GeometryEngine
from json_diagram.layout.theme import LIGHT_THEME
from json_diagram.navigation.protocols import Renderer, SearchListener
from json_diagram.navigation.search import SearchController, SearchState
from json_diagram.tree.builder import TreeBuilder
from json_diagram.tree.nodes import DiagramGraph

DOC = {
    "users": [
        {"name": "Ann", "city": "Paris"},
        {"name": "Bob", "city": "Annecy"},
    ],
    "note": "annual",
}

ANN_MATCHES = ("Root/users/0/~leaf", "Root/users/1/~leaf", "Root/note")


# ---------------------------------------------------------------------------
# Recording fakes
# ---------------------------------------------------------------------------


class RecordingListener:
    def __init__(self) -> None:
        self.updates: list[tuple[int, int]] = []
        self.clears = 0

    def on_search_update(self, current: int, total: int) -> None:
        self.updates.append((current, total))

    def on_search_clear(self) -> None:
        self.clears += 1


class RecordingRenderer:
    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def refresh(self) -> None:
        self.calls.append(("refresh", None))

    def fit_to_page(self) -> None:
        self.calls.append(("fit_to_page", None))

    def bring_to_center(self, node_id: str) -> None:
        self.calls.append(("bring_to_center", node_id))

    def reset_view(self) -> None:
        self.calls.append(("reset_view", None))

    def zoom(self, factor: float) -> None:
        self.calls.append(("zoom", factor))

    def set_orientation(self, orientation: object) -> None:
        self.calls.append(("set_orientation", orientation))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def geometry() -> GeometryEngine:
    return GeometryEngine()


@pytest.fixture
def graph(geometry: GeometryEngine) -> DiagramGraph:
    return geometry.layout_graph(TreeBuilder().build(DOC))


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def controller(
    graph: DiagramGraph,
    geometry: GeometryEngine,
    listener: RecordingListener,
    renderer: RecordingRenderer,
) -> SearchController:
    return SearchController(graph, geometry, listener, renderer)


# ---------------------------------------------------------------------------
# Fakes conform to the protocols
# ---------------------------------------------------------------------------


def test_fakes_satisfy_protocols() -> None:
    assert isinstance(RecordingListener(), SearchListener)
    assert isinstance(RecordingRenderer(), Renderer)


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


class TestMatching:
    def test_matches_in_document_order(self, controller: SearchController) -> None:
        state = controller.search("ann")
        assert state.matches == ANN_MATCHES

    def test_case_insensitive(self, controller: SearchController) -> None:
        assert controller.search("ANN").matches == ANN_MATCHES

    def test_keys_are_searchable(self, controller: SearchController) -> None:
        assert controller.search("city").matches == ANN_MATCHES[:2]

    def test_containers_never_match(self, controller: SearchController) -> None:
        assert controller.search("users").total == 0

    def test_no_matches(self, controller: SearchController, listener: RecordingListener) -> None:
        state = controller.search("zzz")
        assert state.total == 0
        assert state.current == 0
        assert state.focused_id is None
        assert listener.updates == [(0, 0)]

    def test_first_match_focused(
        self, controller: SearchController, listener: RecordingListener
    ) -> None:
        state = controller.search("ann")
        assert state.focused_id == ANN_MATCHES[0]
        assert state.current == 1
        assert listener.updates == [(1, 3)]


# ---------------------------------------------------------------------------
# Highlighting
# ---------------------------------------------------------------------------


class TestHighlight:
    def test_two_tier_styles(self, controller: SearchController, graph: DiagramGraph) -> None:
        controller.search("ann")
        focused = graph.node(ANN_MATCHES[0]).style
        assert focused.fill == LIGHT_THEME.highlight_focus_color
        assert focused.stroke_color == LIGHT_THEME.highlight_stroke_color
        assert focused.stroke_width == 2.0
        for node_id in ANN_MATCHES[1:]:
            style = graph.node(node_id).style
            assert style.fill == LIGHT_THEME.highlight_fill_color
            assert style.stroke_width == 1.5

    def test_non_matches_keep_default(
        self, controller: SearchController, graph: DiagramGraph
    ) -> None:
        controller.search("ann")
        for node in graph.nodes:
            if node.id not in ANN_MATCHES:
                assert node.style.fill == LIGHT_THEME.node_fill_color

    def test_new_search_resets_previous_highlight(
        self, controller: SearchController, graph: DiagramGraph
    ) -> None:
        controller.search("ann")
        controller.search("bob")
        assert graph.node("Root/note").style.fill == LIGHT_THEME.node_fill_color
        assert graph.node("Root/users/1/~leaf").style.fill == LIGHT_THEME.highlight_focus_color

    def test_renderer_recentred(
        self, controller: SearchController, renderer: RecordingRenderer
    ) -> None:
        controller.search("ann")
        assert renderer.calls == [("reset_view", None), ("bring_to_center", ANN_MATCHES[0])]

    def test_reapply_restores_without_recentring(
        self,
        controller: SearchController,
        graph: DiagramGraph,
        geometry: GeometryEngine,
        renderer: RecordingRenderer,
    ) -> None:
        controller.search("ann")
        geometry.layout_graph(graph)
        assert graph.node(ANN_MATCHES[0]).style.fill == LIGHT_THEME.node_fill_color
        renderer.calls.clear()
        controller.reapply()
        assert graph.node(ANN_MATCHES[0]).style.fill == LIGHT_THEME.highlight_focus_color
        assert renderer.calls == []

    def test_restyle_touches_only_the_given_node(
        self, controller: SearchController, graph: DiagramGraph, geometry: GeometryEngine
    ) -> None:
        controller.search("ann")
        geometry.layout_graph(graph)
        focused = controller.restyle(graph.node(ANN_MATCHES[0]))
        assert focused.style.fill == LIGHT_THEME.highlight_focus_color
        assert graph.node(ANN_MATCHES[1]).style.fill == LIGHT_THEME.node_fill_color

    def test_restyle_matched_and_unmatched(
        self, controller: SearchController, graph: DiagramGraph, geometry: GeometryEngine
    ) -> None:
        controller.search("ann")
        geometry.layout_graph(graph)
        assert controller.restyle(graph.node(ANN_MATCHES[2])).style.stroke_width == 1.5
        assert graph.node(ANN_MATCHES[2]).style.fill == LIGHT_THEME.highlight_fill_color
        container = controller.restyle(graph.node("Root/users"))
        assert container.style.fill == LIGHT_THEME.node_fill_color

    def test_restyle_follows_the_cursor(
        self, controller: SearchController, graph: DiagramGraph, geometry: GeometryEngine
    ) -> None:
        controller.search("ann")
        controller.advance()
        geometry.layout_graph(graph)
        assert controller.restyle(graph.node(ANN_MATCHES[0])).style.fill == (
            LIGHT_THEME.highlight_fill_color
        )
        assert controller.restyle(graph.node(ANN_MATCHES[1])).style.fill == (
            LIGHT_THEME.highlight_focus_color
        )

    def test_restyle_after_clear_is_a_no_op(
        self, controller: SearchController, graph: DiagramGraph, geometry: GeometryEngine
    ) -> None:
        controller.search("ann")
        controller.clear()
        geometry.layout_graph(graph)
        assert controller.restyle(graph.node(ANN_MATCHES[0])).style.fill == (
            LIGHT_THEME.node_fill_color
        )


# ---------------------------------------------------------------------------
# Advance
# ---------------------------------------------------------------------------


class TestAdvance:
    def test_cycles_through_matches(
        self, controller: SearchController, listener: RecordingListener
    ) -> None:
        controller.search("ann")
        focused = [controller.advance().focused_id for _ in range(3)]
        assert focused == [ANN_MATCHES[1], ANN_MATCHES[2], ANN_MATCHES[0]]
        assert listener.updates == [(1, 3), (2, 3), (3, 3), (1, 3)]

    def test_cycle_length_equals_match_count(self, controller: SearchController) -> None:
        start = controller.search("ann").focused_id
        for _ in range(len(ANN_MATCHES)):
            controller.advance()
        assert controller.state.focused_id == start

    def test_focus_moves_highlight(
        self, controller: SearchController, graph: DiagramGraph
    ) -> None:
        controller.search("ann")
        controller.advance()
        assert graph.node(ANN_MATCHES[0]).style.fill == LIGHT_THEME.highlight_fill_color
        assert graph.node(ANN_MATCHES[1]).style.fill == LIGHT_THEME.highlight_focus_color

    def test_advance_without_matches_is_noop(
        self, controller: SearchController, listener: RecordingListener
    ) -> None:
        state = controller.advance()
        assert state == SearchState()
        assert listener.updates == []


# ---------------------------------------------------------------------------
# Empty query and clear
# ---------------------------------------------------------------------------


class TestClearing:
    def test_empty_query_clears_highlight(
        self,
        controller: SearchController,
        graph: DiagramGraph,
        listener: RecordingListener,
    ) -> None:
        controller.search("ann")
        state = controller.search("")
        assert state.total == 0
        assert listener.updates[-1] == (0, 0)
        assert all(n.style.fill == LIGHT_THEME.node_fill_color for n in graph.nodes)

    def test_clear(
        self,
        controller: SearchController,
        graph: DiagramGraph,
        listener: RecordingListener,
    ) -> None:
        controller.search("ann")
        controller.clear()
        assert controller.state == SearchState()
        assert listener.clears == 1
        assert all(n.style.fill == LIGHT_THEME.node_fill_color for n in graph.nodes)

    def test_works_without_collaborators(
        self, graph: DiagramGraph, geometry: GeometryEngine
    ) -> None:
        controller = SearchController(graph, geometry)
        assert controller.search("bob").total == 1
        assert controller.advance().current == 1
        controller.clear()

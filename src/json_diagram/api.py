"""Public API functions for json-diagram.

Stateless helpers for callers that only need the laid-out model: each call
creates a fresh TreeBuilder and GeometryEngine, so no state is shared between
calls.  Interactive hosts should use ``DiagramSession`` instead.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from json_diagram.convert import DocumentFormat, parse_document
from json_diagram.layout.geometry import GeometryEngine
from json_diagram.tree.builder import TreeBuilder

if TYPE_CHECKING:
    from json_diagram.layout.config import DiagramConstants, DisplayOptions
    from json_diagram.metrics.protocols import TextMeasurer
    from json_diagram.tree.nodes import DiagramGraph

__all__ = ["build_diagram", "diagram_from_text", "graph_to_dict"]


def build_diagram(
    value: Any,
    options: DisplayOptions | None = None,
    measurer: TextMeasurer | None = None,
    constants: DiagramConstants | None = None,
) -> DiagramGraph:
    """Build and lay out the diagram of a parsed JSON value.

    Args:
        value:     Any JSON value (dict, list, str, int, float, bool, None).
        options:   Display options.  Defaults to ``DisplayOptions()``.
        measurer:  TextMeasurer for node sizing.  Defaults to a cached
                   ``StaticMeasurer``.
        constants: Sizing parameters.  Defaults to ``DiagramConstants()``.

    Returns:
        The graph with every node sized and styled.
    """
    graph = TreeBuilder().build(value)
    return GeometryEngine(measurer, constants, options).layout_graph(graph)


def diagram_from_text(
    text: str,
    fmt: DocumentFormat | str = DocumentFormat.JSON,
    options: DisplayOptions | None = None,
    measurer: TextMeasurer | None = None,
) -> DiagramGraph:
    """Parse JSON or XML text and return its laid-out diagram.

    Raises:
        ParseError: If the text is not valid in the given format.
    """
    return build_diagram(parse_document(text, fmt), options=options, measurer=measurer)


def graph_to_dict(graph: DiagramGraph) -> dict[str, Any]:
    """Return a JSON-serializable view of the node/edge model."""
    return {
        "nodes": [asdict(node) for node in graph.nodes],
        "edges": [asdict(edge) for edge in graph.edges],
    }

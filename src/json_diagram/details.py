"""Node details: the data handed to the host's details dialog and clipboard.

For a selected leaf the host shows its locator and its key/value content,
and can copy either.  The content is rendered as a small JSON-like object;
an unpaired leaf (a top-level scalar) is copied as a quoted string.
"""

from __future__ import annotations

from dataclasses import dataclass

from json_diagram.layout.geometry import ValueKind, classify_value
from json_diagram.tree.nodes import ROOT_PATH, DiagramGraph, NodeKind

__all__ = ["DetailLine", "NodeDetails", "format_detail_value", "node_details"]


@dataclass(frozen=True, slots=True)
class DetailLine:
    key: str
    value: str
    has_comma: bool


def format_detail_value(text: str) -> str:
    """Booleans lower-cased, numbers verbatim, everything else double-quoted."""
    kind = classify_value(text)
    if kind in (ValueKind.TRUE, ValueKind.FALSE):
        return text.lower()
    if kind == ValueKind.NUMBER:
        return text
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        text = text[1:-1]
    return f'"{text}"'


@dataclass(frozen=True, slots=True)
class NodeDetails:
    """Details of one leaf node.

    Attributes:
        node_id: The leaf's id.
        path: The raw locator, e.g. ``Root.user.tags``.
        content: The leaf's display text (``key: value`` lines).
        lines: Formatted key/value lines; empty for an unpaired leaf.
    """

    node_id: str
    path: str
    content: str
    lines: tuple[DetailLine, ...]

    @property
    def display_path(self) -> str:
        """Locator with the root shown as ``{Root}``."""
        path = self.path.strip()
        if path.startswith(ROOT_PATH):
            return "{" + ROOT_PATH + "}" + path[len(ROOT_PATH):]
        return path

    def clipboard_text(self) -> str:
        """Content as copied to the clipboard."""
        if not self.lines:
            return f'"{self.content.strip()}"'
        body = "\n".join(
            f"    {line.key}: {line.value}{',' if line.has_comma else ''}"
            for line in self.lines
        )
        return "{\n" + body + "\n}"


def node_details(graph: DiagramGraph, node_id: str) -> NodeDetails | None:
    """Return the details of ``node_id``, or None if it is not a leaf.

    Raises:
        KeyError: If the graph has no node ``node_id``.
    """
    node = graph.node(node_id)
    if node.kind != NodeKind.LEAF:
        return None
    pairs = node.pairs()
    lines = tuple(
        DetailLine(
            key=f'"{key.strip()}"',
            value=format_detail_value(value.strip()),
            has_comma=i != len(pairs) - 1,
        )
        for i, (key, value) in enumerate(pairs)
    )
    return NodeDetails(node_id=node.id, path=node.path, content=node.display_text, lines=lines)

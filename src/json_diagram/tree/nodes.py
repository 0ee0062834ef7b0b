"""Diagram data model: nodes, edges, annotations and the graph container.

Provides the types produced by TreeBuilder and consumed by the geometry
engine, the navigation operations and the external renderer.  Fields that
the renderer reads (geometry, styles, icons, annotation offsets) live on the
node itself and are mutated in place; everything else is fixed at build time.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum, auto

from json_diagram.errors import BuilderInvariantViolation

ROOT_ID = "main-root"
ROOT_PATH = "Root"


class NodeKind(StrEnum):
    """Enumeration of the three diagram node kinds.

    - ROOT      -> "root"      : the single synthetic entry node
    - CONTAINER -> "container" : a JSON object or array
    - LEAF      -> "leaf"      : a scalar, or a folded group of scalars
    """

    ROOT = auto()
    CONTAINER = auto()
    LEAF = auto()


class AnnotationRole(StrEnum):
    """What a text fragment shows: a leaf key/value or a container label/count."""

    KEY = auto()
    VALUE = auto()
    LABEL = auto()
    COUNT = auto()


class Alignment(StrEnum):
    LEFT = auto()
    CENTER = auto()
    RIGHT = auto()


class ShapeKind(StrEnum):
    ELLIPSE = auto()
    RECTANGLE = auto()


class IconShape(StrEnum):
    MINUS = auto()
    PLUS = auto()


@dataclass(slots=True)
class Point:
    """A position expressed as fractions of the owning node's width/height."""

    x: float = 0.5
    y: float = 0.5


@dataclass(slots=True)
class Size:
    width: float = 0.0
    height: float = 0.0


@dataclass(slots=True)
class Margin:
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0


@dataclass(slots=True)
class TextStyle:
    color: str = ""
    font_family: str = "Consolas"
    font_size: float = 12.0


@dataclass(slots=True)
class NodeStyle:
    fill: str = ""
    stroke_color: str = ""
    stroke_width: float = 1.5


@dataclass(slots=True)
class EdgeStyle:
    connector_type: str = "Orthogonal"
    corner_radius: float = 15.0
    stroke_color: str = ""
    stroke_width: float = 2.0
    target_decorator: str = "None"


@dataclass(slots=True)
class ExpandIcon:
    """An expand or collapse affordance drawn on a container node."""

    shape: IconShape
    width: float
    height: float
    corner_radius: float
    offset: Point
    margin: Margin
    fill: str
    border_color: str
    icon_color: str


@dataclass(slots=True)
class Annotation:
    """One text fragment on a node.

    Attributes:
        id:        ``Key<i>`` / ``Value<i>`` on leaves, ``Label`` / ``Count`` on
                   containers.
        role:      What the fragment shows (see AnnotationRole).
        text:      Raw text taken from the document.  Never changes.
        content:   Text as displayed.  Equals ``text`` until the geometry
                   engine formats it (quoting strings, lower-casing booleans).
        offset:    Anchor position as fractions of the node size.
        style:     Colour and font.
        alignment: Horizontal alignment around the anchor.
        margin:    Pixel margins around the anchor.
        visible:   False hides the fragment (e.g. counts switched off).
    """

    id: str
    role: AnnotationRole
    text: str
    content: str = ""
    offset: Point = field(default_factory=Point)
    style: TextStyle = field(default_factory=TextStyle)
    alignment: Alignment = Alignment.CENTER
    margin: Margin = field(default_factory=Margin)
    visible: bool = True

    def __post_init__(self) -> None:
        if not self.content:
            self.content = self.text


@dataclass(slots=True)
class DiagramNode:
    """A node of the diagram graph.

    Attributes:
        id:           Deterministic id derived from the value's JSON Pointer.
        kind:         ROOT, CONTAINER or LEAF.
        path:         Human-readable locator, e.g. ``Root.user.tags[2]``.
        key:          Property name (str) or array index (int) under which the
                      value sits; None for the root and for folded leaves.
        annotations:  Ordered text fragments (see Annotation).
        child_count:  Number of direct structural children; 0 for leaves.
        is_expanded:  Expansion state for ROOT/CONTAINER; None for LEAF.
        geometry:     Pixel size computed by the geometry engine.
        shape:        Outline drawn by the renderer.
        style:        Fill/stroke, reassigned by the search operations.
        expand_icon:  Affordance shown while expanded (None when suppressed).
        collapse_icon: Affordance shown while collapsed (None when suppressed).
    """

    id: str
    kind: NodeKind
    path: str
    key: str | int | None = None
    annotations: list[Annotation] = field(default_factory=list)
    child_count: int = 0
    is_expanded: bool | None = None
    geometry: Size = field(default_factory=Size)
    shape: ShapeKind = ShapeKind.RECTANGLE
    style: NodeStyle = field(default_factory=NodeStyle)
    expand_icon: ExpandIcon | None = None
    collapse_icon: ExpandIcon | None = None

    @property
    def is_leaf(self) -> bool:
        return self.kind == NodeKind.LEAF

    @property
    def has_expand_icon(self) -> bool:
        return self.expand_icon is not None

    def pairs(self) -> list[tuple[str, str]]:
        """Return the raw ``(key, value)`` pairs of a leaf, in order.

        An unpaired leaf (a top-level scalar) returns an empty list.
        """
        keys = [a.text for a in self.annotations if a.role == AnnotationRole.KEY]
        values = [a.text for a in self.annotations if a.role == AnnotationRole.VALUE]
        if not keys:
            return []
        return list(zip(keys, values, strict=True))

    @property
    def display_text(self) -> str:
        """Text searched and copied for a leaf: one ``key: value`` line per pair."""
        if self.kind != NodeKind.LEAF:
            return ""
        pairs = self.pairs()
        if pairs:
            return "\n".join(f"{k}: {v}" for k, v in pairs)
        return self.annotations[0].text if self.annotations else ""


@dataclass(slots=True)
class DiagramEdge:
    """A directed parent -> child connector."""

    id: str
    source_id: str
    target_id: str
    style: EdgeStyle = field(default_factory=EdgeStyle)


def edge_id(source_id: str, target_id: str) -> str:
    return f"{source_id}->{target_id}"


class DiagramGraph:
    """The node/edge collection handed to the renderer.

    Nodes are kept in creation (document) order.  Lookups by id, parent and
    children are served from indexes built once in ``__init__``; the
    collection itself is never restructured after construction.
    """

    def __init__(self, nodes: list[DiagramNode], edges: list[DiagramEdge]) -> None:
        self.nodes = nodes
        self.edges = edges
        self._nodes_by_id = {n.id: n for n in nodes}
        self._edges_by_id = {e.id: e for e in edges}
        self._out: dict[str, list[DiagramEdge]] = {n.id: [] for n in nodes}
        self._in: dict[str, list[DiagramEdge]] = {n.id: [] for n in nodes}
        for e in edges:
            self._out.setdefault(e.source_id, []).append(e)
            self._in.setdefault(e.target_id, []).append(e)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[DiagramNode]:
        return iter(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes_by_id

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def root(self) -> DiagramNode:
        return self._nodes_by_id[ROOT_ID]

    def node(self, node_id: str) -> DiagramNode:
        """Return the node with ``node_id``.

        Raises:
            KeyError: If no such node exists.
        """
        return self._nodes_by_id[node_id]

    def edge(self, edge_id: str) -> DiagramEdge:
        """Return the edge with ``edge_id``.

        Raises:
            KeyError: If no such edge exists.
        """
        return self._edges_by_id[edge_id]

    def out_edges(self, node_id: str) -> list[DiagramEdge]:
        return self._out.get(node_id, [])

    def in_edges(self, node_id: str) -> list[DiagramEdge]:
        return self._in.get(node_id, [])

    def children(self, node_id: str) -> list[DiagramNode]:
        return [self._nodes_by_id[e.target_id] for e in self.out_edges(node_id)]

    def parent(self, node_id: str) -> DiagramNode | None:
        incoming = self.in_edges(node_id)
        return self._nodes_by_id[incoming[0].source_id] if incoming else None

    def roots(self) -> list[DiagramNode]:
        """Nodes without an incoming edge (only the synthetic root in a valid graph)."""
        return [n for n in self.nodes if not self._in.get(n.id)]

    def leaves(self) -> list[DiagramNode]:
        return [n for n in self.nodes if n.kind == NodeKind.LEAF]

    def containers(self) -> list[DiagramNode]:
        return [n for n in self.nodes if n.kind == NodeKind.CONTAINER]

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------

    def reconstruct_path(self, node_id: str) -> str:
        """Rebuild a node's locator by walking incoming edges up to the root.

        Object members contribute ``.key``, array elements ``[i]``; the root
        and folded leaves contribute nothing of their own.
        """
        segments: list[str] = []
        current: DiagramNode | None = self.node(node_id)
        while current is not None and current.kind != NodeKind.ROOT:
            if isinstance(current.key, int):
                segments.append(f"[{current.key}]")
            elif current.key is not None:
                segments.append(f".{current.key}")
            current = self.parent(current.id)
        return ROOT_PATH + "".join(reversed(segments))

    def validate(self) -> None:
        """Check the tree invariants.

        Raises:
            BuilderInvariantViolation: On duplicate ids, dangling edges, a
                missing/extra root, a node with several parents, or a node
                unreachable from the root.
        """
        if len(self._nodes_by_id) != len(self.nodes):
            msg = "duplicate node ids in graph"
            raise BuilderInvariantViolation(msg)
        if len(self._edges_by_id) != len(self.edges):
            msg = "duplicate edge ids in graph"
            raise BuilderInvariantViolation(msg)
        for e in self.edges:
            if e.source_id not in self._nodes_by_id or e.target_id not in self._nodes_by_id:
                msg = f"edge {e.id!r} references a missing node"
                raise BuilderInvariantViolation(msg)

        roots = [n for n in self.nodes if n.kind == NodeKind.ROOT]
        if len(roots) != 1 or roots[0].id != ROOT_ID:
            msg = f"expected exactly one root node, found {len(roots)}"
            raise BuilderInvariantViolation(msg)
        for n in self.nodes:
            parents = len(self._in.get(n.id, []))
            expected = 0 if n.kind == NodeKind.ROOT else 1
            if parents != expected:
                msg = f"node {n.id!r} has {parents} incoming edges, expected {expected}"
                raise BuilderInvariantViolation(msg)

        seen = {ROOT_ID}
        stack = [ROOT_ID]
        while stack:
            for e in self._out.get(stack.pop(), []):
                if e.target_id in seen:
                    msg = f"cycle through node {e.target_id!r}"
                    raise BuilderInvariantViolation(msg)
                seen.add(e.target_id)
                stack.append(e.target_id)
        if len(seen) != len(self.nodes):
            msg = f"{len(self.nodes) - len(seen)} nodes unreachable from the root"
            raise BuilderInvariantViolation(msg)

"""TreeBuilder: converts any valid JSON value into a flat DiagramGraph.

The synthetic root node stands for the top-level value.  Every object or
array below it becomes a CONTAINER node, every scalar a LEAF node, and one
edge joins each parent to each child.

Folding: when all direct children of a non-empty container are scalars they
are not given a node each.  They fold into a single LEAF node whose
annotations interleave ``Key<i>`` / ``Value<i>`` pairs, which keeps small flat
objects compact.  A container with any non-scalar child never folds.

Traversal uses an explicit work stack, so document depth is bounded only by
memory.  Nodes are emitted in document order.

Node ids are built from JSON Pointer paths (RFC 6901) and are therefore
identical across rebuilds of the same document:
- synthetic root:            "main-root"
- value at pointer "/a/0":   "Root/a/0"
- folded leaf of "Root/a":   "Root/a/~leaf"  ("~l" never occurs in an escaped pointer)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from json_diagram.tree.nodes import (
    ROOT_ID,
    ROOT_PATH,
    Annotation,
    AnnotationRole,
    DiagramEdge,
    DiagramGraph,
    DiagramNode,
    NodeKind,
    ShapeKind,
    edge_id,
)

logger = logging.getLogger(__name__)

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

ID_PREFIX = "Root"
FOLD_SEGMENT = "~leaf"


def escape_pointer_segment(segment: str) -> str:
    """Escape one JSON Pointer reference token (``~`` -> ``~0``, ``/`` -> ``~1``)."""
    return segment.replace("~", "~0").replace("/", "~1")


def scalar_text(value: Any) -> str:
    """Return the raw display text of a JSON scalar.

    Raises:
        TypeError: If value is not a JSON scalar.
    """
    # bool MUST be checked before int: bool subclasses int
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(f"Unsupported JSON value type: {type(value)!r}")


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _items(value: dict[str, Any] | list[Any]) -> list[tuple[str | int, Any]]:
    if isinstance(value, dict):
        return [(str(k), v) for k, v in value.items()]
    return list(enumerate(value))


def _child_path(path: str, key: str | int) -> str:
    return f"{path}[{key}]" if isinstance(key, int) else f"{path}.{key}"


@dataclass(slots=True)
class _Frame:
    """A pending child: created when popped so that nodes come out in document order."""

    parent: DiagramNode
    key: str | int
    value: Any
    pointer: str
    path: str


@dataclass
class TreeBuilder:
    """Converts any valid JSON value into a DiagramGraph.

    Example::

        builder = TreeBuilder()
        graph = builder.build({"a": 1, "b": "x"})
        # graph: ROOT("main-root") -> LEAF("Root/~leaf", a: 1, b: x)

    Attributes:
        verify: Check the tree invariants on every build.  A violation raises
            ``BuilderInvariantViolation`` and indicates a defect.
    """

    verify: bool = True

    def build(self, value: JsonValue) -> DiagramGraph:
        """Convert a JSON value to a DiagramGraph.

        Args:
            value: Any valid JSON value (dict, list, str, int, float, bool, None).

        Returns:
            The graph: the root first, every other node in document order.

        Raises:
            TypeError: If value contains a non-JSON type.
            BuilderInvariantViolation: If ``verify`` is set and the result is
                not a tree.
        """
        nodes: list[DiagramNode] = []
        edges: list[DiagramEdge] = []

        root = DiagramNode(
            id=ROOT_ID,
            kind=NodeKind.ROOT,
            path=ROOT_PATH,
            is_expanded=True,
            shape=ShapeKind.ELLIPSE,
        )
        nodes.append(root)

        if _is_container(value):
            root.child_count = len(value)
            stack: list[_Frame] = []
            self._push_children(root, value, "", ROOT_PATH, stack, nodes, edges)
            while stack:
                self._visit(stack.pop(), stack, nodes, edges)
        else:
            leaf = DiagramNode(
                id=ID_PREFIX,
                kind=NodeKind.LEAF,
                path=ROOT_PATH,
                annotations=[
                    Annotation("Value0", AnnotationRole.VALUE, scalar_text(value))
                ],
            )
            self._attach(root, leaf, nodes, edges)

        graph = DiagramGraph(nodes, edges)
        if self.verify:
            graph.validate()
        logger.debug("built diagram graph: %d nodes, %d edges", len(nodes), len(edges))
        return graph

    def _visit(
        self,
        frame: _Frame,
        stack: list[_Frame],
        nodes: list[DiagramNode],
        edges: list[DiagramEdge],
    ) -> None:
        """Create the node for one pending child and queue its own children."""
        node_id = ID_PREFIX + frame.pointer

        if not _is_container(frame.value):
            leaf = DiagramNode(
                id=node_id,
                kind=NodeKind.LEAF,
                path=frame.path,
                key=frame.key,
                annotations=_pair_annotations([(str(frame.key), frame.value)]),
            )
            self._attach(frame.parent, leaf, nodes, edges)
            return

        count = len(frame.value)
        container = DiagramNode(
            id=node_id,
            kind=NodeKind.CONTAINER,
            path=frame.path,
            key=frame.key,
            annotations=[
                Annotation("Label", AnnotationRole.LABEL, str(frame.key)),
                Annotation("Count", AnnotationRole.COUNT, f"[{count}]"),
            ],
            child_count=count,
            is_expanded=True,
        )
        self._attach(frame.parent, container, nodes, edges)
        self._push_children(
            container, frame.value, frame.pointer, frame.path, stack, nodes, edges
        )

    def _push_children(
        self,
        node: DiagramNode,
        value: dict[str, Any] | list[Any],
        pointer: str,
        path: str,
        stack: list[_Frame],
        nodes: list[DiagramNode],
        edges: list[DiagramEdge],
    ) -> None:
        """Fold an all-scalar child set, or queue each child for its own node."""
        items = _items(value)
        if not items:
            return

        if not any(_is_container(v) for _, v in items):
            folded = DiagramNode(
                id=f"{ID_PREFIX}{pointer}/{FOLD_SEGMENT}",
                kind=NodeKind.LEAF,
                path=path,
                annotations=_pair_annotations([(str(k), v) for k, v in items]),
            )
            self._attach(node, folded, nodes, edges)
            return

        # Reversed so that popping yields the children in document order.
        for key, child in reversed(items):
            stack.append(
                _Frame(
                    parent=node,
                    key=key,
                    value=child,
                    pointer=f"{pointer}/{escape_pointer_segment(str(key))}",
                    path=_child_path(path, key),
                )
            )

    @staticmethod
    def _attach(
        parent: DiagramNode,
        child: DiagramNode,
        nodes: list[DiagramNode],
        edges: list[DiagramEdge],
    ) -> None:
        nodes.append(child)
        edges.append(
            DiagramEdge(
                id=edge_id(parent.id, child.id), source_id=parent.id, target_id=child.id
            )
        )


def _pair_annotations(pairs: list[tuple[str, Any]]) -> list[Annotation]:
    annotations: list[Annotation] = []
    for i, (key, value) in enumerate(pairs):
        annotations.append(Annotation(f"Key{i}", AnnotationRole.KEY, key))
        annotations.append(Annotation(f"Value{i}", AnnotationRole.VALUE, scalar_text(value)))
    return annotations

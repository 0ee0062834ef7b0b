"""Tree subpackage for document-to-graph conversion primitives.

Re-exports the public API for the tree module:
- DiagramGraph / DiagramNode / DiagramEdge: the node-link model
- NodeKind: StrEnum of the three node kinds (ROOT, CONTAINER, LEAF)
- TreeBuilder: converts any valid JSON value into a DiagramGraph
- XmlNormalizer: converts XML text into the equivalent JSON shape
"""

from json_diagram.tree.builder import TreeBuilder
from json_diagram.tree.nodes import (
    Annotation,
    AnnotationRole,
    DiagramEdge,
    DiagramGraph,
    DiagramNode,
    NodeKind,
)
from json_diagram.tree.normalizer import XmlNormalizer

__all__ = [
    "Annotation",
    "AnnotationRole",
    "DiagramEdge",
    "DiagramGraph",
    "DiagramNode",
    "NodeKind",
    "TreeBuilder",
    "XmlNormalizer",
]

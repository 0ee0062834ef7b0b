"""GeometryEngine: sizes nodes and places and styles their annotations.

Invoked once per node after TreeBuilder (and again by the renderer's
node-defaults hook, and whenever the display options change).  Every call
recomputes the node from its raw annotation text, so layout is idempotent.

Sizing rules (all sizes in pixels, see DiagramConstants):

- ROOT: a fixed ``root_size`` circle.
- LEAF with key/value pairs: one line per pair, each measured as
  ``key + pair_separator + value``.
      width  = max(widest_line + padding, min_width)
      height = max(lines * line_height + 2 * padding, min_height)
  Line i (1-based) of n sits at vertical fraction i / (n + 1).
- LEAF with a single unpaired value: measured directly and centred.
- CONTAINER: a single line ``label + count`` (count omitted when hidden).
      width  = max(text + padding + 2 * icon_width, min_width)
      height = max(line_height + 2 * padding, min_height)

Value fragments are coloured by lexical type: numbers, ``true``, ``false``
and strings each get their own theme colour; strings are displayed quoted.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

import numpy as np

from json_diagram.layout.config import DiagramConstants, DisplayOptions, Orientation
from json_diagram.layout.theme import ThemeSettings, get_theme
from json_diagram.metrics.cache import MeasurementCache
from json_diagram.metrics.static import StaticMeasurer
from json_diagram.tree.nodes import (
    Alignment,
    AnnotationRole,
    DiagramEdge,
    DiagramGraph,
    DiagramNode,
    EdgeStyle,
    ExpandIcon,
    IconShape,
    Margin,
    NodeKind,
    NodeStyle,
    Point,
    ShapeKind,
    Size,
    TextStyle,
)

if TYPE_CHECKING:
    from json_diagram.metrics.protocols import TextMeasurer

__all__ = [
    "GeometryEngine",
    "ValueKind",
    "classify_value",
    "format_value",
    "icon_anchor",
]

_NUMERIC = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


class ValueKind(StrEnum):
    """Lexical type of a leaf value, used for colouring and quoting."""

    NUMBER = auto()
    TRUE = auto()
    FALSE = auto()
    STRING = auto()


def classify_value(text: str) -> ValueKind:
    """Classify raw value text by its lexical form.

    Example::

        classify_value("42")      # ValueKind.NUMBER
        classify_value("-1.5e3")  # ValueKind.NUMBER
        classify_value("True")    # ValueKind.TRUE
        classify_value("hello")   # ValueKind.STRING
    """
    if _NUMERIC.fullmatch(text.strip()):
        return ValueKind.NUMBER
    lowered = text.lower()
    if lowered == "true":
        return ValueKind.TRUE
    if lowered == "false":
        return ValueKind.FALSE
    return ValueKind.STRING


def format_value(text: str) -> str:
    """Return value text as displayed.

    Numbers are shown verbatim, booleans lower-cased, and strings wrapped in
    double quotes unless already quoted or blank.
    """
    kind = classify_value(text)
    if kind == ValueKind.NUMBER:
        return text
    if kind in (ValueKind.TRUE, ValueKind.FALSE):
        return text.lower()
    if not text.strip():
        return text
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text
    return f'"{text}"'


def icon_anchor(orientation: Orientation) -> Point:
    """Anchor of the expand/collapse affordance for ``orientation``.

    Horizontal layouts put the icon at the horizontal centre of the bottom
    edge (top edge for right-to-left); vertical layouts put it at the
    vertical centre of the right edge.
    """
    if orientation.is_horizontal:
        return Point(0.5, 0.0 if orientation == Orientation.RIGHT_TO_LEFT else 1.0)
    return Point(1.0, 0.5)


class GeometryEngine:
    """Computes node sizes, annotation placement and styles.

    Example::

        engine = GeometryEngine()
        graph = TreeBuilder().build({"a": 1, "b": "x"})
        engine.layout_graph(graph)
        leaf = graph.nodes[1]
        leaf.geometry.width, leaf.geometry.height   # (56.2, 52.0) with StaticMeasurer

    Args:
        measurer: TextMeasurer used for every width.  Defaults to a
            ``StaticMeasurer`` behind a ``MeasurementCache``.
        constants: Sizing parameters.  Defaults to ``DiagramConstants()``.
        options: Display options.  Defaults to ``DisplayOptions()``.
    """

    def __init__(
        self,
        measurer: TextMeasurer | None = None,
        constants: DiagramConstants | None = None,
        options: DisplayOptions | None = None,
    ) -> None:
        self._measurer: Any = (
            measurer if measurer is not None else MeasurementCache(StaticMeasurer())
        )
        self.constants = constants if constants is not None else DiagramConstants()
        self.options = options if options is not None else DisplayOptions()

    @property
    def theme(self) -> ThemeSettings:
        return get_theme(self.options.theme)

    def measure(self, text: str) -> float:
        return float(self._measurer.measure(text, self.constants.font))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def layout(self, node: DiagramNode) -> DiagramNode:
        """Size, place and style ``node`` in place and return it."""
        node.style = self.default_style()
        if node.kind == NodeKind.ROOT:
            node.shape = ShapeKind.ELLIPSE
            node.geometry = Size(self.constants.root_size, self.constants.root_size)
        elif node.kind == NodeKind.LEAF:
            node.shape = ShapeKind.RECTANGLE
            self._layout_leaf(node)
        else:
            node.shape = ShapeKind.RECTANGLE
            self._layout_container(node)
        self._configure_icons(node)
        return node

    def layout_graph(self, graph: DiagramGraph) -> DiagramGraph:
        """Lay out every node and style every edge of ``graph``."""
        for node in graph.nodes:
            self.layout(node)
        for edge in graph.edges:
            self.style_edge(edge)
        return graph

    def style_edge(self, edge: DiagramEdge) -> DiagramEdge:
        """Apply the connector defaults to ``edge`` in place and return it."""
        edge.style = EdgeStyle(stroke_color=self.theme.connector_stroke_color)
        return edge

    def default_style(self) -> NodeStyle:
        theme = self.theme
        return NodeStyle(fill=theme.node_fill_color, stroke_color=theme.node_stroke_color)

    def place_icons(self, node: DiagramNode, orientation: Orientation) -> DiagramNode:
        """Re-anchor the node's expand/collapse icons for ``orientation``."""
        if node.expand_icon is not None and node.collapse_icon is not None:
            node.expand_icon.offset = icon_anchor(orientation)
            node.collapse_icon.offset = icon_anchor(orientation)
        return node

    def value_color(self, text: str) -> str:
        theme = self.theme
        kind = classify_value(text)
        if kind == ValueKind.NUMBER:
            return theme.numeric_color
        if kind == ValueKind.TRUE:
            return theme.boolean_true_color
        if kind == ValueKind.FALSE:
            return theme.boolean_false_color
        return theme.text_value_color

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def _layout_leaf(self, node: DiagramNode) -> None:
        c = self.constants
        keys = [a for a in node.annotations if a.role == AnnotationRole.KEY]
        values = [a for a in node.annotations if a.role == AnnotationRole.VALUE]

        for value in values:
            value.content = format_value(value.text)
            value.style = self._text_style(self.value_color(value.text))
            value.alignment = Alignment.CENTER
            value.visible = True

        if not keys:
            text = node.annotations[0].content if node.annotations else ""
            width = max(self.measure(text or " ") + c.padding, c.min_width)
            height = max(2 * c.padding, c.min_height)
            node.geometry = Size(width, height)
            for value in values:
                value.offset = Point(0.5, 0.5)
            return

        key_widths = np.array([self.measure(k.text) for k in keys], dtype=np.float64)
        value_widths = np.array([self.measure(v.content) for v in values], dtype=np.float64)
        lines_text = [
            k.text + c.pair_separator + v.content for k, v in zip(keys, values, strict=True)
        ]
        line_widths = np.array([self.measure(t) for t in lines_text], dtype=np.float64)
        lines = len(keys)

        width = max(float(line_widths.max()) + c.padding, c.min_width)
        height = max(lines * c.line_height + 2 * c.padding, c.min_height)
        node.geometry = Size(width, height)

        ys = np.arange(1, lines + 1, dtype=np.float64) / (lines + 1)
        key_xs = key_widths / 2 / width + c.padding / width
        value_xs = key_widths / width + value_widths / 2 / width + (c.padding + c.value_gap) / width

        for i, (key, value) in enumerate(zip(keys, values, strict=True)):
            key.content = key.text
            key.style = self._text_style(self.theme.text_key_color)
            key.alignment = Alignment.CENTER
            key.visible = True
            key.offset = Point(float(key_xs[i]), float(ys[i]))
            value.offset = Point(float(value_xs[i]), float(ys[i]))

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _layout_container(self, node: DiagramNode) -> None:
        c = self.constants
        opts = self.options
        theme = self.theme
        label, count = node.annotations[0], node.annotations[1]

        text = label.text + (count.text if opts.show_counts else "")
        width = max(self.measure(text) + c.padding + 2 * c.icon_width, c.min_width)
        height = max(c.line_height + 2 * c.padding, c.min_height)
        node.geometry = Size(width, height)

        label.content = label.text
        label.style = self._text_style(theme.text_key_color)
        label.visible = True
        if opts.show_counts:
            label.offset = Point(0.0, 0.5)
            label.margin = Margin(left=c.padding)
            label.alignment = Alignment.LEFT
        else:
            label.offset = Point(0.5, 0.5)
            label.margin = Margin(left=-c.padding if opts.show_expand_icons else 0.0)
            label.alignment = Alignment.CENTER

        count.content = count.text
        count.visible = opts.show_counts
        if opts.show_counts:
            count.style = self._text_style(theme.text_value_color)
            count.offset = Point(1.0, 0.5)
            count.alignment = Alignment.RIGHT
            count.margin = Margin(
                right=c.padding + (c.icon_width if opts.show_expand_icons else 0.0)
            )

    def _configure_icons(self, node: DiagramNode) -> None:
        if node.kind != NodeKind.CONTAINER or not self.options.show_expand_icons:
            node.expand_icon = None
            node.collapse_icon = None
            return
        node.expand_icon = self._icon(IconShape.MINUS, node.geometry.height)
        node.collapse_icon = self._icon(IconShape.PLUS, node.geometry.height)
        self.place_icons(node, self.options.orientation)

    def _icon(self, shape: IconShape, height: float) -> ExpandIcon:
        c = self.constants
        theme = self.theme
        return ExpandIcon(
            shape=shape,
            width=c.icon_width,
            height=height,
            corner_radius=c.corner_radius,
            offset=Point(),
            margin=Margin(right=c.icon_width / 2),
            fill=theme.expand_icon_fill_color,
            border_color=theme.expand_icon_border,
            icon_color=theme.expand_icon_color,
        )

    def _text_style(self, color: str) -> TextStyle:
        font = self.constants.font
        return TextStyle(color=color, font_family=font.family, font_size=font.size)

"""json-diagram - interactive tree diagrams for JSON and XML documents."""

from __future__ import annotations

from json_diagram.actions import Action, Viewport
from json_diagram.api import build_diagram, diagram_from_text, graph_to_dict
from json_diagram.convert import DocumentFormat, convert_document, json_to_xml, parse_document
from json_diagram.errors import BuilderInvariantViolation, ConversionError, DiagramError, ParseError
from json_diagram.layout.config import (
    CollapsePolicy,
    DiagramConstants,
    DisplayOptions,
    Orientation,
    ThemeName,
    ViewOption,
)
from json_diagram.layout.geometry import GeometryEngine
from json_diagram.metrics import FontSpec, MeasurementCache, StaticMeasurer, TextMeasurer
from json_diagram.session import DiagramSession
from json_diagram.tree.builder import TreeBuilder
from json_diagram.tree.nodes import DiagramEdge, DiagramGraph, DiagramNode

__version__: str = "0.1.0"
__all__: list[str] = [
    "Action",
    "BuilderInvariantViolation",
    "CollapsePolicy",
    "ConversionError",
    "DiagramConstants",
    "DiagramEdge",
    "DiagramError",
    "DiagramGraph",
    "DiagramNode",
    "DiagramSession",
    "DisplayOptions",
    "DocumentFormat",
    "FontSpec",
    "GeometryEngine",
    "MeasurementCache",
    "Orientation",
    "ParseError",
    "StaticMeasurer",
    "TextMeasurer",
    "ThemeName",
    "TreeBuilder",
    "ViewOption",
    "Viewport",
    "build_diagram",
    "convert_document",
    "diagram_from_text",
    "graph_to_dict",
    "json_to_xml",
    "parse_document",
]

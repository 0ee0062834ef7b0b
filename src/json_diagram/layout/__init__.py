"""Layout subpackage: node geometry, annotation placement, themes and options."""

from json_diagram.layout.config import (
    CollapsePolicy,
    DiagramConstants,
    DisplayOptions,
    Orientation,
    ThemeName,
    ViewOption,
)
from json_diagram.layout.geometry import GeometryEngine, ValueKind, classify_value, format_value
from json_diagram.layout.theme import DARK_THEME, LIGHT_THEME, ThemeSettings, get_theme

__all__ = [
    "DARK_THEME",
    "LIGHT_THEME",
    "CollapsePolicy",
    "DiagramConstants",
    "DisplayOptions",
    "GeometryEngine",
    "Orientation",
    "ThemeName",
    "ThemeSettings",
    "ValueKind",
    "ViewOption",
    "classify_value",
    "format_value",
    "get_theme",
]

"""Colour palettes for diagram nodes, annotations, icons and connectors."""

from __future__ import annotations

from dataclasses import dataclass

from json_diagram.layout.config import ThemeName

__all__ = ["DARK_THEME", "LIGHT_THEME", "ThemeSettings", "get_theme"]


@dataclass(frozen=True, slots=True)
class ThemeSettings:
    """Immutable colour palette.

    Attributes:
        background_color: Diagram canvas background.
        gridlines_color: Grid line colour.
        node_fill_color / node_stroke_color: Default node body.
        text_key_color: Keys and container labels.
        text_value_color: String values and child counts.
        numeric_color: Numeric values.
        boolean_true_color / boolean_false_color: ``true`` / ``false`` values.
        highlight_focus_color: Fill of the focused search match.
        highlight_fill_color: Fill of the other search matches.
        highlight_stroke_color: Stroke of every search match.
        expand_icon_fill_color / expand_icon_border / expand_icon_color:
            Expand/collapse affordance.
        connector_stroke_color: Edges.
    """

    background_color: str
    gridlines_color: str
    node_fill_color: str
    node_stroke_color: str
    text_key_color: str
    text_value_color: str
    numeric_color: str
    boolean_true_color: str
    boolean_false_color: str
    highlight_focus_color: str
    highlight_fill_color: str
    highlight_stroke_color: str
    expand_icon_fill_color: str
    expand_icon_border: str
    expand_icon_color: str
    connector_stroke_color: str


LIGHT_THEME = ThemeSettings(
    background_color="#F8F9FA",
    gridlines_color="#EBE8E8",
    node_fill_color="#FFFFFF",
    node_stroke_color="#BDBDBD",
    text_key_color="#A020F0",
    text_value_color="#4B0082",
    numeric_color="#E67E22",
    boolean_true_color="#2E8B57",
    boolean_false_color="#FF0000",
    highlight_focus_color="#FFC107",
    highlight_fill_color="#FFF3C4",
    highlight_stroke_color="#E0A800",
    expand_icon_fill_color="#E9ECEF",
    expand_icon_border="#BDBDBD",
    expand_icon_color="#212529",
    connector_stroke_color="#9E9E9E",
)

DARK_THEME = ThemeSettings(
    background_color="#1E1E1E",
    gridlines_color="#2D2D2D",
    node_fill_color="#292929",
    node_stroke_color="#4A4A4A",
    text_key_color="#4DC9FF",
    text_value_color="#CE9178",
    numeric_color="#B5CEA8",
    boolean_true_color="#3DDC84",
    boolean_false_color="#F44747",
    highlight_focus_color="#806000",
    highlight_fill_color="#4D3F00",
    highlight_stroke_color="#FFC107",
    expand_icon_fill_color="#3A3A3A",
    expand_icon_border="#4A4A4A",
    expand_icon_color="#E0E0E0",
    connector_stroke_color="#6E6E6E",
)

_THEMES = {ThemeName.LIGHT: LIGHT_THEME, ThemeName.DARK: DARK_THEME}


def get_theme(name: ThemeName | str) -> ThemeSettings:
    """Return the palette registered under ``name``.

    Raises:
        ValueError: If ``name`` is not a known theme.
    """
    return _THEMES[ThemeName(name)]

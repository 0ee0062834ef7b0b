"""Tests for layout configuration: orientations, display options, constants, themes."""

from __future__ import annotations

import dataclasses

import pytest

from json_diagram.layout.config import (
    CollapsePolicy,
    DiagramConstants,
    DisplayOptions,
    Orientation,
    ThemeName,
    ViewOption,
)
from json_diagram.layout.theme import DARK_THEME, LIGHT_THEME, get_theme


class TestOrientation:
    def test_values(self) -> None:
        assert [o.value for o in Orientation] == [
            "LeftToRight",
            "TopToBottom",
            "RightToLeft",
            "BottomToTop",
        ]

    def test_next_cycles(self) -> None:
        o = Orientation.LEFT_TO_RIGHT
        seen = []
        for _ in range(4):
            o = o.next()
            seen.append(o)
        assert seen == [
            Orientation.TOP_TO_BOTTOM,
            Orientation.RIGHT_TO_LEFT,
            Orientation.BOTTOM_TO_TOP,
            Orientation.LEFT_TO_RIGHT,
        ]

    def test_is_horizontal(self) -> None:
        assert Orientation.LEFT_TO_RIGHT.is_horizontal
        assert Orientation.RIGHT_TO_LEFT.is_horizontal
        assert not Orientation.TOP_TO_BOTTOM.is_horizontal
        assert not Orientation.BOTTOM_TO_TOP.is_horizontal


class TestDisplayOptions:
    def test_defaults(self) -> None:
        options = DisplayOptions()
        assert options.show_counts
        assert options.show_expand_icons
        assert options.show_grid
        assert options.orientation == Orientation.LEFT_TO_RIGHT
        assert options.theme == ThemeName.LIGHT

    @pytest.mark.parametrize(
        ("option", "field"),
        [
            (ViewOption.GRID, "show_grid"),
            (ViewOption.COUNT, "show_counts"),
            (ViewOption.EXPAND_ICONS, "show_expand_icons"),
        ],
    )
    def test_toggled_flips_one_field(self, option: ViewOption, field: str) -> None:
        before = DisplayOptions()
        after = before.toggled(option)
        assert getattr(after, field) is not getattr(before, field)
        assert after.toggled(option) == before

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DisplayOptions().show_grid = False  # type: ignore[misc]

    def test_with_orientation_and_theme(self) -> None:
        options = DisplayOptions().with_orientation(Orientation.TOP_TO_BOTTOM)
        options = options.with_theme(ThemeName.DARK)
        assert options.orientation == Orientation.TOP_TO_BOTTOM
        assert options.theme == ThemeName.DARK


class TestDiagramConstants:
    def test_defaults(self) -> None:
        c = DiagramConstants()
        assert c.font.family == "Consolas"
        assert c.font.size == 12.0
        assert (c.line_height, c.padding, c.icon_width) == (16.0, 10.0, 36.0)
        assert (c.min_width, c.min_height, c.root_size) == (50.0, 40.0, 40.0)

    def test_field_names(self) -> None:
        assert [f.name for f in dataclasses.fields(DiagramConstants)] == [
            "font",
            "line_height",
            "padding",
            "icon_width",
            "corner_radius",
            "root_size",
            "min_width",
            "min_height",
            "value_gap",
            "pair_separator",
            "zoom_step",
        ]

    @pytest.mark.parametrize("name", ["line_height", "root_size", "min_width"])
    def test_rejects_non_positive(self, name: str) -> None:
        with pytest.raises(ValueError, match=name):
            DiagramConstants(**{name: 0})

    def test_rejects_negative_padding(self) -> None:
        with pytest.raises(ValueError, match="padding"):
            DiagramConstants(padding=-1)

    @pytest.mark.parametrize("step", [0.0, 1.0, -0.5])
    def test_rejects_bad_zoom_step(self, step: float) -> None:
        with pytest.raises(ValueError, match="zoom_step"):
            DiagramConstants(zoom_step=step)


class TestThemes:
    def test_lookup_by_name(self) -> None:
        assert get_theme(ThemeName.LIGHT) is LIGHT_THEME
        assert get_theme("dark") is DARK_THEME

    def test_unknown_theme(self) -> None:
        with pytest.raises(ValueError):
            get_theme("neon")

    def test_palettes_differ(self) -> None:
        assert LIGHT_THEME.node_fill_color != DARK_THEME.node_fill_color

    def test_every_colour_is_hex(self) -> None:
        for theme in (LIGHT_THEME, DARK_THEME):
            for field in dataclasses.fields(theme):
                value = getattr(theme, field.name)
                assert value.startswith("#")
                assert len(value) == 7


class TestCollapsePolicy:
    def test_members(self) -> None:
        assert set(CollapsePolicy) == {CollapsePolicy.TOGGLE, CollapsePolicy.DERIVED}
        assert CollapsePolicy("derived") is CollapsePolicy.DERIVED

"""Layout configuration: sizing constants, display options and orientations.

``DiagramConstants`` holds the fixed sizing parameters of the geometry
engine.  ``DisplayOptions`` holds the user-toggled view state.  Both are
frozen (immutable) dataclasses; toggles produce a new ``DisplayOptions``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum, auto

from json_diagram.metrics.protocols import FontSpec


class Orientation(StrEnum):
    """Direction in which the tree grows.

    Rotation cycles through the members in declaration order.
    """

    LEFT_TO_RIGHT = "LeftToRight"
    TOP_TO_BOTTOM = "TopToBottom"
    RIGHT_TO_LEFT = "RightToLeft"
    BOTTOM_TO_TOP = "BottomToTop"

    @property
    def is_horizontal(self) -> bool:
        return self in (Orientation.LEFT_TO_RIGHT, Orientation.RIGHT_TO_LEFT)

    def next(self) -> Orientation:
        members = list(Orientation)
        return members[(members.index(self) + 1) % len(members)]


class ViewOption(StrEnum):
    """Display toggles exposed in the view menu."""

    GRID = auto()
    COUNT = auto()
    EXPAND_ICONS = auto()


class ThemeName(StrEnum):
    LIGHT = auto()
    DARK = auto()


class CollapsePolicy(StrEnum):
    """How the whole-graph collapse toggle decides which branch to run.

    - TOGGLE:  flip an independent flag on every call, regardless of what
               individual nodes look like (can drift after per-node toggles).
    - DERIVED: expand when any node is currently collapsed, else collapse.
    """

    TOGGLE = auto()
    DERIVED = auto()


@dataclass(frozen=True, slots=True)
class DiagramConstants:
    """Immutable sizing parameters for the geometry engine.

    Attributes:
        font: Font used for every annotation.
        line_height: Height of one text line in pixels.
        padding: Inner padding around annotations in pixels.
        icon_width: Width of the expand/collapse affordance.
        corner_radius: Corner radius of node rectangles and icons.
        root_size: Diameter of the synthetic root circle.
        min_width: Lower bound for node width.
        min_height: Lower bound for node height.
        value_gap: Extra horizontal gap between a key and its value.
        pair_separator: Text placed between key and value when measuring a line.
        zoom_step: Zoom factor applied by the zoom in/out viewport commands.
    """

    font: FontSpec = field(default_factory=FontSpec)
    line_height: float = 16.0
    padding: float = 10.0
    icon_width: float = 36.0
    corner_radius: float = 3.0
    root_size: float = 40.0
    min_width: float = 50.0
    min_height: float = 40.0
    value_gap: float = 8.0
    pair_separator: str = "   "
    zoom_step: float = 0.2

    def __post_init__(self) -> None:
        for name in ("line_height", "root_size", "min_width", "min_height"):
            value = getattr(self, name)
            if value <= 0:
                msg = f"{name} must be > 0, got {value}"
                raise ValueError(msg)
        for name in ("padding", "icon_width", "corner_radius", "value_gap"):
            value = getattr(self, name)
            if value < 0:
                msg = f"{name} must be >= 0, got {value}"
                raise ValueError(msg)
        if not 0.0 < self.zoom_step < 1.0:
            msg = f"zoom_step must be in (0, 1), got {self.zoom_step}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class DisplayOptions:
    """Immutable view state.

    Attributes:
        show_counts: Show the ``[n]`` child count on containers.
        show_expand_icons: Draw expand/collapse affordances on containers.
        show_grid: Draw grid lines behind the diagram (renderer only).
        orientation: Direction in which the tree grows.
        theme: Colour palette name.
    """

    show_counts: bool = True
    show_expand_icons: bool = True
    show_grid: bool = True
    orientation: Orientation = Orientation.LEFT_TO_RIGHT
    theme: ThemeName = ThemeName.LIGHT

    def toggled(self, option: ViewOption) -> DisplayOptions:
        """Return a copy with ``option`` flipped."""
        if option == ViewOption.GRID:
            return replace(self, show_grid=not self.show_grid)
        if option == ViewOption.COUNT:
            return replace(self, show_counts=not self.show_counts)
        return replace(self, show_expand_icons=not self.show_expand_icons)

    def with_orientation(self, orientation: Orientation) -> DisplayOptions:
        return replace(self, orientation=orientation)

    def with_theme(self, theme: ThemeName) -> DisplayOptions:
        return replace(self, theme=theme)

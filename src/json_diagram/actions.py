"""Closed set of user actions dispatched to a DiagramSession.

Each variant is a frozen dataclass carrying only the payload it needs.  The
``Action`` alias is the union of all variants; ``DiagramSession.dispatch``
rejects anything else with ``TypeError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

from json_diagram.convert import DocumentFormat
from json_diagram.layout.config import ThemeName, ViewOption

__all__ = [
    "Action",
    "AdvanceSearch",
    "ChangeTheme",
    "LoadDocument",
    "RotateLayout",
    "Search",
    "SwitchFormat",
    "ToggleGraphCollapse",
    "ToggleViewOption",
    "Viewport",
    "ViewportCommand",
]


class Viewport(StrEnum):
    RESET = auto()
    FIT_TO_PAGE = auto()
    ZOOM_IN = auto()
    ZOOM_OUT = auto()


@dataclass(frozen=True, slots=True)
class LoadDocument:
    """Editor text changed (typing, file import)."""

    text: str


@dataclass(frozen=True, slots=True)
class SwitchFormat:
    """Document type changed; the editor text is converted."""

    target: DocumentFormat


@dataclass(frozen=True, slots=True)
class ToggleViewOption:
    option: ViewOption


@dataclass(frozen=True, slots=True)
class ChangeTheme:
    theme: ThemeName


@dataclass(frozen=True, slots=True)
class RotateLayout:
    pass


@dataclass(frozen=True, slots=True)
class ToggleGraphCollapse:
    pass


@dataclass(frozen=True, slots=True)
class Search:
    query: str


@dataclass(frozen=True, slots=True)
class AdvanceSearch:
    """Repeat-search (Enter): focus the next match."""


@dataclass(frozen=True, slots=True)
class ViewportCommand:
    command: Viewport


Action = (
    LoadDocument
    | SwitchFormat
    | ToggleViewOption
    | ChangeTheme
    | RotateLayout
    | ToggleGraphCollapse
    | Search
    | AdvanceSearch
    | ViewportCommand
)

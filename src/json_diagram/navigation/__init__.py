"""Navigation subpackage: operations over the already-built graph."""

from json_diagram.navigation.navigator import GraphNavigator
from json_diagram.navigation.protocols import Renderer, SearchListener
from json_diagram.navigation.search import SearchController, SearchState

__all__ = [
    "GraphNavigator",
    "Renderer",
    "SearchController",
    "SearchListener",
    "SearchState",
]

"""Tests for node details shown in the host's details dialog."""

from __future__ import annotations

import pytest

from json_diagram.details import format_detail_value, node_details
from json_diagram.tree.builder import TreeBuilder


class TestFormatDetailValue:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("30", "30"),
            ("-1.5", "-1.5"),
            ("True", "true"),
            ("false", "false"),
            ("Ann", '"Ann"'),
            ('"Ann"', '"Ann"'),
            ("null", '"null"'),
        ],
    )
    def test_values(self, text: str, expected: str) -> None:
        assert format_detail_value(text) == expected


class TestNodeDetails:
    DOC = {"user": {"name": "Ann", "age": 30, "admin": True, "x": None}, "n": [1]}

    def test_leaf_lines(self) -> None:
        graph = TreeBuilder().build(self.DOC)
        details = node_details(graph, "Root/user/~leaf")
        assert details is not None
        assert [(line.key, line.value, line.has_comma) for line in details.lines] == [
            ('"name"', '"Ann"', True),
            ('"age"', "30", True),
            ('"admin"', "true", True),
            ('"x"', '"null"', False),
        ]

    def test_clipboard_text(self) -> None:
        graph = TreeBuilder().build(self.DOC)
        details = node_details(graph, "Root/user/~leaf")
        assert details is not None
        assert details.clipboard_text() == (
            '{\n    "name": "Ann",\n    "age": 30,\n    "admin": true,\n    "x": "null"\n}'
        )

    def test_paths(self) -> None:
        graph = TreeBuilder().build(self.DOC)
        details = node_details(graph, "Root/user/~leaf")
        assert details is not None
        assert details.path == "Root.user"
        assert details.display_path == "{Root}.user"

    def test_content_is_display_text(self) -> None:
        graph = TreeBuilder().build({"a": 1, "b": "x"})
        details = node_details(graph, "Root/~leaf")
        assert details is not None
        assert details.content == "a: 1\nb: x"
        assert details.display_path == "{Root}"

    def test_unpaired_leaf(self) -> None:
        graph = TreeBuilder().build("hello")
        details = node_details(graph, "Root")
        assert details is not None
        assert details.lines == ()
        assert details.clipboard_text() == '"hello"'

    def test_containers_have_no_details(self) -> None:
        graph = TreeBuilder().build(self.DOC)
        assert node_details(graph, "Root/user") is None
        assert node_details(graph, "main-root") is None

    def test_unknown_node(self) -> None:
        graph = TreeBuilder().build(self.DOC)
        with pytest.raises(KeyError):
            node_details(graph, "Root/nope")

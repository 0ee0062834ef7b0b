"""Tests for document parsing and JSON <-> XML conversion."""

from __future__ import annotations

import json

import pytest

from json_diagram.convert import DocumentFormat, convert_document, json_to_xml, parse_document
from json_diagram.errors import ConversionError, DiagramError, ParseError
from json_diagram.tree.normalizer import XmlNormalizer

# ---------------------------------------------------------------------------
# parse_document
# ---------------------------------------------------------------------------


class TestParseDocument:
    def test_json(self) -> None:
        assert parse_document('{"a": [1, true, null]}', "json") == {"a": [1, True, None]}

    def test_xml(self) -> None:
        assert parse_document('<a x="1"><b>t</b></a>', DocumentFormat.XML) == {
            "a": {"x": 1, "b": "t"}
        }

    def test_top_level_scalar_json(self) -> None:
        assert parse_document("42", "json") == 42

    def test_invalid_json(self) -> None:
        with pytest.raises(ParseError, match="Invalid JSON"):
            parse_document('{"a": }', "json")

    def test_invalid_xml(self) -> None:
        with pytest.raises(ParseError):
            parse_document("not xml", "xml")

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            parse_document("{}", "yaml")

    def test_parse_error_is_a_diagram_error(self) -> None:
        assert issubclass(ParseError, DiagramError)
        assert issubclass(ConversionError, DiagramError)

    @pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity", '{"a": [1, NaN]}'])
    def test_non_standard_constants_rejected(self, text: str) -> None:
        with pytest.raises(ParseError, match="not a valid JSON value"):
            parse_document(text, "json")

    def test_oversized_integer_is_a_parse_error(self) -> None:
        with pytest.raises(ParseError, match="Invalid JSON"):
            parse_document('{"n": ' + "9" * 5000 + "}", "json")

    def test_oversized_integer_in_xml_stays_text(self) -> None:
        assert parse_document("<n>" + "9" * 5000 + "</n>", "xml") == {"n": "9" * 5000}

    def test_xml_byte_order_mark(self) -> None:
        assert parse_document("\ufeff<a>1</a>", "xml") == {"a": 1}


class TestDeepDocuments:
    DEPTH = 20_000

    def test_deep_object(self) -> None:
        value = parse_document('{"a": ' * self.DEPTH + "1" + "}" * self.DEPTH, "json")
        for _ in range(self.DEPTH):
            value = value["a"]
        assert value == 1

    def test_deep_array_with_every_scalar(self) -> None:
        core = '"x\\n", -1.5e2, 7, true, false, null, {}, [], {"k": "v", "k2": 2}'
        value = parse_document("[" * self.DEPTH + core + "]" * self.DEPTH, "json")
        for _ in range(self.DEPTH - 1):
            (value,) = value
        assert value == ["x\n", -150.0, 7, True, False, None, {}, [], {"k": "v", "k2": 2}]

    def test_duplicate_keys_keep_the_last_value(self) -> None:
        value = parse_document("[" * self.DEPTH + '{"k": 1, "k": 2}' + "]" * self.DEPTH, "json")
        for _ in range(self.DEPTH):
            (value,) = value
        assert value == {"k": 2}

    @pytest.mark.parametrize(
        "core",
        ["1,", '{"a" 1}', '{"a": 1,}', "[1 2]", "tru", "NaN", '"open', "9" * 5000],
    )
    def test_malformed_core(self, core: str) -> None:
        with pytest.raises(ParseError, match="Invalid JSON"):
            parse_document("[" * self.DEPTH + core + "]" * self.DEPTH, "json")

    def test_unterminated(self) -> None:
        with pytest.raises(ParseError, match="Expecting value"):
            parse_document("[" * self.DEPTH, "json")

    def test_extra_data(self) -> None:
        with pytest.raises(ParseError, match="Extra data"):
            parse_document("[" * self.DEPTH + "]" * self.DEPTH + " x", "json")

    def test_deep_xml(self) -> None:
        value = parse_document("<a>" * self.DEPTH + "1" + "</a>" * self.DEPTH, "xml")
        for _ in range(self.DEPTH):
            value = value["a"]
        assert value == 1

    def test_deep_document_cannot_become_xml(self) -> None:
        text = '{"a": ' * self.DEPTH + "1" + "}" * self.DEPTH
        with pytest.raises(ConversionError, match="nests too deeply"):
            convert_document(text, "json", "xml")


# ---------------------------------------------------------------------------
# json_to_xml
# ---------------------------------------------------------------------------


class TestJsonToXml:
    def test_nested_object_is_indented(self) -> None:
        assert json_to_xml({"user": {"id": 7, "name": "Ann"}}) == (
            "<user>\n  <id>7</id>\n  <name>Ann</name>\n</user>"
        )

    def test_arrays_repeat_the_element(self) -> None:
        assert json_to_xml({"i": [1, 2]}) == "<i>1</i>\n<i>2</i>"

    def test_null_and_empty_are_self_closing(self) -> None:
        assert json_to_xml({"a": None, "b": ""}) == "<a />\n<b />"

    def test_booleans_lowercased(self) -> None:
        assert json_to_xml({"ok": True}) == "<ok>true</ok>"

    def test_text_key_round_trips(self) -> None:
        doc = {"p": {"lang": "en", "#text": "hi"}}
        assert XmlNormalizer().normalize(json_to_xml(doc)) == doc

    def test_top_level_must_be_object(self) -> None:
        with pytest.raises(ConversionError, match="only a JSON object"):
            json_to_xml([1, 2])

    def test_invalid_element_name(self) -> None:
        with pytest.raises(ConversionError, match="not a valid XML element name"):
            json_to_xml({"1abc": 1})

    def test_name_with_space(self) -> None:
        with pytest.raises(ConversionError):
            json_to_xml({"first name": "Ann"})

    def test_nested_arrays(self) -> None:
        with pytest.raises(ConversionError, match="nested arrays"):
            json_to_xml({"a": [[1, 2]]})

    def test_text_key_must_be_scalar(self) -> None:
        with pytest.raises(ConversionError, match="must be a scalar"):
            json_to_xml({"p": {"#text": {"x": 1}}})


# ---------------------------------------------------------------------------
# convert_document
# ---------------------------------------------------------------------------


class TestConvertDocument:
    def test_same_format_is_identity(self) -> None:
        text = '{ "a" : 1 }'
        assert convert_document(text, "json", "json") == text

    def test_json_to_xml_to_json(self) -> None:
        doc = {"user": {"id": 7, "name": "Ann", "admin": True, "tags": ["a", "b"]}}
        xml_text = convert_document(json.dumps(doc), "json", "xml")
        back = convert_document(xml_text, "xml", "json")
        assert json.loads(back) == doc

    def test_xml_to_json_is_indented(self) -> None:
        assert convert_document("<a>1</a>", "xml", "json") == '{\n  "a": 1\n}'

    def test_non_ascii_preserved(self) -> None:
        assert "日本" in convert_document("<city>日本</city>", "xml", "json")

    def test_invalid_source(self) -> None:
        with pytest.raises(ConversionError, match="cannot convert JSON to XML"):
            convert_document("{broken", "json", "xml")

    def test_unrepresentable_structure(self) -> None:
        with pytest.raises(ConversionError):
            convert_document("[1, 2]", "json", "xml")

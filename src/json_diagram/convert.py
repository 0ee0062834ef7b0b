"""Document parsing and JSON <-> XML conversion.

``parse_document`` turns editor text into the JSON value consumed by
TreeBuilder; XML goes through ``XmlNormalizer`` first.  ``convert_document``
rewrites the editor text when the user switches the document type.
"""

from __future__ import annotations

import json
import logging
import re
import xml.etree.ElementTree as ET
from enum import StrEnum, auto
from json.decoder import scanstring
from typing import Any

from json_diagram.errors import ConversionError, ParseError
from json_diagram.tree.builder import scalar_text
from json_diagram.tree.normalizer import TEXT_KEY, XmlNormalizer

logger = logging.getLogger(__name__)

__all__ = [
    "DocumentFormat",
    "convert_document",
    "json_to_xml",
    "parse_document",
]

_normalizer = XmlNormalizer()

# XML element names (namespace prefixes are not produced).
_XML_NAME = re.compile(r"[A-Za-z_][\w.\-]*")


class DocumentFormat(StrEnum):
    """Editor document type; also the file extension used on export."""

    JSON = auto()
    XML = auto()


def parse_document(text: str, fmt: DocumentFormat | str) -> Any:
    """Parse editor text into a JSON value.

    Args:
        text: The document text.
        fmt:  ``"json"`` or ``"xml"``.

    Returns:
        The parsed JSON value (for XML, the normalized JSON shape).

    Raises:
        ParseError: If the text is not valid in the given format.
    """
    fmt = DocumentFormat(fmt)
    try:
        if fmt == DocumentFormat.JSON:
            return _loads(text)
        return _normalizer.normalize(text)
    except ValueError as exc:
        # JSONDecodeError, NaN/Infinity and integer literals past the int
        # conversion limit.
        msg = f"Invalid {fmt.upper()}: {exc}"
        raise ParseError(msg) from exc


def _reject_constant(name: str) -> Any:
    msg = f"{name} is not a valid JSON value"
    raise ValueError(msg)


def _loads(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError:
        logger.debug("document exceeds the recursive decoder's depth, decoding iteratively")
        return _decode_nested(text)


# ---------------------------------------------------------------------------
# Iterative decoder
# ---------------------------------------------------------------------------

_WHITESPACE = re.compile(r"[ \t\n\r]*")
_NUMBER = re.compile(r"(-?(?:0|[1-9][0-9]*))(\.[0-9]+)?([eE][-+]?[0-9]+)?")
_LITERALS = {"true": True, "false": False, "null": None}


def _skip(text: str, pos: int) -> int:
    return _WHITESPACE.match(text, pos).end()  # type: ignore[union-attr]


def _read_key(text: str, pos: int) -> tuple[str, int]:
    if not text.startswith('"', pos):
        msg = "Expecting property name enclosed in double quotes"
        raise json.JSONDecodeError(msg, text, pos)
    key, pos = scanstring(text, pos + 1)
    pos = _skip(text, pos)
    if not text.startswith(":", pos):
        raise json.JSONDecodeError("Expecting ':' delimiter", text, pos)
    return key, _skip(text, pos + 1)


def _read_scalar(text: str, pos: int) -> tuple[Any, int]:
    if text.startswith('"', pos):
        return scanstring(text, pos + 1)
    for literal, value in _LITERALS.items():
        if text.startswith(literal, pos):
            return value, pos + len(literal)
    match = _NUMBER.match(text, pos)
    if match is None:
        raise json.JSONDecodeError("Expecting value", text, pos)
    integer, frac, exp = match.groups()
    if frac or exp:
        return float(integer + (frac or "") + (exp or "")), match.end()
    return int(integer), match.end()


def _decode_nested(text: str) -> Any:
    """Decode JSON keeping open containers on an explicit stack.

    Accepts exactly what ``json.loads`` accepts minus NaN/Infinity; nesting
    depth is limited only by memory.
    """
    containers: list[dict[str, Any] | list[Any]] = []
    keys: list[str] = []
    value: Any
    pos = _skip(text, 0)
    while True:
        opener = text[pos : pos + 1]
        if opener in ("{", "["):
            pos = _skip(text, pos + 1)
            closer = "}" if opener == "{" else "]"
            if not text.startswith(closer, pos):
                if opener == "{":
                    key, pos = _read_key(text, pos)
                    keys.append(key)
                    containers.append({})
                else:
                    containers.append([])
                continue
            value = {} if opener == "{" else []
            pos += 1
        else:
            value, pos = _read_scalar(text, pos)

        # Store the finished value, closing every container that ends here.
        while True:
            pos = _skip(text, pos)
            if not containers:
                if pos != len(text):
                    raise json.JSONDecodeError("Extra data", text, pos)
                return value
            top = containers[-1]
            if isinstance(top, list):
                top.append(value)
                closer = "]"
            else:
                top[keys.pop()] = value
                closer = "}"
            if text.startswith(",", pos):
                pos = _skip(text, pos + 1)
                if isinstance(top, dict):
                    key, pos = _read_key(text, pos)
                    keys.append(key)
                break
            if not text.startswith(closer, pos):
                raise json.JSONDecodeError("Expecting ',' delimiter", text, pos)
            value = containers.pop()
            pos += 1


def json_to_xml(value: Any) -> str:
    """Serialize a JSON object as indented XML.

    Each top-level key becomes a top-level element.  Arrays repeat their
    element, ``"#text"`` keys become element text, and null or empty values
    become self-closing elements.

    Raises:
        ConversionError: If the value is not an object, a key is not a valid
            element name, or an array directly contains another array.
    """
    if not isinstance(value, dict):
        msg = f"only a JSON object can be converted to XML, got {type(value).__name__}"
        raise ConversionError(msg)

    parts: list[str] = []
    for key, child in value.items():
        for element in _to_elements(str(key), child):
            ET.indent(element, space="  ")
            parts.append(ET.tostring(element, encoding="unicode", short_empty_elements=True))
    return "\n".join(parts)


def _to_elements(name: str, value: Any) -> list[ET.Element]:
    if not _XML_NAME.fullmatch(name):
        msg = f"{name!r} is not a valid XML element name"
        raise ConversionError(msg)

    if isinstance(value, list):
        elements: list[ET.Element] = []
        for item in value:
            if isinstance(item, list):
                msg = f"nested arrays under {name!r} cannot be represented in XML"
                raise ConversionError(msg)
            elements.extend(_to_elements(name, item))
        return elements

    element = ET.Element(name)
    if isinstance(value, dict):
        for key, child in value.items():
            if key == TEXT_KEY:
                if isinstance(child, (dict, list)):
                    msg = f"text of {name!r} must be a scalar"
                    raise ConversionError(msg)
                element.text = scalar_text(child)
                continue
            for sub in _to_elements(str(key), child):
                element.append(sub)
    elif value is not None and value != "":
        element.text = scalar_text(value)
    return [element]


def convert_document(
    text: str,
    source: DocumentFormat | str,
    target: DocumentFormat | str,
) -> str:
    """Rewrite document text from ``source`` format to ``target`` format.

    Returns ``text`` unchanged when both formats are the same.

    Raises:
        ConversionError: If the source text cannot be parsed or its structure
            cannot be represented in the target format.
    """
    source = DocumentFormat(source)
    target = DocumentFormat(target)
    if source == target:
        return text

    try:
        value = parse_document(text, source)
    except ParseError as exc:
        msg = f"cannot convert {source.upper()} to {target.upper()}: {exc}"
        raise ConversionError(msg) from exc

    try:
        if target == DocumentFormat.JSON:
            return json.dumps(value, indent=2, ensure_ascii=False)
        return json_to_xml(value)
    except RecursionError as exc:
        msg = f"document nests too deeply to convert to {target.upper()}"
        raise ConversionError(msg) from exc

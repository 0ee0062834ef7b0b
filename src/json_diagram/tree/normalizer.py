"""XmlNormalizer: converts XML text into the equivalent JSON shape.

The result feeds TreeBuilder exactly like a parsed JSON document.

Mapping rules:
- The document is wrapped in a synthetic ``<root>`` element, so several
  top-level elements are accepted; the result is the content of that root.
- Attributes become ordinary keys (no prefix), listed before child elements.
- Repeated sibling tags become a list under the tag name, at the position of
  the first occurrence.
- An element with neither attributes nor child elements becomes its text,
  coerced to a scalar; an empty element becomes ``""``.
- An element mixing text with attributes/children keeps the text under
  ``"#text"``.
- Text and attribute values are coerced: ``true``/``false`` (any case) to
  booleans, canonical integers and decimals to numbers.  Anything else (for
  example ``"007"``) stays a string.
- Namespace URIs are dropped from tag and attribute names.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Any

from json_diagram.errors import ParseError

TEXT_KEY = "#text"
WRAPPER_TAG = "root"

_INT = re.compile(r"-?(?:0|[1-9]\d*)")
_FLOAT = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][-+]?\d+)?")

# Prolog constructs that are only legal at the very start of a document and
# therefore cannot sit inside the synthetic wrapper element.
_PROLOG = re.compile(
    r"^\s*(?:<\?xml[^>]*\?>|<!DOCTYPE[^>\[]*(?:\[[^\]]*\])?\s*>)\s*",
    re.IGNORECASE,
)


def coerce_scalar(text: str) -> str | int | float | bool:
    """Coerce XML text to a JSON scalar.

    Example::

        coerce_scalar("TRUE")   # True
        coerce_scalar("42")     # 42
        coerce_scalar("4.5")    # 4.5
        coerce_scalar("007")    # "007"
    """
    lowered = text.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        if _INT.fullmatch(text):
            return int(text)
        if _FLOAT.fullmatch(text):
            return float(text)
    except ValueError:
        # past the interpreter's int conversion limit
        return text
    return text


def _local_name(name: str) -> str:
    return name.rsplit("}", 1)[-1]


def _add_member(target: dict[str, Any], name: str, value: Any) -> None:
    if name not in target:
        target[name] = value
    elif isinstance(target[name], list):
        target[name].append(value)
    else:
        target[name] = [target[name], value]


class XmlNormalizer:
    """Normalizes XML text to the JSON shape consumed by TreeBuilder.

    Example usage:
        normalizer = XmlNormalizer()
        normalizer.normalize('<user id="7"><name>Ann</name></user>')
        # {"user": {"id": 7, "name": "Ann"}}
    """

    def normalize(self, text: str) -> Any:
        """Parse XML text and return its JSON shape.

        Args:
            text: XML document text.  Must start with ``<`` after trimming.

        Returns:
            A dict of the top-level elements (empty when there are none).

        Raises:
            ParseError: If the text does not start with ``<`` or is not
                well-formed XML.
        """
        stripped = text.lstrip("\ufeff").strip()
        if not stripped.startswith("<"):
            msg = "Invalid XML format: content must start with '<'"
            raise ParseError(msg)

        body = _PROLOG.sub("", stripped, count=1)
        try:
            wrapper = ET.fromstring(f"<{WRAPPER_TAG}>{body}</{WRAPPER_TAG}>")
        except ET.ParseError as exc:
            msg = f"Invalid XML: {exc}"
            raise ParseError(msg) from exc

        value = self.normalize_element(wrapper)
        return value if isinstance(value, dict) else {}

    def normalize_element(self, element: ET.Element) -> Any:
        """Convert one element (and its subtree) to a JSON value.

        The subtree is walked with an explicit stack, so nesting depth is
        limited only by memory.  Container dicts are attached to their parent
        when first visited; their ``"#text"`` is added once every child has
        been stored.
        """
        holder: dict[str, Any] = {}
        # (element, parent dict) to visit, or (None, finished dict, its text)
        stack: list[tuple[ET.Element | None, dict[str, Any], str]] = [(element, holder, "")]
        while stack:
            current, target, text = stack.pop()
            if current is None:
                target[TEXT_KEY] = coerce_scalar(text)
                continue

            children = list(current)
            text = "".join(
                [current.text or ""] + [child.tail or "" for child in children]
            ).strip()
            name = _local_name(current.tag)
            if not current.attrib and not children:
                _add_member(target, name, coerce_scalar(text) if text else "")
                continue

            result: dict[str, Any] = {}
            for attr, raw in current.attrib.items():
                result[_local_name(attr)] = coerce_scalar(raw)
            _add_member(target, name, result)
            if text:
                stack.append((None, result, text))
            stack.extend((child, result, "") for child in reversed(children))
        return holder[_local_name(element.tag)]

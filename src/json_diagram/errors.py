"""Exception taxonomy for json-diagram.

All errors raised by the pipeline derive from ``DiagramError`` so hosts can
catch the whole family in one place:

- ``ParseError``:                 document text is not valid JSON / XML.
- ``ConversionError``:            JSON <-> XML conversion is impossible.
- ``BuilderInvariantViolation``:  the built graph is not a tree (a defect).
"""

from __future__ import annotations

__all__ = [
    "BuilderInvariantViolation",
    "ConversionError",
    "DiagramError",
    "ParseError",
]


class DiagramError(Exception):
    """Base class for every error raised by json-diagram."""


class ParseError(DiagramError):
    """The document text could not be parsed in its declared format."""


class ConversionError(DiagramError):
    """The document could not be converted to the requested format."""


class BuilderInvariantViolation(DiagramError):
    """The builder produced a graph that is not a tree.

    Indicates a programming defect rather than bad user input.
    """

"""StaticMeasurer: dependency-free text width estimate for monospace fonts.

Diagram annotations are drawn in a monospace face, so the width of a string
is its column count times the font's advance width.  Column counts follow
the Unicode East Asian Width property: wide and fullwidth characters occupy
two columns, combining marks occupy none.

This measurer satisfies the TextMeasurer Protocol structurally without
inheriting from it.
"""

from __future__ import annotations

import unicodedata

from json_diagram.metrics.protocols import FontSpec

# Advance width of Consolas (and most monospace faces) as a fraction of the em.
DEFAULT_ADVANCE_RATIO = 0.55


def _column_width(text: str) -> int:
    """Return the number of monospace columns ``text`` occupies.

    Args:
        text: Any string.

    Returns:
        Column count: 2 per wide/fullwidth character, 0 per combining mark,
        1 for everything else.
    """
    columns = 0
    for ch in text:
        if unicodedata.combining(ch):
            continue
        columns += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
    return columns


class StaticMeasurer:
    """Monospace width model requiring nothing beyond the standard library.

    Example::

        from json_diagram.metrics import FontSpec, StaticMeasurer

        measurer = StaticMeasurer()
        measurer.measure("hello", FontSpec())   # 33.0 (5 columns * 6.6 px)

    Args:
        advance_ratio: Advance width per column as a fraction of font size.
            Defaults to 0.55.
    """

    def __init__(self, advance_ratio: float = DEFAULT_ADVANCE_RATIO) -> None:
        if advance_ratio <= 0:
            msg = f"advance_ratio must be > 0, got {advance_ratio}"
            raise ValueError(msg)
        self._advance_ratio = advance_ratio

    def measure(self, text: str, font: FontSpec) -> float:
        """Return the estimated pixel width of ``text`` in ``font``."""
        return _column_width(text) * font.size * self._advance_ratio

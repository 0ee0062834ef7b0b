"""TextMeasurer Protocol and FontSpec for the text-metrics extension point.

Every sizing decision in the geometry engine goes through a ``TextMeasurer``.
Hosts can plug in their own measurer (for example one backed by the real
rendering canvas) without inheriting from any base class: any object with a
conformant ``measure`` method passes ``isinstance`` checks.

Example::

    from json_diagram.metrics.protocols import FontSpec, TextMeasurer

    class FixedMeasurer:
        def measure(self, text: str, font: FontSpec) -> float:
            return 7.0 * len(text)

    assert isinstance(FixedMeasurer(), TextMeasurer)  # structural conformance
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

__all__ = ["FontSpec", "TextMeasurer"]


@dataclass(frozen=True, slots=True)
class FontSpec:
    """Font description used for measuring text.

    Attributes:
        family: Font family name, e.g. ``"Consolas"``.
        size:   Font size in pixels (> 0).
    """

    family: str = "Consolas"
    size: float = 12.0

    def __post_init__(self) -> None:
        if self.size <= 0:
            msg = f"size must be > 0, got {self.size}"
            raise ValueError(msg)

    @property
    def css(self) -> str:
        """CSS shorthand for this font, e.g. ``"12px Consolas"``."""
        size = int(self.size) if float(self.size).is_integer() else self.size
        return f"{size}px {self.family}"

    @classmethod
    def from_css(cls, spec: str) -> FontSpec:
        """Parse a ``"<size>px <family>"`` shorthand.

        Raises:
            ValueError: If the shorthand is not of that form.
        """
        size_part, _, family = spec.strip().partition(" ")
        if not size_part.endswith("px") or not family:
            msg = f"expected '<size>px <family>', got {spec!r}"
            raise ValueError(msg)
        return cls(family=family.strip(), size=float(size_part[:-2]))


@runtime_checkable
class TextMeasurer(Protocol):
    """Structural protocol for text measurement.

    Any class implementing ``measure(self, text: str, font: FontSpec) -> float``
    satisfies this protocol at runtime without inheritance.

    The ``measure`` method must return the rendered width of ``text`` in
    pixels (>= 0) and must be pure: the same inputs always give the same width.
    """

    def measure(self, text: str, font: FontSpec) -> float: ...

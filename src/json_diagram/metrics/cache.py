"""MeasurementCache: LRU-backed caching proxy for any TextMeasurer.

Wraps any TextMeasurer-conformant object and transparently caches widths in
memory, keyed by ``(text, font)``.  The geometry engine measures the same
labels over and over (every re-layout after a display-option toggle or theme
change), so cached strings bypass the wrapped measurer on subsequent calls.
LRU eviction occurs silently when ``max_size`` is exceeded.

Each ``MeasurementCache`` instance maintains its own ``LRUCache``; there is
no class-level shared state.

Example::

    from json_diagram.metrics import FontSpec, MeasurementCache, StaticMeasurer

    cache = MeasurementCache(StaticMeasurer(), max_size=2048)
    cache.measure("user", FontSpec())   # hits the measurer
    cache.measure("user", FontSpec())   # served from memory
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cachetools import LRUCache

if TYPE_CHECKING:
    from json_diagram.metrics.protocols import FontSpec, TextMeasurer


class MeasurementCache:
    """LRU-backed caching proxy around any TextMeasurer.

    Satisfies the ``TextMeasurer`` Protocol structurally (no inheritance
    required).

    Args:
        measurer: Any object satisfying the ``TextMeasurer`` Protocol.
        max_size: Maximum number of cached widths.  Defaults to 4096.
    """

    def __init__(self, measurer: TextMeasurer, max_size: int = 4096) -> None:
        self._measurer: Any = measurer
        self._cache: LRUCache[tuple[str, FontSpec], float] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # TextMeasurer Protocol surface
    # ------------------------------------------------------------------

    def measure(self, text: str, font: FontSpec) -> float:
        """Return the width of ``text``; only uncached pairs hit the measurer."""
        key = (text, font)
        width = self._cache.get(key)
        if width is None:
            width = float(self._measurer.measure(text, font))
            self._cache[key] = width
        return width

    def clear(self) -> None:
        """Drop every cached width (e.g. after the host's fonts changed)."""
        self._cache.clear()

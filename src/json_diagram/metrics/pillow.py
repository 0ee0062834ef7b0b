"""PillowMeasurer: text widths measured with real font files via Pillow.

Wraps ``PIL.ImageFont`` with a lazy import so that the base install (no
Pillow installed) never triggers an ``ImportError`` at module level.  Pillow
is only required when ``PillowMeasurer`` is *instantiated*.

Font families are resolved against the usual system font directories; the
monospace fallbacks are tried in order and Pillow's bundled default font is
the last resort.

Install the optional dependency with::

    pip install json-diagram[pillow]

Example::

    from json_diagram.metrics import FontSpec
    from json_diagram.metrics.pillow import PillowMeasurer

    measurer = PillowMeasurer()
    measurer.measure("hello", FontSpec("Consolas", 12))   # ~33.0
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from json_diagram.metrics.protocols import FontSpec

logger = logging.getLogger(__name__)

FONT_DIRS = [
    Path("/System/Library/Fonts"),
    Path("/Library/Fonts"),
    Path("~/Library/Fonts").expanduser(),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path("C:/Windows/Fonts"),
]

MONOSPACE_FALLBACKS = [
    "Consolas",
    "Menlo",
    "DejaVu Sans Mono",
    "Liberation Mono",
    "Courier New",
]


def _normalize_family(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", name, flags=re.IGNORECASE).lower()


class PillowMeasurer:
    """Text measurer backed by Pillow's FreeType bindings.

    Performs a lazy import of ``PIL.ImageFont`` inside ``__init__``, so
    importing this module on a base install does not raise ``ImportError``.
    Loaded fonts are cached per ``(family, size)``.

    Args:
        font_dirs: Directories searched for ``.ttf`` / ``.ttc`` files.
            Defaults to the common system font locations.

    Raises:
        ImportError: If Pillow is not installed.  The message includes the
            install command.
    """

    def __init__(self, font_dirs: list[Path] | None = None) -> None:
        try:
            from PIL import ImageFont
        except ImportError as exc:
            raise ImportError(
                "Pillow is required for PillowMeasurer. "
                "Install with: pip install json-diagram[pillow]"
            ) from exc

        self._image_font: Any = ImageFont
        self._font_dirs = font_dirs if font_dirs is not None else FONT_DIRS
        self._font_cache: dict[tuple[str, int], Any] = {}
        self._path_cache: dict[str, str | None] = {}

    def measure(self, text: str, font: FontSpec) -> float:
        """Return the advance width of ``text`` rendered in ``font``."""
        return float(self._font(font).getlength(text))

    def _font(self, font: FontSpec) -> Any:
        size = max(1, round(font.size))
        cache_key = (font.family.lower(), size)
        if cache_key in self._font_cache:
            return self._font_cache[cache_key]

        loaded = None
        for family in [font.family, *MONOSPACE_FALLBACKS]:
            path = self._locate(family)
            if path is None:
                continue
            try:
                loaded = self._image_font.truetype(path, size)
                break
            except OSError:
                logger.debug("could not load font file %s", path)
        if loaded is None:
            logger.debug("no font file found for %r, using Pillow default", font.family)
            loaded = self._image_font.load_default(size)

        self._font_cache[cache_key] = loaded
        return loaded

    def _locate(self, family: str) -> str | None:
        key = _normalize_family(family)
        if key in self._path_cache:
            return self._path_cache[key]

        found: str | None = None
        for directory in self._font_dirs:
            if not directory.exists():
                continue
            for pattern in ("*.ttf", "*.ttc"):
                for path in directory.rglob(pattern):
                    if _normalize_family(path.stem) == key:
                        found = str(path)
                        break
                if found:
                    break
            if found:
                break

        self._path_cache[key] = found
        return found

"""Metrics subpackage: the text-measurement extension point.

The base install provides ``StaticMeasurer`` (a standard-library monospace
width model) and the ``MeasurementCache`` LRU proxy.  ``PillowMeasurer``
measures with real font files and is available via an extra:

    pip install json-diagram[pillow]

All measurers satisfy the ``TextMeasurer`` Protocol structurally.
"""

from json_diagram.metrics.cache import MeasurementCache
from json_diagram.metrics.pillow import PillowMeasurer
from json_diagram.metrics.protocols import FontSpec, TextMeasurer
from json_diagram.metrics.static import StaticMeasurer

__all__ = [
    "FontSpec",
    "MeasurementCache",
    "PillowMeasurer",
    "StaticMeasurer",
    "TextMeasurer",
]

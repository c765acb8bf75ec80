"""
LibraNet Durations — Public API
=================================
Free-form duration text → timedelta.
"""

from libranet.durations.parser import (
    UNIT_ALIASES,
    DurationParser,
    parse_duration,
)

__all__ = [
    "UNIT_ALIASES",
    "DurationParser",
    "parse_duration",
]

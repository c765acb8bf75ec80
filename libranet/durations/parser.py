"""
LibraNet Durations — Free-Form Duration Parser
================================================
Turns loosely formatted human input ("14 days", "1d2h3m4s",
"1 day 5 hours 30 minutes") into an exact timedelta.

Grammar:
    The text is scanned for repeated tokens of the form
    <integer> <optional whitespace> <unit alias>, case-insensitive.
    Anything between tokens is ignored. Tokens of the same unit
    class are summed, never overwritten. Order does not matter.

This grammar is the public human-input contract. Changing the
alias table changes what borrowers may type.
"""

from __future__ import annotations

import re
from datetime import timedelta
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from libranet.errors import InvalidDuration


# ══════════════════════════════════════════════════════════════
# UNIT TABLE
# ══════════════════════════════════════════════════════════════

_UNIT_CLASSES: Tuple[Tuple[timedelta, Tuple[str, ...]], ...] = (
    (timedelta(days=1), ("d", "day", "days")),
    (timedelta(hours=1), ("h", "hr", "hrs", "hour", "hours")),
    (timedelta(minutes=1), ("m", "min", "mins", "minute", "minutes")),
    (timedelta(seconds=1), ("s", "sec", "secs", "second", "seconds")),
)

UNIT_ALIASES: Mapping[str, timedelta] = MappingProxyType({
    alias: length
    for length, aliases in _UNIT_CLASSES
    for alias in aliases
})

# Longest alias first so the captured unit is the full word.
_ALIAS_PATTERN = "|".join(
    re.escape(alias)
    for alias in sorted(UNIT_ALIASES, key=len, reverse=True)
)

_TOKEN = re.compile(rf"(\d+)\s*({_ALIAS_PATTERN})", re.IGNORECASE)


# ══════════════════════════════════════════════════════════════
# PARSER
# ══════════════════════════════════════════════════════════════

def parse_duration(text: Optional[str]) -> timedelta:
    """
    Parse free-form duration text into a timedelta.

    Raises:
        InvalidDuration: If text is None/blank, no token is found, or
            the total exceeds what a timedelta can hold.
    """
    if text is not None and not isinstance(text, str):
        raise InvalidDuration(text, "duration must be text")
    if text is None or not text.strip():
        raise InvalidDuration(text, "empty duration")

    total = timedelta(0)
    found = False
    for match in _TOKEN.finditer(text):
        found = True
        value = int(match.group(1))
        unit = match.group(2).lower()
        length = UNIT_ALIASES.get(unit)
        if length is None:
            # Unreachable with the current scanner; guards a broadened grammar.
            raise InvalidDuration(text, f"unknown duration unit '{unit}'")
        try:
            total += value * length
        except OverflowError:
            raise InvalidDuration(text, "duration out of range") from None

    if not found:
        raise InvalidDuration(text)
    return total


class DurationParser:
    """
    Object form of parse_duration, for callers that inject a parser.

    Stateless and safe to share across threads.
    """

    aliases: Mapping[str, timedelta] = UNIT_ALIASES

    def parse(self, text: Optional[str]) -> timedelta:
        return parse_duration(text)

    def __call__(self, text: Optional[str]) -> timedelta:
        return parse_duration(text)

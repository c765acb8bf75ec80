"""
LibraNet Items — Kind Payloads
================================
Every item shares one lifecycle record (see lifecycle.py) and
carries exactly one kind-specific payload:

    BOOK        → BookDetails(page_count)
    AUDIOBOOK   → AudiobookDetails(playback_duration)
    EMAGAZINE   → EMagazineDetails(issue_number)

Payloads are passive, immutable data validated at construction.
The playable capability belongs to audiobooks only and is reached
through LibraryItem.as_playable(), never by isinstance checks on
the item itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Protocol, Union, runtime_checkable

from libranet.errors import InvalidArgument

logger = logging.getLogger("libranet.items")


class ItemKind(Enum):
    """Tag of the item variant."""
    BOOK = "BOOK"
    AUDIOBOOK = "AUDIOBOOK"
    EMAGAZINE = "EMAGAZINE"


# ══════════════════════════════════════════════════════════════
# PLAYABLE CAPABILITY
# ══════════════════════════════════════════════════════════════

@runtime_checkable
class Playable(Protocol):
    """Capability of items that can be played back."""

    @property
    def playback_duration(self) -> timedelta:
        ...  # pragma: no cover

    def play(self) -> None:
        ...  # pragma: no cover

    def pause(self) -> None:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# PAYLOADS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BookDetails:
    page_count: int

    kind = ItemKind.BOOK

    def __post_init__(self):
        if isinstance(self.page_count, bool) or not isinstance(self.page_count, int):
            raise InvalidArgument("page_count must be an int.")
        if self.page_count < 0:
            raise InvalidArgument(
                f"page_count must be >= 0, got {self.page_count}."
            )


@dataclass(frozen=True)
class AudiobookDetails:
    playback_duration: timedelta

    kind = ItemKind.AUDIOBOOK

    def __post_init__(self):
        if not isinstance(self.playback_duration, timedelta):
            raise InvalidArgument("playback_duration is required.")
        if self.playback_duration < timedelta(0):
            raise InvalidArgument("playback_duration must not be negative.")


@dataclass(frozen=True)
class EMagazineDetails:
    issue_number: str

    kind = ItemKind.EMAGAZINE

    def __post_init__(self):
        if not isinstance(self.issue_number, str):
            raise InvalidArgument("issue_number is required.")


ItemDetails = Union[BookDetails, AudiobookDetails, EMagazineDetails]


# ══════════════════════════════════════════════════════════════
# AUDIO PLAYER
# ══════════════════════════════════════════════════════════════

class AudioPlayer:
    """
    Playable view over an audiobook.

    Holds no playback engine; play/pause record the intent and
    log it so a front end can react.
    """

    def __init__(self, title: str, details: AudiobookDetails):
        self._title = title
        self._details = details
        self._playing = False

    @property
    def playback_duration(self) -> timedelta:
        return self._details.playback_duration

    @property
    def is_playing(self) -> bool:
        return self._playing

    def play(self) -> None:
        self._playing = True
        logger.info(f"Playing audiobook: {self._title}")

    def pause(self) -> None:
        self._playing = False
        logger.info(f"Pausing audiobook: {self._title}")

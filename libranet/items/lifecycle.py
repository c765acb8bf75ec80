"""
LibraNet Items — Borrow / Return Lifecycle
============================================
Per-item state machine:

    AVAILABLE ──borrow──▶ BORROWED ──return──▶ AVAILABLE

RULES (NON-NEGOTIABLE):
- Identity (item_id, title, author, details) is fixed at creation
- An active Loan exists if and only if the item is BORROWED
- due_at = borrowed_at + parsed duration (never before borrowed_at)
- borrow on a BORROWED item fails with ItemNotAvailable, no mutation
- return on an AVAILABLE item is a no-op returning 0 (idempotent)
- Overdue days round UP on any sub-day remainder
- Each item owns its own lock; items never share one
- Timestamps come from the injected Clock only
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Hashable, Optional

from libranet.durations.parser import parse_duration
from libranet.errors import (
    InvalidArgument,
    InvalidDuration,
    ItemNotAvailable,
    UnsupportedOperation,
)
from libranet.items.kinds import (
    AudioPlayer,
    AudiobookDetails,
    BookDetails,
    EMagazineDetails,
    ItemDetails,
    ItemKind,
    Playable,
)
from libranet.time.clock import Clock, get_default_clock

logger = logging.getLogger("libranet.items")

ONE_DAY = timedelta(days=1)


# ══════════════════════════════════════════════════════════════
# STATE + LOAN RECORD
# ══════════════════════════════════════════════════════════════

class ItemState(Enum):
    AVAILABLE = "AVAILABLE"
    BORROWED = "BORROWED"


@dataclass(frozen=True)
class Loan:
    """Active loan attached to a BORROWED item."""
    borrower_id: Hashable
    borrowed_at: datetime
    due_at: datetime

    def __post_init__(self):
        if self.due_at < self.borrowed_at:
            raise InvalidArgument("due_at must not precede borrowed_at.")

    @property
    def period(self) -> timedelta:
        return self.due_at - self.borrowed_at

    def is_overdue_at(self, at: datetime) -> bool:
        return at > self.due_at

    def to_dict(self) -> dict:
        return {
            "borrower_id": self.borrower_id,
            "borrowed_at": self.borrowed_at.isoformat(),
            "due_at": self.due_at.isoformat(),
        }


@dataclass(frozen=True)
class LoanReturn:
    """Outcome of closing a loan: the closed loan and its overdue days."""
    loan: Loan
    returned_at: datetime
    overdue_days: int


def overdue_days_between(due_at: datetime, now: datetime) -> int:
    """
    Whole days past due_at, rounded up on any remainder.

    0 when now <= due_at. Exactly one day late is 1;
    one day and one minute late is 2.
    """
    if now <= due_at:
        return 0
    days, remainder = divmod(now - due_at, ONE_DAY)
    if remainder:
        days += 1
    return days


# ══════════════════════════════════════════════════════════════
# LIBRARY ITEM
# ══════════════════════════════════════════════════════════════

class LibraryItem:
    """
    A borrowable item: fixed identity, one kind payload, one lifecycle.

    Thread-safe. borrow/return_item/archive_issue on one instance
    are serialized by that instance's lock; distinct items run
    fully in parallel.

    Usage:
        item = LibraryItem.book(1, "Effective Java", "Joshua Bloch", 416)
        item.borrow(1001, "14 days")
        overdue = item.return_item()
    """

    def __init__(
        self,
        item_id: Hashable,
        title: str,
        author: str,
        details: ItemDetails,
        clock: Optional[Clock] = None,
    ):
        if item_id is None:
            raise InvalidArgument("item_id is required.")
        if not isinstance(title, str) or not title.strip():
            raise InvalidArgument("title must be a non-empty string.")
        if not isinstance(author, str) or not author.strip():
            raise InvalidArgument("author must be a non-empty string.")
        if not isinstance(details, (BookDetails, AudiobookDetails, EMagazineDetails)):
            raise InvalidArgument(
                f"details must be an item payload, got {type(details).__name__}."
            )

        self._item_id = item_id
        self._title = title
        self._author = author
        self._details = details
        self._clock = clock
        self._lock = threading.Lock()
        self._loan: Optional[Loan] = None
        self._archived = False
        self._player: Optional[AudioPlayer] = None

    # ── Factories ─────────────────────────────────────────────

    @classmethod
    def book(
        cls, item_id: Hashable, title: str, author: str, page_count: int,
        clock: Optional[Clock] = None,
    ) -> LibraryItem:
        return cls(item_id, title, author, BookDetails(page_count), clock=clock)

    @classmethod
    def audiobook(
        cls, item_id: Hashable, title: str, author: str,
        playback_duration: timedelta, clock: Optional[Clock] = None,
    ) -> LibraryItem:
        return cls(
            item_id, title, author,
            AudiobookDetails(playback_duration), clock=clock,
        )

    @classmethod
    def emagazine(
        cls, item_id: Hashable, title: str, author: str, issue_number: str,
        clock: Optional[Clock] = None,
    ) -> LibraryItem:
        return cls(
            item_id, title, author,
            EMagazineDetails(issue_number), clock=clock,
        )

    # ── Identity ──────────────────────────────────────────────

    @property
    def item_id(self) -> Hashable:
        return self._item_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def author(self) -> str:
        return self._author

    @property
    def details(self) -> ItemDetails:
        return self._details

    @property
    def kind(self) -> ItemKind:
        return self._details.kind

    # ── Lifecycle state (snapshot reads) ──────────────────────

    @property
    def loan(self) -> Optional[Loan]:
        return self._loan

    @property
    def state(self) -> ItemState:
        return ItemState.AVAILABLE if self._loan is None else ItemState.BORROWED

    @property
    def is_available(self) -> bool:
        return self._loan is None

    @property
    def borrower_id(self) -> Optional[Hashable]:
        loan = self._loan
        return loan.borrower_id if loan else None

    @property
    def borrowed_at(self) -> Optional[datetime]:
        loan = self._loan
        return loan.borrowed_at if loan else None

    @property
    def due_at(self) -> Optional[datetime]:
        loan = self._loan
        return loan.due_at if loan else None

    def _now(self) -> datetime:
        clock = self._clock if self._clock is not None else get_default_clock()
        return clock.now_utc()

    # ── Transitions ───────────────────────────────────────────

    def borrow(self, user_id: Hashable, duration_text: str) -> Loan:
        """
        AVAILABLE → BORROWED.

        Raises:
            ItemNotAvailable: Item already on loan (state unchanged).
            InvalidDuration:  duration_text not parseable (state unchanged).
        """
        with self._lock:
            if self._loan is not None:
                logger.debug(
                    f"Borrow of item {self._item_id} by {user_id} rejected: "
                    f"held by {self._loan.borrower_id}"
                )
                raise ItemNotAvailable(self._item_id)
            try:
                period = parse_duration(duration_text)
            except InvalidDuration:
                logger.debug(
                    f"Borrow of item {self._item_id} by {user_id} rejected: "
                    f"invalid duration {duration_text!r}"
                )
                raise

            borrowed_at = self._now()
            try:
                due_at = borrowed_at + period
            except OverflowError:
                logger.debug(
                    f"Borrow of item {self._item_id} by {user_id} rejected: "
                    f"due date out of range for {duration_text!r}"
                )
                raise InvalidDuration(
                    duration_text, "due date out of range"
                ) from None
            loan = Loan(
                borrower_id=user_id,
                borrowed_at=borrowed_at,
                due_at=due_at,
            )
            self._loan = loan

        logger.info(
            f"Item {self._item_id} borrowed by {user_id}, "
            f"due {loan.due_at.isoformat()}"
        )
        return loan

    def return_loan(self) -> Optional[LoanReturn]:
        """
        BORROWED → AVAILABLE, reporting the closed loan.

        Returns None when the item was already AVAILABLE.
        """
        with self._lock:
            loan = self._loan
            if loan is None:
                return None
            now = self._now()
            overdue = overdue_days_between(loan.due_at, now)
            self._loan = None

        logger.info(
            f"Item {self._item_id} returned by {loan.borrower_id}, "
            f"overdue_days={overdue}"
        )
        return LoanReturn(loan=loan, returned_at=now, overdue_days=overdue)

    def return_item(self) -> int:
        """BORROWED → AVAILABLE. Returns overdue days; 0 if not on loan."""
        result = self.return_loan()
        return result.overdue_days if result else 0

    # ── Kind capabilities ─────────────────────────────────────

    def as_playable(self) -> Optional[Playable]:
        """Playable view for audiobooks, None for every other kind."""
        if not isinstance(self._details, AudiobookDetails):
            return None
        with self._lock:
            if self._player is None:
                self._player = AudioPlayer(self._title, self._details)
            return self._player

    @property
    def is_archived(self) -> bool:
        return self._archived

    def archive_issue(self) -> None:
        """Mark an e-magazine issue as archived. Repeat calls are no-ops."""
        if not isinstance(self._details, EMagazineDetails):
            raise UnsupportedOperation(
                self._item_id, "archive_issue", self.kind.value
            )
        with self._lock:
            if self._archived:
                return
            self._archived = True
        logger.info(f"Archived e-magazine issue: {self._details.issue_number}")

    def to_dict(self) -> dict:
        loan = self._loan
        return {
            "item_id": self._item_id,
            "title": self._title,
            "author": self._author,
            "kind": self.kind.value,
            "available": loan is None,
            "loan": loan.to_dict() if loan else None,
        }

    def __repr__(self) -> str:
        return (
            f"LibraryItem(item_id={self._item_id!r}, kind={self.kind.value}, "
            f"title={self._title!r}, state={self.state.value})"
        )

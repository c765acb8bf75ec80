"""
LibraNet Time — Loan Clock
============================
Every loan timestamp (borrowed_at, due_at, returned_at) is read
from a Clock. Lending code never calls datetime.now() itself.

An item resolves its clock per operation: the clock it was built
with, else the process-wide default. Tests pin time with a
FixedClock and move it forward to make loans overdue.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Iterator, Protocol, Union


class Clock(Protocol):
    """Source of timezone-aware UTC timestamps for loans."""

    def now_utc(self) -> datetime:
        ...  # pragma: no cover


class SystemClock:
    """Wall-clock UTC time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Clock that only moves when told to.

    Safe to advance from one thread while items read it from others.

    Usage:
        clock = FixedClock(datetime(2026, 2, 19, tzinfo=timezone.utc))
        item = LibraryItem.book(1, "T", "A", 100, clock=clock)
        item.borrow(1001, "14 days")
        clock.advance(timedelta(days=15, minutes=1))
        item.return_item()    # 2
    """

    def __init__(self, start: datetime) -> None:
        self._current = self._require_aware(start)
        self._lock = threading.Lock()

    @staticmethod
    def _require_aware(dt: datetime) -> datetime:
        if dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        return dt

    def now_utc(self) -> datetime:
        return self._current

    def advance(self, delta: Union[timedelta, float]) -> datetime:
        """Move forward by a timedelta or seconds; returns the new time."""
        if not isinstance(delta, timedelta):
            delta = timedelta(seconds=delta)
        with self._lock:
            self._current = self._current + delta
            return self._current

    def set(self, dt: datetime) -> None:
        """Jump to an absolute time, forwards or backwards."""
        aware = self._require_aware(dt)
        with self._lock:
            self._current = aware


_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    return _default_clock


def now_utc() -> datetime:
    return _default_clock.now_utc()


@contextmanager
def use_clock(clock: Clock) -> Iterator[Clock]:
    """Install clock as the default for the block, restoring the previous one."""
    previous = get_default_clock()
    set_default_clock(clock)
    try:
        yield clock
    finally:
        set_default_clock(previous)

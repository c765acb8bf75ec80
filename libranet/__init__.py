"""
LibraNet — Lending Core
=========================
Borrowable items, free-form loan durations and per-user fines.

Packages:
    durations    — free-form duration text → timedelta
    items        — per-item borrow/return lifecycle and kind payloads
    fines        — per-user fine ledger with atomic accrual/payment
    catalog      — item lookup by id, title and kind
    circulation  — checkout/checkin wiring items to the fine ledger
    config       — lending settings (fine rate, quantum, default loan)
    time         — injectable clock
"""

from libranet.errors import (
    InvalidArgument,
    InvalidDuration,
    ItemNotAvailable,
    ItemNotFound,
    LibraryError,
    UnsupportedOperation,
)

__all__ = [
    "LibraryError",
    "InvalidDuration",
    "ItemNotAvailable",
    "InvalidArgument",
    "UnsupportedOperation",
    "ItemNotFound",
]

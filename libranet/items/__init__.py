"""
LibraNet Items — Public API
=============================
Borrowable items: one lifecycle record plus a kind payload.
"""

from libranet.items.kinds import (
    AudioPlayer,
    AudiobookDetails,
    BookDetails,
    EMagazineDetails,
    ItemDetails,
    ItemKind,
    Playable,
)
from libranet.items.lifecycle import (
    ItemState,
    LibraryItem,
    Loan,
    LoanReturn,
    overdue_days_between,
)

__all__ = [
    "ItemKind",
    "ItemDetails",
    "BookDetails",
    "AudiobookDetails",
    "EMagazineDetails",
    "Playable",
    "AudioPlayer",
    "ItemState",
    "LibraryItem",
    "Loan",
    "LoanReturn",
    "overdue_days_between",
]

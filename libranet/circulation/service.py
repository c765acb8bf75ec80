"""
LibraNet Circulation — Checkout / Checkin Service
===================================================
Wires the catalog, item lifecycle and fine ledger together.

The overdue-day count is computed inside the item's own guarded
return and handed to the ledger as a plain value afterwards. No
item lock is held while the ledger is updated, and there is no
cross-entity transaction.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Hashable, Optional

from libranet.catalog.catalog import Catalog
from libranet.config.settings import LendingSettings
from libranet.errors import ItemNotFound
from libranet.fines.ledger import Amount, FineLedger
from libranet.items.lifecycle import LibraryItem, Loan

logger = logging.getLogger("libranet.circulation")


class CirculationService:
    """
    Front desk over one catalog and one fine ledger.

    Usage:
        desk = CirculationService(catalog, FineLedger(Decimal("10")))
        desk.checkout(1, user_id=1001, duration_text="14 days")
        overdue = desk.checkin(1)   # fine accrued to 1001 if late
    """

    def __init__(
        self,
        catalog: Catalog,
        ledger: FineLedger,
        settings: Optional[LendingSettings] = None,
    ):
        self._catalog = catalog
        self._ledger = ledger
        self._settings = settings or LendingSettings()

    @classmethod
    def from_settings(
        cls, settings: LendingSettings, catalog: Optional[Catalog] = None
    ) -> CirculationService:
        return cls(
            catalog or Catalog(),
            FineLedger.from_settings(settings),
            settings=settings,
        )

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def ledger(self) -> FineLedger:
        return self._ledger

    def _require(self, item_id: Hashable) -> LibraryItem:
        item = self._catalog.find_by_id(item_id)
        if item is None:
            raise ItemNotFound(item_id)
        return item

    def checkout(
        self,
        item_id: Hashable,
        user_id: Hashable,
        duration_text: Optional[str] = None,
    ) -> Loan:
        """
        Borrow an item for a user.

        Raises:
            ItemNotFound:     No such item in the catalog.
            ItemNotAvailable: Item already on loan.
            InvalidDuration:  duration_text not parseable.
        """
        item = self._require(item_id)
        text = duration_text if duration_text is not None else self._settings.default_loan
        return item.borrow(user_id, text)

    def checkin(self, item_id: Hashable) -> int:
        """Return an item and charge its borrower. Returns overdue days."""
        item = self._require(item_id)
        result = item.return_loan()
        if result is None:
            return 0
        if result.overdue_days > 0:
            self._ledger.add_fine(result.loan.borrower_id, result.overdue_days)
            logger.info(
                f"Item {item_id} returned {result.overdue_days} day(s) late "
                f"by {result.loan.borrower_id}"
            )
        return result.overdue_days

    def outstanding_fine(self, user_id: Hashable) -> Decimal:
        return self._ledger.get_fine(user_id)

    def pay_fine(self, user_id: Hashable, amount: Amount) -> Decimal:
        """Apply a payment; returns the remaining balance."""
        self._ledger.pay_fine(user_id, amount)
        return self._ledger.get_fine(user_id)

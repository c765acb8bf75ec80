"""
LibraNet Fines — Per-User Fine Ledger
=======================================
Accrues overdue fines and records payments per user.

RULES (NON-NEGOTIABLE):
- Amounts are Decimal, never float
- fine = overdue_days × rate, quantized to the ledger quantum (ROUND_HALF_UP)
- Payments are subtracted exactly; only accruals are quantized
- A stored balance is always > 0; paid-off balances are removed
- Each user's update is one atomic read-modify-write
- No global lock: distinct users never contend
- The ledger knows nothing about items; callers hand it day counts

All operations are total over well-typed input. Non-positive day
counts, non-positive payments and non-finite payments change nothing.
"""

from __future__ import annotations

import logging
import threading
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Dict, Hashable, Iterator

from libranet.errors import InvalidArgument
from libranet.money import Amount, to_decimal, to_finite_decimal

if TYPE_CHECKING:
    from libranet.config.settings import LendingSettings

logger = logging.getLogger("libranet.fines")

ZERO = Decimal("0")
DEFAULT_QUANTUM = Decimal("0.01")


class FineLedger:
    """
    Concurrent user → balance store with per-user locking.

    Per-user locks are created on first touch with dict.setdefault,
    which is atomic, so creating one never takes a shared lock.
    Locks are never evicted: the lock table grows by one entry per
    distinct user ever charged or paid, even after their balance is
    cleared. Removing them would race with a concurrent first touch.

    Usage:
        ledger = FineLedger(Decimal("10"))
        ledger.add_fine(1001, 3)          # balance 30.00
        ledger.pay_fine(1001, Decimal("30"))
        ledger.get_fine(1001)             # Decimal("0")
    """

    def __init__(
        self,
        fine_per_day: Amount,
        quantum: Amount = DEFAULT_QUANTUM,
    ):
        rate = to_finite_decimal("fine_per_day", fine_per_day)
        step = to_finite_decimal("quantum", quantum)
        if rate < 0:
            raise InvalidArgument(f"fine_per_day must be >= 0, got {rate}.")
        if step <= 0:
            raise InvalidArgument(f"quantum must be > 0, got {step}.")
        self._rate = rate
        self._quantum = step
        self._balances: Dict[Hashable, Decimal] = {}
        self._locks: Dict[Hashable, threading.Lock] = {}

    @classmethod
    def from_settings(cls, settings: LendingSettings) -> FineLedger:
        return cls(settings.fine_per_day, quantum=settings.money_quantum)

    @property
    def rate(self) -> Decimal:
        return self._rate

    @property
    def quantum(self) -> Decimal:
        return self._quantum

    def _quantize(self, amount: Decimal) -> Decimal:
        return amount.quantize(self._quantum, rounding=ROUND_HALF_UP)

    def _lock_for(self, user_id: Hashable) -> threading.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = self._locks.setdefault(user_id, threading.Lock())
        return lock

    def fine_for(self, overdue_days: int) -> Decimal:
        """Fine owed for a number of overdue days (0 when days <= 0)."""
        if overdue_days <= 0:
            return self._quantize(ZERO)
        return self._quantize(self._rate * overdue_days)

    # ══════════════════════════════════════════════════════════
    # MUTATIONS
    # ══════════════════════════════════════════════════════════

    def add_fine(self, user_id: Hashable, overdue_days: int) -> None:
        """Accrue overdue_days × rate to the user. No-op for days <= 0."""
        if overdue_days <= 0:
            return
        fine = self.fine_for(overdue_days)
        if fine <= 0:
            return

        with self._lock_for(user_id):
            balance = self._balances.get(user_id, ZERO) + fine
            self._balances[user_id] = balance

        logger.info(
            f"Fine accrued for user {user_id}: {fine} "
            f"({overdue_days} day(s)), balance {balance}"
        )

    def pay_fine(self, user_id: Hashable, amount: Amount) -> None:
        """
        Subtract a payment. A result <= 0 removes the entry.

        The payment is subtracted exactly, without rounding. Paying for
        a user with no balance, or a non-finite amount, is a no-op.
        """
        payment = to_decimal("amount", amount)
        if not payment.is_finite() or payment <= 0:
            return

        with self._lock_for(user_id):
            balance = self._balances.get(user_id)
            if balance is None:
                return
            remaining = balance - payment
            if remaining <= 0:
                del self._balances[user_id]
            else:
                self._balances[user_id] = remaining

        if remaining <= 0:
            logger.info(f"Fine cleared for user {user_id}")
        else:
            logger.info(
                f"Fine payment {payment} from user {user_id}, "
                f"balance {remaining}"
            )

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def get_fine(self, user_id: Hashable) -> Decimal:
        """Current balance, or 0 when the user owes nothing."""
        return self._balances.get(user_id, ZERO)

    def has_fine(self, user_id: Hashable) -> bool:
        return user_id in self._balances

    def __contains__(self, user_id: Hashable) -> bool:
        return self.has_fine(user_id)

    def __len__(self) -> int:
        return len(self._balances)

    def users_with_fines(self) -> Iterator[Hashable]:
        return iter(list(self._balances))

    def total_outstanding(self) -> Decimal:
        """Sum of all balances. A snapshot, not atomic across users."""
        return sum(list(self._balances.values()), ZERO)

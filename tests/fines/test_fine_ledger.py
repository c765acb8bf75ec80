"""
Tests for libranet.fines — per-user fine ledger.

Tests verify:
- No-op accrual for non-positive day counts
- Exact Decimal arithmetic with quantum rounding
- Paid-off balances are removed, never stored as zero or negative
- Atomic per-user updates under concurrent accrual
"""

import threading
from decimal import Decimal

import pytest

from libranet.config import LendingSettings
from libranet.errors import InvalidArgument
from libranet.fines import FineLedger


RATE = Decimal("10")


class TestAddFine:
    def test_zero_days_is_noop(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 0)
        assert ledger.get_fine(1001) == Decimal("0")
        assert 1001 not in ledger

    def test_negative_days_is_noop(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, -4)
        assert not ledger.has_fine(1001)

    def test_three_days(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 3)
        assert ledger.get_fine(1001) == 3 * RATE

    def test_accrual_accumulates(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 3)
        ledger.add_fine(1001, 2)
        assert ledger.get_fine(1001) == Decimal("50")

    def test_fractional_rate_is_exact(self):
        ledger = FineLedger(Decimal("0.10"))
        for _ in range(3):
            ledger.add_fine(7, 1)
        assert ledger.get_fine(7) == Decimal("0.30")

    def test_rounding_to_quantum_half_up(self):
        ledger = FineLedger(Decimal("0.125"))
        ledger.add_fine(7, 1)
        assert ledger.get_fine(7) == Decimal("0.13")

    def test_zero_rate_creates_no_entry(self):
        ledger = FineLedger(Decimal("0"))
        ledger.add_fine(7, 5)
        assert 7 not in ledger

    def test_users_are_independent(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1, 1)
        ledger.add_fine(2, 2)
        assert ledger.get_fine(1) == Decimal("10")
        assert ledger.get_fine(2) == Decimal("20")


class TestPayFine:
    def test_pay_full_removes_entry(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 3)
        ledger.pay_fine(1001, 3 * RATE)
        assert 1001 not in ledger
        assert ledger.get_fine(1001) == Decimal("0")

    def test_overpay_removes_entry(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 1)
        ledger.pay_fine(1001, Decimal("100"))
        assert 1001 not in ledger
        assert len(ledger) == 0

    def test_partial_payment(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 3)
        ledger.pay_fine(1001, Decimal("12.50"))
        assert ledger.get_fine(1001) == Decimal("17.50")
        assert ledger.get_fine(1001) > 0

    def test_accepts_int_and_str_amounts(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 3)
        ledger.pay_fine(1001, 10)
        ledger.pay_fine(1001, "5.25")
        assert ledger.get_fine(1001) == Decimal("14.75")

    def test_sub_quantum_payment_is_not_lost(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 3)
        ledger.pay_fine(1001, Decimal("0.004"))
        assert ledger.get_fine(1001) == Decimal("29.996")

    def test_exact_sub_quantum_payoff_removes_entry(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 1)
        ledger.pay_fine(1001, Decimal("9.996"))
        ledger.pay_fine(1001, Decimal("0.004"))
        assert 1001 not in ledger

    @pytest.mark.parametrize("amount", [
        Decimal("Infinity"), Decimal("-Infinity"), Decimal("NaN"), "Infinity",
    ])
    def test_non_finite_payment_is_noop(self, amount):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 3)
        ledger.pay_fine(1001, amount)
        assert ledger.get_fine(1001) == Decimal("30")

    def test_pay_absent_user_is_noop(self):
        ledger = FineLedger(RATE)
        ledger.pay_fine(42, Decimal("5"))
        assert 42 not in ledger
        assert len(ledger) == 0

    def test_non_positive_payment_is_noop(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1001, 1)
        ledger.pay_fine(1001, Decimal("0"))
        ledger.pay_fine(1001, Decimal("-5"))
        assert ledger.get_fine(1001) == Decimal("10")


class TestQueries:
    def test_get_fine_does_not_create_entry(self):
        ledger = FineLedger(RATE)
        ledger.get_fine(1001)
        assert len(ledger) == 0

    def test_total_outstanding(self):
        ledger = FineLedger(RATE)
        ledger.add_fine(1, 1)
        ledger.add_fine(2, 2)
        assert ledger.total_outstanding() == Decimal("30")
        assert sorted(ledger.users_with_fines()) == [1, 2]

    def test_fine_for(self):
        ledger = FineLedger(Decimal("0.50"))
        assert ledger.fine_for(4) == Decimal("2.00")
        assert ledger.fine_for(0) == Decimal("0")


class TestConstruction:
    def test_rejects_negative_rate(self):
        with pytest.raises(InvalidArgument):
            FineLedger(Decimal("-1"))

    def test_rejects_non_positive_quantum(self):
        with pytest.raises(InvalidArgument):
            FineLedger(RATE, quantum=Decimal("0"))

    @pytest.mark.parametrize("rate", ["abc", None, Decimal("Infinity"), Decimal("NaN"), True])
    def test_rejects_non_decimal_rate(self, rate):
        with pytest.raises(InvalidArgument, match="fine_per_day"):
            FineLedger(rate)

    def test_rejects_non_decimal_quantum(self):
        with pytest.raises(InvalidArgument, match="quantum"):
            FineLedger(RATE, quantum="cent")

    def test_from_settings(self):
        settings = LendingSettings(fine_per_day="0.25", money_quantum="0.05")
        ledger = FineLedger.from_settings(settings)
        assert ledger.rate == Decimal("0.25")
        assert ledger.quantum == Decimal("0.05")


class TestConcurrency:
    def test_concurrent_accrual_same_user_is_atomic(self):
        ledger = FineLedger(Decimal("1"))
        workers = 16
        per_worker = 200
        barrier = threading.Barrier(workers)

        def accrue():
            barrier.wait()
            for _ in range(per_worker):
                ledger.add_fine(1001, 1)

        threads = [threading.Thread(target=accrue) for _ in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert ledger.get_fine(1001) == Decimal(workers * per_worker)

    def test_concurrent_accrual_and_payment(self):
        ledger = FineLedger(Decimal("1"))
        ledger.add_fine(1001, 1000)
        barrier = threading.Barrier(2)

        def accrue():
            barrier.wait()
            for _ in range(500):
                ledger.add_fine(1001, 1)

        def pay():
            barrier.wait()
            for _ in range(500):
                ledger.pay_fine(1001, Decimal("1"))

        threads = [threading.Thread(target=accrue), threading.Thread(target=pay)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert ledger.get_fine(1001) == Decimal("1000")

    def test_concurrent_accrual_many_users(self):
        ledger = FineLedger(Decimal("2"))
        users = list(range(20))
        barrier = threading.Barrier(len(users))

        def accrue(user_id):
            barrier.wait()
            for _ in range(50):
                ledger.add_fine(user_id, 1)

        threads = [threading.Thread(target=accrue, args=(u,)) for u in users]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(ledger.get_fine(u) == Decimal("100") for u in users)
        assert ledger.total_outstanding() == Decimal("2000")

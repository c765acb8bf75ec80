"""
LibraNet Config — Lending Settings
====================================
Doctrine: no hardcoded fine rates in lending logic.
The per-day fine, monetary quantum and default loan period are
configuration data, supplied by the application or the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from libranet.durations.parser import parse_duration
from libranet.errors import InvalidArgument, InvalidDuration
from libranet.money import to_finite_decimal


ENV_FINE_PER_DAY = "LIBRANET_FINE_PER_DAY"
ENV_MONEY_QUANTUM = "LIBRANET_MONEY_QUANTUM"
ENV_DEFAULT_LOAN = "LIBRANET_DEFAULT_LOAN"


# ══════════════════════════════════════════════════════════════
# LENDING SETTINGS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LendingSettings:
    """
    Admin-configurable lending rules.

    fine_per_day:   Fine charged per overdue day (>= 0)
    money_quantum:  Smallest monetary step, e.g. 0.01 (> 0)
    default_loan:   Duration text used when a checkout names none
    """

    fine_per_day: Decimal = Decimal("10")
    money_quantum: Decimal = Decimal("0.01")
    default_loan: str = "14 days"

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "fine_per_day", to_finite_decimal("fine_per_day", self.fine_per_day)
        )
        object.__setattr__(
            self, "money_quantum", to_finite_decimal("money_quantum", self.money_quantum)
        )
        if self.fine_per_day < 0:
            raise InvalidArgument(
                f"fine_per_day must be >= 0, got {self.fine_per_day}."
            )
        if self.money_quantum <= 0:
            raise InvalidArgument(
                f"money_quantum must be > 0, got {self.money_quantum}."
            )
        if not isinstance(self.default_loan, str):
            raise InvalidArgument(
                f"default_loan must be duration text, got {self.default_loan!r}."
            )
        try:
            parse_duration(self.default_loan)
        except InvalidDuration as exc:
            raise InvalidArgument(f"default_loan is invalid: {exc}") from exc

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LendingSettings:
        """Build settings from a plain mapping; missing keys use defaults."""
        kwargs = {}
        for key in ("fine_per_day", "money_quantum", "default_loan"):
            if data.get(key) is not None:
                kwargs[key] = data[key]
        return cls(**kwargs)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> LendingSettings:
        """Build settings from LIBRANET_* environment variables."""
        env = os.environ if environ is None else environ
        return cls.from_mapping({
            "fine_per_day": env.get(ENV_FINE_PER_DAY),
            "money_quantum": env.get(ENV_MONEY_QUANTUM),
            "default_loan": env.get(ENV_DEFAULT_LOAN),
        })

    def to_dict(self) -> dict:
        return {
            "fine_per_day": str(self.fine_per_day),
            "money_quantum": str(self.money_quantum),
            "default_loan": self.default_loan,
        }

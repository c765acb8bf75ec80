"""
LibraNet Config — Public API
==============================
"""

from libranet.config.settings import (
    ENV_DEFAULT_LOAN,
    ENV_FINE_PER_DAY,
    ENV_MONEY_QUANTUM,
    LendingSettings,
)

__all__ = [
    "LendingSettings",
    "ENV_FINE_PER_DAY",
    "ENV_MONEY_QUANTUM",
    "ENV_DEFAULT_LOAN",
]

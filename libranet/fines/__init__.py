"""
LibraNet Fines — Public API
=============================
"""

from libranet.fines.ledger import FineLedger

__all__ = [
    "FineLedger",
]

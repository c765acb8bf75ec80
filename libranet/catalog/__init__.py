"""
LibraNet Catalog — Public API
===============================
"""

from libranet.catalog.catalog import Catalog

__all__ = [
    "Catalog",
]

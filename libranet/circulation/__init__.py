"""
LibraNet Circulation — Public API
===================================
"""

from libranet.circulation.service import CirculationService

__all__ = [
    "CirculationService",
]

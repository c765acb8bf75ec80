"""
LibraNet Catalog — Item Lookup
================================
Keyed collection of items with lookup by id, title and kind.

The catalog adds no invariants of its own. Items keep their own
locks; the catalog lock only guards the dict and is never held
while an item transitions.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Hashable, Iterator, List, Optional

from libranet.errors import InvalidArgument
from libranet.items.kinds import ItemKind
from libranet.items.lifecycle import LibraryItem

logger = logging.getLogger("libranet.catalog")


class Catalog:
    """Thread-safe in-memory item index."""

    def __init__(self) -> None:
        self._items: Dict[Hashable, LibraryItem] = {}
        self._lock = threading.Lock()

    def add_item(self, item: LibraryItem) -> None:
        """Register an item. An item with the same id is replaced."""
        if item is None:
            raise InvalidArgument("item is required.")
        with self._lock:
            replaced = item.item_id in self._items
            self._items[item.item_id] = item
        if replaced:
            logger.info(f"Catalog item {item.item_id} replaced")
        else:
            logger.debug(f"Catalog item {item.item_id} added ({item.kind.value})")

    def find_by_id(self, item_id: Hashable) -> Optional[LibraryItem]:
        return self._items.get(item_id)

    def _snapshot(self) -> List[LibraryItem]:
        with self._lock:
            return list(self._items.values())

    def search_by_title(self, query: Optional[str]) -> List[LibraryItem]:
        """Case-insensitive substring match; empty or None matches all."""
        q = (query or "").lower()
        return [it for it in self._snapshot() if q in it.title.lower()]

    def search_by_kind(self, kind: ItemKind) -> List[LibraryItem]:
        return [it for it in self._snapshot() if it.kind == kind]

    def available_items(self) -> List[LibraryItem]:
        return [it for it in self._snapshot() if it.is_available]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LibraryItem]:
        return iter(self._snapshot())

    def __contains__(self, item_id: Hashable) -> bool:
        return item_id in self._items

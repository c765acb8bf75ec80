"""
Tests for libranet.catalog — item lookup.
"""

from datetime import timedelta

import pytest

from libranet.catalog import Catalog
from libranet.errors import InvalidArgument
from libranet.items import ItemKind, LibraryItem


def seeded_catalog():
    catalog = Catalog()
    catalog.add_item(LibraryItem.book(1, "Effective Java", "Joshua Bloch", 416))
    catalog.add_item(LibraryItem.audiobook(
        2, "Clean Code (Audio)", "Robert C. Martin",
        timedelta(hours=12, minutes=30),
    ))
    catalog.add_item(LibraryItem.emagazine(3, "Monthly Tech", "Various", "2025-09"))
    return catalog


class TestCatalog:
    def test_find_by_id(self):
        catalog = seeded_catalog()
        assert catalog.find_by_id(1).title == "Effective Java"
        assert catalog.find_by_id(99) is None
        assert 2 in catalog
        assert len(catalog) == 3

    def test_add_none_rejected(self):
        with pytest.raises(InvalidArgument):
            Catalog().add_item(None)

    def test_same_id_replaces(self):
        catalog = seeded_catalog()
        catalog.add_item(LibraryItem.book(1, "Java Concurrency", "Brian Goetz", 384))
        assert len(catalog) == 3
        assert catalog.find_by_id(1).title == "Java Concurrency"

    def test_search_by_title_case_insensitive(self):
        catalog = seeded_catalog()
        found = catalog.search_by_title("CODE")
        assert [it.item_id for it in found] == [2]

    def test_search_by_title_empty_matches_all(self):
        catalog = seeded_catalog()
        assert len(catalog.search_by_title("")) == 3
        assert len(catalog.search_by_title(None)) == 3

    def test_search_by_title_no_match(self):
        assert seeded_catalog().search_by_title("python") == []

    def test_search_by_kind(self):
        catalog = seeded_catalog()
        audio = catalog.search_by_kind(ItemKind.AUDIOBOOK)
        assert [it.item_id for it in audio] == [2]
        assert audio[0].as_playable() is not None

    def test_available_items(self):
        catalog = seeded_catalog()
        catalog.find_by_id(1).borrow(1001, "14 days")
        assert sorted(it.item_id for it in catalog.available_items()) == [2, 3]

    def test_iter_is_snapshot(self):
        catalog = seeded_catalog()
        ids = []
        for item in catalog:
            ids.append(item.item_id)
            catalog.add_item(LibraryItem.book(item.item_id + 10, "Extra", "X", 1))
        assert sorted(ids) == [1, 2, 3]
        assert len(catalog) == 6

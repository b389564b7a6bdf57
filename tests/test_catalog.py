"""
Tests for the item catalog.
"""

import pytest

from soulbound_api.catalog import CatalogEntry, ItemCatalog
from soulbound_api.config import Settings
from soulbound_api.errors import UnknownItemError


def _catalog() -> ItemCatalog:
    return ItemCatalog(
        [
            CatalogEntry(name="King Bonk", uri="https://example.com/king.json"),
            CatalogEntry(name="The Bonk", uri="https://example.com/the.json"),
            CatalogEntry(name="Monke", uri="https://example.com/monke.json"),
        ]
    )


class TestResolve:
    """Prefix matching."""

    @pytest.mark.parametrize(
        "item_name,expected_name,expected_uri",
        [
            ("King Bonk", "King Bonk", "https://example.com/king.json"),
            ("King Bonk #42", "King Bonk", "https://example.com/king.json"),
            ("The Bonk - limited", "The Bonk", "https://example.com/the.json"),
            ("Monke 7", "Monke", "https://example.com/monke.json"),
        ],
    )
    def test_each_prefix(self, item_name, expected_name, expected_uri):
        item = _catalog().resolve(item_name)
        assert item.name == expected_name
        assert item.uri == expected_uri

    def test_unknown_item(self):
        with pytest.raises(UnknownItemError, match="Unknown itemName provided."):
            _catalog().resolve("Banana")

    def test_prefix_is_case_sensitive(self):
        with pytest.raises(UnknownItemError):
            _catalog().resolve("king bonk")

    def test_prefix_must_be_at_start(self):
        with pytest.raises(UnknownItemError):
            _catalog().resolve("My King Bonk")

    def test_first_match_wins(self):
        """Overlapping prefixes resolve to whichever is listed first."""
        catalog = ItemCatalog(
            [
                CatalogEntry(prefix="Bonk", name="Bonk", uri="u1"),
                CatalogEntry(prefix="Bonk King", name="Bonk King", uri="u2"),
            ]
        )
        assert catalog.resolve("Bonk King #1").name == "Bonk"

        reordered = ItemCatalog(list(reversed(catalog.entries)))
        assert reordered.resolve("Bonk King #1").name == "Bonk King"
        assert reordered.resolve("Bonk #1").name == "Bonk"

    def test_empty_prefix_entries_skipped(self):
        catalog = ItemCatalog([CatalogEntry(prefix="", name="Anything", uri="u")])
        assert len(catalog) == 0
        with pytest.raises(UnknownItemError):
            catalog.resolve("Anything")

    def test_empty_uri_entries_skipped(self):
        catalog = ItemCatalog([CatalogEntry(name="Monke", uri="")])
        assert len(catalog) == 0
        with pytest.raises(UnknownItemError):
            catalog.resolve("Monke #1")


class TestCatalogEntry:

    def test_prefix_defaults_to_name(self):
        assert CatalogEntry(name="Monke", uri="u").prefix == "Monke"

    def test_explicit_prefix(self):
        entry = CatalogEntry(prefix="MNK", name="Monke", uri="u")
        assert entry.prefix == "MNK"
        assert entry.name == "Monke"


class TestCatalogFromSettings:

    def test_legacy_pairs_in_order(self):
        settings = Settings(
            _env_file=None,
            name_king_bonk="King Bonk",
            uri_king_bonk="k",
            name_the_bonk="The Bonk",
            uri_the_bonk="t",
            name_monke="Monke",
            uri_monke="m",
            prefix_monke="MONKE-",
        )
        entries = settings.catalog_entries()
        assert [e.name for e in entries] == ["King Bonk", "The Bonk", "Monke"]
        assert [e.prefix for e in entries] == ["King Bonk", "The Bonk", "MONKE-"]

    def test_unset_pairs_skipped(self):
        settings = Settings(_env_file=None, name_monke="Monke", uri_monke="m")
        assert [e.name for e in settings.catalog_entries()] == ["Monke"]

    def test_name_without_uri_skipped(self):
        settings = Settings(_env_file=None, name_king_bonk="King Bonk", name_monke="Monke", uri_monke="m")
        assert [e.name for e in settings.catalog_entries()] == ["Monke"]

    def test_item_catalog_overrides_legacy_pairs(self):
        settings = Settings(
            _env_file=None,
            name_king_bonk="King Bonk",
            uri_king_bonk="k",
            item_catalog=[{"prefix": "G", "name": "Gold", "uri": "g"}],
        )
        entries = settings.catalog_entries()
        assert len(entries) == 1
        assert entries[0].name == "Gold"

    def test_item_catalog_from_env(self, monkeypatch):
        monkeypatch.setenv(
            "ITEM_CATALOG",
            '[{"name": "Silver", "uri": "s"}, {"prefix": "B", "name": "Bronze", "uri": "b"}]',
        )
        catalog = ItemCatalog(Settings(_env_file=None).catalog_entries())
        assert catalog.resolve("Silver 1").uri == "s"
        assert catalog.resolve("B-2").name == "Bronze"

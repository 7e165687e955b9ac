"""
Tests for the merchant mapping seed loader and in-memory stores.
"""

import os
import tempfile
import unittest

from sms_finance_engine.config.mapping_loader import (
    MappingFileError,
    load_merchant_mappings_csv,
    seed_mapping_store,
)
from sms_finance_engine.models import MerchantMapping, RecurringFrequency, RecurringRule
from sms_finance_engine.stores import (
    DuplicateMappingError,
    InMemoryMerchantMappingStore,
    InMemoryRecurringRuleStore,
)


class TestMappingLoader(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures."""
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write_csv(self, content: str) -> str:
        path = os.path.join(self.tmpdir.name, "mappings.csv")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_load_mappings(self):
        path = self.write_csv(
            "raw_merchant_name,normalized_name,category_id,subcategory_id\n"
            "swiggy,Swiggy,1,\n"
            "Uber India,,2,21\n"
            ",Blank,3,\n"
        )

        mappings = load_merchant_mappings_csv(path)

        self.assertEqual(len(mappings), 2)
        self.assertEqual(mappings[0].raw_merchant_name, "SWIGGY")
        self.assertEqual(mappings[0].normalized_name, "Swiggy")
        self.assertIsNone(mappings[0].subcategory_id)
        self.assertEqual(mappings[1].normalized_name, "Uber India")
        self.assertEqual(mappings[1].subcategory_id, 21)
        self.assertAlmostEqual(mappings[1].confidence, 1.0)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_merchant_mappings_csv(os.path.join(self.tmpdir.name, "nope.csv"))

    def test_invalid_category(self):
        path = self.write_csv("raw_merchant_name,normalized_name,category_id\nSWIGGY,Swiggy,food\n")

        with self.assertRaises(MappingFileError):
            load_merchant_mappings_csv(path)

    def test_seed_skips_existing(self):
        path = self.write_csv("raw_merchant_name,normalized_name,category_id\nSWIGGY,Swiggy,1\nZOMATO,Zomato,1\n")
        store = InMemoryMerchantMappingStore([
            MerchantMapping(raw_merchant_name="SWIGGY", normalized_name="Swiggy", category_id=9),
        ])

        self.assertEqual(seed_mapping_store(store, path), 1)
        self.assertEqual(len(store), 2)
        self.assertEqual(store.find_by_raw_name("SWIGGY").category_id, 9)


class TestStores(unittest.TestCase):

    def test_mapping_store_returns_copies(self):
        store = InMemoryMerchantMappingStore([
            MerchantMapping(raw_merchant_name="SWIGGY", normalized_name="Swiggy", category_id=1),
        ])

        fetched = store.find_by_raw_name("SWIGGY")
        fetched.category_id = 5

        self.assertEqual(store.find_by_raw_name("SWIGGY").category_id, 1)

    def test_mapping_store_duplicates_and_missing(self):
        store = InMemoryMerchantMappingStore()
        mapping = MerchantMapping(raw_merchant_name="SWIGGY", normalized_name="Swiggy", category_id=1)
        store.insert(mapping)

        with self.assertRaises(DuplicateMappingError):
            store.insert(mapping)
        with self.assertRaises(KeyError):
            store.update(MerchantMapping(raw_merchant_name="ZOMATO", normalized_name="Zomato", category_id=1))

    def test_update_with_modifies_stored_mapping(self):
        store = InMemoryMerchantMappingStore([
            MerchantMapping(raw_merchant_name="SWIGGY", normalized_name="Swiggy", category_id=1, match_count=3),
        ])

        def bump(mapping):
            mapping.match_count += 1

        updated = store.update_with("SWIGGY", bump)

        self.assertEqual(updated.match_count, 4)
        self.assertEqual(store.find_by_raw_name("SWIGGY").match_count, 4)
        self.assertIsNone(store.update_with("ZOMATO", bump))
        self.assertEqual(len(store), 1)

    def test_rule_store(self):
        store = InMemoryRecurringRuleStore()
        first = store.insert(RecurringRule("NETFLIX", 5, 649.0, RecurringFrequency.MONTHLY))
        second = store.insert(RecurringRule("GYM", 4, 1500.0, RecurringFrequency.MONTHLY, is_active=False))

        self.assertEqual((first.id, second.id), (1, 2))
        self.assertEqual(store.find_by_merchant_pattern("NETFLIX").id, 1)
        self.assertIsNone(store.find_by_merchant_pattern("SPOTIFY"))
        self.assertEqual([r.merchant_pattern for r in store.find_active()], ["NETFLIX"])
        self.assertEqual(len(store.find_all()), 2)


if __name__ == "__main__":
    unittest.main()

"""
Tests for the five-tier smart categorizer.
"""

import threading
import unittest
from datetime import datetime

from sms_finance_engine.categorisation.analytics import AnalyticsSink, CategorizationCounters
from sms_finance_engine.categorisation.engine import SmartCategorizer
from sms_finance_engine.models import CategorizationResult, MerchantMapping
from sms_finance_engine.stores import InMemoryMerchantMappingStore


NIGHT = datetime(2024, 1, 15, 3, 0)
LUNCH = datetime(2024, 1, 15, 13, 0)


class BrokenStore:
    """Mapping store whose every call fails."""

    def find_by_raw_name(self, raw_name):
        raise RuntimeError("database unavailable")

    def find_all(self):
        raise RuntimeError("database unavailable")

    def insert(self, mapping):
        raise RuntimeError("database unavailable")

    def update(self, mapping):
        raise RuntimeError("database unavailable")

    def update_with(self, raw_name, apply):
        raise RuntimeError("database unavailable")


class BrokenAnalytics(AnalyticsSink):

    def record_categorization(self, transaction_id, merchant_name, result):
        raise RuntimeError("analytics down")

    def record_correction(self, transaction_id, merchant_name, original_category_id, corrected_category_id):
        raise RuntimeError("analytics down")


class TestCategorizationTiers(unittest.TestCase):
    """Test each tier of the fallback chain."""

    def setUp(self):
        """Set up test fixtures."""
        self.store = InMemoryMerchantMappingStore([
            MerchantMapping(raw_merchant_name="SWIGGY", normalized_name="Swiggy", category_id=1, confidence=1.0),
            MerchantMapping(raw_merchant_name="RAMESH GENERAL", normalized_name="Ramesh General",
                            category_id=9, confidence=1.0),
        ])
        self.categorizer = SmartCategorizer(store=self.store)

    def test_tier1_exact_match(self):
        result = self.categorizer.categorize("swiggy", 350.0, NIGHT)

        self.assertEqual(result.tier, 1)
        self.assertEqual(result.category_id, 1)
        self.assertAlmostEqual(result.confidence, 0.98)
        self.assertEqual(result.suggested_name, "Swiggy")
        self.assertFalse(result.needs_review)

    def test_tier1_records_usage(self):
        self.categorizer.categorize("SWIGGY", 350.0, NIGHT)

        mapping = self.store.find_by_raw_name("SWIGGY")
        self.assertEqual(mapping.match_count, 2)
        self.assertAlmostEqual(mapping.confidence, 1.0)

    def test_tier2_keyword_match(self):
        result = self.categorizer.categorize("UBER TRIP", 250.0, NIGHT)

        self.assertEqual(result.tier, 2)
        self.assertEqual(result.category_id, 2)
        self.assertAlmostEqual(result.confidence, 0.90)
        self.assertEqual(result.method, "Keyword Match (uber)")
        self.assertEqual(result.suggested_name, "UBER TRIP")

    def test_tier2_without_mapping_uses_keywords(self):
        result = self.categorizer.categorize("DOMINOS PIZZA", 450.0, NIGHT, raw_text="Paid Rs.450 for pizza order")

        self.assertEqual(result.tier, 2)
        self.assertEqual(result.category_id, 1)
        self.assertAlmostEqual(result.confidence, 0.88)
        self.assertEqual(result.method, "Keyword Match (pizza)")

    def test_tier2_uses_message_text(self):
        result = self.categorizer.categorize("ABC123", 120.0, NIGHT, raw_text="Payment for pizza order")

        self.assertEqual(result.tier, 2)
        self.assertEqual(result.category_id, 1)

    def test_tier3_fuzzy_match_learns_alias(self):
        result = self.categorizer.categorize("RAMESH GENERALS", 80.0, NIGHT)

        self.assertEqual(result.tier, 3)
        self.assertEqual(result.category_id, 9)
        self.assertAlmostEqual(result.confidence, (1 - 1 / 15) * 0.9, places=4)

        alias = self.store.find_by_raw_name("RAMESH GENERALS")
        self.assertIsNotNone(alias)
        self.assertAlmostEqual(alias.confidence, 0.95)
        self.assertTrue(alias.is_fuzzy_match)

        # The learned alias resolves exactly next time
        second = self.categorizer.categorize("Ramesh Generals", 80.0, NIGHT)
        self.assertEqual(second.tier, 1)
        self.assertEqual(second.category_id, 9)

    def test_tier4_context_inference(self):
        result = self.categorizer.categorize("XYZ123", 250.0, LUNCH)

        self.assertEqual(result.tier, 4)
        self.assertEqual(result.category_id, 1)
        self.assertAlmostEqual(result.confidence, 0.68)
        self.assertTrue(result.needs_review)
        self.assertEqual(result.suggested_name, "XYZ123")

    def test_tier5_default(self):
        result = self.categorizer.categorize("QWERTY", 37.0, NIGHT)

        self.assertEqual(result.tier, 5)
        self.assertEqual(result.category_id, 15)
        self.assertAlmostEqual(result.confidence, 0.50)
        self.assertEqual(result.method, "Default Fallback")
        self.assertEqual(result.suggested_name, "QWERTY")

    def test_confidence_is_bounded(self):
        samples = [("swiggy", 350.0), ("UBER", 250.0), ("RAMESH GENERALS", 80.0), ("XYZ123", 250.0), ("QWERTY", 37.0)]
        for name, amount in samples:
            with self.subTest(merchant=name):
                result = self.categorizer.categorize(name, amount, LUNCH)
                self.assertGreaterEqual(result.confidence, 0.50)
                self.assertLessEqual(result.confidence, 0.98)


class TestUserCorrections(unittest.TestCase):
    """Test correction learning and analytics reporting."""

    def setUp(self):
        """Set up test fixtures."""
        self.store = InMemoryMerchantMappingStore()
        self.analytics = CategorizationCounters()
        self.categorizer = SmartCategorizer(store=self.store, analytics=self.analytics)

    def test_correction_creates_exact_mapping(self):
        first = self.categorizer.categorize("LOCAL KIRANA", 37.0, NIGHT)
        self.categorizer.track_categorization(1, "LOCAL KIRANA", first)
        self.assertEqual(first.tier, 5)

        mapping = self.categorizer.handle_user_correction(1, "LOCAL KIRANA", first.category_id, 9, "Kirana")

        self.assertEqual(mapping.category_id, 9)
        self.assertAlmostEqual(mapping.confidence, 1.0)
        self.assertEqual(self.analytics.user_corrected, 1)

        second = self.categorizer.categorize("Local Kirana", 37.0, NIGHT)
        self.assertEqual(second.tier, 1)
        self.assertEqual(second.category_id, 9)
        self.assertEqual(second.suggested_name, "Kirana")

    def test_correction_updates_existing_mapping(self):
        self.store.insert(MerchantMapping(raw_merchant_name="CROMA", normalized_name="Croma",
                                          category_id=3, confidence=0.6, match_count=4))

        mapping = self.categorizer.handle_user_correction(7, "croma", 3, 10)

        self.assertEqual(mapping.category_id, 10)
        self.assertEqual(mapping.match_count, 5)
        self.assertEqual(self.store.find_by_raw_name("CROMA").category_id, 10)


class TestCollaboratorFailures(unittest.TestCase):
    """Store and analytics failures must not break categorisation."""

    def test_broken_store_still_categorizes(self):
        categorizer = SmartCategorizer(store=BrokenStore())

        self.assertEqual(categorizer.categorize("UBER", 250.0, NIGHT).tier, 2)
        self.assertEqual(categorizer.categorize("QWERTY", 37.0, NIGHT).tier, 5)

    def test_broken_analytics_is_absorbed(self):
        categorizer = SmartCategorizer(analytics=BrokenAnalytics())
        result = categorizer.categorize("UBER", 250.0, NIGHT)

        categorizer.track_categorization(1, "UBER", result)
        mapping = categorizer.handle_user_correction(1, "UBER", 2, 8)
        self.assertEqual(mapping.category_id, 8)

    def test_correction_store_failure_propagates(self):
        categorizer = SmartCategorizer(store=BrokenStore())

        with self.assertRaises(RuntimeError):
            categorizer.handle_user_correction(1, "UBER", 2, 8)


class InterleavingStore(InMemoryMerchantMappingStore):
    """Store where two lookups always complete before either caller writes."""

    def __init__(self, mappings):
        super().__init__(mappings)
        self.barrier = threading.Barrier(2, timeout=5)

    def find_by_raw_name(self, raw_name):
        found = super().find_by_raw_name(raw_name)
        self.barrier.wait()
        return found


class TestConcurrentUpdates(unittest.TestCase):
    """Concurrent hits on one merchant must not lose mapping updates."""

    def setUp(self):
        """Set up test fixtures."""
        self.store = InterleavingStore([
            MerchantMapping(raw_merchant_name="SWIGGY", normalized_name="Swiggy", category_id=1,
                            confidence=0.9, match_count=1),
        ])
        self.categorizer = SmartCategorizer(store=self.store)

    def test_concurrent_exact_hits_are_both_counted(self):
        results = []
        threads = [
            threading.Thread(target=lambda: results.append(self.categorizer.categorize("SWIGGY", 350.0, NIGHT)))
            for _ in range(2)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual([r.tier for r in results], [1, 1])
        stored = self.store.find_all()[0]
        self.assertEqual(stored.match_count, 3)
        self.assertAlmostEqual(stored.confidence, 0.92)


class TestDescriptions(unittest.TestCase):

    def test_describe_result(self):
        result = CategorizationResult(category_id=1, confidence=0.88, tier=2, method="Keyword Match (pizza)")
        self.assertEqual(SmartCategorizer.describe_result(result), "Tier 2: Keyword Match (pizza) (88% confidence)")

    def test_category_name(self):
        self.assertEqual(SmartCategorizer.category_name(1), "Food")
        self.assertEqual(SmartCategorizer.category_name(999), "Other")


if __name__ == "__main__":
    unittest.main()

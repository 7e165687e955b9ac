"""
Tests for the end-to-end message processing pipeline.
"""

import unittest
from datetime import date, datetime

from sms_finance_engine import (
    CategorizationCounters,
    InMemoryMerchantMappingStore,
    InMemoryRecurringRuleStore,
    MerchantMapping,
    RecurringFrequency,
    RecurringRule,
    process_messages,
)

HDFC_UPI = "Paid Rs.350.00 to SWIGGY on 15-01-24 using UPI. UPI Ref: 123456. -HDFC Bank"
ICICI_UPI = (
    "Rs.300.00 has been debited from your account **4321 via UPI to chaiwala@paytm on 12-Dec-24. "
    "Ref: 434512345678 -ICICI Bank"
)
OTP = "482913 is your OTP for login. Do not share it with anyone."
HDFC_BILL = "HDFC Credit Card XX4523 Bill: Total Due Rs.8,500, Min Due Rs.425, Due Date 10-Feb-25"
NETFLIX_CARD = "Your SBI Card ending 3456 was used for Rs.649 at NETFLIX.COM on {}"


def netflix_messages():
    return [{"body": NETFLIX_CARD.format(d)} for d in ("14/10/2024", "14/11/2024", "14/12/2024")]


class TestProcessMessages(unittest.TestCase):

    def test_transactions_bills_and_ignored(self):
        result = process_messages([
            {"body": HDFC_UPI, "date": "2024-01-15T10:00:00"},
            {"body": OTP},
            {"body": HDFC_BILL},
        ])

        self.assertEqual(result["ignored"], 1)
        self.assertEqual(len(result["bills"]), 1)
        self.assertEqual(result["bills"][0].total_due, 8500.0)
        self.assertEqual(result["bills"][0].due_date, date(2025, 2, 10))
        self.assertEqual(result["patterns"], [])

        txn = result["transactions"][0]
        self.assertEqual(txn["id"], 1)
        self.assertEqual(txn["date"], datetime(2024, 1, 15))
        self.assertEqual(txn["amount"], 350.0)
        self.assertEqual(txn["type"], "DEBIT")
        self.assertEqual(txn["merchant_name"], "SWIGGY")
        self.assertEqual(txn["bank_name"], "HDFC")
        self.assertEqual(txn["payment_channel"], "UPI")
        self.assertEqual(txn["template"], "HDFC_UPI")
        self.assertEqual(txn["category_id"], 1)
        self.assertEqual(txn["category"], "Food")
        self.assertEqual(txn["tier"], 2)
        self.assertFalse(txn["needs_review"])

    def test_seeded_mapping_and_analytics(self):
        store = InMemoryMerchantMappingStore([
            MerchantMapping(raw_merchant_name="SWIGGY", normalized_name="Swiggy", category_id=1, confidence=1.0),
        ])
        analytics = CategorizationCounters()

        result = process_messages([{"body": HDFC_UPI}], mapping_store=store, analytics=analytics)

        txn = result["transactions"][0]
        self.assertEqual(txn["tier"], 1)
        self.assertEqual(txn["display_name"], "Swiggy")
        self.assertEqual(analytics.total, 1)
        self.assertEqual(analytics.tier_by_transaction, {1: 1})
        self.assertEqual(store.find_by_raw_name("SWIGGY").match_count, 2)

    def test_vpa_merchant_is_normalized_before_categorization(self):
        store = InMemoryMerchantMappingStore([
            MerchantMapping(raw_merchant_name="CHAIWALA", normalized_name="Chaiwala", category_id=1, confidence=1.0),
        ])
        analytics = CategorizationCounters()

        result = process_messages([{"body": ICICI_UPI}], mapping_store=store, analytics=analytics)

        txn = result["transactions"][0]
        self.assertEqual(txn["merchant_name"], "chaiwala@paytm")
        self.assertEqual(txn["merchant_normalized"], "CHAIWALA")
        self.assertEqual(txn["tier"], 1)
        self.assertEqual(txn["category_id"], 1)
        self.assertEqual(txn["display_name"], "Chaiwala")
        self.assertEqual(store.find_by_raw_name("CHAIWALA").match_count, 2)
        self.assertIsNone(store.find_by_raw_name("CHAIWALA@PAYTM"))

    def test_first_id_offsets_transaction_ids(self):
        analytics = CategorizationCounters()

        result = process_messages([{"body": OTP}, {"body": HDFC_UPI}], analytics=analytics, first_id=10)

        self.assertEqual(result["transactions"][0]["id"], 11)
        self.assertEqual(analytics.tier_by_transaction, {11: 2})

    def test_recurring_patterns_detected(self):
        result = process_messages(netflix_messages())

        self.assertEqual(len(result["transactions"]), 3)
        self.assertTrue(all(t["category_id"] == 5 for t in result["transactions"]))
        self.assertEqual(len(result["patterns"]), 1)

        pattern = result["patterns"][0]
        self.assertEqual(pattern.merchant_pattern, "NETFLIX.COM")
        self.assertEqual(pattern.detected_frequency, RecurringFrequency.MONTHLY)
        self.assertEqual(pattern.next_expected, date(2025, 1, 14))
        self.assertEqual(pattern.category_id, 5)

    def test_confirmed_rule_suppresses_pattern(self):
        rules = InMemoryRecurringRuleStore()
        rules.insert(RecurringRule("NETFLIX.COM", 5, 649.0, RecurringFrequency.MONTHLY, is_user_confirmed=True))

        self.assertEqual(process_messages(netflix_messages(), rule_store=rules)["patterns"], [])

    def test_detection_can_be_disabled(self):
        self.assertEqual(process_messages(netflix_messages(), detect_recurring=False)["patterns"], [])

    def test_empty_input(self):
        result = process_messages([])

        self.assertEqual(result, {"transactions": [], "bills": [], "ignored": 0, "patterns": []})

    def test_missing_body_is_ignored(self):
        self.assertEqual(process_messages([{"date": "2024-01-15"}])["ignored"], 1)


if __name__ == "__main__":
    unittest.main()

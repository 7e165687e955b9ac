"""
Tests for recurring expense prediction, new subscriptions and dormant alerts.
"""

import unittest
from datetime import date, datetime

from sms_finance_engine.models import RecurringFrequency, RecurringRule, Transaction, TransactionType
from sms_finance_engine.recurring import (
    DormantStatus,
    PredictionSource,
    RecurringPredictor,
    shift_months,
)
from sms_finance_engine.stores import InMemoryRecurringRuleStore

TODAY = date(2024, 3, 20)


def debit(txn_id, name, amount, when):
    return Transaction(
        id=txn_id,
        amount=amount,
        type=TransactionType.DEBIT,
        merchant_name=name,
        transaction_date=datetime(when.year, when.month, when.day, 9, 0),
    )


def monthly_rule(name, amount, **kwargs):
    return RecurringRule(name, 5, amount, RecurringFrequency.MONTHLY, is_user_confirmed=True, **kwargs)


class BrokenRuleStore:
    """Rule store whose backend is unavailable."""

    def find_by_merchant_pattern(self, merchant_pattern):
        raise RuntimeError("database locked")

    def find_active(self):
        raise RuntimeError("database locked")


class TestShiftMonths(unittest.TestCase):

    def test_day_is_clamped(self):
        self.assertEqual(shift_months(date(2024, 1, 31), 1), date(2024, 2, 29))
        self.assertEqual(shift_months(date(2024, 3, 31), -1), date(2024, 2, 29))

    def test_year_boundaries(self):
        self.assertEqual(shift_months(date(2024, 12, 15), 1), date(2025, 1, 15))
        self.assertEqual(shift_months(date(2024, 1, 20), -2), date(2023, 11, 20))


class TestPredictNextMonth(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures."""
        self.store = InMemoryRecurringRuleStore()
        self.store.insert(monthly_rule("NETFLIX", 649.0, next_expected=date(2024, 4, 15)))
        self.store.insert(monthly_rule("GOLD GYM", 1500.0, next_expected=date(2024, 5, 1)))
        self.predictor = RecurringPredictor(rule_store=self.store)

        self.transactions = [
            debit(1, "NETFLIX", 649.0, date(2024, 1, 15)),
            debit(2, "NETFLIX", 649.0, date(2024, 2, 15)),
            debit(3, "NETFLIX", 649.0, date(2024, 3, 15)),
            debit(4, "SPOTIFY", 119.0, date(2024, 1, 10)),
            debit(5, "SPOTIFY", 119.0, date(2024, 2, 10)),
            debit(6, "SPOTIFY", 119.0, date(2024, 3, 10)),
        ]

    def test_rules_and_patterns_are_combined(self):
        predictions = self.predictor.predict_next_month_expenses(self.transactions, TODAY)

        self.assertEqual([p.merchant_name for p in predictions], ["SPOTIFY", "NETFLIX"])

        spotify, netflix = predictions
        self.assertEqual(spotify.source, PredictionSource.DETECTED_PATTERN)
        self.assertEqual(spotify.expected_date, date(2024, 4, 10))
        self.assertAlmostEqual(spotify.confidence, 0.8983, places=3)
        self.assertEqual(netflix.source, PredictionSource.CONFIRMED_RULE)
        self.assertEqual(netflix.expected_date, date(2024, 4, 15))
        self.assertAlmostEqual(netflix.confidence, 0.95)

    def test_health_summary(self):
        summary = self.predictor.recurring_health_summary(self.transactions, TODAY)

        self.assertAlmostEqual(summary.next_month_predicted_total, 768.0)
        self.assertAlmostEqual(summary.confirmed_recurring_total, 649.0)
        self.assertAlmostEqual(summary.detected_pattern_total, 119.0)
        self.assertEqual(summary.predicted_expense_count, 2)
        self.assertEqual(summary.new_subscription_count, 0)
        # GOLD GYM has no payments at all
        self.assertEqual(summary.dormant_subscription_count, 1)
        self.assertEqual(summary.potential_savings, 0)

    def test_failing_rule_store_falls_back_to_patterns(self):
        predictor = RecurringPredictor(rule_store=BrokenRuleStore())

        predictions = predictor.predict_next_month_expenses(self.transactions, TODAY)

        self.assertEqual(len(predictions), 2)
        self.assertTrue(all(p.source == PredictionSource.DETECTED_PATTERN for p in predictions))
        self.assertEqual(predictor.flag_dormant_subscriptions(self.transactions, TODAY), [])


class TestNewSubscriptions(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures."""
        self.predictor = RecurringPredictor()

    def test_recent_merchants_only(self):
        transactions = [
            debit(1, "CULT FIT", 999.0, date(2024, 2, 1)),
            debit(2, "CULT FIT", 999.0, date(2024, 3, 1)),
            debit(3, "PIZZA HUT", 450.0, date(2024, 3, 1)),
            debit(4, "PIZZA HUT", 620.0, date(2024, 3, 10)),
            debit(5, "NETFLIX", 649.0, date(2023, 12, 15)),
            debit(6, "NETFLIX", 649.0, date(2024, 2, 15)),
            debit(7, "NETFLIX", 649.0, date(2024, 3, 15)),
            debit(8, "KUMAR DAIRY", 60.0, date(2024, 3, 18)),
        ]

        found = self.predictor.identify_new_subscriptions(transactions, TODAY)

        self.assertEqual([s.merchant_name for s in found], ["CULT FIT", "PIZZA HUT"])

        cult, pizza = found
        self.assertEqual(cult.detected_frequency, RecurringFrequency.MONTHLY)
        self.assertAlmostEqual(cult.confidence, 0.81)
        self.assertEqual(cult.first_seen_date, date(2024, 2, 1))
        self.assertEqual(cult.occurrence_count, 2)
        self.assertIsNone(pizza.detected_frequency)
        self.assertAlmostEqual(pizza.confidence, 0.6)
        self.assertAlmostEqual(pizza.amount, 535.0)

    def test_history_beyond_analysis_window_is_ignored(self):
        transactions = [
            debit(1, "CULT FIT", 999.0, date(2023, 6, 1)),
            debit(2, "CULT FIT", 999.0, date(2024, 2, 1)),
            debit(3, "CULT FIT", 999.0, date(2024, 3, 1)),
        ]

        found = self.predictor.identify_new_subscriptions(transactions, TODAY)

        self.assertEqual(len(found), 1)


class TestDormantSubscriptions(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures."""
        self.store = InMemoryRecurringRuleStore()
        for name, amount in (("NETFLIX", 649.0), ("SPOTIFY", 119.0), ("ZEE5", 99.0)):
            self.store.insert(monthly_rule(name, amount))
        self.store.insert(monthly_rule("HOTSTAR", 299.0, last_occurrence=date(2024, 1, 1)))
        self.predictor = RecurringPredictor(rule_store=self.store)

    def test_flags_by_missed_payments(self):
        transactions = [
            debit(1, "NETFLIX", 649.0, date(2024, 1, 15)),
            debit(2, "SPOTIFY", 119.0, date(2024, 2, 10)),
            debit(3, "ZEE5", 99.0, date(2024, 3, 15)),
        ]

        flagged = self.predictor.flag_dormant_subscriptions(transactions, TODAY)
        by_name = {d.merchant_name: d for d in flagged}

        self.assertEqual(set(by_name), {"NETFLIX", "SPOTIFY", "HOTSTAR"})
        self.assertEqual(by_name["NETFLIX"].status, DormantStatus.POSSIBLY_CANCELLED)
        self.assertEqual(by_name["NETFLIX"].missed_payments, 2)
        self.assertEqual(by_name["SPOTIFY"].status, DormantStatus.PAYMENT_ISSUE)
        self.assertEqual(by_name["SPOTIFY"].missed_payments, 1)
        self.assertEqual(by_name["HOTSTAR"].status, DormantStatus.INACTIVE)
        self.assertEqual(by_name["HOTSTAR"].last_transaction_date, date(2024, 1, 1))
        self.assertEqual(flagged[-1].merchant_name, "SPOTIFY")

    def test_blank_merchants_match_no_rule(self):
        transactions = [
            debit(1, "", 50.0, date(2024, 3, 18)),
            debit(2, "   ", 80.0, date(2024, 3, 19)),
        ]

        flagged = self.predictor.flag_dormant_subscriptions(transactions, TODAY)

        self.assertEqual({d.merchant_name for d in flagged}, {"NETFLIX", "SPOTIFY", "ZEE5", "HOTSTAR"})
        self.assertTrue(all(d.status == DormantStatus.INACTIVE for d in flagged))

    def test_inactive_rules_are_skipped(self):
        store = InMemoryRecurringRuleStore()
        store.insert(monthly_rule("HOTSTAR", 299.0, last_occurrence=date(2023, 1, 1), is_active=False))

        self.assertEqual(RecurringPredictor(rule_store=store).flag_dormant_subscriptions([], TODAY), [])

    def test_missed_payments_after_grace(self):
        self.assertEqual(
            RecurringPredictor.missed_payments(date(2024, 3, 1), RecurringFrequency.WEEKLY, TODAY), 2)
        self.assertEqual(
            RecurringPredictor.missed_payments(date(2024, 3, 18), RecurringFrequency.MONTHLY, TODAY), 0)

    def test_expected_next_date(self):
        expected = RecurringPredictor.expected_next_date
        self.assertEqual(expected(date(2024, 1, 31), RecurringFrequency.MONTHLY), date(2024, 2, 29))
        self.assertEqual(expected(date(2024, 2, 29), RecurringFrequency.YEARLY), date(2025, 2, 28))
        self.assertEqual(expected(date(2024, 3, 1), RecurringFrequency.WEEKLY), date(2024, 3, 8))


if __name__ == "__main__":
    unittest.main()

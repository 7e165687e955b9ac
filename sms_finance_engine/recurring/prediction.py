"""
Recurring expense prediction and alerting.

Builds on PatternDetector to forecast next month's recurring expenses,
spot subscriptions that started recently and flag confirmed rules whose
payments have stopped arriving.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional

from ..config.engine_config import PATTERN_DETECTION_CONFIG, PREDICTION_CONFIG
from ..models import RecurringFrequency, RecurringRule, Transaction, TransactionType
from .pattern_detector import PatternDetector, _as_date

logger = logging.getLogger(__name__)


class PredictionSource(str, Enum):
    CONFIRMED_RULE = "CONFIRMED_RULE"
    DETECTED_PATTERN = "DETECTED_PATTERN"


class DormantStatus(str, Enum):
    POSSIBLY_CANCELLED = "POSSIBLY_CANCELLED"  # 2+ missed payments
    PAYMENT_ISSUE = "PAYMENT_ISSUE"  # 1 missed payment
    INACTIVE = "INACTIVE"  # No matching payments at all


@dataclass
class PredictedExpense:
    merchant_name: str
    display_name: str
    amount: float
    expected_date: date
    frequency: RecurringFrequency
    confidence: float
    source: PredictionSource
    category_id: Optional[int] = None


@dataclass
class NewSubscription:
    merchant_name: str
    display_name: str
    amount: float
    first_seen_date: date
    occurrence_count: int
    detected_frequency: Optional[RecurringFrequency]
    confidence: float


@dataclass
class DormantSubscription:
    merchant_name: str
    display_name: str
    expected_amount: float
    last_transaction_date: date
    missed_payments: int
    status: DormantStatus


@dataclass
class RecurringHealthSummary:
    next_month_predicted_total: float
    confirmed_recurring_total: float
    detected_pattern_total: float
    predicted_expense_count: int
    new_subscription_count: int
    dormant_subscription_count: int
    potential_savings: float  # Expected amounts of possibly cancelled subscriptions


def shift_months(value: date, months: int) -> date:
    """Move a date by whole months, clamping the day to the target month."""
    index = value.year * 12 + value.month - 1 + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(value.day, calendar.monthrange(year, month)[1]))


def _same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


class RecurringPredictor:
    """Forecasts and alerts over recurring payments."""

    ANALYSIS_MONTHS = PREDICTION_CONFIG["analysis_months"]
    NEW_SUBSCRIPTION_WINDOW_MONTHS = PREDICTION_CONFIG["new_subscription_window_months"]
    DORMANT_MISSED_PAYMENTS = PREDICTION_CONFIG["dormant_missed_payments"]
    GRACE_DAYS = PREDICTION_CONFIG["grace_days"]
    CONFIRMED_RULE_CONFIDENCE = PREDICTION_CONFIG["confirmed_rule_confidence"]
    NEW_SUBSCRIPTION_DEFAULT_CONFIDENCE = PREDICTION_CONFIG["new_subscription_default_confidence"]
    # Assumed interval consistency for subscriptions with only a few payments
    NEW_SUBSCRIPTION_CONSISTENCY = 0.8

    def __init__(self, detector: Optional[PatternDetector] = None, rule_store=None):
        self.rule_store = rule_store
        self.detector = detector or PatternDetector(rule_store=rule_store)

    def _active_rules(self) -> List[RecurringRule]:
        if self.rule_store is None:
            return []
        try:
            return self.rule_store.find_active()
        except Exception as e:
            logger.warning(f"Could not load active recurring rules: {e}")
            return []

    def predict_next_month_expenses(self, transactions: List[Transaction],
                                    today: Optional[date] = None) -> List[PredictedExpense]:
        """
        Predict recurring expenses falling in the month after `today`.

        Confirmed rules come first; detected patterns fill in merchants that
        no active rule covers. Results are ordered by expected date.
        """
        today = today or date.today()
        next_month = shift_months(today.replace(day=1), 1)
        rules = self._active_rules()
        predictions = []

        for rule in rules:
            if rule.next_expected is not None and _same_month(rule.next_expected, next_month):
                predictions.append(PredictedExpense(
                    merchant_name=rule.merchant_pattern,
                    display_name=rule.merchant_pattern,
                    amount=rule.expected_amount,
                    expected_date=rule.next_expected,
                    frequency=rule.frequency,
                    confidence=self.CONFIRMED_RULE_CONFIDENCE,
                    source=PredictionSource.CONFIRMED_RULE,
                    category_id=rule.category_id,
                ))

        covered = {r.merchant_pattern.upper() for r in rules}
        for pattern in self.detector.detect_patterns(transactions):
            if pattern.merchant_pattern.upper() in covered:
                continue
            if _same_month(pattern.next_expected, next_month):
                predictions.append(PredictedExpense(
                    merchant_name=pattern.merchant_pattern,
                    display_name=pattern.display_name,
                    amount=pattern.average_amount,
                    expected_date=pattern.next_expected,
                    frequency=pattern.detected_frequency,
                    confidence=pattern.confidence,
                    source=PredictionSource.DETECTED_PATTERN,
                    category_id=pattern.category_id,
                ))

        predictions.sort(key=lambda p: p.expected_date)
        return predictions

    def identify_new_subscriptions(self, transactions: List[Transaction],
                                   today: Optional[date] = None) -> List[NewSubscription]:
        """Merchants paid at least twice recently with no earlier history in the analysis window."""
        today = today or date.today()
        window_start = shift_months(today, -self.NEW_SUBSCRIPTION_WINDOW_MONTHS)
        history_start = shift_months(today, -self.ANALYSIS_MONTHS)
        found = []

        for merchant, group in self.detector.group_transactions_by_merchant(transactions).items():
            recent = [t for t in group if _as_date(t.transaction_date) >= window_start]
            older = [t for t in group if history_start <= _as_date(t.transaction_date) < window_start]
            if len(recent) < 2 or older:
                continue

            recent.sort(key=lambda t: t.transaction_date)
            dates = [_as_date(t.transaction_date) for t in recent]
            amounts = [t.amount for t in recent]
            frequency = self.detector.detect_frequency(dates)
            if frequency is not None:
                confidence = self.detector.calculate_confidence(
                    len(recent),
                    self.detector.calculate_amount_variance(amounts),
                    self.NEW_SUBSCRIPTION_CONSISTENCY,
                )
            else:
                confidence = self.NEW_SUBSCRIPTION_DEFAULT_CONFIDENCE

            found.append(NewSubscription(
                merchant_name=merchant,
                display_name=recent[0].merchant_normalized or recent[0].merchant_name,
                amount=sum(amounts) / len(amounts),
                first_seen_date=dates[0],
                occurrence_count=len(recent),
                detected_frequency=frequency,
                confidence=confidence,
            ))

        found.sort(key=lambda s: s.confidence, reverse=True)
        return found

    def flag_dormant_subscriptions(self, transactions: List[Transaction],
                                   today: Optional[date] = None) -> List[DormantSubscription]:
        """Active rules whose payments are overdue, most missed payments first."""
        today = today or date.today()
        debits = []
        for t in transactions:
            name = (t.merchant_name or "").upper().strip()
            # A blank name is a substring of every pattern
            if t.type == TransactionType.DEBIT and name:
                debits.append((t, name))
        flagged = []

        for rule in self._active_rules():
            pattern = rule.merchant_pattern.upper()
            matching = [t for t, name in debits if pattern in name or name in pattern]

            if not matching:
                start = rule.last_occurrence or rule.created_at.date()
                flagged.append(self._dormant(rule, start, self.missed_payments(start, rule.frequency, today),
                                             DormantStatus.INACTIVE))
                continue

            last_date = max(_as_date(t.transaction_date) for t in matching)
            if today <= self.expected_next_date(last_date, rule.frequency):
                continue

            missed = self.missed_payments(last_date, rule.frequency, today)
            if missed >= self.DORMANT_MISSED_PAYMENTS:
                flagged.append(self._dormant(rule, last_date, missed, DormantStatus.POSSIBLY_CANCELLED))
            elif missed >= 1:
                flagged.append(self._dormant(rule, last_date, missed, DormantStatus.PAYMENT_ISSUE))

        flagged.sort(key=lambda d: d.missed_payments, reverse=True)
        return flagged

    def recurring_health_summary(self, transactions: List[Transaction],
                                 today: Optional[date] = None) -> RecurringHealthSummary:
        today = today or date.today()
        predictions = self.predict_next_month_expenses(transactions, today)
        new_subscriptions = self.identify_new_subscriptions(transactions, today)
        dormant = self.flag_dormant_subscriptions(transactions, today)

        return RecurringHealthSummary(
            next_month_predicted_total=sum(p.amount for p in predictions),
            confirmed_recurring_total=sum(p.amount for p in predictions
                                          if p.source == PredictionSource.CONFIRMED_RULE),
            detected_pattern_total=sum(p.amount for p in predictions
                                       if p.source == PredictionSource.DETECTED_PATTERN),
            predicted_expense_count=len(predictions),
            new_subscription_count=len(new_subscriptions),
            dormant_subscription_count=len(dormant),
            potential_savings=sum(d.expected_amount for d in dormant
                                  if d.status == DormantStatus.POSSIBLY_CANCELLED),
        )

    @staticmethod
    def expected_next_date(last_date: date, frequency: RecurringFrequency) -> date:
        if frequency == RecurringFrequency.WEEKLY:
            return date.fromordinal(last_date.toordinal() + 7)
        if frequency == RecurringFrequency.MONTHLY:
            return shift_months(last_date, 1)
        return shift_months(last_date, 12)

    @classmethod
    def missed_payments(cls, last_date: date, frequency: RecurringFrequency, today: date) -> int:
        """Whole periods elapsed since the last payment, after the grace period."""
        interval = PATTERN_DETECTION_CONFIG["expected_interval_days"][frequency.value]
        elapsed = max(0, (today - last_date).days - cls.GRACE_DAYS)
        return elapsed // interval

    @staticmethod
    def _dormant(rule: RecurringRule, last_date: date, missed: int, status: DormantStatus) -> DormantSubscription:
        return DormantSubscription(
            merchant_name=rule.merchant_pattern,
            display_name=rule.merchant_pattern,
            expected_amount=rule.expected_amount,
            last_transaction_date=last_date,
            missed_payments=missed,
            status=status,
        )

"""
Recurring Payment Pattern Detection.

Finds merchants that are paid on a regular schedule (weekly, monthly or
yearly) in a transaction history, scores how reliable each pattern is and
projects the next expected payment date.
"""

import calendar
import logging
import statistics
from collections import Counter, defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional

from ..config.engine_config import PATTERN_DETECTION_CONFIG
from ..categorisation.similarity import calculate_similarity
from ..models import (
    PatternSuggestion,
    RecurringFrequency,
    RecurringRule,
    Transaction,
    TransactionType,
)
from ..parsing.engine import MessageParser
from ..patterns.category_rules import VARIABLE_BILL_PATTERNS

logger = logging.getLogger(__name__)


def _as_date(value) -> date:
    return value.date() if hasattr(value, "date") and callable(value.date) else value


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class PatternDetector:
    """Detects recurring payment patterns: grouping → frequency → variance → confidence."""

    MIN_OCCURRENCES = PATTERN_DETECTION_CONFIG["min_occurrences"]
    MAX_AMOUNT_VARIANCE = PATTERN_DETECTION_CONFIG["max_amount_variance"]
    VARIABLE_BILL_MAX_VARIANCE = PATTERN_DETECTION_CONFIG["variable_bill_max_variance"]
    MIN_CONFIDENCE = PATTERN_DETECTION_CONFIG["min_confidence"]
    MERCHANT_MATCH_THRESHOLD = PATTERN_DETECTION_CONFIG["merchant_match_threshold"]

    WEEKLY_MIN_DAYS, WEEKLY_MAX_DAYS = PATTERN_DETECTION_CONFIG["intervals"]["WEEKLY"]
    MONTHLY_MIN_DAYS, MONTHLY_MAX_DAYS = PATTERN_DETECTION_CONFIG["intervals"]["MONTHLY"]
    YEARLY_MIN_DAYS, YEARLY_MAX_DAYS = PATTERN_DETECTION_CONFIG["intervals"]["YEARLY"]

    AUTO_CONFIRM_CONFIDENCE = PATTERN_DETECTION_CONFIG["auto_confirm_confidence"]
    AUTO_CONFIRM_MIN_OCCURRENCES = PATTERN_DETECTION_CONFIG["auto_confirm_min_occurrences"]
    AUTO_CONFIRM_SUBSCRIPTION_MIN_OCCURRENCES = PATTERN_DETECTION_CONFIG["auto_confirm_min_occurrences_subscription"]

    def __init__(self, rule_store=None, auto_confirm: bool = False):
        self.rule_store = rule_store
        self.auto_confirm = auto_confirm
        self.auto_confirmed_rules: List[RecurringRule] = []

    # ----------------------------
    # Detection
    # ----------------------------
    def detect_patterns(self, transactions: List[Transaction]) -> List[PatternSuggestion]:
        """
        Detect recurring debit patterns.

        Args:
            transactions: Transaction history (credits are ignored)

        Returns:
            Suggestions sorted by confidence, highest first. Merchants with an
            active user-confirmed rule are not suggested again.
        """
        self.auto_confirmed_rules = []
        suggestions = []

        for merchant, group in self.group_transactions_by_merchant(transactions).items():
            if len(group) < self.MIN_OCCURRENCES:
                continue
            if self._has_confirmed_rule(merchant):
                continue

            suggestion = self.analyze_group(merchant, group)
            if suggestion is None:
                continue

            if self.auto_confirm and self._should_auto_confirm(suggestion):
                rule = self._auto_confirm(suggestion)
                if rule is not None:
                    continue
            suggestions.append(suggestion)

        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        logger.info(f"Detected {len(suggestions)} recurring pattern suggestions")
        return suggestions

    def analyze_group(self, merchant: str, group: List[Transaction]) -> Optional[PatternSuggestion]:
        """Score one merchant group; None when it is not a usable recurring pattern."""
        group = sorted(group, key=lambda t: t.transaction_date)
        dates = [_as_date(t.transaction_date) for t in group]
        amounts = [t.amount for t in group]

        frequency = self.detect_frequency(dates)
        if frequency is None:
            return None

        variance = self.calculate_amount_variance(amounts)
        typical_day = self.calculate_typical_day_of_period(dates, frequency)
        consistency = self.calculate_interval_consistency(dates, frequency)

        if self.is_variable_bill(merchant):
            if variance > self.VARIABLE_BILL_MAX_VARIANCE:
                return None
            confidence = self.calculate_variable_bill_confidence(len(group), consistency)
        else:
            if variance > self.MAX_AMOUNT_VARIANCE:
                return None
            confidence = self.calculate_confidence(len(group), variance, consistency)

        if confidence < self.MIN_CONFIDENCE:
            return None

        categories = [t.category_id for t in group if t.category_id is not None]
        latest = group[-1]
        return PatternSuggestion(
            merchant_pattern=merchant,
            display_name=latest.merchant_normalized or latest.merchant_name,
            average_amount=sum(amounts) / len(amounts),
            detected_frequency=frequency,
            typical_day_of_period=typical_day,
            occurrence_count=len(group),
            confidence=confidence,
            next_expected=self.predict_next_occurrence(dates[-1], frequency, typical_day),
            category_id=Counter(categories).most_common(1)[0][0] if categories else None,
            last_occurrence=dates[-1],
        )

    def group_transactions_by_merchant(self, transactions: List[Transaction]) -> Dict[str, List[Transaction]]:
        """
        Group debits by merchant.

        Names are upper-cased and trimmed; a name close enough to an existing
        group (similarity >= 0.8) joins that group.
        """
        groups: Dict[str, List[Transaction]] = defaultdict(list)
        canonical: Dict[str, str] = {}

        for txn in transactions:
            if txn.type != TransactionType.DEBIT:
                continue
            name = (txn.merchant_name or "").upper().strip()
            if not name:
                continue

            if name not in canonical:
                target = name
                for existing in groups:
                    if calculate_similarity(name, existing) >= self.MERCHANT_MATCH_THRESHOLD:
                        target = existing
                        break
                canonical[name] = target
            groups[canonical[name]].append(txn)

        return dict(groups)

    # ----------------------------
    # Primitives
    # ----------------------------
    def _bucket(self, gap: int) -> Optional[RecurringFrequency]:
        if self.WEEKLY_MIN_DAYS <= gap <= self.WEEKLY_MAX_DAYS:
            return RecurringFrequency.WEEKLY
        if self.MONTHLY_MIN_DAYS <= gap <= self.MONTHLY_MAX_DAYS:
            return RecurringFrequency.MONTHLY
        if self.YEARLY_MIN_DAYS <= gap <= self.YEARLY_MAX_DAYS:
            return RecurringFrequency.YEARLY
        return None

    def detect_frequency(self, dates: List[date]) -> Optional[RecurringFrequency]:
        """
        Classify the gaps between payments.

        The frequency bucket holding a strict majority of the gaps wins;
        otherwise the schedule is irregular and None is returned.
        """
        if len(dates) < self.MIN_OCCURRENCES:
            return None
        ordered = sorted(_as_date(d) for d in dates)
        gaps = [(b - a).days for a, b in zip(ordered, ordered[1:])]
        if not gaps:
            return None

        buckets = Counter(self._bucket(g) for g in gaps)
        frequency, count = buckets.most_common(1)[0]
        if frequency is None or count * 2 <= len(gaps):
            return None
        return frequency

    @staticmethod
    def calculate_amount_variance(amounts: List[float]) -> float:
        """Coefficient of variation (population std / mean); 0 for fewer than two amounts."""
        if len(amounts) <= 1:
            return 0.0
        mean = statistics.fmean(amounts)
        if mean == 0:
            return 0.0
        return statistics.pstdev(amounts) / mean

    @staticmethod
    def calculate_typical_day_of_period(dates: List[date], frequency: RecurringFrequency) -> int:
        if not dates:
            return 1
        ordered = sorted(_as_date(d) for d in dates)

        if frequency == RecurringFrequency.WEEKLY:
            return Counter(d.isoweekday() for d in ordered).most_common(1)[0][0]

        days = []
        for d in ordered:
            last_day = calendar.monthrange(d.year, d.month)[1]
            # 28-31 at month end all mean "last day of the month"
            days.append(31 if d.day >= 28 and d.day == last_day else d.day)
        return Counter(days).most_common(1)[0][0]

    def calculate_interval_consistency(self, dates: List[date], frequency: RecurringFrequency) -> float:
        ordered = sorted(_as_date(d) for d in dates)
        gaps = [(b - a).days for a, b in zip(ordered, ordered[1:])]
        if not gaps:
            return 0.0
        expected = PATTERN_DETECTION_CONFIG["expected_interval_days"][frequency.value]
        deviation = sum(abs(g - expected) / expected for g in gaps) / len(gaps)
        return _clamp(1.0 - deviation)

    @staticmethod
    def calculate_confidence(occurrences: int, amount_variance: float, interval_consistency: float) -> float:
        """
        Weighted confidence score.

        30% occurrence count (saturating at 6), 35% amount stability,
        35% interval consistency.
        """
        occurrence_score = 0.6 + _clamp(occurrences - 2, 0, 4) * 0.1
        amount_score = 1.0 - _clamp(amount_variance, 0.0, 0.3)
        score = 0.3 * occurrence_score + 0.35 * amount_score + 0.35 * _clamp(interval_consistency)
        return _clamp(score)

    @staticmethod
    def calculate_variable_bill_confidence(occurrences: int, interval_consistency: float) -> float:
        """Timing-weighted score for bills whose amounts legitimately vary."""
        occurrence_score = 0.65 + _clamp(occurrences - 3, 0, 3) * 0.1
        return _clamp(0.35 * occurrence_score + 0.65 * _clamp(interval_consistency))

    @staticmethod
    def is_variable_bill(merchant: str) -> bool:
        lower = (merchant or "").lower()
        return any(p in lower for p in VARIABLE_BILL_PATTERNS)

    @staticmethod
    def predict_next_occurrence(last_date: date, frequency: RecurringFrequency,
                                typical_day: Optional[int] = None) -> date:
        """Advance one period, clamping the day to the target month's length."""
        last_date = _as_date(last_date)
        if frequency == RecurringFrequency.WEEKLY:
            return last_date + timedelta(days=7)

        day = typical_day or last_date.day
        if frequency == RecurringFrequency.MONTHLY:
            year = last_date.year + (1 if last_date.month == 12 else 0)
            month = 1 if last_date.month == 12 else last_date.month + 1
        else:
            year, month = last_date.year + 1, last_date.month
        return date(year, month, min(day, calendar.monthrange(year, month)[1]))

    # ----------------------------
    # Confirmation
    # ----------------------------
    def confirm_pattern(self, suggestion: PatternSuggestion) -> RecurringRule:
        """Store a suggestion as an active, user-confirmed recurring rule."""
        if self.rule_store is None:
            raise ValueError("No recurring rule store configured")
        rule = self.rule_store.insert(suggestion.to_recurring_rule())
        logger.info(f"Confirmed recurring rule for {suggestion.merchant_pattern}")
        return rule

    def dismiss_pattern(self, suggestion: PatternSuggestion) -> None:
        logger.info(f"Dismissed recurring pattern for {suggestion.merchant_pattern}")

    def _has_confirmed_rule(self, merchant: str) -> bool:
        if self.rule_store is None:
            return False
        try:
            rule = self.rule_store.find_by_merchant_pattern(merchant)
        except Exception as e:
            logger.warning(f"Rule lookup failed for {merchant}: {e}")
            return False
        return rule is not None and rule.is_active and rule.is_user_confirmed

    def _should_auto_confirm(self, suggestion: PatternSuggestion) -> bool:
        if suggestion.confidence < self.AUTO_CONFIRM_CONFIDENCE:
            return False
        if MessageParser.is_known_subscription(suggestion.display_name):
            return suggestion.occurrence_count >= self.AUTO_CONFIRM_SUBSCRIPTION_MIN_OCCURRENCES
        return suggestion.occurrence_count >= self.AUTO_CONFIRM_MIN_OCCURRENCES

    def _auto_confirm(self, suggestion: PatternSuggestion) -> Optional[RecurringRule]:
        try:
            rule = self.confirm_pattern(suggestion)
        except Exception as e:
            logger.warning(f"Auto-confirm failed for {suggestion.merchant_pattern}, keeping suggestion: {e}")
            return None
        self.auto_confirmed_rules.append(rule)
        return rule

"""
Categorisation analytics.

The categoriser reports every result and every user correction to an
AnalyticsSink. CategorizationCounters is the bundled sink: a caller-owned
accumulator whose state can be exported and restored for persistence.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..config.engine_config import CATEGORIZATION_CONFIG, OTHER_CATEGORY_ID
from ..models import CategorizationResult

TIER_NAMES = {
    1: "Exact Match",
    2: "Keyword Match",
    3: "Fuzzy Match",
    4: "Pattern Inference",
    5: "Default Fallback",
}

# Corrections for transactions the sink never saw are recorded as manual
MANUAL_TIER = 0


def tier_name(tier: int) -> str:
    return TIER_NAMES.get(tier, "Manual")


class AnalyticsSink:
    """Receives categorisation events."""

    def record_categorization(self, transaction_id: int, merchant_name: str,
                              result: CategorizationResult) -> None:
        raise NotImplementedError

    def record_correction(self, transaction_id: int, merchant_name: str,
                          original_category_id: int, corrected_category_id: int) -> None:
        raise NotImplementedError


@dataclass
class CategorizationMetrics:
    total_transactions: int
    auto_categorized: int
    needs_review: int
    user_corrected: int
    accuracy_rate: float  # (auto - corrected) / auto
    review_rate: float  # needs_review / total
    category_distribution: Dict[int, int] = field(default_factory=dict)
    tier_distribution: Dict[int, int] = field(default_factory=dict)

    @property
    def effective_accuracy(self) -> float:
        return self.accuracy_rate * 100.0

    @property
    def review_percentage(self) -> float:
        return self.review_rate * 100.0

    @property
    def tier1_percentage(self) -> float:
        if self.total_transactions == 0:
            return 0.0
        return self.tier_distribution.get(1, 0) / self.total_transactions * 100.0


class CategorizationCounters(AnalyticsSink):
    """In-memory analytics accumulator."""

    def __init__(self):
        self.total = 0
        self.auto_categorized = 0
        self.needs_review = 0
        self.user_corrected = 0
        self.manual_corrections = 0
        self.tier_counts: Counter = Counter()
        self.category_counts: Counter = Counter()
        self.tier_by_transaction: Dict[int, int] = {}

    def record_categorization(self, transaction_id, merchant_name, result):
        self.total += 1
        self.tier_counts[result.tier] += 1
        self.category_counts[result.category_id] += 1
        if result.category_id != OTHER_CATEGORY_ID:
            self.auto_categorized += 1
        if result.tier >= CATEGORIZATION_CONFIG["review_tier"]:
            self.needs_review += 1
        if transaction_id is not None:
            self.tier_by_transaction[transaction_id] = result.tier

    def record_correction(self, transaction_id, merchant_name, original_category_id, corrected_category_id):
        self.user_corrected += 1
        tier = self.tier_by_transaction.get(transaction_id, MANUAL_TIER)
        if tier == MANUAL_TIER:
            self.manual_corrections += 1
        # Moves the transaction between category buckets
        if self.category_counts.get(original_category_id, 0) > 0 and transaction_id in self.tier_by_transaction:
            self.category_counts[original_category_id] -= 1
            self.category_counts[corrected_category_id] += 1

    def metrics(self) -> CategorizationMetrics:
        auto = self.auto_categorized
        accuracy = max(0.0, (auto - self.user_corrected) / auto) if auto else 0.0
        review = self.needs_review / self.total if self.total else 0.0
        return CategorizationMetrics(
            total_transactions=self.total,
            auto_categorized=auto,
            needs_review=self.needs_review,
            user_corrected=self.user_corrected,
            accuracy_rate=accuracy,
            review_rate=review,
            category_distribution={k: v for k, v in self.category_counts.items() if v > 0},
            tier_distribution=dict(self.tier_counts),
        )

    def summary(self) -> str:
        """Plain-text report of the current counters."""
        m = self.metrics()
        lines = [
            "Categorization Metrics",
            f"Total Transactions: {m.total_transactions}",
            f"Auto-Categorized: {m.auto_categorized}",
            f"Needs Review: {m.needs_review}",
            f"User Corrections: {m.user_corrected}",
            f"Accuracy Rate: {m.effective_accuracy:.1f}%",
            f"Review Rate: {m.review_percentage:.1f}%",
            f"Tier 1 (Exact Match): {m.tier1_percentage:.1f}%",
            "",
            "Tier Distribution:",
        ]
        for tier in sorted(m.tier_distribution):
            count = m.tier_distribution[tier]
            pct = count / m.total_transactions * 100 if m.total_transactions else 0.0
            lines.append(f"  Tier {tier} ({tier_name(tier)}): {count} ({pct:.1f}%)")
        return "\n".join(lines)

    def snapshot(self) -> Dict:
        """Export state as plain data (JSON-serialisable)."""
        return {
            "total": self.total,
            "auto_categorized": self.auto_categorized,
            "needs_review": self.needs_review,
            "user_corrected": self.user_corrected,
            "manual_corrections": self.manual_corrections,
            "tier_counts": {str(k): v for k, v in self.tier_counts.items()},
            "category_counts": {str(k): v for k, v in self.category_counts.items()},
            "tier_by_transaction": {str(k): v for k, v in self.tier_by_transaction.items()},
        }

    @classmethod
    def from_snapshot(cls, data: Optional[Dict]) -> "CategorizationCounters":
        counters = cls()
        if not data:
            return counters
        counters.total = int(data.get("total", 0))
        counters.auto_categorized = int(data.get("auto_categorized", 0))
        counters.needs_review = int(data.get("needs_review", 0))
        counters.user_corrected = int(data.get("user_corrected", 0))
        counters.manual_corrections = int(data.get("manual_corrections", 0))
        counters.tier_counts = Counter({int(k): v for k, v in data.get("tier_counts", {}).items()})
        counters.category_counts = Counter({int(k): v for k, v in data.get("category_counts", {}).items()})
        counters.tier_by_transaction = {int(k): v for k, v in data.get("tier_by_transaction", {}).items()}
        return counters

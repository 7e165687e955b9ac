"""
Recurring Module for the SMS finance engine.

Detects recurring payments in transaction history and predicts upcoming,
new and dormant subscriptions.
"""

from .pattern_detector import PatternDetector
from .prediction import (
    RecurringPredictor,
    PredictedExpense,
    PredictionSource,
    NewSubscription,
    DormantSubscription,
    DormantStatus,
    RecurringHealthSummary,
    shift_months,
)

__all__ = [
    "PatternDetector",
    "RecurringPredictor",
    "PredictedExpense",
    "PredictionSource",
    "NewSubscription",
    "DormantSubscription",
    "DormantStatus",
    "RecurringHealthSummary",
    "shift_months",
]

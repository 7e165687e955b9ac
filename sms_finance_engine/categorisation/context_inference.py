"""
Contextual category inference (tier 4).

Guesses a category from the amount, time of day and message wording when
no merchant knowledge applies.
"""

from datetime import datetime
from typing import Dict, Optional, Tuple

from ..config.engine_config import CONTEXT_INFERENCE_CONFIG


def _in_hours(hour: int, windows) -> bool:
    return any(start <= hour <= end for start, end in windows)


def _in_range(amount: float, bounds) -> bool:
    low, high = bounds
    return low <= amount <= high


def _has_any(text: str, words) -> bool:
    return any(word in text for word in words)


def is_subscription_price(amount: float, config: Optional[Dict] = None) -> bool:
    cfg = (config or CONTEXT_INFERENCE_CONFIG)["subscription"]
    return any(abs(amount - price) < cfg["tolerance"] for price in cfg["price_points"])


def infer_category(
    amount: float,
    timestamp: datetime,
    raw_text: str = "",
    config: Optional[Dict] = None,
) -> Optional[Tuple[int, float, str]]:
    """
    Infer a category from transaction context.

    Rules are checked in order: subscription price points, food delivery
    hours, commute hours, round bill amounts, large orders, grocery runs.

    Returns:
        Tuple of (category_id, confidence, reason) or None
    """
    cfg = config or CONTEXT_INFERENCE_CONFIG
    text = (raw_text or "").lower()
    hour = timestamp.hour

    sub = cfg["subscription"]
    if is_subscription_price(amount, cfg) and _has_any(text, sub["keywords"]):
        return sub["category_id"], sub["confidence"], "Subscription pattern"

    food = cfg["food"]
    if _in_hours(hour, food["hours"]) and _in_range(amount, food["amount_range"]):
        return food["category_id"], food["confidence"], "Food delivery time/amount pattern"

    transport = cfg["transport"]
    if _in_hours(hour, transport["hours"]) and _in_range(amount, transport["amount_range"]):
        return transport["category_id"], transport["confidence"], "Transport time/amount pattern"

    bill = cfg["bill"]
    is_round = amount >= bill["round_min"] and amount % bill["round_step"] == 0
    if is_round or (amount >= bill["keyword_min"] and _has_any(text, bill["keywords"])):
        return bill["category_id"], bill["confidence"], "Bill amount pattern"

    shopping = cfg["shopping"]
    if amount >= shopping["min_amount"] and _has_any(text, shopping["keywords"]):
        return shopping["category_id"], shopping["confidence"], "Shopping pattern"

    grocery = cfg["grocery"]
    if _in_hours(hour, grocery["hours"]) and _in_range(amount, grocery["amount_range"]):
        return grocery["category_id"], grocery["confidence"], "Grocery pattern"

    return None

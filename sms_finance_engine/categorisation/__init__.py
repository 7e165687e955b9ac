"""
Categorisation Module for the SMS finance engine.

Orchestrates merchant categorisation through:
- Preprocessing (merchant keys, base names)
- Mapping lookup (exact and fuzzy, with alias learning)
- Pattern matching (keyword rules)
- Context inference (amount, time of day, wording)
- Analytics (tier and correction counters)
"""

from .engine import SmartCategorizer
from .preprocess import (
    merchant_key,
    normalize_merchant,
    extract_base_name,
    are_likely_same,
)
from .similarity import calculate_similarity, find_best_match, MerchantMatcher
from .pattern_matching import match_keywords, match_keyword_rules, keywords_for_category
from .context_inference import infer_category, is_subscription_price
from .alias_learner import MerchantAliasLearner
from .analytics import (
    AnalyticsSink,
    CategorizationCounters,
    CategorizationMetrics,
    TIER_NAMES,
    tier_name,
)

__all__ = [
    # Main categorizer
    "SmartCategorizer",
    # Preprocessing utilities
    "merchant_key",
    "normalize_merchant",
    "extract_base_name",
    "are_likely_same",
    # Matching
    "calculate_similarity",
    "find_best_match",
    "MerchantMatcher",
    "match_keywords",
    "match_keyword_rules",
    "keywords_for_category",
    "infer_category",
    "is_subscription_price",
    # Learning and analytics
    "MerchantAliasLearner",
    "AnalyticsSink",
    "CategorizationCounters",
    "CategorizationMetrics",
    "TIER_NAMES",
    "tier_name",
]

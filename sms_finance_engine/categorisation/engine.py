"""
Smart merchant categorizer.

Categorises a merchant through five tiers, stopping at the first that
applies:
    1. Exact mapping hit (learned or seeded)
    2. Keyword rules
    3. Fuzzy mapping hit, learned as an alias
    4. Contextual inference from amount, time and wording
    5. Default "Other"
"""

import logging
from datetime import datetime
from typing import Optional

from ..config.engine_config import CATEGORIZATION_CONFIG, CATEGORY_NAMES, OTHER_CATEGORY_ID
from ..models import CategorizationResult, MatchType
from ..stores import InMemoryMerchantMappingStore
from .alias_learner import MerchantAliasLearner
from .analytics import AnalyticsSink
from .context_inference import infer_category
from .pattern_matching import match_keyword_rules
from .similarity import MerchantMatcher

logger = logging.getLogger(__name__)


class SmartCategorizer:
    """Five-tier merchant categorizer."""

    def __init__(self, store=None, analytics: Optional[AnalyticsSink] = None, config: Optional[dict] = None):
        self.config = config or CATEGORIZATION_CONFIG
        self.store = store if store is not None else InMemoryMerchantMappingStore()
        self.matcher = MerchantMatcher(self.store, self.config["matcher"])
        self.learner = MerchantAliasLearner(self.store, self.config["alias_learning"])
        self.analytics = analytics

    def categorize(
        self,
        merchant_name: str,
        amount: float,
        timestamp: Optional[datetime] = None,
        raw_text: str = "",
    ) -> CategorizationResult:
        """
        Categorise a merchant.

        Args:
            merchant_name: Normalized merchant name
            amount: Transaction amount
            timestamp: Transaction time (defaults to now)
            raw_text: Original message body, used by keyword and context tiers

        Returns:
            CategorizationResult; never raises
        """
        timestamp = timestamp or datetime.now()
        conf = self.config["confidence"]

        match = self._find_mapping(merchant_name)

        # Tier 1: exact mapping
        if match is not None and match.match_type == MatchType.EXACT:
            self._safely("record exact match", self.learner.record_match, match.mapping)
            return self._result(match.mapping.category_id, conf["exact"], 1, "Exact Match",
                                match.mapping.normalized_name)

        # Tier 2: keyword rules
        keyword_hit = match_keyword_rules(merchant_name, raw_text)
        if keyword_hit:
            category_id, confidence, keyword = keyword_hit
            return self._result(category_id, confidence, 2, f"Keyword Match ({keyword})", merchant_name)

        # Tier 3: fuzzy mapping, learned as an alias
        if match is not None and match.match_type == MatchType.FUZZY:
            self._safely("learn alias", self.learner.learn_from_fuzzy_match, merchant_name, match.mapping)
            return self._result(match.mapping.category_id, match.confidence * conf["fuzzy_multiplier"], 3,
                                "Fuzzy Match", match.mapping.normalized_name)

        # Tier 4: context
        inferred = infer_category(amount, timestamp, raw_text)
        if inferred:
            category_id, confidence, reason = inferred
            return self._result(category_id, confidence, 4, f"Pattern Inference ({reason})", merchant_name)

        # Tier 5: fallback
        return self._result(self.config["default_category_id"], conf["default"], 5, "Default Fallback",
                            merchant_name)

    def track_categorization(self, transaction_id: int, merchant_name: str, result: CategorizationResult) -> None:
        if self.analytics is None:
            return
        self._safely("track categorization", self.analytics.record_categorization,
                     transaction_id, merchant_name, result)

    def handle_user_correction(
        self,
        transaction_id: int,
        merchant_name: str,
        original_category_id: int,
        corrected_category_id: int,
        display_name: Optional[str] = None,
    ):
        """
        Apply a user's category correction.

        The correction is reported to analytics, then the merchant's mapping
        is raised to full confidence under the corrected category.

        Returns:
            The updated or created MerchantMapping
        """
        if self.analytics is not None:
            self._safely("track correction", self.analytics.record_correction,
                         transaction_id, merchant_name, original_category_id, corrected_category_id)
        return self.learner.learn_from_user_correction(merchant_name, corrected_category_id, display_name)

    def suggest_potential_aliases(self, merchant_name: str):
        return self.learner.suggest_potential_aliases(merchant_name)

    @staticmethod
    def describe_result(result: CategorizationResult) -> str:
        """e.g. 'Tier 2: Keyword Match (pizza) (88% confidence)'."""
        return f"Tier {result.tier}: {result.method} ({int(round(result.confidence * 100))}% confidence)"

    @staticmethod
    def category_name(category_id: int) -> str:
        return CATEGORY_NAMES.get(category_id, CATEGORY_NAMES[OTHER_CATEGORY_ID])

    def _find_mapping(self, merchant_name: str):
        try:
            return self.matcher.find_match(merchant_name)
        except Exception as e:
            logger.warning(f"Merchant lookup failed for '{merchant_name}': {e}")
            return None

    def _result(self, category_id: int, confidence: float, tier: int, method: str,
                suggested_name: Optional[str] = None) -> CategorizationResult:
        conf = self.config["confidence"]
        bounded = min(conf["max"], max(conf["min"], confidence))
        return CategorizationResult(
            category_id=category_id,
            confidence=bounded,
            tier=tier,
            method=method,
            suggested_name=suggested_name,
        )

    @staticmethod
    def _safely(action: str, func, *args):
        """Run a store or analytics side effect; failures are logged, not raised."""
        try:
            return func(*args)
        except Exception as e:
            logger.warning(f"Failed to {action}: {e}")
            return None

"""
Merchant similarity and mapping lookup (tiers 1 and 3).
"""

import logging
from typing import Iterable, Optional, Tuple

from rapidfuzz.distance import Levenshtein

from ..config.engine_config import CATEGORIZATION_CONFIG
from ..models import MatchType, MerchantMapping, MerchantMatchResult
from .preprocess import merchant_key

logger = logging.getLogger(__name__)


def calculate_similarity(first: Optional[str], second: Optional[str]) -> float:
    """
    Normalised edit-distance similarity in [0, 1].

    Case and repeated whitespace are ignored. Identical names score 1.0,
    otherwise an empty side scores 0.0.
    """
    a = merchant_key(first)
    b = merchant_key(second)
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return float(Levenshtein.normalized_similarity(a, b))


def find_best_match(name: str, candidates: Iterable[str],
                    threshold: float) -> Optional[Tuple[str, float]]:
    """Best candidate at or above threshold; ties keep the first seen."""
    best = None
    best_score = 0.0
    for candidate in candidates:
        score = calculate_similarity(name, candidate)
        if score >= threshold and score > best_score:
            best = candidate
            best_score = score
    return (best, best_score) if best is not None else None


class MerchantMatcher:
    """Looks up merchant mappings exactly, then by similarity."""

    def __init__(self, store, config: Optional[dict] = None):
        self.store = store
        cfg = config or CATEGORIZATION_CONFIG["matcher"]
        self.exact_threshold = cfg["exact_threshold"]
        self.fuzzy_threshold = cfg["fuzzy_threshold"]
        self.auto_apply_threshold = cfg["auto_apply_threshold"]
        self.confirmed_fuzzy_confidence = cfg["confirmed_fuzzy_confidence"]
        self.manual_confidence = cfg["manual_confidence"]

    def find_match(self, merchant_name: str) -> MerchantMatchResult:
        key = merchant_key(merchant_name)
        if not key:
            return MerchantMatchResult(MatchType.NONE)

        exact = self.store.find_by_raw_name(key)
        if exact is not None:
            return MerchantMatchResult(MatchType.EXACT, exact, exact.confidence, False)

        best_mapping = None
        best_score = 0.0
        for mapping in self.store.find_all():
            score = calculate_similarity(key, mapping.raw_merchant_name)
            if score >= self.fuzzy_threshold and score > best_score:
                best_mapping = mapping
                best_score = score

        if best_mapping is None:
            return MerchantMatchResult(MatchType.NONE)
        return MerchantMatchResult(
            MatchType.FUZZY,
            best_mapping,
            best_score,
            requires_confirmation=best_score < self.auto_apply_threshold,
        )

    def confirm_fuzzy_match(self, merchant_name: str, mapping: MerchantMapping) -> MerchantMapping:
        """Store a user-confirmed fuzzy match as its own mapping."""
        return self.create_mapping(
            merchant_name,
            mapping.normalized_name,
            mapping.category_id,
            confidence=self.confirmed_fuzzy_confidence,
            is_fuzzy_match=True,
        )

    def create_mapping(self, merchant_name: str, display_name: str, category_id: int,
                       confidence: Optional[float] = None, is_fuzzy_match: bool = False) -> MerchantMapping:
        mapping = MerchantMapping(
            raw_merchant_name=merchant_key(merchant_name),
            normalized_name=display_name,
            category_id=category_id,
            confidence=self.manual_confidence if confidence is None else confidence,
            match_count=1,
            is_fuzzy_match=is_fuzzy_match,
        )
        self.store.insert(mapping)
        logger.info(f"Created merchant mapping {mapping.raw_merchant_name} -> {category_id}")
        return mapping

"""
Merchant alias learning.

Converts fuzzy matches and user corrections into exact mappings so the
next occurrence of the same merchant spelling resolves at tier 1.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ..config.engine_config import CATEGORIZATION_CONFIG
from ..models import MerchantMapping
from ..stores import DuplicateMappingError
from .preprocess import are_likely_same, extract_base_name, merchant_key

logger = logging.getLogger(__name__)


class MerchantAliasLearner:
    """Learns merchant aliases into a mapping store."""

    def __init__(self, store, config: Optional[dict] = None):
        self.store = store
        cfg = config or CATEGORIZATION_CONFIG["alias_learning"]
        self.alias_confidence = cfg["alias_confidence"]
        self.correction_confidence = cfg["correction_confidence"]
        self.match_confidence_step = cfg["match_confidence_step"]
        self.max_alias_suggestions = cfg["max_alias_suggestions"]

    def learn_from_fuzzy_match(self, variant_name: str, matched: MerchantMapping) -> Optional[MerchantMapping]:
        """
        Record a fuzzy-matched spelling as an exact alias of the matched mapping.

        Returns:
            The new alias mapping, or None when the variant is the base
            mapping itself or is already known
        """
        key = merchant_key(variant_name)
        if not key or key == matched.raw_merchant_name:
            return None
        if self.store.find_by_raw_name(key) is not None:
            return None

        alias = MerchantMapping(
            raw_merchant_name=key,
            normalized_name=matched.normalized_name,
            category_id=matched.category_id,
            subcategory_id=matched.subcategory_id,
            confidence=self.alias_confidence,
            match_count=0,
            is_fuzzy_match=True,
        )
        try:
            self.store.insert(alias)
        except DuplicateMappingError:
            # Another writer learned the same alias first
            return None
        logger.info(f"Learned alias {key} -> {matched.raw_merchant_name} (category {matched.category_id})")
        return alias

    def learn_from_user_correction(self, merchant_name: str, category_id: int,
                                   display_name: Optional[str] = None) -> MerchantMapping:
        """Update or create the mapping for a merchant the user re-categorised."""
        key = merchant_key(merchant_name)
        now = datetime.now()

        def apply_correction(existing: MerchantMapping) -> None:
            existing.category_id = category_id
            existing.confidence = self.correction_confidence
            existing.match_count += 1
            existing.last_used_at = now
            if display_name:
                existing.normalized_name = display_name

        corrected = self.store.update_with(key, apply_correction)
        if corrected is not None:
            logger.info(f"Corrected mapping {key} -> category {category_id}")
            return corrected

        mapping = MerchantMapping(
            raw_merchant_name=key,
            normalized_name=display_name or extract_base_name(merchant_name) or key,
            category_id=category_id,
            confidence=self.correction_confidence,
            match_count=1,
            created_at=now,
            last_used_at=now,
        )
        try:
            self.store.insert(mapping)
        except DuplicateMappingError:
            # Another writer created the mapping first
            corrected = self.store.update_with(key, apply_correction)
            logger.info(f"Corrected mapping {key} -> category {category_id}")
            return corrected
        logger.info(f"Created mapping from correction {key} -> category {category_id}")
        return mapping

    def record_match(self, mapping: MerchantMapping) -> MerchantMapping:
        """Bump usage statistics after an exact hit."""
        now = datetime.now()

        def bump(current: MerchantMapping) -> None:
            current.match_count += 1
            current.last_used_at = now
            current.confidence = min(1.0, current.confidence + self.match_confidence_step)

        updated = self.store.update_with(mapping.raw_merchant_name, bump)
        if updated is None:
            raise KeyError(mapping.raw_merchant_name)
        return updated

    def suggest_potential_aliases(self, merchant_name: str) -> List[MerchantMapping]:
        """Existing mappings whose base name contains (or is contained in) this one."""
        key = merchant_key(merchant_name)
        if not extract_base_name(merchant_name):
            return []
        suggestions = [
            m for m in self.store.find_all()
            if m.raw_merchant_name != key and are_likely_same(merchant_name, m.raw_merchant_name)
        ]
        suggestions.sort(key=lambda m: m.match_count, reverse=True)
        return suggestions[:self.max_alias_suggestions]

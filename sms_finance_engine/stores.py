"""
In-memory stores for merchant mappings and recurring rules.

The engines only rely on the small method surface defined here, so a host
application can swap these for database-backed implementations.
"""

import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, List, Optional

from .models import MerchantMapping, RecurringRule

logger = logging.getLogger(__name__)


class DuplicateMappingError(Exception):
    """Raised when inserting a mapping whose raw name is already stored."""


class InMemoryMerchantMappingStore:
    """Merchant mappings keyed by raw merchant name."""

    def __init__(self, mappings: Optional[List[MerchantMapping]] = None):
        self._lock = threading.Lock()
        self._mappings: Dict[str, MerchantMapping] = {}
        for mapping in mappings or []:
            self.insert(mapping)

    def find_by_raw_name(self, raw_name: str) -> Optional[MerchantMapping]:
        with self._lock:
            mapping = self._mappings.get(raw_name)
            return replace(mapping) if mapping else None

    def find_all(self) -> List[MerchantMapping]:
        with self._lock:
            return [replace(m) for m in self._mappings.values()]

    def insert(self, mapping: MerchantMapping) -> MerchantMapping:
        with self._lock:
            if mapping.raw_merchant_name in self._mappings:
                raise DuplicateMappingError(
                    f"Mapping already exists for '{mapping.raw_merchant_name}'"
                )
            self._mappings[mapping.raw_merchant_name] = replace(mapping)
        logger.debug(f"Inserted mapping {mapping.raw_merchant_name} -> {mapping.category_id}")
        return mapping

    def update(self, mapping: MerchantMapping) -> MerchantMapping:
        with self._lock:
            if mapping.raw_merchant_name not in self._mappings:
                raise KeyError(mapping.raw_merchant_name)
            self._mappings[mapping.raw_merchant_name] = replace(mapping)
        return mapping

    def update_with(self, raw_name: str,
                    apply: Callable[[MerchantMapping], None]) -> Optional[MerchantMapping]:
        """
        Read-modify-write a mapping under the store lock.

        Args:
            raw_name: Mapping key
            apply: Mutates the mapping in place; must not call back into the store

        Returns:
            Copy of the updated mapping, or None when no mapping exists
        """
        with self._lock:
            current = self._mappings.get(raw_name)
            if current is None:
                return None
            updated = replace(current)
            apply(updated)
            self._mappings[raw_name] = updated
            return replace(updated)

    def __len__(self) -> int:
        return len(self._mappings)


class InMemoryRecurringRuleStore:
    """Recurring rules with sequential ids."""

    def __init__(self):
        self._lock = threading.Lock()
        self._rules: Dict[int, RecurringRule] = {}
        self._next_id = 1

    def insert(self, rule: RecurringRule) -> RecurringRule:
        with self._lock:
            rule.id = self._next_id
            self._next_id += 1
            if not rule.created_at:
                rule.created_at = datetime.now()
            self._rules[rule.id] = rule
        return rule

    def find_by_merchant_pattern(self, merchant_pattern: str) -> Optional[RecurringRule]:
        with self._lock:
            for rule in self._rules.values():
                if rule.merchant_pattern == merchant_pattern:
                    return rule
        return None

    def find_active(self) -> List[RecurringRule]:
        with self._lock:
            return [r for r in self._rules.values() if r.is_active]

    def find_all(self) -> List[RecurringRule]:
        with self._lock:
            return list(self._rules.values())

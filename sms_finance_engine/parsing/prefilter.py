"""
Pre-filter for promotional, OTP and balance-only messages.
"""

import re
from typing import List, Optional

from ..patterns.ignore_phrases import (
    HARD_IGNORE_PATTERNS,
    SOFT_IGNORE_PATTERNS,
    TRANSACTION_VERBS,
)


def _compile(patterns: List[str]) -> List[re.Pattern]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


_HARD = _compile(HARD_IGNORE_PATTERNS)
_SOFT = _compile(SOFT_IGNORE_PATTERNS)
_VERBS = _compile(TRANSACTION_VERBS)


def has_transaction_verb(text: str) -> bool:
    return any(p.search(text) for p in _VERBS)


def ignore_reason(text: str) -> Optional[str]:
    """
    Return the phrase that makes a message non-transactional, or None.

    Hard phrases always reject. Soft phrases (balance notices, offers)
    reject only when the message carries no transaction verb.
    """
    if not text or not text.strip():
        return "empty"
    for pattern in _HARD:
        if pattern.search(text):
            return pattern.pattern
    if has_transaction_verb(text):
        return None
    for pattern in _SOFT:
        if pattern.search(text):
            return pattern.pattern
    return None


def is_non_transactional(text: str) -> bool:
    return ignore_reason(text) is not None

"""
Keyword Pattern Matching for Merchant Categorization (tier 2).

Provides reusable keyword matching over the merchant name and message text.
"""

import re
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from ..patterns.category_rules import KEYWORD_RULES

# Keywords this short only count as whole words ("vi" must not hit "via")
SHORT_KEYWORD_LENGTH = 3


@lru_cache(maxsize=None)
def _keyword_regex(keyword: str) -> re.Pattern:
    escaped = re.escape(keyword.lower())
    if len(keyword) <= SHORT_KEYWORD_LENGTH:
        return re.compile(r"\b" + escaped + r"\b")
    return re.compile(r"\b" + escaped)


def keyword_in_text(keyword: str, text: str) -> bool:
    return _keyword_regex(keyword).search(text) is not None


def match_keywords(text: str, keywords: List[str]) -> Optional[str]:
    """
    Return the first keyword found in text, or None.

    Keywords match at the start of a word; keywords of three characters
    or fewer must match a whole word.

    Example:
        >>> match_keywords("dominos pizza order", ["pizza", "kfc"])
        'pizza'
    """
    for keyword in keywords:
        if keyword_in_text(keyword, text):
            return keyword
    return None


def match_keyword_rules(
    merchant_name: str,
    raw_text: str = "",
    rules: Optional[List[Dict]] = None,
) -> Optional[Tuple[int, float, str]]:
    """
    Match a merchant against ordered keyword rules.

    Args:
        merchant_name: Normalized merchant name
        raw_text: Original message body
        rules: Keyword rule list (defaults to KEYWORD_RULES)

    Returns:
        Tuple of (category_id, confidence, matched_keyword) or None
    """
    text = f"{merchant_name or ''} {raw_text or ''}".lower()
    for rule in rules if rules is not None else KEYWORD_RULES:
        keyword = match_keywords(text, rule["keywords"])
        if keyword:
            return rule["category_id"], rule["confidence"], keyword
    return None


def keywords_for_category(category_id: int, rules: Optional[List[Dict]] = None) -> List[str]:
    for rule in rules if rules is not None else KEYWORD_RULES:
        if rule["category_id"] == category_id:
            return list(rule["keywords"])
    return []

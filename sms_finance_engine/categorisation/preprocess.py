"""
Preprocessing utilities for merchant categorisation.
Handles merchant name normalisation and base-name extraction.
"""

import re
from typing import Optional

# Bank prefixes that precede the real merchant in card/UPI narrations.
# Longer variants first so "AXIS BANK " is removed before "AXIS ".
MERCHANT_PREFIXES = [
    "HDFC BANK ", "AXIS BANK ", "KOTAK BANK ",
    "HDFC ", "SBI ", "ICICI ", "AXIS ", "KOTAK ",
]

MERCHANT_SUFFIXES = [
    " PRIVATE LIMITED", " PVT LTD", " LIMITED", " LTD",
    " INDIA", " INC", " CORP",
]

_VPA_HANDLE = re.compile(r"@[A-Z0-9]+")
_NON_LETTERS = re.compile(r"[^A-Z\s]")
_SPACES = re.compile(r"\s+")


def merchant_key(name: Optional[str]) -> str:
    """
    Lookup key for merchant mappings: upper-cased, whitespace collapsed.

    Every mapping write and read goes through this, so an alias learned
    from one spelling is found again at tier 1.
    """
    if not name:
        return ""
    return _SPACES.sub(" ", name.upper()).strip()


def normalize_merchant(name: Optional[str]) -> str:
    """
    Normalize a raw merchant for display grouping.

    Strips UPI handles, digits and punctuation.

    Example:
        >>> normalize_merchant("swiggy@ybl")
        'SWIGGY'
    """
    if not name:
        return ""
    text = _VPA_HANDLE.sub("", name.upper())
    text = _NON_LETTERS.sub("", text)
    return _SPACES.sub(" ", text).strip()


def extract_base_name(name: Optional[str]) -> str:
    """Remove bank prefixes and company suffixes from a normalized name."""
    result = normalize_merchant(name)
    for prefix in MERCHANT_PREFIXES:
        if result.startswith(prefix):
            result = result[len(prefix):]
            break
    for suffix in MERCHANT_SUFFIXES:
        if result.endswith(suffix):
            result = result[:-len(suffix)]
            break
    return result.strip()


def are_likely_same(first: Optional[str], second: Optional[str]) -> bool:
    """True when base names are equal or one contains the other."""
    a = extract_base_name(first)
    b = extract_base_name(second)
    if not a or not b:
        return False
    return a == b or a in b or b in a

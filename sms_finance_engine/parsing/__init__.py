"""
Parsing Module for the SMS finance engine.

Turns bank notification messages into structured records through:
- Pre-filtering (OTP, promotional and balance-only messages)
- Template extraction (ordered per-channel catalogs)
- Field parsing (amounts, dates, bank codes)
"""

from .engine import MessageParser
from .extractors import BillExtractor, TemplateExtractor, build_extractors
from .fields import (
    parse_amount,
    parse_date,
    parse_datetime,
    parse_due_date,
    detect_bank_name,
)
from .prefilter import is_non_transactional, ignore_reason

__all__ = [
    "MessageParser",
    "BillExtractor",
    "TemplateExtractor",
    "build_extractors",
    "parse_amount",
    "parse_date",
    "parse_datetime",
    "parse_due_date",
    "detect_bank_name",
    "is_non_transactional",
    "ignore_reason",
]

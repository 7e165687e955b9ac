"""
Bank message parser.

Turns a single notification text into a ParsedTransaction (or a ParsedBill)
by pre-filtering non-transactional messages and dispatching to the
template extractors in a fixed order.
"""

import logging
from datetime import date, datetime
from typing import List, Optional

from ..models import ParsedBill, ParsedTransaction
from ..patterns.category_rules import SUBSCRIPTION_MERCHANTS
from .extractors import BillExtractor, TemplateExtractor, build_extractors
from .prefilter import ignore_reason

logger = logging.getLogger(__name__)


class MessageParser:
    """Parses Indian bank notification messages."""

    def __init__(self, extractors: Optional[List[TemplateExtractor]] = None,
                 bill_extractor: Optional[BillExtractor] = None):
        self.extractors = extractors if extractors is not None else build_extractors()
        self.bill_extractor = bill_extractor or BillExtractor()

    def parse(self, text: str, received_at: Optional[datetime] = None) -> Optional[ParsedTransaction]:
        """
        Parse a message into a transaction.

        Args:
            text: Raw message body
            received_at: Message receipt time, used when the message has no
                readable date

        Returns:
            ParsedTransaction, or None when the message is not a transaction
            or no template matches
        """
        if not text:
            return None

        reason = ignore_reason(text)
        if reason:
            logger.debug(f"Ignored message ({reason})")
            return None

        for extractor in self.extractors:
            transaction = extractor.extract(text, received_at)
            if transaction is not None:
                logger.debug(f"Parsed {transaction.template_name}: {transaction.amount} {transaction.merchant_name}")
                return transaction

        logger.debug("No template matched message")
        return None

    def parse_bill(self, text: str, today: Optional[date] = None) -> Optional[ParsedBill]:
        """Parse a credit card statement message. Bills are not pre-filtered."""
        return self.bill_extractor.extract(text, today)

    def match_template(self, text: str) -> Optional[str]:
        """Name of the template that would handle this message."""
        if not text or ignore_reason(text):
            return None
        for extractor in self.extractors:
            hit = extractor.match(text)
            if hit is not None:
                return hit[0].name
        return None

    @staticmethod
    def is_known_subscription(merchant_name: str) -> bool:
        name = (merchant_name or "").lower().strip()
        if not name:
            return False
        prefix = name[:5]
        return any(sub in name or prefix in sub for sub in SUBSCRIPTION_MERCHANTS)

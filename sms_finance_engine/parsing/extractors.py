"""
Template-driven extractors.

Each extractor walks one ordered template catalog and turns the first
regex hit into a ParsedTransaction. The field mapping is data on the
template, so adding a bank layout means adding a catalog entry.
"""

import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from ..models import (
    MessageTemplate,
    ParsedBill,
    ParsedTransaction,
    PaymentChannel,
    TransactionType,
)
from ..patterns.message_templates import BILL_TEMPLATES, TEMPLATE_CATALOGS
from ..config.engine_config import PARSER_CONFIG
from .fields import detect_bank_name, parse_amount, parse_date, parse_datetime, parse_due_date

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = " ".join(value.split()).rstrip(".").strip()
    return cleaned or None


class TemplateExtractor:
    """Extracts transactions using one ordered template catalog."""

    def __init__(self, name: str, templates: List[MessageTemplate]):
        self.name = name
        self.templates = templates

    def match(self, text: str) -> Optional[Tuple[MessageTemplate, Dict[str, Optional[str]]]]:
        for template in self.templates:
            found = template.pattern.search(text)
            if found:
                groups = dict(template.defaults)
                groups.update({k: v for k, v in found.groupdict().items() if v is not None})
                return template, groups
        return None

    def extract(self, text: str, received_at: Optional[datetime] = None) -> Optional[ParsedTransaction]:
        hit = self.match(text)
        if hit is None:
            return None
        template, groups = hit
        return build_transaction(template, groups, text, received_at)


def build_transaction(template: MessageTemplate, groups: Dict[str, Optional[str]], text: str,
                      received_at: Optional[datetime] = None) -> ParsedTransaction:
    """Map captured groups onto a ParsedTransaction following the template's field mapping."""
    fallback = received_at or datetime.now()

    if template.merchant:
        values = {k: _clean(v) or "" for k, v in groups.items()}
        merchant_name = template.merchant.format_map(_MissingAsEmpty(values)).strip()
    else:
        merchant_name = _clean(groups.get("merchant")) or ""

    if groups.get("time"):
        transaction_date = parse_datetime(groups.get("date"), groups.get("time"), fallback)
    else:
        transaction_date = parse_date(groups.get("date"), fallback)

    transaction = ParsedTransaction(
        amount=parse_amount(groups.get("amount")),
        type=template.transaction_type,
        merchant_name=merchant_name,
        transaction_date=transaction_date,
        reference=groups.get("ref"),
        card_last_four=groups.get("card"),
        bank_name=template.bank or detect_bank_name(text),
        account_last_four=groups.get("account"),
        is_likely_subscription=template.is_subscription_hint,
        confidence=template.base_confidence,
        currency=template.currency,
        payment_channel=template.channel,
        is_mandate_revocation=template.is_mandate_revocation,
        template_name=template.name,
    )

    if template.transaction_type == TransactionType.CREDIT:
        transaction.sender_name = merchant_name
    if template.channel == PaymentChannel.FASTAG:
        transaction.toll_name = merchant_name
        transaction.vehicle_number = groups.get("vehicle")
    if template.resolve is not None:
        template.resolve(transaction, groups)
    return transaction


class _MissingAsEmpty(dict):
    def __missing__(self, key):
        return ""


class BillExtractor:
    """Credit card statement messages."""

    def __init__(self, templates: Optional[List[MessageTemplate]] = None):
        self.templates = templates if templates is not None else BILL_TEMPLATES

    def extract(self, text: str, today: Optional[date] = None) -> Optional[ParsedBill]:
        if not text:
            return None
        for template in self.templates:
            found = template.pattern.search(text)
            if not found:
                continue
            groups = found.groupdict()
            minimum = groups.get("minimum")
            return ParsedBill(
                card_last_four=groups.get("card") or "",
                bank_name=template.bank or detect_bank_name(text),
                total_due=parse_amount(groups.get("total")),
                minimum_due=parse_amount(minimum) if minimum else None,
                due_date=parse_due_date(groups.get("date"), today),
                template_name=template.name,
            )
        return None


def build_extractors() -> List[TemplateExtractor]:
    """Extractors in dispatch order."""
    return [TemplateExtractor(name, TEMPLATE_CATALOGS[name]) for name in PARSER_CONFIG["extractor_order"]]

"""
Pattern definitions for message parsing and merchant categorisation.
"""

from .message_templates import (
    TEMPLATE_CATALOGS,
    BILL_TEMPLATES,
    FASTAG_TEMPLATES,
    PREPAID_CARD_TEMPLATES,
    EMI_TEMPLATES,
    INSURANCE_TEMPLATES,
    INVESTMENT_TEMPLATES,
    BANK_CHARGE_TEMPLATES,
    UPI_TEMPLATES,
    CREDIT_CARD_TEMPLATES,
    BANK_TRANSFER_TEMPLATES,
)
from .ignore_phrases import HARD_IGNORE_PATTERNS, SOFT_IGNORE_PATTERNS, TRANSACTION_VERBS
from .category_rules import KEYWORD_RULES, SUBSCRIPTION_MERCHANTS, VARIABLE_BILL_PATTERNS

__all__ = [
    "TEMPLATE_CATALOGS",
    "BILL_TEMPLATES",
    "FASTAG_TEMPLATES",
    "PREPAID_CARD_TEMPLATES",
    "EMI_TEMPLATES",
    "INSURANCE_TEMPLATES",
    "INVESTMENT_TEMPLATES",
    "BANK_CHARGE_TEMPLATES",
    "UPI_TEMPLATES",
    "CREDIT_CARD_TEMPLATES",
    "BANK_TRANSFER_TEMPLATES",
    "HARD_IGNORE_PATTERNS",
    "SOFT_IGNORE_PATTERNS",
    "TRANSACTION_VERBS",
    "KEYWORD_RULES",
    "SUBSCRIPTION_MERCHANTS",
    "VARIABLE_BILL_PATTERNS",
]

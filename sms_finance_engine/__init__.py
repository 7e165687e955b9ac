"""
SMS Finance Engine - Bank Notification Parsing and Categorisation.

Turns Indian bank and payment-rail text messages into structured
transactions and credit card bills, categorises merchants, learns merchant
aliases and detects recurring payments.

Main Components:
    - patterns: Message templates, ignore phrases and category rules
    - config: Engine configuration and merchant mapping seed loader
    - parsing: Message parser and field helpers
    - categorisation: Five-tier merchant categorizer and alias learning
    - recurring: Recurring pattern detection and prediction
"""

from typing import Dict, List, Optional
from datetime import datetime

from .models import (
    TransactionType,
    PaymentChannel,
    RecurringFrequency,
    MatchType,
    ParsedTransaction,
    ParsedBill,
    CategorizationResult,
    MerchantMapping,
    MerchantMatchResult,
    Transaction,
    RecurringRule,
    PatternSuggestion,
)
from .stores import (
    DuplicateMappingError,
    InMemoryMerchantMappingStore,
    InMemoryRecurringRuleStore,
)

# Parsing
from .parsing.engine import MessageParser
from .parsing.fields import parse_date

# Categorisation
from .categorisation.engine import SmartCategorizer
from .categorisation.alias_learner import MerchantAliasLearner
from .categorisation.analytics import CategorizationCounters
from .categorisation.preprocess import normalize_merchant

# Recurring
from .recurring.pattern_detector import PatternDetector
from .recurring.prediction import RecurringPredictor

# Configuration
from .config.engine_config import (
    CATEGORY_NAMES,
    PARSER_CONFIG,
    CATEGORIZATION_CONFIG,
    PATTERN_DETECTION_CONFIG,
)
from .config.mapping_loader import load_merchant_mappings_csv, seed_mapping_store


__version__ = "1.0.0"
__all__ = [
    # Models
    "TransactionType",
    "PaymentChannel",
    "RecurringFrequency",
    "MatchType",
    "ParsedTransaction",
    "ParsedBill",
    "CategorizationResult",
    "MerchantMapping",
    "MerchantMatchResult",
    "Transaction",
    "RecurringRule",
    "PatternSuggestion",
    # Stores
    "DuplicateMappingError",
    "InMemoryMerchantMappingStore",
    "InMemoryRecurringRuleStore",
    # Engines
    "MessageParser",
    "SmartCategorizer",
    "MerchantAliasLearner",
    "CategorizationCounters",
    "PatternDetector",
    "RecurringPredictor",
    # Configuration
    "CATEGORY_NAMES",
    "PARSER_CONFIG",
    "CATEGORIZATION_CONFIG",
    "PATTERN_DETECTION_CONFIG",
    "load_merchant_mappings_csv",
    "seed_mapping_store",
    # Main function
    "process_messages",
]


def _received_at(value) -> Optional[datetime]:
    """Message receipt time from a datetime, an ISO string or a message-style date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return parse_date(text)


def process_messages(
    messages: List[Dict],
    mapping_store: Optional[InMemoryMerchantMappingStore] = None,
    rule_store: Optional[InMemoryRecurringRuleStore] = None,
    analytics: Optional[CategorizationCounters] = None,
    detect_recurring: bool = True,
    first_id: int = 1,
) -> Dict:
    """
    Main entry point for message processing.

    This function runs the complete pipeline:
    1. Extract credit card bills
    2. Parse the remaining messages into transactions
    3. Normalize and categorise each transaction's merchant
    4. Detect recurring payment patterns across the parsed debits

    Args:
        messages: List of message dictionaries with keys:
            - body: Message text
            - date: (Optional) Receipt time (datetime or string)
        mapping_store: Merchant mapping store (a fresh in-memory store if omitted)
        rule_store: Recurring rule store used to skip confirmed patterns
        analytics: Optional analytics sink
        detect_recurring: Run recurring pattern detection
        first_id: Id given to the first message; callers processing several
            message lists into one analytics sink pass a running offset

    Returns:
        Dictionary containing:
            - transactions: List of parsed and categorised transaction dicts
            - bills: List of ParsedBill objects
            - ignored: Number of messages that were not transactions or bills
            - patterns: List of PatternSuggestion objects

    Example:
        >>> result = process_messages([
        ...     {"body": "Paid Rs.350.00 to SWIGGY on 15-01-24 using UPI. UPI Ref: 123456. -HDFC Bank"}
        ... ])
        >>> result["transactions"][0]["merchant_name"]
        'SWIGGY'
    """
    parser = MessageParser()
    categorizer = SmartCategorizer(store=mapping_store, analytics=analytics)

    transactions = []
    history = []
    bills = []
    ignored = 0

    for idx, message in enumerate(messages, start=first_id):
        body = message.get("body") or ""
        received_at = _received_at(message.get("date"))

        # Step 1: Bills
        bill = parser.parse_bill(body)
        if bill is not None:
            bills.append(bill)
            continue

        # Step 2: Transactions
        parsed = parser.parse(body, received_at)
        if parsed is None:
            ignored += 1
            continue

        # Step 3: Categorise
        merchant = normalize_merchant(parsed.merchant_name) or parsed.merchant_name
        result = categorizer.categorize(merchant, parsed.amount, parsed.transaction_date, body)
        categorizer.track_categorization(idx, merchant, result)

        transactions.append({
            "id": idx,
            "date": parsed.transaction_date,
            "amount": parsed.amount,
            "type": parsed.type.value,
            "merchant_name": parsed.merchant_name,
            "merchant_normalized": merchant,
            "display_name": result.suggested_name or parsed.merchant_name,
            "bank_name": parsed.bank_name,
            "payment_channel": parsed.payment_channel.value,
            "reference": parsed.reference,
            "is_likely_subscription": parsed.is_likely_subscription,
            "template": parsed.template_name,
            "parse_confidence": parsed.confidence,
            "category_id": result.category_id,
            "category": categorizer.category_name(result.category_id),
            "category_confidence": result.confidence,
            "tier": result.tier,
            "method": result.method,
            "needs_review": result.needs_review,
        })
        history.append(Transaction(
            id=idx,
            amount=parsed.amount,
            type=parsed.type,
            merchant_name=parsed.merchant_name,
            transaction_date=parsed.transaction_date,
            merchant_normalized=merchant,
            category_id=result.category_id,
        ))

    # Step 4: Recurring patterns
    patterns = PatternDetector(rule_store=rule_store).detect_patterns(history) if detect_recurring else []

    return {
        "transactions": transactions,
        "bills": bills,
        "ignored": ignored,
        "patterns": patterns,
    }

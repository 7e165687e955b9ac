"""
Shared data model for the SMS finance engine.

Parsed messages, categorisation results, merchant mappings and recurring
payment rules all live here so the parsing, categorisation and recurring
engines can pass them between each other without circular imports.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Callable, Dict, Optional, Pattern


class TransactionType(str, Enum):
    """Direction of money movement."""
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class PaymentChannel(str, Enum):
    """Payment rail a message was sent for."""
    UPI = "UPI"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    PREPAID_CARD = "PREPAID_CARD"
    FASTAG = "FASTAG"
    AUTOPAY = "AUTOPAY"
    STANDING_INSTRUCTION = "STANDING_INSTRUCTION"
    NEFT = "NEFT"
    IMPS = "IMPS"
    INSURANCE = "INSURANCE"
    BANK_CHARGE = "BANK_CHARGE"
    INVESTMENT = "INVESTMENT"
    EMI = "EMI"
    UNKNOWN = "UNKNOWN"


class RecurringFrequency(str, Enum):
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class MatchType(str, Enum):
    EXACT = "EXACT"
    FUZZY = "FUZZY"
    NONE = "NONE"


@dataclass
class ParsedTransaction:
    """A transaction extracted from a single bank message."""
    amount: float
    type: TransactionType
    merchant_name: str
    transaction_date: datetime
    reference: Optional[str] = None
    card_last_four: Optional[str] = None
    bank_name: Optional[str] = None
    account_last_four: Optional[str] = None
    is_likely_subscription: bool = False
    confidence: float = 0.0
    currency: str = "INR"
    payment_channel: PaymentChannel = PaymentChannel.UNKNOWN
    sender_name: Optional[str] = None  # Credits only
    toll_name: Optional[str] = None  # FASTag only
    vehicle_number: Optional[str] = None  # FASTag only
    is_mandate_revocation: bool = False
    template_name: str = ""

    @property
    def is_reliable(self) -> bool:
        """A zero or negative amount means the extraction should not be trusted."""
        return self.amount > 0


@dataclass
class ParsedBill:
    """Credit card statement summary."""
    card_last_four: str
    total_due: float
    due_date: date
    bank_name: Optional[str] = None
    minimum_due: Optional[float] = None
    template_name: str = ""


@dataclass
class MessageTemplate:
    """
    One entry of a message template catalog.

    `pattern` uses named groups (amount, merchant, date, time, card, account,
    ref, vehicle, loan_type, rail, sender). `merchant` is either a static name
    or a str.format template over the captured groups; `defaults` fills
    optional groups that did not participate in the match.
    """
    name: str
    pattern: Pattern
    sample: str
    base_confidence: float = 0.95
    is_subscription_hint: bool = False
    bank: Optional[str] = None
    channel: PaymentChannel = PaymentChannel.UNKNOWN
    transaction_type: TransactionType = TransactionType.DEBIT
    merchant: Optional[str] = None
    currency: str = "INR"
    defaults: Dict[str, str] = field(default_factory=dict)
    is_mandate_revocation: bool = False
    resolve: Optional[Callable] = None


@dataclass
class CategorizationResult:
    """Outcome of the five-tier categorisation chain."""
    category_id: int
    confidence: float
    tier: int  # 1 exact, 2 keyword, 3 fuzzy, 4 context, 5 default
    method: str
    suggested_name: Optional[str] = None

    @property
    def needs_review(self) -> bool:
        return self.tier >= 4


@dataclass
class MerchantMapping:
    """Learned association between a raw merchant string and a category."""
    raw_merchant_name: str
    normalized_name: str
    category_id: int
    subcategory_id: Optional[int] = None
    confidence: float = 0.5
    match_count: int = 1
    is_fuzzy_match: bool = False
    created_at: datetime = field(default_factory=datetime.now)
    last_used_at: datetime = field(default_factory=datetime.now)


@dataclass
class MerchantMatchResult:
    match_type: MatchType
    mapping: Optional[MerchantMapping] = None
    confidence: float = 0.0
    requires_confirmation: bool = False


@dataclass
class Transaction:
    """Stored transaction used as history for recurring pattern detection."""
    id: int
    amount: float
    type: TransactionType
    merchant_name: str
    transaction_date: datetime
    merchant_normalized: Optional[str] = None
    category_id: Optional[int] = None


@dataclass
class RecurringRule:
    """A recurring payment the user has confirmed (or that was auto-confirmed)."""
    merchant_pattern: str
    category_id: int
    expected_amount: float
    frequency: RecurringFrequency
    id: Optional[int] = None
    amount_variance: float = 0.1
    day_of_period: Optional[int] = None
    last_occurrence: Optional[date] = None
    next_expected: Optional[date] = None
    occurrence_count: int = 0
    is_active: bool = True
    is_user_confirmed: bool = False
    created_at: datetime = field(default_factory=datetime.now)


def ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


_WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


@dataclass
class PatternSuggestion:
    """A detected recurring payment awaiting user confirmation."""
    merchant_pattern: str
    display_name: str
    average_amount: float
    detected_frequency: RecurringFrequency
    typical_day_of_period: int
    occurrence_count: int
    confidence: float
    next_expected: date
    category_id: Optional[int] = None
    last_occurrence: Optional[date] = None
    amount_variance: float = 0.1

    @property
    def is_high_confidence(self) -> bool:
        return self.confidence >= 0.8

    @property
    def description(self) -> str:
        """Human readable summary, e.g. 'Usually paid around the 15th (3 times)'."""
        if self.detected_frequency == RecurringFrequency.WEEKLY:
            weekday = _WEEKDAY_NAMES[(self.typical_day_of_period - 1) % 7]
            return f"Usually paid every {weekday} ({self.occurrence_count} times)"
        day = self.typical_day_of_period
        return f"Usually paid around the {day}{ordinal_suffix(day)} ({self.occurrence_count} times)"

    def to_recurring_rule(self) -> RecurringRule:
        return RecurringRule(
            merchant_pattern=self.merchant_pattern,
            category_id=self.category_id or 0,
            expected_amount=self.average_amount,
            amount_variance=self.amount_variance,
            frequency=self.detected_frequency,
            day_of_period=self.typical_day_of_period,
            last_occurrence=self.last_occurrence,
            next_expected=self.next_expected,
            occurrence_count=self.occurrence_count,
            is_active=True,
            is_user_confirmed=True,
        )

"""
Field parsing helpers shared by every extractor.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from ..config.engine_config import PARSER_CONFIG

_CURRENCY_TOKENS = re.compile(r"rs\.?|inr|₹|,", re.IGNORECASE)


def parse_amount(raw: Optional[str]) -> float:
    """
    Parse an Indian-format amount string.

    Examples:
        >>> parse_amount("Rs.1,25,000.00")
        125000.0
        >>> parse_amount("garbage")
        0.0
    """
    if not raw:
        return 0.0
    cleaned = _CURRENCY_TOKENS.sub("", raw).strip()
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def parse_date(raw: Optional[str], fallback: Optional[datetime] = None) -> datetime:
    """
    Parse a message date using the configured layouts in order.

    Args:
        raw: Date text captured from the message
        fallback: Returned when no layout matches (defaults to now)

    Returns:
        Parsed datetime, or the fallback
    """
    if raw:
        text = raw.strip()
        for fmt in PARSER_CONFIG["date_formats"]:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
    return fallback if fallback is not None else datetime.now()


def parse_datetime(date_text: Optional[str], time_text: Optional[str],
                   fallback: Optional[datetime] = None) -> datetime:
    """Parse a date plus HH:MM:SS time, falling back to the date alone."""
    if date_text and time_text:
        try:
            return datetime.strptime(f"{date_text.strip()} {time_text.strip()}", PARSER_CONFIG["datetime_format"])
        except ValueError:
            pass
    return parse_date(date_text, fallback)


def parse_due_date(raw: Optional[str], today: Optional[date] = None) -> date:
    """Bill due dates; unreadable dates default to today plus the configured grace."""
    if raw:
        for fmt in PARSER_CONFIG["bill_date_formats"]:
            try:
                return datetime.strptime(raw.strip(), fmt).date()
            except ValueError:
                continue
    base = today or date.today()
    return base + timedelta(days=PARSER_CONFIG["bill_default_due_days"])


def detect_bank_name(text: str) -> str:
    upper = (text or "").upper()
    for code in PARSER_CONFIG["bank_codes"]:
        if code in upper:
            return code
    return PARSER_CONFIG["unknown_bank"]

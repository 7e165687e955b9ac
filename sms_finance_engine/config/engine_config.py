"""
Engine configuration for SMS transaction processing.
Contains confidences, thresholds and windows used by the parsing,
categorisation and recurring detection engines.
"""

# Category identifiers shared with the host application
CATEGORY_NAMES = {
    1: "Food",
    2: "Transport",
    3: "Shopping",
    4: "Health",
    5: "Entertainment",
    6: "Bills",
    7: "Education",
    8: "Travel",
    9: "Groceries",
    10: "Personal",
    11: "Salary",
    13: "Insurance",
    14: "Investments",
    15: "Other",
}

OTHER_CATEGORY_ID = 15


PARSER_CONFIG = {
    # Date layouts tried in order; first successful parse wins
    "date_formats": [
        "%d-%m-%y",
        "%d-%m-%Y",
        "%d/%m/%Y",
        "%d/%m/%y",
        "%d-%b-%y",
        "%d-%b-%Y",
        "%Y-%m-%d",
    ],
    "datetime_format": "%d-%m-%Y %H:%M:%S",
    "bill_date_formats": ["%d-%b-%y", "%d-%b-%Y", "%d-%m-%y", "%d-%m-%Y"],
    # Due date used when a bill message has an unreadable date
    "bill_default_due_days": 30,
    # Checked in order against the upper-cased message
    "bank_codes": ["ICICI", "HDFC", "SBI", "AXIS", "KOTAK", "BOB"],
    "unknown_bank": "Unknown",
    # Extractor dispatch order
    "extractor_order": [
        "fastag",
        "prepaid_card",
        "emi",
        "insurance",
        "investment",
        "bank_charge",
        "upi",
        "credit_card",
        "bank_transfer",
    ],
}


CATEGORIZATION_CONFIG = {
    "confidence": {
        "exact": 0.98,
        "fuzzy_multiplier": 0.9,
        "default": 0.50,
        "min": 0.50,
        "max": 0.98,
    },
    "matcher": {
        "exact_threshold": 0.95,
        "fuzzy_threshold": 0.7,
        "auto_apply_threshold": 0.95,
        "confirmed_fuzzy_confidence": 0.8,
        "manual_confidence": 1.0,
    },
    "alias_learning": {
        "alias_confidence": 0.95,
        "correction_confidence": 1.0,
        "match_confidence_step": 0.01,
        "max_alias_suggestions": 5,
    },
    "default_category_id": OTHER_CATEGORY_ID,
    # Results at or above this tier need review
    "review_tier": 4,
}


# Contextual (tier 4) inference rules
CONTEXT_INFERENCE_CONFIG = {
    "subscription": {
        "price_points": [99, 149, 199, 299, 399, 499, 599, 699, 799, 999, 1499, 1999],
        "tolerance": 1.0,
        "keywords": ["subscription", "renewed", "premium", "plan activated", "monthly"],
        "category_id": 5,
        "confidence": 0.72,
    },
    "food": {
        "hours": [(11, 14), (18, 22)],
        "amount_range": (150, 2000),
        "category_id": 1,
        "confidence": 0.68,
    },
    "transport": {
        "hours": [(6, 10), (17, 23)],
        "amount_range": (50, 1000),
        "category_id": 2,
        "confidence": 0.65,
    },
    "bill": {
        "round_min": 500,
        "round_step": 100,
        "keyword_min": 1000,
        "keywords": ["bill", "payment", "due", "paid"],
        "category_id": 6,
        "confidence": 0.70,
    },
    "shopping": {
        "min_amount": 1000,
        "keywords": ["purchase", "order", "delivery"],
        "category_id": 3,
        "confidence": 0.63,
    },
    "grocery": {
        "hours": [(8, 12), (16, 20)],
        "amount_range": (500, 5000),
        "category_id": 9,
        "confidence": 0.62,
    },
}


PATTERN_DETECTION_CONFIG = {
    "min_occurrences": 2,
    "max_amount_variance": 0.05,
    "variable_bill_max_variance": 0.5,
    "min_confidence": 0.55,
    "merchant_match_threshold": 0.8,
    "intervals": {
        "WEEKLY": (6, 8),
        "MONTHLY": (25, 34),
        "YEARLY": (350, 380),
    },
    "expected_interval_days": {
        "WEEKLY": 7,
        "MONTHLY": 30,
        "YEARLY": 365,
    },
    # Auto-confirmation is opt-in on the detector
    "auto_confirm_confidence": 0.90,
    "auto_confirm_min_occurrences": 4,
    "auto_confirm_min_occurrences_subscription": 2,
}


PREDICTION_CONFIG = {
    "analysis_months": 6,
    "new_subscription_window_months": 2,
    "dormant_missed_payments": 2,
    "grace_days": 5,
    "confirmed_rule_confidence": 0.95,
    "new_subscription_default_confidence": 0.6,
}

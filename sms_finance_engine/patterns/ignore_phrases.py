"""
Pre-filter phrase lists for bank notification messages.
Messages matching these are dropped before any template is tried.
"""

# Always rejected, even when a transaction verb is present
HARD_IGNORE_PATTERNS = [
    r"\botp\b",
    r"one time password",
    r"verification code",
    r"% off",
    r"fixed deposit",
    r"fd matures",
    r"reminder:",
    r"payment is due",
    r"declined",
    r"failed",
    r"unsuccessful",
    r"thank you for shopping",
    r"visit again",
]

# Rejected only when the message has no transaction verb
SOFT_IGNORE_PATTERNS = [
    r"available balance",
    r"avl bal",
    r"account balance",
    r"balance is rs",
    r"cashback",
    r"offer",
    r"discount",
]

TRANSACTION_VERBS = [
    r"\bdebited\b",
    r"\bspent\b",
    r"\bcredited\b",
    r"\bpaid at\b",
    r"\btransferred\b",
    r"\bsent\b",
    r"\bpaid\b",
    r"\bcharged\b",
    r"\bdeducted\b",
    r"\bused for\b",
]

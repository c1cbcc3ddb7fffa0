"""
Keyword and regex tables for transaction alert extraction.
Patterns for Indian bank SMS / notification text (INR by default).

Every table is an ordered tuple. Order matters: the consumers walk each table
front to back and the first acceptable match wins.
"""

# Direction keywords (Debits - money out)
# (keyword, weight) pairs, matched as lower-case substrings
DEBIT_KEYWORDS = (
    ("debited", 2),
    ("debit", 2),
    ("dr", 2),
    ("spent", 2),
    ("paid", 2),
    ("withdrawn", 2),
    ("purchase", 2),
    ("sent", 2),
    ("transfer to", 2),
    ("upi/pay", 2),
    ("imps", 2),
    ("neft", 2),
    ("rtgs", 2),
    ("bill", 2),
    ("charged", 2),
    ("fee", 2),
)

# Direction keywords (Credits - money in)
CREDIT_KEYWORDS = (
    ("credited", 2),
    ("credit", 2),
    ("cr", 2),
    ("received", 2),
    ("refund", 2),
    ("reversal", 2),
    ("cashback", 2),
    ("salary", 2),
    ("interest", 2),
    ("cash deposit", 2),
    ("deposit", 2),
    ("received from", 2),
    ("transfer from", 2),
)

# Short-form markers, only counted on a word boundary ("Rs 500 Dr")
SHORT_FORM_PATTERNS = {
    "debit": r"\bdr\b",
    "credit": r"\bcr\b",
}

# Refund language outweighs any "debited" mention of the original transaction
REFUND_KEYWORDS = ("refund", "reversal")

# Failed / declined transactions: still classified, at lower confidence
FAILURE_KEYWORDS = ("failed", "declined", "rejected", "unsuccessful", "reversed")

# Context hints that mark a nearby number as an identifier, not money
NOISE_HINTS = (
    "otp",
    "ref",
    "rrn",
    "txn",
    "txnid",
    "transaction id",
    "utr",
    "upi ref",
    "id:",
    "a/c",
    "ac:",
    "card",
    "ending",
    "mob",
    "mobile",
    "ph",
    "phone",
    "cust",
    "customer",
)

# Rupee markers (normalized to INR)
RUPEE_MARKERS = ("₹", "rs", "inr")

_NUMBER = r"([\d,]+(?:\.\d{1,2})?)"
_CURRENCY_BEFORE = r"(₹|\binr|\brs\.?)"
_CURRENCY_AFTER = r"(₹|inr\b|rs\b\.?)"

# Amount templates in priority order.
# Keyword-anchored forms come first so that a balance figure is never
# preferred over an explicit "Amount:" figure.
AMOUNT_PATTERNS = (
    {
        # "Amount: INR 499" / "Amt Rs. 499"
        "name": "keyword_currency_amount",
        "regex": r"(?i)\b(?:amount|amt)\s*[:\-]?\s*" + _CURRENCY_BEFORE + r"\s*" + _NUMBER,
        "currency_group": 1,
        "amount_group": 2,
    },
    {
        # "Amount: 499 INR"
        "name": "keyword_amount_currency",
        "regex": r"(?i)\b(?:amount|amt)\s*[:\-]?\s*" + _NUMBER + r"\s*" + _CURRENCY_AFTER,
        "currency_group": 2,
        "amount_group": 1,
    },
    {
        # "INR 499" / "Rs. 499/-" / "₹ 499"
        "name": "currency_amount",
        "regex": r"(?i)" + _CURRENCY_BEFORE + r"\s*" + _NUMBER + r"\b(?:/-)?",
        "currency_group": 1,
        "amount_group": 2,
    },
    {
        # "499 INR"
        "name": "amount_currency",
        "regex": r"(?i)\b" + _NUMBER + r"\s*" + _CURRENCY_AFTER,
        "currency_group": 2,
        "amount_group": 1,
    },
)

# Balance patterns, independent of the amount templates
BALANCE_PATTERNS = (
    r"(?i)\b(available\s*balance|avl\s*bal|avl\.?\s*bal|balance|bal|a/c\s*bal|ac\s*bal|closing\s*balance)"
    r"\s*[:\-]?\s*(?:inr|rs\.?|₹)?\s*([\d,]+(?:\.\d{1,2})?)",
    r"(?i)\b(available\s*balance|avl\s*bal|balance)\s*(?:is)?\s*(?:inr|rs\.?|₹)\s*([\d,]+(?:\.\d{1,2})?)",
)

# Reference / transaction id patterns (capture group 1 is the id)
REFERENCE_PATTERNS = (
    r"(?i)\b(?:(?:utr|rrn)(?:\s*no)?|ref(?:erence)?\s*no|txn(?:\s*id)?|transaction\s*id)\.?\s*[:\-]?\s*([a-z0-9\-]{6,})\b",
    r"(?i)\b(?:upi\s*ref)\s*(?:no\.?)?\s*[:\-]?\s*([a-z0-9]{6,})\b",
)

# Date patterns, tried in order
ISO_DATE_PATTERN = r"\b(\d{4})[-/](\d{1,2})[-/](\d{1,2})\b"
DAY_FIRST_DATE_PATTERN = r"\b(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})\b"
MONTH_NAME_DATE_PATTERN = r"(?i)\b(\d{1,2})\s+([a-z]{3,9})\.?\s+(\d{4})\b"

# Month names (full and abbreviated) to month number
MONTH_INDEX = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

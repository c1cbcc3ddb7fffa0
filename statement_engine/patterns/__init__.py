"""
Transaction Alert Pattern Definitions.

Contains the keyword and regex tables used to read bank alert text:
- Direction keywords (debit / credit, refund bias, failure damping)
- Noise hints (OTP, reference numbers, masked account digits, phone numbers)
- Amount, balance and reference id templates
- Date patterns and the month name table
"""

from .alert_patterns import (
    DEBIT_KEYWORDS,
    CREDIT_KEYWORDS,
    SHORT_FORM_PATTERNS,
    REFUND_KEYWORDS,
    FAILURE_KEYWORDS,
    NOISE_HINTS,
    RUPEE_MARKERS,
    AMOUNT_PATTERNS,
    BALANCE_PATTERNS,
    REFERENCE_PATTERNS,
    ISO_DATE_PATTERN,
    DAY_FIRST_DATE_PATTERN,
    MONTH_NAME_DATE_PATTERN,
    MONTH_INDEX,
)

__all__ = [
    "DEBIT_KEYWORDS",
    "CREDIT_KEYWORDS",
    "SHORT_FORM_PATTERNS",
    "REFUND_KEYWORDS",
    "FAILURE_KEYWORDS",
    "NOISE_HINTS",
    "RUPEE_MARKERS",
    "AMOUNT_PATTERNS",
    "BALANCE_PATTERNS",
    "REFERENCE_PATTERNS",
    "ISO_DATE_PATTERN",
    "DAY_FIRST_DATE_PATTERN",
    "MONTH_NAME_DATE_PATTERN",
    "MONTH_INDEX",
]

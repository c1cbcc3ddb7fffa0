"""
Preprocessing utilities for alert extraction.
Handles whitespace normalization and money string parsing.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional


_WHITESPACE_RE = re.compile(r"\s+")
_NON_NUMERIC_RE = re.compile(r"[^\d.]")


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize alert text for matching.

    Args:
        text: Raw alert text

    Returns:
        Text with whitespace runs collapsed to single spaces and trimmed
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def is_blank(text: Optional[str]) -> bool:
    """Check whether text is missing or whitespace only."""
    return not text or not text.strip()


def parse_money(raw: Optional[str]) -> Optional[Decimal]:
    """
    Parse a money-looking string into a Decimal.

    Handles "1,234.50", "1234", "1,234" and "1234.5". Every character that is
    not a digit or a decimal point is dropped first.

    Args:
        raw: Matched amount text

    Returns:
        Decimal value, or None when the string is empty, has more than one
        decimal point (e.g. "1.2.3") or does not parse to a finite number

    Example:
        >>> parse_money("1,234.50")
        Decimal('1234.50')
    """
    if not raw:
        return None

    cleaned = _NON_NUMERIC_RE.sub("", raw)
    if not cleaned:
        return None

    # "1.2.3" is two numbers run together, not an amount
    if cleaned.count(".") > 1:
        return None

    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None

    if not value.is_finite():
        return None
    return value

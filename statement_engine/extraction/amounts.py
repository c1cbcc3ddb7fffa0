"""
Amount and balance extraction for transaction alerts.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..config.extraction_config import EXTRACTION_CONFIG
from ..patterns.alert_patterns import AMOUNT_PATTERNS, BALANCE_PATTERNS, RUPEE_MARKERS
from .pattern_matching import compile_patterns, contains_any, is_noise_context
from .preprocess import parse_money


logger = logging.getLogger(__name__)


@dataclass
class AmountMatch:
    """Result of amount extraction."""
    amount: Optional[Decimal]
    currency: str
    template: Optional[str] = None  # Name of the template that matched


def normalize_currency(raw_currency: Optional[str], default_currency: str) -> str:
    """
    Map a matched currency token to a currency code.

    Args:
        raw_currency: Matched symbol or token ("₹", "Rs.", "INR"), may be None
        default_currency: Code to use for anything that is not a rupee marker

    Returns:
        "INR" for rupee markers, otherwise default_currency
    """
    if raw_currency and contains_any(raw_currency.lower(), RUPEE_MARKERS):
        return "INR"
    return default_currency


class AmountExtractor:
    """
    Locates the transaction amount using prioritized templates.

    Only the first positional match of each template is considered. If that
    match sits in a noise window the template is abandoned and the next one
    is tried; the text is not rescanned for a later occurrence.
    """

    def __init__(self, noise_window: Optional[int] = None):
        self.templates = [
            dict(template, compiled=re.compile(template["regex"]))
            for template in AMOUNT_PATTERNS
        ]
        self.noise_window = noise_window or EXTRACTION_CONFIG["noise_window"]

    def extract(self, normalized_text: str, default_currency: Optional[str] = None) -> AmountMatch:
        """
        Extract amount and currency from normalized alert text.

        Args:
            normalized_text: Whitespace-normalized alert text
            default_currency: Currency for non-rupee matches and for no match

        Returns:
            AmountMatch; amount is None when no template yields a number
        """
        default_currency = default_currency or EXTRACTION_CONFIG["default_currency"]

        for template in self.templates:
            match = template["compiled"].search(normalized_text)
            if not match:
                continue

            raw_amount = match.group(template["amount_group"])
            if raw_amount is None:
                continue

            if is_noise_context(normalized_text, match.start(), self.noise_window):
                logger.debug(
                    "Skipping %s match %r: identifier context",
                    template["name"], match.group(0)
                )
                continue

            amount = parse_money(raw_amount)
            if amount is None:
                continue

            raw_currency = match.group(template["currency_group"])
            return AmountMatch(
                amount=amount,
                currency=normalize_currency(raw_currency, default_currency),
                template=template["name"],
            )

        return AmountMatch(amount=None, currency=default_currency)


class BalanceExtractor:
    """Locates an optional running / available balance."""

    def __init__(self):
        self.patterns = compile_patterns(BALANCE_PATTERNS)

    def extract(self, normalized_text: str) -> Optional[Decimal]:
        """
        Extract the balance figure from normalized alert text.

        Returns:
            First balance match that parses, or None
        """
        for pattern in self.patterns:
            match = pattern.search(normalized_text)
            if match and match.group(2):
                value = parse_money(match.group(2))
                if value is not None:
                    return value
        return None

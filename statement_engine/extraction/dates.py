"""
Date parsing for transaction alerts.

Supported formats, tried in order:
1) yyyy-mm-dd or yyyy/mm/dd
2) dd-mm-yyyy, dd/mm/yyyy, dd-mm-yy (day first, as Indian banks write them)
3) dd Mon yyyy (18 Jan 2026 / 18 January 2026)
"""

import logging
import re
from datetime import datetime
from typing import Optional

from rapidfuzz import fuzz, process

from ..config.extraction_config import EXTRACTION_CONFIG
from ..patterns.alert_patterns import (
    ISO_DATE_PATTERN,
    DAY_FIRST_DATE_PATTERN,
    MONTH_NAME_DATE_PATTERN,
    MONTH_INDEX,
)


logger = logging.getLogger(__name__)


def expand_year(year: int) -> int:
    """
    Expand a two-digit year.

    Always maps into the 2000s: 24 -> 2024, 99 -> 2099.
    """
    return 2000 + year if year < 100 else year


def build_date(year: int, month: int, day: int) -> Optional[datetime]:
    """Build a midnight datetime, or None if the date is not on the calendar."""
    try:
        return datetime(year, month, day)
    except ValueError:
        return None


class DateParser:
    """Finds the transaction date in alert text."""

    def __init__(self, fuzzy_threshold: Optional[int] = None):
        self.iso_re = re.compile(ISO_DATE_PATTERN)
        self.day_first_re = re.compile(DAY_FIRST_DATE_PATTERN)
        self.month_name_re = re.compile(MONTH_NAME_DATE_PATTERN)
        self.fuzzy_threshold = fuzzy_threshold or EXTRACTION_CONFIG["month_fuzzy_threshold"]
        self.month_names = list(MONTH_INDEX)

    def parse(self, text: str) -> Optional[datetime]:
        """
        Parse the first recognizable date in text.

        Args:
            text: Normalized alert text

        Returns:
            Naive datetime at midnight, or None if no pattern gives a valid date
        """
        match = self.iso_re.search(text)
        if match:
            parsed = build_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
            if parsed:
                return parsed

        match = self.day_first_re.search(text)
        if match:
            year = expand_year(int(match.group(3)))
            parsed = build_date(year, int(match.group(2)), int(match.group(1)))
            if parsed:
                return parsed

        for match in self.month_name_re.finditer(text):
            month = self.resolve_month(match.group(2))
            if month is None:
                continue
            parsed = build_date(int(match.group(3)), month, int(match.group(1)))
            if parsed:
                return parsed

        return None

    def resolve_month(self, token: str) -> Optional[int]:
        """
        Map a month name to its number.

        Exact (case-insensitive) lookup first, then a rapidfuzz ratio lookup
        for misspellings such as "Septmber".

        Args:
            token: Month word from the text

        Returns:
            Month number 1-12, or None
        """
        lowered = token.lower()
        if lowered in MONTH_INDEX:
            return MONTH_INDEX[lowered]

        best = process.extractOne(
            lowered,
            self.month_names,
            scorer=fuzz.ratio,
            score_cutoff=self.fuzzy_threshold,
        )
        if best is None:
            return None

        logger.debug("Resolved month %r as %r (score %.1f)", token, best[0], best[1])
        return MONTH_INDEX[best[0]]

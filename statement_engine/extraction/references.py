"""
Reference id extraction (UTR, RRN, reference number, transaction id, UPI ref).
"""

from typing import Optional

from ..patterns.alert_patterns import REFERENCE_PATTERNS
from .pattern_matching import compile_patterns, first_regex_match


class ReferenceExtractor:
    """Captures a keyword-anchored transaction reference id."""

    def __init__(self):
        self.patterns = compile_patterns(REFERENCE_PATTERNS)

    def extract(self, text: str) -> Optional[str]:
        """Return the first reference id found in text, or None."""
        match = first_regex_match(text, self.patterns)
        if match and match.group(1):
            return match.group(1)
        return None

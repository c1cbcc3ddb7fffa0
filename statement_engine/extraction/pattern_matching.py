"""
Generic Pattern Matching for Alert Extraction.

Provides the reusable keyword and regex loops the extractors are built on,
plus the noise-context check that keeps identifiers out of amount matching.
"""

import re
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config.extraction_config import EXTRACTION_CONFIG
from ..patterns.alert_patterns import NOISE_HINTS


def compile_patterns(patterns: Iterable[str]) -> Tuple[re.Pattern, ...]:
    """Compile a table of regex strings, preserving order."""
    return tuple(re.compile(pattern) for pattern in patterns)


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """
    Check if text contains any of the keywords.

    Args:
        text: Lower-case text
        keywords: Lower-case keywords

    Returns:
        True if at least one keyword is a substring of text
    """
    for keyword in keywords:
        if keyword in text:
            return True
    return False


def score_keywords(
    text: str,
    keywords: Sequence[Tuple[str, float]]
) -> Tuple[float, List[str]]:
    """
    Sum the weights of every keyword found in text.

    Each keyword counts once, however often it appears.

    Args:
        text: Lower-case text
        keywords: Table of (keyword, weight) pairs

    Returns:
        Tuple of (score, matched_keywords)

    Example:
        >>> score_keywords("rs 500 debited", (("debited", 2), ("debit", 2), ("paid", 2)))
        (4, ['debited', 'debit'])
    """
    score = 0
    matched = []
    for keyword, weight in keywords:
        if keyword in text:
            score += weight
            matched.append(keyword)
    return score, matched


def is_noise_context(
    text: str,
    match_index: int,
    window: Optional[int] = None,
    hints: Sequence[str] = NOISE_HINTS
) -> bool:
    """
    Check whether a numeric match sits next to identifier wording.

    Looks at a window of characters on each side of the match (clamped to the
    text) for OTP, reference number, masked account / card and phone hints.

    Args:
        text: Text the match was found in
        match_index: Start index of the match
        window: Characters to scan on each side (defaults to config)
        hints: Lower-case noise hints

    Returns:
        True if the match is likely an identifier rather than money
    """
    if window is None:
        window = EXTRACTION_CONFIG["noise_window"]

    start = max(0, match_index - window)
    end = min(len(text), match_index + window)
    context = text[start:end].lower()

    return contains_any(context, hints)


def first_regex_match(text: str, patterns: Iterable[re.Pattern]) -> Optional[re.Match]:
    """
    Return the first match of the first pattern that matches.

    Args:
        text: Text to search
        patterns: Compiled patterns in priority order

    Returns:
        Match object or None
    """
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match
    return None

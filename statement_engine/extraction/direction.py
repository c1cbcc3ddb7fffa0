"""
Direction Classifier for transaction alerts.
Scores alert text as a debit or a credit using weighted keyword tables.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.extraction_config import EXTRACTION_CONFIG
from ..config.keyword_loader import merge_keyword_tables
from ..patterns.alert_patterns import (
    DEBIT_KEYWORDS,
    CREDIT_KEYWORDS,
    SHORT_FORM_PATTERNS,
    REFUND_KEYWORDS,
    FAILURE_KEYWORDS,
)
from .pattern_matching import contains_any, score_keywords


logger = logging.getLogger(__name__)


class Direction(Enum):
    """Transaction direction."""
    DEBIT = "debit"
    CREDIT = "credit"


@dataclass
class DirectionResult:
    """Result of direction scoring."""
    direction: Direction
    confidence: float
    debit_score: float = 0.0
    credit_score: float = 0.0
    matched_keywords: List[str] = field(default_factory=list)
    is_failed: bool = False


class DirectionClassifier:
    """Classifies alert text as debit or credit."""

    def __init__(
        self,
        extra_keywords: Optional[Dict[str, List[Tuple[str, float]]]] = None,
        config: Optional[Dict] = None
    ):
        """
        Initialize the classifier with keyword tables.

        Args:
            extra_keywords: Optional {"debit": [...], "credit": [...]} keyword
                pairs appended to the built-in tables
            config: Optional override of EXTRACTION_CONFIG
        """
        extra_keywords = extra_keywords or {}
        self.debit_keywords = merge_keyword_tables(DEBIT_KEYWORDS, extra_keywords.get("debit", []))
        self.credit_keywords = merge_keyword_tables(CREDIT_KEYWORDS, extra_keywords.get("credit", []))
        self.debit_short_form = re.compile(SHORT_FORM_PATTERNS["debit"])
        self.credit_short_form = re.compile(SHORT_FORM_PATTERNS["credit"])

        config = config or EXTRACTION_CONFIG
        self.weights = config["direction"]
        self.confidence_bounds = config["confidence"]

    def classify(self, lower_text: str) -> DirectionResult:
        """
        Score lower-case alert text and pick a direction.

        Args:
            lower_text: Normalized, lower-case alert text

        Returns:
            DirectionResult with direction and confidence in [0.35, 0.95]
        """
        debit_score, debit_hits = score_keywords(lower_text, self.debit_keywords)
        credit_score, credit_hits = score_keywords(lower_text, self.credit_keywords)

        # Standalone "Dr" / "Cr" markers
        if self.debit_short_form.search(lower_text):
            debit_score += self.weights["short_form_weight"]
        if self.credit_short_form.search(lower_text):
            credit_score += self.weights["short_form_weight"]

        # Refund wording wins even when the original debit is mentioned
        if contains_any(lower_text, REFUND_KEYWORDS):
            credit_score += self.weights["refund_bias"]

        # Failed transactions: still guess, but with less certainty
        is_failed = contains_any(lower_text, FAILURE_KEYWORDS)
        if is_failed:
            debit_score *= self.weights["failure_damping"]
            credit_score *= self.weights["failure_damping"]

        matched = debit_hits + credit_hits
        total = debit_score + credit_score

        if total == 0:
            # Most unclassifiable alerts are debits
            return DirectionResult(
                direction=Direction.DEBIT,
                confidence=self.confidence_bounds["unclassified"],
                is_failed=is_failed,
            )

        direction = Direction.DEBIT if debit_score >= credit_score else Direction.CREDIT
        separation = abs(debit_score - credit_score) / total
        confidence = min(
            self.confidence_bounds["ceiling"],
            max(self.confidence_bounds["floor"], separation + self.confidence_bounds["offset"])
        )

        logger.debug(
            "Direction %s (debit=%.2f, credit=%.2f, failed=%s, confidence=%.2f)",
            direction.value, debit_score, credit_score, is_failed, confidence
        )

        return DirectionResult(
            direction=direction,
            confidence=confidence,
            debit_score=debit_score,
            credit_score=credit_score,
            matched_keywords=matched,
            is_failed=is_failed,
        )

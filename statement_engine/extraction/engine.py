"""
Statement Extractor for transaction alerts.
Turns a free-form SMS / notification / log snippet into a structured,
confidence-scored transaction record.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from ..config.extraction_config import EXTRACTION_CONFIG
from .amounts import AmountExtractor, BalanceExtractor
from .dates import DateParser
from .direction import Direction, DirectionClassifier
from .preprocess import is_blank, normalize_text
from .references import ReferenceExtractor


logger = logging.getLogger(__name__)


class ExtractionError(ValueError):
    """Base class for alert extraction failures."""
    pass


class EmptyInputError(ExtractionError):
    """Raised in strict mode when the alert text is blank."""
    pass


class AmountNotFoundError(ExtractionError):
    """Raised in strict mode when no amount can be extracted."""

    def __init__(self, text: str):
        super().__init__(f'Unable to extract amount from: "{text}"')
        self.text = text


@dataclass
class ExtractionOptions:
    """Per-call extraction settings."""
    strict: bool = True  # Raise instead of degrading when the amount is missing
    default_currency: str = EXTRACTION_CONFIG["default_currency"]
    include_raw_text: bool = False


@dataclass
class ExtractedRecord:
    """Structured transaction extracted from alert text."""
    amount: Decimal
    currency: str
    direction: Direction
    date: datetime
    description: str
    confidence: float
    balance: Optional[Decimal] = None
    reference_id: Optional[str] = None
    raw_text: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert to a plain dictionary, leaving out absent optional fields."""
        result = {
            "amount": str(self.amount),
            "currency": self.currency,
            "type": self.direction.value,
            "date": self.date.isoformat(),
            "description": self.description,
            "confidence": self.confidence,
        }
        if self.balance is not None:
            result["balance"] = str(self.balance)
        if self.reference_id is not None:
            result["reference_id"] = self.reference_id
        if self.raw_text is not None:
            result["raw_text"] = self.raw_text
        return result


DESCRIPTIONS = {
    Direction.DEBIT: "Debit transaction",
    Direction.CREDIT: "Credit transaction",
}


class StatementExtractor:
    """Extracts transaction records from alert text."""

    def __init__(
        self,
        extra_keywords: Optional[Dict[str, List[Tuple[str, float]]]] = None,
        debug_mode: bool = False
    ):
        """
        Initialize the extractor and its component extractors.

        Args:
            extra_keywords: Optional extra direction keywords, as returned by
                load_direction_keywords_csv
            debug_mode: If True, log every extraction decision
        """
        self.direction_classifier = DirectionClassifier(extra_keywords=extra_keywords)
        self.amount_extractor = AmountExtractor()
        self.balance_extractor = BalanceExtractor()
        self.date_parser = DateParser()
        self.reference_extractor = ReferenceExtractor()
        self.debug_mode = debug_mode

    def extract(self, text: Optional[str], options: Optional[ExtractionOptions] = None) -> ExtractedRecord:
        """
        Extract a transaction record from alert text.

        Args:
            text: Raw alert text
            options: Extraction options (strict mode by default)

        Returns:
            ExtractedRecord

        Raises:
            EmptyInputError: text is blank and options.strict is set
            AmountNotFoundError: no amount found and options.strict is set

        Example:
            >>> record = StatementExtractor().extract("Rs 499.00 debited from a/c XX12 on 18 Jan 2026")
            >>> record.amount, record.direction.value
            (Decimal('499.00'), 'debit')
        """
        opts = options or ExtractionOptions()

        if is_blank(text):
            if opts.strict:
                raise EmptyInputError("Invalid input: empty text")
            return self._unknown_record(text, opts)

        normalized = normalize_text(text)
        lower = normalized.lower()

        # 1) Direction (scored)
        direction_result = self.direction_classifier.classify(lower)

        # 2) Amount (mandatory in strict mode)
        amount_match = self.amount_extractor.extract(normalized, opts.default_currency)
        if amount_match.amount is None and opts.strict:
            raise AmountNotFoundError(normalized)

        # 3) Optional fields
        balance = self.balance_extractor.extract(normalized)
        parsed_date = self.date_parser.parse(normalized)
        reference_id = self.reference_extractor.extract(normalized)

        if self.debug_mode:
            logger.debug(
                "Extracted amount=%s (%s) direction=%s balance=%s date=%s ref=%s",
                amount_match.amount, amount_match.template, direction_result.direction.value,
                balance, parsed_date, reference_id
            )

        return ExtractedRecord(
            amount=amount_match.amount if amount_match.amount is not None else Decimal("0"),
            currency=amount_match.currency or opts.default_currency,
            direction=direction_result.direction,
            date=parsed_date or datetime.now(),
            description=DESCRIPTIONS[direction_result.direction],
            confidence=direction_result.confidence,
            balance=balance,
            reference_id=reference_id,
            raw_text=normalized if opts.include_raw_text else None,
        )

    def extract_many(
        self,
        texts: List[str],
        options: Optional[ExtractionOptions] = None
    ) -> List[ExtractedRecord]:
        """Extract a record from each text, in order."""
        return [self.extract(text, options) for text in texts]

    def _unknown_record(self, text: Optional[str], opts: ExtractionOptions) -> ExtractedRecord:
        """Degraded record for blank input in non-strict mode."""
        return ExtractedRecord(
            amount=Decimal("0"),
            currency=opts.default_currency,
            direction=Direction.DEBIT,
            date=datetime.now(),
            description=EXTRACTION_CONFIG["unknown_description"],
            confidence=0.0,
            raw_text=text if opts.include_raw_text else None,
        )

"""
Statement Engine - Transaction Alert Extraction and Cursor Pagination.

A rule-based system for turning bank SMS / notification text into structured,
confidence-scored transaction records, plus the cursor codec and query
builder used to page through stored records.

Main Components:
    - patterns: Keyword and regex tables
    - config: Extraction and pagination configuration
    - extraction: Direction, amount, balance, date and reference extraction
    - pagination: Cursor codec and range query builder
"""

from typing import Optional

from .extraction.engine import (
    StatementExtractor,
    ExtractionOptions,
    ExtractedRecord,
    ExtractionError,
    EmptyInputError,
    AmountNotFoundError,
)
from .extraction.direction import Direction, DirectionClassifier, DirectionResult
from .extraction.preprocess import parse_money, normalize_text
from .extraction.pattern_matching import is_noise_context

from .pagination.cursor import (
    DecodedCursor,
    MalformedCursorError,
    SENTINEL_CURSOR,
    encode_cursor,
    decode_cursor,
)
from .pagination.query_builder import (
    FilterCriteria,
    QueryBounds,
    Page,
    build_query,
    build_page,
    paginate,
)

from .config.extraction_config import EXTRACTION_CONFIG, PAGINATION_CONFIG
from .config.keyword_loader import load_direction_keywords_csv


__version__ = "1.0.0"
__all__ = [
    # Extraction
    "StatementExtractor",
    "ExtractionOptions",
    "ExtractedRecord",
    "ExtractionError",
    "EmptyInputError",
    "AmountNotFoundError",
    "Direction",
    "DirectionClassifier",
    "DirectionResult",
    "parse_money",
    "normalize_text",
    "is_noise_context",
    # Pagination
    "DecodedCursor",
    "MalformedCursorError",
    "SENTINEL_CURSOR",
    "encode_cursor",
    "decode_cursor",
    "FilterCriteria",
    "QueryBounds",
    "Page",
    "build_query",
    "build_page",
    "paginate",
    # Configuration
    "EXTRACTION_CONFIG",
    "PAGINATION_CONFIG",
    "load_direction_keywords_csv",
    # Main function
    "extract_statement",
]

_default_extractor = StatementExtractor()


def extract_statement(text: str, options: Optional[ExtractionOptions] = None) -> ExtractedRecord:
    """
    Main entry point for alert extraction.

    Args:
        text: Raw SMS / notification / log text describing one transaction
        options: Extraction options (strict mode, default currency, raw text)

    Returns:
        ExtractedRecord with amount, currency, direction, date, description,
        confidence and, when found, balance and reference id

    Raises:
        EmptyInputError: blank text in strict mode
        AmountNotFoundError: no amount in strict mode

    Example:
        >>> record = extract_statement(
        ...     "Your a/c XXXXX1234 is debited with INR 1,250.00 on 12-09-2025. "
        ...     "Available balance: INR 23,540.50"
        ... )
        >>> record.amount, record.direction.value, record.balance
        (Decimal('1250.00'), 'debit', Decimal('23540.50'))
    """
    return _default_extractor.extract(text, options)

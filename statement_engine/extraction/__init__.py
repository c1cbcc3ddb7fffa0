"""
Extraction Module for the Statement Engine.

Orchestrates alert extraction through:
- Preprocessing (whitespace normalization, money parsing)
- Pattern matching (keyword scoring, noise context, regex templates)
- Direction classification, amount / balance / date / reference extraction
"""

from .engine import (
    StatementExtractor,
    ExtractionOptions,
    ExtractedRecord,
    ExtractionError,
    EmptyInputError,
    AmountNotFoundError,
)
from .direction import Direction, DirectionClassifier, DirectionResult
from .amounts import AmountExtractor, AmountMatch, BalanceExtractor, normalize_currency
from .dates import DateParser
from .references import ReferenceExtractor
from .preprocess import normalize_text, parse_money
from .pattern_matching import is_noise_context, score_keywords

__all__ = [
    # Main extractor
    "StatementExtractor",
    "ExtractionOptions",
    "ExtractedRecord",
    "ExtractionError",
    "EmptyInputError",
    "AmountNotFoundError",
    # Component extractors
    "Direction",
    "DirectionClassifier",
    "DirectionResult",
    "AmountExtractor",
    "AmountMatch",
    "BalanceExtractor",
    "normalize_currency",
    "DateParser",
    "ReferenceExtractor",
    # Utilities
    "normalize_text",
    "parse_money",
    "is_noise_context",
    "score_keywords",
]

"""
Extraction and pagination configuration.
Contains scoring weights, confidence bounds and query defaults.
"""

# Extraction Configuration
EXTRACTION_CONFIG = {
    # Direction scoring
    "direction": {
        "loaded_keyword_weight": 2,  # Weight for CSV keyword rows that leave it blank
        "short_form_weight": 2,  # Added for a standalone "dr" / "cr"
        "refund_bias": 4,  # Extra credit weight for refund / reversal wording
        "failure_damping": 0.7,  # Both scores scaled on failed / declined alerts
    },

    # Confidence bounds
    "confidence": {
        "unclassified": 0.35,  # No keyword hit at all, defaults to debit
        "floor": 0.4,
        "ceiling": 0.95,
        "offset": 0.35,  # Added to the normalized score separation
    },

    # Characters scanned on each side of a numeric match for noise hints
    "noise_window": 18,

    # Minimum rapidfuzz ratio for resolving a misspelled month name
    "month_fuzzy_threshold": 85,

    "default_currency": "INR",
    "unknown_description": "Unknown transaction",
}

# Pagination Configuration
PAGINATION_CONFIG = {
    "default_limit": 10,
    "max_limit": 100,
    "cursor_separator": "|",

    # Row field names used by the query builder
    "fields": {
        "timestamp": "created_at",
        "id": "id",
        "date": "date",
        "amount": "amount",
        "direction": "direction",
    },
}

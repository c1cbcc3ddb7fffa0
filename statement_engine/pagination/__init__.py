"""
Pagination Module for the Statement Engine.

Cursor encoding / decoding and range query construction for descending
(timestamp, id) listings.
"""

from .cursor import (
    DecodedCursor,
    MalformedCursorError,
    SENTINEL_CURSOR,
    EPOCH,
    encode_cursor,
    decode_cursor,
)
from .query_builder import (
    FilterCriteria,
    QueryBounds,
    Page,
    build_query,
    build_page,
    paginate,
)

__all__ = [
    "DecodedCursor",
    "MalformedCursorError",
    "SENTINEL_CURSOR",
    "EPOCH",
    "encode_cursor",
    "decode_cursor",
    "FilterCriteria",
    "QueryBounds",
    "Page",
    "build_query",
    "build_page",
    "paginate",
]

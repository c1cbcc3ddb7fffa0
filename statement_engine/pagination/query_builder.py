"""
Query builder for cursor-paginated transaction listings.

Builds storage-neutral range predicates from filter criteria and a decoded
cursor. Rows are ordered by (timestamp desc, id desc); the id breaks ties
between rows that share a timestamp so no row is skipped or repeated across
pages.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from ..config.extraction_config import PAGINATION_CONFIG
from ..extraction.direction import Direction
from .cursor import DecodedCursor, decode_cursor, encode_cursor, to_utc, truncate_to_millis


logger = logging.getLogger(__name__)

DESCENDING = -1


@dataclass
class FilterCriteria:
    """Optional listing filters, combined with AND."""
    direction: Optional[Union[Direction, str]] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    amount_min: Optional[Union[Decimal, float]] = None
    amount_max: Optional[Union[Decimal, float]] = None


@dataclass
class Page:
    """One page of a listing."""
    data: List[Any] = field(default_factory=list)
    next_cursor: Optional[str] = None
    has_next_page: bool = False


def direction_value(direction: Optional[Union[Direction, str]]) -> Optional[str]:
    """Return the plain string form of a direction."""
    if direction is None:
        return None
    if isinstance(direction, Direction):
        return direction.value
    return str(direction).lower()


def get_field(row: Any, name: str) -> Any:
    """Read a field from a mapping row or an object row."""
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)


def clamp_limit(limit: Optional[int]) -> int:
    """Clamp a requested page size to [1, max_limit]."""
    if limit is None:
        return PAGINATION_CONFIG["default_limit"]
    return max(1, min(int(limit), PAGINATION_CONFIG["max_limit"]))


@dataclass
class QueryBounds:
    """Predicates, ordering and fetch size for one page read."""
    filters: FilterCriteria
    cursor: Optional[DecodedCursor]
    limit: int
    fields: Dict[str, str] = field(default_factory=lambda: dict(PAGINATION_CONFIG["fields"]))

    @property
    def fetch_limit(self) -> int:
        """Rows to fetch: one more than the page size to detect a next page."""
        return self.limit + 1

    @property
    def sort(self) -> List[tuple]:
        """Sort order as (field, direction) pairs."""
        return [(self.fields["timestamp"], DESCENDING), (self.fields["id"], DESCENDING)]

    def to_filter(self) -> Dict[str, Any]:
        """
        Build a predicate document.

        Uses $gte / $lte / $lt / $or operators, which document stores accept
        directly and which are easy to translate for SQL.

        Returns:
            Dictionary of field predicates
        """
        query: Dict[str, Any] = {}
        filters = self.filters

        if filters.direction is not None:
            query[self.fields["direction"]] = direction_value(filters.direction)

        if filters.date_from is not None or filters.date_to is not None:
            date_range = {}
            if filters.date_from is not None:
                date_range["$gte"] = filters.date_from
            if filters.date_to is not None:
                date_range["$lte"] = filters.date_to
            query[self.fields["date"]] = date_range

        if filters.amount_min is not None or filters.amount_max is not None:
            amount_range = {}
            if filters.amount_min is not None:
                amount_range["$gte"] = filters.amount_min
            if filters.amount_max is not None:
                amount_range["$lte"] = filters.amount_max
            query[self.fields["amount"]] = amount_range

        if self.cursor is not None:
            timestamp_field = self.fields["timestamp"]
            query["$or"] = [
                {timestamp_field: {"$lt": self.cursor.timestamp}},
                {timestamp_field: self.cursor.timestamp, self.fields["id"]: {"$lt": self.cursor.id}},
            ]

        return query

    def matches(self, row: Any) -> bool:
        """
        Evaluate the predicates against one row.

        Naive datetimes on either side are taken as UTC. Row timestamps are
        compared to the cursor at millisecond precision, so rows within the
        same millisecond are ordered by id alone.
        """
        filters = self.filters

        if filters.direction is not None:
            if direction_value(get_field(row, self.fields["direction"])) != direction_value(filters.direction):
                return False

        row_date = get_field(row, self.fields["date"])
        if row_date is not None:
            row_date = to_utc(row_date)
        if filters.date_from is not None and (row_date is None or row_date < to_utc(filters.date_from)):
            return False
        if filters.date_to is not None and (row_date is None or row_date > to_utc(filters.date_to)):
            return False

        row_amount = get_field(row, self.fields["amount"])
        if filters.amount_min is not None and (row_amount is None or row_amount < filters.amount_min):
            return False
        if filters.amount_max is not None and (row_amount is None or row_amount > filters.amount_max):
            return False

        if self.cursor is not None:
            row_timestamp = truncate_to_millis(get_field(row, self.fields["timestamp"]))
            row_id = str(get_field(row, self.fields["id"]))
            before = row_timestamp < self.cursor.timestamp or (
                row_timestamp == self.cursor.timestamp and row_id < self.cursor.id
            )
            if not before:
                return False

        return True

    def sort_key(self, row: Any) -> tuple:
        """(timestamp, id) sort key of a row, at cursor precision."""
        return (
            truncate_to_millis(get_field(row, self.fields["timestamp"])),
            str(get_field(row, self.fields["id"])),
        )

    def apply(self, rows: Sequence[Any]) -> List[Any]:
        """
        Execute the query against in-memory rows.

        Args:
            rows: Candidate rows (mappings or objects)

        Returns:
            Matching rows in (timestamp desc, id desc) order, at most fetch_limit
        """
        matched = [row for row in rows if self.matches(row)]
        matched.sort(key=self.sort_key, reverse=True)
        return matched[:self.fetch_limit]


def build_query(
    filters: Optional[FilterCriteria] = None,
    cursor: Optional[DecodedCursor] = None,
    limit: Optional[int] = None
) -> QueryBounds:
    """
    Build query bounds from filters and an optional decoded cursor.

    A sentinel cursor (from a malformed token) adds no cursor predicate, so the
    listing starts from the beginning.

    Args:
        filters: Listing filters
        cursor: Decoded cursor of the last row on the previous page
        limit: Page size (clamped to the configured range)

    Returns:
        QueryBounds
    """
    if cursor is not None and cursor.is_sentinel:
        cursor = None

    return QueryBounds(
        filters=filters or FilterCriteria(),
        cursor=cursor,
        limit=clamp_limit(limit),
    )


def build_page(rows: Sequence[Any], limit: int, fields: Optional[Dict[str, str]] = None) -> Page:
    """
    Assemble a page from rows fetched with the limit + 1 convention.

    Args:
        rows: Rows in (timestamp desc, id desc) order, at most limit + 1
        limit: Page size
        fields: Row field names (defaults to PAGINATION_CONFIG)

    Returns:
        Page with the next cursor set when a next page exists
    """
    fields = fields or PAGINATION_CONFIG["fields"]
    has_next_page = len(rows) > limit
    data = list(rows[:limit])

    next_cursor = None
    if has_next_page and data:
        last_row = data[-1]
        next_cursor = encode_cursor(
            get_field(last_row, fields["timestamp"]),
            str(get_field(last_row, fields["id"]))
        )

    return Page(data=data, next_cursor=next_cursor, has_next_page=has_next_page)


def paginate(
    fetch_rows: Callable[[QueryBounds], Sequence[Any]],
    limit: Optional[int] = None,
    cursor: Optional[str] = None,
    filters: Optional[FilterCriteria] = None
) -> Page:
    """
    Read one page through a caller-supplied fetch function.

    Args:
        fetch_rows: Executes QueryBounds against storage and returns up to
            bounds.fetch_limit rows in (timestamp desc, id desc) order
        limit: Page size
        cursor: Cursor token from the previous page, if any
        filters: Listing filters

    Returns:
        Page
    """
    decoded = decode_cursor(cursor) if cursor else None
    bounds = build_query(filters, decoded, limit)
    rows = fetch_rows(bounds)

    logger.debug("Fetched %d rows (limit=%d, cursor=%s)", len(rows), bounds.limit, bounds.cursor)
    return build_page(rows, bounds.limit, bounds.fields)

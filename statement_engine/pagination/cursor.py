"""
Cursor codec for descending (timestamp, id) pagination.

A cursor is base64("<ISO-8601 UTC timestamp, millisecond precision>|<id>").
Decoding never raises: a malformed token decodes to the epoch-zero sentinel,
which the query builder treats as "start from the beginning".
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from ..config.extraction_config import PAGINATION_CONFIG


logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class MalformedCursorError(ValueError):
    """Raised while decoding a cursor token that cannot be trusted."""
    pass


@dataclass(frozen=True)
class DecodedCursor:
    """Sort-key position of the last record seen."""
    timestamp: datetime
    id: str

    @property
    def is_sentinel(self) -> bool:
        """True for the fallback cursor returned on malformed input."""
        return self.timestamp == EPOCH and self.id == ""


SENTINEL_CURSOR = DecodedCursor(timestamp=EPOCH, id="")


def to_utc(timestamp: datetime) -> datetime:
    """Return timestamp in UTC. Naive timestamps are taken to be UTC already."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def truncate_to_millis(timestamp: datetime) -> datetime:
    """Return timestamp in UTC with sub-millisecond digits dropped."""
    timestamp = to_utc(timestamp)
    return timestamp.replace(microsecond=timestamp.microsecond // 1000 * 1000)


def format_timestamp(timestamp: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision and a Z suffix."""
    return truncate_to_millis(timestamp).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp written by format_timestamp."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(value))


def encode_cursor(timestamp: datetime, record_id: str) -> str:
    """
    Encode a record's sort key as an opaque cursor.

    The timestamp is stored in UTC to the millisecond. Naive timestamps are
    taken as UTC, so they decode to the equivalent aware value rather than
    the naive input.

    Args:
        timestamp: Record timestamp (sort key)
        record_id: Record identifier (tie-breaker)

    Returns:
        Base64 cursor token

    Raises:
        ValueError: record_id is empty or contains the separator
    """
    separator = PAGINATION_CONFIG["cursor_separator"]
    record_id = str(record_id)
    if not record_id:
        raise ValueError("Cursor id must not be empty")
    if separator in record_id:
        raise ValueError(f"Cursor id must not contain {separator!r}: {record_id!r}")

    payload = f"{format_timestamp(timestamp)}{separator}{record_id}"
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def _decode(token: str) -> DecodedCursor:
    """Decode a cursor token, raising MalformedCursorError on bad input."""
    separator = PAGINATION_CONFIG["cursor_separator"]
    if not isinstance(token, str) or not token:
        raise MalformedCursorError("Invalid cursor: empty token")

    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise MalformedCursorError(f"Invalid cursor encoding: {e}") from e

    parts = decoded.split(separator)
    if len(parts) != 2:
        raise MalformedCursorError("Invalid cursor format: expected timestamp and id")

    timestamp_str, record_id = parts
    if not timestamp_str or not record_id:
        raise MalformedCursorError("Invalid cursor format: missing components")

    try:
        timestamp = parse_timestamp(timestamp_str)
    except ValueError as e:
        raise MalformedCursorError(f"Invalid timestamp in cursor: {timestamp_str!r}") from e

    return DecodedCursor(timestamp=timestamp, id=record_id)


def decode_cursor(token: str) -> DecodedCursor:
    """
    Decode a cursor token into its timestamp and id.

    Never raises. Any malformed token is logged and decoded to the sentinel
    (epoch zero, empty id).

    Args:
        token: Cursor token from a previous page

    Returns:
        DecodedCursor, or SENTINEL_CURSOR on malformed input
    """
    try:
        return _decode(token)
    except MalformedCursorError as e:
        logger.warning("Cursor decode error: %s", e)
        return SENTINEL_CURSOR

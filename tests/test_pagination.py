"""
Tests for cursor pagination query building and page assembly.
"""

import unittest
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from statement_engine.extraction.direction import Direction
from statement_engine.pagination.cursor import SENTINEL_CURSOR, decode_cursor, encode_cursor
from statement_engine.pagination.query_builder import (
    FilterCriteria,
    build_query,
    build_page,
    paginate,
)


SHARED_TIMESTAMP = datetime(2025, 9, 12, 10, 0, 0, tzinfo=timezone.utc)


def make_rows(count, timestamp=SHARED_TIMESTAMP):
    """Rows that all share one timestamp."""
    return [
        {
            "id": f"txn-{i:02d}",
            "created_at": timestamp,
            "date": datetime(2025, 9, 1) + timedelta(days=i % 10),
            "amount": Decimal(100 * (i + 1)),
            "direction": "debit" if i % 2 == 0 else "credit",
        }
        for i in range(count)
    ]


class TestPaginationWalk(unittest.TestCase):
    """Walking a listing page by page."""

    def walk(self, rows, limit, filters=None):
        pages = []
        cursor = None
        while True:
            page = paginate(lambda bounds: bounds.apply(rows), limit=limit, cursor=cursor, filters=filters)
            pages.append(page)
            if not page.has_next_page:
                return pages
            cursor = page.next_cursor

    def test_shared_timestamp_visits_every_row_once(self):
        """25 rows with one timestamp, 3 pages of 10, no gaps or duplicates."""
        rows = make_rows(25)
        pages = self.walk(rows, limit=10)

        self.assertEqual([len(page.data) for page in pages], [10, 10, 5])
        self.assertIsNone(pages[-1].next_cursor)

        seen = [row["id"] for page in pages for row in page.data]
        expected = sorted((row["id"] for row in rows), reverse=True)
        self.assertEqual(seen, expected)
        self.assertEqual(len(set(seen)), 25)

    def test_microsecond_timestamp_visits_every_row_once(self):
        """Rows stamped finer than the cursor's millisecond are still all visited."""
        rows = make_rows(25, timestamp=datetime(2025, 9, 12, 10, 0, 0, 123456, tzinfo=timezone.utc))
        pages = self.walk(rows, limit=10)

        self.assertEqual([len(page.data) for page in pages], [10, 10, 5])
        seen = [row["id"] for page in pages for row in page.data]
        self.assertEqual(seen, sorted((row["id"] for row in rows), reverse=True))

    def test_rows_within_cursor_millisecond_not_skipped(self):
        """Rows between the truncated cursor and the full timestamp stay reachable."""
        base = datetime(2025, 9, 12, 10, 0, 0, 123000, tzinfo=timezone.utc)
        rows = make_rows(6, timestamp=base)
        for i, row in enumerate(rows):
            row["created_at"] = base + timedelta(microseconds=100 * i)
        pages = self.walk(rows, limit=2)
        seen = [row["id"] for page in pages for row in page.data]
        self.assertEqual(seen, ["txn-05", "txn-04", "txn-03", "txn-02", "txn-01", "txn-00"])

    def test_mixed_timestamps_descending(self):
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        rows = []
        for i in range(17):
            rows.append({
                "id": f"r{i:02d}",
                "created_at": base + timedelta(minutes=i // 3),
                "date": base,
                "amount": Decimal("10"),
                "direction": "debit",
            })
        pages = self.walk(rows, limit=4)
        seen = [(row["created_at"], row["id"]) for page in pages for row in page.data]
        self.assertEqual(seen, sorted(seen, reverse=True))
        self.assertEqual(len(seen), 17)

    def test_filtered_walk(self):
        rows = make_rows(25)
        pages = self.walk(rows, limit=5, filters=FilterCriteria(direction=Direction.CREDIT))
        seen = [row for page in pages for row in page.data]
        self.assertEqual(len(seen), 12)
        self.assertTrue(all(row["direction"] == "credit" for row in seen))

    def test_malformed_cursor_starts_from_beginning(self):
        rows = make_rows(5)
        with self.assertLogs("statement_engine.pagination.cursor", level="WARNING"):
            page = paginate(lambda bounds: bounds.apply(rows), limit=3, cursor="not-base64!!")
        self.assertEqual([row["id"] for row in page.data], ["txn-04", "txn-03", "txn-02"])

    def test_object_rows(self):
        @dataclass
        class Row:
            id: str
            created_at: datetime
            date: datetime
            amount: Decimal
            direction: str

        rows = [Row(**row) for row in make_rows(6)]
        first = paginate(lambda bounds: bounds.apply(rows), limit=4)
        second = paginate(lambda bounds: bounds.apply(rows), limit=4, cursor=first.next_cursor)
        self.assertEqual([row.id for row in first.data + second.data],
                         ["txn-05", "txn-04", "txn-03", "txn-02", "txn-01", "txn-00"])
        self.assertFalse(second.has_next_page)


class TestBuildQuery(unittest.TestCase):
    """Predicate construction."""

    def test_no_filters(self):
        bounds = build_query()
        self.assertEqual(bounds.to_filter(), {})
        self.assertEqual(bounds.limit, 10)
        self.assertEqual(bounds.fetch_limit, 11)
        self.assertEqual(bounds.sort, [("created_at", -1), ("id", -1)])

    def test_all_filters(self):
        date_from = datetime(2025, 1, 1)
        date_to = datetime(2025, 1, 31)
        bounds = build_query(FilterCriteria(
            direction=Direction.DEBIT,
            date_from=date_from,
            date_to=date_to,
            amount_min=Decimal("0"),
            amount_max=Decimal("5000"),
        ))
        self.assertEqual(bounds.to_filter(), {
            "direction": "debit",
            "date": {"$gte": date_from, "$lte": date_to},
            "amount": {"$gte": Decimal("0"), "$lte": Decimal("5000")},
        })

    def test_cursor_predicate(self):
        cursor = decode_cursor(encode_cursor(SHARED_TIMESTAMP, "txn-10"))
        bounds = build_query(cursor=cursor, limit=5)
        self.assertEqual(bounds.to_filter()["$or"], [
            {"created_at": {"$lt": SHARED_TIMESTAMP}},
            {"created_at": SHARED_TIMESTAMP, "id": {"$lt": "txn-10"}},
        ])

    def test_sentinel_cursor_ignored(self):
        bounds = build_query(cursor=SENTINEL_CURSOR)
        self.assertIsNone(bounds.cursor)
        self.assertNotIn("$or", bounds.to_filter())

    def test_limit_clamped(self):
        self.assertEqual(build_query(limit=0).limit, 1)
        self.assertEqual(build_query(limit=1000).limit, 100)
        self.assertEqual(build_query(limit=25).fetch_limit, 26)

    def test_deterministic(self):
        cursor = decode_cursor(encode_cursor(SHARED_TIMESTAMP, "txn-10"))
        filters = FilterCriteria(direction="credit", amount_min=10)
        self.assertEqual(build_query(filters, cursor, 5), build_query(filters, cursor, 5))

    def test_matches_amount_and_date_range(self):
        bounds = build_query(FilterCriteria(
            date_from=datetime(2025, 9, 3),
            date_to=datetime(2025, 9, 5),
            amount_min=Decimal("300"),
        ))
        matched = [row["id"] for row in make_rows(10) if bounds.matches(row)]
        self.assertEqual(matched, ["txn-02", "txn-03", "txn-04"])

    def test_aware_date_filter_against_naive_rows(self):
        """Naive row dates are compared as UTC against aware filters."""
        bounds = build_query(FilterCriteria(
            date_from=datetime(2025, 9, 3, tzinfo=timezone.utc),
            date_to=datetime(2025, 9, 5, tzinfo=timezone.utc),
        ))
        matched = [row["id"] for row in make_rows(10) if bounds.matches(row)]
        self.assertEqual(matched, ["txn-02", "txn-03", "txn-04"])

    def test_naive_date_filter_against_aware_rows(self):
        bounds = build_query(FilterCriteria(date_from=datetime(2025, 9, 3)))
        rows = make_rows(4)
        for row in rows:
            row["date"] = row["date"].replace(tzinfo=timezone.utc)
        self.assertEqual([row["id"] for row in rows if bounds.matches(row)], ["txn-02", "txn-03"])


class TestBuildPage(unittest.TestCase):
    """Page assembly from limit + 1 fetches."""

    def test_extra_row_dropped_and_encoded(self):
        rows = sorted(make_rows(4), key=lambda row: row["id"], reverse=True)
        page = build_page(rows, limit=3)
        self.assertTrue(page.has_next_page)
        self.assertEqual(len(page.data), 3)
        self.assertEqual(page.next_cursor, encode_cursor(SHARED_TIMESTAMP, "txn-01"))

    def test_last_page(self):
        rows = make_rows(3)
        page = build_page(rows, limit=3)
        self.assertFalse(page.has_next_page)
        self.assertIsNone(page.next_cursor)
        self.assertEqual(len(page.data), 3)

    def test_empty(self):
        page = build_page([], limit=10)
        self.assertEqual(page.data, [])
        self.assertIsNone(page.next_cursor)


if __name__ == "__main__":
    unittest.main()

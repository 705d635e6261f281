"""Tests for Crossref payload parsing."""

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from CrossrefQuery.core.dates import CalendarDate, DateRange, SingleDate
from CrossrefQuery.sources.crossref.parser import DateInfo, parse_work, parse_work_list


def _work(**overrides) -> dict:
    item = {
        "DOI": "10.1037/ABC.123",
        "title": ["", "Deep Learning for Graphs"],
        "type": "journal-article",
        "is-referenced-by-count": 12,
        "reference-count": 40,
        "issued": {"date-parts": [[2021, 3, 4]]},
        "created": {
            "date-parts": [[2021, 2, 1]],
            "date-time": "2021-02-01T10:20:30Z",
            "timestamp": 1612174830000,
        },
        "published": {"date-parts": [[None]]},
    }
    item.update(overrides)
    return item


class TestDateInfo(unittest.TestCase):
    def test_from_payload(self) -> None:
        info = DateInfo.from_payload(_work()["created"])
        self.assertIsNotNone(info)
        self.assertEqual(info.timestamp, 1612174830000)
        self.assertEqual(info.date_time, datetime(2021, 2, 1, 10, 20, 30, tzinfo=timezone.utc))
        self.assertEqual(info.as_date_field(), SingleDate(CalendarDate(2021, 2, 1)))

    def test_naive_date_time_is_utc(self) -> None:
        info = DateInfo.from_payload({"date-parts": [[2021]], "date-time": "2021-01-01T00:00:00"})
        self.assertEqual(info.date_time.tzinfo, timezone.utc)

    def test_invalid_values_are_dropped(self) -> None:
        info = DateInfo.from_payload({"date-parts": "2021", "date-time": "not a date", "timestamp": "1"})
        self.assertIsNone(info.timestamp)
        self.assertIsNone(info.date_time)
        self.assertIsNone(info.as_date_field())

    def test_non_mapping(self) -> None:
        self.assertIsNone(DateInfo.from_payload([[2021]]))


class TestParseWork(unittest.TestCase):
    def test_fields(self) -> None:
        work = parse_work(_work())
        self.assertEqual(work.doi, "10.1037/abc.123")
        self.assertEqual(work.title, "Deep Learning for Graphs")
        self.assertEqual(work.type, "journal-article")
        self.assertEqual(work.is_referenced_by_count, 12)
        self.assertEqual(work.reference_count, 40)
        self.assertEqual(work.issued, SingleDate(CalendarDate(2021, 3, 4)))

    def test_undecodable_dates_are_left_out(self) -> None:
        work = parse_work(_work())
        self.assertEqual(set(work.dates), {"issued", "created"})

    def test_range_dates(self) -> None:
        work = parse_work(_work(issued={"date-parts": [[2020], [2021]]}))
        self.assertEqual(work.issued, DateRange(CalendarDate(2020), CalendarDate(2021)))

    def test_oversized_date_leaves_other_fields(self) -> None:
        work = parse_work(_work(issued={"date-parts": [[99999999999999999999]]}))
        self.assertIsNone(work.issued)
        self.assertEqual(set(work.dates), {"created"})

    def test_dates_are_read_only(self) -> None:
        work = parse_work(_work())
        with self.assertRaises(TypeError):
            work.dates["issued"] = None

    def test_missing_fields(self) -> None:
        work = parse_work({})
        self.assertEqual(work.doi, "")
        self.assertEqual(work.title, "")
        self.assertEqual(work.is_referenced_by_count, 0)
        self.assertIsNone(work.issued)


class TestParseWorkList(unittest.TestCase):
    def test_page(self) -> None:
        page = parse_work_list(
            {
                "total-results": 2,
                "items-per-page": 20,
                "next-cursor": "AoJ/abc",
                "items": [_work(), "junk", _work(DOI="10.1/X")],
            }
        )
        self.assertEqual(page.total_results, 2)
        self.assertEqual(page.items_per_page, 20)
        self.assertEqual(page.next_cursor, "AoJ/abc")
        self.assertEqual([w.doi for w in page.items], ["10.1037/abc.123", "10.1/x"])

    def test_empty_message(self) -> None:
        page = parse_work_list({})
        self.assertEqual(page.total_results, 0)
        self.assertIsNone(page.items_per_page)
        self.assertIsNone(page.next_cursor)
        self.assertEqual(page.items, ())


if __name__ == "__main__":
    unittest.main()

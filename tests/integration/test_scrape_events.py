"""
Integration tests for ingest/scrape_events.py

Tests that one ingestion batch merges every source into the store and that
a failing source or a failing write does not stop the rest of the batch.
"""

import unittest
from unittest.mock import patch

from ingest.event_store import upsert_event as real_upsert_event
from ingest.scrape_events import fetch_all_sources, scrape_all_events
from ingest.scraper.event_sources import EventSource, MockEventSource
from tests.fixtures.event_factory import create_test_event_record
from tests.fixtures.fake_supabase import FakeSupabase


class StaticSource(EventSource):
    def __init__(self, name, records):
        self.name = name
        self.records = records

    def fetch_events(self):
        return list(self.records)


class BrokenSource(EventSource):
    name = "broken"

    def fetch_events(self):
        raise RuntimeError("listing layout changed")


@patch("builtins.print")
@patch("ingest.scrape_events.log_pipeline_error", return_value="logs/test.txt")
class TestScrapeAllEvents(unittest.TestCase):
    """Tests for scrape_all_events()"""

    def test_mock_source_ingested_once_per_key(self, mock_log, _print):
        db = FakeSupabase()

        first = scrape_all_events([MockEventSource()], supabase=db)
        second = scrape_all_events([MockEventSource()], supabase=db)

        self.assertEqual(first, {"created": 6, "updated": 0, "failed": 0})
        self.assertEqual(second, {"created": 0, "updated": 6, "failed": 0})
        self.assertEqual(len(db.rows("events")), 6)

    def test_failing_source_does_not_block_others(self, mock_log, _print):
        db = FakeSupabase()
        good = StaticSource("good", [create_test_event_record(source="good", source_id="1")])

        stats = scrape_all_events([BrokenSource(), good], supabase=db)

        self.assertEqual(stats["created"], 1)
        self.assertEqual(len(db.rows("events")), 1)
        self.assertEqual(mock_log.call_args.kwargs["error_type"], "source_fetch")

    def test_store_write_failure_isolated_per_record(self, mock_log, _print):
        db = FakeSupabase()
        records = [
            create_test_event_record(source="s", source_id="1", title="First"),
            create_test_event_record(source="s", source_id="2", title="Second"),
        ]

        def fail_first(record, supabase=None, now=None):
            if record.source_id == "1":
                raise RuntimeError("connection reset")
            return real_upsert_event(record, supabase=supabase, now=now)

        with patch("ingest.scrape_events.upsert_event", side_effect=fail_first):
            stats = scrape_all_events([StaticSource("s", records)], supabase=db)

        self.assertEqual(stats, {"created": 1, "updated": 0, "failed": 1})
        self.assertEqual([r["title"] for r in db.rows("events")], ["Second"])
        self.assertEqual(mock_log.call_args.kwargs["error_type"], "store_write")

    def test_no_sources(self, mock_log, _print):
        self.assertEqual(
            scrape_all_events([], supabase=FakeSupabase()),
            {"created": 0, "updated": 0, "failed": 0},
        )


class TestFetchAllSources(unittest.TestCase):
    """Tests for fetch_all_sources()"""

    def test_results_keep_source_order(self):
        a = StaticSource("a", [create_test_event_record(source="a", source_id=str(i)) for i in range(3)])
        b = StaticSource("b", [create_test_event_record(source="b", source_id="x")])

        events = fetch_all_sources([a, b])

        self.assertEqual([e.source for e in events], ["a", "a", "a", "b"])


if __name__ == "__main__":
    unittest.main()

"""
Unit tests for shared/utils.py

Tests date parsing, UTC normalization and summary printing.
"""

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from shared.utils import EPOCH, ensure_utc, parse_date_string, print_summary, utc_now


class TestParseDateString(unittest.TestCase):
    """Tests for parse_date_string() function."""

    def test_parse_iso_format(self):
        """Parse ISO format (2026-01-24T12:00:00)."""
        result = parse_date_string("2026-01-24T12:00:00")

        self.assertIsNotNone(result)
        self.assertIn("2026-01-24", result)

    def test_parse_verbose_format(self):
        """Parse verbose format (January 24, 2026)."""
        result = parse_date_string("January 24, 2026")

        self.assertIsNotNone(result)
        self.assertIn("2026-01-24", result)

    def test_parse_with_timezone(self):
        """Offset is kept in the ISO output."""
        result = parse_date_string("2026-01-24T19:30:00+11:00")

        self.assertEqual(result, "2026-01-24T19:30:00+11:00")

    def test_fuzzy_parsing(self):
        """Fuzzy parsing extracts date from card text."""
        result = parse_date_string("Starts Sat Jan 24th, 2026")

        self.assertIsNotNone(result)
        self.assertIn("2026", result)

    def test_invalid_date_returns_none(self):
        """Invalid date string returns None."""
        self.assertIsNone(parse_date_string("not a date at all"))

    def test_empty_string_returns_none(self):
        """Empty string returns None."""
        self.assertIsNone(parse_date_string(""))

    def test_none_returns_none(self):
        """None input returns None."""
        self.assertIsNone(parse_date_string(None))


class TestUtcHelpers(unittest.TestCase):
    """Tests for utc_now() and ensure_utc()"""

    def test_utc_now_is_aware(self):
        self.assertEqual(utc_now().utcoffset(), timedelta(0))

    def test_naive_treated_as_utc(self):
        result = ensure_utc(datetime(2026, 1, 1, 12, 0))

        self.assertEqual(result, datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))

    def test_offset_converted_to_utc(self):
        sydney = timezone(timedelta(hours=11))

        result = ensure_utc(datetime(2026, 1, 1, 12, 0, tzinfo=sydney))

        self.assertEqual(result.hour, 1)
        self.assertEqual(result.tzinfo, timezone.utc)

    def test_epoch(self):
        self.assertEqual(EPOCH.year, 1970)
        self.assertLess(EPOCH, utc_now())


class TestPrintSummary(unittest.TestCase):
    """Tests for print_summary() function."""

    @patch("builtins.print")
    def test_prints_counts(self, mock_print):
        """Output includes created, updated, failed counts."""
        print_summary(created=10, updated=2, failed=1)

        printed_output = " ".join(str(call[0][0]) for call in mock_print.call_args_list)
        self.assertIn("Created: 10", printed_output)
        self.assertIn("Updated: 2", printed_output)
        self.assertIn("Failed:  1", printed_output)


if __name__ == "__main__":
    unittest.main()

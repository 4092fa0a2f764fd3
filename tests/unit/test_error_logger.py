"""
Unit tests for shared/error_logger.py
"""

import os
import tempfile
import unittest
from unittest.mock import patch

from shared.error_logger import log_pipeline_error


class TestLogPipelineError(unittest.TestCase):
    """Tests for log_pipeline_error()"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_writes_report_with_context(self):
        with patch("shared.error_logger.ERROR_LOG_DIR", self.tmp.name):
            path = log_pipeline_error(
                "store_write", "connection reset", {"source": "mock", "source_id": "opera-1"}
            )

        self.assertTrue(path.startswith(self.tmp.name))
        self.assertIn("store_write_error_", os.path.basename(path))

        with open(path, encoding="utf-8") as f:
            content = f.read()
        self.assertIn("Error Type: store_write", content)
        self.assertIn("Error Message: connection reset", content)
        self.assertIn("source_id: opera-1", content)

    def test_no_context_section_when_empty(self):
        with patch("shared.error_logger.ERROR_LOG_DIR", self.tmp.name):
            path = log_pipeline_error("cycle", "boom")

        with open(path, encoding="utf-8") as f:
            self.assertNotIn("Context:", f.read())


if __name__ == "__main__":
    unittest.main()

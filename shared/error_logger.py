"""
Error logging utility for the event pipeline.

Logs ingestion and dispatch errors to timestamped files for debugging.
"""

import os
from datetime import datetime
from typing import Any

from config.settings import ERROR_LOG_DIR


def log_pipeline_error(
    error_type: str, error_message: str, context: dict[str, Any] | None = None
) -> str:
    """
    Log a pipeline error to a timestamped file.

    Args:
        error_type: Type of error (e.g., 'source_fetch', 'store_write', 'sending')
        error_message: The error message
        context: Optional dictionary with additional context (event, user_id, etc.)

    Returns:
        Path to the log file created
    """
    log_dir = ERROR_LOG_DIR or os.path.join(os.getcwd(), "logs")
    os.makedirs(log_dir, exist_ok=True)

    # Microseconds keep several errors from the same second in separate files
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    filename = os.path.join(log_dir, f"{error_type}_error_{timestamp}.txt")

    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"Pipeline Error Report - {datetime.now()}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error Type: {error_type}\n")
        f.write(f"Error Message: {error_message}\n\n")

        if context:
            f.write("Context:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                f.write(f"{key}: {value}\n")

    return filename

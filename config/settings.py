# This module defines pipeline settings as module-level constants.
# Values that vary per deployment are read from the environment (.env is
# loaded first); fixed pipeline limits live here so every stage agrees on them.

import os

from dotenv import load_dotenv

load_dotenv()

# Messaging channel
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "").strip()
TELEGRAM_API_BASE = os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org")

# Dates and weekdays are rendered and matched in this timezone
DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "Australia/Sydney")

# Seconds to wait between users within a notification cycle
NOTIFY_PACING_SECONDS = float(os.getenv("NOTIFY_PACING_SECONDS", "1.0"))

# Scheduler period for `run_pipeline --loop`
CYCLE_INTERVAL_HOURS = float(os.getenv("CYCLE_INTERVAL_HOURS", "6"))

# Comma-separated source adapter names (see ingest/scraper/event_sources.py)
ENABLED_SOURCES = [
    name.strip().lower()
    for name in os.getenv("ENABLED_SOURCES", "mock,timeout,eventbrite").split(",")
    if name.strip()
]

# Where error report files are written (defaults to ./logs)
ERROR_LOG_DIR = os.getenv("ERROR_LOG_DIR", "")

# Upcoming events pulled per user for scoring
MATCH_CANDIDATE_LIMIT = 50

# Upcoming events returned by the public listing
PUBLIC_EVENT_LIMIT = 100

# Ranked matches kept per user
TOP_MATCH_LIMIT = 10

# Notifications sent per user per cycle
MAX_NOTIFICATIONS_PER_USER = 3

# Parallel source fetches during ingestion
MAX_SOURCE_WORKERS = 4

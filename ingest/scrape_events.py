"""
Scrape events from all enabled sources and merge them into the event store.

Usage:
    uv run python -m ingest.scrape_events
    uv run python -m ingest.scrape_events mock eventbrite
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from supabase import Client

from config.settings import MAX_SOURCE_WORKERS
from ingest.event_store import upsert_event
from ingest.scraper.event_sources import EventSource, get_enabled_sources
from models import EventCreate
from shared.db import resolve_client
from shared.error_logger import log_pipeline_error
from shared.utils import print_summary


def _fetch_source(source: EventSource) -> list[EventCreate]:
    """Run one adapter, turning any escaped error into an empty contribution."""
    try:
        return source.fetch_events()
    except Exception as e:
        error_file = log_pipeline_error(
            error_type="source_fetch",
            error_message=str(e),
            context={"source": source.name},
        )
        print(f"✗ Source {source.name} failed. Details logged to: {error_file}")
        return []


def fetch_all_sources(sources: list[EventSource]) -> list[EventCreate]:
    """
    Fetch every source in parallel.

    Sources are independent and writes are deduplicated by key later, so
    fetch order does not matter. Results keep the order of `sources`.
    """
    if not sources:
        return []

    workers = min(MAX_SOURCE_WORKERS, len(sources))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(_fetch_source, sources))

    return [event for batch in results for event in batch]


def scrape_all_events(
    sources: list[EventSource] | None = None,
    supabase: Client | None = None,
) -> dict[str, int]:
    """
    Run one ingestion batch.

    Args:
        sources: Adapters to run (defaults to ENABLED_SOURCES)
        supabase: Optional client

    Returns:
        Dictionary with stats: created, updated, failed
    """
    print(f"[{datetime.now()}] Starting event scraping...")

    supabase = resolve_client(supabase)
    if sources is None:
        sources = get_enabled_sources()

    events = fetch_all_sources(sources)
    print(f"Scraped {len(events)} events from {len(sources)} sources")

    stats = {"created": 0, "updated": 0, "failed": 0}

    for event in events:
        try:
            outcome = upsert_event(event, supabase=supabase)
            stats[outcome] += 1
        except Exception as e:
            stats["failed"] += 1
            error_file = log_pipeline_error(
                error_type="store_write",
                error_message=str(e),
                context={
                    "source": event.source,
                    "source_id": event.source_id,
                    "title": event.title,
                },
            )
            print(f"✗ Error saving event: {event.title[:50]}. Details logged to: {error_file}")
            continue

    print_summary(stats["created"], stats["updated"], stats["failed"])
    return stats


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1:
        # Manual mode: python -m ingest.scrape_events <source> [<source> ...]
        scrape_all_events(get_enabled_sources(sys.argv[1:]))
    else:
        scrape_all_events()

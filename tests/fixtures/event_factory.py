"""Factory functions for creating test event data."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from models import Event, EventCreate


def future(days: float = 1, hours: float = 0) -> datetime:
    """An aware UTC datetime relative to now."""
    return datetime.now(timezone.utc) + timedelta(days=days, hours=hours)


def create_test_event_record(
    title: str = "Test Concert",
    source: str = "mock",
    source_id: str = "test-1",
    start_date: datetime | None = None,
    ticket_url: str = "https://example.com/tickets",
    category: str | None = "Music",
    price: str | None = "$40",
    venue: str | None = "Test Venue",
    description: str | None = "A test event description.",
    **overrides,
) -> EventCreate:
    """Factory for a normalized scraped record (what source adapters emit)."""
    fields: dict[str, Any] = {
        "title": title,
        "source": source,
        "source_id": source_id,
        "start_date": start_date or future(days=2),
        "ticket_url": ticket_url,
        "category": category,
        "price": price,
        "venue": venue,
        "description": description,
    }
    fields.update(overrides)
    return EventCreate(**fields)


def create_test_event_row(
    event_id: str | None = None,
    created_at: datetime | None = None,
    **record_fields,
) -> dict[str, Any]:
    """Factory for an `events` table row as the store returns it."""
    record = create_test_event_record(**record_fields)
    row = record.model_dump(mode="json")
    row["id"] = event_id or str(uuid.uuid4())
    row["created_at"] = (created_at or datetime.now(timezone.utc)).isoformat()
    return row


def create_test_event(**kwargs) -> Event:
    """Factory for a validated Event model."""
    return Event.model_validate(create_test_event_row(**kwargs))

"""
Event store access for the ingestion and matching stages.

Owns the (source, source_id) dedup key: scraped records are merged into the
`events` table so that each listing from a source is stored exactly once.
"""

from datetime import datetime
from typing import Literal

from supabase import Client

from config.settings import MATCH_CANDIDATE_LIMIT, PUBLIC_EVENT_LIMIT
from models import Event, EventCreate
from shared.db import resolve_client
from shared.utils import utc_now

UpsertOutcome = Literal["created", "updated"]


def find_existing_event(
    supabase: Client, source: str, source_id: str
) -> dict | None:
    """Return the stored row for a dedup key, or None for empty/unknown keys."""
    if not source_id:
        return None

    result = (
        supabase.table("events")
        .select("id, created_at")
        .eq("source", source)
        .eq("source_id", source_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def upsert_event(
    record: EventCreate,
    supabase: Client | None = None,
    now: datetime | None = None,
) -> UpsertOutcome:
    """
    Merge a scraped record into the event store.

    An existing row with the same (source, source_id) has every mutable field
    replaced (fields missing from the record are cleared, not kept); its id and
    created_at are preserved. Otherwise a new row is inserted with
    created_at = now. Records with an empty source_id are always inserted.

    Args:
        record: Normalized event from a source adapter
        supabase: Optional client (defaults to one built from the environment)
        now: Override for the ingestion timestamp

    Returns:
        "created" or "updated"

    Raises:
        Any store error; callers isolate failures per record.
    """
    supabase = resolve_client(supabase)
    timestamp = (now or utc_now()).isoformat()
    data = record.model_dump(mode="json")

    existing = find_existing_event(supabase, record.source, record.source_id)

    if existing:
        data["updated_at"] = timestamp
        supabase.table("events").update(data).eq("id", existing["id"]).execute()
        return "updated"

    data["created_at"] = timestamp
    supabase.table("events").insert(data).execute()
    return "created"


def list_upcoming_events(
    categories: list[str] | None = None,
    limit: int = MATCH_CANDIDATE_LIMIT,
    supabase: Client | None = None,
    now: datetime | None = None,
) -> list[Event]:
    """
    Get events that have not started yet, soonest first.

    Args:
        categories: Restrict to these categories (None or empty = all)
        limit: Maximum rows returned (keeps scoring and payloads bounded)
        supabase: Optional client
        now: Override for the "upcoming" cutoff

    Returns:
        Events ordered by start_date ascending
    """
    supabase = resolve_client(supabase)
    cutoff = (now or utc_now()).isoformat()

    query = supabase.table("events").select("*").gte("start_date", cutoff)

    if categories:
        query = query.in_("category", categories)

    response = query.order("start_date", desc=False).limit(limit).execute()

    return [Event.model_validate(row) for row in response.data or []]


def list_public_events(
    category: str | None = None,
    supabase: Client | None = None,
    now: datetime | None = None,
) -> list[Event]:
    """Upcoming events for the public listing; category "all" means no filter."""
    categories = [category] if category and category != "all" else None
    return list_upcoming_events(
        categories=categories,
        limit=PUBLIC_EVENT_LIMIT,
        supabase=supabase,
        now=now,
    )


def get_event(event_id: str, supabase: Client | None = None) -> Event | None:
    """Fetch a single event by id."""
    supabase = resolve_client(supabase)

    response = supabase.table("events").select("*").eq("id", event_id).limit(1).execute()

    if not response.data:
        return None

    return Event.model_validate(response.data[0])

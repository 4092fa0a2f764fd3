"""
Novelty filtering: which matches has the user not been told about yet.

The watermark is the creation time of the user's most recent notification.
An event is new when it was ingested after that watermark; start dates are
not used because they do not change when an event is first discovered.
"""

from datetime import datetime

from dateutil import parser as date_parser
from supabase import Client

from matching.recommendations import find_matches
from models import EventMatch
from shared.db import resolve_client
from shared.utils import EPOCH, ensure_utc


def get_notification_watermark(user_id: str, supabase: Client | None = None) -> datetime:
    """created_at of the user's latest notification, or the epoch if none."""
    supabase = resolve_client(supabase)

    response = (
        supabase.table("notifications")
        .select("created_at")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .limit(1)
        .execute()
    )

    if not response.data:
        return EPOCH

    return ensure_utc(date_parser.isoparse(response.data[0]["created_at"]))


def find_new_matches(
    user_id: str,
    supabase: Client | None = None,
    now: datetime | None = None,
) -> list[EventMatch]:
    """
    Get the user's matches for events created strictly after the watermark.

    Returns:
        Subset of find_matches(user_id), in the same ranked order
    """
    supabase = resolve_client(supabase)

    watermark = get_notification_watermark(user_id, supabase=supabase)
    matches = find_matches(user_id, supabase=supabase, now=now)

    return [m for m in matches if ensure_utc(m.event.created_at) > watermark]

"""
Ranked event recommendations for a single user.
"""

from datetime import datetime

from supabase import Client

from config.settings import MATCH_CANDIDATE_LIMIT, TOP_MATCH_LIMIT
from ingest.event_store import list_upcoming_events
from matching.scorer import score_event
from models import EventMatch
from profiles.preference_store import get_preference
from shared.db import resolve_client


def find_matches(
    user_id: str,
    supabase: Client | None = None,
    now: datetime | None = None,
) -> list[EventMatch]:
    """
    Find upcoming events matching the user's current preference.

    Pulls up to MATCH_CANDIDATE_LIMIT upcoming events (restricted to the
    preferred categories when any are set), drops events that score zero,
    and ranks the rest by score. Ties keep the soonest-first order of the
    candidates.

    Args:
        user_id: User to match for
        supabase: Optional client
        now: Override for the "upcoming" cutoff

    Returns:
        At most TOP_MATCH_LIMIT matches, highest score first
    """
    supabase = resolve_client(supabase)

    preference = get_preference(user_id, supabase=supabase)
    if preference is None:
        return []

    events = list_upcoming_events(
        categories=preference.categories or None,
        limit=MATCH_CANDIDATE_LIMIT,
        supabase=supabase,
        now=now,
    )

    matches: list[EventMatch] = []
    for event in events:
        score, reasons = score_event(event, preference)
        if score > 0:
            matches.append(EventMatch(event=event, score=score, reasons=reasons))

    # sorted() is stable, so equal scores stay in start_date order
    matches = sorted(matches, key=lambda m: m.score, reverse=True)

    return matches[:TOP_MATCH_LIMIT]

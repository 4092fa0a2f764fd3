"""
Preference profile storage.

Each user has one canonical preference row. Older deployments could hold
several rows per user; reads always use the most recently created one and
writes update that same row, so the older rows stay inert.
"""

from datetime import datetime

from supabase import Client

from models import Preference, PreferenceUpdate
from shared.db import resolve_client
from shared.utils import utc_now


def get_preference(user_id: str, supabase: Client | None = None) -> Preference | None:
    """Get the user's current preference profile, or None if they have none."""
    supabase = resolve_client(supabase)

    response = (
        supabase.table("user_preferences")
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .limit(1)
        .execute()
    )

    if not response.data:
        return None

    return Preference.model_validate(response.data[0])


def upsert_preference(
    user_id: str,
    update: PreferenceUpdate | dict,
    supabase: Client | None = None,
    now: datetime | None = None,
) -> Preference:
    """
    Apply a sparse preference delta to the user's canonical profile.

    Fields absent from the delta are left untouched; fields present replace
    the stored value wholesale. Callers that want accumulation (e.g. adding a
    category) must merge with the current value before calling.

    Args:
        user_id: Owner of the profile
        update: PreferenceUpdate or a dict with any subset of its fields
        supabase: Optional client
        now: Override for created_at/updated_at

    Returns:
        The stored profile after the write
    """
    supabase = resolve_client(supabase)

    if isinstance(update, dict):
        update = PreferenceUpdate.model_validate(update)

    changes = update.model_dump(mode="json", exclude_unset=True)
    timestamp = (now or utc_now()).isoformat()

    current = get_preference(user_id, supabase=supabase)

    if current:
        response = (
            supabase.table("user_preferences")
            .update({**changes, "updated_at": timestamp})
            .eq("id", current.id)
            .execute()
        )
    else:
        response = (
            supabase.table("user_preferences")
            .insert({"user_id": user_id, **changes, "created_at": timestamp})
            .execute()
        )

    return Preference.model_validate(response.data[0])

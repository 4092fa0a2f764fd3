"""
User lookups and lifecycle changes for notification recipients.
"""

from typing import Any

from supabase import Client

from models import User
from shared.db import resolve_client


def get_user(user_id: str, supabase: Client | None = None) -> User | None:
    """Fetch a single user by id."""
    supabase = resolve_client(supabase)

    response = supabase.table("users").select("*").eq("id", user_id).limit(1).execute()

    if not response.data:
        return None

    return User.model_validate(response.data[0])


def upsert_user_from_contact(
    telegram_id: str,
    username: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    supabase: Client | None = None,
) -> User:
    """
    Create or refresh a user when they contact the bot.

    Contacting the bot again reactivates a previously deactivated user.
    """
    supabase = resolve_client(supabase)

    profile: dict[str, Any] = {
        "username": username,
        "first_name": first_name,
        "last_name": last_name,
        "is_active": True,
    }

    existing = (
        supabase.table("users")
        .select("id")
        .eq("telegram_id", telegram_id)
        .limit(1)
        .execute()
    )

    if existing.data:
        response = (
            supabase.table("users")
            .update(profile)
            .eq("id", existing.data[0]["id"])
            .execute()
        )
    else:
        response = (
            supabase.table("users")
            .insert({"telegram_id": telegram_id, **profile})
            .execute()
        )

    return User.model_validate(response.data[0])


def deactivate_user(user_id: str, supabase: Client | None = None) -> None:
    """Exclude a user from all future notification cycles."""
    supabase = resolve_client(supabase)
    supabase.table("users").update({"is_active": False}).eq("id", user_id).execute()


def get_active_users_with_preferences(supabase: Client | None = None) -> list[User]:
    """
    Get every active user that has at least one preference row.

    Returns:
        Users in store order
    """
    supabase = resolve_client(supabase)

    users_response = supabase.table("users").select("*").eq("is_active", True).execute()

    if not users_response.data:
        return []

    user_ids = [user["id"] for user in users_response.data]
    prefs_response = (
        supabase.table("user_preferences")
        .select("user_id")
        .in_("user_id", user_ids)
        .execute()
    )

    # Lookup of users that have told us anything about their interests
    users_with_prefs = {row["user_id"] for row in prefs_response.data or []}

    return [
        User.model_validate(user)
        for user in users_response.data
        if user["id"] in users_with_prefs
    ]

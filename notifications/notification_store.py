"""
Append-only log of delivered notifications.
"""

from datetime import datetime

from supabase import Client

from models import Notification
from shared.db import resolve_client
from shared.utils import utc_now


def record_notification(
    user_id: str,
    event_id: str,
    message: str,
    supabase: Client | None = None,
    now: datetime | None = None,
) -> Notification:
    """
    Record a message that was confirmed sent.

    Only call after a successful send: the newest row per user is the
    novelty watermark.
    """
    supabase = resolve_client(supabase)
    timestamp = (now or utc_now()).isoformat()

    response = (
        supabase.table("notifications")
        .insert(
            {
                "user_id": user_id,
                "event_id": event_id,
                "message": message,
                "sent": True,
                "sent_at": timestamp,
                "created_at": timestamp,
            }
        )
        .execute()
    )

    return Notification.model_validate(response.data[0])

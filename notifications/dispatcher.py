"""
Notification cycle: tell each active user about newly matched events.

Usage:
    # Run one notification cycle
    uv run python -m notifications.dispatcher

    # Dry run (render messages, don't send or record anything)
    uv run python -m notifications.dispatcher --dry-run
"""

import argparse
import time

from supabase import Client

from config.settings import MAX_NOTIFICATIONS_PER_USER, NOTIFY_PACING_SECONDS
from ingest.event_store import get_event
from matching.novelty import find_new_matches
from notifications.message_formatter import build_event_alert, build_event_recommendation
from notifications.notification_store import record_notification
from notifications.telegram_sender import send_telegram_message
from profiles.user_store import (
    deactivate_user,
    get_active_users_with_preferences,
    get_user,
)
from shared.db import resolve_client
from shared.error_logger import log_pipeline_error


def run_notification_cycle(
    supabase: Client | None = None,
    dry_run: bool = False,
    pacing_seconds: float = NOTIFY_PACING_SECONDS,
) -> dict[str, int]:
    """
    Send new-match notifications to every active user with preferences.

    Each user gets at most MAX_NOTIFICATIONS_PER_USER messages, best match
    first. A successful send is recorded (advancing the user's watermark); a
    recipient reported unreachable is deactivated and skipped for the rest
    of the cycle; any other send failure is logged and left for the next
    cycle. Users are processed one at a time with a pause after each user
    that had something to send, to stay under the channel's rate limits.

    Args:
        supabase: Optional client
        dry_run: If True, print messages instead of sending. Nothing is
            recorded, renders count as would_send and there is no pacing
        pacing_seconds: Pause between users that had messages

    Returns:
        Dictionary with stats: users_checked, sent, would_send, failed,
        deactivated, errors
    """
    supabase = resolve_client(supabase)
    stats = {
        "users_checked": 0,
        "sent": 0,
        "would_send": 0,
        "failed": 0,
        "deactivated": 0,
        "errors": 0,
    }

    users = get_active_users_with_preferences(supabase=supabase)
    print(f"📊 Checking {len(users)} active users...")

    for user in users:
        stats["users_checked"] += 1

        try:
            matches = find_new_matches(user.id, supabase=supabase)[:MAX_NOTIFICATIONS_PER_USER]

            if not matches:
                continue

            print(f"\nUser {user.id}: {len(matches)} new matches")

            for match in matches:
                message = build_event_alert(match)

                if dry_run:
                    print(f"  [DRY RUN] Would send '{match.event.title}' (score {match.score})")
                    stats["would_send"] += 1
                    continue

                result = send_telegram_message(user.telegram_id, message)

                if result["success"]:
                    record_notification(user.id, match.event.id, message, supabase=supabase)
                    stats["sent"] += 1
                    print(f"  ✓ Sent: {match.event.title[:50]}")
                    continue

                if result.get("unreachable"):
                    # Recipient blocked the bot; stop messaging them until they return
                    deactivate_user(user.id, supabase=supabase)
                    stats["deactivated"] += 1
                    print(f"  ⊘ User {user.id} unreachable, deactivated")
                    break

                stats["failed"] += 1
                error_file = log_pipeline_error(
                    error_type="sending",
                    error_message=result.get("error", "Unknown error"),
                    context={
                        "user_id": user.id,
                        "telegram_id": user.telegram_id,
                        "event_id": match.event.id,
                    },
                )
                print(f"  ✗ Failed to send to user {user.id}. Details logged to: {error_file}")

            # Rate limiting between users
            if not dry_run:
                time.sleep(pacing_seconds)

        except Exception as e:
            stats["errors"] += 1
            error_file = log_pipeline_error(
                error_type="dispatch",
                error_message=str(e),
                context={"user_id": user.id},
            )
            print(f"  ✗ Error processing user {user.id}. Details logged to: {error_file}")
            continue

    print(f"\n{'=' * 60}")
    print("Notification Cycle Complete")
    print(f"{'=' * 60}")
    print(f"Users:       {stats['users_checked']}")
    print(f"Sent:        {stats['sent']}")
    if dry_run:
        print(f"Would send:  {stats['would_send']}")
    print(f"Failed:      {stats['failed']}")
    print(f"Deactivated: {stats['deactivated']}")
    print(f"Errors:      {stats['errors']}")

    return stats


def notify_user(user_id: str, event_id: str, supabase: Client | None = None) -> dict:
    """
    Send a one-off recommendation of a specific event to a specific user.

    Raises:
        ValueError: If the user or the event does not exist

    Returns:
        The send result from send_telegram_message()
    """
    supabase = resolve_client(supabase)

    user = get_user(user_id, supabase=supabase)
    event = get_event(event_id, supabase=supabase)

    if user is None or event is None:
        raise ValueError("User or event not found")

    message = build_event_recommendation(event)
    result = send_telegram_message(user.telegram_id, message)

    if result["success"]:
        record_notification(user.id, event.id, message, supabase=supabase)
    elif result.get("unreachable"):
        deactivate_user(user.id, supabase=supabase)

    return result


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Send new event notifications")

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (don't actually send messages)",
    )

    args = parser.parse_args()
    run_notification_cycle(dry_run=args.dry_run)


if __name__ == "__main__":
    main()

"""
Telegram message templates for event notifications.

Messages use Telegram's legacy Markdown: *bold* and [label](url) links.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from config.settings import DISPLAY_TIMEZONE
from models import Event, EventMatch

ALERT_DESCRIPTION_LIMIT = 150
RECOMMENDATION_DESCRIPTION_LIMIT = 200
MAX_REASONS_SHOWN = 3
REASON_SEPARATOR = "\n• "

# Characters with meaning in Telegram legacy Markdown
MARKDOWN_SPECIAL_CHARS = ("_", "*", "`", "[")


def _local(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(ZoneInfo(DISPLAY_TIMEZONE))


def format_date(dt: datetime) -> str:
    """e.g. 'Friday, January 30, 2026'"""
    return _local(dt).strftime("%A, %B %d, %Y")


def format_time(dt: datetime) -> str:
    """e.g. '7:30 PM'"""
    return _local(dt).strftime("%I:%M %p").lstrip("0")


def escape_markdown(text: str | None) -> str:
    """Escape scraped text so it renders literally inside a Markdown message."""
    if not text:
        return ""
    for char in MARKDOWN_SPECIAL_CHARS:
        text = text.replace(char, f"\\{char}")
    return text


def truncate_description(description: str | None, limit: int) -> str:
    if not description:
        return ""
    if len(description) <= limit:
        return description
    return description[:limit] + "..."


def _event_details(event: Event) -> str:
    return (
        f"📅 {format_date(event.start_date)} at {format_time(event.start_date)}\n"
        f"📍 {escape_markdown(event.venue) or 'TBA'}\n"
        f"💰 {escape_markdown(event.price) or 'Free'}"
    )


def build_event_alert(match: EventMatch) -> str:
    """
    Build the message for a newly matched event.

    Args:
        match: Scored event with its ranked reasons

    Returns:
        Markdown text ready for send_telegram_message()
    """
    event = match.event
    reasons = REASON_SEPARATOR.join(escape_markdown(r) for r in match.reasons[:MAX_REASONS_SHOWN])
    description = escape_markdown(truncate_description(event.description, ALERT_DESCRIPTION_LIMIT))

    return f"""🎉 *New Event Alert!*

*{escape_markdown(event.title)}*

{_event_details(event)}
🏷️ {escape_markdown(event.category) or 'General'}

✨ *Why you'll love it:*
• {reasons}

{description}

🎫 [Get Tickets]({event.ticket_url})

---
Use /events to see more recommendations!"""


def build_event_recommendation(event: Event) -> str:
    """Build the message for a one-off recommendation of a specific event."""
    description = escape_markdown(
        truncate_description(event.description, RECOMMENDATION_DESCRIPTION_LIMIT)
    )

    return f"""🎉 *Event Recommendation*

*{escape_markdown(event.title)}*

{_event_details(event)}

{description}

🎫 [Get Tickets]({event.ticket_url})"""

"""
Explainable relevance scoring of events against a preference profile.

Scoring is additive: every rule is checked independently against the same
preference, and each satisfied rule adds points plus one human-readable
reason. Reasons are collected in rule order because they are shown to users
in that order.
"""

import math
import re
from zoneinfo import ZoneInfo

from config.settings import DISPLAY_TIMEZONE
from models import Event, Preference

CATEGORY_POINTS = 3
PRICE_POINTS = 2
DAY_POINTS = 1
VENUE_POINTS = 1
INTEREST_POINTS = 1

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Price band -> inclusive (min, max); unknown bands match any price
PRICE_BANDS: dict[str, tuple[float, float]] = {
    "free": (0, 0),
    "0-50": (0, 50),
    "50-100": (50, 100),
    "100+": (100, math.inf),
}
ANY_PRICE: tuple[float, float] = (0, math.inf)


def extract_price(price: str | None) -> int:
    """
    Read a comparable amount from free-text price.

    "Free" anywhere in the text (any case) or no digits at all means 0;
    otherwise the first run of digits is the price ("From $89" -> 89).
    """
    if not price:
        return 0
    if "free" in price.lower():
        return 0

    match = re.search(r"\d+", price)
    return int(match.group(0)) if match else 0


def parse_price_range(price_range: str) -> tuple[float, float]:
    """Map a price band name to its inclusive bounds."""
    return PRICE_BANDS.get(price_range, ANY_PRICE)


def event_weekday(event: Event) -> str:
    """English weekday name of the event start in the display timezone."""
    start = event.start_date
    if start.tzinfo is not None:
        start = start.astimezone(ZoneInfo(DISPLAY_TIMEZONE))
    return WEEKDAYS[start.weekday()]


def score_event(event: Event, preference: Preference) -> tuple[int, list[str]]:
    """
    Score an event based on user preferences.

    Args:
        event: Candidate event
        preference: The user's current profile (never modified)

    Returns:
        (points, reasons) - reasons ordered category, price, day, venue, interest
    """
    score = 0
    reasons: list[str] = []

    # Category match
    if event.category in preference.categories:
        score += CATEGORY_POINTS
        reasons.append(f"Matches your interest in {event.category}")

    # Price match
    if preference.price_range:
        low, high = parse_price_range(preference.price_range)
        if low <= extract_price(event.price) <= high:
            score += PRICE_POINTS
            reasons.append("Within your budget")

    # Day of week match
    if preference.preferred_days:
        weekday = event_weekday(event)
        if weekday in preference.preferred_days:
            score += DAY_POINTS
            reasons.append(f"Happening on {weekday}")

    # Venue match (substring, case-insensitive)
    if preference.preferred_venues and event.venue:
        venue = event.venue.lower()
        if any(v.strip() and v.strip().lower() in venue for v in preference.preferred_venues):
            score += VENUE_POINTS
            reasons.append("At a venue you like")

    # Interest keyword match; only the first matching keyword counts
    if preference.interests:
        event_text = f"{event.title} {event.description or ''}".lower()
        for interest in preference.interests.lower().split(","):
            keyword = interest.strip()
            if keyword and keyword in event_text:
                score += INTEREST_POINTS
                reasons.append(f"Related to your interest in {keyword}")
                break

    return score, reasons

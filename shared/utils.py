from datetime import datetime, timezone
from dateutil import parser as date_parser

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_date_string(date_str: str) -> str | None:
    """Parse various date formats into ISO format."""
    if not date_str:
        return None
    try:
        dt = date_parser.parse(date_str, fuzzy=True)
        return str(dt.isoformat())  # Explicit cast to satisfy mypy
    except (ValueError, OverflowError, TypeError):
        return None


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so store timestamps compare safely."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def print_summary(created: int, updated: int, failed: int) -> None:
    """Print ingestion summary."""
    print(f"\n{'=' * 60}")
    print(f"[{datetime.now()}] Ingestion Complete!")
    print(f"{'=' * 60}")
    print(f"✓ Created: {created}")
    print(f"↻ Updated: {updated}")
    print(f"✗ Failed:  {failed}")
    print(f"{'=' * 60}\n")

"""Pydantic models for event data."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from models.types import EventID


class EventBase(BaseModel):
    """Event fields produced by source adapters and stored as-is."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    title: str = Field(..., min_length=1)
    description: str | None = None
    venue: str | None = None
    address: str | None = None
    start_date: datetime
    end_date: datetime | None = None
    image_url: str | None = None
    ticket_url: str = Field(..., min_length=1)
    price: str | None = None
    category: str | None = None
    organizer: str | None = None


class EventCreate(EventBase):
    """Normalized scraped record (before ID assignment).

    (source, source_id) is the dedup key; an empty source_id never merges.
    """

    source: str = Field(..., min_length=1)
    source_id: str = ""


class Event(EventCreate):
    """Complete event record from database."""

    id: EventID
    created_at: datetime
    updated_at: datetime | None = None

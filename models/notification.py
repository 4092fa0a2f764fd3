"""Pydantic models for the notification log and ranked matches."""

from datetime import datetime

from pydantic import BaseModel, Field

from models.event import Event
from models.types import EventID, NotificationID, UserID


class Notification(BaseModel):
    """Audit record of a message that was delivered."""

    id: NotificationID
    user_id: UserID
    event_id: EventID
    message: str
    sent: bool = True
    sent_at: datetime | None = None
    created_at: datetime


class EventMatch(BaseModel):
    """An event scored against a user's preference."""

    event: Event
    score: int = Field(..., gt=0)
    reasons: list[str] = Field(default_factory=list)

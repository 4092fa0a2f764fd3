"""Pydantic models for data validation and type checking."""

from models.event import Event, EventBase, EventCreate
from models.notification import EventMatch, Notification
from models.preference import Preference, PreferenceUpdate
from models.user import User

__all__ = [
    "Event",
    "EventBase",
    "EventCreate",
    "EventMatch",
    "Notification",
    "Preference",
    "PreferenceUpdate",
    "User",
]

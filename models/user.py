"""Pydantic models for notification recipients."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from models.types import UserID


class User(BaseModel):
    """Telegram user who receives event notifications."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: UserID
    telegram_id: str
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_active: bool = True
    created_at: datetime | None = None

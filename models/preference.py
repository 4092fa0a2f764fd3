"""Pydantic models for user interest profiles."""

import json
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.types import (
    Budget,
    CategoryList,
    PreferenceID,
    PriceRange,
    UserID,
    WeekdayList,
)


class PreferenceUpdate(BaseModel):
    """Sparse preference delta.

    Only fields that were explicitly set are written; each one replaces the
    stored value wholesale (lists are not unioned).
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    categories: CategoryList | None = None
    price_range: PriceRange | None = None
    preferred_days: WeekdayList | None = None
    preferred_venues: list[str] | None = None
    interests: str | None = None
    budget: Budget | None = None


class Preference(BaseModel):
    """Stored preference profile for one user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: PreferenceID
    user_id: UserID
    categories: CategoryList = Field(default_factory=list)
    price_range: PriceRange | None = None
    preferred_days: WeekdayList = Field(default_factory=list)
    preferred_venues: list[str] = Field(default_factory=list)
    interests: str | None = None
    budget: Budget | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("categories", "preferred_days", "preferred_venues", mode="before")
    @classmethod
    def _coerce_list(cls, value):
        """Accept NULL columns and JSON-encoded text arrays from older rows."""
        if value is None:
            return []
        if isinstance(value, str):
            return json.loads(value) if value.strip().startswith("[") else [value]
        return value

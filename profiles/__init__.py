"""
User and preference profiles consumed by the matching pipeline.
"""

from .preference_store import get_preference, upsert_preference
from .user_store import (
    deactivate_user,
    get_active_users_with_preferences,
    get_user,
    upsert_user_from_contact,
)

__all__ = [
    'get_preference',
    'upsert_preference',
    'get_user',
    'upsert_user_from_contact',
    'deactivate_user',
    'get_active_users_with_preferences',
]

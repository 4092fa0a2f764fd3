"""Shared type definitions for type checking.

Uses NewType for IDs to provide compile-time type safety - prevents mixing
different ID types (e.g., passing UserID where EventID expected).

Uses TypeAlias for complex types that are purely structural.
"""

from typing import NewType, TypeAlias

# ID types using NewType for type safety
EventID = NewType("EventID", str)
UserID = NewType("UserID", str)
PreferenceID = NewType("PreferenceID", str)
NotificationID = NewType("NotificationID", str)

# Structural aliases using TypeAlias
CategoryList: TypeAlias = list[str]
WeekdayList: TypeAlias = list[str]  # "Monday" .. "Sunday"
PriceRange: TypeAlias = str  # "free", "0-50", "50-100", "100+" (others = any price)
Budget: TypeAlias = str  # "low", "medium", "high"

"""
Matching engine for the event pipeline.

This module handles:
- Scoring events against a user's preference profile
- Ranking a user's upcoming matches
- Filtering matches down to events the user has not been notified about
"""

from .novelty import find_new_matches, get_notification_watermark
from .recommendations import find_matches
from .scorer import extract_price, parse_price_range, score_event

__all__ = [
    'score_event',
    'extract_price',
    'parse_price_range',
    'find_matches',
    'find_new_matches',
    'get_notification_watermark',
]

"""
Notification system for the event pipeline.

This module handles:
- Rendering event alerts for Telegram
- Sending messages via the Telegram Bot API
- Recording delivered notifications
- Running notification cycles across all active users
"""

from .dispatcher import notify_user, run_notification_cycle
from .telegram_sender import send_telegram_message

__all__ = [
    'run_notification_cycle',
    'notify_user',
    'send_telegram_message',
]

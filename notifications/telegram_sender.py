"""
Message delivery via the Telegram Bot API.

Distinguishes recipients that can no longer be reached (the user blocked the
bot or deleted their account) from failures worth trying again next cycle.
"""

import random
import time
from typing import Any

import requests

from config.settings import TELEGRAM_API_BASE, TELEGRAM_BOT_TOKEN

# Telegram answers 403 Forbidden when the bot was blocked or the user is gone
UNREACHABLE_STATUS_CODES = {403}
MAX_RETRY_AFTER_SECONDS = 30


def _describe(response: requests.Response) -> str:
    try:
        payload = response.json()
        return f"http {response.status_code}: {payload.get('description', '')}"
    except ValueError:
        return f"http {response.status_code}: {(response.text or '')[:300]}"


def _retry_after(response: requests.Response, attempt: int) -> float:
    """Prefer the server's retry_after hint, else exponential backoff."""
    try:
        hinted = float(response.json().get("parameters", {}).get("retry_after", 0))
    except (ValueError, AttributeError):
        hinted = 0
    delay = hinted or 2**attempt
    return min(delay, MAX_RETRY_AFTER_SECONDS) + random.uniform(0, 0.5)


def send_telegram_message(
    chat_id: str,
    text: str,
    parse_mode: str = "Markdown",
    token: str | None = None,
    max_retries: int = 3,
) -> dict[str, Any]:
    """
    Send a message to a Telegram chat.

    429 and 5xx responses and network errors are retried with backoff; other
    4xx responses fail immediately.

    Args:
        chat_id: Recipient's Telegram chat id
        text: Message body
        parse_mode: Telegram markup ("Markdown" supports *bold* and links)
        token: Bot token (defaults to TELEGRAM_BOT_TOKEN)
        max_retries: Attempts for retryable failures

    Returns:
        Dictionary with 'success' (bool), 'message_id' (if success),
        'error' (if failed) and 'unreachable' (True when the recipient
        is permanently unreachable)
    """
    token = token or TELEGRAM_BOT_TOKEN
    if not token:
        return {"success": False, "unreachable": False, "error": "TELEGRAM_BOT_TOKEN is not set"}

    url = f"{TELEGRAM_API_BASE}/bot{token}/sendMessage"
    payload = {
        "chat_id": chat_id,
        "text": text,
        "parse_mode": parse_mode,
        "disable_web_page_preview": True,
    }

    last_error = "no attempts made"

    for attempt in range(max_retries):
        try:
            response = requests.post(url, json=payload, timeout=30)
        except requests.RequestException as e:
            last_error = repr(e)
            if attempt < max_retries - 1:
                time.sleep(2**attempt)
            continue

        if response.status_code == 200:
            try:
                result = response.json().get("result", {})
            except ValueError:
                result = {}
            return {"success": True, "unreachable": False, "message_id": result.get("message_id")}

        last_error = _describe(response)

        if response.status_code in UNREACHABLE_STATUS_CODES:
            return {"success": False, "unreachable": True, "error": last_error}

        if response.status_code == 429 or response.status_code >= 500:
            if attempt < max_retries - 1:
                time.sleep(_retry_after(response, attempt))
            continue

        # Other client errors will not succeed on retry
        break

    return {"success": False, "unreachable": False, "error": last_error}

"""
HTTP fetching for event listing pages.
"""

import requests
from typing import Optional
import time


class EventPageFetcher:
    """Fetches listing pages with retries and exponential backoff"""

    def __init__(self, max_retries: int = 3, timeout: int = 30):
        self.max_retries = max_retries
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
            }
        )

    def fetch_page(self, url: str) -> Optional[str]:
        """Fetch HTML content of a listing page, None once retries run out"""
        for attempt in range(self.max_retries):
            try:
                response = self.session.get(url, timeout=self.timeout)
                response.raise_for_status()
                return response.text
            except Exception as e:
                if attempt < self.max_retries - 1:
                    print(f"  ⚠ Page fetch failed (attempt {attempt + 1}): {e}")
                    time.sleep(2**attempt)
                else:
                    print(f"  ✗ Could not fetch page: {url} - {e}")
                    return None
        return None

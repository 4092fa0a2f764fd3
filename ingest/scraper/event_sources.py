"""
Source adapters that turn external listings into normalized event records.
Each adapter knows how to read one origin; all of them emit EventCreate.
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import cast
from urllib.parse import urljoin, urlparse
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup
from bs4.element import Tag
from pydantic import ValidationError

from config.settings import DISPLAY_TIMEZONE, ENABLED_SOURCES
from ingest.scraper.event_scraper import EventPageFetcher
from models import EventCreate
from shared.error_logger import log_pipeline_error
from shared.utils import parse_date_string


class EventSource(ABC):
    """Base adapter for one event origin"""

    name: str = ""

    @abstractmethod
    def fetch_events(self) -> list[EventCreate]:
        """
        Fetch normalized events from this origin.

        Never raises: a failing origin yields an empty list.
        """
        pass


class HtmlListingSource(EventSource):
    """Adapter for origins that publish a scrapeable HTML listing page"""

    listing_url: str = ""

    def __init__(self, fetcher: EventPageFetcher | None = None):
        self.fetcher = fetcher or EventPageFetcher()

    def fetch_events(self) -> list[EventCreate]:
        print(f"→ Fetching {self.name}: {self.listing_url}")

        html = self.fetcher.fetch_page(self.listing_url)
        if not html:
            return []

        try:
            events = self.extract_events(html, self.listing_url)
        except Exception as e:
            error_file = log_pipeline_error(
                error_type="source_fetch",
                error_message=str(e),
                context={"source": self.name, "url": self.listing_url},
            )
            print(f"  ✗ Could not parse {self.name} listing. Details logged to: {error_file}")
            return []

        print(f"  ✓ Found {len(events)} events")
        return events

    @abstractmethod
    def extract_events(self, html: str, base_url: str) -> list[EventCreate]:
        """Extract normalized events from listing page HTML."""
        pass

    def _build_event(self, **fields) -> EventCreate | None:
        """Validate one scraped card; cards missing required fields are skipped."""
        try:
            return EventCreate(source=self.name, **fields)
        except ValidationError as e:
            print(f"  ⊘ Skipping incomplete {self.name} card: {e.error_count()} error(s)")
            return None


def _first_text(card: Tag, selector: str) -> str:
    element = card.select_one(selector)
    return element.get_text(strip=True) if element else ""


def _first_attr(card: Tag, selector: str, attr: str) -> str:
    element = card.select_one(selector)
    return cast(str, element.get(attr, "")) if element else ""


def _card_start_date(card: Tag) -> datetime:
    """
    Read a <time datetime=...> stamp from the card, falling back to now.

    Listings print local times; stamps without an offset are taken to be in
    the display timezone so they are stored as absolute instants.
    """
    local_zone = ZoneInfo(DISPLAY_TIMEZONE)
    stamp = _first_attr(card, "time", "datetime") or _first_text(card, "time, .date")
    parsed = parse_date_string(stamp)
    if parsed:
        start = datetime.fromisoformat(parsed)
        if start.tzinfo is None:
            start = start.replace(tzinfo=local_zone)
        return start
    return datetime.now(local_zone)


class TimeoutSydneySource(HtmlListingSource):
    """Time Out Sydney "what's on today" listing"""

    name = "timeout"
    listing_url = "https://www.timeout.com/sydney/things-to-do/whats-on-in-sydney-today"

    def extract_events(self, html: str, base_url: str) -> list[EventCreate]:
        soup = BeautifulSoup(html, "html.parser")
        events: list[EventCreate] = []

        for card in soup.select('.event-card, .card-item, [data-test="event-card"]'):
            title = _first_text(card, 'h3, .card-title, [data-test="event-title"]')
            href = _first_attr(card, "a", "href")
            if not title or not href:
                continue

            event = self._build_event(
                title=title,
                description=_first_text(card, ".description, .event-description") or None,
                venue=_first_text(card, ".venue, .location") or None,
                address="Sydney, NSW",
                start_date=_card_start_date(card),
                image_url=_first_attr(card, "img", "src") or None,
                ticket_url=urljoin("https://www.timeout.com", href),
                category="General",
                source_id=urlparse(href).path.rstrip("/").split("/")[-1],
            )
            if event:
                events.append(event)

        return events


class EventbriteSource(HtmlListingSource):
    """Eventbrite search results for the Sydney area"""

    name = "eventbrite"
    listing_url = "https://www.eventbrite.com.au/d/australia--sydney/events/"

    def extract_events(self, html: str, base_url: str) -> list[EventCreate]:
        soup = BeautifulSoup(html, "html.parser")
        events: list[EventCreate] = []

        for card in soup.select('[data-testid="search-event-card"], .search-event-card'):
            title = _first_text(card, "h2, h3, .event-card__title")
            href = _first_attr(card, "a", "href")
            if not title or not href:
                continue

            event = self._build_event(
                title=title,
                venue=_first_text(card, ".event-card__venue, .card-text--truncated__one") or None,
                address="Sydney, NSW",
                start_date=_card_start_date(card),
                image_url=_first_attr(card, "img", "src") or None,
                ticket_url=urljoin("https://www.eventbrite.com.au", href),
                price=_first_text(card, ".event-card__price") or "Free",
                category="General",
                source_id=self._event_id_from_url(href),
            )
            if event:
                events.append(event)

        return events

    @staticmethod
    def _event_id_from_url(href: str) -> str:
        """Eventbrite ids appear as an 'e-<id>' segment or a '-tickets-<id>' suffix."""
        for segment in urlparse(href).path.split("/"):
            if segment.startswith("e-"):
                return segment[2:]
        match = re.search(r"tickets-(\d+)", href)
        return match.group(1) if match else ""


class MockEventSource(EventSource):
    """Fixed sample catalogue, useful for local runs and demos"""

    name = "mock"

    def fetch_events(self) -> list[EventCreate]:
        now = datetime.now(ZoneInfo(DISPLAY_TIMEZONE))
        tomorrow = now + timedelta(days=1)
        next_week = now + timedelta(days=7)
        this_morning = now.replace(hour=10, minute=0, second=0, microsecond=0)

        samples = [
            {
                "title": "Sydney Opera House: La Bohème",
                "description": "Experience Puccini's timeless masterpiece at the iconic Sydney Opera House. A tragic love story set in 19th-century Paris.",
                "venue": "Sydney Opera House",
                "address": "Bennelong Point, Sydney NSW 2000",
                "start_date": tomorrow,
                "end_date": tomorrow,
                "image_url": "https://images.unsplash.com/photo-1514320291840-2e0a9bf2a9ae?w=800",
                "ticket_url": "https://www.sydneyoperahouse.com",
                "price": "From $89",
                "category": "Arts & Culture",
                "organizer": "Sydney Opera House",
                "source_id": "opera-1",
            },
            {
                "title": "Vivid Sydney",
                "description": "The world's largest festival of light, music and ideas returns to Sydney. Explore stunning light installations across the city.",
                "venue": "Multiple Locations",
                "address": "Sydney CBD, NSW 2000",
                "start_date": next_week,
                "image_url": "https://images.unsplash.com/photo-1492684223066-81342ee5ff30?w=800",
                "ticket_url": "https://www.vividsydney.com",
                "price": "Free",
                "category": "Festival",
                "organizer": "Destination NSW",
                "source_id": "vivid",
            },
            {
                "title": "Bondi Beach Markets",
                "description": "Shop local art, fashion, jewelry, homewares and enjoy delicious food at this iconic beachside market.",
                "venue": "Bondi Beach",
                "address": "Bondi Beach Public School, Campbell Parade, Bondi Beach NSW",
                "start_date": this_morning,
                "image_url": "https://images.unsplash.com/photo-1555939594-58d7cb561ad1?w=800",
                "ticket_url": "https://www.bondimarkets.com.au",
                "price": "Free Entry",
                "category": "Markets",
                "organizer": "Bondi Markets",
                "source_id": "bondi-markets",
            },
            {
                "title": "Sydney Harbour Bridge Climb",
                "description": "Climb to the summit of the iconic Sydney Harbour Bridge for breathtaking 360-degree views of the city.",
                "venue": "Sydney Harbour Bridge",
                "address": "3 Cumberland Street, The Rocks NSW 2000",
                "start_date": now,
                "image_url": "https://images.unsplash.com/photo-1506973035872-a4ec16b8e8d9?w=800",
                "ticket_url": "https://www.bridgeclimb.com",
                "price": "From $174",
                "category": "Adventure",
                "organizer": "BridgeClimb Sydney",
                "source_id": "bridge-climb",
            },
            {
                "title": "Taronga Zoo Twilight Concert Series",
                "description": "Enjoy live music performances with stunning views of Sydney Harbour as the sun sets over the city.",
                "venue": "Taronga Zoo",
                "address": "Bradleys Head Road, Mosman NSW 2088",
                "start_date": next_week,
                "image_url": "https://images.unsplash.com/photo-1516734212186-a967f81ad0d7?w=800",
                "ticket_url": "https://taronga.org.au/twilight-concerts",
                "price": "From $65",
                "category": "Music",
                "organizer": "Taronga Conservation Society",
                "source_id": "taronga-concert",
            },
            {
                "title": "Royal Botanic Garden Sydney Tours",
                "description": "Join a free guided walking tour through one of the world's finest botanic gardens in the heart of Sydney.",
                "venue": "Royal Botanic Garden",
                "address": "Mrs Macquaries Road, Sydney NSW 2000",
                "start_date": now,
                "image_url": "https://images.unsplash.com/photo-1585320806297-9794b3e4eeae?w=800",
                "ticket_url": "https://www.botanicgardens.org.au",
                "price": "Free",
                "category": "Nature",
                "organizer": "Botanic Gardens of Sydney",
                "source_id": "botanic-tour",
            },
        ]

        return [EventCreate(source=self.name, **sample) for sample in samples]


SOURCE_REGISTRY: dict[str, type[EventSource]] = {
    MockEventSource.name: MockEventSource,
    TimeoutSydneySource.name: TimeoutSydneySource,
    EventbriteSource.name: EventbriteSource,
}


def get_enabled_sources(names: list[str] | None = None) -> list[EventSource]:
    """Instantiate adapters by name; unknown names are reported and skipped"""
    sources: list[EventSource] = []

    for name in names if names is not None else ENABLED_SOURCES:
        source_cls = SOURCE_REGISTRY.get(name)
        if source_cls is None:
            print(f"  ⚠ Unknown event source: {name}, skipping")
            continue
        sources.append(source_cls())

    return sources

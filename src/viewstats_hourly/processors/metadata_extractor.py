"""
Video title and publish timestamp extraction

Both values are resolved with ordered fallback chains. Each strategy is an
independent function returning a value or None, and the first value found
wins. ViewStats does not expose a stable markup contract, so every strategy
is a best-effort pattern match:

Title:
1. headings and title/video-classed elements, in selector order
2. the document title, cut before the first " - "
3. a fixed placeholder

Publish timestamp (T0):
1. the ``datetime`` attribute of the first ``<time>`` element
2. date patterns scanned in the page text, most precise first

A missing title degrades the output; a missing T0 is fatal.

Author: feature-developer
"""

import re
import logging
from datetime import datetime, timezone, tzinfo
from typing import Callable, List, Optional, Sequence, Tuple, Union
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup

from ..core.exceptions import PublishTimestampNotFoundError
from ..models.metadata import PageSnapshot, VideoMetadata


TITLE_SELECTORS = [
    'h2',
    'h1',
    '[class*="title"]',
    '[class*="Title"]',
    '[class*="video"]',
]

MIN_TITLE_LENGTH = 10

DATE_ONLY_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# (pattern, strptime formats to try on its first match)
TEXT_TIMESTAMP_PATTERNS: List[Tuple[re.Pattern, Sequence[str]]] = [
    (re.compile(r'(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})'), ['%Y-%m-%dT%H:%M:%S']),
    (re.compile(r'(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})'), ['%Y-%m-%d %H:%M:%S']),
    (re.compile(r'(\w+ \d{1,2}, \d{4} at \d{1,2}:\d{2} [AP]M)'),
     ['%B %d, %Y at %I:%M %p', '%b %d, %Y at %I:%M %p']),
    (re.compile(r'(\w+ \d{1,2}, \d{4})'), ['%B %d, %Y', '%b %d, %Y']),
]


def format_iso_utc(moment: datetime) -> str:
    """Render an aware datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``"""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime('%Y-%m-%dT%H:%M:%S') + f".{moment.microsecond // 1000:03d}Z"


class MetadataExtractor:
    """Resolves VideoMetadata from a page snapshot"""

    def __init__(self,
                 platform_brand: str = "ViewStats",
                 excluded_titles: Sequence[str] = ("MrBeast",),
                 title_placeholder: str = "Unknown",
                 naive_timezone: Union[str, tzinfo, None] = None):
        self.platform_brand = platform_brand
        self.excluded_titles = set(excluded_titles)
        self.title_placeholder = title_placeholder
        if isinstance(naive_timezone, str):
            naive_timezone = ZoneInfo(naive_timezone)
        self.naive_timezone = naive_timezone
        self.logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------ title

    def _is_plausible_title(self, text: str) -> bool:
        return (
            bool(text)
            and text not in self.excluded_titles
            and len(text) > MIN_TITLE_LENGTH
            and self.platform_brand not in text
        )

    def _title_from_elements(self, soup: BeautifulSoup, snapshot: PageSnapshot) -> Optional[str]:
        for selector in TITLE_SELECTORS:
            for element in soup.select(selector):
                text = element.get_text().strip()
                if self._is_plausible_title(text):
                    self.logger.debug(f"Title found with selector {selector}")
                    return text
        return None

    def _title_from_document_title(self, soup: BeautifulSoup, snapshot: PageSnapshot) -> Optional[str]:
        document_title = snapshot.document_title
        if not document_title and soup.title and soup.title.string:
            document_title = soup.title.string

        if not document_title or self.platform_brand in document_title:
            return None

        parts = document_title.split(' - ')
        if len(parts) > 1:
            return parts[0].strip()
        return None

    def extract_title(self, snapshot: PageSnapshot, soup: Optional[BeautifulSoup] = None) -> Optional[str]:
        """First title found by the strategy chain, or None"""
        if soup is None:
            soup = BeautifulSoup(snapshot.html or "", 'html.parser')

        strategies: List[Callable[[BeautifulSoup, PageSnapshot], Optional[str]]] = [
            self._title_from_elements,
            self._title_from_document_title,
        ]
        for strategy in strategies:
            title = strategy(soup, snapshot)
            if title:
                return title
        return None

    # -------------------------------------------------------------- timestamp

    def _localize(self, moment: datetime) -> datetime:
        """Attach the configured zone to a naive datetime (local zone by default)"""
        if moment.tzinfo is not None:
            return moment
        if self.naive_timezone is not None:
            return moment.replace(tzinfo=self.naive_timezone)
        return moment.astimezone()

    def parse_datetime_attribute(self, value: str) -> Optional[datetime]:
        """Parse an ISO 8601 ``datetime`` attribute; date-only values are UTC midnight"""
        value = (value or "").strip()
        if not value:
            return None

        if value.endswith('Z'):
            value = value[:-1] + '+00:00'

        try:
            moment = datetime.fromisoformat(value)
        except ValueError:
            self.logger.debug(f"Unparseable datetime attribute: {value!r}")
            return None

        if DATE_ONLY_PATTERN.match(value):
            return moment.replace(tzinfo=timezone.utc)
        return self._localize(moment)

    def _timestamp_from_time_element(self, soup: BeautifulSoup, snapshot: PageSnapshot) -> Optional[datetime]:
        element = soup.select_one('time[datetime]')
        if element is None:
            return None
        return self.parse_datetime_attribute(element.get('datetime', ''))

    def _timestamp_from_page_text(self, soup: BeautifulSoup, snapshot: PageSnapshot) -> Optional[datetime]:
        text = snapshot.body_text
        if not text and soup.body is not None:
            text = soup.body.get_text('\n')
        if not text:
            return None

        for pattern, formats in TEXT_TIMESTAMP_PATTERNS:
            match = pattern.search(text)
            if not match:
                continue
            for fmt in formats:
                try:
                    return self._localize(datetime.strptime(match.group(1), fmt))
                except ValueError:
                    continue
            self.logger.debug(f"Could not parse date text {match.group(1)!r}")
        return None

    def extract_publish_timestamp(self, snapshot: PageSnapshot,
                                  soup: Optional[BeautifulSoup] = None) -> Optional[str]:
        """T0 as an ISO 8601 UTC string, or None"""
        if soup is None:
            soup = BeautifulSoup(snapshot.html or "", 'html.parser')

        strategies: List[Callable[[BeautifulSoup, PageSnapshot], Optional[datetime]]] = [
            self._timestamp_from_time_element,
            self._timestamp_from_page_text,
        ]
        for strategy in strategies:
            moment = strategy(soup, snapshot)
            if moment is not None:
                return format_iso_utc(moment)
        return None

    # ------------------------------------------------------------------- both

    def extract(self, snapshot: PageSnapshot) -> VideoMetadata:
        """
        Resolve title and T0

        Raises:
            PublishTimestampNotFoundError: no strategy produced a timestamp
        """
        soup = BeautifulSoup(snapshot.html or "", 'html.parser')

        publish_timestamp = self.extract_publish_timestamp(snapshot, soup)
        if publish_timestamp is None:
            raise PublishTimestampNotFoundError()

        title = self.extract_title(snapshot, soup)
        is_placeholder = title is None
        if is_placeholder:
            self.logger.warning(f"Video title not found, using '{self.title_placeholder}'")
            title = self.title_placeholder

        return VideoMetadata(
            title=title,
            publish_timestamp_utc=publish_timestamp,
            title_is_placeholder=is_placeholder
        )

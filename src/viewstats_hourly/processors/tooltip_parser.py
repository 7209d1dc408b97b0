"""
Tooltip text parsing

Hovering the ViewStats hourly chart surfaces a tooltip such as
``Hour 5: 12,345 views``. When no tooltip element is found the same data can
sometimes be read from the page text, where it is laid out as::

    Hour 5 • Jan 1, 3 PM
    12,345

Author: feature-developer
"""

import re
from typing import Optional

from ..models.chart import SamplePoint


HOUR_PATTERN = re.compile(r'Hour\s+(\d+)')
VIEWS_PATTERN = re.compile(r'([\d,]+)\s*views')
PAGE_TEXT_PATTERN = re.compile(r'Hour\s+(\d+)\s+•\s+[^\n]+\n([\d,]+)')


def _to_views(digits: str) -> Optional[int]:
    digits = digits.replace(',', '')
    if not digits:
        return None
    return int(digits)


class TooltipParser:
    """Turns the text captured at one probe into an (hour, views) sample"""

    def snapshot(self, tooltip_text: Optional[str], page_text: Optional[str]) -> str:
        """
        Choose the text to parse for one probe

        The tooltip element's text wins when present. Otherwise the page text
        is scanned for the hour/value layout and rewritten as
        ``Hour N: V views``. Returns an empty string when neither has data.
        """
        if isinstance(tooltip_text, str) and tooltip_text.strip():
            return tooltip_text.strip()

        if isinstance(page_text, str):
            match = PAGE_TEXT_PATTERN.search(page_text)
            if match:
                return f"Hour {match.group(1)}: {match.group(2)} views"

        return ""

    def parse(self, text: Optional[str]) -> Optional[SamplePoint]:
        """
        Extract an accepted sample from probe text

        Returns None when the text carries no (hour, views) pair, which is the
        normal outcome for probes between data points. Never raises.
        """
        if not isinstance(text, str) or not text:
            return None

        hour_match = HOUR_PATTERN.search(text)
        views_match = VIEWS_PATTERN.search(text)
        if hour_match and views_match:
            views = _to_views(views_match.group(1))
            if views is not None:
                return SamplePoint(hour=int(hour_match.group(1)), views=views, raw_text=text)

        page_match = PAGE_TEXT_PATTERN.search(text)
        if page_match:
            views = _to_views(page_match.group(2))
            if views is not None:
                return SamplePoint(hour=int(page_match.group(1)), views=views, raw_text=text)

        return None

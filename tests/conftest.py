"""
Pytest configuration for the ViewStats Hourly Views Scraper
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from viewstats_hourly.core.config import ScraperConfig, OutputConfig
from viewstats_hourly.models.chart import BoundingBox, ElementKind, VisualElement
from viewstats_hourly.utils.capabilities import PageCapability
from viewstats_hourly.utils.scraping_utils import (
    LOGIN_CHECK_SCRIPT,
    PAGE_SNAPSHOT_SCRIPT,
    TOOLTIP_SNAPSHOT_SCRIPT,
)


SAMPLE_VIDEO_URL = "https://www.viewstats.com/@mrbeast/videos/zo7i8VTpfNM"

SAMPLE_HTML = """
<html>
  <head><title>$1 vs $1,000,000 Hotel Room! - MrBeast - ViewStats</title></head>
  <body>
    <nav><h2>ViewStats</h2></nav>
    <h2>MrBeast</h2>
    <h1>$1 vs $1,000,000 Hotel Room!</h1>
    <div class="video-meta">
      <time datetime="2024-01-05T17:00:00Z">Jan 5, 2024</time>
    </div>
  </body>
</html>
"""


def make_element(kind: ElementKind, width: float, height: float,
                 x: float = 0.0, y: float = 0.0, handle: Any = None) -> VisualElement:
    return VisualElement(handle=handle, kind=kind, box=BoundingBox(x, y, width, height))


class FakePage(PageCapability):
    """
    In-memory PageCapability

    ``tooltip_at`` maps a pointer x coordinate to the tooltip text shown there.
    ``scrolled_box`` replaces the chart's box once it is scrolled into view.
    Every call is recorded in ``calls`` in order.
    """

    def __init__(self,
                 canvases: Optional[List[VisualElement]] = None,
                 svgs: Optional[List[VisualElement]] = None,
                 tooltip_at: Optional[Callable[[float], str]] = None,
                 html: str = SAMPLE_HTML,
                 document_title: str = "",
                 body_text: str = "",
                 needs_login: bool = False,
                 scrolled_box: Optional[BoundingBox] = None):
        self.canvases = canvases or []
        self.svgs = svgs or []
        self.tooltip_at = tooltip_at or (lambda x: "")
        self.html = html
        self.document_title = document_title
        self.body_text = body_text
        self.needs_login = needs_login
        self.scrolled_box = scrolled_box
        self.pointer: Optional[Tuple[float, float]] = None
        self.calls: List[Tuple[str, Any]] = []

    def navigate(self, url: str, timeout_ms: int) -> None:
        self.calls.append(('navigate', url))

    def evaluate(self, script: str, *args: Any) -> Any:
        if script == LOGIN_CHECK_SCRIPT:
            self.calls.append(('evaluate', 'login'))
            return self.needs_login
        if script == TOOLTIP_SNAPSHOT_SCRIPT:
            self.calls.append(('evaluate', 'tooltip'))
            x = self.pointer[0] if self.pointer else 0.0
            return {'tooltip': self.tooltip_at(x), 'page': self.body_text}
        if script == PAGE_SNAPSHOT_SCRIPT:
            self.calls.append(('evaluate', 'snapshot'))
            return {'html': self.html, 'title': self.document_title, 'text': self.body_text}
        raise AssertionError(f"Unexpected script: {script[:40]}")

    def enumerate(self, selector: str) -> List[VisualElement]:
        self.calls.append(('enumerate', selector))
        return self.canvases if selector == 'canvas' else self.svgs

    def scroll_into_view(self, element: VisualElement) -> Optional[BoundingBox]:
        self.calls.append(('scroll', element.kind.value))
        return self.scrolled_box or element.box

    def move_pointer(self, x: float, y: float) -> None:
        self.pointer = (x, y)
        self.calls.append(('move', (x, y)))

    def wait(self, ms: int) -> None:
        self.calls.append(('wait', ms))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing"""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def scraper_config(temp_dir) -> ScraperConfig:
    """Default configuration writing into the temporary directory"""
    config = ScraperConfig(video_url=SAMPLE_VIDEO_URL)
    config.output = OutputConfig(output_dir=str(temp_dir), prefix="hourly_views")
    config.metadata.naive_timezone = "UTC"
    return config


@pytest.fixture
def chart_element() -> VisualElement:
    """A canvas large enough to be the chart: x 100..900, y 200..600"""
    return make_element(ElementKind.CANVAS, 800, 400, x=100, y=200)


@pytest.fixture
def hourly_tooltip():
    """
    Tooltip function for a chart whose drawable span (130..870) is split
    evenly into hours 0..24, with hour 7 never showing a tooltip
    """
    start, end = 130.0, 870.0
    width = (end - start) / 25

    def tooltip_at(x: float) -> str:
        hour = min(int((x - start) // width), 24)
        if hour == 7:
            return ""
        return f"Hour {hour}: {hour * 1000 + 500:,} views"

    return tooltip_at


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def page_factory():
    """Builds FakePage instances"""
    return FakePage

"""
Chart Geometry Models for the ViewStats Hourly Views Scraper

Bounding boxes of candidate visual elements, the selected chart region and
the per-probe sample points read from tooltips.

Author: data-analytics-expert
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Any, Dict


class ElementKind(Enum):
    """Rendering primitive of a candidate chart element"""
    CANVAS = "canvas"
    SVG = "svg"


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in page pixels"""
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}


@dataclass
class VisualElement:
    """
    A candidate chart element as reported by the page

    The handle is whatever the page adapter uses to refer to the element;
    the core never looks inside it. ``box`` is None when the element is not
    rendered.
    """
    handle: Any
    kind: ElementKind
    box: Optional[BoundingBox] = None


@dataclass(frozen=True)
class ChartRegion:
    """The bounding box chosen as the views chart. Immutable once resolved."""
    box: BoundingBox

    @property
    def x(self) -> float:
        return self.box.x

    @property
    def y(self) -> float:
        return self.box.y

    @property
    def width(self) -> float:
        return self.box.width

    @property
    def height(self) -> float:
        return self.box.height

    @property
    def center_y(self) -> float:
        return self.box.y + self.box.height / 2


@dataclass
class SamplePoint:
    """Result of one probe: the parsed hour and views plus the text they came from"""
    hour: Optional[int] = None
    views: Optional[int] = None
    raw_text: str = ""

    @property
    def is_accepted(self) -> bool:
        return self.hour is not None and self.views is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in the raw JSON dump layout"""
        return {
            'hour': self.hour,
            'views': self.views,
            'tooltip': self.raw_text
        }

"""
Chart region detection

ViewStats renders its charts either on a canvas or as an SVG overlay, and the
same primitives are used for logos and icons. The chart is taken to be the
largest rendered element above a minimum plausible size.

Author: feature-developer
"""

import logging
from typing import Iterable, List, Optional

from ..core.exceptions import ChartNotFoundError
from ..models.chart import ChartRegion, VisualElement, BoundingBox


class GeometryResolver:
    """Selects the single most plausible chart region among candidate elements"""

    def __init__(self, min_width: float = 200.0, min_height: float = 150.0):
        self.min_width = min_width
        self.min_height = min_height
        self.logger = logging.getLogger(__name__)

    def qualifies(self, box: BoundingBox) -> bool:
        return box.width > self.min_width and box.height > self.min_height

    def select(self,
               canvases: Iterable[VisualElement],
               vectors: Iterable[VisualElement]) -> VisualElement:
        """
        Pick the chart element

        Canvases are scanned before vector elements, each in document order.
        A later candidate only replaces the current best on a strictly larger
        area, so the earliest scanned element wins exact ties.

        Args:
            canvases: canvas-like candidates
            vectors: SVG-like candidates

        Returns:
            The selected VisualElement, whose box is always set

        Raises:
            ChartNotFoundError: no candidate passes the size floor
        """
        best_area = 0.0
        best: Optional[VisualElement] = None
        checked = 0

        candidates: List[VisualElement] = list(canvases) + list(vectors)
        for element in candidates:
            checked += 1
            box = element.box
            if box is None:
                continue

            self.logger.debug(f"{element.kind.value} candidate: {box.to_dict()}")

            area = box.area
            if area > best_area and self.qualifies(box):
                best_area = area
                best = element

        if best is None:
            raise ChartNotFoundError(candidates_checked=checked)

        self.logger.info(f"Chart detected: {best.box.to_dict()}")
        return best

    def resolve(self,
                canvases: Iterable[VisualElement],
                vectors: Iterable[VisualElement]) -> ChartRegion:
        """Region of the element chosen by ``select``"""
        return ChartRegion(self.select(canvases, vectors).box)

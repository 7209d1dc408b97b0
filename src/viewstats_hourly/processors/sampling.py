"""
Hover coordinate generation across the chart's horizontal span

Author: feature-developer
"""

from typing import Iterator, Tuple

from ..models.chart import ChartRegion


class SampleCoordinateGenerator:
    """
    Evenly spaced pointer targets along the chart's vertical center

    Iterating yields point_count + 1 coordinates from
    ``x + left_margin`` to ``x + width - right_margin``. The margins keep the
    pointer off the axis labels. Every ``iter()`` starts again from the
    first coordinate.
    """

    def __init__(self,
                 region: ChartRegion,
                 left_margin: float = 30.0,
                 right_margin: float = 30.0,
                 point_count: int = 150):
        if point_count < 1:
            raise ValueError(f"point_count must be at least 1, got {point_count}")

        self.region = region
        self.left_margin = left_margin
        self.right_margin = right_margin
        self.point_count = point_count

    @property
    def start_x(self) -> float:
        return self.region.x + self.left_margin

    @property
    def end_x(self) -> float:
        return self.region.x + self.region.width - self.right_margin

    @property
    def step(self) -> float:
        return (self.end_x - self.start_x) / self.point_count

    def __len__(self) -> int:
        return self.point_count + 1

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        start_x = self.start_x
        step = self.step
        y = self.region.center_y

        for i in range(self.point_count + 1):
            yield start_x + step * i, y

"""
Unit Tests for Chart Region Detection

Author: test-strategist
"""

import pytest

from viewstats_hourly.core.exceptions import ChartNotFoundError
from viewstats_hourly.models.chart import BoundingBox, ElementKind, VisualElement
from viewstats_hourly.processors.geometry import GeometryResolver


def make_element(kind, width, height, x=0.0, y=0.0):
    return VisualElement(handle=None, kind=kind, box=BoundingBox(x, y, width, height))


class TestGeometryResolver:
    """Test suite for GeometryResolver"""

    def test_selects_largest_qualifying_element(self):
        """Test the 800x400 box wins over a small icon and a smaller chart"""
        canvases = [
            make_element(ElementKind.CANVAS, 100, 100),
            make_element(ElementKind.CANVAS, 800, 400, x=50, y=60),
            make_element(ElementKind.CANVAS, 300, 160),
        ]

        region = GeometryResolver().resolve(canvases, [])

        assert region.box == BoundingBox(50, 60, 800, 400)

    def test_size_floor_is_strict(self):
        """Test that exactly 200 wide or 150 high never qualifies"""
        resolver = GeometryResolver()
        candidates = [
            make_element(ElementKind.SVG, 200, 1000),
            make_element(ElementKind.SVG, 1000, 150),
        ]

        with pytest.raises(ChartNotFoundError):
            resolver.resolve([], candidates)

    def test_huge_element_below_floor_ignored(self):
        """Test that area alone cannot qualify an element"""
        narrow = make_element(ElementKind.CANVAS, 150, 5000)
        chart = make_element(ElementKind.CANVAS, 201, 151)

        region = GeometryResolver().resolve([narrow, chart], [])

        assert region.width == 201
        assert region.height == 151

    def test_canvas_wins_tie_with_svg(self):
        """Test canvases are scanned first and keep exact ties"""
        canvas = make_element(ElementKind.CANVAS, 400, 300, x=1)
        svg = make_element(ElementKind.SVG, 300, 400, x=2)

        region = GeometryResolver().resolve([canvas], [svg])

        assert region.x == 1

    def test_earliest_wins_tie_within_collection(self):
        first = make_element(ElementKind.SVG, 400, 300, x=10)
        second = make_element(ElementKind.SVG, 400, 300, x=20)

        region = GeometryResolver().resolve([], [first, second])

        assert region.x == 10

    def test_larger_svg_replaces_canvas(self):
        canvas = make_element(ElementKind.CANVAS, 300, 200)
        svg = make_element(ElementKind.SVG, 900, 450, x=5)

        region = GeometryResolver().resolve([canvas], [svg])

        assert region.x == 5
        assert region.width == 900

    def test_elements_without_box_are_skipped(self):
        hidden = VisualElement(handle="hidden", kind=ElementKind.CANVAS, box=None)
        chart = make_element(ElementKind.SVG, 640, 320)

        region = GeometryResolver().resolve([hidden], [chart])

        assert region.width == 640

    def test_not_found_when_nothing_qualifies(self):
        """Test the fatal signal carries the number of candidates checked"""
        candidates = [make_element(ElementKind.CANVAS, 24, 24), make_element(ElementKind.CANVAS, 32, 32)]

        with pytest.raises(ChartNotFoundError) as exc_info:
            GeometryResolver().resolve(candidates, [])

        assert exc_info.value.candidates_checked == 2
        assert "Failed to identify chart" in str(exc_info.value)

    def test_not_found_on_empty_page(self):
        with pytest.raises(ChartNotFoundError):
            GeometryResolver().resolve([], [])

    def test_custom_size_floor(self):
        resolver = GeometryResolver(min_width=50, min_height=50)

        region = resolver.resolve([make_element(ElementKind.CANVAS, 100, 100)], [])

        assert region.box.area == 10000

    def test_select_returns_chosen_element(self):
        chart = VisualElement(handle="chart", kind=ElementKind.SVG, box=BoundingBox(0, 900, 800, 400))

        selected = GeometryResolver().select([make_element(ElementKind.CANVAS, 100, 100)], [chart])

        assert selected is chart

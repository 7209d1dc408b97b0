"""
Integration Tests for the Hourly Views Pipeline

Drives a complete collection against an in-memory page:
- Chart detection among decoy elements
- Full 151-position hover scan
- Reconciliation into the 0-24 table with a gap
- Metadata extraction from the page snapshot
- JSON overwrite and CSV append across runs

Author: test-strategist
"""

import json
import pytest

from viewstats_hourly.data_collectors.hourly_views_collector import HourlyViewsCollector
from viewstats_hourly.models.chart import BoundingBox, ElementKind, VisualElement
from viewstats_hourly.processors.output_writer import CSV_HEADER


def decoys():
    return [
        VisualElement(handle="logo", kind=ElementKind.SVG, box=BoundingBox(10, 10, 32, 32)),
        VisualElement(handle="hidden", kind=ElementKind.SVG, box=None),
        VisualElement(handle="sparkline", kind=ElementKind.SVG, box=BoundingBox(0, 700, 300, 120)),
    ]


@pytest.mark.integration
class TestHourlyViewsPipeline:
    """End-to-end collector runs against a fake page"""

    def test_full_run(self, page_factory, scraper_config, chart_element, hourly_tooltip):
        page = page_factory(canvases=[chart_element], svgs=decoys(), tooltip_at=hourly_tooltip)
        collector = HourlyViewsCollector(page, scraper_config)

        result = collector.collect()

        assert result.chart_region.box == chart_element.box
        assert result.probes == 151
        assert result.hours_captured == 24
        assert result.hours_with_data == 24
        assert result.missing_hours == [7]
        assert result.metadata.title == "$1 vs $1,000,000 Hotel Room!"
        assert result.metadata.publish_timestamp_utc == "2024-01-05T17:00:00.000Z"
        assert result.outputs.csv_created is True

        raw = json.loads(scraper_config.output.raw_json_path.read_text(encoding='utf-8'))
        assert [item['hour'] for item in raw] == [h for h in range(25) if h != 7]
        assert raw[0] == {'hour': 0, 'views': 500, 'tooltip': 'Hour 0: 500 views'}

        lines = scraper_config.output.csv_path.read_text(encoding='utf-8').split("\n")
        assert lines[0] == CSV_HEADER
        cells = lines[1].split(",")
        assert cells[0] == '"$1 vs $1'
        hour_cells = cells[-25:-1]
        assert hour_cells[0] == "1500"
        assert hour_cells[6] == ""
        assert hour_cells[23] == "24500"
        assert cells[-1] == "ViewStats"

    def test_probes_do_not_overlap(self, page_factory, scraper_config, chart_element, hourly_tooltip):
        page = page_factory(canvases=[chart_element], tooltip_at=hourly_tooltip)

        HourlyViewsCollector(page, scraper_config).collect()

        probe_calls = [c for c in page.calls if c[0] in ('move', 'evaluate') and c[1] != 'login']
        probe_calls = [c for c in probe_calls if c[1] != 'snapshot']
        kinds = [c[0] for c in probe_calls]
        assert kinds == ['move', 'evaluate'] * 151

    def test_second_run_appends(self, page_factory, scraper_config, chart_element, hourly_tooltip):
        for _ in range(2):
            page = page_factory(canvases=[chart_element], tooltip_at=hourly_tooltip)
            result = HourlyViewsCollector(page, scraper_config).collect()

        lines = scraper_config.output.csv_path.read_text(encoding='utf-8').split("\n")
        assert result.outputs.csv_created is False
        assert len(lines) == 3
        assert lines[1] == lines[2]

    def test_sparse_chart_degrades(self, page_factory, scraper_config, chart_element):
        def tooltip_at(x):
            return "Hour 3: 2,000 views" if 300 < x < 320 else ""

        page = page_factory(canvases=[chart_element], tooltip_at=tooltip_at, document_title="")
        result = HourlyViewsCollector(page, scraper_config).collect()

        assert result.hours_captured == 2
        assert result.quality == "poor"
        raw = json.loads(scraper_config.output.raw_json_path.read_text(encoding='utf-8'))
        assert raw == [
            {'hour': 0, 'views': 0, 'tooltip': 'Hour 0: 0 views'},
            {'hour': 3, 'views': 2000, 'tooltip': 'Hour 3: 2,000 views'},
        ]

"""
ViewStats Hourly Views Collector

Collects the first-24-hours view curve of a single video from its ViewStats
page. The hourly chart carries no embedded data we can read, so the
collector hovers across it and reads the tooltip at each position:

1. Open the video page, waiting for a manual login when one is required
2. Find the chart (largest canvas or SVG above a minimum size) and scroll it into view
3. Move the pointer across the chart and parse each tooltip
4. Reconcile the readings into the fixed 0-24 hour series
5. Resolve title and publish timestamp (T0)
6. Write the raw JSON dump and append the CSV row

Probes are strictly sequential: each pointer move is followed by a fixed
settle delay before the tooltip is read.

Author: feature-developer
"""

import time
import logging
from typing import List, Optional

from ..core.config import ScraperConfig
from ..models.chart import ChartRegion, SamplePoint
from ..models.metadata import CollectionResult, PageSnapshot, VideoMetadata
from ..models.timeseries import ReconciledSeries
from ..processors.geometry import GeometryResolver
from ..processors.metadata_extractor import MetadataExtractor
from ..processors.output_writer import OutputWriter
from ..processors.sampling import SampleCoordinateGenerator
from ..processors.series_reconciler import SeriesReconciler
from ..processors.tooltip_parser import TooltipParser
from ..utils.capabilities import FileSystemCapability, PageCapability
from ..utils.scraping_utils import LOGIN_CHECK_SCRIPT, PAGE_SNAPSHOT_SCRIPT, TOOLTIP_SNAPSHOT_SCRIPT


class HourlyViewsCollector:
    """
    Single-video hourly views collector

    All browser access goes through the PageCapability and all disk access
    through the FileSystemCapability handed to the constructor.
    """

    def __init__(self,
                 page: PageCapability,
                 config: Optional[ScraperConfig] = None,
                 filesystem: Optional[FileSystemCapability] = None):
        self.page = page
        self.config = config or ScraperConfig()
        self.logger = logging.getLogger(__name__)

        sampling = self.config.sampling
        metadata = self.config.metadata
        output = self.config.output

        self.geometry_resolver = GeometryResolver(
            min_width=sampling.min_chart_width,
            min_height=sampling.min_chart_height
        )
        self.tooltip_parser = TooltipParser()
        self.series_reconciler = SeriesReconciler()
        self.metadata_extractor = MetadataExtractor(
            platform_brand=metadata.platform_brand,
            excluded_titles=metadata.excluded_titles,
            title_placeholder=metadata.title_placeholder,
            naive_timezone=metadata.naive_timezone
        )
        self.output_writer = OutputWriter(
            raw_json_path=output.raw_json_path,
            csv_path=output.csv_path,
            filesystem=filesystem,
            source_tag=output.source_tag
        )

    # ------------------------------------------------------------- navigation

    def open_video_page(self, video_url: str) -> None:
        """Navigate to the video, waiting once for a manual login if required"""
        timeout_ms = self.config.browser.navigation_timeout_ms

        self.logger.info("▶ Opening ViewStats page...")
        self.page.navigate(video_url, timeout_ms)

        if self.page.evaluate(LOGIN_CHECK_SCRIPT):
            wait_seconds = self.config.delays.login_wait_ms / 1000
            self.logger.warning("⚠️  LOGIN REQUIRED")
            self.logger.warning(
                f"Please login to ViewStats in the browser window. "
                f"Waiting {wait_seconds:.0f}s for you to complete login..."
            )
            self.page.wait(self.config.delays.login_wait_ms)
            self.page.navigate(video_url, timeout_ms)

        self.logger.info("⏳ Waiting for chart to load...")
        self.page.wait(self.config.delays.chart_load_ms)

    # ------------------------------------------------------------------ chart

    def find_chart(self) -> ChartRegion:
        """Locate the chart region; raises ChartNotFoundError when absent"""
        canvases = self.page.enumerate('canvas')
        svgs = self.page.enumerate('svg')
        self.logger.info(f"Found {len(canvases)} canvas and {len(svgs)} SVG elements")

        chart = self.geometry_resolver.select(canvases, svgs)

        # boxes are viewport-relative; hovering needs the chart on screen
        box = self.page.scroll_into_view(chart)
        if box is None:
            self.logger.debug("Chart could not be re-measured after scrolling, keeping its first box")
            box = chart.box
        region = ChartRegion(box)

        self.logger.info("⏳ Waiting for chart data to fully render...")
        self.page.wait(self.config.delays.chart_render_ms)
        return region

    def probe(self, x: float, y: float) -> Optional[SamplePoint]:
        """Hover one coordinate and parse whatever tooltip appears"""
        self.page.move_pointer(x, y)
        self.page.wait(self.config.delays.probe_ms)

        snapshot = self.page.evaluate(TOOLTIP_SNAPSHOT_SCRIPT) or {}
        text = self.tooltip_parser.snapshot(snapshot.get('tooltip'), snapshot.get('page'))
        return self.tooltip_parser.parse(text)

    def scan_chart(self, region: ChartRegion) -> List[SamplePoint]:
        """Probe evenly across the chart, in order, keeping accepted samples"""
        sampling = self.config.sampling
        coordinates = SampleCoordinateGenerator(
            region,
            left_margin=sampling.left_margin,
            right_margin=sampling.right_margin,
            point_count=sampling.point_count
        )

        self.logger.info(f"⏳ Scanning chart for data points ({len(coordinates)} positions)...")
        samples = []
        for position, (x, y) in enumerate(coordinates):
            sample = self.probe(x, y)
            if sample is not None:
                samples.append(sample)
                self.logger.info(f"Position {position}: {sample.raw_text}")

        return samples

    # --------------------------------------------------------------- metadata

    def capture_page_snapshot(self) -> PageSnapshot:
        data = self.page.evaluate(PAGE_SNAPSHOT_SCRIPT) or {}
        return PageSnapshot(
            html=data.get('html') or "",
            document_title=data.get('title') or "",
            body_text=data.get('text') or ""
        )

    def extract_metadata(self) -> VideoMetadata:
        """Resolve title and T0; raises PublishTimestampNotFoundError when T0 is missing"""
        metadata = self.metadata_extractor.extract(self.capture_page_snapshot())
        self.logger.info(f"Video title: {metadata.title}")
        self.logger.info(f"T0 (publish_datetime_utc): {metadata.publish_timestamp_utc}")
        return metadata

    # -------------------------------------------------------------------- run

    def collect(self, video_url: Optional[str] = None) -> CollectionResult:
        """
        Run the whole collection for one video

        Nothing is written unless both the chart and T0 were found.

        Args:
            video_url: ViewStats video URL, defaults to the configured one

        Returns:
            CollectionResult summary of the run
        """
        video_url = video_url or self.config.video_url
        start_time = time.time()

        self.open_video_page(video_url)
        region = self.find_chart()

        samples = self.scan_chart(region)
        series = self.series_reconciler.reconcile(samples)

        metadata = self.extract_metadata()
        outputs = self.output_writer.write(series, metadata, video_url)

        result = self._build_result(video_url, region, samples, series, metadata)
        result.outputs = outputs

        self._log_summary(result, time.time() - start_time)
        return result

    def _build_result(self,
                      video_url: str,
                      region: ChartRegion,
                      samples: List[SamplePoint],
                      series: ReconciledSeries,
                      metadata: VideoMetadata) -> CollectionResult:
        hourly = series.hourly
        return CollectionResult(
            video_url=video_url,
            chart_region=region,
            probes=self.config.sampling.point_count + 1,
            accepted_samples=len(samples),
            hours_captured=series.hours_captured,
            hours_with_data=hourly.hours_with_data,
            metadata=metadata,
            quality=hourly.quality_flag().value,
            missing_hours=hourly.missing_hours
        )

    def _log_summary(self, result: CollectionResult, duration: float) -> None:
        outputs = result.outputs
        self.logger.info("✅ Output written:")
        self.logger.info(f"   - {outputs.raw_json}")
        self.logger.info(f"   - {outputs.csv} ({'created' if outputs.csv_created else 'appended'})")
        self.logger.info(f"   - Title: {result.metadata.title}")
        self.logger.info(f"   - Hours captured: {result.hours_captured}")
        self.logger.info(f"   - Hours with data: {result.hours_with_data}/25")
        self.logger.info(f"   - Collection time: {duration:.1f}s")

        if result.missing_hours:
            self.logger.warning(
                f"No data for hours {', '.join(str(h) for h in result.missing_hours)} "
                f"(quality: {result.quality})"
            )

"""
Video Metadata Models for the ViewStats Hourly Views Scraper

Author: data-analytics-expert
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, List, Any

from .chart import ChartRegion


@dataclass
class PageSnapshot:
    """Page state captured once for metadata extraction"""
    html: str = ""
    document_title: str = ""
    body_text: str = ""


@dataclass
class VideoMetadata:
    """Title and publish moment (T0) of the scraped video"""
    title: str
    publish_timestamp_utc: str
    title_is_placeholder: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'publish_datetime_utc': self.publish_timestamp_utc
        }


@dataclass
class OutputRecord:
    """One CSV row: title, link, T0, hours +1..+24 and the source tag"""
    title: str
    link: str
    publish_timestamp_utc: str
    hour_values: List[str]
    source: str = "ViewStats"

    def __post_init__(self):
        if len(self.hour_values) != 24:
            raise ValueError(f"OutputRecord needs 24 hour values, got {len(self.hour_values)}")

    def to_csv_row(self) -> str:
        escaped_title = self.title.replace('"', '""')
        fields = [
            f'"{escaped_title}"',
            self.link,
            f'"{self.publish_timestamp_utc}"',
            *self.hour_values,
            self.source,
        ]
        return ",".join(fields)


@dataclass
class OutputPaths:
    """Artifacts written by one run"""
    raw_json: Path
    csv: Path
    csv_created: bool


@dataclass
class CollectionResult:
    """Summary of a finished run"""
    video_url: str
    chart_region: ChartRegion
    probes: int
    accepted_samples: int
    hours_captured: int
    hours_with_data: int
    metadata: VideoMetadata
    outputs: Optional[OutputPaths] = None
    quality: str = "unknown"
    missing_hours: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'video_url': self.video_url,
            'chart_region': self.chart_region.box.to_dict(),
            'probes': self.probes,
            'accepted_samples': self.accepted_samples,
            'hours_captured': self.hours_captured,
            'hours_with_data': self.hours_with_data,
            'metadata': self.metadata.to_dict(),
            'quality': self.quality,
            'missing_hours': self.missing_hours,
            'raw_json': str(self.outputs.raw_json) if self.outputs else None,
            'csv': str(self.outputs.csv) if self.outputs else None,
            'csv_created': self.outputs.csv_created if self.outputs else None
        }

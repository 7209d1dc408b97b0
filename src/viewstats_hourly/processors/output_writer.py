"""
Output rendering: raw JSON dump and the shared hourly CSV

The JSON file is rewritten on every run. The CSV is shared across runs and
grows by one row per run; the header is only written when the file is new.

Author: feature-developer
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from ..models.chart import SamplePoint
from ..models.metadata import OutputPaths, OutputRecord, VideoMetadata
from ..models.timeseries import ReconciledSeries
from ..utils.capabilities import FileSystemCapability, LocalFileSystem, PathLike


SOURCE_TAG = "ViewStats"

CSV_HEADER = ",".join(
    ["Video", "Link", "publish_datetime_utc"]
    + [f"+{hour}h" for hour in range(1, 25)]
    + ["Source"]
)


def render_raw_json(raw_results: List[SamplePoint]) -> str:
    """Pretty-printed ``[{hour, views, tooltip}, ...]``"""
    return json.dumps([point.to_dict() for point in raw_results], indent=2, ensure_ascii=False)


class OutputWriter:
    """Writes the run's artifacts through a filesystem capability"""

    def __init__(self,
                 raw_json_path: PathLike,
                 csv_path: PathLike,
                 filesystem: Optional[FileSystemCapability] = None,
                 source_tag: str = SOURCE_TAG):
        self.raw_json_path = Path(raw_json_path)
        self.csv_path = Path(csv_path)
        self.filesystem = filesystem or LocalFileSystem()
        self.source_tag = source_tag
        self.logger = logging.getLogger(__name__)

    def build_record(self, series: ReconciledSeries, metadata: VideoMetadata, video_url: str) -> OutputRecord:
        return OutputRecord(
            title=metadata.title,
            link=video_url,
            publish_timestamp_utc=metadata.publish_timestamp_utc,
            hour_values=series.hourly.csv_values(),
            source=self.source_tag
        )

    def write_raw_json(self, raw_results: List[SamplePoint]) -> Path:
        """Overwrite the raw dump"""
        self.filesystem.write_text(self.raw_json_path, render_raw_json(raw_results))
        self.logger.debug(f"Wrote {len(raw_results)} raw results to {self.raw_json_path}")
        return self.raw_json_path

    def append_csv_row(self, record: OutputRecord) -> bool:
        """
        Add one data row to the CSV

        Returns:
            True if the file was created (header written), False if appended
        """
        row = record.to_csv_row()

        if self.filesystem.exists(self.csv_path):
            self.filesystem.append_text(self.csv_path, "\n" + row)
            return False

        self.filesystem.write_text(self.csv_path, CSV_HEADER + "\n" + row)
        return True

    def write(self, series: ReconciledSeries, metadata: VideoMetadata, video_url: str) -> OutputPaths:
        """Write both artifacts for a finished run"""
        raw_json = self.write_raw_json(series.raw_results)
        csv_created = self.append_csv_row(self.build_record(series, metadata, video_url))

        self.logger.info(f"CSV {'created' if csv_created else 'appended'}: {self.csv_path}")
        return OutputPaths(raw_json=raw_json, csv=self.csv_path, csv_created=csv_created)

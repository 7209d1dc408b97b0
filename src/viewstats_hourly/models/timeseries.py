"""
Hourly Timeseries Model for the ViewStats Hourly Views Scraper

This module defines the fixed 0-24 hour views table produced for a video
and the reconciled series it is derived from.

Author: data-analytics-expert
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, List, Any
from enum import Enum

from .chart import SamplePoint


HOURS_IN_SERIES = 25  # hour 0 (publish moment) through hour 24


class DataQualityFlag(Enum):
    """Data quality flag enumeration"""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    MISSING = "missing"


@dataclass
class HourlySeries:
    """
    Views per hour since publish, hours 0..24

    Each slot holds a non-negative view count or None for "no data".
    Unobserved slots are never defaulted except hour 0, which the
    reconciler fills with 0.
    """

    slots: List[Optional[int]] = field(default_factory=lambda: [None] * HOURS_IN_SERIES)

    def __post_init__(self):
        if len(self.slots) != HOURS_IN_SERIES:
            raise ValueError(f"HourlySeries needs {HOURS_IN_SERIES} slots, got {len(self.slots)}")

    def __getitem__(self, hour: int) -> Optional[int]:
        return self.slots[hour]

    def __len__(self) -> int:
        return len(self.slots)

    def set(self, hour: int, views: int) -> None:
        self.slots[hour] = views

    @property
    def hours_with_data(self) -> int:
        return sum(1 for views in self.slots if views is not None)

    @property
    def missing_hours(self) -> List[int]:
        return [hour for hour, views in enumerate(self.slots) if views is None]

    def csv_values(self) -> List[str]:
        """The 24 CSV cells for hours +1..+24, empty string where there is no data"""
        return ["" if views is None else str(views) for views in self.slots[1:]]

    def quality_flag(self) -> DataQualityFlag:
        """
        Rough completeness grade of the series

        Informational only: it is reported in the run summary and never
        changes what is written. The cut-offs are arbitrary.
        """
        observed = self.hours_with_data
        if observed == HOURS_IN_SERIES:
            return DataQualityFlag.EXCELLENT
        if observed >= 20:
            return DataQualityFlag.GOOD
        if observed >= 12:
            return DataQualityFlag.FAIR
        if observed > 1:
            return DataQualityFlag.POOR
        return DataQualityFlag.MISSING

    def to_dict(self) -> Dict[str, Any]:
        return {str(hour): views for hour, views in enumerate(self.slots)}


@dataclass
class ReconciledSeries:
    """Deduplicated samples in hour order plus the fixed-width table built from them"""
    raw_results: List[SamplePoint]
    hourly: HourlySeries

    @property
    def hours_captured(self) -> int:
        return len(self.raw_results)

    def raw_records(self) -> List[Dict[str, Any]]:
        return [point.to_dict() for point in self.raw_results]

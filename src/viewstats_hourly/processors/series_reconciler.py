"""
Series reconciliation

Adjacent pixel probes commonly land on the same rendered data point, so the
probe sequence is full of duplicate hours. The first reading of each hour is
kept and later ones are ignored even when their value differs.

Author: data-analytics-expert
"""

import logging
from typing import Dict, Iterable, List

from ..models.chart import SamplePoint
from ..models.timeseries import HourlySeries, ReconciledSeries, HOURS_IN_SERIES


PUBLISH_BASELINE = SamplePoint(hour=0, views=0, raw_text='Hour 0: 0 views')


class SeriesReconciler:
    """Folds accepted probe samples into the canonical per-hour series"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def deduplicate(self, samples: Iterable[SamplePoint]) -> Dict[int, SamplePoint]:
        """Map each hour to its first-seen sample, in probe order"""
        first_seen: Dict[int, SamplePoint] = {}
        duplicates = 0

        for sample in samples:
            if not sample.is_accepted:
                continue
            if sample.hour in first_seen:
                duplicates += 1
                continue
            first_seen[sample.hour] = sample

        self.logger.debug(f"Dropped {duplicates} duplicate hour readings")
        return first_seen

    def reconcile(self, samples: Iterable[SamplePoint]) -> ReconciledSeries:
        """
        Build the raw results and the fixed 0-24 table

        Hour 0 is synthesized with 0 views when it was never observed: a video
        starts at zero at its publish moment. Hours outside 0..24 stay in the
        raw results but have no slot in the table.
        """
        first_seen = self.deduplicate(samples)

        if 0 not in first_seen:
            first_seen[0] = SamplePoint(
                hour=PUBLISH_BASELINE.hour,
                views=PUBLISH_BASELINE.views,
                raw_text=PUBLISH_BASELINE.raw_text
            )

        raw_results: List[SamplePoint] = [first_seen[hour] for hour in sorted(first_seen)]

        hourly = HourlySeries()
        for point in raw_results:
            if 0 <= point.hour < HOURS_IN_SERIES:
                hourly.set(point.hour, point.views)

        return ReconciledSeries(raw_results=raw_results, hourly=hourly)

"""
Exceptions for the ViewStats hourly views scraper

Fatal conditions abort the run before any output is written. Everything
that is an expected absence (no tooltip under the pointer, a metadata
strategy that finds nothing) is not an exception at all.

Author: feature-developer
"""


class ScraperError(Exception):
    """Base class for all scraper errors"""


class FatalCollectionError(ScraperError):
    """A condition that terminates the run with no partial output"""


class ChartNotFoundError(FatalCollectionError):
    """No visual element on the page qualifies as the views chart"""

    def __init__(self, candidates_checked: int = 0):
        super().__init__(
            f"Failed to identify chart ({candidates_checked} candidate elements checked)"
        )
        self.candidates_checked = candidates_checked


class PublishTimestampNotFoundError(FatalCollectionError):
    """The publish timestamp (T0) could not be resolved from the page"""

    def __init__(self):
        super().__init__("Could not extract publish_datetime_utc (T0)")


class ConfigurationError(ScraperError):
    """Invalid configuration value"""

"""
ViewStats Hourly Views Scraper

Samples the hourly views chart of a ViewStats video page and records the
first 24 hours of views as JSON and CSV.
"""

__version__ = "0.1.0"

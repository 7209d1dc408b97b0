"""
Command-line entry point for the ViewStats Hourly Views Scraper

Opens a visible Chrome window on the video's ViewStats page, samples the
hourly views chart and writes ``<prefix>_raw.json`` and ``<prefix>.csv``.
On the first run, log in to ViewStats in that window; the session is kept in
the Chrome profile directory for later runs.

Author: feature-developer
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .core.config import ConfigManager, ScraperConfig, config_manager
from .core.exceptions import ScraperError
from .data_collectors.hourly_views_collector import HourlyViewsCollector
from .models.metadata import CollectionResult
from .utils.scraping_utils import ChromeSession


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = 'INFO', output_dir: Optional[str] = None) -> logging.Logger:
    """Setup logging configuration"""
    logger = logging.getLogger("viewstats_hourly")
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    # Create console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Create file handler
    if output_dir:
        log_dir = Path(output_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "scraper.log", encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def build_config(args: argparse.Namespace, manager: Optional[ConfigManager] = None) -> ScraperConfig:
    """Load configuration and apply command-line overrides"""
    manager = manager or config_manager
    if args.config:
        manager.reload_config(args.config)

    config = manager.get_scraper_config()

    if args.url:
        config.video_url = args.url
    if args.prefix:
        config.output.prefix = args.prefix
    if args.output_dir:
        config.output.output_dir = args.output_dir
    if args.headless:
        config.browser.headless = True

    return config


def run(config: ScraperConfig) -> CollectionResult:
    """Launch Chrome and collect the configured video"""
    with ChromeSession(config.browser) as page:
        collector = HourlyViewsCollector(page, config)
        return collector.collect(config.video_url)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract the hourly views curve of a video from ViewStats",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  viewstats-hourly --url https://www.viewstats.com/@mrbeast/videos/zo7i8VTpfNM
  viewstats-hourly --prefix mrbeast_hourly --output-dir data/output
  python -m viewstats_hourly.main --config config/scraper_config.json --log-level DEBUG
        """
    )

    parser.add_argument(
        '--url', '-u',
        help='ViewStats video URL (default: from configuration)'
    )

    parser.add_argument(
        '--prefix', '-p',
        help='Output filename prefix (default: hourly_views)'
    )

    parser.add_argument(
        '--output-dir', '-o',
        help='Directory for the JSON, CSV and log files (default: current directory)'
    )

    parser.add_argument(
        '--config', '-c',
        help='Path to a JSON configuration file'
    )

    parser.add_argument(
        '--headless',
        action='store_true',
        help='Run Chrome without a window (manual login is then impossible)'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
        help='Set logging level (default: INFO)'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    logger = setup_logging(args.log_level)

    try:
        config = build_config(args)
        # the output directory may come from the config file or environment
        logger = setup_logging(args.log_level, config.output.output_dir)
        run(config)
        return 0

    except ScraperError as e:
        logger.error(f"❌ {e}")
        return 1

    except KeyboardInterrupt:
        logger.error("\n  Scraper interrupted by user")
        return 1

    except Exception as e:
        logger.exception(f"❌ Scraper failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Unit Tests for the Command-line Entry Point

Author: test-strategist
"""

import logging
from unittest.mock import patch

from viewstats_hourly.core.config import ConfigManager, ScraperConfig
from viewstats_hourly.core.exceptions import ChartNotFoundError
from viewstats_hourly.main import build_config, main, parse_args


class TestBuildConfig:

    def test_defaults_from_configuration(self):
        config = build_config(parse_args([]), ConfigManager())

        assert config.output.prefix == "hourly_views"
        assert config.browser.headless is False

    def test_command_line_overrides(self, temp_dir):
        args = parse_args([
            '--url', 'https://www.viewstats.com/@someone/videos/abc',
            '--prefix', 'someone',
            '--output-dir', str(temp_dir),
            '--headless',
        ])

        config = build_config(args, ConfigManager())

        assert config.video_url == 'https://www.viewstats.com/@someone/videos/abc'
        assert config.output.csv_path == temp_dir / "someone.csv"
        assert config.browser.headless is True


class TestMain:

    @patch('viewstats_hourly.main.run')
    def test_success_returns_zero(self, mock_run, temp_dir):
        assert main(['--output-dir', str(temp_dir)]) == 0
        mock_run.assert_called_once()
        assert (temp_dir / "scraper.log").exists()

    @patch('viewstats_hourly.main.run')
    @patch('viewstats_hourly.main.build_config')
    def test_log_file_follows_configured_output_dir(self, mock_build, mock_run, temp_dir):
        config = ScraperConfig()
        config.output.output_dir = str(temp_dir / "from_env")
        mock_build.return_value = config

        assert main([]) == 0
        assert (temp_dir / "from_env" / "scraper.log").exists()

    @patch('viewstats_hourly.main.run')
    def test_scraper_error_returns_one(self, mock_run, temp_dir, caplog):
        mock_run.side_effect = ChartNotFoundError(4)

        with caplog.at_level(logging.ERROR, logger="viewstats_hourly"):
            assert main(['--output-dir', str(temp_dir)]) == 1

        assert "❌ Failed to identify chart" in caplog.text

    @patch('viewstats_hourly.main.run')
    def test_unexpected_error_returns_one(self, mock_run, temp_dir):
        mock_run.side_effect = RuntimeError("driver crashed")

        assert main(['--output-dir', str(temp_dir)]) == 1

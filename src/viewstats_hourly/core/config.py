"""
Configuration Management for the ViewStats Hourly Views Scraper

This module handles loading and managing configuration settings from the
JSON config file, a .env file and environment variables. Command-line flags
are applied on top by the entry point.

Author: feature-developer
"""

import os
import sys
import json
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()  # Load .env file


DEFAULT_VIDEO_URL = "https://www.viewstats.com/@mrbeast/videos/zo7i8VTpfNM"
DEFAULT_OUTPUT_PREFIX = "hourly_views"


def default_chrome_executable() -> str:
    """Platform-specific default location of the Chrome binary"""
    if sys.platform == 'win32':
        program_files = os.getenv('PROGRAMFILES', 'C:/Program Files')
        return f"{program_files}/Google/Chrome/Application/chrome.exe"
    if sys.platform == 'darwin':
        return "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"
    return "/usr/bin/google-chrome"


@dataclass
class BrowserConfig:
    """Browser launch configuration"""
    executable_path: str = field(default_factory=default_chrome_executable)
    user_data_dir: str = "chrome-profile"
    headless: bool = False
    use_stealth: bool = True
    navigation_timeout_ms: int = 1200000
    extra_arguments: List[str] = field(default_factory=lambda: [
        "--start-maximized",
        "--disable-blink-features=AutomationControlled",
    ])


@dataclass
class SamplingConfig:
    """Chart detection and hover sampling configuration"""
    point_count: int = 150
    left_margin: float = 30.0
    right_margin: float = 30.0
    min_chart_width: float = 200.0
    min_chart_height: float = 150.0


@dataclass
class DelayConfig:
    """Fixed settle delays, in milliseconds"""
    chart_load_ms: int = 8000
    chart_render_ms: int = 3000
    probe_ms: int = 800
    login_wait_ms: int = 120000


@dataclass
class MetadataConfig:
    """Title and publish timestamp extraction configuration"""
    platform_brand: str = "ViewStats"
    excluded_titles: List[str] = field(default_factory=lambda: ["MrBeast"])
    title_placeholder: str = "Unknown"
    naive_timezone: Optional[str] = None  # None means the local system zone


@dataclass
class OutputConfig:
    """Output artifact configuration"""
    output_dir: str = "."
    prefix: str = DEFAULT_OUTPUT_PREFIX
    source_tag: str = "ViewStats"

    @property
    def raw_json_path(self) -> Path:
        return Path(self.output_dir) / f"{self.prefix}_raw.json"

    @property
    def csv_path(self) -> Path:
        return Path(self.output_dir) / f"{self.prefix}.csv"


@dataclass
class ScraperConfig:
    """Complete configuration for one scraper run"""
    video_url: str = DEFAULT_VIDEO_URL
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    delays: DelayConfig = field(default_factory=DelayConfig)
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


class ConfigManager:
    """Configuration management singleton"""

    _instance = None
    _config: Dict[str, Any] = {}
    _config_loaded: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._config_loaded:
            self.load_config()

    def load_config(self, config_path: Optional[str] = None) -> None:
        """Load configuration from files and environment variables"""

        # Determine config file path
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent.parent
            config_path = project_root / "config" / "scraper_config.json"

        # Load from JSON file
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                self._config = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            print(f"Warning: Could not load config file {config_path}: {e}")
            self._config = self._get_default_config()

        # Override with environment variables
        self._load_env_overrides()

        self._config_loaded = True

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration if file loading fails"""
        return {
            "video_url": DEFAULT_VIDEO_URL,
            "browser": {
                "user_data_dir": "chrome-profile",
                "headless": False,
                "use_stealth": True,
                "navigation_timeout_ms": 1200000
            },
            "sampling": {
                "point_count": 150,
                "left_margin": 30,
                "right_margin": 30,
                "min_chart_width": 200,
                "min_chart_height": 150
            },
            "delays": {
                "chart_load_ms": 8000,
                "chart_render_ms": 3000,
                "probe_ms": 800,
                "login_wait_ms": 120000
            },
            "metadata": {
                "platform_brand": "ViewStats",
                "excluded_titles": ["MrBeast"],
                "title_placeholder": "Unknown"
            },
            "output": {
                "output_dir": ".",
                "prefix": DEFAULT_OUTPUT_PREFIX
            }
        }

    def _load_env_overrides(self) -> None:
        """Load configuration overrides from environment variables"""
        env_overrides = {
            'VIEWSTATS_VIDEO_URL': 'video_url',
            'VIEWSTATS_OUTPUT_PREFIX': 'output.prefix',
            'VIEWSTATS_OUTPUT_DIR': 'output.output_dir',
            'CHROME_EXECUTABLE': 'browser.executable_path',
            'CHROME_USER_DATA_DIR': 'browser.user_data_dir',
        }

        for env_name, key_path in env_overrides.items():
            value = os.getenv(env_name)
            if value:
                self.update_config(key_path, value)

    def get_browser_config(self) -> BrowserConfig:
        """Get browser launch configuration"""
        config_data = self._config.get('browser', {})
        defaults = BrowserConfig()

        return BrowserConfig(
            executable_path=config_data.get('executable_path', defaults.executable_path),
            user_data_dir=config_data.get('user_data_dir', defaults.user_data_dir),
            headless=config_data.get('headless', defaults.headless),
            use_stealth=config_data.get('use_stealth', defaults.use_stealth),
            navigation_timeout_ms=config_data.get('navigation_timeout_ms', defaults.navigation_timeout_ms),
            extra_arguments=config_data.get('extra_arguments', defaults.extra_arguments)
        )

    def get_sampling_config(self) -> SamplingConfig:
        """Get chart sampling configuration"""
        config_data = self._config.get('sampling', {})

        sampling = SamplingConfig(
            point_count=config_data.get('point_count', 150),
            left_margin=config_data.get('left_margin', 30.0),
            right_margin=config_data.get('right_margin', 30.0),
            min_chart_width=config_data.get('min_chart_width', 200.0),
            min_chart_height=config_data.get('min_chart_height', 150.0)
        )

        if sampling.point_count < 1:
            raise ConfigurationError(f"sampling.point_count must be at least 1, got {sampling.point_count}")

        return sampling

    def get_delay_config(self) -> DelayConfig:
        """Get settle delay configuration"""
        config_data = self._config.get('delays', {})

        return DelayConfig(
            chart_load_ms=config_data.get('chart_load_ms', 8000),
            chart_render_ms=config_data.get('chart_render_ms', 3000),
            probe_ms=config_data.get('probe_ms', 800),
            login_wait_ms=config_data.get('login_wait_ms', 120000)
        )

    def get_metadata_config(self) -> MetadataConfig:
        """Get metadata extraction configuration"""
        config_data = self._config.get('metadata', {})

        return MetadataConfig(
            platform_brand=config_data.get('platform_brand', 'ViewStats'),
            excluded_titles=config_data.get('excluded_titles', ['MrBeast']),
            title_placeholder=config_data.get('title_placeholder', 'Unknown'),
            naive_timezone=config_data.get('naive_timezone')
        )

    def get_output_config(self) -> OutputConfig:
        """Get output artifact configuration"""
        config_data = self._config.get('output', {})

        return OutputConfig(
            output_dir=config_data.get('output_dir', '.'),
            prefix=config_data.get('prefix', DEFAULT_OUTPUT_PREFIX),
            source_tag=config_data.get('source_tag', 'ViewStats')
        )

    def get_scraper_config(self) -> ScraperConfig:
        """Get the complete configuration for a run"""
        return ScraperConfig(
            video_url=self._config.get('video_url', DEFAULT_VIDEO_URL),
            browser=self.get_browser_config(),
            sampling=self.get_sampling_config(),
            delays=self.get_delay_config(),
            metadata=self.get_metadata_config(),
            output=self.get_output_config()
        )

    def get_config_value(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value by dot-separated key path"""
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def update_config(self, key_path: str, value: Any) -> None:
        """Update configuration value by dot-separated key path"""
        keys = key_path.split('.')
        config = self._config

        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    def reload_config(self, config_path: Optional[str] = None) -> None:
        """Reload configuration from file"""
        self._config_loaded = False
        self.load_config(config_path)

    def get_full_config(self) -> Dict[str, Any]:
        """Get full configuration dictionary"""
        return self._config.copy()


# Global config manager instance
config_manager = ConfigManager()

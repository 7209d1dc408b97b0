"""
Browser Utilities for the ViewStats Hourly Views Scraper

This module provides the Chrome session used to render ViewStats pages and a
PageCapability adapter over a Selenium WebDriver. Chrome is launched through
undetected-chromedriver with a persistent profile so that a manual ViewStats
login survives between runs.

Author: feature-developer
"""

import time
import logging
from pathlib import Path
from typing import Any, List, Optional

from ..core.config import BrowserConfig
from ..models.chart import BoundingBox, ElementKind, VisualElement
from .capabilities import PageCapability


BOUNDING_BOX_SCRIPT = """
const el = arguments[0];
const r = el.getBoundingClientRect();
return {x: r.x, y: r.y, width: r.width, height: r.height};
"""

LOGIN_CHECK_SCRIPT = """
return document.body.innerText.includes('Sign in') ||
       document.body.innerText.includes('Log in') ||
       document.querySelector('button[type="submit"]') !== null;
"""

TOOLTIP_SNAPSHOT_SCRIPT = """
const tooltip = document.querySelector('[role="tooltip"], [class*="tooltip"], [class*="Tooltip"]');
return {
    tooltip: tooltip && tooltip.textContent ? tooltip.textContent.trim() : '',
    page: document.body ? document.body.innerText : ''
};
"""

SCROLL_INTO_VIEW_SCRIPT = """
arguments[0].scrollIntoView({block: 'center', inline: 'center'});
"""

PAGE_SNAPSHOT_SCRIPT = """
return {
    html: document.documentElement.outerHTML,
    title: document.title,
    text: document.body ? document.body.innerText : ''
};
"""


class SeleniumPage(PageCapability):
    """PageCapability backed by a Selenium WebDriver"""

    def __init__(self, driver):
        self.driver = driver
        self.logger = logging.getLogger(__name__)

    def navigate(self, url: str, timeout_ms: int) -> None:
        self.driver.set_page_load_timeout(timeout_ms / 1000)
        self.logger.debug(f"Loading page: {url}")
        self.driver.get(url)

    def evaluate(self, script: str, *args: Any) -> Any:
        return self.driver.execute_script(script, *args)

    def _bounding_box(self, element) -> Optional[BoundingBox]:
        from selenium.common.exceptions import StaleElementReferenceException

        try:
            if not element.is_displayed():
                return None
            rect = self.driver.execute_script(BOUNDING_BOX_SCRIPT, element)
        except StaleElementReferenceException:
            # re-rendered since find_elements; counts as not rendered
            self.logger.debug("Skipping detached element")
            return None
        if not rect:
            return None
        return BoundingBox(
            x=float(rect['x']),
            y=float(rect['y']),
            width=float(rect['width']),
            height=float(rect['height'])
        )

    def enumerate(self, selector: str) -> List[VisualElement]:
        from selenium.webdriver.common.by import By

        kind = ElementKind.CANVAS if selector == 'canvas' else ElementKind.SVG
        elements = []
        for element in self.driver.find_elements(By.CSS_SELECTOR, selector):
            elements.append(VisualElement(handle=element, kind=kind, box=self._bounding_box(element)))
        return elements

    def scroll_into_view(self, element: VisualElement) -> Optional[BoundingBox]:
        from selenium.common.exceptions import StaleElementReferenceException

        try:
            self.driver.execute_script(SCROLL_INTO_VIEW_SCRIPT, element.handle)
        except StaleElementReferenceException:
            self.logger.debug("Chart element detached before scrolling")
            return None
        return self._bounding_box(element.handle)

    def move_pointer(self, x: float, y: float) -> None:
        from selenium.webdriver.common.actions.action_builder import ActionBuilder

        action = ActionBuilder(self.driver)
        action.pointer_action.move_to_location(int(round(x)), int(round(y)))
        action.perform()

    def wait(self, ms: int) -> None:
        time.sleep(ms / 1000)


class ChromeSession:
    """
    Chrome lifecycle for one scraper run

    Uses undetected-chromedriver when stealth mode is on, plain Selenium
    Chrome otherwise. The driver is always quit on exit.
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        self.config = config or BrowserConfig()
        self.driver = None
        self.logger = logging.getLogger(__name__)

    def __enter__(self) -> SeleniumPage:
        """Context manager entry"""
        self._start_browser()
        return SeleniumPage(self.driver)

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self._close_browser()

    def _executable_path(self) -> Optional[str]:
        path = self.config.executable_path
        if path and Path(path).exists():
            return path
        self.logger.warning(f"Chrome executable not found at {path}, letting the driver locate Chrome")
        return None

    def _start_stealth_browser(self):
        import undetected_chromedriver as uc

        options = uc.ChromeOptions()
        options.page_load_strategy = 'eager'
        for argument in self.config.extra_arguments:
            options.add_argument(argument)

        return uc.Chrome(
            options=options,
            user_data_dir=str(Path(self.config.user_data_dir).resolve()),
            browser_executable_path=self._executable_path(),
            headless=self.config.headless
        )

    def _start_plain_browser(self):
        from selenium import webdriver
        from selenium.webdriver.chrome.options import Options

        chrome_options = Options()
        chrome_options.page_load_strategy = 'eager'
        if self.config.headless:
            chrome_options.add_argument('--headless=new')
        for argument in self.config.extra_arguments:
            chrome_options.add_argument(argument)
        chrome_options.add_argument(f'--user-data-dir={Path(self.config.user_data_dir).resolve()}')
        chrome_options.add_experimental_option("excludeSwitches", ["enable-automation"])

        executable = self._executable_path()
        if executable:
            chrome_options.binary_location = executable

        return webdriver.Chrome(options=chrome_options)

    def _start_browser(self):
        """Start the browser with the configured profile and options"""
        try:
            if self.config.use_stealth:
                self.driver = self._start_stealth_browser()
            else:
                self.driver = self._start_plain_browser()
            self.logger.debug("Chrome WebDriver started successfully")
        except Exception as e:
            self.logger.error(f"Failed to start browser: {e}")
            raise

    def _close_browser(self):
        """Close the browser"""
        if self.driver:
            try:
                self.driver.quit()
                self.logger.debug("Chrome WebDriver closed")
            except Exception as e:
                self.logger.warning(f"Error closing browser: {e}")
            finally:
                self.driver = None

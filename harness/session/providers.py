"""
Browser providers.

A provider is the capability set the launcher consumes from a browser
automation library. SeleniumBrowserProvider drives local browsers and
Selenium Grid through Selenium 4 WebDriver.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from selenium import webdriver

from ..core.logging_config import get_logger
from .models import BrowserKind


class BrowserProvider(ABC):
    """Capability set for launching and driving a browser."""

    @abstractmethod
    def launch_local(self, kind: BrowserKind, headless: bool = True) -> Any:
        """Start a browser process on this machine and return its handle."""

    @abstractmethod
    def launch_remote(
        self, kind: BrowserKind, grid_url: str, headless: bool = True
    ) -> Any:
        """Start a browser on a remote grid and return its handle."""

    @abstractmethod
    def set_implicit_wait(self, handle: Any, seconds: int) -> None:
        """Set the implicit element lookup timeout."""

    @abstractmethod
    def maximize_window(self, handle: Any) -> None:
        """Maximize the browser viewport."""

    @abstractmethod
    def navigate(self, handle: Any, url: str) -> None:
        """Load a URL in the browser."""

    @abstractmethod
    def quit(self, handle: Any) -> None:
        """End the browser session and release its resources."""

    @abstractmethod
    def capture_screenshot(self, handle: Any) -> bytes:
        """Capture the current viewport as PNG bytes."""


class SeleniumBrowserProvider(BrowserProvider):
    """Selenium WebDriver implementation of the provider capability set."""

    HEADLESS_ARGUMENTS: Dict[BrowserKind, List[str]] = {
        BrowserKind.CHROME: ["--headless", "--disable-gpu", "--window-size=1920,1080"],
        BrowserKind.FIREFOX: ["-headless"],
        BrowserKind.EDGE: ["--headless=new", "--disable-gpu", "--window-size=1920,1080"],
    }

    def __init__(self):
        self.logger = get_logger(__name__)

    def build_options(self, kind: BrowserKind, headless: bool = True):
        """Build the WebDriver options object for a browser kind."""
        if kind is BrowserKind.CHROME:
            options = webdriver.ChromeOptions()
        elif kind is BrowserKind.FIREFOX:
            options = webdriver.FirefoxOptions()
        else:
            options = webdriver.EdgeOptions()

        if headless:
            for argument in self.HEADLESS_ARGUMENTS[kind]:
                options.add_argument(argument)

        return options

    def launch_local(self, kind: BrowserKind, headless: bool = True) -> Any:
        options = self.build_options(kind, headless)
        drivers = {
            BrowserKind.CHROME: webdriver.Chrome,
            BrowserKind.FIREFOX: webdriver.Firefox,
            BrowserKind.EDGE: webdriver.Edge,
        }
        driver = drivers[kind](options=options)
        self.logger.info(f"Local WebDriver started: {kind.value}")
        return driver

    def launch_remote(
        self, kind: BrowserKind, grid_url: str, headless: bool = True
    ) -> Any:
        options = self.build_options(kind, headless)
        driver = webdriver.Remote(command_executor=grid_url, options=options)
        self.logger.info(
            f"RemoteWebDriver started on Selenium Grid: {kind.value}",
            extra={"metadata": {"grid_url": grid_url}},
        )
        return driver

    def set_implicit_wait(self, handle: Any, seconds: int) -> None:
        handle.implicitly_wait(seconds)

    def maximize_window(self, handle: Any) -> None:
        handle.maximize_window()

    def navigate(self, handle: Any, url: str) -> None:
        handle.get(url)

    def quit(self, handle: Any) -> None:
        handle.quit()

    def capture_screenshot(self, handle: Any) -> bytes:
        return handle.get_screenshot_as_png()

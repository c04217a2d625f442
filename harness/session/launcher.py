"""
Browser launcher.

Creates browser sessions locally or on a Selenium Grid and applies the
per-session configuration. Launching is infrastructure and fails the attempt;
the initial navigation is a test precondition and only raises a recoverable
NavigationError.
"""

import time
from typing import Any, Optional

from ..core.config import Config
from ..core.exceptions import BrowserLaunchError, NavigationError, TeardownError
from ..core.logging_config import get_logger
from .models import BrowserKind
from .providers import BrowserProvider, SeleniumBrowserProvider


class BrowserLauncher:
    """Creates, configures and quits browser handles through a provider."""

    def __init__(self, provider: Optional[BrowserProvider] = None):
        self.provider = provider or SeleniumBrowserProvider()
        self.logger = get_logger(__name__)

    def create(self, kind: Any, config: Config) -> Any:
        """
        Launch a browser.

        Args:
            kind: Browser kind name (chrome, firefox or edge, any case)
            config: Run configuration selecting local or grid launch

        Returns:
            Browser handle from the provider

        Raises:
            UnsupportedBrowserError: For an unknown kind, before any launch
            BrowserLaunchError: If the provider fails to start the browser
        """
        browser_kind = BrowserKind.parse(kind)
        remote = config.selenium_grid

        try:
            if remote:
                handle = self.provider.launch_remote(
                    browser_kind, config.grid_url, config.headless
                )
            else:
                handle = self.provider.launch_local(browser_kind, config.headless)
        except Exception as e:
            self.logger.error(
                f"Failed to launch {browser_kind.value}: {e}",
                extra={"metadata": {"browser": browser_kind.value, "remote": remote}},
            )
            raise BrowserLaunchError(
                f"Failed to initialize WebDriver: {e}",
                browser=browser_kind.value,
                remote=remote,
            ) from e

        try:
            if config.launch_delay:
                time.sleep(config.launch_delay)
        except BaseException:
            self._release(handle)
            raise

        self.logger.info(
            f"Browser launched: {browser_kind.value}",
            extra={"metadata": {"browser": browser_kind.value, "remote": remote}},
        )
        return handle

    def configure(self, handle: Any, config: Config) -> None:
        """
        Apply implicit wait, maximize the window and open the target URL.

        Raises:
            BrowserLaunchError: If the timeout or window setup fails
            NavigationError: If loading the target URL fails
        """
        try:
            self.provider.set_implicit_wait(handle, config.implicit_wait)
            self.provider.maximize_window(handle)
        except Exception as e:
            raise BrowserLaunchError(f"Failed to configure browser: {e}") from e

        try:
            self.provider.navigate(handle, config.url)
        except Exception as e:
            self.logger.warning(
                f"Navigation to {config.url} failed: {e}",
                extra={"metadata": {"url": config.url}},
            )
            raise NavigationError(
                f"Failed to navigate to {config.url}: {e}", url=config.url
            ) from e

    def quit(self, handle: Any) -> None:
        """Quit a browser handle, raising TeardownError on failure."""
        try:
            self.provider.quit(handle)
        except Exception as e:
            raise TeardownError(f"Failed to quit browser: {e}") from e

    def capture_screenshot(self, handle: Any) -> bytes:
        return self.provider.capture_screenshot(handle)

    def _release(self, handle: Any) -> None:
        try:
            self.provider.quit(handle)
        except Exception as e:
            self.logger.warning(f"Failed to release browser after launch error: {e}")

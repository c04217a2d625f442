"""
Pytest configuration and shared fixtures for QA harness tests.

Provides a recording fake browser provider, run configurations and suite
contexts wired to it, so no test launches a real browser.
"""

import os
import threading
from typing import Any, List

import pytest

from harness.core.config import Config
from harness.execution.context import SuiteContext
from harness.reporting.reporter import JsonReporter
from harness.session.launcher import BrowserLauncher
from harness.session.models import BrowserKind
from harness.session.providers import BrowserProvider

pytest_plugins = ["pytester"]


class FakeBrowser:
    """Stand-in for a WebDriver handle."""

    def __init__(self, kind: BrowserKind, remote_url: str = None, headless: bool = True):
        self.kind = kind
        self.remote_url = remote_url
        self.headless = headless
        self.implicit_wait = None
        self.maximized = False
        self.current_url = None
        self.quit_count = 0

    @property
    def is_open(self) -> bool:
        return self.quit_count == 0


class FakeBrowserProvider(BrowserProvider):
    """Provider recording every call, with switchable failures."""

    def __init__(
        self,
        fail_launch: bool = False,
        fail_navigation: bool = False,
        fail_configure: bool = False,
        fail_quit: bool = False,
        fail_screenshot: bool = False,
    ):
        self.fail_launch = fail_launch
        self.fail_navigation = fail_navigation
        self.fail_configure = fail_configure
        self.fail_quit = fail_quit
        self.fail_screenshot = fail_screenshot
        self.launched: List[FakeBrowser] = []
        self._lock = threading.Lock()

    def _launch(self, kind, remote_url, headless):
        if self.fail_launch:
            raise RuntimeError("driver executable not found")
        browser = FakeBrowser(kind, remote_url, headless)
        with self._lock:
            self.launched.append(browser)
        return browser

    def launch_local(self, kind, headless=True):
        return self._launch(kind, None, headless)

    def launch_remote(self, kind, grid_url, headless=True):
        return self._launch(kind, grid_url, headless)

    def set_implicit_wait(self, handle, seconds):
        if self.fail_configure:
            raise RuntimeError("session not created")
        handle.implicit_wait = seconds

    def maximize_window(self, handle):
        handle.maximized = True

    def navigate(self, handle, url):
        if self.fail_navigation:
            raise RuntimeError("net::ERR_NAME_NOT_RESOLVED")
        handle.current_url = url

    def quit(self, handle):
        handle.quit_count += 1
        if self.fail_quit:
            raise RuntimeError("invalid session id")

    def capture_screenshot(self, handle) -> bytes:
        if self.fail_screenshot:
            raise RuntimeError("no such window")
        return b"\x89PNG fake screenshot"

    @property
    def open_browsers(self) -> List[FakeBrowser]:
        with self._lock:
            return [b for b in self.launched if b.is_open]


@pytest.fixture(autouse=True)
def clean_harness_env(monkeypatch):
    """Keep HARNESS_* overrides from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("HARNESS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def run_config(tmp_path):
    """A local chrome configuration without launch delay."""
    return Config(
        browser="chrome",
        selenium_grid=False,
        implicit_wait=5,
        url="https://example.test",
        max_retries=1,
        launch_delay=0,
        parallelism=2,
        report_dir=str(tmp_path / "reports"),
    )


@pytest.fixture
def fake_provider():
    return FakeBrowserProvider()


@pytest.fixture
def launcher(fake_provider):
    return BrowserLauncher(fake_provider)


@pytest.fixture
def reporter(run_config, fake_provider):
    return JsonReporter(run_config.report_dir, capture=fake_provider.capture_screenshot)


@pytest.fixture
def suite_context(run_config, launcher, reporter):
    """Suite context wired to the fake provider."""
    return SuiteContext(config=run_config, launcher=launcher, reporter=reporter)


@pytest.fixture
def properties_file(tmp_path):
    """Write a .properties config file and return its path."""

    def _write(content: str, name: str = "config.properties"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_factory():
    """Build a Config from the local chrome defaults plus overrides."""

    def _make(**overrides: Any) -> Config:
        values = dict(
            browser="chrome",
            implicit_wait=5,
            url="https://example.test",
            launch_delay=0,
        )
        values.update(overrides)
        return Config(**values)

    return _make


@pytest.fixture
def provider_factory():
    """Build a FakeBrowserProvider with the given failure switches."""
    return FakeBrowserProvider

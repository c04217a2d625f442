"""Core components for the QA harness."""

from .config import Config, ConfigStore
from .exceptions import (
    HarnessError,
    ConfigLoadError,
    UnsupportedBrowserError,
    BrowserLaunchError,
    SessionNotInitializedError,
    NavigationError,
    TeardownError,
    TestSkipped,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    "Config",
    "ConfigStore",
    "HarnessError",
    "ConfigLoadError",
    "UnsupportedBrowserError",
    "BrowserLaunchError",
    "SessionNotInitializedError",
    "NavigationError",
    "TeardownError",
    "TestSkipped",
    "setup_logging",
    "get_logger",
]

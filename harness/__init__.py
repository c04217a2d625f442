"""
QA Harness - browser session lifecycle and retry coordination

Manages isolated per-worker browser sessions, a fixed-attempt retry policy
and the reporting hooks around UI and API acceptance tests run in parallel.
"""

__version__ = "0.1.0"
__author__ = "QA Harness Team"

from .core.config import Config, ConfigStore
from .core.exceptions import HarnessError
from .core.logging_config import setup_logging
from .execution.context import SuiteContext, TestContext
from .execution.runner import SuiteRunner

__all__ = [
    "Config",
    "ConfigStore",
    "HarnessError",
    "setup_logging",
    "SuiteContext",
    "TestContext",
    "SuiteRunner",
]

"""
Browser session management for the QA harness.

Launches and configures browsers, keeps one session per execution unit and
provides the per-test setup and teardown hooks.
"""

from .models import BrowserKind, ExecutionUnit, Session
from .providers import BrowserProvider, SeleniumBrowserProvider
from .launcher import BrowserLauncher
from .registry import SessionRegistry
from .lifecycle import setup_session, teardown_session

__all__ = [
    "BrowserKind",
    "ExecutionUnit",
    "Session",
    "BrowserProvider",
    "SeleniumBrowserProvider",
    "BrowserLauncher",
    "SessionRegistry",
    "setup_session",
    "teardown_session",
]

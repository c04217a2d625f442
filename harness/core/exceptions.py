"""
Base exception classes for the QA harness.

Provides a hierarchy of exceptions for the failures that can occur while
loading configuration and driving browser sessions around a test run.
"""

from typing import Optional, Dict, Any


class HarnessError(Exception):
    """Base exception class for all harness errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }


class ConfigLoadError(HarnessError):
    """Raised when the run configuration cannot be loaded. Fatal to the suite."""

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        violations: Optional[list] = None,
    ):
        super().__init__(message, "CONFIG_LOAD_FAILED")
        self.config_path = config_path
        self.violations = violations or []
        self.context.update(
            {
                "config_path": config_path,
                "violations": violations,
            }
        )


class UnsupportedBrowserError(HarnessError):
    """Raised when a browser kind outside chrome/firefox/edge is requested."""

    def __init__(self, message: str, browser: Optional[str] = None):
        super().__init__(message, "UNSUPPORTED_BROWSER")
        self.browser = browser
        self.context.update({"browser": browser})


class BrowserLaunchError(HarnessError):
    """Raised when the browser driver fails to start or configure a session."""

    def __init__(
        self,
        message: str,
        browser: Optional[str] = None,
        remote: Optional[bool] = None,
    ):
        super().__init__(message, "BROWSER_LAUNCH_FAILED")
        self.browser = browser
        self.remote = remote
        self.context.update(
            {
                "browser": browser,
                "remote": remote,
            }
        )


class SessionNotInitializedError(HarnessError):
    """Raised when a worker asks for a session it does not own."""

    def __init__(self, message: str, unit: Optional[str] = None):
        super().__init__(message, "SESSION_NOT_INITIALIZED")
        self.unit = unit
        self.context.update({"unit": unit})


class NavigationError(HarnessError):
    """Raised when the initial navigation fails. The session stays usable."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, "NAVIGATION_FAILED")
        self.url = url
        self.context.update({"url": url})


class TeardownError(HarnessError):
    """Raised when quitting a browser fails. Always logged, never propagated."""

    def __init__(self, message: str, unit: Optional[str] = None):
        super().__init__(message, "TEARDOWN_FAILED")
        self.unit = unit
        self.context.update({"unit": unit})


class TestSkipped(HarnessError):
    """Raised by a test body to end the current attempt as skipped."""

    __test__ = False

    def __init__(self, message: str = "Test skipped"):
        super().__init__(message, "TEST_SKIPPED")

"""
Unit tests for the harness exception hierarchy.
"""

import pytest

from harness.core.exceptions import (
    HarnessError,
    ConfigLoadError,
    UnsupportedBrowserError,
    BrowserLaunchError,
    SessionNotInitializedError,
    NavigationError,
    TeardownError,
    TestSkipped,
)


class TestHarnessErrors:
    """Test cases for error codes and structured context."""

    @pytest.mark.parametrize(
        "error, code",
        [
            (ConfigLoadError("bad"), "CONFIG_LOAD_FAILED"),
            (UnsupportedBrowserError("bad"), "UNSUPPORTED_BROWSER"),
            (BrowserLaunchError("bad"), "BROWSER_LAUNCH_FAILED"),
            (SessionNotInitializedError("bad"), "SESSION_NOT_INITIALIZED"),
            (NavigationError("bad"), "NAVIGATION_FAILED"),
            (TeardownError("bad"), "TEARDOWN_FAILED"),
            (TestSkipped(), "TEST_SKIPPED"),
        ],
    )
    def test_error_codes(self, error, code):
        assert isinstance(error, HarnessError)
        assert error.error_code == code

    def test_to_dict(self):
        """Test conversion to a dictionary for structured logging."""
        error = BrowserLaunchError("Failed to initialize WebDriver", browser="edge", remote=True)

        data = error.to_dict()

        assert data == {
            "error_type": "BrowserLaunchError",
            "message": "Failed to initialize WebDriver",
            "error_code": "BROWSER_LAUNCH_FAILED",
            "context": {"browser": "edge", "remote": True},
        }

    def test_config_load_error_violations(self):
        error = ConfigLoadError(
            "Invalid configuration", config_path="config.properties", violations=["url: missing"]
        )

        assert error.violations == ["url: missing"]
        assert error.context["config_path"] == "config.properties"
        assert str(error) == "Invalid configuration"

    def test_skip_default_message(self):
        assert TestSkipped().message == "Test skipped"

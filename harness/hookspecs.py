"""Hook specifications added to pytest by the harness plugin."""

import pytest


@pytest.hookspec(firstresult=True)
def pytest_harness_provider(config):
    """
    Return the BrowserProvider the suite should launch browsers with.

    Implement in a conftest.py to replace the default Selenium provider.
    """


@pytest.hookspec(firstresult=True)
def pytest_harness_action_factory(config):
    """Return a callable building the action helper for a browser handle."""

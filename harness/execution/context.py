"""
Suite and test contexts.

SuiteContext carries everything the setup, teardown and listener hooks need,
so nothing is looked up through module globals. TestContext is what a test
body receives: the session getters and helpers a test would otherwise
inherit from a base class.
"""

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from ..core.config import Config
from ..core.exceptions import SessionNotInitializedError
from ..reporting.reporter import JsonReporter, Reporter
from ..session.launcher import BrowserLauncher
from ..session.models import Session
from ..session.providers import BrowserProvider
from ..session.registry import SessionRegistry
from .retry import RetryAnalyzer


def generate_suite_id() -> str:
    """
    Generate a unique suite ID for correlating logs and reports.

    Returns:
        Date-prefixed unique identifier
    """
    suite_id = str(uuid.uuid4()).replace("-", "")[:16]
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d")
    return f"{timestamp}-{suite_id}"


@dataclass
class SuiteContext:
    """Shared state of one suite run."""

    config: Config
    launcher: BrowserLauncher
    reporter: Reporter
    registry: SessionRegistry = field(default_factory=SessionRegistry)
    retry_analyzer: Optional[RetryAnalyzer] = None
    action_factory: Optional[Callable[[Any], Any]] = None
    suite_id: str = field(default_factory=generate_suite_id)

    def __post_init__(self):
        if self.retry_analyzer is None:
            self.retry_analyzer = RetryAnalyzer.from_config(self.config)

    @classmethod
    def create(
        cls,
        config: Config,
        provider: Optional[BrowserProvider] = None,
        reporter: Optional[Reporter] = None,
        action_factory: Optional[Callable[[Any], Any]] = None,
        report_dir: Optional[str] = None,
    ) -> "SuiteContext":
        """
        Build a suite context with default collaborators.

        Args:
            config: Loaded run configuration
            provider: Browser provider; Selenium when omitted
            reporter: Reporter; a JsonReporter in report_dir when omitted
            action_factory: Builds the action helper for a browser handle
            report_dir: Overrides config.report_dir for the default reporter

        Returns:
            New suite context
        """
        launcher = BrowserLauncher(provider)
        if reporter is None:
            reporter = JsonReporter(
                report_dir or config.report_dir,
                capture=launcher.capture_screenshot,
            )
        return cls(
            config=config,
            launcher=launcher,
            reporter=reporter,
            action_factory=action_factory,
        )


class SoftAssert:
    """Collects assertion failures and raises them together."""

    def __init__(self):
        self.failures: List[str] = []

    def check(self, condition: Any, message: str = "Soft assertion failed") -> bool:
        if not condition:
            self.failures.append(message)
        return bool(condition)

    def equal(self, actual: Any, expected: Any, message: Optional[str] = None) -> bool:
        return self.check(
            actual == expected,
            message or f"Expected {expected!r} but found {actual!r}",
        )

    def assert_all(self) -> None:
        """Raise one AssertionError listing every collected failure."""
        if not self.failures:
            return
        failures, self.failures = self.failures, []
        raise AssertionError(
            "Soft assertion failures:\n" + "\n".join(f" - {f}" for f in failures)
        )


class TestContext:
    """Per-test view of the suite, handed to test bodies."""

    __test__ = False

    def __init__(self, suite: SuiteContext, name: str = ""):
        self.suite = suite
        self.name = name
        self.soft_assert = SoftAssert()

    @property
    def config(self) -> Config:
        return self.suite.config

    @property
    def session(self) -> Session:
        return self.suite.registry.get()

    @property
    def driver(self) -> Any:
        return self.session.browser

    @property
    def actions(self) -> Any:
        session = self.session
        if session.actions is None:
            raise SessionNotInitializedError(
                "ActionDriver not initialized", unit=str(session.unit)
            )
        return session.actions

    def static_wait(self, seconds: float) -> None:
        time.sleep(seconds)

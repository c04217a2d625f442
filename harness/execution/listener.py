"""
Test lifecycle listener.

Translates suite and test lifecycle events into reporter calls. Every handler
isolates reporter failures so one test's broken report never stops the
handling of another.
"""

from typing import Any, Callable, Optional

from ..core.exceptions import SessionNotInitializedError
from ..core.logging_config import get_logger
from .context import SuiteContext
from .models import TestKind


class TestLifecycleListener:
    """Sequences reporter calls around suite and test events."""

    __test__ = False

    PASS_TITLE = "Test Passed Successfully!"
    FAIL_TITLE = "Test Failed!"

    def __init__(self, context: SuiteContext):
        self.context = context
        self.reporter = context.reporter
        self.logger = get_logger(__name__)

    def on_suite_start(self) -> None:
        self.context.retry_analyzer.reset()
        self._safely("suite start", self.reporter.init)

    def on_test_start(self, identity: str) -> None:
        def report():
            self.reporter.start_test(identity)
            self.reporter.log_step(f"Test Started: {identity}")

        self._safely(identity, report)

    def on_test_success(self, identity: str, kind: TestKind) -> None:
        message = f"Test End: {identity} - ✔ Test Passed"

        def report():
            handle = self._browser_for(identity, kind)
            if handle is not None:
                self.reporter.log_step_with_screenshot(handle, self.PASS_TITLE, message)
            else:
                self.reporter.log_validation_api(message)

        self._safely(identity, report)

    def on_test_failure(self, identity: str, kind: TestKind, message: Optional[str]) -> None:
        end_message = f"Test End: {identity} - ❌ Test Failed"

        def report():
            self.reporter.log_step(message or "Test failed without a message")
            handle = self._browser_for(identity, kind)
            if handle is not None:
                self.reporter.log_failure(handle, self.FAIL_TITLE, end_message)
            else:
                self.reporter.log_failure_api(end_message)

        self._safely(identity, report)

    def on_test_skipped(self, identity: str) -> None:
        self._safely(identity, lambda: self.reporter.log_skip(f"Test Skipped: {identity}"))

    def on_test_retry(self, identity: str, attempt: int, message: Optional[str]) -> None:
        """Note a failed attempt that will be re-run. No failure is recorded."""
        self._safely(
            identity,
            lambda: self.reporter.log_step(
                f"Attempt {attempt} of {identity} failed, retrying: {message}"
            ),
        )

    def on_suite_finish(self) -> None:
        self._safely("suite finish", self.reporter.flush)

    def _browser_for(self, identity: str, kind: TestKind) -> Optional[Any]:
        if kind is not TestKind.UI:
            return None
        try:
            return self.context.registry.get().browser
        except SessionNotInitializedError:
            self.logger.warning(
                f"No browser session for {identity}, reporting without screenshot"
            )
            return None

    def _safely(self, identity: str, action: Callable[[], Any]) -> bool:
        try:
            action()
        except Exception as e:
            self.logger.error(
                f"Reporting failed for {identity}: {e}",
                exc_info=True,
                extra={"metadata": {"test_name": identity}},
            )
            return False
        return True

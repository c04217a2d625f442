"""
Thread-pool suite runner.

Runs plain-callable test cases on a fixed pool of workers. Each worker runs
one test at a time through setup, body, reporting and teardown, re-running
failed attempts while the registered retry policy allows.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple

from ..core.exceptions import TestSkipped
from ..core.logging_config import get_logger
from ..session.lifecycle import setup_session, teardown_session
from ..session.models import ExecutionUnit
from .context import SuiteContext, TestContext
from .listener import TestLifecycleListener
from .models import (
    AttemptResult,
    SuiteResult,
    TestCase,
    TestKind,
    TestOutcome,
    TestRunResult,
)


RetryPredicate = Callable[[str, int], bool]


class SuiteRunner:
    """
    Executes a suite of test cases in parallel.

    The retry policy is registered once, before the first test runs. When
    none has been registered, the suite's RetryAnalyzer registers itself.
    """

    def __init__(
        self,
        context: SuiteContext,
        listener: Optional[TestLifecycleListener] = None,
    ):
        self.context = context
        self.listener = listener or TestLifecycleListener(context)
        self.logger = get_logger(__name__)
        self._retry_policy: Optional[RetryPredicate] = None

    def register_retry_policy(self, predicate: RetryPredicate) -> None:
        """Attach the retry predicate. Allowed once per runner."""
        if self._retry_policy is not None:
            raise RuntimeError("A retry policy is already registered")
        self._retry_policy = predicate

    def run(self, cases: Sequence[TestCase]) -> SuiteResult:
        """
        Run all cases and return their final outcomes.

        Args:
            cases: Test cases to schedule

        Returns:
            Suite result with one entry per case, in input order
        """
        if self._retry_policy is None:
            self.context.retry_analyzer.register(self)

        workers = self.context.config.parallelism
        self.logger.info(
            f"Starting suite with {len(cases)} tests on {workers} workers",
            extra={"metadata": {"suite_id": self.context.suite_id}},
        )

        start_time = time.time()
        self.listener.on_suite_start()
        try:
            with ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="harness-worker"
            ) as pool:
                results = list(pool.map(self._run_case, cases))
        finally:
            self.listener.on_suite_finish()

        suite_result = SuiteResult(
            suite_id=self.context.suite_id,
            duration=time.time() - start_time,
            results=results,
        )
        summary = suite_result.to_summary()
        self.logger.info(
            f"Suite completed: {summary['passed']} passed, "
            f"{summary['failed']} failed, {summary['skipped']} skipped",
            extra={"metadata": summary},
        )
        return suite_result

    def _run_case(self, case: TestCase) -> TestRunResult:
        attempts: List[AttemptResult] = []
        while True:
            attempt = self.context.retry_analyzer.next_attempt(case.name)
            result, retry = self._run_attempt(case, attempt)
            attempts.append(result)
            if not retry:
                break
        return TestRunResult(name=case.name, kind=case.kind, attempts=attempts)

    def _run_attempt(self, case: TestCase, attempt: int) -> Tuple[AttemptResult, bool]:
        unit = ExecutionUnit.current()
        start_time = time.time()
        outcome = TestOutcome.PASS
        message = None
        error_type = None
        retry = False

        self.listener.on_test_start(case.name)
        try:
            try:
                if case.kind is TestKind.UI:
                    setup_session(self.context, case.browser)
                case.func(TestContext(self.context, case.name))
            except TestSkipped as e:
                outcome = TestOutcome.SKIP
                message = e.message
            except Exception as e:
                outcome = TestOutcome.FAIL
                message = str(e) or repr(e)
                error_type = type(e).__name__

            if outcome is TestOutcome.PASS:
                self.listener.on_test_success(case.name, case.kind)
            elif outcome is TestOutcome.SKIP:
                self.listener.on_test_skipped(case.name)
            else:
                retry = self._should_retry(case.name, attempt)
                if retry:
                    self.listener.on_test_retry(case.name, attempt, message)
                else:
                    self.listener.on_test_failure(case.name, case.kind, message)
        finally:
            teardown_session(self.context)

        duration = time.time() - start_time
        self.logger.info(
            f"Test {case.name} attempt {attempt}: {outcome.value}",
            extra={
                "metadata": {
                    "test_name": case.name,
                    "attempt": attempt,
                    "outcome": outcome.value,
                    "unit": str(unit),
                    "duration": duration,
                }
            },
        )
        return (
            AttemptResult(
                attempt=attempt,
                outcome=outcome,
                unit=str(unit),
                duration=duration,
                message=message,
                error_type=error_type,
            ),
            retry,
        )

    def _should_retry(self, identity: str, attempt: int) -> bool:
        try:
            return bool(self._retry_policy(identity, attempt))
        except Exception as e:
            self.logger.error(f"Retry policy failed for {identity}: {e}", exc_info=True)
            return False

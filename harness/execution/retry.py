"""
Fixed-attempt retry policy for failed tests.
"""

import threading
from typing import Dict

from ..core.config import Config
from ..core.logging_config import get_logger


DEFAULT_MAX_RETRIES = 1


class RetryAnalyzer:
    """
    Decides whether a failed test runs again.

    A test is re-run while its attempt number is below max_retries, so it
    executes at most max_retries + 1 times. Attempt counters are keyed by
    test identity and shared across workers for the whole suite.
    """

    def __init__(self, max_retries: int = DEFAULT_MAX_RETRIES):
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        self.max_retries = max_retries
        self._attempts: Dict[str, int] = {}
        self._lock = threading.Lock()
        self.logger = get_logger(__name__)

    @classmethod
    def from_config(cls, config: Config) -> "RetryAnalyzer":
        return cls(config.max_retries)

    def should_retry(self, identity: str, attempt: int) -> bool:
        """
        Check whether a failed attempt should be re-run.

        Args:
            identity: Test identity
            attempt: Number of the attempt that failed, starting at 0

        Returns:
            True while attempt < max_retries
        """
        retry = attempt < self.max_retries
        if retry:
            self.logger.info(
                f"Retrying {identity} (attempt {attempt + 1} of {self.max_retries})",
                extra={"metadata": {"test_name": identity, "attempt": attempt}},
            )
        return retry

    def next_attempt(self, identity: str) -> int:
        """Claim the next attempt number for a test. The first is 0."""
        with self._lock:
            attempt = self._attempts.get(identity, 0)
            self._attempts[identity] = attempt + 1
        return attempt

    def attempts(self, identity: str) -> int:
        """Number of attempts started for a test."""
        with self._lock:
            return self._attempts.get(identity, 0)

    def reset(self) -> None:
        """Forget all attempt counts. Called when a suite starts."""
        with self._lock:
            self._attempts.clear()

    def register(self, runner) -> None:
        """Attach this policy to a host runner before its first test."""
        runner.register_retry_policy(self.should_retry)

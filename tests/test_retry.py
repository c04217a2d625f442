"""
Unit tests for RetryAnalyzer.
"""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from harness.execution.retry import DEFAULT_MAX_RETRIES, RetryAnalyzer


class TestRetryAnalyzer:
    """Test cases for the fixed-attempt retry policy."""

    def test_default_allows_one_retry(self):
        analyzer = RetryAnalyzer()

        assert analyzer.max_retries == DEFAULT_MAX_RETRIES == 1
        assert analyzer.should_retry("test_login", 0) is True
        assert analyzer.should_retry("test_login", 1) is False

    def test_decision_is_deterministic(self):
        """Test the same (identity, attempt) always gets the same answer."""
        analyzer = RetryAnalyzer(2)

        answers = [analyzer.should_retry("test_login", attempt) for attempt in range(4)] * 2

        assert answers == [True, True, False, False] * 2

    def test_zero_retries(self):
        analyzer = RetryAnalyzer(0)

        assert analyzer.should_retry("test_login", 0) is False

    def test_negative_retries(self):
        with pytest.raises(ValueError, match="max_retries"):
            RetryAnalyzer(-1)

    def test_from_config(self, config_factory):
        analyzer = RetryAnalyzer.from_config(config_factory(max_retries=3))

        assert analyzer.max_retries == 3

    def test_next_attempt_per_identity(self):
        analyzer = RetryAnalyzer()

        assert analyzer.next_attempt("test_a") == 0
        assert analyzer.next_attempt("test_a") == 1
        assert analyzer.next_attempt("test_b") == 0
        assert analyzer.attempts("test_a") == 2
        assert analyzer.attempts("test_c") == 0

    def test_next_attempt_concurrent(self):
        """Test concurrent claims hand out every attempt number exactly once."""
        analyzer = RetryAnalyzer()

        with ThreadPoolExecutor(max_workers=8) as pool:
            claimed = list(pool.map(lambda _: analyzer.next_attempt("test_a"), range(200)))

        assert sorted(claimed) == list(range(200))

    def test_reset(self):
        analyzer = RetryAnalyzer()
        analyzer.next_attempt("test_a")

        analyzer.reset()

        assert analyzer.next_attempt("test_a") == 0

    def test_register(self):
        analyzer = RetryAnalyzer()
        runner = Mock()

        analyzer.register(runner)

        runner.register_retry_policy.assert_called_once_with(analyzer.should_retry)

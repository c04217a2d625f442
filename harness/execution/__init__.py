"""
Test execution coordination for the QA harness.

This module provides the retry policy, the lifecycle listener, the suite and
test contexts, and a thread-pool runner for suites of plain callables.
"""

from .models import (
    TestOutcome,
    TestKind,
    TestCase,
    AttemptResult,
    TestRunResult,
    SuiteResult,
)
from .retry import RetryAnalyzer, DEFAULT_MAX_RETRIES
from .context import SuiteContext, TestContext, SoftAssert
from .listener import TestLifecycleListener
from .runner import SuiteRunner

__all__ = [
    "TestOutcome",
    "TestKind",
    "TestCase",
    "AttemptResult",
    "TestRunResult",
    "SuiteResult",
    "RetryAnalyzer",
    "DEFAULT_MAX_RETRIES",
    "SuiteContext",
    "TestContext",
    "SoftAssert",
    "TestLifecycleListener",
    "SuiteRunner",
]

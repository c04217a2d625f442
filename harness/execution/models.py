"""
Data models for test scheduling and execution results.

Defines the outcome and kind enumerations shared by the listener, the retry
policy and both host runners, plus Pydantic result models for the thread-pool
runner.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict


# CamelCase boundaries, e.g. "UserAPITest" -> "User_API_Test"
_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_API_WORD = re.compile(r"(^|[^a-z0-9])api([^a-z0-9]|$)")


class TestOutcome(Enum):
    """Outcome of one test attempt."""

    __test__ = False

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


class TestKind(Enum):
    """Whether a test drives a browser or only calls APIs."""

    __test__ = False

    UI = "ui"
    API = "api"

    @classmethod
    def infer(cls, identity: str) -> "TestKind":
        """
        API when "api" appears as a separate word of the identity, UI otherwise.

        Words are split on punctuation and CamelCase, so "test_api_users" and
        "LoginApiTest" are API while "test_rapid_checkout" is UI.
        """
        words = _WORD_BOUNDARY.sub("_", identity).lower()
        return cls.API if _API_WORD.search(words) else cls.UI


@dataclass
class TestCase:
    """A scheduled test for the thread-pool runner."""

    __test__ = False

    name: str
    func: Callable[[Any], None]
    kind: Optional[TestKind] = None
    browser: Optional[str] = None

    def __post_init__(self):
        if self.kind is None:
            self.kind = TestKind.infer(self.name)


class AttemptResult(BaseModel):
    """Result of a single attempt."""

    model_config = ConfigDict(extra="forbid")

    attempt: int = Field(..., ge=0, description="Attempt number, starting at 0")
    outcome: TestOutcome = Field(..., description="Attempt outcome")
    unit: str = Field(..., description="Execution unit that ran the attempt")
    duration: float = Field(..., ge=0, description="Duration in seconds")
    message: Optional[str] = Field(None, description="Failure or skip message")
    error_type: Optional[str] = Field(None, description="Exception class name")


class TestRunResult(BaseModel):
    """All attempts of one test. Only the last attempt's outcome counts."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Test identity")
    kind: TestKind = Field(..., description="UI or API")
    attempts: List[AttemptResult] = Field(..., min_length=1)

    @property
    def outcome(self) -> TestOutcome:
        return self.attempts[-1].outcome

    @property
    def message(self) -> Optional[str]:
        return self.attempts[-1].message

    @property
    def executions(self) -> int:
        return len(self.attempts)


class SuiteResult(BaseModel):
    """Final outcomes of a suite run."""

    model_config = ConfigDict(extra="forbid")

    suite_id: str = Field(..., description="Suite identifier")
    duration: float = Field(..., ge=0, description="Wall time in seconds")
    results: List[TestRunResult] = Field(default_factory=list)

    def count(self, outcome: TestOutcome) -> int:
        return sum(1 for result in self.results if result.outcome == outcome)

    @property
    def passed(self) -> int:
        return self.count(TestOutcome.PASS)

    @property
    def failed(self) -> int:
        return self.count(TestOutcome.FAIL)

    @property
    def skipped(self) -> int:
        return self.count(TestOutcome.SKIP)

    @property
    def is_success(self) -> bool:
        return self.failed == 0

    def get(self, name: str) -> Optional[TestRunResult]:
        for result in self.results:
            if result.name == name:
                return result
        return None

    def to_summary(self) -> Dict[str, Any]:
        """Create a summary dictionary for logging."""
        return {
            "suite_id": self.suite_id,
            "total": len(self.results),
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "retried": sum(1 for result in self.results if result.executions > 1),
            "duration": self.duration,
        }

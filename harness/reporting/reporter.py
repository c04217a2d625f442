"""
Reporter interface and the default JSON reporter.

The reporter is a process-wide sink shared by every worker; implementations
synchronize internally so callers never coordinate. Steps are attributed to
the test most recently started on the calling thread.
"""

import re
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ..core.logging_config import get_logger
from .models import (
    RecordStatus,
    ReportRecord,
    ReportStep,
    ReportSummary,
    RunReport,
    StepLevel,
)


class Reporter(ABC):
    """Sink for structured test report calls."""

    @abstractmethod
    def init(self) -> None:
        """Prepare the report. Calling it again has no effect."""

    @abstractmethod
    def start_test(self, name: str) -> None:
        """Open the report record for a test on the calling thread."""

    @abstractmethod
    def log_step(self, message: str) -> None:
        """Log an informational step."""

    @abstractmethod
    def log_step_with_screenshot(self, handle: Any, title: str, message: str) -> None:
        """Log a passing step with a screenshot of the browser."""

    @abstractmethod
    def log_failure(self, handle: Any, title: str, message: str) -> None:
        """Log a failure with a screenshot of the browser."""

    @abstractmethod
    def log_skip(self, message: str) -> None:
        """Log a skipped test."""

    @abstractmethod
    def log_validation_api(self, message: str) -> None:
        """Log a passing API validation."""

    @abstractmethod
    def log_failure_api(self, message: str) -> None:
        """Log a failed API validation."""

    @abstractmethod
    def flush(self) -> Any:
        """Write out everything recorded so far."""


class JsonReporter(Reporter):
    """
    Thread-safe reporter writing a JSON report and PNG screenshots.

    Starting a test whose record is already open reuses that record, so a
    retried test ends up with one record reflecting its last attempt.
    """

    REPORT_FILE = "report.json"

    def __init__(
        self,
        output_dir: Union[str, Path],
        capture: Optional[Callable[[Any], bytes]] = None,
        title: str = "Test Execution Report",
    ):
        """
        Initialize the reporter.

        Args:
            output_dir: Directory for report.json and screenshots
            capture: Callable turning a browser handle into PNG bytes
            title: Report title
        """
        self.output_dir = Path(output_dir)
        self.screenshots_dir = self.output_dir / "screenshots"
        self.capture = capture
        self.title = title
        self.logger = get_logger(__name__)

        self._lock = threading.RLock()
        self._records: Dict[str, ReportRecord] = {}
        self._current: Dict[int, str] = {}
        self._started_at: Optional[datetime] = None
        self._screenshot_seq = 0

    @property
    def initialized(self) -> bool:
        return self._started_at is not None

    def init(self) -> None:
        with self._lock:
            if self._started_at is not None:
                return
            self.screenshots_dir.mkdir(parents=True, exist_ok=True)
            self._started_at = datetime.now()
        self.logger.debug(f"Reporter initialized: {self.output_dir}")

    def start_test(self, name: str) -> None:
        with self._lock:
            record = self._records.get(name)
            if record is None:
                self._records[name] = ReportRecord(name=name)
            else:
                record.attempts += 1
                record.status = RecordStatus.RUNNING
                record.finished_at = None
            self._current[threading.get_ident()] = name

    def log_step(self, message: str) -> None:
        self._add_step(StepLevel.INFO, message)

    def log_step_with_screenshot(self, handle: Any, title: str, message: str) -> None:
        screenshot = self._save_screenshot(handle)
        self._add_step(
            StepLevel.PASS, message, title, screenshot, status=RecordStatus.PASSED
        )

    def log_failure(self, handle: Any, title: str, message: str) -> None:
        screenshot = self._save_screenshot(handle)
        self._add_step(
            StepLevel.FAIL, message, title, screenshot, status=RecordStatus.FAILED
        )

    def log_skip(self, message: str) -> None:
        self._add_step(StepLevel.SKIP, message, status=RecordStatus.SKIPPED)

    def log_validation_api(self, message: str) -> None:
        self._add_step(StepLevel.PASS, message, status=RecordStatus.PASSED)

    def log_failure_api(self, message: str) -> None:
        self._add_step(StepLevel.FAIL, message, status=RecordStatus.FAILED)

    def records(self) -> List[ReportRecord]:
        """Snapshot of all records in start order."""
        with self._lock:
            return [record.model_copy(deep=True) for record in self._records.values()]

    def get_record(self, name: str) -> Optional[ReportRecord]:
        with self._lock:
            record = self._records.get(name)
            return record.model_copy(deep=True) if record is not None else None

    def summary(self) -> ReportSummary:
        with self._lock:
            statuses = [record.status for record in self._records.values()]
        return ReportSummary(
            total=len(statuses),
            passed=statuses.count(RecordStatus.PASSED),
            failed=statuses.count(RecordStatus.FAILED),
            skipped=statuses.count(RecordStatus.SKIPPED),
            running=statuses.count(RecordStatus.RUNNING),
        )

    def flush(self) -> Path:
        """Write report.json and return its path."""
        with self._lock:
            report = RunReport(
                title=self.title,
                started_at=self._started_at or datetime.now(),
                summary=self.summary(),
                records=self.records(),
            )
            self.output_dir.mkdir(parents=True, exist_ok=True)
            report_path = self.output_dir / self.REPORT_FILE
            report_path.write_text(report.model_dump_json(indent=2), encoding="utf-8")

        self.logger.info(
            f"Report written: {report_path}",
            extra={"metadata": report.summary.model_dump()},
        )
        return report_path

    def _add_step(
        self,
        level: StepLevel,
        message: str,
        title: Optional[str] = None,
        screenshot: Optional[str] = None,
        status: Optional[RecordStatus] = None,
    ) -> None:
        with self._lock:
            name = self._current.get(threading.get_ident())
            record = self._records.get(name) if name is not None else None
            if record is None:
                self.logger.warning(f"No test started on this thread, dropping step: {message}")
                return

            record.steps.append(
                ReportStep(
                    level=level, message=message, title=title, screenshot=screenshot
                )
            )
            if status is not None:
                record.status = status
                record.finished_at = datetime.now()

    def _save_screenshot(self, handle: Any) -> Optional[str]:
        if self.capture is None or handle is None:
            return None

        try:
            data = self.capture(handle)
        except Exception as e:
            self.logger.warning(f"Screenshot capture failed: {e}")
            return None

        with self._lock:
            name = self._current.get(threading.get_ident(), "screenshot")
            self._screenshot_seq += 1
            file_name = f"{re.sub(r'[^A-Za-z0-9_.-]+', '_', name)}_{self._screenshot_seq}.png"

        self.screenshots_dir.mkdir(parents=True, exist_ok=True)
        path = self.screenshots_dir / file_name
        path.write_bytes(data)
        return str(path)

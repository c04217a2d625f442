"""
Pydantic models for test run reports.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict


class RecordStatus(Enum):
    """Status of a test's report record."""

    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class StepLevel(Enum):
    """Severity of a logged report step."""

    INFO = "info"
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


class ReportStep(BaseModel):
    """One logged step of a test record."""

    model_config = ConfigDict(extra="forbid")

    level: StepLevel = Field(..., description="Step severity")
    message: str = Field(..., description="Step message")
    title: Optional[str] = Field(None, description="Step title")
    screenshot: Optional[str] = Field(None, description="Screenshot path")
    timestamp: datetime = Field(default_factory=datetime.now)


class ReportRecord(BaseModel):
    """Report record for one test identity across its attempts."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Test identity")
    status: RecordStatus = Field(RecordStatus.RUNNING, description="Final status")
    attempts: int = Field(1, ge=1, description="Number of attempts started")
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: Optional[datetime] = Field(None)
    steps: List[ReportStep] = Field(default_factory=list)


class ReportSummary(BaseModel):
    """Counts of records by status."""

    model_config = ConfigDict(extra="forbid")

    total: int = Field(0, ge=0)
    passed: int = Field(0, ge=0)
    failed: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0)
    running: int = Field(0, ge=0)


class RunReport(BaseModel):
    """Complete report written at suite finish."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., description="Report title")
    started_at: datetime = Field(..., description="Reporter initialization time")
    generated_at: datetime = Field(default_factory=datetime.now)
    summary: ReportSummary
    records: List[ReportRecord] = Field(default_factory=list)

"""Reporting sinks for test lifecycle events."""

from .reporter import Reporter, JsonReporter
from .models import (
    RecordStatus,
    StepLevel,
    ReportStep,
    ReportRecord,
    ReportSummary,
    RunReport,
)

__all__ = [
    "Reporter",
    "JsonReporter",
    "RecordStatus",
    "StepLevel",
    "ReportStep",
    "ReportRecord",
    "ReportSummary",
    "RunReport",
]

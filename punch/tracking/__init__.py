"""
Tracking package
----------------
Domain logic on top of the punch store.

- ledger: start/stop state machine
- reports: log and summary reports plus their text rendering
- filters: report time windows
- importer: Watson frame import
"""
from .filters import ReportFilter
from .importer import Frame, WatsonImporter, decode_frame, read_frames
from .ledger import Idle, LedgerState, Running, StartResult, StopResult, TimeLedger
from .reports import (
    ALL_PERIOD,
    GroupingMode,
    LogDay,
    LogEntry,
    ProjectSummary,
    ReportEngine,
    SummaryPeriod,
    TagSummary,
    render_log,
    render_summary,
)

__all__ = [
    "ReportFilter",
    "Frame",
    "WatsonImporter",
    "decode_frame",
    "read_frames",
    "Idle",
    "LedgerState",
    "Running",
    "StartResult",
    "StopResult",
    "TimeLedger",
    "ALL_PERIOD",
    "GroupingMode",
    "LogDay",
    "LogEntry",
    "ProjectSummary",
    "ReportEngine",
    "SummaryPeriod",
    "TagSummary",
    "render_log",
    "render_summary",
]

"""Status line coordination.

This package provides:
- CliStatus: Thread-safe coordinator owning the status line
- Severity, Notification, StatusConfig: Shared value types
- SerialWorker: Single-thread FIFO executor used for all terminal writes
- Label and line formatting helpers
"""

from cli_status.status.cli_status import CliStatus
from cli_status.status.label import (
    max_work_label_length,
    resolve_status_label,
    truncate_middle,
)
from cli_status.status.status_types import (
    Notification,
    Severity,
    StatusConfig,
    StatusSnapshot,
)
from cli_status.status.worker import SerialWorker
from cli_status.status.writer import format_elapsed, format_status_line

__all__ = [
    "CliStatus",
    "Notification",
    "SerialWorker",
    "Severity",
    "StatusConfig",
    "StatusSnapshot",
    "format_elapsed",
    "format_status_line",
    "max_work_label_length",
    "resolve_status_label",
    "truncate_middle",
]

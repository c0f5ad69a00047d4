"""
Persistence adapters: workflow event stores and report files.
"""

from lintflow.infrastructure.persistence.reports import load_report_data, save_report
from lintflow.infrastructure.persistence.workflow_events import (
    FilesystemWorkflowEventStore,
    InMemoryWorkflowEventStore,
)

__all__ = [
    "FilesystemWorkflowEventStore",
    "InMemoryWorkflowEventStore",
    "load_report_data",
    "save_report",
]

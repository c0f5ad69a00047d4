"""Workflow execution trace models."""

from dataclasses import dataclass
from enum import Enum


class WorkflowEventType(str, Enum):
    """Types of workflow execution events."""

    PASS_START = "PASS_START"
    PHASE_START = "PHASE_START"
    PHASE_PASS = "PHASE_PASS"
    PHASE_FAIL = "PHASE_FAIL"
    PHASE_SKIPPED = "PHASE_SKIPPED"
    RESTART = "RESTART"
    ABORT = "ABORT"
    COMPLETE = "COMPLETE"


@dataclass(frozen=True)
class WorkflowEvent:
    """
    Single state transition of a workflow run.

    Pass-level events (PASS_START, RESTART, ABORT, COMPLETE) carry the
    phase that caused them, or an empty phase_id when there is none.
    """

    event_id: str
    event_type: WorkflowEventType
    phase_id: str
    workflow_id: str
    pass_number: int
    classification: str | None = None  # PhaseClassification value
    diagnostics_count: int | None = None
    summary: str = ""
    created_at: str = ""  # ISO 8601

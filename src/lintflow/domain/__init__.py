"""
Domain layer for the lint pipeline.

Contains phase, diagnostic and report models, ports and exceptions.
No I/O and no dependency on the application or infrastructure layers.
"""

from lintflow.domain.exceptions import (
    ActionFailed,
    CyclicDependency,
    DuplicatePhaseId,
    PhaseDefinitionError,
    RetriesExhausted,
    UnknownDependency,
)
from lintflow.domain.interfaces import PhaseAction, WorkflowEventStoreInterface
from lintflow.domain.models import (
    ActionResult,
    ConditionKind,
    Diagnostic,
    DiagnosticKind,
    EngineStatus,
    ExecutionState,
    FeedbackLoop,
    PassStatus,
    Phase,
    PhaseClassification,
    PhaseCondition,
    PhaseContext,
    PhaseOutcome,
    Severity,
    WorkflowReport,
    WorkflowStatus,
)
from lintflow.domain.workflow_event import WorkflowEvent, WorkflowEventType

__all__ = [
    # Models
    "ActionResult",
    "ConditionKind",
    "Diagnostic",
    "DiagnosticKind",
    "EngineStatus",
    "ExecutionState",
    "FeedbackLoop",
    "PassStatus",
    "Phase",
    "PhaseClassification",
    "PhaseCondition",
    "PhaseContext",
    "PhaseOutcome",
    "Severity",
    "WorkflowReport",
    "WorkflowStatus",
    # Events
    "WorkflowEvent",
    "WorkflowEventType",
    # Interfaces
    "PhaseAction",
    "WorkflowEventStoreInterface",
    # Exceptions
    "ActionFailed",
    "CyclicDependency",
    "DuplicatePhaseId",
    "PhaseDefinitionError",
    "RetriesExhausted",
    "UnknownDependency",
]

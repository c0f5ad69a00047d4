"""
lintflow: multi-phase check-and-fix pipeline for a single source file.

Runs an ordered graph of analysis and fix phases (type checking, linting,
formatting, AI-assisted rewriting, security scanning, validation) over one
file. Blocking phases abort the run when they fail; validation phases can
send the pipeline back to its first phase, at most max_restarts times.

Example:
    from lintflow import Phase, WorkflowEngine
    from lintflow.actions import CommandAction, PythonSyntaxAction

    phases = [
        Phase(id="syntax", action=PythonSyntaxAction(), blocking=True),
        Phase(
            id="lint",
            action=CommandAction(["ruff", "check"], ok_exit_codes=(0, 1)),
            depends_on=("syntax",),
        ),
    ]
    report = WorkflowEngine(phases, max_restarts=2).run("module.py")
    print(report.status, report.diagnostics_count)
"""

# Application layer (orchestration)
from lintflow.application import (
    DependencyResolver,
    OutcomeAggregator,
    PhaseRunner,
    RetryingAction,
    RetryPolicy,
    WorkflowEngine,
    WorkflowEventEmitter,
    build_standard_pipeline,
    resolve_phases,
    standard_phase_layout,
)

# Domain exceptions
from lintflow.domain.exceptions import (
    ActionFailed,
    CyclicDependency,
    DuplicatePhaseId,
    PhaseDefinitionError,
    RetriesExhausted,
    UnknownDependency,
)

# Domain interfaces (for type hints and custom implementations)
from lintflow.domain.interfaces import PhaseAction, WorkflowEventStoreInterface
from lintflow.domain.models import (
    ActionResult,
    ConditionKind,
    Diagnostic,
    DiagnosticKind,
    EngineStatus,
    FeedbackLoop,
    Phase,
    PhaseClassification,
    PhaseCondition,
    PhaseContext,
    PhaseOutcome,
    Severity,
    WorkflowReport,
    WorkflowStatus,
)

__version__ = "0.3.0"

__all__ = [
    # Version
    "__version__",
    # Domain models
    "ActionResult",
    "ConditionKind",
    "Diagnostic",
    "DiagnosticKind",
    "EngineStatus",
    "FeedbackLoop",
    "Phase",
    "PhaseClassification",
    "PhaseCondition",
    "PhaseContext",
    "PhaseOutcome",
    "Severity",
    "WorkflowReport",
    "WorkflowStatus",
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
    # Application
    "DependencyResolver",
    "OutcomeAggregator",
    "PhaseRunner",
    "RetryPolicy",
    "RetryingAction",
    "WorkflowEngine",
    "WorkflowEventEmitter",
    "build_standard_pipeline",
    "resolve_phases",
    "standard_phase_layout",
]

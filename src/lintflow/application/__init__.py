"""
Application layer for the lint pipeline.

Contains dependency resolution, phase execution, the workflow engine and
report aggregation.
"""

from lintflow.application.aggregator import OutcomeAggregator
from lintflow.application.engine import (
    DEFAULT_MAX_RESTARTS,
    DEFAULT_RESTART_REASON,
    WorkflowEngine,
)
from lintflow.application.phase_runner import PhaseRunner
from lintflow.application.resolver import DependencyResolver, resolve_phases
from lintflow.application.retry import RetryingAction, RetryPolicy
from lintflow.application.templates import (
    PhaseTemplate,
    build_standard_pipeline,
    standard_phase_layout,
)
from lintflow.application.workflow_event_emitter import WorkflowEventEmitter

__all__ = [
    "DEFAULT_MAX_RESTARTS",
    "DEFAULT_RESTART_REASON",
    "DependencyResolver",
    "OutcomeAggregator",
    "PhaseRunner",
    "PhaseTemplate",
    "RetryPolicy",
    "RetryingAction",
    "WorkflowEngine",
    "WorkflowEventEmitter",
    "build_standard_pipeline",
    "resolve_phases",
    "standard_phase_layout",
]

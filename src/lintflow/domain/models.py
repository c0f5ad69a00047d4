"""
Domain models for the lint pipeline.

Pure data structures describing phases, diagnostics and run outcomes.
Everything handed to or produced by a phase is immutable (frozen
dataclasses); the only mutable record is ExecutionState, which is owned
by a single WorkflowEngine run.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lintflow.domain.interfaces import PhaseAction


# =============================================================================
# DIAGNOSTICS
# =============================================================================


class Severity(str, Enum):
    """Severity of a single diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"

    @property
    def is_blocking(self) -> bool:
        """Blocking-level severities make a phase count as failed."""
        return self is Severity.ERROR


class DiagnosticKind(str, Enum):
    """What a diagnostic asks of the pipeline."""

    ISSUE = "issue"  # Ordinary finding
    RESTART_REQUIRED = "restart_required"  # Validation asks for a full re-run


@dataclass(frozen=True)
class Diagnostic:
    """Single issue reported by a phase action."""

    severity: Severity
    message: str
    kind: DiagnosticKind = DiagnosticKind.ISSUE
    rule: str = ""
    line: int | None = None
    column: int | None = None
    fix_available: bool = False
    phase_id: str | None = None  # Stamped by PhaseRunner

    @property
    def is_blocking(self) -> bool:
        return self.severity.is_blocking

    @property
    def requires_restart(self) -> bool:
        return self.kind is DiagnosticKind.RESTART_REQUIRED

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "kind": self.kind.value,
            "rule": self.rule,
            "line": self.line,
            "column": self.column,
            "fix_available": self.fix_available,
            "phase_id": self.phase_id,
        }


# =============================================================================
# ACTION CONTRACT
# =============================================================================


@dataclass(frozen=True)
class PhaseContext:
    """
    Input handed to a phase action.

    `diagnostics` holds what earlier phases of the current pass reported,
    so fixer actions can target them.
    """

    file_path: str
    source: str
    parameters: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )
    pass_number: int = 1
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class ActionResult:
    """
    Output of a phase action.

    An action that could not do its job at all (non-zero exit, timeout,
    missing tool) sets `error`. Actions that rewrite the file return the
    new text in `source`.
    """

    diagnostics: tuple[Diagnostic, ...] = ()
    source: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


# =============================================================================
# PHASE DEFINITION
# =============================================================================


class ConditionKind(str, Enum):
    """When a phase runs, relative to another phase's outcome."""

    ALWAYS = "always"
    ON_SUCCESS = "on_success"
    ON_FAILURE = "on_failure"


@dataclass(frozen=True)
class PhaseCondition:
    """
    Gate on the outcome of another phase in the same pass.

    A phase whose condition is not met is skipped for that pass. The
    referenced phase is ordered before the gated one, like a dependency,
    but it may have failed.
    """

    when: ConditionKind = ConditionKind.ALWAYS
    phase_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "when", ConditionKind(self.when))
        if self.when is ConditionKind.ALWAYS:
            if self.phase_id is not None:
                raise ValueError("An 'always' condition takes no phase id")
        elif not self.phase_id:
            raise ValueError(f"Condition '{self.when.value}' needs a phase id")

    def is_met(self, outcome: "PhaseOutcome | None") -> bool:
        """
        Judge the condition.

        Args:
            outcome: This pass's outcome of the referenced phase, None if
                it did not run
        """
        if self.when is ConditionKind.ALWAYS:
            return True
        if outcome is None:
            return False
        if self.when is ConditionKind.ON_SUCCESS:
            return outcome.succeeded
        return not outcome.succeeded

    def describe(self) -> str:
        if self.when is ConditionKind.ALWAYS:
            return self.when.value
        return f"{self.when.value} '{self.phase_id}'"


@dataclass(frozen=True)
class Phase:
    """
    Immutable description of one pipeline step.

    `priority` is display metadata only; execution order comes from the
    dependency resolver.
    """

    id: str
    action: "PhaseAction"
    name: str = ""
    description: str = ""
    priority: int = 0
    depends_on: tuple[str, ...] = ()
    blocking: bool = False
    validation: bool = False
    condition: PhaseCondition = field(default_factory=PhaseCondition)
    parameters: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Phase id must be a non-empty string")
        # Accept a single id or any iterable of ids but store a tuple
        depends_on = self.depends_on
        if isinstance(depends_on, str):
            depends_on = (depends_on,)
        object.__setattr__(self, "depends_on", tuple(depends_on))
        if not self.name:
            object.__setattr__(self, "name", self.id)

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def prerequisites(self) -> tuple[str, ...]:
        """Phases that must be ordered first: dependencies and condition target."""
        target = self.condition.phase_id
        if target is None or target in self.depends_on:
            return self.depends_on
        return (*self.depends_on, target)


# =============================================================================
# PHASE OUTCOME
# =============================================================================


class PhaseClassification(Enum):
    """Classification of a single phase execution."""

    SUCCESS = "success"
    NON_CRITICAL_FAILURE = "non_critical_failure"
    CRITICAL_FAILURE = "critical_failure"


@dataclass(frozen=True)
class PhaseOutcome:
    """Result of running one phase once."""

    phase_id: str
    elapsed: float  # Seconds
    classification: PhaseClassification
    diagnostics: tuple[Diagnostic, ...] = ()
    triggers_restart: bool = False  # Only set for validation phases
    error: str | None = None
    source: str | None = None  # Rewritten source, if the action produced one
    pass_number: int = 1

    @property
    def succeeded(self) -> bool:
        return self.classification is PhaseClassification.SUCCESS

    @property
    def is_critical(self) -> bool:
        return self.classification is PhaseClassification.CRITICAL_FAILURE

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase_id": self.phase_id,
            "elapsed": round(self.elapsed, 6),
            "classification": self.classification.value,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "triggers_restart": self.triggers_restart,
            "error": self.error,
            "pass_number": self.pass_number,
        }


# =============================================================================
# WORKFLOW STATE
# =============================================================================


class PassStatus(Enum):
    """How a single pass over the phase list ended."""

    COMPLETED = "completed"
    ABORTED = "aborted"
    RESTART_REQUESTED = "restart_requested"


class EngineStatus(Enum):
    """Lifecycle of a WorkflowEngine."""

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class WorkflowStatus(Enum):
    """Terminal outcome of a workflow run."""

    SUCCESS = "success"  # Every phase ran, no abort or restart signal
    ABORTED = "aborted"  # A blocking phase failed
    RESTARTS_EXHAUSTED = "restarts_exhausted"  # Validation kept asking for restarts


@dataclass(frozen=True)
class FeedbackLoop:
    """One recorded restart event."""

    triggering_phase: str
    reason: str
    sequence: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "triggering_phase": self.triggering_phase,
            "reason": self.reason,
            "sequence": self.sequence,
        }


@dataclass
class ExecutionState:
    """
    Mutable state of one engine run.

    Per-pass fields (executed_ids, skipped_ids, diagnostics, outcomes) are
    cleared by begin_pass(). restart_count, feedback_loops, elapsed_total
    and the current source survive restarts.
    """

    source: str = ""
    executed_ids: list[str] = field(default_factory=list)
    skipped_ids: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    outcomes: list[PhaseOutcome] = field(default_factory=list)
    restart_count: int = 0
    feedback_loops: list[FeedbackLoop] = field(default_factory=list)
    pass_number: int = 0
    elapsed_total: float = 0.0

    def begin_pass(self) -> None:
        self.pass_number += 1
        self.executed_ids.clear()
        self.skipped_ids.clear()
        self.diagnostics.clear()
        self.outcomes.clear()

    def is_executed(self, phase_id: str) -> bool:
        return phase_id in self.executed_ids

    def outcome_of(self, phase_id: str | None) -> PhaseOutcome | None:
        """This pass's outcome of a phase, None if it has not run."""
        for outcome in self.outcomes:
            if outcome.phase_id == phase_id:
                return outcome
        return None

    def record_skip(self, phase_id: str) -> None:
        self.skipped_ids.append(phase_id)

    def record(self, outcome: PhaseOutcome) -> None:
        if self.is_executed(outcome.phase_id):
            raise ValueError(
                f"Phase '{outcome.phase_id}' already executed in pass {self.pass_number}"
            )
        self.executed_ids.append(outcome.phase_id)
        self.diagnostics.extend(outcome.diagnostics)
        self.outcomes.append(outcome)
        self.elapsed_total += outcome.elapsed
        if outcome.source is not None:
            self.source = outcome.source

    def record_restart(self, phase_id: str, reason: str) -> FeedbackLoop:
        loop = FeedbackLoop(
            triggering_phase=phase_id,
            reason=reason,
            sequence=self.restart_count + 1,
        )
        self.feedback_loops.append(loop)
        self.restart_count += 1
        return loop


# =============================================================================
# WORKFLOW REPORT
# =============================================================================


@dataclass(frozen=True)
class WorkflowReport:
    """Final report of a workflow run."""

    status: WorkflowStatus
    total_phases: int
    executed_phase_ids: tuple[str, ...]
    diagnostics: tuple[Diagnostic, ...]
    elapsed_total: float
    restart_count: int
    feedback_loops: tuple[FeedbackLoop, ...] = ()
    skipped_phase_ids: tuple[str, ...] = ()  # Final pass only
    pass_count: int = 1
    failed_phase: str | None = None  # Blocking phase that aborted the run
    outcomes: tuple[PhaseOutcome, ...] = ()  # Final pass only
    final_source: str | None = None
    file_path: str = ""
    workflow_id: str = ""

    @property
    def completed_successfully(self) -> bool:
        return self.status is WorkflowStatus.SUCCESS

    @property
    def executed_phases(self) -> int:
        return len(self.executed_phase_ids)

    @property
    def succeeded_phases(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def failed_phases(self) -> int:
        return sum(1 for o in self.outcomes if not o.succeeded)

    @property
    def skipped_phases(self) -> int:
        return len(self.skipped_phase_ids)

    @property
    def diagnostics_count(self) -> int:
        return len(self.diagnostics)

    @property
    def feedback_loop_count(self) -> int:
        return len(self.feedback_loops)

    @property
    def oscillated(self) -> bool:
        """Failed after validation kept requesting restarts."""
        return not self.completed_successfully and bool(self.feedback_loops)

    @property
    def success_rate(self) -> float:
        """Share of defined phases executed in the final pass, in percent."""
        if self.total_phases == 0:
            return 0.0
        return self.executed_phases / self.total_phases * 100.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "workflow_id": self.workflow_id,
            "file_path": self.file_path,
            "status": self.status.value,
            "completed_successfully": self.completed_successfully,
            "total_phases": self.total_phases,
            "executed_phases": self.executed_phases,
            "executed_phase_ids": list(self.executed_phase_ids),
            "succeeded_phases": self.succeeded_phases,
            "failed_phases": self.failed_phases,
            "skipped_phases": self.skipped_phases,
            "skipped_phase_ids": list(self.skipped_phase_ids),
            "restart_count": self.restart_count,
            "pass_count": self.pass_count,
            "failed_phase": self.failed_phase,
            "elapsed_total": round(self.elapsed_total, 6),
            "diagnostics_count": self.diagnostics_count,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "feedback_loops": [loop.to_dict() for loop in self.feedback_loops],
            "outcomes": [o.to_dict() for o in self.outcomes],
        }

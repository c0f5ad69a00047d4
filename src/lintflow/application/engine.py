"""
WorkflowEngine: drives the resolved phase list over one file.

Runs passes over the phase list until every phase has run, a blocking
phase fails (abort), or a validation phase asks for a restart. Restarts
re-run the whole list from the first phase and are bounded by
max_restarts. Every failure mode after resolution is reported through
the WorkflowReport; none is raised.

Within a pass, a phase whose dependencies did not run or whose condition
is not met is skipped.
"""

import logging
import uuid
from collections.abc import Iterable
from pathlib import Path

from lintflow.application.aggregator import OutcomeAggregator
from lintflow.application.phase_runner import PhaseRunner
from lintflow.application.resolver import DependencyResolver
from lintflow.application.workflow_event_emitter import WorkflowEventEmitter
from lintflow.domain.exceptions import DuplicatePhaseId
from lintflow.domain.models import (
    EngineStatus,
    ExecutionState,
    PassStatus,
    Phase,
    PhaseContext,
    WorkflowReport,
    WorkflowStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESTARTS = 3
DEFAULT_RESTART_REASON = "Validation failed - critical errors found"


class WorkflowEngine:
    """
    Orchestrates phase execution for a single file.

    Owns the ExecutionState of its current run; state is never shared
    between engine instances.
    """

    def __init__(
        self,
        phases: Iterable[Phase],
        max_restarts: int = DEFAULT_MAX_RESTARTS,
        runner: PhaseRunner | None = None,
        aggregator: OutcomeAggregator | None = None,
        event_emitter: WorkflowEventEmitter | None = None,
        restart_reason: str = DEFAULT_RESTART_REASON,
        resolver: DependencyResolver | None = None,
    ):
        """
        Args:
            phases: Phase set in definition order
            max_restarts: Maximum validation-triggered restarts per run
            runner: Executes single phases (default PhaseRunner)
            aggregator: Builds the final report (default OutcomeAggregator)
            event_emitter: Optional sink for execution events
            restart_reason: Reason recorded with each feedback loop
            resolver: Orders the phase set (default DependencyResolver)

        Raises:
            ValueError: If max_restarts is negative
            PhaseDefinitionError: If the phase set is malformed, or the
                resolver returned a phase twice
        """
        if max_restarts < 0:
            raise ValueError(f"max_restarts must be >= 0, got {max_restarts}")

        self._phases = tuple(phases)
        # Dependencies never change between restarts: resolve once
        self._order = (resolver or DependencyResolver()).resolve(self._phases)
        self._check_unique(self._order)
        self._max_restarts = max_restarts
        self._runner = runner or PhaseRunner()
        self._aggregator = aggregator or OutcomeAggregator()
        self._emitter = event_emitter
        self._restart_reason = restart_reason
        self._state = ExecutionState()
        self._status = EngineStatus.IDLE

    @staticmethod
    def _check_unique(order: tuple[Phase, ...]) -> None:
        """A phase runs at most once per pass, whatever the resolver returned."""
        seen: set[str] = set()
        for phase in order:
            if phase.id in seen:
                raise DuplicatePhaseId(phase.id)
            seen.add(phase.id)

    @property
    def order(self) -> tuple[Phase, ...]:
        """Resolved execution order."""
        return self._order

    @property
    def max_restarts(self) -> int:
        return self._max_restarts

    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def state(self) -> ExecutionState:
        """State of the current (or last) run."""
        return self._state

    def run(self, file_path: str | Path, source: str | None = None) -> WorkflowReport:
        """
        Run the pipeline against one file.

        Args:
            file_path: Path of the file being processed
            source: Current file text (read from file_path when omitted)

        Returns:
            WorkflowReport describing the terminal outcome
        """
        if source is None:
            source = Path(file_path).read_text(encoding="utf-8")

        path = str(file_path)
        workflow_id = self._emitter.workflow_id if self._emitter else str(uuid.uuid4())
        self._state = ExecutionState(source=source)
        self._status = EngineStatus.RUNNING
        logger.info(
            f"Running {len(self._order)} phases on {path} "
            f"(max_restarts={self._max_restarts})"
        )

        failed_phase: str | None = None
        while True:
            pass_status, last_phase = self._run_pass(path)

            if pass_status is PassStatus.RESTART_REQUESTED and last_phase is not None:
                if self._state.restart_count < self._max_restarts:
                    loop = self._state.record_restart(
                        last_phase.id, self._restart_reason
                    )
                    logger.info(
                        f"Restart {loop.sequence}/{self._max_restarts} "
                        f"requested by '{last_phase.id}'"
                    )
                    if self._emitter:
                        self._emitter.restart(loop, self._state.pass_number)
                    continue
                logger.warning(
                    f"Restart budget exhausted after {self._state.restart_count} "
                    f"restarts; '{last_phase.id}' still requests a restart"
                )
                status = WorkflowStatus.RESTARTS_EXHAUSTED
            elif pass_status is PassStatus.ABORTED and last_phase is not None:
                failed_phase = last_phase.id
                status = WorkflowStatus.ABORTED
            else:
                status = WorkflowStatus.SUCCESS
            break

        self._status = (
            EngineStatus.SUCCEEDED
            if status is WorkflowStatus.SUCCESS
            else EngineStatus.FAILED
        )
        if self._emitter:
            self._emitter.complete(status, self._state.pass_number, failed_phase or "")
        logger.info(
            f"Workflow finished: {status.value} after {self._state.pass_number} "
            f"pass(es), {self._state.restart_count} restart(s)"
        )

        return self._aggregator.aggregate(
            self._phases,
            self._state,
            status,
            failed_phase=failed_phase,
            file_path=path,
            workflow_id=workflow_id,
        )

    def _run_pass(self, file_path: str) -> tuple[PassStatus, Phase | None]:
        """
        Run one pass over the resolved order.

        Returns:
            How the pass ended, and the phase that ended it (None when
            every phase ran)
        """
        state = self._state
        state.begin_pass()
        logger.debug(f"Starting pass {state.pass_number}")
        if self._emitter:
            self._emitter.pass_start(state.pass_number)

        for phase in self._order:
            skip_reason = self._skip_reason(phase)
            if skip_reason:
                logger.debug(f"Skipping '{phase.id}': {skip_reason}")
                state.record_skip(phase.id)
                if self._emitter:
                    self._emitter.phase_skipped(
                        phase.id, state.pass_number, skip_reason
                    )
                continue

            context = PhaseContext(
                file_path=file_path,
                source=state.source,
                parameters=phase.parameters,
                pass_number=state.pass_number,
                diagnostics=tuple(state.diagnostics),
            )
            if self._emitter:
                self._emitter.phase_start(phase.id, state.pass_number)

            outcome = self._runner.run(phase, context)
            state.record(outcome)
            if self._emitter:
                self._emitter.phase_finished(outcome)

            if outcome.is_critical:
                logger.warning(
                    f"Blocking phase '{phase.id}' failed; aborting pass "
                    f"{state.pass_number}"
                )
                if self._emitter:
                    self._emitter.abort(
                        phase.id, state.pass_number, outcome.error or ""
                    )
                return PassStatus.ABORTED, phase

            if phase.validation and outcome.triggers_restart:
                return PassStatus.RESTART_REQUESTED, phase

        return PassStatus.COMPLETED, None

    def _skip_reason(self, phase: Phase) -> str | None:
        """Why the phase cannot run in the current pass, None if it can."""
        state = self._state
        # Dependencies must be satisfied within this pass
        missing = [d for d in phase.depends_on if not state.is_executed(d)]
        if missing:
            return f"unsatisfied dependencies: {', '.join(missing)}"
        condition = phase.condition
        if not condition.is_met(state.outcome_of(condition.phase_id)):
            return f"condition not met: {condition.describe()}"
        return None

"""
OutcomeAggregator: folds engine state into the final WorkflowReport.
"""

from collections.abc import Sequence

from lintflow.domain.models import (
    ExecutionState,
    Phase,
    WorkflowReport,
    WorkflowStatus,
)


class OutcomeAggregator:
    """Read-only fold over an ExecutionState. Has no failure modes."""

    def aggregate(
        self,
        phases: Sequence[Phase],
        state: ExecutionState,
        status: WorkflowStatus,
        failed_phase: str | None = None,
        file_path: str = "",
        workflow_id: str = "",
    ) -> WorkflowReport:
        """
        Build the report of a finished run.

        Args:
            phases: Every phase defined for the run
            state: Engine state after the last pass
            status: Terminal status decided by the engine
            failed_phase: Blocking phase that aborted the run, if any
            file_path: File the pipeline ran against
            workflow_id: Run identifier

        Returns:
            WorkflowReport with final-pass diagnostics and run-wide counters
        """
        return WorkflowReport(
            status=status,
            total_phases=len(phases),
            executed_phase_ids=tuple(state.executed_ids),
            skipped_phase_ids=tuple(state.skipped_ids),
            diagnostics=tuple(state.diagnostics),
            elapsed_total=state.elapsed_total,
            restart_count=state.restart_count,
            feedback_loops=tuple(state.feedback_loops),
            pass_count=state.pass_number,
            failed_phase=failed_phase,
            outcomes=tuple(state.outcomes),
            final_source=state.source,
            file_path=file_path,
            workflow_id=workflow_id,
        )

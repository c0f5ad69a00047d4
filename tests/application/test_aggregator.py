"""Tests for OutcomeAggregator."""

from lintflow.application.aggregator import OutcomeAggregator
from lintflow.domain.models import (
    ActionResult,
    Diagnostic,
    ExecutionState,
    Phase,
    PhaseClassification,
    PhaseOutcome,
    Severity,
    WorkflowStatus,
)


def noop(_context):
    return ActionResult()


class TestOutcomeAggregator:
    """Tests for folding state into a report."""

    def test_aggregate_copies_state(self) -> None:
        """Report fields mirror the final state."""
        phases = [Phase(id="a", action=noop), Phase(id="b", action=noop)]
        state = ExecutionState(source="old\n")
        state.begin_pass()
        state.record_restart("b", "again")
        state.begin_pass()
        state.record(
            PhaseOutcome(
                phase_id="a",
                elapsed=0.25,
                classification=PhaseClassification.NON_CRITICAL_FAILURE,
                diagnostics=(
                    Diagnostic(severity=Severity.ERROR, message="x", phase_id="a"),
                ),
                source="new\n",
                pass_number=2,
            )
        )

        report = OutcomeAggregator().aggregate(
            phases,
            state,
            WorkflowStatus.RESTARTS_EXHAUSTED,
            file_path="m.py",
            workflow_id="wf-9",
        )

        assert report.status is WorkflowStatus.RESTARTS_EXHAUSTED
        assert report.total_phases == 2
        assert report.executed_phase_ids == ("a",)
        assert report.diagnostics_count == 1
        assert report.restart_count == 1
        assert report.pass_count == 2
        assert report.final_source == "new\n"
        assert report.file_path == "m.py"
        assert report.workflow_id == "wf-9"
        assert report.success_rate == 50.0

    def test_report_is_detached_from_state(self) -> None:
        """Later state changes do not leak into an existing report."""
        state = ExecutionState()
        state.begin_pass()
        report = OutcomeAggregator().aggregate([], state, WorkflowStatus.SUCCESS)

        state.record_restart("x", "late")

        assert report.feedback_loops == ()
        assert report.restart_count == 0

    def test_failed_phase_passed_through(self) -> None:
        """The aborting phase is named in the report."""
        state = ExecutionState()
        state.begin_pass()

        report = OutcomeAggregator().aggregate(
            [Phase(id="tsc", action=noop)],
            state,
            WorkflowStatus.ABORTED,
            failed_phase="tsc",
        )

        assert report.failed_phase == "tsc"
        assert not report.completed_successfully

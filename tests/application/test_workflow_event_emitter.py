"""Tests for WorkflowEventEmitter."""

from lintflow.application.workflow_event_emitter import WorkflowEventEmitter
from lintflow.domain.models import (
    FeedbackLoop,
    PhaseClassification,
    PhaseOutcome,
    WorkflowStatus,
)
from lintflow.domain.workflow_event import WorkflowEventType
from lintflow.infrastructure.persistence.workflow_events import (
    InMemoryWorkflowEventStore,
)


class TestWorkflowEventEmitter:
    """Tests for WorkflowEventEmitter."""

    def test_pass_start_creates_event(self):
        """pass_start creates PASS_START event without a phase."""
        store = InMemoryWorkflowEventStore()
        emitter = WorkflowEventEmitter(store, "wf-1")

        emitter.pass_start(2)

        events = store.get_events("wf-1")
        assert len(events) == 1
        assert events[0].event_type == WorkflowEventType.PASS_START
        assert events[0].phase_id == ""
        assert events[0].pass_number == 2
        assert events[0].workflow_id == "wf-1"

    def test_phase_finished_success(self):
        """A successful outcome becomes PHASE_PASS."""
        store = InMemoryWorkflowEventStore()
        emitter = WorkflowEventEmitter(store, "wf-1")

        emitter.phase_finished(
            PhaseOutcome(
                phase_id="lint",
                elapsed=0.1,
                classification=PhaseClassification.SUCCESS,
            )
        )

        event = store.get_events("wf-1")[0]
        assert event.event_type == WorkflowEventType.PHASE_PASS
        assert event.classification == "success"
        assert event.diagnostics_count == 0

    def test_phase_finished_failure_truncates_error(self):
        """A failed outcome becomes PHASE_FAIL with a 500-char summary."""
        store = InMemoryWorkflowEventStore()
        emitter = WorkflowEventEmitter(store, "wf-1")

        emitter.phase_finished(
            PhaseOutcome(
                phase_id="tsc",
                elapsed=0.1,
                classification=PhaseClassification.CRITICAL_FAILURE,
                error="x" * 1000,
            )
        )

        event = store.get_events("wf-1")[0]
        assert event.event_type == WorkflowEventType.PHASE_FAIL
        assert event.classification == "critical_failure"
        assert len(event.summary) == 500

    def test_phase_skipped_records_reason(self):
        """phase_skipped stores why the phase did not run."""
        store = InMemoryWorkflowEventStore()
        emitter = WorkflowEventEmitter(store, "wf-1")

        emitter.phase_skipped("b", 1, "unsatisfied dependencies: a, c")

        event = store.get_events("wf-1")[0]
        assert event.event_type == WorkflowEventType.PHASE_SKIPPED
        assert event.summary == "unsatisfied dependencies: a, c"

    def test_restart_creates_event(self):
        """restart records the loop sequence and reason."""
        store = InMemoryWorkflowEventStore()
        emitter = WorkflowEventEmitter(store, "wf-1")

        emitter.restart(FeedbackLoop("final", "errors remain", 2), pass_number=2)

        event = store.get_events("wf-1", WorkflowEventType.RESTART)[0]
        assert event.phase_id == "final"
        assert event.summary == "#2: errors remain"

    def test_complete_records_status(self):
        """complete stores the terminal status."""
        store = InMemoryWorkflowEventStore()
        emitter = WorkflowEventEmitter(store, "wf-1")

        emitter.complete(WorkflowStatus.RESTARTS_EXHAUSTED, pass_number=4)

        event = store.get_events("wf-1")[0]
        assert event.event_type == WorkflowEventType.COMPLETE
        assert event.summary == "restarts_exhausted"

    def test_generates_workflow_id(self):
        """Without an explicit id a uuid is generated."""
        emitter = WorkflowEventEmitter(InMemoryWorkflowEventStore())
        assert len(emitter.workflow_id) == 36

    def test_events_have_unique_ids_and_timestamps(self):
        """Each event gets its own id and an ISO timestamp."""
        store = InMemoryWorkflowEventStore()
        emitter = WorkflowEventEmitter(store, "wf-1")

        emitter.phase_start("a", 1)
        emitter.phase_start("b", 1)

        events = store.get_events("wf-1")
        assert events[0].event_id != events[1].event_id
        assert all("T" in e.created_at for e in events)

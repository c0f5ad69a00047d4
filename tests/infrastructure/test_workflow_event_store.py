"""Tests for workflow event store implementations."""

from lintflow.domain.workflow_event import WorkflowEvent, WorkflowEventType
from lintflow.infrastructure.persistence.workflow_events import (
    FilesystemWorkflowEventStore,
    InMemoryWorkflowEventStore,
)


def make_event(
    workflow_id: str = "wf-1",
    event_type: WorkflowEventType = WorkflowEventType.PHASE_START,
    phase_id: str = "lint",
    created_at: str = "2024-01-01T00:00:00Z",
    **kwargs,
) -> WorkflowEvent:
    """Create a test workflow event."""
    kwargs.setdefault("pass_number", 1)
    return WorkflowEvent(
        event_id=f"evt-{phase_id}-{created_at}",
        event_type=event_type,
        phase_id=phase_id,
        workflow_id=workflow_id,
        created_at=created_at,
        **kwargs,
    )


class TestInMemoryWorkflowEventStore:
    """Tests for InMemoryWorkflowEventStore."""

    def test_store_and_retrieve_event(self):
        """Store and retrieve events."""
        store = InMemoryWorkflowEventStore()
        event = make_event()

        event_id = store.store_event(event)

        assert event_id == event.event_id
        assert store.get_events("wf-1") == [event]

    def test_get_events_filters_by_workflow_id(self):
        """get_events filters by workflow_id."""
        store = InMemoryWorkflowEventStore()
        store.store_event(make_event(workflow_id="wf-1"))
        store.store_event(make_event(workflow_id="wf-2"))

        events = store.get_events("wf-1")

        assert len(events) == 1
        assert events[0].workflow_id == "wf-1"

    def test_get_events_filters_by_type_and_phase(self):
        """get_events filters by event_type and phase_id."""
        store = InMemoryWorkflowEventStore()
        store.store_event(make_event(phase_id="lint"))
        store.store_event(make_event(phase_id="tsc"))
        store.store_event(
            make_event(phase_id="tsc", event_type=WorkflowEventType.PHASE_FAIL)
        )

        assert len(store.get_events("wf-1", phase_id="tsc")) == 2
        failed = store.get_events("wf-1", WorkflowEventType.PHASE_FAIL, "tsc")
        assert len(failed) == 1

    def test_events_sorted_by_created_at(self):
        """Events come back oldest first."""
        store = InMemoryWorkflowEventStore()
        store.store_event(make_event(phase_id="b", created_at="2024-01-01T00:00:02Z"))
        store.store_event(make_event(phase_id="a", created_at="2024-01-01T00:00:01Z"))

        assert [e.phase_id for e in store.get_events("wf-1")] == ["a", "b"]


class TestFilesystemWorkflowEventStore:
    """Tests for FilesystemWorkflowEventStore."""

    def test_store_writes_jsonl(self, tmp_path):
        """Each event is one line in events/<workflow_id>.jsonl."""
        store = FilesystemWorkflowEventStore(tmp_path)
        store.store_event(make_event())
        store.store_event(make_event(phase_id="tsc"))

        path = tmp_path / "events" / "wf-1.jsonl"
        assert path.exists()
        assert len(path.read_text().splitlines()) == 2

    def test_round_trip_preserves_fields(self, tmp_path):
        """Events read back equal the events stored."""
        store = FilesystemWorkflowEventStore(tmp_path)
        event = make_event(
            event_type=WorkflowEventType.PHASE_FAIL,
            pass_number=3,
            classification="critical_failure",
            diagnostics_count=4,
            summary="tsc exited with code 2",
        )
        store.store_event(event)

        assert FilesystemWorkflowEventStore(tmp_path).get_events("wf-1") == [event]

    def test_filters(self, tmp_path):
        """Filtering by type and phase works on disk too."""
        store = FilesystemWorkflowEventStore(tmp_path)
        store.store_event(make_event(phase_id="lint"))
        store.store_event(
            make_event(phase_id="final", event_type=WorkflowEventType.RESTART)
        )

        restarts = store.get_events("wf-1", event_type=WorkflowEventType.RESTART)
        lint = store.get_events("wf-1", phase_id="lint")

        assert [e.phase_id for e in restarts] == ["final"]
        assert [e.event_type for e in lint] == [WorkflowEventType.PHASE_START]

    def test_unknown_workflow_returns_empty(self, tmp_path):
        """A workflow without a log has no events."""
        assert FilesystemWorkflowEventStore(tmp_path).get_events("nope") == []

"""Workflow event store implementations."""

import json
from pathlib import Path
from typing import Any

from lintflow.domain.interfaces import WorkflowEventStoreInterface
from lintflow.domain.workflow_event import WorkflowEvent, WorkflowEventType


class InMemoryWorkflowEventStore(WorkflowEventStoreInterface):
    """In-memory implementation for testing."""

    def __init__(self) -> None:
        self._events: list[WorkflowEvent] = []

    def store_event(self, event: WorkflowEvent) -> str:
        self._events.append(event)
        return event.event_id

    def get_events(
        self,
        workflow_id: str,
        event_type: WorkflowEventType | None = None,
        phase_id: str | None = None,
    ) -> list[WorkflowEvent]:
        return sorted(
            [
                e
                for e in self._events
                if e.workflow_id == workflow_id
                and (event_type is None or e.event_type == event_type)
                and (phase_id is None or e.phase_id == phase_id)
            ],
            key=lambda e: e.created_at,
        )


class FilesystemWorkflowEventStore(WorkflowEventStoreInterface):
    """Filesystem implementation storing one JSONL file per workflow run."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = Path(base_path)
        self.events_dir = self.base_path / "events"
        self.events_dir.mkdir(parents=True, exist_ok=True)

    def _get_workflow_file(self, workflow_id: str) -> Path:
        return self.events_dir / f"{workflow_id}.jsonl"

    def store_event(self, event: WorkflowEvent) -> str:
        path = self._get_workflow_file(event.workflow_id)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(self._event_to_dict(event)) + "\n")
        return event.event_id

    def get_events(
        self,
        workflow_id: str,
        event_type: WorkflowEventType | None = None,
        phase_id: str | None = None,
    ) -> list[WorkflowEvent]:
        path = self._get_workflow_file(workflow_id)
        if not path.exists():
            return []
        events: list[WorkflowEvent] = []
        with open(path, encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                event = self._dict_to_event(json.loads(line))
                if event_type and event.event_type != event_type:
                    continue
                if phase_id is not None and event.phase_id != phase_id:
                    continue
                events.append(event)
        return sorted(events, key=lambda e: e.created_at)

    def _event_to_dict(self, event: WorkflowEvent) -> dict[str, Any]:
        """Serialize event to dict."""
        return {
            "event_id": event.event_id,
            "event_type": event.event_type.value,
            "phase_id": event.phase_id,
            "workflow_id": event.workflow_id,
            "pass_number": event.pass_number,
            "classification": event.classification,
            "diagnostics_count": event.diagnostics_count,
            "summary": event.summary,
            "created_at": event.created_at,
        }

    def _dict_to_event(self, data: dict[str, Any]) -> WorkflowEvent:
        """Deserialize dict to event."""
        return WorkflowEvent(
            event_id=data["event_id"],
            event_type=WorkflowEventType(data["event_type"]),
            phase_id=data["phase_id"],
            workflow_id=data["workflow_id"],
            pass_number=data["pass_number"],
            classification=data.get("classification"),
            diagnostics_count=data.get("diagnostics_count"),
            summary=data.get("summary", ""),
            created_at=data.get("created_at", ""),
        )

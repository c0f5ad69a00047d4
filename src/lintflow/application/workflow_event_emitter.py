"""Workflow event emission service."""

import uuid
from datetime import datetime, timezone
from typing import Any

from lintflow.domain.interfaces import WorkflowEventStoreInterface
from lintflow.domain.models import FeedbackLoop, PhaseOutcome, WorkflowStatus
from lintflow.domain.workflow_event import WorkflowEvent, WorkflowEventType


class WorkflowEventEmitter:
    """Emits workflow events to a store.

    Provides convenience methods for emitting common workflow events
    during execution, handling ID generation and timestamps.
    """

    def __init__(
        self, event_store: WorkflowEventStoreInterface, workflow_id: str | None = None
    ) -> None:
        self._store = event_store
        self._workflow_id = workflow_id or str(uuid.uuid4())

    @property
    def workflow_id(self) -> str:
        return self._workflow_id

    def _emit(self, event: WorkflowEvent) -> str:
        return self._store.store_event(event)

    def _now(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def _event(
        self,
        event_type: WorkflowEventType,
        phase_id: str,
        pass_number: int,
        **fields: Any,
    ) -> WorkflowEvent:
        return WorkflowEvent(
            event_id=str(uuid.uuid4()),
            event_type=event_type,
            phase_id=phase_id,
            workflow_id=self._workflow_id,
            pass_number=pass_number,
            created_at=self._now(),
            **fields,
        )

    def pass_start(self, pass_number: int) -> None:
        """Emit PASS_START event when a new pass begins."""
        self._emit(self._event(WorkflowEventType.PASS_START, "", pass_number))

    def phase_start(self, phase_id: str, pass_number: int) -> None:
        """Emit PHASE_START event before a phase runs."""
        self._emit(self._event(WorkflowEventType.PHASE_START, phase_id, pass_number))

    def phase_finished(self, outcome: PhaseOutcome) -> None:
        """Emit PHASE_PASS or PHASE_FAIL depending on the outcome."""
        event_type = (
            WorkflowEventType.PHASE_PASS
            if outcome.succeeded
            else WorkflowEventType.PHASE_FAIL
        )
        self._emit(
            self._event(
                event_type,
                outcome.phase_id,
                outcome.pass_number,
                classification=outcome.classification.value,
                diagnostics_count=len(outcome.diagnostics),
                summary=(outcome.error or "")[:500],
            )
        )

    def phase_skipped(self, phase_id: str, pass_number: int, reason: str) -> None:
        """Emit PHASE_SKIPPED event when dependencies or the condition are not met."""
        self._emit(
            self._event(
                WorkflowEventType.PHASE_SKIPPED,
                phase_id,
                pass_number,
                summary=reason[:500],
            )
        )

    def restart(self, loop: FeedbackLoop, pass_number: int) -> None:
        """Emit RESTART event when a validation phase triggers a new pass."""
        self._emit(
            self._event(
                WorkflowEventType.RESTART,
                loop.triggering_phase,
                pass_number,
                summary=f"#{loop.sequence}: {loop.reason}",
            )
        )

    def abort(self, phase_id: str, pass_number: int, summary: str = "") -> None:
        """Emit ABORT event when a blocking phase fails."""
        self._emit(
            self._event(
                WorkflowEventType.ABORT, phase_id, pass_number, summary=summary[:500]
            )
        )

    def complete(
        self, status: WorkflowStatus, pass_number: int, phase_id: str = ""
    ) -> None:
        """Emit COMPLETE event with the terminal status."""
        self._emit(
            self._event(
                WorkflowEventType.COMPLETE,
                phase_id,
                pass_number,
                summary=status.value,
            )
        )

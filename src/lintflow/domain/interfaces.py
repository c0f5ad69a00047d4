"""
Domain interfaces (ports) for the lint pipeline.

A phase action is any callable taking a PhaseContext and returning an
ActionResult; there is no action class hierarchy. Persistence of
workflow events goes through an abstract store.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lintflow.domain.models import ActionResult, PhaseContext
    from lintflow.domain.workflow_event import WorkflowEvent, WorkflowEventType


PhaseAction = Callable[["PhaseContext"], "ActionResult"]
"""Capability invoked by a phase to do its real work."""


class WorkflowEventStoreInterface(ABC):
    """Port for persisting workflow execution events."""

    @abstractmethod
    def store_event(self, event: "WorkflowEvent") -> str:
        """
        Store a workflow event.

        Args:
            event: The event to store

        Returns:
            The event_id
        """
        pass

    @abstractmethod
    def get_events(
        self,
        workflow_id: str,
        event_type: "WorkflowEventType | None" = None,
        phase_id: str | None = None,
    ) -> list["WorkflowEvent"]:
        """
        Retrieve events of one workflow run, oldest first.

        Args:
            workflow_id: Run identifier
            event_type: Only return events of this type
            phase_id: Only return events about this phase

        Returns:
            Matching events ordered by creation time
        """
        pass

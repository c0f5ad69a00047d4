"""
Domain exceptions for the lint pipeline.

Definition errors describe a malformed phase set and are raised before
any phase runs. Execution failures are never raised by the engine; they
are reported through PhaseOutcome and WorkflowReport instead.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lintflow.domain.models import ActionResult


class PhaseDefinitionError(Exception):
    """Base class for errors in a phase set definition."""


class DuplicatePhaseId(PhaseDefinitionError):
    """Raised when two phases share the same id."""

    def __init__(self, phase_id: str):
        super().__init__(f"Duplicate phase id: '{phase_id}'")
        self.phase_id = phase_id


class UnknownDependency(PhaseDefinitionError):
    """Raised when a phase depends on an id missing from the phase set."""

    def __init__(self, phase_id: str, missing_id: str):
        super().__init__(
            f"Phase '{phase_id}' depends on unknown phase '{missing_id}'"
        )
        self.phase_id = phase_id
        self.missing_id = missing_id


class CyclicDependency(PhaseDefinitionError):
    """
    Raised when the dependency graph contains at least one cycle.

    `unresolved` lists the phases that could not be ordered. It is
    informational only: it contains every phase on or behind a cycle,
    not the cycle itself.
    """

    def __init__(self, unresolved: tuple[str, ...] = ()):
        detail = f": {', '.join(unresolved)}" if unresolved else ""
        super().__init__(f"Cyclic dependency between phases{detail}")
        self.unresolved = unresolved


class ActionFailed(Exception):
    """
    Raised by a phase action that cannot complete its work.

    The phase runner converts it, like any other exception from an
    action, into a failed outcome.
    """


class RetriesExhausted(Exception):
    """Raised when a retried action never produced a successful result."""

    def __init__(self, message: str, attempts: list["ActionResult"]):
        """
        Args:
            message: Human-readable error message
            attempts: Failed results, oldest first
        """
        super().__init__(message)
        self.attempts = attempts

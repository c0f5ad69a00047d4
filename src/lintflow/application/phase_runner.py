"""
PhaseRunner: executes a single phase and classifies the result.

Stateless. All accumulation across phases and passes is the
WorkflowEngine's job.
"""

import dataclasses
import logging
import time
from collections.abc import Callable

from lintflow.domain.exceptions import ActionFailed
from lintflow.domain.models import (
    ActionResult,
    Diagnostic,
    Phase,
    PhaseClassification,
    PhaseContext,
    PhaseOutcome,
    Severity,
)

logger = logging.getLogger(__name__)


class PhaseRunner:
    """
    Runs one phase's action against the current file state.

    Classification:
    - action error or blocking-level diagnostic on a blocking phase
      -> CRITICAL_FAILURE
    - the same on a non-blocking phase -> NON_CRITICAL_FAILURE
    - otherwise -> SUCCESS

    Validation phases additionally report whether a diagnostic of kind
    RESTART_REQUIRED was produced.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        """
        Args:
            clock: Monotonic clock used to time actions (seconds)
        """
        self._clock = clock

    def run(self, phase: Phase, context: PhaseContext) -> PhaseOutcome:
        """
        Execute the phase's action and classify the outcome.

        Args:
            phase: The resolved phase to run
            context: Current file state and phase parameters

        Returns:
            PhaseOutcome for this execution. Never raises for action failures.
        """
        start = self._clock()
        result = self._invoke(phase, context)
        elapsed = self._clock() - start

        diagnostics = tuple(
            dataclasses.replace(d, phase_id=phase.id) for d in result.diagnostics
        )
        classification = self.classify(phase, result)
        triggers_restart = phase.validation and any(
            d.requires_restart for d in diagnostics
        )

        logger.debug(
            f"Phase '{phase.id}' finished in {elapsed:.3f}s: "
            f"{classification.value} ({len(diagnostics)} diagnostics)"
        )

        return PhaseOutcome(
            phase_id=phase.id,
            elapsed=elapsed,
            classification=classification,
            diagnostics=diagnostics,
            triggers_restart=triggers_restart,
            error=result.error,
            source=result.source,
            pass_number=context.pass_number,
        )

    @staticmethod
    def classify(phase: Phase, result: ActionResult) -> PhaseClassification:
        """Classify an action result according to the phase's blocking flag."""
        failed = result.failed or any(d.is_blocking for d in result.diagnostics)
        if not failed:
            return PhaseClassification.SUCCESS
        if phase.blocking:
            return PhaseClassification.CRITICAL_FAILURE
        return PhaseClassification.NON_CRITICAL_FAILURE

    def _invoke(self, phase: Phase, context: PhaseContext) -> ActionResult:
        """Call the action, converting any exception into a failed result."""
        try:
            result = phase.action(context)
        except Exception as e:
            message = str(e) if isinstance(e, ActionFailed) else f"{type(e).__name__}: {e}"
            logger.warning(f"Phase '{phase.id}' action failed: {message}")
            return ActionResult(
                diagnostics=(
                    Diagnostic(
                        severity=Severity.ERROR,
                        message=message,
                        rule="action-error",
                    ),
                ),
                error=message,
            )

        if not isinstance(result, ActionResult):
            message = (
                f"Action returned {type(result).__name__}, expected ActionResult"
            )
            logger.warning(f"Phase '{phase.id}': {message}")
            return ActionResult(error=message)

        return result

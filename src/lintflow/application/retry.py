"""
RetryingAction: bounded retry with exponential backoff for a phase action.

The engine never retries a phase. Actions that talk to flaky tools or
remote services wrap themselves in RetryingAction instead.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from lintflow.domain.exceptions import ActionFailed, RetriesExhausted
from lintflow.domain.interfaces import PhaseAction
from lintflow.domain.models import ActionResult, Diagnostic, PhaseContext, Severity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Retry configuration for a single action."""

    max_attempts: int = 3
    delay: float = 0.1  # Seconds before the first retry
    backoff_multiplier: float = 2.0
    max_delay: float = 10.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.delay < 0 or self.max_delay < 0:
            raise ValueError("delays must be non-negative")

    def delay_for(self, attempt: int) -> float:
        """Wait before retrying after the given (1-based) failed attempt."""
        return min(self.delay * self.backoff_multiplier ** (attempt - 1), self.max_delay)


class RetryingAction:
    """
    Re-invokes an action while it raises or returns a failed result.

    Diagnostics without an outright error do not trigger a retry: a
    linter that reports problems has done its job.
    """

    def __init__(
        self,
        action: PhaseAction,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
        raise_on_exhaustion: bool = False,
    ):
        """
        Args:
            action: The action to wrap
            policy: Retry limits and backoff (default RetryPolicy())
            sleep: Sleep function, injectable for tests
            raise_on_exhaustion: Raise RetriesExhausted instead of
                returning the last failed result
        """
        self._action = action
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
        self._raise_on_exhaustion = raise_on_exhaustion

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def __call__(self, context: PhaseContext) -> ActionResult:
        attempts: list[ActionResult] = []

        for attempt in range(1, self._policy.max_attempts + 1):
            result = self._attempt(context)
            if not result.failed:
                if attempts:
                    logger.info(f"Action succeeded on attempt {attempt}")
                return result

            attempts.append(result)
            if attempt < self._policy.max_attempts:
                wait = self._policy.delay_for(attempt)
                logger.debug(
                    f"Attempt {attempt}/{self._policy.max_attempts} failed "
                    f"({result.error}); retrying in {wait:.2f}s"
                )
                self._sleep(wait)

        message = f"Failed after {self._policy.max_attempts} attempts"
        logger.warning(f"{message}: {attempts[-1].error}")
        if self._raise_on_exhaustion:
            raise RetriesExhausted(message, attempts)
        return attempts[-1]

    def _attempt(self, context: PhaseContext) -> ActionResult:
        try:
            return self._action(context)
        except Exception as e:
            message = str(e) if isinstance(e, ActionFailed) else f"{type(e).__name__}: {e}"
            return ActionResult(
                diagnostics=(
                    Diagnostic(
                        severity=Severity.ERROR, message=message, rule="action-error"
                    ),
                ),
                error=message,
            )

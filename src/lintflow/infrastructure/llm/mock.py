"""
Scripted action for testing without external tools or an LLM.

Returns predefined results in sequence.
"""

from collections.abc import Sequence

from lintflow.domain.models import ActionResult, PhaseContext


class ScriptedAction:
    """Returns predefined ActionResults for testing."""

    def __init__(self, results: Sequence[ActionResult], repeat_last: bool = False):
        """
        Args:
            results: Results to return in sequence
            repeat_last: Keep returning the last result once the sequence
                is used up instead of raising
        """
        self._results = list(results)
        self._repeat_last = repeat_last
        self._call_count = 0
        self._contexts: list[PhaseContext] = []

    def __call__(self, context: PhaseContext) -> ActionResult:
        """Return the next predefined result."""
        self._contexts.append(context)
        if self._call_count >= len(self._results):
            if not (self._repeat_last and self._results):
                raise RuntimeError("ScriptedAction exhausted results")
            self._call_count += 1
            return self._results[-1]

        result = self._results[self._call_count]
        self._call_count += 1
        return result

    @property
    def call_count(self) -> int:
        """Number of times the action has been called."""
        return self._call_count

    @property
    def contexts(self) -> list[PhaseContext]:
        """Contexts received, in call order."""
        return list(self._contexts)

    def reset(self) -> None:
        """Reset the call counter to reuse results."""
        self._call_count = 0
        self._contexts.clear()

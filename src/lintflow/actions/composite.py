"""
Composite action: several actions run as one phase.

CompositeAction implements the Decorator pattern for action composition.
"""

from dataclasses import replace

from lintflow.domain.interfaces import PhaseAction
from lintflow.domain.models import ActionResult, Diagnostic, PhaseContext


class CompositeAction:
    """
    Runs actions in order as a single phase.

    Source rewritten by one action is handed to the next. Diagnostics are
    merged. Short-circuits on the first action that fails outright.
    """

    def __init__(self, *actions: PhaseAction):
        """
        Args:
            *actions: Actions to compose (run in order)
        """
        if not actions:
            raise ValueError("CompositeAction needs at least one action")
        self.actions = actions

    def __call__(self, context: PhaseContext) -> ActionResult:
        diagnostics: list[Diagnostic] = []
        rewritten: str | None = None

        for action in self.actions:
            current = context if rewritten is None else replace(context, source=rewritten)
            result = action(current)
            diagnostics.extend(result.diagnostics)
            if result.source is not None:
                rewritten = result.source
            if result.failed:
                return ActionResult(
                    diagnostics=tuple(diagnostics),
                    source=rewritten,
                    error=result.error,
                )

        return ActionResult(diagnostics=tuple(diagnostics), source=rewritten)

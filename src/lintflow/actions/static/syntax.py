"""
Python syntax check action.

Pure action with no I/O dependencies - parses the current source with ast.
"""

import ast

from lintflow.domain.models import (
    ActionResult,
    Diagnostic,
    DiagnosticKind,
    PhaseContext,
    Severity,
)


class PythonSyntaxAction:
    """
    Validates Python syntax using AST parsing.

    A syntax error becomes a single ERROR diagnostic carrying the parser's
    line and column. With restart_on_failure the diagnostic is marked
    RESTART_REQUIRED, which lets a validation phase send the pipeline
    back to its first phase.
    """

    def __init__(self, restart_on_failure: bool = False):
        self.restart_on_failure = restart_on_failure

    def __call__(self, context: PhaseContext) -> ActionResult:
        try:
            ast.parse(context.source, filename=context.file_path)
        except SyntaxError as e:
            kind = (
                DiagnosticKind.RESTART_REQUIRED
                if self.restart_on_failure
                else DiagnosticKind.ISSUE
            )
            return ActionResult(
                diagnostics=(
                    Diagnostic(
                        severity=Severity.ERROR,
                        message=f"Syntax error: {e.msg}",
                        kind=kind,
                        rule="syntax",
                        line=e.lineno,
                        column=e.offset,
                    ),
                )
            )
        return ActionResult()

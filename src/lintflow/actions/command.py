"""
External command action.

Runs a linter, formatter or type checker against a temporary copy of the
current source, so the pipeline never touches the real file until the
caller asks it to.
"""

import logging
import re
import subprocess
import tempfile
from collections.abc import Iterable, Sequence
from pathlib import Path

from lintflow.domain.models import (
    ActionResult,
    Diagnostic,
    DiagnosticKind,
    PhaseContext,
    Severity,
)

logger = logging.getLogger(__name__)

FILE_PLACEHOLDER = "{file}"

# path:line[:col]: [level:] message
_LOCATION_RE = re.compile(
    r"^(?P<path>[^:\n]+):(?P<line>\d+):(?:(?P<column>\d+):)?\s*"
    r"(?:(?P<level>error|warning|note):\s*)?(?P<message>.+)$"
)
# Trailing error code, e.g. mypy's "[arg-type]"
_CODE_RE = re.compile(r"\s+\[(?P<code>[a-z][a-z0-9-]*)\]$")

# Severity named by the tool itself
_LEVELS = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "note": Severity.INFO,
}
# Leading rule code, e.g. "F401 ..." or "B101: ..."
_RULE_RE = re.compile(r"^(?P<rule>[A-Z]+\d+)\b:?\s*")


class CommandAction:
    """
    Runs an external tool and turns its output into diagnostics.

    The command is a list of arguments. A "{file}" argument is replaced by
    the path of the temporary copy; without one, the path is appended.

    Example:
        CommandAction(["ruff", "check", "--fix"], rewrites=True,
                      ok_exit_codes=(0, 1))
    """

    def __init__(
        self,
        command: Sequence[str],
        rewrites: bool = False,
        ok_exit_codes: Iterable[int] = (0,),
        diagnostic_severity: Severity | str = Severity.WARNING,
        restart_on_failure: bool = False,
        timeout: float = 60.0,
    ):
        """
        Args:
            command: Executable and arguments
            rewrites: Read the temporary file back as the new source
            ok_exit_codes: Exit codes that do not count as an outright error
            diagnostic_severity: Severity given to parsed output lines
            restart_on_failure: Mark parsed diagnostics RESTART_REQUIRED
            timeout: Seconds before the tool is killed
        """
        if not command:
            raise ValueError("command must not be empty")
        self.command = tuple(command)
        self.rewrites = rewrites
        self.ok_exit_codes = frozenset(ok_exit_codes)
        self.diagnostic_severity = Severity(diagnostic_severity)
        self.restart_on_failure = restart_on_failure
        self.timeout = timeout

    def __call__(self, context: PhaseContext) -> ActionResult:
        name = Path(context.file_path).name or "source.py"

        with tempfile.TemporaryDirectory(prefix="lintflow-") as tmp_dir:
            target = Path(tmp_dir) / name
            target.write_text(context.source, encoding="utf-8")
            args = self._build_args(str(target))
            logger.debug(f"Running: {' '.join(args)}")

            try:
                completed = subprocess.run(
                    args,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                    cwd=tmp_dir,
                )
            except FileNotFoundError:
                return self._error(f"Command not found: {self.command[0]}")
            except subprocess.TimeoutExpired:
                return self._error(
                    f"{self.command[0]} timed out after {self.timeout}s"
                )

            new_source = None
            if self.rewrites:
                new_source = target.read_text(encoding="utf-8")

        diagnostics = tuple(self.parse_output(completed.stdout + completed.stderr))
        error = None
        if completed.returncode not in self.ok_exit_codes:
            detail = completed.stderr.strip().splitlines()
            error = f"{self.command[0]} exited with code {completed.returncode}"
            if detail and not diagnostics:
                error = f"{error}: {detail[-1]}"

        return ActionResult(diagnostics=diagnostics, source=new_source, error=error)

    def parse_output(self, output: str) -> list[Diagnostic]:
        """
        Parse `path:line[:col]: [level:] message` lines; other lines are ignored.

        A level written by the tool (error, warning, note) wins over
        diagnostic_severity. Notes never request a restart.
        """
        diagnostics: list[Diagnostic] = []
        for raw in output.splitlines():
            match = _LOCATION_RE.match(raw.strip())
            if not match:
                continue
            message = match.group("message").strip()
            rule = ""
            rule_match = _RULE_RE.match(message)
            if rule_match:
                rule = rule_match.group("rule")
                message = message[rule_match.end() :]
            else:
                code_match = _CODE_RE.search(message)
                if code_match:
                    rule = code_match.group("code")
                    message = message[: code_match.start()]

            level = match.group("level")
            severity = _LEVELS[level] if level else self.diagnostic_severity
            kind = (
                DiagnosticKind.RESTART_REQUIRED
                if self.restart_on_failure and severity is not Severity.INFO
                else DiagnosticKind.ISSUE
            )
            column = match.group("column")
            diagnostics.append(
                Diagnostic(
                    severity=severity,
                    message=message,
                    kind=kind,
                    rule=rule or self.command[0],
                    line=int(match.group("line")),
                    column=int(column) if column else None,
                    fix_available="[*]" in message,
                )
            )
        return diagnostics

    def _build_args(self, path: str) -> list[str]:
        if FILE_PLACEHOLDER in self.command:
            return [path if arg == FILE_PLACEHOLDER else arg for arg in self.command]
        return [*self.command, path]

    def _error(self, message: str) -> ActionResult:
        logger.warning(message)
        return ActionResult(
            diagnostics=(
                Diagnostic(
                    severity=Severity.ERROR,
                    message=message,
                    rule=self.command[0],
                ),
            ),
            error=message,
        )

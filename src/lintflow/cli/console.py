"""Rich console utilities for the lintflow CLI."""

from collections.abc import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lintflow.domain.models import Phase, Severity, WorkflowReport, WorkflowStatus

# Shared console instances
console = Console()
error_console = Console(stderr=True)

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
    Severity.HINT: "dim",
}

STATUS_STYLES = {
    WorkflowStatus.SUCCESS: "green",
    WorkflowStatus.ABORTED: "red",
    WorkflowStatus.RESTARTS_EXHAUSTED: "yellow",
}


def print_header(title: str, subtitle: str | None = None) -> None:
    """Print a styled header panel."""
    content = Text(title, style="bold blue")
    if subtitle:
        content.append(f"\n{subtitle}", style="dim")
    console.print(Panel(content, expand=False))


def print_error(message: str, hint: str | None = None) -> None:
    """Print formatted error message to stderr."""
    content = Text(f"ERROR: {message}", style="bold red")
    if hint:
        content.append(f"\n\nHint: {hint}", style="yellow")
    error_console.print(Panel(content, title="Error", border_style="red"))


def print_phase_order(phases: Sequence[Phase]) -> None:
    """Print the resolved execution order."""
    table = Table(title="Execution order", show_header=True)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Phase", style="magenta")
    table.add_column("Priority", justify="right")
    table.add_column("Depends on")
    table.add_column("Flags", style="yellow")

    for position, phase in enumerate(phases, 1):
        flags = [
            flag
            for flag, enabled in (("blocking", phase.blocking), ("validation", phase.validation))
            if enabled
        ]
        if phase.condition.phase_id is not None:
            flags.append(phase.condition.describe())
        table.add_row(
            str(position),
            phase.id if phase.display_name == phase.id else f"{phase.id} ({phase.display_name})",
            str(phase.priority),
            ", ".join(phase.depends_on) or "-",
            ", ".join(flags),
        )

    console.print(table)


def print_report(report: WorkflowReport) -> None:
    """Print a run summary with diagnostics and feedback loops."""
    style = STATUS_STYLES[report.status]
    summary = Table(show_header=False, box=None)
    summary.add_column("Key", style="cyan")
    summary.add_column("Value")
    summary.add_row("File", report.file_path)
    summary.add_row("Status", Text(report.status.value, style=f"bold {style}"))
    summary.add_row(
        "Phases",
        f"{report.executed_phases}/{report.total_phases} ({report.success_rate:.0f}%)",
    )
    summary.add_row(
        "Outcomes",
        f"{report.succeeded_phases} succeeded, {report.failed_phases} failed, "
        f"{report.skipped_phases} skipped",
    )
    summary.add_row("Passes", str(report.pass_count))
    summary.add_row("Restarts", str(report.restart_count))
    summary.add_row("Elapsed", f"{report.elapsed_total:.2f}s")
    if report.failed_phase:
        summary.add_row("Failed phase", Text(report.failed_phase, style="red"))
    console.print(Panel(summary, title="lintflow report", border_style=style))

    if report.diagnostics:
        print_diagnostics(report)

    if report.feedback_loops:
        loops = Table(title="Feedback loops", show_header=True, box=None)
        loops.add_column("#", style="cyan", justify="right")
        loops.add_column("Triggered by", style="magenta")
        loops.add_column("Reason")
        for loop in report.feedback_loops:
            loops.add_row(str(loop.sequence), loop.triggering_phase, loop.reason)
        console.print(loops)


def print_diagnostics(report: WorkflowReport) -> None:
    """Print diagnostics of the final pass."""
    table = Table(title="Diagnostics", show_header=True, box=None)
    table.add_column("Phase", style="magenta")
    table.add_column("Severity")
    table.add_column("Location", style="cyan")
    table.add_column("Rule", style="dim")
    table.add_column("Message")

    for diagnostic in report.diagnostics:
        location = ""
        if diagnostic.line is not None:
            location = str(diagnostic.line)
            if diagnostic.column is not None:
                location += f":{diagnostic.column}"
        table.add_row(
            diagnostic.phase_id or "",
            Text(diagnostic.severity.value, style=SEVERITY_STYLES[diagnostic.severity]),
            location,
            diagnostic.rule,
            diagnostic.message,
        )

    console.print(table)

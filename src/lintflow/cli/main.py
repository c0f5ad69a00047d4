"""lintflow command line: run a phase pipeline against one source file."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import click

from lintflow import __version__
from lintflow.application import WorkflowEventEmitter
from lintflow.domain.exceptions import PhaseDefinitionError
from lintflow.infrastructure.persistence import FilesystemWorkflowEventStore, save_report
from lintflow.infrastructure.registry import ActionRegistry
from lintflow.pipelines import DEFAULT_PIPELINE, load_bundled_pipeline

from .config import build_engine, load_pipeline_config, validate_pipeline_data
from .console import console, print_error, print_header, print_phase_order, print_report
from .exceptions import ConfigurationError
from .logging_setup import setup_logging

logger = logging.getLogger("lintflow.cli")

EXIT_SUCCESS = 0
EXIT_FAILED_RUN = 1
EXIT_CONFIG_ERROR = 2


def _load_config(pipeline: Path | None) -> tuple[dict[str, Any], str]:
    """Load a pipeline file, or the bundled default when none is given."""
    if pipeline is None:
        data = load_bundled_pipeline(DEFAULT_PIPELINE)
        label = f"<bundled:{DEFAULT_PIPELINE}>"
        return validate_pipeline_data(data, label), label
    return load_pipeline_config(pipeline), str(pipeline)


def _config_error(message: str, hint: str | None = None) -> SystemExit:
    print_error(message, hint)
    return SystemExit(EXIT_CONFIG_ERROR)


@click.group()
@click.version_option(__version__, prog_name="lintflow")
def cli() -> None:
    """lintflow: multi-phase check-and-fix pipeline for a single source file."""
    pass


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--pipeline",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to pipeline.json (default: bundled Python pipeline)",
)
@click.option(
    "--max-restarts",
    default=None,
    type=click.IntRange(min=0),
    help="Override the pipeline's restart budget",
)
@click.option(
    "--output",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to save the report JSON",
)
@click.option(
    "--events-dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the workflow event log (JSONL)",
)
@click.option(
    "--write",
    is_flag=True,
    help="Write the fixed source back to FILE after a successful run",
)
@click.option(
    "--log-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to log file",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose (DEBUG) logging to console")
def run(
    file: Path,
    pipeline: Path | None,
    max_restarts: int | None,
    output: Path | None,
    events_dir: Path | None,
    write: bool,
    log_file: str | None,
    verbose: bool,
) -> None:
    """Run the pipeline against FILE."""
    setup_logging("lintflow", log_file=log_file, verbose=verbose)

    try:
        config, label = _load_config(pipeline)
    except ConfigurationError as e:
        raise _config_error(str(e)) from None

    try:
        source = file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise _config_error(f"Cannot read {file} as UTF-8: {e}") from None
    except OSError as e:
        raise _config_error(f"Cannot read {file}: {e}") from None

    emitter = None
    if events_dir is not None:
        emitter = WorkflowEventEmitter(FilesystemWorkflowEventStore(events_dir))

    try:
        engine = build_engine(config, max_restarts=max_restarts, event_emitter=emitter)
    except ConfigurationError as e:
        raise _config_error(str(e)) from None
    except PhaseDefinitionError as e:
        raise _config_error(str(e), hint=f"Check the phase graph in {label}") from None

    print_header(
        f"lintflow: {config.get('name', label)}",
        f"{file} | {len(engine.order)} phases | max restarts {engine.max_restarts}",
    )

    started = datetime.now(timezone.utc)
    report = engine.run(file, source=source)
    print_report(report)

    if output is not None:
        save_report(
            output,
            report,
            extra={
                "pipeline": config.get("name", label),
                "started_at": started.isoformat(),
            },
        )
        console.print(f"[dim]Report saved to {output}[/dim]")

    if events_dir is not None and emitter is not None:
        console.print(
            f"[dim]Events saved to {events_dir / 'events' / emitter.workflow_id}.jsonl[/dim]"
        )

    if write and report.completed_successfully and report.final_source != source:
        file.write_text(report.final_source or "", encoding="utf-8")
        console.print(f"[green]Wrote fixed source to {file}[/green]")

    raise SystemExit(EXIT_SUCCESS if report.completed_successfully else EXIT_FAILED_RUN)


@cli.command()
@click.argument("pipeline", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(pipeline: Path) -> None:
    """Check PIPELINE: schema, actions and phase graph."""
    try:
        config = load_pipeline_config(pipeline)
        engine = build_engine(config)
    except (ConfigurationError, PhaseDefinitionError) as e:
        raise _config_error(str(e)) from None

    console.print(
        f"[green]OK[/green] {len(engine.order)} phases, "
        f"max restarts {engine.max_restarts}: {pipeline}"
    )


@cli.command()
@click.argument(
    "pipeline",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def show(pipeline: Path | None) -> None:
    """Show the resolved execution order of PIPELINE (default: bundled)."""
    try:
        config, label = _load_config(pipeline)
        engine = build_engine(config)
    except (ConfigurationError, PhaseDefinitionError) as e:
        raise _config_error(str(e)) from None

    print_header(f"Pipeline: {config.get('name', label)}", config.get("description"))
    print_phase_order(engine.order)


@cli.command()
def actions() -> None:
    """List the registered action names."""
    for name in ActionRegistry.available():
        console.print(name)


if __name__ == "__main__":
    cli()

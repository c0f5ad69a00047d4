"""Workflow report persistence."""

import json
from pathlib import Path
from typing import Any

from lintflow.domain.models import WorkflowReport


def save_report(
    output_path: str | Path,
    report: WorkflowReport,
    extra: dict[str, Any] | None = None,
) -> Path:
    """
    Save a workflow report to a JSON file.

    Args:
        output_path: Path to save the report
        report: Report of a finished run
        extra: Additional top-level fields (pipeline name, timestamps...)

    Returns:
        The path written
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = report.to_dict()
    if extra:
        data.update(extra)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


def load_report_data(path: str | Path) -> dict[str, Any]:
    """Read a saved report back as a plain dict."""
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = json.load(f)
    return data

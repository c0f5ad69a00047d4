"""Fixtures for CLI tests."""

import json
import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

APPEND_MARKER = (
    "import sys, pathlib; p = pathlib.Path(sys.argv[1]); "
    "text = p.read_text(); "
    "p.write_text(text if text.endswith('# checked\\n') else text + '# checked\\n')"
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_cli_logging() -> Iterator[None]:
    """Drop handlers bound to CliRunner streams after each test."""
    yield
    logger = logging.getLogger("lintflow")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def write_pipeline(tmp_path: Path) -> Callable[..., Path]:
    """Write a pipeline definition and return its path."""

    def _write(data: dict[str, Any], name: str = "pipeline.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def syntax_pipeline() -> dict[str, Any]:
    """Syntax gate followed by a rewriting command and a validation phase."""
    return {
        "name": "test-pipeline",
        "max_restarts": 2,
        "phases": [
            {"id": "syntax", "action": "syntax", "blocking": True, "priority": 1},
            {
                "id": "mark",
                "action": "command",
                "depends_on": ["syntax"],
                "priority": 2,
                "options": {
                    "command": [sys.executable, "-c", APPEND_MARKER],
                    "rewrites": True,
                },
            },
            {
                "id": "final",
                "action": "syntax",
                "depends_on": ["mark"],
                "validation": True,
                "priority": 3,
                "options": {"restart_on_failure": True},
            },
        ],
    }

"""Shared pytest fixtures for lintflow tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from lintflow.domain.models import (
    ActionResult,
    Diagnostic,
    DiagnosticKind,
    PhaseContext,
    Severity,
)
from lintflow.infrastructure.registry import ActionRegistry

CLEAN_SOURCE = "def add(a, b):\n    return a + b\n"
BROKEN_SOURCE = "def add(a, b\n    return a + b\n"  # Missing closing paren


@pytest.fixture
def clean_source() -> str:
    """Valid Python source."""
    return CLEAN_SOURCE


@pytest.fixture
def broken_source() -> str:
    """Python source with a syntax error on line 1."""
    return BROKEN_SOURCE


@pytest.fixture
def sample_context() -> PhaseContext:
    """Context for a clean file on the first pass."""
    return PhaseContext(file_path="module.py", source=CLEAN_SOURCE)


@pytest.fixture
def python_file(tmp_path: Path) -> Path:
    """A clean Python file on disk."""
    path = tmp_path / "module.py"
    path.write_text(CLEAN_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def ok_result() -> ActionResult:
    """Result with no diagnostics."""
    return ActionResult()


@pytest.fixture
def error_result() -> ActionResult:
    """Result carrying one blocking diagnostic."""
    return ActionResult(
        diagnostics=(Diagnostic(severity=Severity.ERROR, message="type mismatch"),)
    )


@pytest.fixture
def restart_result() -> ActionResult:
    """Result a validation phase returns when it wants a new pass."""
    return ActionResult(
        diagnostics=(
            Diagnostic(
                severity=Severity.ERROR,
                message="still broken",
                kind=DiagnosticKind.RESTART_REQUIRED,
            ),
        )
    )


@pytest.fixture
def registry() -> Iterator[type[ActionRegistry]]:
    """ActionRegistry reset before and after the test."""
    ActionRegistry.clear()
    yield ActionRegistry
    ActionRegistry.clear()

"""Pipeline configuration loading for the lintflow CLI."""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any

import jsonschema

from lintflow.application import (
    DEFAULT_MAX_RESTARTS,
    DEFAULT_RESTART_REASON,
    RetryingAction,
    RetryPolicy,
    WorkflowEngine,
    WorkflowEventEmitter,
)
from lintflow.domain.interfaces import PhaseAction
from lintflow.domain.models import Phase, PhaseCondition
from lintflow.infrastructure.registry import ActionRegistry
from lintflow.schemas import validate_pipeline

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def validate_pipeline_data(data: Any, source: str) -> dict[str, Any]:
    """
    Check a parsed pipeline definition against the schema.

    Args:
        data: Parsed JSON
        source: File name or label used in error messages

    Returns:
        The pipeline definition

    Raises:
        ConfigurationError: If the definition violates the schema
    """
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected an object in {source}, got {type(data).__name__}"
        )
    try:
        validate_pipeline(data)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "(root)"
        raise ConfigurationError(
            f"Invalid pipeline {source} at {location}: {e.message}"
        ) from e
    return data


def load_pipeline_config(path: Path) -> dict[str, Any]:
    """
    Load a pipeline definition from a JSON file.

    Args:
        path: Path to pipeline.json

    Returns:
        Pipeline configuration dict

    Raises:
        ConfigurationError: If file is missing or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Pipeline file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    return validate_pipeline_data(data, str(path))


def _create_action(
    phase_config: dict[str, Any], registry: type[ActionRegistry]
) -> PhaseAction:
    phase_id = phase_config["id"]
    name = phase_config["action"]
    try:
        action = registry.create(name, **phase_config.get("options", {}))
    except KeyError as e:
        raise ConfigurationError(f"Phase '{phase_id}': {e.args[0]}") from e
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Phase '{phase_id}': invalid options for action '{name}': {e}"
        ) from e

    retry = phase_config.get("retry")
    if retry is not None:
        action = RetryingAction(action, RetryPolicy(**retry))
    return action


def _build_condition(phase_config: dict[str, Any]) -> PhaseCondition:
    condition = phase_config.get("condition")
    if condition is None:
        return PhaseCondition()
    try:
        return PhaseCondition(condition["when"], condition.get("phase"))
    except ValueError as e:
        raise ConfigurationError(f"Phase '{phase_config['id']}': {e}") from e


def build_phases(
    config: dict[str, Any], registry: type[ActionRegistry] = ActionRegistry
) -> list[Phase]:
    """
    Turn a pipeline definition into Phase objects, in definition order.

    Phases with "enabled": false are dropped.

    Args:
        config: Validated pipeline definition
        registry: Where action names are looked up

    Returns:
        Phases ready for the workflow engine

    Raises:
        ConfigurationError: If an action is unknown or its options are invalid
    """
    phases: list[Phase] = []
    for phase_config in config.get("phases", []):
        if not phase_config.get("enabled", True):
            logger.debug(f"Phase '{phase_config['id']}' disabled")
            continue
        phases.append(
            Phase(
                id=phase_config["id"],
                action=_create_action(phase_config, registry),
                name=phase_config.get("name", ""),
                description=phase_config.get("description", ""),
                priority=phase_config.get("priority", 0),
                depends_on=tuple(phase_config.get("depends_on", ())),
                blocking=phase_config.get("blocking", False),
                validation=phase_config.get("validation", False),
                parameters=MappingProxyType(dict(phase_config.get("parameters", {}))),
                condition=_build_condition(phase_config),
            )
        )
    return phases


def build_engine(
    config: dict[str, Any],
    max_restarts: int | None = None,
    event_emitter: WorkflowEventEmitter | None = None,
    registry: type[ActionRegistry] = ActionRegistry,
) -> WorkflowEngine:
    """
    Build a WorkflowEngine for a pipeline definition.

    Args:
        config: Validated pipeline definition
        max_restarts: Overrides the pipeline's own restart budget
        event_emitter: Optional sink for execution events
        registry: Where action names are looked up

    Raises:
        ConfigurationError: If an action cannot be created
        PhaseDefinitionError: If the phase graph is malformed
    """
    if max_restarts is None:
        max_restarts = config.get("max_restarts", DEFAULT_MAX_RESTARTS)
    return WorkflowEngine(
        build_phases(config, registry),
        max_restarts=max_restarts,
        event_emitter=event_emitter,
        restart_reason=config.get("restart_reason", DEFAULT_RESTART_REASON),
    )

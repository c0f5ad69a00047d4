"""lintflow JSON Schema definitions and validation utilities.

Schemas:
    - pipeline.schema.json: Pipeline definition (phases, dependencies,
      actions, restart budget)

Usage:
    from lintflow.schemas import validate_pipeline

    with open("pipeline.json") as f:
        data = json.load(f)
    validate_pipeline(data)  # Raises jsonschema.ValidationError if invalid
"""

import json
from importlib.resources import files
from typing import Any

import jsonschema


def _load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from the schemas package.

    Args:
        name: Schema filename (e.g., 'pipeline.schema.json')

    Returns:
        Parsed JSON schema as a dictionary
    """
    schema_text = files("lintflow.schemas").joinpath(name).read_text(encoding="utf-8")
    result: dict[str, Any] = json.loads(schema_text)
    return result


def get_pipeline_schema() -> dict[str, Any]:
    """Get the pipeline.json schema."""
    return _load_schema("pipeline.schema.json")


def validate_pipeline(data: dict[str, Any]) -> None:
    """Validate a pipeline definition against the schema.

    Args:
        data: Pipeline definition dictionary

    Raises:
        jsonschema.ValidationError: If validation fails
    """
    jsonschema.validate(data, get_pipeline_schema())


__all__ = [
    "get_pipeline_schema",
    "validate_pipeline",
]

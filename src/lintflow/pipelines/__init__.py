"""Pipeline definitions bundled with lintflow."""

import json
from importlib.resources import files
from typing import Any

DEFAULT_PIPELINE = "python"


def available_pipelines() -> list[str]:
    """Names of the bundled pipelines."""
    return sorted(
        entry.name.removesuffix(".json")
        for entry in files("lintflow.pipelines").iterdir()
        if entry.name.endswith(".json")
    )


def load_bundled_pipeline(name: str = DEFAULT_PIPELINE) -> dict[str, Any]:
    """
    Load a bundled pipeline definition.

    Raises:
        KeyError: If no bundled pipeline has that name
    """
    resource = files("lintflow.pipelines").joinpath(f"{name}.json")
    if not resource.is_file():
        raise KeyError(
            f"Pipeline '{name}' not found. Available pipelines: "
            f"{', '.join(available_pipelines())}"
        )
    data: dict[str, Any] = json.loads(resource.read_text(encoding="utf-8"))
    return data


def load_default_pipeline() -> dict[str, Any]:
    """Load the default Python pipeline."""
    return load_bundled_pipeline(DEFAULT_PIPELINE)


__all__ = [
    "DEFAULT_PIPELINE",
    "available_pipelines",
    "load_bundled_pipeline",
    "load_default_pipeline",
]

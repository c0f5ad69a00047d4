"""
Action Registry with Entry Points Discovery.

Maps the action names used in pipeline files to action factories. Built-in
actions are registered on first use; external packages can add their own
in their pyproject.toml:

    [project.entry-points."lintflow.actions"]
    eslint = "mypackage.actions:EslintAction"

A factory is any callable that takes the phase's "options" as keyword
arguments and returns a PhaseAction.
"""

import warnings
from collections.abc import Callable, Mapping, Sequence
from importlib.metadata import entry_points
from typing import Any

from lintflow.actions import CommandAction, CompositeAction, PythonSyntaxAction
from lintflow.domain.interfaces import PhaseAction
from lintflow.infrastructure.llm import LLMRewriteAction

ENTRY_POINT_GROUP = "lintflow.actions"

ActionFactory = Callable[..., PhaseAction]


class ActionRegistry:
    """
    Registry of phase action factories.

    Discovers factories via the 'lintflow.actions' entry point group.
    Uses lazy loading - entry points are only loaded on first access.

    Example usage:
        action = ActionRegistry.create("command", command=["ruff", "check"])
    """

    _factories: dict[str, ActionFactory] = {}
    _loaded: bool = False

    @classmethod
    def _load(cls) -> None:
        """Register built-ins and load entry points (lazy, called once)."""
        if cls._loaded:
            return

        builtins: dict[str, ActionFactory] = {
            "syntax": PythonSyntaxAction,
            "command": CommandAction,
            "composite": _composite_factory,
            "llm_rewrite": LLMRewriteAction,
        }
        for name, factory in builtins.items():
            cls._factories.setdefault(name, factory)

        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                cls._factories[ep.name] = ep.load()
            except Exception as e:
                warnings.warn(
                    f"Failed to load action '{ep.name}' from entry point: {e}",
                    stacklevel=2,
                )

        cls._loaded = True

    @classmethod
    def register(cls, name: str, factory: ActionFactory) -> None:
        """
        Manually register an action factory.

        Useful for testing or dynamically-created actions.

        Args:
            name: Action identifier used in pipeline files
            factory: Callable returning a PhaseAction
        """
        cls._factories[name] = factory

    @classmethod
    def get(cls, name: str) -> ActionFactory:
        """
        Get an action factory by name.

        Raises:
            KeyError: If action not found
        """
        cls._load()
        if name not in cls._factories:
            available = ", ".join(sorted(cls._factories)) or "(none)"
            raise KeyError(f"Action '{name}' not found. Available actions: {available}")
        return cls._factories[name]

    @classmethod
    def create(cls, name: str, **options: Any) -> PhaseAction:
        """
        Create an action by name.

        Args:
            name: Action identifier
            **options: Passed to the factory

        Returns:
            The phase action

        Raises:
            KeyError: If action not found
            TypeError: If options don't match the factory signature
        """
        return cls.get(name)(**options)

    @classmethod
    def available(cls) -> list[str]:
        """List registered action names, sorted."""
        cls._load()
        return sorted(cls._factories)

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered actions (useful for testing).

        Also resets the loaded flag so built-ins and entry points are
        registered again on next access.
        """
        cls._factories.clear()
        cls._loaded = False


def _composite_factory(steps: Sequence[Mapping[str, Any]]) -> CompositeAction:
    """Build a CompositeAction from [{"action": name, "options": {...}}, ...]."""
    actions = [
        ActionRegistry.create(step["action"], **dict(step.get("options", {})))
        for step in steps
    ]
    return CompositeAction(*actions)

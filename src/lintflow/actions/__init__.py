"""
Built-in phase actions.

Every action is a callable taking a PhaseContext and returning an
ActionResult.
"""

from lintflow.actions.command import CommandAction
from lintflow.actions.composite import CompositeAction
from lintflow.actions.static import PythonSyntaxAction

__all__ = [
    "CommandAction",
    "CompositeAction",
    "PythonSyntaxAction",
]

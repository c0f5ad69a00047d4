"""Static (in-process) phase actions."""

from lintflow.actions.static.syntax import PythonSyntaxAction

__all__ = ["PythonSyntaxAction"]

"""Command line interface for lintflow."""

from .exceptions import ConfigurationError

__all__ = ["ConfigurationError"]

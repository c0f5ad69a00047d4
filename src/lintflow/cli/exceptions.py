"""Exceptions raised by the lintflow command line layer."""


class ConfigurationError(Exception):
    """Raised when a pipeline file is invalid or missing."""

    pass

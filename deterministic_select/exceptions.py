"""
Exception classes for the deterministic select package.

Centralized location for all custom exceptions to avoid circular imports.
"""


class SelectionError(Exception):
    """Base exception for all selection-related errors."""
    pass


class InvalidArgument(SelectionError, ValueError):
    """Raised when a selection request is empty or asks for a rank out of range."""
    pass


class ConfigurationError(SelectionError):
    """Base exception for harness and CLI configuration errors."""
    pass

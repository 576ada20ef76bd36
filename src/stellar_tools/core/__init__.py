"""Core types, errors, and shared utilities."""

from stellar_tools.core.errors import (
    ConfigError,
    ExecutionError,
    ExecutionErrorKind,
    StellarToolsError,
    UnknownToolError,
    ValidationError,
    ValidationErrorKind,
)

__all__ = [
    "ConfigError",
    "ExecutionError",
    "ExecutionErrorKind",
    "StellarToolsError",
    "UnknownToolError",
    "ValidationError",
    "ValidationErrorKind",
]

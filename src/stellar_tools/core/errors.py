"""Exception hierarchy for stellar-tools.

Every module imports from here. The hierarchy is:

    StellarToolsError
    ├── ValidationError(kind, field, detail)
    ├── ExecutionError(kind, command, cause)
    ├── UnknownToolError(name)
    └── ConfigError
"""

from __future__ import annotations

import enum


class StellarToolsError(Exception):
    """Base exception for all stellar-tools errors."""


# ─── Validation Errors ────────────────────────────────────────


class ValidationErrorKind(enum.StrEnum):
    """Why a tool argument was rejected."""

    MISSING_FIELD = "missing_field"
    TYPE_MISMATCH = "type_mismatch"
    CONSTRAINT_VIOLATION = "constraint_violation"


class ValidationError(StellarToolsError):
    """Tool arguments did not satisfy the declared parameter schema.

    Raised before any command is built, so no process is ever
    launched for a rejected request.
    """

    def __init__(
        self,
        kind: ValidationErrorKind,
        field: str,
        detail: str = "",
    ) -> None:
        self.kind = kind
        self.field = field
        self.detail = detail
        msg = f"Invalid argument '{field}' ({kind.value})"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


# ─── Execution Errors ─────────────────────────────────────────


class ExecutionErrorKind(enum.StrEnum):
    """Why an external command could not be run."""

    LAUNCH_FAILURE = "launch_failure"


class ExecutionError(StellarToolsError):
    """The external program could not be started.

    A program that starts and exits non-zero is *not* an execution
    error; its output is returned like any other result.
    """

    def __init__(
        self,
        kind: ExecutionErrorKind,
        command: str,
        cause: str,
    ) -> None:
        self.kind = kind
        self.command = command
        self.cause = cause
        super().__init__(f"Failed to launch '{command}': {cause}")


# ─── Registry Errors ──────────────────────────────────────────


class UnknownToolError(StellarToolsError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(StellarToolsError):
    """Invalid configuration."""

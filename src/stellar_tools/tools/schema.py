"""Parameter schemas and argument validation.

A tool's parameters are declared as an ordered mapping from field
name to a :data:`FieldConstraint`.  :func:`validate` checks raw
arguments against that mapping and returns a read-only
:data:`ValidatedParams`; :func:`to_json_schema` renders the same
declaration as the JSON Schema advertised to MCP clients.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from stellar_tools.core.errors import ValidationError, ValidationErrorKind


@dataclass(frozen=True, slots=True)
class StringField:
    """Free-form string, optionally with a minimum length."""

    description: str | None = None
    min_length: int | None = None


@dataclass(frozen=True, slots=True)
class EnumField:
    """String restricted to a closed set of literals."""

    choices: tuple[str, ...]
    default: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.choices:
            msg = "EnumField needs at least one choice"
            raise ValueError(msg)
        if self.default is not None and self.default not in self.choices:
            msg = f"Default {self.default!r} is not one of {self.choices}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class IntegerField:
    """Integer, optionally required to be >= 0."""

    description: str | None = None
    non_negative: bool = False


FieldConstraint = StringField | EnumField | IntegerField
ParameterSchema = Mapping[str, FieldConstraint]
ValidatedParams = Mapping[str, Any]


def _default_for(constraint: FieldConstraint) -> Any:
    match constraint:
        case EnumField(default=default):
            return default
        case StringField() | IntegerField():
            return None


def _check(name: str, constraint: FieldConstraint, value: Any) -> Any:
    """Check one present value; return it (normalised) or raise."""
    match constraint:
        case StringField(min_length=min_length):
            if not isinstance(value, str):
                raise ValidationError(
                    ValidationErrorKind.TYPE_MISMATCH,
                    name,
                    f"expected string, got {type(value).__name__}",
                )
            if min_length is not None and len(value) < min_length:
                raise ValidationError(
                    ValidationErrorKind.CONSTRAINT_VIOLATION,
                    name,
                    f"must be at least {min_length} characters",
                )
            return value

        case EnumField(choices=choices):
            if not isinstance(value, str):
                raise ValidationError(
                    ValidationErrorKind.TYPE_MISMATCH,
                    name,
                    f"expected string, got {type(value).__name__}",
                )
            if value not in choices:
                raise ValidationError(
                    ValidationErrorKind.CONSTRAINT_VIOLATION,
                    name,
                    f"must be one of {', '.join(choices)}",
                )
            return value

        case IntegerField(non_negative=non_negative):
            # bool is an int subclass; JSON clients may send 3.0 for 3.
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    ValidationErrorKind.TYPE_MISMATCH,
                    name,
                    f"expected integer, got {type(value).__name__}",
                )
            if non_negative and value < 0:
                raise ValidationError(
                    ValidationErrorKind.CONSTRAINT_VIOLATION,
                    name,
                    "must be non-negative",
                )
            return value


def validate(schema: ParameterSchema, arguments: Mapping[str, Any]) -> ValidatedParams:
    """Validate raw tool arguments against a parameter schema.

    Fields are checked in schema order, so the first offending field
    is the one reported.  Arguments not named in the schema are
    ignored.  ``None`` counts as absent.

    Returns:
        Read-only mapping of field name to checked value.

    Raises:
        ValidationError: On a missing field, wrong type, or violated
            constraint.
    """
    checked: dict[str, Any] = {}
    for name, constraint in schema.items():
        value = arguments.get(name)
        if value is None:
            default = _default_for(constraint)
            if default is None:
                raise ValidationError(ValidationErrorKind.MISSING_FIELD, name)
            checked[name] = default
            continue
        checked[name] = _check(name, constraint, value)
    return MappingProxyType(checked)


def _property(constraint: FieldConstraint) -> dict[str, Any]:
    prop: dict[str, Any]
    match constraint:
        case StringField(min_length=min_length):
            prop = {"type": "string"}
            if min_length is not None:
                prop["minLength"] = min_length
        case EnumField(choices=choices, default=default):
            prop = {"type": "string", "enum": list(choices)}
            if default is not None:
                prop["default"] = default
        case IntegerField(non_negative=non_negative):
            prop = {"type": "integer"}
            if non_negative:
                prop["minimum"] = 0
    if constraint.description:
        prop["description"] = constraint.description
    return prop


def to_json_schema(schema: ParameterSchema) -> dict[str, Any]:
    """Render a parameter schema as a JSON Schema object."""
    return {
        "type": "object",
        "properties": {name: _property(c) for name, c in schema.items()},
        "required": [
            name for name, c in schema.items() if _default_for(c) is None
        ],
    }

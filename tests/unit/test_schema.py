"""Tests for parameter schemas and argument validation."""

from __future__ import annotations

import pytest

from stellar_tools.core.errors import ValidationError, ValidationErrorKind
from stellar_tools.tools.schema import (
    EnumField,
    IntegerField,
    StringField,
    to_json_schema,
    validate,
)

NETWORK = EnumField(choices=("testnet", "mainnet"), default="testnet")

SCHEMA = {
    "contractId": StringField("Contract ID"),
    "ownerG": StringField(min_length=3),
    "tokenId": IntegerField(non_negative=True),
    "network": NETWORK,
}

VALID = {"contractId": "CABC", "ownerG": "GXYZ", "tokenId": 7, "network": "mainnet"}


def _kind(exc_info: pytest.ExceptionInfo[ValidationError]) -> ValidationErrorKind:
    return exc_info.value.kind


# ── Field declarations ──────────────────────────────────────────────


class TestFieldConstraints:
    def test_frozen(self) -> None:
        field = StringField()
        with pytest.raises(AttributeError):
            field.min_length = 5  # type: ignore[misc]

    def test_enum_requires_choices(self) -> None:
        with pytest.raises(ValueError, match=r"at least one choice"):
            EnumField(choices=())

    def test_enum_default_must_be_a_choice(self) -> None:
        with pytest.raises(ValueError, match=r"not one of"):
            EnumField(choices=("a", "b"), default="c")


# ── validate ────────────────────────────────────────────────────────


class TestValidateSuccess:
    def test_valid_input(self) -> None:
        params = validate(SCHEMA, VALID)
        assert dict(params) == VALID

    def test_result_is_read_only(self) -> None:
        params = validate(SCHEMA, VALID)
        with pytest.raises(TypeError):
            params["tokenId"] = 8  # type: ignore[index]

    def test_default_substituted(self) -> None:
        args = {k: v for k, v in VALID.items() if k != "network"}
        params = validate(SCHEMA, args)
        assert params["network"] == "testnet"

    def test_none_counts_as_absent(self) -> None:
        params = validate(SCHEMA, {**VALID, "network": None})
        assert params["network"] == "testnet"

    def test_extra_fields_ignored(self) -> None:
        params = validate(SCHEMA, {**VALID, "unexpected": "x"})
        assert "unexpected" not in params

    def test_zero_is_non_negative(self) -> None:
        params = validate(SCHEMA, {**VALID, "tokenId": 0})
        assert params["tokenId"] == 0

    def test_integral_float_normalised(self) -> None:
        params = validate(SCHEMA, {**VALID, "tokenId": 3.0})
        assert params["tokenId"] == 3
        assert type(params["tokenId"]) is int

    def test_large_amount_string_passes_through(self) -> None:
        schema = {"amount": StringField("i128 as string")}
        huge = "170141183460469231731687303715884105727"
        params = validate(schema, {"amount": huge})
        assert params["amount"] == huge

    def test_min_length_boundary(self) -> None:
        params = validate(SCHEMA, {**VALID, "ownerG": "GAB"})
        assert params["ownerG"] == "GAB"

    def test_deterministic(self) -> None:
        assert dict(validate(SCHEMA, VALID)) == dict(validate(SCHEMA, VALID))
        with pytest.raises(ValidationError) as first:
            validate(SCHEMA, {**VALID, "tokenId": -1})
        with pytest.raises(ValidationError) as second:
            validate(SCHEMA, {**VALID, "tokenId": -1})
        assert str(first.value) == str(second.value)


class TestValidateFailure:
    def test_missing_required_field(self) -> None:
        args = {k: v for k, v in VALID.items() if k != "contractId"}
        with pytest.raises(ValidationError) as exc_info:
            validate(SCHEMA, args)
        assert _kind(exc_info) is ValidationErrorKind.MISSING_FIELD
        assert exc_info.value.field == "contractId"

    def test_first_missing_field_in_schema_order(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate(SCHEMA, {})
        assert exc_info.value.field == "contractId"

    def test_negative_integer(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate(SCHEMA, {**VALID, "tokenId": -1})
        assert _kind(exc_info) is ValidationErrorKind.CONSTRAINT_VIOLATION
        assert exc_info.value.field == "tokenId"

    def test_negative_allowed_without_constraint(self) -> None:
        params = validate({"delta": IntegerField()}, {"delta": -5})
        assert params["delta"] == -5

    @pytest.mark.parametrize("value", ["7", 7.5, True, [7]])
    def test_integer_type_mismatch(self, value: object) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate(SCHEMA, {**VALID, "tokenId": value})
        assert _kind(exc_info) is ValidationErrorKind.TYPE_MISMATCH

    def test_string_type_mismatch(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate(SCHEMA, {**VALID, "contractId": 42})
        assert _kind(exc_info) is ValidationErrorKind.TYPE_MISMATCH
        assert "int" in exc_info.value.detail

    def test_string_too_short(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate(SCHEMA, {**VALID, "ownerG": "GA"})
        assert _kind(exc_info) is ValidationErrorKind.CONSTRAINT_VIOLATION
        assert "3" in exc_info.value.detail

    def test_enum_outside_choices(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate(SCHEMA, {**VALID, "network": "devnet"})
        assert _kind(exc_info) is ValidationErrorKind.CONSTRAINT_VIOLATION
        assert exc_info.value.field == "network"

    def test_enum_type_mismatch(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate(SCHEMA, {**VALID, "network": 1})
        assert _kind(exc_info) is ValidationErrorKind.TYPE_MISMATCH

    def test_enum_without_default_is_required(self) -> None:
        schema = {"side": EnumField(choices=("buy", "sell"))}
        with pytest.raises(ValidationError) as exc_info:
            validate(schema, {})
        assert _kind(exc_info) is ValidationErrorKind.MISSING_FIELD


# ── to_json_schema ──────────────────────────────────────────────────


class TestJsonSchema:
    def test_object_shape(self) -> None:
        schema = to_json_schema(SCHEMA)
        assert schema["type"] == "object"
        assert list(schema["properties"]) == ["contractId", "ownerG", "tokenId", "network"]

    def test_required_excludes_defaulted(self) -> None:
        schema = to_json_schema(SCHEMA)
        assert schema["required"] == ["contractId", "ownerG", "tokenId"]

    def test_properties(self) -> None:
        props = to_json_schema(SCHEMA)["properties"]
        assert props["contractId"] == {"type": "string", "description": "Contract ID"}
        assert props["ownerG"] == {"type": "string", "minLength": 3}
        assert props["tokenId"] == {"type": "integer", "minimum": 0}
        assert props["network"] == {
            "type": "string",
            "enum": ["testnet", "mainnet"],
            "default": "testnet",
        }

    def test_empty_schema(self) -> None:
        assert to_json_schema({}) == {"type": "object", "properties": {}, "required": []}

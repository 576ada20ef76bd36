"""Shared test fixtures for stellar-tools."""

from __future__ import annotations

import sys
from typing import Any

import pytest

from stellar_tools.config.schema import GatewayConfig
from stellar_tools.tools.base import ToolSpec
from stellar_tools.tools.schema import StringField

MISSING_BINARY = "stellar-tools-test-missing-binary"


@pytest.fixture
def python_config() -> GatewayConfig:
    """Gateway config that launches the running Python interpreter."""
    return GatewayConfig(executable=sys.executable)


@pytest.fixture
def missing_config() -> GatewayConfig:
    """Gateway config whose executable does not exist."""
    return GatewayConfig(executable=MISSING_BINARY)


@pytest.fixture
def make_script_tool() -> Any:
    """Factory fixture: a tool that runs ``python -c <code>``.

    The ``message`` argument is appended to ``sys.argv`` so scripts
    can echo it back.
    """

    def _make(code: str, name: str = "script") -> ToolSpec:
        return ToolSpec(
            name=name,
            title="Script",
            description="Runs a Python snippet",
            parameters={"message": StringField("Text passed to the script")},
            build_command=lambda p: ["-c", code, p["message"]],
        )

    return _make

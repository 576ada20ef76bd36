"""Pydantic models for stellar-tools configuration."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class GatewayConfig(BaseModel):
    """Settings read by every command invocation.

    Frozen: the gateway shares one instance across concurrent calls.
    """

    model_config = ConfigDict(frozen=True)

    debug: bool = False
    executable: str = "stellar"
    use_shell: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = "INFO"
    file: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class StellarToolsConfig(BaseModel):
    """Top-level configuration for stellar-tools."""

    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

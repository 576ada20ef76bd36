"""Configuration loading: TOML files, env var overrides, merge logic.

Sources, lowest priority first:
    1. Built-in defaults (Pydantic model defaults)
    2. User config: ``$XDG_CONFIG_HOME/stellar-tools/config.toml``
    3. Project-local config: ``./stellar-tools.toml``
    4. ``$STELLAR_TOOLS_CONFIG`` (must exist if set)
    5. Explicit ``path`` argument (must exist)
    6. ``$STELLAR_TOOLS_DEBUG`` (overrides ``gateway.debug``)
    7. Programmatic overrides (passed to ``load_config``)
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import pydantic

from stellar_tools.core.errors import ConfigError

from .schema import StellarToolsConfig

_DEBUG_ENV = "STELLAR_TOOLS_DEBUG"
_BOOLEANS = {
    **dict.fromkeys(("1", "true", "yes", "on"), True),
    **dict.fromkeys(("0", "false", "no", "off", ""), False),
}


def _config_files(path: str | Path | None) -> list[Path]:
    """Return existing config files in merge order.

    Discovered files are optional; ``$STELLAR_TOOLS_CONFIG`` and
    ``path`` are not.
    """
    xdg = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    optional = [Path(xdg) / "stellar-tools" / "config.toml", Path.cwd() / "stellar-tools.toml"]
    files = [p for p in optional if p.is_file()]

    required = [
        ("STELLAR_TOOLS_CONFIG points to non-existent file", os.environ.get("STELLAR_TOOLS_CONFIG")),
        ("Config file not found", path),
    ]
    for label, candidate in required:
        if not candidate:
            continue
        p = Path(candidate)
        if not p.is_file():
            msg = f"{label}: {candidate}"
            raise ConfigError(msg)
        files.append(p)
    return files


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override wins on conflicts."""
    merged = base.copy()
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _env_overrides() -> dict[str, Any]:
    raw = os.environ.get(_DEBUG_ENV)
    if raw is None:
        return {}
    try:
        return {"gateway": {"debug": _BOOLEANS[raw.strip().lower()]}}
    except KeyError:
        msg = f"{_DEBUG_ENV} must be a boolean, got: {raw!r}"
        raise ConfigError(msg) from None


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> StellarToolsConfig:
    """Load and validate configuration.

    Raises:
        ConfigError: On invalid TOML, missing files, bad env values, or
            validation failure.
    """
    merged: dict[str, Any] = {}
    for config_file in _config_files(path):
        merged = _deep_merge(merged, _read_toml(config_file))
    merged = _deep_merge(merged, _env_overrides())
    merged = _deep_merge(merged, overrides or {})

    try:
        return StellarToolsConfig.model_validate(merged)
    except pydantic.ValidationError as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e

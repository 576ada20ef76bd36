"""Main CLI application.

Click commands for stellar-tools: serve, tools, call.
"""

from __future__ import annotations

import asyncio
import json as json_mod
import logging
import sys
from typing import TYPE_CHECKING, Any

import click

from stellar_tools import __version__
from stellar_tools.config.loader import load_config
from stellar_tools.core.errors import ConfigError, StellarToolsError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from stellar_tools.config.schema import StellarToolsConfig
    from stellar_tools.tools.schema import FieldConstraint

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None, debug: bool = False) -> StellarToolsConfig:
    """Load config with user-friendly error handling."""
    overrides = {"gateway": {"debug": True}} if debug else None
    try:
        return load_config(path=config_path, overrides=overrides)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def _setup_logging(config: StellarToolsConfig) -> None:
    """Configure the root logger. Never logs to stdout (the MCP transport).

    With ``gateway.debug`` set, the gateway logger is kept at INFO so the
    command lines it logs survive a quieter root level.

    Raises:
        ConfigError: If the log file cannot be opened.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.logging.file:
        try:
            handlers.append(logging.FileHandler(config.logging.file))
        except OSError as e:
            msg = f"Cannot open log file {config.logging.file}: {e}"
            raise ConfigError(msg) from e
    logging.basicConfig(
        level=config.logging.level,
        format=_LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    gateway_logger = logging.getLogger("stellar_tools.tools.gateway")
    if config.gateway.debug and not gateway_logger.isEnabledFor(logging.INFO):
        gateway_logger.setLevel(logging.INFO)
    elif not config.gateway.debug:
        gateway_logger.setLevel(logging.NOTSET)


def _prepare(config_path: str | None, debug: bool) -> StellarToolsConfig:
    """Load config and set up logging, exiting with a message on failure."""
    config = _load_config(config_path, debug=debug)
    try:
        _setup_logging(config)
    except ConfigError as e:
        _error(str(e))
    return config


def _parse_arg(pair: str, parameters: Mapping[str, FieldConstraint]) -> tuple[str, Any]:
    """Parse ``key=value``.

    Only values for integer fields are converted; everything else stays
    a string, so digit-only amounts and names reach the validator as text.
    """
    from stellar_tools.tools.schema import IntegerField

    key, sep, value = pair.partition("=")
    if not sep or not key:
        msg = f"Expected key=value, got: {pair}"
        raise click.BadParameter(msg, param_hint="--arg")
    if isinstance(parameters.get(key), IntegerField):
        try:
            return key, int(value)
        except ValueError:
            pass
    return key, value


def _collect_arguments(
    pairs: tuple[str, ...],
    raw_json: str | None,
    parameters: Mapping[str, FieldConstraint],
) -> dict[str, Any]:
    arguments: dict[str, Any] = {}
    if raw_json:
        try:
            loaded = json_mod.loads(raw_json)
        except json_mod.JSONDecodeError as e:
            msg = f"Invalid JSON: {e}"
            raise click.BadParameter(msg, param_hint="--json") from e
        if not isinstance(loaded, dict):
            msg = "JSON arguments must be an object"
            raise click.BadParameter(msg, param_hint="--json")
        arguments.update(loaded)
    arguments.update(_parse_arg(p, parameters) for p in pairs)
    return arguments


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="stellar-tools")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """stellar-tools - Stellar contract calls as MCP tools.

    Validates tool arguments and runs the stellar CLI for you.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.option("--debug", is_flag=True, default=False, help="Log each command before it runs.")
@click.pass_context
def serve(ctx: click.Context, debug: bool) -> None:
    """Start the MCP server on stdio."""
    from stellar_tools.mcp.server import run_server

    config = _prepare(ctx.obj["config_path"], debug)
    asyncio.run(run_server(config))


# ── tools ────────────────────────────────────────────────────────


@cli.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON schemas.")
def tools(as_json: bool) -> None:
    """List available tools."""
    from stellar_tools.tools.catalog import default_registry
    from stellar_tools.tools.schema import to_json_schema

    registry = default_registry()
    if as_json:
        payload = [
            {
                "name": spec.name,
                "title": spec.title,
                "description": spec.description,
                "inputSchema": to_json_schema(spec.parameters),
            }
            for spec in registry
        ]
        click.echo(json_mod.dumps(payload, indent=2))
        return

    from stellar_tools.cli.display import render_tools

    render_tools(registry)


# ── call ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option(
    "-a",
    "--arg",
    "pairs",
    multiple=True,
    help="Tool argument as key=value (repeatable).",
)
@click.option("--json", "raw_json", default=None, help="Tool arguments as a JSON object.")
@click.option("--debug", is_flag=True, default=False, help="Log the command before it runs.")
@click.pass_context
def call(
    ctx: click.Context,
    name: str,
    pairs: tuple[str, ...],
    raw_json: str | None,
    debug: bool,
) -> None:
    """Invoke one tool and print its output."""
    from stellar_tools.tools.catalog import default_registry

    config = _prepare(ctx.obj["config_path"], debug)
    registry = default_registry()

    try:
        tool = registry.get(name)
        arguments = _collect_arguments(pairs, raw_json, tool.parameters)
        text = asyncio.run(registry.call(name, arguments, config.gateway))
    except StellarToolsError as e:
        _error(str(e))
        return
    click.echo(text, nl=not text.endswith("\n"))

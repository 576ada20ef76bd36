"""Command gateway: runs a tool's command and captures its output.

One call to :func:`invoke` launches exactly one child process and
waits for it to exit.  The program's exit status is not
interpreted; only a failure to start it is an error.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
from typing import TYPE_CHECKING

from stellar_tools.core.errors import ExecutionError, ExecutionErrorKind
from stellar_tools.tools.base import InvocationResult

if TYPE_CHECKING:
    from stellar_tools.config.schema import GatewayConfig
    from stellar_tools.tools.base import ToolSpec
    from stellar_tools.tools.schema import ValidatedParams

logger = logging.getLogger(__name__)

# POSIX shells exit with these when the program itself could not run.
_SHELL_LAUNCH_FAILURES = {
    126: "command not executable",
    127: "command not found",
}

# Flags whose value is a signing seed.
_SECRET_FLAGS = frozenset({"--source"})
_REDACTED = "***"


def redact_argv(argv: list[str]) -> str:
    """Render ``argv`` as a command string with secret values masked."""
    shown = list(argv)
    for i, arg in enumerate(shown[:-1]):
        if arg in _SECRET_FLAGS:
            shown[i + 1] = _REDACTED
    return shlex.join(shown)


def build_argv(
    tool: ToolSpec, params: ValidatedParams, config: GatewayConfig
) -> list[str]:
    """Return the full argument vector for a tool call."""
    if tool.build_command is None:
        msg = f"Tool {tool.name!r} is local and has no command"
        raise ValueError(msg)
    return [config.executable, *(str(arg) for arg in tool.build_command(params))]


async def _spawn(argv: list[str], command: str, use_shell: bool) -> asyncio.subprocess.Process:
    if use_shell:
        return await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    return await asyncio.create_subprocess_exec(
        *argv,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )


async def _communicate(proc: asyncio.subprocess.Process) -> tuple[bytes, bytes]:
    """Wait for the child and collect its output, reaping it on cancellation."""
    try:
        return await proc.communicate()
    finally:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()


async def invoke(
    tool: ToolSpec,
    params: ValidatedParams,
    config: GatewayConfig,
) -> InvocationResult:
    """Run a tool's command and return its captured output.

    Args:
        tool: The tool to run; must have a ``build_command``.
        params: Arguments already checked by
            :func:`stellar_tools.tools.schema.validate`.
        config: Gateway settings (read only).

    Returns:
        Decoded stdout and stderr, whatever the exit status.

    Raises:
        ExecutionError: If the program could not be started.
    """
    argv = build_argv(tool, params, config)
    command = shlex.join(argv)

    if config.debug:
        logger.info("[stellar] %s", command)

    try:
        proc = await _spawn(argv, command, config.use_shell)
    except OSError as exc:
        logger.warning("Failed to launch %s: %s", tool.name, exc)
        raise ExecutionError(
            ExecutionErrorKind.LAUNCH_FAILURE, redact_argv(argv), str(exc)
        ) from exc

    stdout, stderr = await _communicate(proc)
    logger.debug("%s exited with status %s", tool.name, proc.returncode)

    if config.use_shell and proc.returncode in _SHELL_LAUNCH_FAILURES:
        cause = stderr.decode(errors="replace").strip()
        cause = cause or _SHELL_LAUNCH_FAILURES[proc.returncode]
        logger.warning("Failed to launch %s: %s", tool.name, cause)
        raise ExecutionError(
            ExecutionErrorKind.LAUNCH_FAILURE, redact_argv(argv), cause
        )

    return InvocationResult(
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )

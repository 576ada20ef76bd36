"""Tool specification and result types.

A :class:`ToolSpec` couples a parameter schema with either a
command builder (the tool runs the external program) or a local
responder (the tool answers in-process).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stellar_tools.tools.schema import FieldConstraint, ValidatedParams

CommandBuilder = Callable[["ValidatedParams"], list[str]]
Responder = Callable[["ValidatedParams"], str]


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Declaration of a single tool.

    ``build_command`` returns the argument vector passed to the
    configured executable (the program name itself is not included).
    Exactly one of ``build_command`` and ``respond`` must be set.
    """

    name: str
    title: str
    description: str
    parameters: Mapping[str, FieldConstraint] = field(default_factory=dict)
    build_command: CommandBuilder | None = None
    respond: Responder | None = None

    def __post_init__(self) -> None:
        if (self.build_command is None) == (self.respond is None):
            msg = f"Tool {self.name!r} needs exactly one of build_command or respond"
            raise ValueError(msg)
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def is_local(self) -> bool:
        """True if the tool answers without an external process."""
        return self.respond is not None


@dataclass(frozen=True, slots=True)
class InvocationResult:
    """Captured output of one external command."""

    stdout: str
    stderr: str

    @property
    def text(self) -> str:
        """Standard output if there is any, otherwise standard error."""
        return self.stdout or self.stderr

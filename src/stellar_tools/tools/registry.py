"""Tool registry: the fixed, ordered set of tools a server exposes.

Built once from an iterable of :class:`ToolSpec` and read-only
afterwards.  :meth:`ToolRegistry.call` is the single entry point
that takes a raw request through validation and execution.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from stellar_tools.core.errors import UnknownToolError
from stellar_tools.tools.gateway import invoke
from stellar_tools.tools.schema import validate

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from stellar_tools.config.schema import GatewayConfig
    from stellar_tools.tools.base import ToolSpec


class ToolRegistry:
    """Ordered, read-only mapping from tool name to :class:`ToolSpec`."""

    def __init__(self, tools: Iterable[ToolSpec] = ()) -> None:
        """Build the registry.

        Raises:
            ValueError: If two tools share a name.
        """
        self._tools: dict[str, ToolSpec] = {}
        for tool in tools:
            if tool.name in self._tools:
                msg = f"Tool already registered: {tool.name}"
                raise ValueError(msg)
            self._tools[tool.name] = tool

    def get(self, name: str) -> ToolSpec:
        """Get a tool by name.

        Raises:
            UnknownToolError: If the tool is not found.
        """
        if name not in self._tools:
            raise UnknownToolError(name)
        return self._tools[name]

    async def call(
        self,
        name: str,
        arguments: Mapping[str, Any],
        config: GatewayConfig,
    ) -> str:
        """Validate arguments, run the tool, and return its text payload.

        Raises:
            UnknownToolError: If no tool is registered under ``name``.
            ValidationError: If the arguments are rejected; nothing is run.
            ExecutionError: If the external program could not be started.
        """
        tool = self.get(name)
        params = validate(tool.parameters, arguments)
        if tool.respond is not None:
            return tool.respond(params)
        result = await invoke(tool, params, config)
        return result.text

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def list_names(self) -> list[str]:
        """Return names of all registered tools, in registration order."""
        return list(self._tools.keys())

"""MCP server for stellar-tools.

Serves the tool registry over stdio, plus a static history
resource and a greeting prompt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import (
    GetPromptResult,
    Prompt,
    PromptArgument,
    PromptMessage,
    Resource,
    TextContent,
    Tool,
)

from stellar_tools import __version__
from stellar_tools.tools.schema import to_json_schema

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pydantic import AnyUrl

    from stellar_tools.config.schema import GatewayConfig, StellarToolsConfig
    from stellar_tools.tools.registry import ToolRegistry

SERVER_NAME = "stellar-tools"

HISTORY_URI = "history://hello-world"
HISTORY_TEXT = (
    '"Hello, World" first appeared in a 1972 Bell Labs memo by Brian Kernighan '
    "and later became the iconic first program for beginners in countless "
    "languages."
)


class ToolService:
    """Adapts a :class:`ToolRegistry` to MCP tool requests."""

    def __init__(self, registry: ToolRegistry, config: GatewayConfig) -> None:
        self._registry = registry
        self._config = config

    def list_tools(self) -> list[Tool]:
        return [
            Tool(
                name=spec.name,
                title=spec.title,
                description=spec.description,
                inputSchema=to_json_schema(spec.parameters),
            )
            for spec in self._registry
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        """Run a tool and wrap its text payload.

        Validation, launch and unknown-tool errors propagate; the MCP
        server turns them into ``isError`` results.
        """
        text = await self._registry.call(name, arguments or {}, self._config)
        return [TextContent(type="text", text=text)]


def _list_resources() -> list[Resource]:
    return [
        Resource(
            uri=HISTORY_URI,  # type: ignore[arg-type]
            name="hello-world-history",
            title="Hello World History",
            description="The origin story of the famous 'Hello, World' program",
            mimeType="text/plain",
        )
    ]


def _read_resource(uri: str) -> list[ReadResourceContents]:
    if uri != HISTORY_URI:
        msg = f"Unknown resource: {uri}"
        raise ValueError(msg)
    return [ReadResourceContents(content=HISTORY_TEXT, mime_type="text/plain")]


def _list_prompts() -> list[Prompt]:
    return [
        Prompt(
            name="greet",
            title="Hello Prompt",
            description="Say hello to someone",
            arguments=[
                PromptArgument(
                    name="name",
                    description="Name of the person to greet",
                    required=True,
                )
            ],
        )
    ]


def _get_prompt(name: str, arguments: dict[str, str] | None) -> GetPromptResult:
    if name != "greet":
        msg = f"Unknown prompt: {name}"
        raise ValueError(msg)
    person = (arguments or {}).get("name")
    if not person:
        msg = "Prompt 'greet' requires argument 'name'"
        raise ValueError(msg)
    return GetPromptResult(
        description="Say hello to someone",
        messages=[
            PromptMessage(
                role="user",
                content=TextContent(type="text", text=f"Say hello to {person}"),
            )
        ],
    )


def create_server(registry: ToolRegistry, config: GatewayConfig) -> Server:
    """Build an MCP server bound to one registry and gateway config."""
    server: Server = Server(SERVER_NAME, version=__version__)
    service = ToolService(registry, config)

    @server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_tools() -> list[Tool]:
        return service.list_tools()

    @server.call_tool()  # type: ignore[untyped-decorator]
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        return await service.call_tool(name, arguments)

    @server.list_resources()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_resources() -> list[Resource]:
        return _list_resources()

    @server.read_resource()  # type: ignore[no-untyped-call, untyped-decorator]
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        return _read_resource(str(uri))

    @server.list_prompts()  # type: ignore[no-untyped-call, untyped-decorator]
    async def list_prompts() -> list[Prompt]:
        return _list_prompts()

    @server.get_prompt()  # type: ignore[no-untyped-call, untyped-decorator]
    async def get_prompt(name: str, arguments: dict[str, str] | None) -> GetPromptResult:
        return _get_prompt(name, arguments)

    return server


async def run_server(config: StellarToolsConfig, registry: ToolRegistry | None = None) -> None:
    """Start the MCP server on stdio."""
    from stellar_tools.tools.catalog import default_registry

    server = create_server(registry or default_registry(), config.gateway)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )

"""stellar-tools - MCP server exposing Stellar contract calls as tools."""

__version__ = "0.1.0"

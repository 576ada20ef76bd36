"""MCP server exposing the tool registry."""

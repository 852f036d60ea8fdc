"""MCP Server for sqlgen

This package provides MCP tools for generating stored procedures and views.
"""

from mcp_server.handlers import GeneratorHandler

__all__ = [
    "GeneratorHandler",
]

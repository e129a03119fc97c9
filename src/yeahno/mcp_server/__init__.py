"""MCP surface: tool providers and the hosting server."""

from .server import MenuMcpServer
from .tool_providers import MenuToolProvider, ToolDef, ToolProviderManager, register_tools, to_tools

__all__ = [
    "MenuMcpServer",
    "MenuToolProvider",
    "ToolDef",
    "ToolProviderManager",
    "register_tools",
    "to_tools",
]

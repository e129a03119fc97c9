"""MCP tool providers backed by ``Select`` menus.

Flow:
  1. MCP Server -> ToolProviderManager.call_tool(name, arguments)
  2. Manager looks up the MenuToolProvider that owns ``name``
  3. Provider delegates to the option's ToolBinding, which resolves the fields
     and runs the menu handler.
  4. Failures are raised as ``YeahnoError``; the MCP SDK turns them into
     ``isError`` results carrying the (already sanitized) message.
"""

from __future__ import annotations

import logging

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server

from yeahno.dispatch import ToolBinding, bind_tools, result_to_text
from yeahno.errors import ConfigurationError, FieldValidationError, HandlerFailure, UnknownToolError
from yeahno.models import Select
from yeahno.resolver import parse_arguments
from yeahno.utils.debug_logger import DebugLogger

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., Awaitable[list[types.TextContent]]]


@dataclass(frozen=True)
class ToolDef:
    """An MCP tool definition paired with the coroutine that serves it."""

    tool: types.Tool
    handler: ToolHandler


def create_success_response(result: Any) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=result_to_text(result))]


def build_tool(binding: ToolBinding) -> types.Tool:
    return types.Tool(
        name=binding.name,
        description=binding.identity.description,
        inputSchema=binding.identity.input_schema(),
    )


async def call_binding(binding: ToolBinding, arguments: Any = None, ctx: Any = None) -> list[types.TextContent]:
    """Serve one tool call; raises ``YeahnoError`` subclasses on failure."""
    try:
        with DebugLogger.trace_tool("mcp", binding.name):
            result = await binding.ainvoke(parse_arguments(arguments), ctx)
    except FieldValidationError as e:
        logger.debug("Tool %s rejected input: %s", binding.name, e)
        raise
    except HandlerFailure as e:
        logger.warning("Tool %s handler raised %s", binding.name, type(e.__cause__).__name__)
        raise
    return create_success_response(result)


def to_tools(select: Select) -> list[ToolDef]:
    """One ``ToolDef`` per exposed option of *select*."""
    return [ToolDef(tool=build_tool(b), handler=partial(call_binding, b)) for b in bind_tools(select)]


class MenuToolProvider:
    """Serves the exposed options of one menu as MCP tools."""

    def __init__(self, select: Select) -> None:
        self.select: Select = select
        self.bindings: dict[str, ToolBinding] = {b.name: b for b in bind_tools(select)}

    def list_tools(self) -> list[types.Tool]:
        return [build_tool(b) for b in self.bindings.values()]

    async def call_tool(self, name: str, arguments: Any = None, ctx: Any = None) -> list[types.TextContent]:
        binding = self.bindings.get(name)
        if binding is None:
            raise UnknownToolError(name)
        return await call_binding(binding, arguments, ctx)


class ToolProviderManager:
    """Routes MCP tool calls to the provider that owns the tool name."""

    def __init__(self) -> None:
        self.providers: list[MenuToolProvider] = []
        self._tool_map: dict[str, MenuToolProvider] = {}

    def register(self, provider: MenuToolProvider) -> None:
        for name in provider.bindings:
            if name in self._tool_map:
                raise ConfigurationError(f"duplicate tool name: {name}")
        self.providers.append(provider)
        for name in provider.bindings:
            self._tool_map[name] = provider
        DebugLogger.debug("Registered %d tools from menu %r", len(provider.bindings), provider.select.title)

    def register_select(self, select: Select) -> MenuToolProvider:
        provider = MenuToolProvider(select)
        self.register(provider)
        return provider

    def list_tools(self) -> list[types.Tool]:
        tools: list[types.Tool] = []
        for p in self.providers:
            tools.extend(p.list_tools())
        return tools

    async def call_tool(self, name: str, arguments: Any = None, ctx: Any = None) -> list[types.TextContent]:
        provider = self._tool_map.get(name)
        if provider is None:
            raise UnknownToolError(name)
        return await provider.call_tool(name, arguments, ctx)

    def install(self, server: Server) -> None:
        """Register ``list_tools`` and ``call_tool`` handlers on a low-level MCP server."""

        @server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return self.list_tools()

        # The shared resolver is the only validator; the SDK's jsonschema pass
        # would report errors in a different shape.
        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
            return await self.call_tool(name, arguments, _request_context(server))


def _request_context(server: Server) -> Any:
    try:
        return server.request_context
    except LookupError:
        return None


def register_tools(server: Server, *selects: Select) -> ToolProviderManager:
    """Expose every menu in *selects* on *server*.

    Raises:
        ConfigurationError: when a menu has no handler or tool names collide.
    """
    manager = ToolProviderManager()
    for select in selects:
        manager.register_select(select)
    manager.install(server)
    return manager

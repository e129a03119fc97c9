"""MCP server hosting one or more menus.

Transports:
  - stdio: ``MenuMcpServer.run_stdio()`` for agent hosts that spawn the process.
  - HTTP: ``MenuMcpServer.run_http()`` serves a FastAPI app with the streamable
    MCP endpoint at ``/mcp/message``, the plain tool endpoints at ``/tools`` and
    ``/health``.
"""

from __future__ import annotations

import contextlib
import logging

from collections.abc import AsyncIterator
from typing import Any

import uvicorn

from fastapi import FastAPI
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

from yeahno.config import ServerConfig
from yeahno.http_tools import register_http
from yeahno.mcp_server.tool_providers import ToolProviderManager
from yeahno.models import Select
from yeahno.utils.debug_logger import DebugLogger

logger = logging.getLogger(__name__)


class MenuMcpServer:
    """Serves menus over MCP (stdio or streamable HTTP) and plain HTTP."""

    def __init__(self, config: ServerConfig | None = None, *selects: Select) -> None:
        self.config: ServerConfig = ServerConfig() if config is None else config
        self.selects: tuple[Select, ...] = selects

        self.tool_providers: ToolProviderManager = ToolProviderManager()
        for select in selects:
            self.tool_providers.register_select(select)

        self.mcp_server: Server = self._create_mcp_server()
        self._session_manager = StreamableHTTPSessionManager(
            app=self.mcp_server,
            json_response=True,
            stateless=False,
        )
        self.app: FastAPI = FastAPI(title=self.config.name, version=self.config.version, lifespan=self._lifespan)

        self._setup_routes()

    def _create_mcp_server(self) -> Server:
        server = Server(name=self.config.name, version=self.config.version)
        self.tool_providers.install(server)
        return server

    @contextlib.asynccontextmanager
    async def _lifespan(self, _app: FastAPI) -> AsyncIterator[None]:
        async with self._session_manager.run():
            DebugLogger.debug("Streamable HTTP session manager started for %s", self.config.name)
            yield

    def _setup_routes(self) -> None:
        self.app.mount("/mcp/message", self._session_manager.handle_request)

        @self.app.get("/health")
        async def health_check() -> dict[str, Any]:
            return {
                "status": "healthy",
                "server": self.config.name,
                "version": self.config.version,
                "tools": len(self.tool_providers.list_tools()),
            }

        register_http(self.app, *self.selects)

    async def run_stdio(self) -> None:
        """Serve MCP over stdin/stdout until the client disconnects."""
        DebugLogger.debug("Serving %s over stdio", self.config.name)
        async with stdio_server() as (read_stream, write_stream):
            await self.mcp_server.run(
                read_stream,
                write_stream,
                self.mcp_server.create_initialization_options(),
            )

    def run_http(self) -> None:
        """Serve the FastAPI app with uvicorn; blocks until interrupted."""
        logger.info(f"Starting {self.config.name} on http://{self.config.host}:{self.config.port}")
        uvicorn.run(self.app, host=self.config.host, port=self.config.port, log_level="info")

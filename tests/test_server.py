from __future__ import annotations

import pytest

from fastapi.testclient import TestClient

from yeahno.config import ServerConfig
from yeahno.mcp_server import MenuMcpServer

from tests.helpers import failing_handler, make_site_menu

pytestmark = pytest.mark.unit

MCP_HEADERS = {"Accept": "application/json, text/event-stream", "Content-Type": "application/json"}


@pytest.fixture
def server() -> MenuMcpServer:
    return MenuMcpServer(ServerConfig(name="sites", version="1.2.3"), make_site_menu())


def test_health(server: MenuMcpServer) -> None:
    response = TestClient(server.app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "server": "sites", "version": "1.2.3", "tools": 2}


def test_http_tool_routes_are_mounted(server: MenuMcpServer) -> None:
    client = TestClient(server.app)
    assert [t["name"] for t in client.get("/tools").json()["tools"]] == ["site_add_site", "site_remove_site"]


def test_http_handler_failure_is_sanitized() -> None:
    server = MenuMcpServer(ServerConfig(), make_site_menu(handler=failing_handler))
    response = TestClient(server.app).post("/tools/site_add_site/run", json={"domain": "example.com"})

    assert response.status_code == 500
    assert "hunter2" not in response.text


def test_streamable_http_initialize(server: MenuMcpServer) -> None:
    request = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "initialize",
        "params": {
            "protocolVersion": "2025-03-26",
            "capabilities": {},
            "clientInfo": {"name": "pytest", "version": "0"},
        },
    }
    with TestClient(server.app) as client:
        response = client.post("/mcp/message/", json=request, headers=MCP_HEADERS)

    assert response.status_code == 200, response.text
    assert response.json()["result"]["serverInfo"]["name"] == "sites"


def test_default_config() -> None:
    server = MenuMcpServer(None, make_site_menu())
    assert server.config.name == "yeahno"
    assert server.mcp_server.name == "yeahno"

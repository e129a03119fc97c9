"""Shared menus and assertions for the yeahno test suite."""

from __future__ import annotations

import json

from typing import Any

from mcp import types

from yeahno import Input, Option, Select

SECRET = "db password hunter2"


def echo_handler(ctx: Any, value: Any, fields: dict[str, str]) -> dict[str, Any]:
    return {"action": value, "fields": fields}


def failing_handler(ctx: Any, value: Any, fields: dict[str, str]) -> Any:
    raise RuntimeError(SECRET)


async def async_echo_handler(ctx: Any, value: Any, fields: dict[str, str]) -> dict[str, Any]:
    return {"action": value, "fields": fields, "async": True}


def make_site_menu(handler: Any = echo_handler, **overrides: Any) -> Select:
    """Two exposed options with fields, plus one option that is not exposed."""
    add = (
        Option("Add site", "add")
        .with_description("Add a site")
        .with_fields(
            Input(key="domain", title="Domain", format="domain"),
            Input(key="notes", title="Notes", required=False, char_limit=20),
        )
        .with_mcp()
    )
    remove = (
        Option("Remove site", "remove")
        .with_description("Remove a site")
        .with_field(Input(key="domain", title="Domain", format="domain"))
        .with_mcp()
    )
    hidden = Option("Debug dump", "debug")
    values: dict[str, Any] = {
        "title": "Site Manager",
        "description": "Manage sites",
        "tool_prefix": "site",
        "options": (add, remove, hidden),
        "handler": handler,
    }
    values.update(overrides)
    return Select(**values)


def parse_single_text_content(content: Any) -> str:
    """Return the text of a response that must hold exactly one text block."""
    assert isinstance(content, list)
    assert len(content) == 1
    block = content[0]
    assert isinstance(block, types.TextContent)
    return block.text


def parse_single_text_content_json(content: Any) -> Any:
    return json.loads(parse_single_text_content(content))


def assert_error_body(response: Any, status_code: int, code: str, message: str | None = None) -> None:
    assert response.status_code == status_code, response.text
    body = response.json()
    assert body["code"] == code
    if message is not None:
        assert body["message"] == message

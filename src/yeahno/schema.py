"""Projection of a ``Select`` menu onto tool identities.

A ``ToolIdentity`` is everything a surface adapter needs to register one
option: its flat tool name, its command-line name, a description and an
ordered list of field schemas. ``input_schema()`` renders the JSON-Schema-like
object shared by the MCP and HTTP surfaces.
"""

from __future__ import annotations

import logging

from typing import Any

from pydantic import BaseModel, ConfigDict

from yeahno.errors import ConfigurationError
from yeahno.formats import schema_format
from yeahno.models import Option, Select
from yeahno.naming import command_name, tool_name

logger = logging.getLogger(__name__)


class FieldSchema(BaseModel):
    """Structural facts about one field: key, description, format, max length, required."""

    model_config = ConfigDict(frozen=True)

    key: str
    description: str = ""
    format: str | None = None
    max_length: int | None = None
    required: bool = True

    def to_property(self) -> dict[str, Any]:
        prop: dict[str, Any] = {"type": "string"}
        if self.description:
            prop["description"] = self.description
        if self.max_length is not None:
            prop["maxLength"] = self.max_length
        if self.format:
            prop["format"] = self.format
        return prop


class ToolIdentity(BaseModel):
    """Derived identity of one exposed option."""

    model_config = ConfigDict(frozen=True)

    name: str
    command_name: str
    display_name: str
    description: str
    fields: tuple[FieldSchema, ...] = ()

    @property
    def required(self) -> list[str]:
        return [f.key for f in self.fields if f.required]

    def input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {f.key: f.to_property() for f in self.fields},
        }
        required = self.required
        if required:
            schema["required"] = required
        return schema


def require_handler(select: Select) -> None:
    if select.handler is None:
        raise ConfigurationError("no handler configured")


def exposed_options(select: Select) -> list[Option]:
    """Options flagged with ``mcp=True``; when none are flagged, every option."""
    flagged = [o for o in select.options if o.mcp]
    return flagged or list(select.options)


def project_option(select: Select, option: Option) -> ToolIdentity:
    if not command_name(option):
        raise ConfigurationError(f"option {option.key!r} does not yield a tool name")
    fields = tuple(
        FieldSchema(
            key=f.resolved_key,
            description=f.title,
            format=schema_format(f.format),
            max_length=f.char_limit,
            required=f.required,
        )
        for f in option.fields
    )
    return ToolIdentity(
        name=tool_name(option, select.tool_prefix),
        command_name=command_name(option),
        display_name=option.key,
        description=option.description or option.key,
        fields=fields,
    )


def project_tools(select: Select) -> list[ToolIdentity]:
    """Project every exposed option of *select*.

    Raises:
        ConfigurationError: when the menu has no handler, or when two exposed
            options share a tool name.
    """
    require_handler(select)
    identities = [project_option(select, o) for o in exposed_options(select)]
    check_unique_names(i.name for i in identities)
    logger.debug("Projected %d tools for menu %r", len(identities), select.title)
    return identities


def check_unique_names(names: Any) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ConfigurationError(f"duplicate tool name: {name}")
        seen.add(name)

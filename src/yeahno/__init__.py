"""yeahno - declare a menu once, serve it as a CLI, MCP tools, HTTP tools and a skill document.

Core model: ``Select`` (menu) of ``Option`` actions, each with ``Input`` fields,
and one handler ``handler(ctx, value, fields)``. Surfaces:

- ``yeahno.cli``: click command group
- ``yeahno.mcp_server``: MCP tools over stdio or streamable HTTP
- ``yeahno.http_tools``: FastAPI ``/tools`` endpoints
- ``yeahno.skill``: SKILL.md document for agents
- ``yeahno.prompt``: interactive terminal prompts
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("yeahno")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

from yeahno.dispatch import ToolBinding, bind_tools
from yeahno.errors import (
    ConfigurationError,
    FieldTooLong,
    FieldValidationError,
    HandlerFailure,
    InvalidFormat,
    InvalidValue,
    MalformedInput,
    MissingRequiredField,
    UnknownToolError,
    YeahnoError,
)
from yeahno.models import Handler, Input, Option, Select, new_options
from yeahno.resolver import MAX_FIELD_LENGTH, resolve_fields
from yeahno.schema import ToolIdentity, project_tools

__all__ = [
    "MAX_FIELD_LENGTH",
    "ConfigurationError",
    "FieldTooLong",
    "FieldValidationError",
    "Handler",
    "HandlerFailure",
    "Input",
    "InvalidFormat",
    "InvalidValue",
    "MalformedInput",
    "MissingRequiredField",
    "Option",
    "Select",
    "ToolBinding",
    "ToolIdentity",
    "UnknownToolError",
    "YeahnoError",
    "__version__",
    "bind_tools",
    "new_options",
    "project_tools",
    "resolve_fields",
]

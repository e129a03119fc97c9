"""Invocation boundary between surface adapters and the menu handler.

Every surface calls ``ToolBinding.invoke`` (or ``ainvoke``) with the raw
argument mapping it received. Validation errors are raised unchanged; any
exception coming out of the handler is replaced by ``HandlerFailure`` so its
text never reaches an external caller.
"""

from __future__ import annotations

import asyncio
import inspect
import json

from dataclasses import dataclass
from typing import Any

from pydantic_core import to_jsonable_python

from yeahno.errors import HandlerFailure
from yeahno.models import Option, Select
from yeahno.resolver import resolve_fields
from yeahno.schema import ToolIdentity, check_unique_names, exposed_options, project_option, require_handler


@dataclass(frozen=True)
class ToolBinding:
    """One exposed option bound to its menu's handler."""

    identity: ToolIdentity
    option: Option
    select: Select

    @property
    def name(self) -> str:
        return self.identity.name

    def resolve(self, arguments: Any) -> dict[str, str]:
        return resolve_fields(self.option.fields, arguments)

    def invoke(self, arguments: Any, ctx: Any = None) -> Any:
        """Validate *arguments* and run the handler synchronously."""
        fields = self.resolve(arguments)
        try:
            result = self.select.handler(ctx, self.option.value, fields)
            if inspect.isawaitable(result):
                result = asyncio.run(_await(result))
        except Exception as e:
            raise HandlerFailure(self.name) from e
        return result

    async def ainvoke(self, arguments: Any, ctx: Any = None) -> Any:
        """Validate *arguments* and run the handler; sync handlers run in a worker thread."""
        fields = self.resolve(arguments)
        handler = self.select.handler
        try:
            if inspect.iscoroutinefunction(handler):
                result = await handler(ctx, self.option.value, fields)
            else:
                result = await asyncio.to_thread(handler, ctx, self.option.value, fields)
                if inspect.isawaitable(result):
                    result = await result
        except Exception as e:
            raise HandlerFailure(self.name) from e
        return result


async def _await(awaitable: Any) -> Any:
    return await awaitable


def bind_tools(select: Select) -> list[ToolBinding]:
    """Bind every exposed option of *select*, in declaration order."""
    require_handler(select)
    bindings = [ToolBinding(project_option(select, o), o, select) for o in exposed_options(select)]
    check_unique_names(b.name for b in bindings)
    return bindings


# ---------------------------------------------------------------------------
# Result serialization
# ---------------------------------------------------------------------------


def result_to_jsonable(result: Any) -> Any:
    """Convert a handler result into plain JSON types for structured surfaces."""
    if isinstance(result, (bytes, bytearray)):
        return bytes(result).decode("utf-8", errors="replace")
    return to_jsonable_python(result, fallback=str)


def result_to_text(result: Any) -> str:
    """Single text block for MCP content: strings verbatim, everything else compact JSON."""
    if isinstance(result, str):
        return result
    if isinstance(result, (bytes, bytearray)):
        return bytes(result).decode("utf-8", errors="replace")
    return json.dumps(result_to_jsonable(result))


def format_cli_output(result: Any) -> str:
    """Line-oriented rendering for the command line."""
    if isinstance(result, str):
        return result
    if isinstance(result, (bytes, bytearray)):
        return bytes(result).decode("utf-8", errors="replace")
    if isinstance(result, (list, tuple)) and all(isinstance(item, str) for item in result):
        return "\n".join(result)
    return json.dumps(result_to_jsonable(result), indent=2)

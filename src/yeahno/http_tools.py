"""Plain HTTP tool endpoints served by FastAPI.

Routes (relative to the mount prefix):

    GET  /tools             service description and every tool document
    GET  /tools/{name}      one tool document
    POST /tools/{name}/run  run a tool with a JSON object body

Error bodies are ``{"code": ..., "message": ...}``.
"""

from __future__ import annotations

import logging

from collections.abc import Iterable
from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from yeahno.dispatch import ToolBinding, bind_tools, result_to_jsonable
from yeahno.errors import ConfigurationError, FieldValidationError, HandlerFailure, MalformedInput
from yeahno.models import Select
from yeahno.resolver import parse_arguments
from yeahno.utils.debug_logger import DebugLogger

logger = logging.getLogger(__name__)


def tap_description(select: Select) -> str:
    """Service description: ``"title - description"``, or whichever is set."""
    if select.title and select.description:
        return f"{select.title} - {select.description}"
    return select.title or select.description


def service_description(selects: Iterable[Select]) -> str:
    """Descriptions of several menus joined with ``"; "``, skipping empty ones."""
    return "; ".join(d for d in (tap_description(s) for s in selects) if d)


def tool_document(binding: ToolBinding) -> dict[str, Any]:
    return {
        "name": binding.name,
        "description": binding.identity.description,
        "parameters": binding.identity.input_schema(),
    }


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": code, "message": message})


def build_router(*selects: Select) -> APIRouter:
    """Build the ``/tools`` routes for one or more menus.

    Raises:
        ConfigurationError: when a menu has no handler or tool names collide.
    """
    bindings: dict[str, ToolBinding] = {}
    for select in selects:
        for binding in bind_tools(select):
            if binding.name in bindings:
                raise ConfigurationError(f"duplicate tool name: {binding.name}")
            bindings[binding.name] = binding
    description = service_description(selects)

    router = APIRouter(tags=["tools"])

    @router.get("/tools")
    async def list_tools() -> JSONResponse:
        return JSONResponse({"description": description, "tools": [tool_document(b) for b in bindings.values()]})

    @router.get("/tools/{name}")
    async def describe_tool(name: str) -> JSONResponse:
        binding = bindings.get(name)
        if binding is None:
            return _error(404, "not_found", f"unknown tool: {name}")
        return JSONResponse(tool_document(binding))

    @router.post("/tools/{name}/run")
    async def run_tool(name: str, request: Request) -> JSONResponse:
        binding = bindings.get(name)
        if binding is None:
            return _error(404, "not_found", f"unknown tool: {name}")
        try:
            arguments = parse_arguments(await request.body())
        except MalformedInput as e:
            return _error(400, "invalid_request", str(e))
        try:
            with DebugLogger.trace_tool("http", binding.name):
                result = await binding.ainvoke(arguments, request)
        except FieldValidationError as e:
            return _error(400, "invalid_arguments", str(e))
        except HandlerFailure as e:
            logger.warning("Tool %s handler raised %s", binding.name, type(e.__cause__).__name__)
            return _error(500, "tool_error", str(e))
        return JSONResponse({"result": result_to_jsonable(result)})

    return router


def register_http(app: FastAPI, *selects: Select, prefix: str = "") -> None:
    """Mount the tool routes of *selects* on an existing FastAPI app."""
    app.include_router(build_router(*selects), prefix=prefix)


def create_app(*selects: Select) -> FastAPI:
    """Standalone FastAPI app serving only the tool routes."""
    title = selects[0].title if selects and selects[0].title else "yeahno"
    app = FastAPI(title=title, description=service_description(selects))
    register_http(app, *selects)
    return app

"""yeahno launcher.

Usage::

    yeahno skill myapp.menus:notes
    yeahno tools myapp.menus:notes
    yeahno run myapp.menus:notes
    yeahno serve myapp.menus:notes myapp.menus:tasks --transport http --port 9000

``TARGET`` is ``module:attribute`` naming a ``Select``, or a zero-argument
callable returning one.
"""

from __future__ import annotations

import asyncio
import importlib
import json
import logging
import os
import sys

from pathlib import Path
from typing import Any

import click

from yeahno import __version__
from yeahno.config import ConfigManager
from yeahno.dispatch import bind_tools, format_cli_output
from yeahno.errors import ConfigurationError
from yeahno.http_tools import tool_document
from yeahno.models import Select
from yeahno.skill import print_skill
from yeahno.utils.debug_logger import DebugLogger

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


def load_select(target: str, app_dir: str | None = ".") -> Select:
    """Import ``module:attribute`` and return the ``Select`` it names."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"expected module:attribute, got {target!r}", param_hint="TARGET")
    if app_dir is not None:
        path = os.path.abspath(app_dir)
        if path not in sys.path:
            sys.path.insert(0, path)
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name!r}: {e}", param_hint="TARGET") from e
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise click.BadParameter(f"{module_name!r} has no attribute {attr!r}", param_hint="TARGET") from None
    if callable(obj) and not isinstance(obj, Select):
        obj = obj()
    if not isinstance(obj, Select):
        raise click.BadParameter(f"{target!r} is not a Select", param_hint="TARGET")
    return obj


def _configuration_error(e: ConfigurationError) -> click.ClickException:
    return click.ClickException(f"invalid menu: {e}")


app_dir_option = click.option(
    "--app-dir",
    default=".",
    show_default=True,
    help="Directory prepended to sys.path before importing TARGET",
)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, prog_name="yeahno")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Serve declarative menus as CLI commands, MCP tools, HTTP tools and agent skills."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, stream=sys.stderr)
    if verbose:
        DebugLogger.set_debug_enabled(True)


@main.command()
@click.argument("target")
@app_dir_option
def skill(target: str, app_dir: str) -> None:
    """Print the SKILL.md document for TARGET."""
    select = load_select(target, app_dir)
    try:
        print_skill(select)
    except ConfigurationError as e:
        raise _configuration_error(e) from None


@main.command()
@click.argument("target")
@app_dir_option
def tools(target: str, app_dir: str) -> None:
    """Print the tool definitions of TARGET as JSON."""
    select = load_select(target, app_dir)
    try:
        documents = [tool_document(b) for b in bind_tools(select)]
    except ConfigurationError as e:
        raise _configuration_error(e) from None
    click.echo(json.dumps(documents, indent=2))


@main.command()
@click.argument("target")
@app_dir_option
def run(target: str, app_dir: str) -> None:
    """Run TARGET interactively in the terminal."""
    select = load_select(target, app_dir)
    result = select.run()
    click.echo(format_cli_output(result))


@main.command()
@click.argument("targets", nargs=-1, required=True, metavar="TARGET...")
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default="stdio",
    show_default=True,
    help="stdio for agent hosts that spawn the process, http for FastAPI + streamable MCP",
)
@click.option("--host", default=None, help="HTTP bind host (env: YEAHNO_HOST)")
@click.option("--port", type=int, default=None, help="HTTP port (env: YEAHNO_PORT)")
@click.option("--name", default=None, help="Server name reported to MCP clients (env: YEAHNO_SERVER_NAME)")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON configuration file",
)
@app_dir_option
def serve(
    targets: tuple[str, ...],
    transport: str,
    host: str | None,
    port: int | None,
    name: str | None,
    config_file: Path | None,
    app_dir: str,
) -> None:
    """Serve one or more menus over MCP (and HTTP tool endpoints with --transport http)."""
    from yeahno.mcp_server import MenuMcpServer  # noqa: PLC0415

    selects = [load_select(t, app_dir) for t in targets]
    config = ConfigManager(config_file).server_config(host=host, port=port, name=name)
    try:
        server = MenuMcpServer(config, *selects)
    except ConfigurationError as e:
        raise _configuration_error(e) from None

    if transport == "stdio":
        asyncio.run(server.run_stdio())
    else:
        server.run_http()


if __name__ == "__main__":
    main()

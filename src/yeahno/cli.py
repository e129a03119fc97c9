"""Command-line surface built with click.

The menu becomes a ``click.Group`` (named after the tool prefix, else the
snake_case title) with one subcommand per exposed option and one ``--flag``
per field::

    site add --domain example.com --notes "first site"

Flags are never marked required at the click level: only flags that were
actually passed are handed to the shared resolver, so the CLI reports missing
and invalid fields exactly like every other surface.
"""

from __future__ import annotations

import logging

from typing import Any

import click

from yeahno.dispatch import ToolBinding, bind_tools, format_cli_output
from yeahno.errors import ConfigurationError, FieldValidationError, HandlerFailure, MissingRequiredField
from yeahno.models import Input, Select
from yeahno.naming import flag_name, root_command_name
from yeahno.utils.debug_logger import DebugLogger

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}

# Required flags shown inline in the usage line before collapsing to "(+N more)".
MAX_SHOWN_FLAGS = 2


def to_cli(select: Select) -> click.Group:
    """Build a root command group for *select*."""
    root = click.Group(
        name=root_command_name(select.title, select.tool_prefix),
        help=select.description or None,
        context_settings=CONTEXT_SETTINGS,
    )
    for cmd in to_subcommands(select):
        root.add_command(cmd)
    return root


def to_subcommands(select: Select) -> list[click.Command]:
    """Build one subcommand per exposed option, without a root wrapper."""
    return [build_subcommand(b) for b in bind_tools(select)]


def register_cli(parent: click.Group, select: Select) -> None:
    """Attach the subcommands of *select* to an existing group."""
    for cmd in to_subcommands(select):
        parent.add_command(cmd)


def _usage(binding: ToolBinding) -> str:
    fields = binding.option.fields
    required = [f"--{flag_name(f.resolved_key)} <value>" for f in fields if f.required]
    parts = required[:MAX_SHOWN_FLAGS]
    if len(required) > MAX_SHOWN_FLAGS:
        parts.append(f"(+{len(required) - MAX_SHOWN_FLAGS} more)")
    if any(not f.required for f in fields):
        parts.append("[flags]")
    return " ".join(parts)


def _flag_help(field: Input) -> str:
    text = field.description or field.title
    if field.required:
        text += " (required)"
    return text


def _usage_message(error: FieldValidationError) -> str:
    if isinstance(error, MissingRequiredField):
        return f"required flag --{flag_name(error.key)} not provided"
    return str(error)


def _check_flags(binding: ToolBinding) -> None:
    seen: set[str] = set()
    for field in binding.option.fields:
        flag = flag_name(field.resolved_key)
        if not flag or f"--{flag}" in CONTEXT_SETTINGS["help_option_names"] or flag in seen:
            raise ConfigurationError(
                f"field {field.resolved_key!r} of {binding.identity.command_name!r} cannot be used as flag --{flag}"
            )
        seen.add(flag)


def build_subcommand(binding: ToolBinding) -> click.Command:
    _check_flags(binding)
    # click parameter names must be identifiers, field keys need not be.
    dests: dict[str, str] = {}
    params: list[click.Parameter] = []
    for index, field in enumerate(binding.option.fields):
        dest = f"field_{index}"
        dests[dest] = field.resolved_key
        params.append(
            click.Option(
                [f"--{flag_name(field.resolved_key)}", dest],
                default=None,
                metavar="<value>",
                help=_flag_help(field),
            )
        )

    def callback(**kwargs: Any) -> None:
        ctx = click.get_current_context()
        arguments = {key: kwargs[dest] for dest, key in dests.items() if kwargs.get(dest) is not None}
        try:
            with DebugLogger.trace_tool("cli", binding.name):
                result = binding.invoke(arguments, ctx)
        except FieldValidationError as e:
            raise click.UsageError(_usage_message(e), ctx=ctx) from None
        except HandlerFailure as e:
            logger.warning("Command %s handler raised %s", binding.identity.command_name, type(e.__cause__).__name__)
            raise click.ClickException(str(e)) from None
        click.echo(format_cli_output(result))

    return click.Command(
        name=binding.identity.command_name,
        callback=callback,
        params=params,
        help=binding.identity.description,
        short_help=binding.identity.description,
        options_metavar=_usage(binding),
        context_settings=CONTEXT_SETTINGS,
    )

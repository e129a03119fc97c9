"""Interactive terminal surface built on click prompts.

``run_select`` lists the menu options, asks for a choice, prompts for each
field of the chosen option and then calls the handler in-process. Field
values go through the same ``check_value`` checks as every other surface; an
invalid value is reported and asked for again.
"""

from __future__ import annotations

import asyncio
import inspect
import logging

from dataclasses import dataclass
from typing import Any

import click

from yeahno.errors import ConfigurationError, FieldValidationError
from yeahno.models import Input, Option, Select
from yeahno.resolver import check_value

logger = logging.getLogger(__name__)


def _describe(index: int, option: Option) -> str:
    line = f"  {index}. {option.key}"
    if option.description:
        line += f" - {option.description}"
    return line


def choose_option(select: Select) -> Option:
    """Prompt until an option passes the menu's ``value_validator``."""
    options = select.options
    if select.title:
        click.echo(select.title)
    if select.description:
        click.echo(select.description)
    for index, option in enumerate(options, 1):
        click.echo(_describe(index, option))

    default = next((i for i, o in enumerate(options, 1) if o.selected), None)
    while True:
        index = click.prompt("Select an option", type=click.IntRange(1, len(options)), default=default)
        option = options[index - 1]
        if select.value_validator is None:
            return option
        try:
            select.value_validator(option.value)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            continue
        return option


def prompt_field(field: Input) -> str:
    """Ask for one field value; an empty string means an optional field was skipped."""

    def convert(value: str) -> str:
        if not value and not field.required:
            return ""
        try:
            return check_value(field, value)
        except FieldValidationError as e:
            raise click.BadParameter(str(e)) from None

    label = field.resolved_title
    if field.placeholder:
        label += f" ({field.placeholder})"
    if field.required:
        return click.prompt(label, value_proc=convert)
    return click.prompt(label, default="", show_default=False, value_proc=convert)


def prompt_fields(option: Option) -> dict[str, str]:
    values: dict[str, str] = {}
    for field in option.fields:
        value = prompt_field(field)
        if value:
            values[field.resolved_key] = value
    return values


@dataclass(frozen=True)
class PromptOutcome:
    """What an interactive run chose and what the handler returned."""

    option: Option
    fields: dict[str, str]
    result: Any = None

    @property
    def value(self) -> Any:
        return self.option.value


def prompt_select(select: Select, ctx: Any = None) -> PromptOutcome:
    """Run the menu interactively and report the chosen option alongside the handler result.

    ``result`` is ``None`` when no handler is set. Exceptions raised by the
    handler propagate unchanged.
    """
    if not select.options:
        raise ConfigurationError("menu has no options")
    option = choose_option(select)
    fields = prompt_fields(option)
    if select.handler is None:
        return PromptOutcome(option=option, fields=fields)

    logger.debug("Running option %r interactively", option.key)
    result = select.handler(ctx, option.value, fields)
    if inspect.isawaitable(result):
        result = asyncio.run(_await(result))
    return PromptOutcome(option=option, fields=fields, result=result)


def run_select(select: Select, ctx: Any = None) -> Any:
    """Returns the handler result, or the chosen value when no handler is set."""
    outcome = prompt_select(select, ctx)
    if select.handler is None:
        return outcome.value
    return outcome.result


async def _await(awaitable: Any) -> Any:
    return await awaitable

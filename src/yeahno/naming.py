"""Identifier normalization for every surface.

Two canonical forms are derived from human-readable labels:

- snake_case machine names, used for field keys and flat tool names
  (``"Add note"`` -> ``"add_note"``)
- kebab-case names, used for command-line subcommands and flags
  (``"Add note"`` -> ``"add-note"``)

Both functions are total and idempotent.

Examples::

    to_snake_case("Task title")        # -> "task_title"
    to_snake_case("  Add -- Note!! ")  # -> "add_note"
    to_kebab_case("task_id")           # -> "task-id"
    to_snake_case("")                  # -> ""
"""

from __future__ import annotations

import re

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from yeahno.models import Input, Option

_SEPARATOR_RUN = re.compile(r"[^a-z0-9]+")


def _normalize(s: str, sep: str) -> str:
    return _SEPARATOR_RUN.sub(sep, s.lower()).strip(sep)


def to_snake_case(s: str) -> str:
    """Lowercase *s* and collapse every run of non ``[a-z0-9]`` characters into ``_``."""
    return _normalize(s, "_")


def to_kebab_case(s: str) -> str:
    """Lowercase *s* and collapse every run of non ``[a-z0-9]`` characters into ``-``."""
    return _normalize(s, "-")


def resolve_field_key(field: Input) -> str:
    return field.key or to_snake_case(field.title)


def tool_name(option: Option, prefix: str | None = None) -> str:
    """Flat tool identifier used by the MCP, HTTP and skill surfaces."""
    name = to_snake_case(option.tool_name or option.key)
    if prefix:
        return f"{prefix}_{name}"
    return name


def command_name(option: Option) -> str:
    """Subcommand name on the command line; the prefix becomes the root command instead."""
    return to_kebab_case(option.tool_name or option.key)


def root_command_name(title: str, prefix: str | None = None) -> str:
    if prefix:
        return prefix
    return to_snake_case(title)


def flag_name(key: str) -> str:
    return to_kebab_case(key)

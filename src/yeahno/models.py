"""Declarative menu model: ``Input`` fields, ``Option`` actions and the ``Select`` menu.

All three are frozen pydantic models. Every ``with_*`` method returns a new,
re-validated instance, so an Option used as a template in several menus is
never shared mutable state.

Example::

    menu = Select(
        title="Notes",
        tool_prefix="note",
        options=[
            Option("Add note", "add")
            .with_field(Input(key="title", title="Title"))
            .with_field(Input(key="body", title="Body", required=False))
            .with_mcp(True),
            Option("List notes", "list").with_mcp(True),
        ],
        handler=handle,
    )
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

from yeahno.errors import ConfigurationError
from yeahno.naming import resolve_field_key

if TYPE_CHECKING:
    import click

    from yeahno.mcp_server.tool_providers import ToolDef
    from yeahno.skill import Skill

T = TypeVar("T")

Handler = Callable[[Any, Any, dict[str, str]], Any]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    def _replace(self, **changes: Any) -> Any:
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        return type(self)(**data)


class Input(_FrozenModel):
    """A single string input slot attached to an Option."""

    key: str = ""
    title: str = ""
    description: str = ""
    placeholder: str = ""
    required: bool = True
    format: str | None = None
    char_limit: int | None = None
    validator: Callable[[str], Any] | None = None

    @model_validator(mode="after")
    def check_key(self) -> Input:
        if not resolve_field_key(self):
            raise ConfigurationError("input needs a key or a title that yields a non-empty key")
        if self.char_limit is not None and self.char_limit <= 0:
            raise ConfigurationError(f"char_limit for {resolve_field_key(self)} must be positive")
        return self

    @property
    def resolved_key(self) -> str:
        return resolve_field_key(self)

    @property
    def resolved_title(self) -> str:
        return self.title or self.resolved_key


class Option(_FrozenModel, Generic[T]):
    """One selectable action. ``value`` is compared by equality, never identity."""

    key: str
    value: T
    description: str = ""
    tool_name: str | None = None
    mcp: bool = False
    fields: tuple[Input, ...] = ()
    selected: bool = False

    def __init__(self, key: str, value: T, **data: Any) -> None:
        super().__init__(key=key, value=value, **data)

    @model_validator(mode="after")
    def check_unique_keys(self) -> Option[T]:
        seen: set[str] = set()
        for field in self.fields:
            key = field.resolved_key
            if key in seen:
                raise ConfigurationError(f"option {self.key!r} declares field {key!r} more than once")
            seen.add(key)
        return self

    def __str__(self) -> str:
        return self.key

    def with_field(self, field: Input) -> Option[T]:
        return self._replace(fields=(*self.fields, field))

    def with_fields(self, *fields: Input) -> Option[T]:
        return self._replace(fields=(*self.fields, *fields))

    def with_description(self, description: str) -> Option[T]:
        return self._replace(description=description)

    def with_tool_name(self, name: str) -> Option[T]:
        return self._replace(tool_name=name)

    def with_mcp(self, include: bool = True) -> Option[T]:
        """Mark the option as exposed on the CLI, MCP, HTTP and skill surfaces."""
        return self._replace(mcp=include)

    def with_selected(self, selected: bool = True) -> Option[T]:
        return self._replace(selected=selected)


def new_options(*values: T) -> list[Option[T]]:
    """Build one Option per value, keyed by ``str(value)``."""
    return [Option(str(v), v) for v in values]


class Select(_FrozenModel, Generic[T]):
    """Root menu declaration plus the single handler that executes every option."""

    title: str = ""
    description: str = ""
    options: tuple[Option, ...] = ()
    tool_prefix: str | None = None
    handler: Handler | None = None
    value_validator: Callable[[Any], Any] | None = None

    def with_options(self, *options: Option[T]) -> Select[T]:
        return self._replace(options=options)

    def with_title(self, title: str) -> Select[T]:
        return self._replace(title=title)

    def with_description(self, description: str) -> Select[T]:
        return self._replace(description=description)

    def with_tool_prefix(self, prefix: str) -> Select[T]:
        return self._replace(tool_prefix=prefix)

    def with_handler(self, handler: Handler) -> Select[T]:
        return self._replace(handler=handler)

    def with_value_validator(self, validator: Callable[[T], Any]) -> Select[T]:
        return self._replace(value_validator=validator)

    def selected_option(self, value: T) -> Option[T] | None:
        for option in self.options:
            if option.value == value:
                return option
        return None

    # ------------------------------------------------------------------
    # Surface conveniences
    # ------------------------------------------------------------------

    def to_tools(self) -> list[ToolDef]:
        from yeahno.mcp_server.tool_providers import to_tools  # noqa: PLC0415

        return to_tools(self)

    def to_cli(self) -> click.Group:
        from yeahno.cli import to_cli  # noqa: PLC0415

        return to_cli(self)

    def to_subcommands(self) -> list[click.Command]:
        from yeahno.cli import to_subcommands  # noqa: PLC0415

        return to_subcommands(self)

    def to_skill(self) -> Skill:
        from yeahno.skill import to_skill  # noqa: PLC0415

        return to_skill(self)

    def run(self, ctx: Any = None) -> Any:
        """Prompt interactively in the terminal; see ``yeahno.prompt.run_select``."""
        from yeahno.prompt import run_select  # noqa: PLC0415

        return run_select(self, ctx)

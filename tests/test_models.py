from __future__ import annotations

import pytest

from pydantic import ValidationError

from yeahno import ConfigurationError, Input, Option, Select, new_options

from tests.helpers import echo_handler

pytestmark = pytest.mark.unit


class TestInput:
    def test_defaults(self) -> None:
        field = Input(title="Task title")
        assert field.required is True
        assert field.resolved_key == "task_title"
        assert field.resolved_title == "Task title"

    def test_title_falls_back_to_key(self) -> None:
        assert Input(key="id").resolved_title == "id"

    @pytest.mark.parametrize("kwargs", [{}, {"title": "!!!"}, {"key": "", "title": ""}])
    def test_needs_a_usable_key(self, kwargs: dict[str, str]) -> None:
        with pytest.raises(ConfigurationError):
            Input(**kwargs)

    @pytest.mark.parametrize("limit", [0, -5])
    def test_char_limit_must_be_positive(self, limit: int) -> None:
        with pytest.raises(ConfigurationError, match="must be positive"):
            Input(key="name", char_limit=limit)

    def test_is_frozen(self) -> None:
        field = Input(key="name")
        with pytest.raises(ValidationError):
            field.key = "other"  # type: ignore[misc]


class TestOption:
    def test_builders_copy_on_write(self) -> None:
        template = Option("Add", "add")
        exposed = template.with_mcp().with_description("Add it").with_field(Input(key="name"))

        assert template.mcp is False
        assert template.description == ""
        assert template.fields == ()
        assert exposed.mcp is True
        assert exposed.description == "Add it"
        assert [f.key for f in exposed.fields] == ["name"]

    def test_with_fields_appends_in_order(self) -> None:
        option = Option("Add", "add").with_field(Input(key="a")).with_fields(Input(key="b"), Input(key="c"))
        assert [f.resolved_key for f in option.fields] == ["a", "b", "c"]

    def test_duplicate_field_keys_rejected(self) -> None:
        option = Option("Add", "add").with_field(Input(key="task_title"))
        with pytest.raises(ConfigurationError, match="more than once"):
            option.with_field(Input(title="Task title"))

    def test_tool_name_and_selected(self) -> None:
        option = Option("Add", "add").with_tool_name("create").with_selected()
        assert option.tool_name == "create"
        assert option.selected is True
        assert str(option) == "Add"

    def test_new_options_keys_by_str(self) -> None:
        options = new_options(1, 2, 3)
        assert [o.key for o in options] == ["1", "2", "3"]
        assert [o.value for o in options] == [1, 2, 3]


class TestSelect:
    def test_builders_copy_on_write(self) -> None:
        base = Select(title="Tasks")
        menu = (
            base.with_options(Option("Add", "add"), Option("List", "list"))
            .with_tool_prefix("task")
            .with_description("Task manager")
            .with_handler(echo_handler)
        )

        assert base.options == ()
        assert base.handler is None
        assert menu.tool_prefix == "task"
        assert menu.description == "Task manager"
        assert menu.handler is echo_handler
        assert [o.key for o in menu.options] == ["Add", "List"]

    def test_options_accept_a_list(self) -> None:
        menu = Select(title="Tasks", options=[Option("Add", "add")])
        assert isinstance(menu.options, tuple)

    def test_selected_option_matches_by_value(self) -> None:
        menu = Select(title="Numbers", options=new_options(1, 2, 3))
        assert menu.selected_option(2).key == "2"
        assert menu.selected_option(9) is None

    def test_title_and_value_validator(self) -> None:
        def no_zero(value: int) -> None:
            if value == 0:
                raise ValueError("zero is not allowed")

        menu = Select().with_title("Numbers").with_value_validator(no_zero)
        assert menu.title == "Numbers"
        assert menu.value_validator is no_zero

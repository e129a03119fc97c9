from __future__ import annotations

import pytest

from yeahno import Input, Option
from yeahno.naming import command_name, flag_name, resolve_field_key, root_command_name, to_kebab_case, to_snake_case, tool_name

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("label", "snake", "kebab"),
    [
        ("Task title", "task_title", "task-title"),
        ("  Add -- Note!! ", "add_note", "add-note"),
        ("HTTPServer2", "httpserver2", "httpserver2"),
        ("already_snake", "already_snake", "already-snake"),
        ("café menu", "caf_menu", "caf-menu"),
        ("!!!", "", ""),
        ("", "", ""),
    ],
)
def test_normalizer_forms(label: str, snake: str, kebab: str) -> None:
    assert to_snake_case(label) == snake
    assert to_kebab_case(label) == kebab


@pytest.mark.parametrize("label", ["Add -- Note", "x__y", "Some Title 2"])
def test_normalizer_is_idempotent(label: str) -> None:
    assert to_snake_case(to_snake_case(label)) == to_snake_case(label)
    assert to_kebab_case(to_kebab_case(label)) == to_kebab_case(label)


def test_field_key_prefers_explicit_key() -> None:
    assert resolve_field_key(Input(key="id", title="Task ID")) == "id"
    assert resolve_field_key(Input(title="Task ID")) == "task_id"


def test_tool_name_uses_prefix_and_override() -> None:
    option = Option("Add Task", "add")
    assert tool_name(option) == "add_task"
    assert tool_name(option, "todo") == "todo_add_task"
    assert tool_name(option.with_tool_name("create-item"), "todo") == "todo_create_item"


def test_command_names_are_kebab_case() -> None:
    option = Option("Add Task", "add")
    assert command_name(option) == "add-task"
    assert command_name(option.with_tool_name("Create Item")) == "create-item"
    assert flag_name("due_date") == "due-date"


def test_root_command_name() -> None:
    assert root_command_name("Task Manager") == "task_manager"
    assert root_command_name("Task Manager", "todo") == "todo"

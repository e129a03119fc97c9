"""Task manager demo: one menu served as a CLI, MCP tools, HTTP tools and a skill.

Run the CLI::

    python examples/tasks.py list-tasks
    python examples/tasks.py add-task --title "Fix bug"
    python examples/tasks.py --agent-skill-md

Serve it::

    yeahno serve examples.tasks:menu --transport http --port 8080
    yeahno run examples.tasks:menu
"""

from __future__ import annotations

from typing import Any

import click

from yeahno import Input, Option, Select

TASKS = ["Buy milk", "Fix bug", "Write docs"]


def handle(ctx: Any, action: str, fields: dict[str, str]) -> Any:
    if action == "list":
        return list(TASKS)
    if action == "add":
        return f"Added: {fields['title']}"
    if action == "complete":
        return f"Completed task {fields['id']}"
    if action == "settings":
        return "Opening settings..."
    raise ValueError(f"unknown action: {action}")


menu = Select(
    title="Task Manager",
    description="Select an action",
    tool_prefix="task",
    options=[
        Option("List tasks", "list").with_tool_name("list-tasks").with_description("Show all tasks").with_mcp(),
        Option("Add task", "add")
        .with_tool_name("add-task")
        .with_description("Create a new task")
        .with_field(Input(key="title", title="Task title", char_limit=200))
        .with_field(Input(key="priority", title="Priority", required=False))
        .with_mcp(),
        Option("Complete task", "complete")
        .with_tool_name("complete-task")
        .with_description("Mark task as done")
        .with_field(Input(key="id", title="Task ID"))
        .with_mcp(),
        Option("Settings", "settings").with_description("Interactive only"),
    ],
    handler=handle,
)


def build_cli() -> click.Group:
    cli = menu.to_cli()
    (
        menu.to_skill()
        .workflow(
            "List existing tasks with `task_list_tasks` to show current state",
            "Add new tasks with `task_add_task`; priority defaults to normal",
            "Complete tasks with `task_complete_task` using the task ID from the list",
        )
        .guideline("Priority values: low, normal, high, urgent")
        .section("Error Handling", "If a task ID is not found, call task_list_tasks first to get valid IDs.")
        .attach(cli)
    )
    return cli


if __name__ == "__main__":
    build_cli()()

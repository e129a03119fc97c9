"""Agent skill document (SKILL.md) generated from a menu.

The document lists every exposed tool with its field table, a workflow and a
set of guidelines, and can be printed by any click command through
``Skill.attach``::

    skill = to_skill(menu).workflow("List tasks first").guideline("IDs are numeric")
    skill.attach(root_group)   # adds --agent-skill-md
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import click

from yeahno.dispatch import bind_tools
from yeahno.models import Select
from yeahno.naming import to_kebab_case

SKILL_FLAG = "--agent-skill-md"
SKILL_FLAG_HELP = "Print agent skill definition (SKILL.md) to stdout"
ERROR_GUIDELINE = "Handle errors gracefully and inform the user"


@dataclass(frozen=True)
class SkillField:
    key: str
    required: bool
    format: str
    title: str


@dataclass(frozen=True)
class SkillTool:
    name: str
    description: str
    fields: tuple[SkillField, ...] = ()


@dataclass
class Skill:
    """Mutable SKILL.md builder; the chainable methods return ``self``."""

    name: str
    title: str
    summary: str
    tools: list[SkillTool] = field(default_factory=list)
    workflows: list[str] = field(default_factory=list)
    guidelines: list[str] = field(default_factory=list)
    sections: list[tuple[str, str]] = field(default_factory=list)

    def description(self, text: str) -> Skill:
        self.summary = text
        return self

    def workflow(self, *steps: str) -> Skill:
        self.workflows.extend(steps)
        return self

    def guideline(self, *items: str) -> Skill:
        self.guidelines.extend(items)
        return self

    def section(self, heading: str, body: str) -> Skill:
        self.sections.append((heading, body))
        return self

    def attach(self, command: click.Command) -> Skill:
        """Add an eager ``--agent-skill-md`` flag that prints the document and exits."""

        def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if not value or ctx.resilient_parsing:
                return
            click.echo(self.render(), nl=False)
            ctx.exit()

        command.params.append(
            click.Option(
                [SKILL_FLAG],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=show,
                help=SKILL_FLAG_HELP,
            )
        )
        return self

    def render(self) -> str:
        lines: list[str] = ["---", f"name: {self.name}", f"description: {self.summary}", "---", ""]
        lines += [f"# {self.title}", "", "## Available Tools", ""]
        for tool in self.tools:
            lines += [f"### `{tool.name}`", "", tool.description, ""]
            if tool.fields:
                lines.append("| Field | Required | Format | Description |")
                lines.append("|-------|----------|--------|-------------|")
                for f in tool.fields:
                    lines.append(f"| `{f.key}` | {'yes' if f.required else 'no'} | {f.format} | {f.title} |")
                lines.append("")

        lines += ["## Workflow", ""]
        if self.workflows:
            lines += [f"{i}. {step}" for i, step in enumerate(self.workflows, 1)]
        else:
            lines += [f"{i}. **{tool.description}**: `{tool.name}`" for i, tool in enumerate(self.tools, 1)]
        lines.append("")

        lines += ["## Guidelines", ""]
        lines += [f"- {g}" for g in self.guidelines]
        if self.guidelines:
            lines.append("")

        for heading, body in self.sections:
            lines += [f"## {heading}", "", body, ""]
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()


def _join_actions(actions: list[str]) -> str:
    if len(actions) == 1:
        return actions[0]
    return ", ".join(actions[:-1]) + ", or " + actions[-1]


def skill_description(select: Select, descriptions: list[str]) -> str:
    text = select.description or select.title
    if descriptions:
        text += " Use when the user needs to: " + _join_actions([d.lower() for d in descriptions]) + "."
    return text


def default_guidelines(tools: list[SkillTool], formats: dict[str, str]) -> list[str]:
    format_notes: list[str] = []
    required: list[str] = []
    for tool in tools:
        for f in tool.fields:
            note = f"`{f.key}` ({formats[f.key]} format)" if f.key in formats else ""
            if note and note not in format_notes:
                format_notes.append(note)
            if f.required and f"`{f.key}`" not in required:
                required.append(f"`{f.key}`")

    guidelines: list[str] = []
    if format_notes:
        guidelines.append("Validate format before submission: " + ", ".join(format_notes))
    if required:
        guidelines.append("Always provide required fields: " + ", ".join(required))
    guidelines.append(ERROR_GUIDELINE)
    return guidelines


def to_skill(select: Select) -> Skill:
    """Build the skill document for *select*.

    Raises:
        ConfigurationError: when the menu has no handler.
    """
    tools: list[SkillTool] = []
    formats: dict[str, str] = {}
    for binding in bind_tools(select):
        fields: list[SkillField] = []
        for f in binding.option.fields:
            key = f.resolved_key
            if f.format:
                formats.setdefault(key, f.format)
            fields.append(SkillField(key=key, required=f.required, format=f.format or "string", title=f.resolved_title))
        tools.append(SkillTool(name=binding.name, description=binding.identity.description, fields=tuple(fields)))

    return Skill(
        name=to_kebab_case(select.tool_prefix or select.title),
        title=select.title,
        summary=skill_description(select, [t.description for t in tools]),
        tools=tools,
        guidelines=default_guidelines(tools, formats),
    )


def print_skill(select: Select, **kwargs: Any) -> None:
    """Echo the skill document of *select*; *kwargs* are passed to ``click.echo``."""
    click.echo(to_skill(select).render(), nl=False, **kwargs)

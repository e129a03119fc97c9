from __future__ import annotations

import json

from typing import Any

import click
import pytest

from click.testing import CliRunner, Result

from yeahno import ConfigurationError, Input, Option, Select, new_options
from yeahno.prompt import prompt_select, run_select

from tests.helpers import SECRET, async_echo_handler, failing_handler, make_site_menu

pytestmark = pytest.mark.unit


def _run(menu: Select, text: str, ctx: Any = None) -> Result:
    @click.command()
    def interactive() -> None:
        click.echo("RESULT " + json.dumps(run_select(menu, ctx)))

    return CliRunner().invoke(interactive, input=text)


def _result(result: Result) -> Any:
    line = next(line for line in result.output.splitlines() if line.startswith("RESULT "))
    return json.loads(line[len("RESULT ") :])


def test_lists_options_and_runs_handler() -> None:
    result = _run(make_site_menu(), "1\nexample.com\n\n")

    assert result.exit_code == 0, result.output
    assert "Site Manager" in result.output
    assert "  1. Add site - Add a site" in result.output
    assert "  3. Debug dump" in result.output
    assert _result(result) == {"action": "add", "fields": {"domain": "example.com"}}


def test_optional_field_value_is_kept() -> None:
    result = _run(make_site_menu(), "1\nexample.com\nfirst site\n")
    assert _result(result)["fields"] == {"domain": "example.com", "notes": "first site"}


def test_invalid_value_is_asked_again() -> None:
    result = _run(make_site_menu(), "2\nlocalhost\nexample.com\n")

    assert "Error: invalid domain: invalid domain format" in result.output
    assert _result(result) == {"action": "remove", "fields": {"domain": "example.com"}}


def test_too_long_optional_value_is_asked_again() -> None:
    result = _run(make_site_menu(), "1\nexample.com\n" + "x" * 21 + "\nshort\n")

    assert "notes exceeds maximum length of 20" in result.output
    assert _result(result)["fields"]["notes"] == "short"


def test_required_field_rejects_empty_input() -> None:
    result = _run(make_site_menu(), "2\n\nexample.com\n")
    assert _result(result)["fields"] == {"domain": "example.com"}


def test_out_of_range_choice_is_asked_again() -> None:
    result = _run(make_site_menu(), "7\n3\n")
    assert _result(result) == {"action": "debug", "fields": {}}


def test_selected_option_is_the_default() -> None:
    menu = Select(title="Numbers", options=[Option("One", 1), Option("Two", 2).with_selected()])
    result = _run(menu, "\n")
    assert _result(result) == 2


def test_value_validator_reprompts() -> None:
    def no_zero(value: int) -> None:
        if value == 0:
            raise ValueError("zero is not allowed")

    menu = Select(title="Numbers", options=new_options(0, 1), value_validator=no_zero)
    result = _run(menu, "1\n2\n")

    assert "Error: zero is not allowed" in result.output
    assert _result(result) == 1


def test_placeholder_shown_in_prompt() -> None:
    option = Option("Greet", "greet").with_field(Input(key="name", title="Name", placeholder="Ada"))
    menu = Select(title="Greeter", options=[option], handler=lambda ctx, value, fields: fields["name"])
    result = _run(menu, "1\nGrace\n")

    assert "Name (Ada):" in result.output
    assert _result(result) == "Grace"


def test_async_handler_and_context() -> None:
    result = _run(make_site_menu(handler=async_echo_handler), "2\nexample.com\n")
    assert _result(result)["async"] is True


def test_handler_errors_propagate_in_process() -> None:
    result = _run(make_site_menu(handler=failing_handler), "2\nexample.com\n")

    assert isinstance(result.exception, RuntimeError)
    assert str(result.exception) == SECRET


def test_empty_menu_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        run_select(Select(title="Empty"))


def test_outcome_keeps_chosen_value_with_handler() -> None:
    @click.command()
    def interactive() -> None:
        outcome = prompt_select(make_site_menu())
        click.echo(f"VALUE {outcome.value} KEY {outcome.option.key} FIELDS {json.dumps(outcome.fields)}")
        click.echo("RESULT " + json.dumps(outcome.result))

    result = CliRunner().invoke(interactive, input="2\nexample.com\n")

    assert 'VALUE remove KEY Remove site FIELDS {"domain": "example.com"}' in result.output
    assert _result(result) == {"action": "remove", "fields": {"domain": "example.com"}}


def test_outcome_without_handler_has_no_result() -> None:
    @click.command()
    def interactive() -> None:
        outcome = prompt_select(Select(title="Numbers", options=new_options(1, 2)))
        click.echo("RESULT " + json.dumps([outcome.value, outcome.result]))

    assert _result(CliRunner().invoke(interactive, input="2\n")) == [2, None]

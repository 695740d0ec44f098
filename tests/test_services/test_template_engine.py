"""Tests for command template rendering and shell escaping."""

import shlex

import pytest

from callbot.services.template_engine import (
    MissingArgument,
    placeholders,
    render,
    shell_escape,
)


def test_plain_value_is_inserted_unquoted():
    command = render("./scripts/cmr.sh --branch {branch}", {"branch": "feature/xyz"})

    assert command == "./scripts/cmr.sh --branch feature/xyz"


def test_value_with_space_is_single_quoted():
    command = render(
        "./scripts/deploySnapshot.sh --branch {branch}", {"branch": "release 1.0"}
    )

    assert command == "./scripts/deploySnapshot.sh --branch 'release 1.0'"


@pytest.mark.parametrize(
    "value",
    [
        "it's",
        "a;b",
        "$(rm -rf /)",
        "`id`",
        'say "hi"',
        "tab\tseparated",
        "*",
        "",
    ],
)
def test_escaped_value_reads_back_as_one_literal_word(value):
    command = render("echo {value}", {"value": value})

    assert shlex.split(command) == ["echo", value]


def test_placeholder_text_inside_value_is_not_substituted():
    command = render("echo {first} {second}", {"first": "{second}", "second": "x"})

    assert shlex.split(command) == ["echo", "{second}", "x"]


def test_shell_parameter_expansion_is_left_alone():
    command = render("cd ${HOME} && ./run.sh {env}", {"env": "qlf"})

    assert command == "cd ${HOME} && ./run.sh qlf"
    assert placeholders("cd ${HOME} && ./run.sh {env}") == ("env",)


def test_repeated_placeholder_uses_same_value():
    command = render("ssh {server} uptime && ssh {server} df", {"server": "och01"})

    assert command == "ssh och01 uptime && ssh och01 df"
    assert placeholders("ssh {server} uptime && ssh {server} df") == ("server",)


def test_rendering_is_deterministic():
    values = {"branch": "release 1.0"}

    assert render("./x.sh {branch}", values) == render("./x.sh {branch}", values)


def test_missing_value_raises_missing_argument():
    with pytest.raises(MissingArgument) as exc_info:
        render("./restart.sh --env {env} --server {server}", {"env": "qlf"})

    assert exc_info.value.name == "server"


def test_template_without_placeholders_is_returned_verbatim():
    assert render("git status --short", {}) == "git status --short"


def test_shell_escape_keeps_safe_values_readable():
    assert shell_escape("pprod_legacy") == "pprod_legacy"
    assert shell_escape("och01.example.org") == "och01.example.org"


def test_doubled_braces_are_passed_through_verbatim():
    template = "docker ps --filter name={name} --format '{{Names}}' {{name}}"

    command = render(template, {"name": "web app"})

    assert command == "docker ps --filter name='web app' --format '{{Names}}' {{name}}"
    assert placeholders(template) == ("name",)

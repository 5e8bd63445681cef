"""Tests for --examples flag on CLI commands.

Parametrized to cover all commands that define examples text.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from reformcal.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["parse", "--examples"], ["reformcal parse", "--format iso8601", "--no-comp"]),
    (["fragments", "--examples"], ["reformcal fragments", "--format httpdate"]),
    (["shift", "--examples"], ["--months 1", "--today 2024-06-01"]),
    (["leap", "--examples"], ["reformcal leap 2000", "--julian"]),
    (["convert", "--examples"], ["reformcal convert jd", "reformcal convert civil -- -4712 1 1"]),
    (["convert", "jd", "--examples"], ["reformcal convert jd 2451944"]),
    (["convert", "civil", "--examples"], ["--reform england convert civil"]),
    (["convert", "ordinal", "--examples"], ["reformcal convert ordinal 2001 34"]),
    (["convert", "commercial", "--examples"], ["reformcal convert commercial"]),
    (["convert", "weeknum", "--examples"], ["--monday"]),
    (["convert", "nth-kday", "--examples"], ["nth-kday 2001 2 -- -1 1"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    """Generate a readable test ID from args."""
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


@pytest.mark.parametrize(
    ("args", "keywords"),
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_examples_short_circuits_arguments(cli_runner: CliRunner) -> None:
    """--examples is eager, so required arguments may be missing."""
    result = cli_runner.invoke(cli, ["convert", "civil", "--examples"])
    assert result.exit_code == 0


def test_help_lists_examples_flag(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["parse", "--help"])
    assert "--examples" in result.output

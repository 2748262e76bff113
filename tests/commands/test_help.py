"""Parametrized help tests for all CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from rollctl.cli import cli

# (CLI args, expected keywords in output)
HELP_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["check", "--help"], ["create", "update", "delete"]),
    (["check", "create", "--help"], ["PAYLOAD", "--records"]),
    (["check", "update", "--help"], ["ROLL_ID", "PATCH", "--records"]),
    (["check", "delete", "--help"], ["ROLL_ID", "--records"]),
    (["catalog", "--help"], ["check-create", "check-update", "check-delete", "stats"]),
    (["catalog", "check-create", "--help"], ["PAYLOAD", "--catalogs"]),
    (["catalog", "check-update", "--help"], ["CATALOG_ID", "--catalogs", "--records"]),
    (["catalog", "check-delete", "--help"], ["CATALOG_ID", "--records"]),
    (["catalog", "stats", "--help"], ["CATALOGS"]),
    (["catalog", "suggest-code", "--help"], ["NAME"]),
    (["transitions", "--help"], ["in_stock", "reserved", "sold"]),
    (["stats", "--help"], ["RECORDS"]),
]


def _help_id(args_keywords: tuple[list[str], list[str]]) -> str:
    """Generate a readable test ID from args."""
    args, _ = args_keywords
    return "_".join(a for a in args if a != "--help")


@pytest.mark.usefixtures("_isolated_dir")
@pytest.mark.parametrize(
    "args,expected_keywords",
    HELP_COMMANDS,
    ids=[_help_id(item) for item in HELP_COMMANDS],
)
def test_command_help(cli_runner: CliRunner, args: list[str], expected_keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in help output for {args}"

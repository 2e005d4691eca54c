"""Tests for the top-level CLI application."""

from typer.testing import CliRunner

from taskdeck_cli import __version__
from taskdeck_cli.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_no_args_shows_help():
    result = runner.invoke(app, [])
    assert "tasks" in result.output
    assert "export" in result.output


def test_mistyped_command_suggests():
    result = runner.invoke(app, ["taks"])
    assert result.exit_code == 1
    assert "Did you mean" in result.output
    assert "tasks" in result.output


def test_mistyped_subcommand_suggests():
    result = runner.invoke(app, ["tasks", "compelte"])
    assert result.exit_code == 1
    assert "complete" in result.output

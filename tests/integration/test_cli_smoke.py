from typer.testing import CliRunner

from runlog.__main__ import app


runner = CliRunner()


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "--plain" in result.stdout
    for command in ["register", "users", "ingest", "history", "delete", "report"]:
        assert command in result.stdout


def test_report_help_lists_periods() -> None:
    result = runner.invoke(app, ["report", "--help"])
    assert result.exit_code == 0
    assert "week" in result.stdout
    assert "month" in result.stdout


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.stdout


def test_json_and_plain_are_mutually_exclusive() -> None:
    result = runner.invoke(app, ["--json", "--plain", "users"])
    assert result.exit_code == 2
    assert "mutually exclusive" in result.stdout

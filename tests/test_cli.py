"""Tests for the root reformcal CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from reformcal import __version__
from reformcal.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "reformcal" in result.output
    for name in ("parse", "fragments", "convert", "shift", "leap"):
        assert name in result.output


def test_cli_help_describes_calendar(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert "Julian/Gregorian" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_unknown_command(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["calendar"])
    assert result.exit_code == 2


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/missing-reformcal.toml", "--version"])
    assert result.exit_code == 0


def test_config_file_sets_reform(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "cal.toml"
    config.write_text('[calendar]\nreform = "julian"\n')
    result = cli_runner.invoke(cli, ["-q", "-c", str(config), "leap", "1900"])
    assert result.exit_code == 0
    assert result.output.strip() == "true"


def test_reform_flag_beats_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "cal.toml"
    config.write_text('[calendar]\nreform = "julian"\n')
    result = cli_runner.invoke(cli, ["-q", "-c", str(config), "--reform", "gregorian", "leap", "1900"])
    assert result.exit_code == 0
    assert result.output.strip() == "false"


def test_discovered_config(cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "reformcal.toml").write_text('[calendar]\nreform = "england"\n')
    monkeypatch.chdir(tmp_path)
    result = cli_runner.invoke(cli, ["-q", "convert", "civil", "1582", "10", "10"])
    assert result.exit_code == 0
    assert result.output.strip() == "1582-10-10"


def test_invalid_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "bad.toml"
    config.write_text("[calendar\n")
    result = cli_runner.invoke(cli, ["-c", str(config), "leap", "2000"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output


def test_env_var_reform(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REFORMCAL_REFORM", "gregorian")
    result = cli_runner.invoke(cli, ["-q", "leap", "1500"])
    assert result.output.strip() == "false"


# --- Exit codes and stream routing ---


def test_success_exit_code(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-q", "convert", "civil", "--", "-4712", "1", "1"])
    assert result.exit_code == 0
    assert result.output.strip() == "-4712-01-01"


def test_failure_exit_code(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "convert", "civil", "2001", "2", "30"])
    assert result.exit_code == 1
    data = json.loads(result.output)
    assert data["error"]["code"] == "INVALID_COORDINATE"


def test_log_json_keeps_stdout_clean(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "--log-json", "parse", "2001-02-03"])
    assert result.exit_code == 0
    assert json.loads(result.output)["data"]["text"] == "2001-02-03"

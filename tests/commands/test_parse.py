"""Tests for the parse and fragments commands."""

from __future__ import annotations

import json

from click.testing import CliRunner

from reformcal.cli import cli


class TestParseCommand:
    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "parse", "2001-02-03"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "parse"
        assert data["data"]["jd"] == 2451944
        assert data["data"]["format"] == "free"

    def test_rich_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["parse", "Sat Aug 28 02:55:50 +09:00 1999"])
        assert result.exit_code == 0
        assert "1999-08-28T02:55:50+09:00" in result.output
        assert "+09:00" in result.output

    def test_quiet_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "parse", "H11.08.28"])
        assert result.exit_code == 0
        assert result.output.strip() == "1999-08-28"

    def test_date_only(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "parse", "2001-02-03T04:05:06", "--date-only"])
        assert result.output.strip() == "2001-02-03"

    def test_today(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "parse", "Feb 3", "--today", "2024-03-15"])
        assert result.output.strip() == "2024-02-03"

    def test_bad_today(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["parse", "Feb 3", "--today", "tomorrow"])
        assert result.exit_code == 2

    def test_no_comp(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "parse", "99-01-01", "--no-comp"])
        assert result.output.strip() == "0099-01-01"

    def test_fixed_format(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["-q", "parse", "Sat, 3 Feb 2001 04:05:06 +0700", "--format", "rfc2822"]
        )
        assert result.output.strip() == "2001-02-03T04:05:06+07:00"

    def test_fixed_format_mismatch(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "parse", "2001-02-03", "--format", "rfc3339"])
        assert result.exit_code == 1
        assert "ERROR: parse: invalid rfc3339 string" in result.output

    def test_unknown_format_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["parse", "2001-02-03", "--format", "mayan"])
        assert result.exit_code == 2

    def test_reform_gap(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "parse", "1582-10-10"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["error"]["code"] == "UNRESOLVABLE_FRAGMENTS"

    def test_reform_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "--reform", "england", "parse", "1582-10-10"])
        assert result.exit_code == 0
        assert result.output.strip() == "1582-10-10"

    def test_fallback_reform_warns(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--reform", "1", "parse", "2001-02-03"])
        assert result.exit_code == 0
        assert "WARNING: Invalid reform start 1 ignored; using italy" in result.output

    def test_fallback_reform_in_json_payload(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--reform", "1", "parse", "2001-02-03"])
        assert result.exit_code == 0
        assert '"Invalid reform start 1 ignored; using italy"' in result.output
        assert "WARNING: " not in result.output

    def test_verbose_shows_telemetry(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "parse", "2001-02-03"])
        assert result.exit_code == 0
        assert "meta:" in result.output
        assert "ParseService.parse" in result.output


class TestFragmentsCommand:
    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "fragments", "H11.08.28"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["fragments"] == {"year": 1999, "mon": 8, "mday": 28}

    def test_quiet_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "fragments", "2001-02-03"])
        assert result.output.strip() == "year=2001 mon=2 mday=3"

    def test_no_comp(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "fragments", "01-02-03", "--no-comp"])
        assert result.output.strip() == "year=1 mon=2 mday=3"

    def test_unrecognized_text(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["fragments", "hello world"])
        assert result.exit_code == 0
        assert "(no fragments)" in result.output

    def test_fixed_format(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["-q", "fragments", "Mon, 01 Jan 2001 00:00:00 GMT", "--format", "httpdate"]
        )
        assert result.exit_code == 0
        assert "year=2001" in result.output
        assert "wday=1" in result.output
        assert "zone=GMT" in result.output

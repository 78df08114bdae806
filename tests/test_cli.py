"""Tests for the TradeBias command-line interface.

**Feature: trade-bias-detector**
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tradebias.cli.main import LAZY_SUBCOMMANDS, cli

GOOD_CSV = """date,symbol,action,quantity,price
2024-01-02,AAPL,buy,10,10
2024-01-03,AAPL,sell,10,15
"""

BAD_CSV = """date,symbol,action,quantity,price
2024-01-02,AAPL,buy,10,10
2024-01-03,AAPL,sell,lots,15
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def no_config(tmp_path) -> list[str]:
    """Point the CLI at a config file that does not exist."""
    return ["--config", str(tmp_path / "config.toml")]


def _csv(tmp_path: Path, text: str) -> str:
    path = tmp_path / "trades.csv"
    path.write_text(text)
    return str(path)


class TestAnalyzeCommand:
    """
    **Feature: trade-bias-detector, Property 19: Analyze Command**

    *For any* readable trade file, analyze prints statistics and insights.
    """

    def test_renders_report(self, runner, tmp_path, no_config):
        result = runner.invoke(cli, no_config + ["analyze", _csv(tmp_path, GOOD_CSV)])

        assert result.exit_code == 0, result.output
        assert "Trading Statistics" in result.output
        assert "Confirmation" in result.output

    def test_json_output(self, runner, tmp_path, no_config):
        result = runner.invoke(cli, no_config + ["analyze", _csv(tmp_path, GOOD_CSV), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["stats"]["totalTrades"] == 2
        assert data["stats"]["avgProfit"] == 50.0
        assert [i["type"] for i in data["insights"]] == ["Confirmation Bias"]

    def test_invalid_rows_are_skipped(self, runner, tmp_path, no_config):
        result = runner.invoke(cli, no_config + ["analyze", _csv(tmp_path, BAD_CSV)])

        assert result.exit_code == 0, result.output
        assert "Skipped 1 invalid row" in result.output

    def test_strict_mode_aborts(self, runner, tmp_path):
        config = tmp_path / "strict.toml"
        config.write_text("[ingest]\nstrict = true\n")

        result = runner.invoke(cli, ["--config", str(config), "analyze", _csv(tmp_path, BAD_CSV)])

        assert result.exit_code == 1
        assert "strict mode" in result.output

    def test_missing_file(self, runner, tmp_path, no_config):
        result = runner.invoke(cli, no_config + ["analyze", str(tmp_path / "absent.csv")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_bad_config(self, runner, tmp_path):
        config = tmp_path / "bad.toml"
        config.write_text("[display\n")

        result = runner.invoke(cli, ["--config", str(config), "analyze", _csv(tmp_path, GOOD_CSV)])

        assert result.exit_code == 1
        assert "Configuration Error" in result.output


class TestValidateCommand:
    """
    **Feature: trade-bias-detector, Property 20: Validate Command**

    *For any* trade file, validate exits 0 only when every row is valid.
    """

    def test_valid_file(self, runner, tmp_path, no_config):
        result = runner.invoke(cli, no_config + ["validate", _csv(tmp_path, GOOD_CSV)])

        assert result.exit_code == 0, result.output
        assert "2 valid trade(s)" in result.output

    def test_invalid_file(self, runner, tmp_path, no_config):
        result = runner.invoke(cli, no_config + ["validate", _csv(tmp_path, BAD_CSV)])

        assert result.exit_code == 1
        assert "Rejected Rows" in result.output


class TestRulesCommand:
    def test_lists_thresholds(self, runner, no_config):
        result = runner.invoke(cli, no_config + ["rules"])

        assert result.exit_code == 0, result.output
        assert "loss_aversion_ratio" in result.output
        assert "1.5" in result.output


class TestLazyGroup:
    def test_all_lazy_commands_resolve(self, runner, no_config):
        for name in LAZY_SUBCOMMANDS:
            result = runner.invoke(cli, no_config + [name, "--help"])
            assert result.exit_code == 0, result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("analyze", "validate", "rules"):
            assert name in result.output

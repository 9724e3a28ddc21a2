"""
Tests for the bloomkit CLI.

Tests the typer-based commands: sizing, error-rate, version, and config.
"""

import logging

import pytest
import yaml
from typer.testing import CliRunner

from bloomkit import __version__
from bloomkit.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the root-logger changes each invocation makes."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
    for name in ["bloomkit", "bloomkit.filters", "bloomkit.core"]:
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestVersionCommand:
    def test_version_shows_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"bloomkit v{__version__}" in result.stdout


class TestSizingCommand:
    def test_derived_hash_count(self):
        result = runner.invoke(app, ["sizing", "--capacity-bits", "3600", "--expected", "300"])
        assert result.exit_code == 0
        assert "hash_count" in result.stdout
        assert "8" in result.stdout

    def test_explicit_hash_count(self):
        result = runner.invoke(app, ["sizing", "-m", "1000", "-n", "100", "-k", "3"])
        assert result.exit_code == 0
        assert "(explicit)" in result.stdout

    def test_zero_expected(self):
        result = runner.invoke(app, ["sizing", "-m", "1000", "-n", "0"])
        assert result.exit_code == 0

    def test_rejects_zero_capacity(self):
        result = runner.invoke(app, ["sizing", "-m", "0", "-n", "10"])
        assert result.exit_code != 0


class TestErrorRateCommand:
    def test_csv_output(self):
        result = runner.invoke(
            app,
            ["error-rate", "-m", "10000", "-N", "3000", "-s", "1000", "-r", "3", "-r", "12", "--csv"],
        )
        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert lines[0] == "inserted,bpe_3,bpe_12"
        assert [line.split(",")[0] for line in lines[1:]] == ["1000", "2000", "3000"]
        rates = [float(v) for v in lines[1].split(",")[1:]]
        assert rates[1] < rates[0]

    def test_rates_grow_with_insertions(self):
        result = runner.invoke(app, ["error-rate", "-N", "80000", "-s", "20000", "--csv"])
        assert result.exit_code == 0
        rows = [line.split(",") for line in result.stdout.strip().splitlines()[1:]]
        first_column = [float(row[1]) for row in rows]
        assert first_column == sorted(first_column)
        assert len(rows) == 4

    def test_table_output(self):
        result = runner.invoke(app, ["error-rate", "-N", "20000"])
        assert result.exit_code == 0
        assert "Theoretical Error Rate" in result.stdout

    def test_rejects_non_positive_ratio(self):
        result = runner.invoke(app, ["error-rate", "-r", "0", "--csv"])
        assert result.exit_code == 1


class TestConfigCommand:
    def test_show(self):
        result = runner.invoke(app, ["config", "--show"])
        assert result.exit_code == 0
        assert "hash_engine" in result.stdout
        assert "murmur3" in result.stdout

    def test_init_writes_loadable_yaml(self, tmp_path):
        path = tmp_path / "conf" / "bloomkit.yaml"
        result = runner.invoke(app, ["config", "--init", "--path", str(path)])
        assert result.exit_code == 0
        data = yaml.safe_load(path.read_text())
        assert data["hash_engine"] == "murmur3"
        assert data["default_capacity_bits"] == 1048576

    def test_no_flags(self):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "--show" in result.stdout


class TestLoggingSettings:
    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("BLOOMKIT_LOG_LEVEL", "debug")
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("bloomkit.filters").level == logging.DEBUG

    def test_default_log_level(self):
        result = runner.invoke(app, ["sizing", "-m", "1000", "-n", "100"])
        assert result.exit_code == 0
        assert logging.getLogger("bloomkit").level == logging.INFO

    def test_json_output_from_env(self, monkeypatch):
        from bloomkit.observability.logging import StructuredFormatter

        monkeypatch.setenv("BLOOMKIT_LOG_JSON", "true")
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        formatters = [h.formatter for h in logging.getLogger().handlers]
        assert any(isinstance(f, StructuredFormatter) for f in formatters)

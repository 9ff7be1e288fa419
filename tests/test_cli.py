"""Tests for the pergroup command line."""

import json

import polars as pl
import pytest
from typer.testing import CliRunner

from pergroup import __version__
from pergroup.cli import app

runner = CliRunner()


class TestRun:
    """Tests for `pergroup run`."""

    def test_prints_result_set(self):
        result = runner.invoke(app, ["run", "correlated"])
        assert result.exit_code == 0, result.output
        assert "bartlett" in result.output
        assert "4 rows in set" in result.output

    def test_top_two_polars(self):
        result = runner.invoke(app, ["run", "count-top-n", "--limit", "2", "--backend", "polars"])
        assert result.exit_code == 0, result.output
        assert "8 rows in set" in result.output

    def test_output_json(self, tmp_path):
        output = tmp_path / "result.json"
        result = runner.invoke(app, ["run", "self_join", "--output", str(output)])
        assert result.exit_code == 0, result.output

        saved = json.loads(output.read_text())
        assert saved["technique"] == "self_join"
        assert saved["row_count"] == 4
        assert {"type": "apple", "variety": "fuji", "price": 0.24} in saved["rows"]

    def test_profile(self):
        result = runner.invoke(app, ["run", "union_all", "--profile", "most_expensive", "--no-sql"])
        assert result.exit_code == 0, result.output
        assert "navel" in result.output
        assert "ORDER BY" not in result.output

    def test_json_records(self, tmp_path):
        data = tmp_path / "fruits.json"
        data.write_text(
            json.dumps(
                [
                    {"type": "plum", "variety": "damson", "price": 1.5},
                    {"type": "plum", "variety": "victoria", "price": 1.2},
                ]
            )
        )
        result = runner.invoke(app, ["run", "correlated", "--data", str(data)])
        assert result.exit_code == 0, result.output
        assert "victoria" in result.output
        assert "1 row in set" in result.output

    def test_single_row_technique_rejects_limit(self):
        result = runner.invoke(app, ["run", "self_join", "--limit", "2"])
        assert result.exit_code != 0
        assert isinstance(result.exception, ValueError)

    def test_unknown_technique(self):
        result = runner.invoke(app, ["run", "lateral"])
        assert result.exit_code != 0
        assert isinstance(result.exception, ValueError)


class TestCompare:
    """Tests for `pergroup compare`."""

    def test_equivalent(self):
        result = runner.invoke(app, ["compare"])
        assert result.exit_code == 0, result.output
        assert "equivalent" in result.output

    def test_top_two_with_window(self, tmp_path):
        output = tmp_path / "report.json"
        result = runner.invoke(app, ["compare", "--limit", "2", "--window", "--output", str(output)])
        assert result.exit_code == 0, result.output

        saved = json.loads(output.read_text())
        assert saved["equivalent"] is True
        assert saved["results"][0]["technique"] == "window"
        assert len(saved["results"]) == 6

    def test_disagreement_exits_nonzero(self, tmp_path):
        data = tmp_path / "tied.csv"
        pl.DataFrame(
            {"type": ["apple", "apple"], "variety": ["a", "b"], "price": [1.0, 1.0]}
        ).write_csv(data)

        result = runner.invoke(app, ["compare", "--data", str(data)])
        assert result.exit_code == 1
        assert "Result sets differ" in result.output


class TestSql:
    """Tests for `pergroup sql`."""

    def test_prints_statement(self):
        result = runner.invoke(app, ["sql", "correlated"])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("SELECT *")

    def test_union_all_enumerates_groups(self):
        result = runner.invoke(app, ["sql", "union_all", "--limit", "2"])
        assert result.exit_code == 0, result.output
        assert result.output.count("UNION ALL") == 3
        assert "LIMIT 2" in result.output


class TestSample:
    """Tests for `pergroup sample`."""

    def test_prints_table(self):
        result = runner.invoke(app, ["sample"])
        assert result.exit_code == 0, result.output
        assert "limbertwig" in result.output

    @pytest.mark.parametrize("name", ["fruits.parquet", "fruits.csv"])
    def test_writes_file(self, tmp_path, name):
        output = tmp_path / name
        result = runner.invoke(app, ["sample", "--output", str(output)])
        assert result.exit_code == 0, result.output
        assert output.exists()

    def test_rejects_unknown_format(self, tmp_path):
        result = runner.invoke(app, ["sample", "--output", str(tmp_path / "fruits.xlsx")])
        assert result.exit_code != 0


class TestMisc:
    """Tests for `pergroup columns` and `pergroup version`."""

    def test_columns(self):
        result = runner.invoke(app, ["columns"])
        assert result.exit_code == 0, result.output
        assert "variety" in result.output

    def test_columns_json_records(self, tmp_path):
        data = tmp_path / "fruits.json"
        data.write_text(json.dumps([{"type": "plum", "variety": "damson", "price": 1.5}]))
        result = runner.invoke(app, ["columns", "--data", str(data)])
        assert result.exit_code == 0, result.output
        assert "variety" in result.output
        assert "Float64" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output

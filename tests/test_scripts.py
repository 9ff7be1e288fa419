"""Tests for the csv to parquet conversion script."""

import runpy
import sys
from pathlib import Path

import polars as pl
import pytest

SCRIPT = Path(__file__).parent.parent / "scripts" / "convert_csv_to_parquet.py"


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", [str(SCRIPT), *map(str, args)])
    runpy.run_path(str(SCRIPT), run_name="__main__")


class TestConvertCsvToParquet:
    """Tests for scripts/convert_csv_to_parquet.py."""

    def test_converts_fruits(self, tmp_path, monkeypatch, capsys, fruits):
        source = tmp_path / "fruits.csv"
        fruits.write_csv(source)

        _run(monkeypatch, source)

        output = capsys.readouterr().out
        assert "Warning" not in output
        assert f"FRUITS_PATH={(tmp_path / 'fruits.parquet').absolute()}" in output
        assert pl.read_parquet(tmp_path / "fruits.parquet").equals(fruits)

    def test_warns_on_missing_columns(self, tmp_path, monkeypatch, capsys):
        source = tmp_path / "scores.csv"
        pl.DataFrame({"team": ["red"], "score": [10]}).write_csv(source)
        target = tmp_path / "out.parquet"

        _run(monkeypatch, source, target, "--compression", "none")

        output = capsys.readouterr().out
        assert "Warning: missing columns ['type', 'variety', 'price']" in output
        assert pl.read_parquet(target).columns == ["team", "score"]

    def test_missing_input(self, tmp_path, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, tmp_path / "absent.csv")
        assert exc.value.code == 1
        assert "Input file not found" in capsys.readouterr().out

    def test_rejects_non_csv(self, tmp_path, monkeypatch, capsys):
        source = tmp_path / "fruits.json"
        source.write_text("[]")
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, source)
        assert exc.value.code == 1
        assert "must be a csv file" in capsys.readouterr().out

"""Shared fixtures for pergroup tests."""

import polars as pl
import pytest

from pergroup.data import load_sample_fruits
from pergroup.data.sample import FRUITS_SCHEMA


@pytest.fixture(autouse=True)
def no_fruits_path(monkeypatch):
    """Run every test against the built-in sample unless it sets FRUITS_PATH."""
    monkeypatch.delenv("FRUITS_PATH", raising=False)


@pytest.fixture
def fruits() -> pl.DataFrame:
    """The nine-row sample table."""
    return load_sample_fruits()


@pytest.fixture
def tied_fruits() -> pl.DataFrame:
    """Two apples share the lowest price."""
    return pl.DataFrame(
        [
            ("apple", "a", 1.0),
            ("apple", "b", 1.0),
            ("apple", "c", 2.0),
            ("pear", "x", 3.0),
        ],
        schema=FRUITS_SCHEMA,
        orient="row",
    )


@pytest.fixture
def fruits_with_nulls() -> pl.DataFrame:
    """One row without a price and one without a type."""
    return pl.DataFrame(
        [
            ("apple", "a", 1.0),
            ("apple", "n", None),
            (None, "z", 5.0),
            ("pear", "x", 3.0),
        ],
        schema=FRUITS_SCHEMA,
        orient="row",
    )

"""Functions for loading and describing fruit data."""

import json
from pathlib import Path
from typing import Any

import polars as pl

from pergroup.models.fruit import Fruit

from ._tables import get_fruits_table
from .columns import FruitColumn
from .sample import FRUITS_SCHEMA


def load_fruits(columns: list[str] | None = None, file_path: str | None = None) -> pl.DataFrame:
    """
    Load the complete fruits dataset.

    Parameters
    ----------
    columns : list of str, optional
        List of column names to include in the result.
        If None, returns all columns.
    file_path : str, optional
        Parquet or csv file to read instead of ``FRUITS_PATH`` / the sample.

    Returns
    -------
    pl.DataFrame
        A DataFrame containing fruit data.

    Raises
    ------
    ColumnNotFoundError
        If any specified column does not exist in the dataset.

    Examples
    --------
    >>> import pergroup.data as data
    >>> df = data.load_fruits()
    >>> print(f"Loaded {len(df)} fruits")
    >>>
    >>> from pergroup.data import FruitColumn
    >>> df = data.load_fruits(columns=[FruitColumn.TYPE, FruitColumn.PRICE])
    """
    query = get_fruits_table(file_path).scan()

    if columns is not None:
        query = query.select([str(getattr(c, "value", c)) for c in columns])

    return query.collect()


def load_fruit_records(path: Path) -> pl.DataFrame:
    """
    Load a JSON list of fruit records, validating each one.

    Parameters
    ----------
    path : Path
        JSON file holding a list of ``{"type", "variety", "price"}`` objects.

    Returns
    -------
    pl.DataFrame
        The validated records with the sample table's schema.

    Raises
    ------
    ValueError
        If the file does not hold a JSON list.
    pydantic.ValidationError
        If any record is missing a field or has a negative price.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Expected a list of fruit records in {path}, got {type(data).__name__}")

    fruits = [Fruit(**record) for record in data]
    return pl.DataFrame(
        [(fruit.type, fruit.variety, fruit.price) for fruit in fruits],
        schema=FRUITS_SCHEMA,
        orient="row",
    )


def get_fruits_columns(file_path: str | None = None) -> str:
    """
    Return the available columns in the fruits dataset.

    Returns
    -------
    str
        A string representation of a Polars DataFrame containing the
        column names and types for the fruits table.
    """
    return get_fruits_table(file_path).columns()


def get_stats_of_all_fruits(
    group_column: str = FruitColumn.TYPE.value, file_path: str | None = None
) -> dict[str, Any]:
    """
    Get summary statistics about the fruits dataset.

    Returns
    -------
    dict
        Dictionary containing:
        - total_rows : int
        - total_columns : int
        - columns : list[str]
        - schema : dict[str, str]
            Column names mapped to their data types
        - rows_per_group : dict[str, int]
            Count of rows for each value of ``group_column``
        - groups : list[str]
            Distinct group values, sorted

    Raises
    ------
    ValueError
        If ``group_column`` is not in the dataset.
    """
    lazy_df = get_fruits_table(file_path).scan()
    schema = lazy_df.collect_schema()

    if group_column not in schema:
        raise ValueError(
            f"Unknown column: '{group_column}'. "
            f"Available columns: {list(schema.keys())}"
        )

    total_rows = lazy_df.select(pl.len()).collect().item()

    group_counts = (
        lazy_df.group_by(group_column)
        .agg(pl.len().alias("count"))
        .sort(group_column)
        .collect()
    )
    rows_per_group = dict(
        zip(
            group_counts[group_column].to_list(),
            group_counts["count"].to_list(),
            strict=True,
        )
    )

    return {
        "total_rows": total_rows,
        "total_columns": len(schema),
        "columns": list(schema.keys()),
        "schema": {k: str(v) for k, v in schema.items()},
        "rows_per_group": rows_per_group,
        "groups": list(rows_per_group.keys()),
    }

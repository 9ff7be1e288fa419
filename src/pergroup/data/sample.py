"""The nine-row fruits table every example runs against."""

import polars as pl

from .columns import FruitColumn

SAMPLE_TABLE_NAME = "fruits"

# (type, variety, price)
SAMPLE_FRUITS: list[tuple[str, str, float]] = [
    ("apple", "gala", 2.79),
    ("apple", "fuji", 0.24),
    ("apple", "limbertwig", 2.87),
    ("orange", "valencia", 3.59),
    ("orange", "navel", 9.36),
    ("pear", "bradford", 6.05),
    ("pear", "bartlett", 2.14),
    ("cherry", "bing", 2.55),
    ("cherry", "chelan", 6.33),
]

FRUITS_SCHEMA = {
    FruitColumn.TYPE.value: pl.String,
    FruitColumn.VARIETY.value: pl.String,
    FruitColumn.PRICE.value: pl.Float64,
}


def load_sample_fruits() -> pl.DataFrame:
    """
    Build the sample fruits table.

    Returns
    -------
    pl.DataFrame
        Nine rows with columns ``type``, ``variety`` and ``price``, in the
        order they were inserted.
    """
    return pl.DataFrame(SAMPLE_FRUITS, schema=FRUITS_SCHEMA, orient="row")

"""
Fruit data for the per-group query examples, loaded with Polars.

Quick Start
-----------
>>> import pergroup.data as data
>>> from pergroup.data import FruitColumn
>>>
>>> # The nine-row sample (or FRUITS_PATH when set)
>>> fruits = data.load_fruits()
>>>
>>> # Load specific columns
>>> prices = data.load_fruits(columns=[FruitColumn.TYPE, FruitColumn.PRICE])
>>>
>>> # Rows per group
>>> stats = data.get_stats_of_all_fruits()
>>> print(stats["rows_per_group"])
>>>
>>> # View available columns
>>> print(data.get_fruits_columns())

Data Sources
------------
- ``FRUITS_PATH`` (environment or ``.env``): a parquet or csv file
- otherwise the built-in sample, see ``SAMPLE_FRUITS``
- ``load_fruit_records()`` for hand-written JSON record files

See Also
--------
pergroup.data.loader : Core loading functions
pergroup.data.columns : Column enum for type-safe queries
pergroup.data._tables : Table abstraction layer
"""

from ._tables import Table, get_fruits_table
from .columns import FruitColumn
from .loader import (
    get_fruits_columns,
    get_stats_of_all_fruits,
    load_fruit_records,
    load_fruits,
)
from .sample import SAMPLE_FRUITS, SAMPLE_TABLE_NAME, load_sample_fruits

__all__ = [
    "Table",
    "get_fruits_table",
    "FruitColumn",
    "load_fruits",
    "load_fruit_records",
    "get_fruits_columns",
    "get_stats_of_all_fruits",
    "SAMPLE_FRUITS",
    "SAMPLE_TABLE_NAME",
    "load_sample_fruits",
]

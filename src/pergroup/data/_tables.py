"""Table definitions for fruit data sources."""

import os
from pathlib import Path

import dotenv
import polars as pl

from .sample import SAMPLE_TABLE_NAME, load_sample_fruits

dotenv.load_dotenv(override=True)


class Table:
    """
    A wrapper class for reading Polars DataFrames from parquet or csv files.

    This class provides lazy and eager loading methods. File format is
    auto-detected from extension. In-memory frames (such as the built-in
    sample) are wrapped with :meth:`Table.from_frame`.

    Parameters
    ----------
    file_path : str
        Full path to the data file (parquet or csv).

    Raises
    ------
    ValueError
        If file_path is None, empty, or points to unsupported format.
    FileNotFoundError
        If the specified file does not exist.

    Examples
    --------
    >>> table = Table("/path/to/data/fruits.parquet")
    >>> df = table.scan().filter(pl.col("type") == "apple").collect()
    """

    def __init__(self, file_path: str, name: str = SAMPLE_TABLE_NAME) -> None:
        if not file_path:
            raise ValueError(
                "file_path cannot be None or empty. "
                "Set the FRUITS_PATH environment variable or use Table.from_frame()."
            )

        self._path_obj = Path(file_path)

        if not self._path_obj.exists():
            raise FileNotFoundError(
                f"Data file not found: {file_path}\n"
                f"Please verify the path or set the FRUITS_PATH environment variable correctly."
            )

        if not self._path_obj.is_file():
            raise ValueError(
                f"Path is not a file: {file_path}\n"
                f"Expected a parquet (.parquet, .pq) or csv (.csv) file."
            )

        self.name = name
        self._file_path = str(file_path)
        self._format = self._detect_format()
        self._cached_df: pl.DataFrame | None = None

    @classmethod
    def from_frame(cls, df: pl.DataFrame, name: str = SAMPLE_TABLE_NAME) -> "Table":
        """Wrap an in-memory DataFrame so it can be queried like a file."""
        table = cls.__new__(cls)
        table.name = name
        table._path_obj = None
        table._file_path = None
        table._format = "memory"
        table._cached_df = df
        return table

    @property
    def source(self) -> str:
        """Where the rows come from, for display."""
        return self._file_path or f"<in-memory {self.name}>"

    def _detect_format(self) -> str:
        """Detect file format from extension."""
        suffix = self._path_obj.suffix.lower()
        if suffix in [".parquet", ".pq"]:
            return "parquet"
        elif suffix == ".csv":
            return "csv"
        else:
            raise ValueError(f"Unsupported file format: {suffix}. Use .parquet or .csv")

    def scan(self) -> pl.LazyFrame:
        """
        Lazily scan the data without loading into memory.

        Returns
        -------
        pl.LazyFrame
            A lazy Polars DataFrame that can be further queried.
        """
        if self._format == "parquet":
            return pl.scan_parquet(self._file_path)
        elif self._format == "csv":
            return pl.scan_csv(self._file_path)
        return self._cached_df.lazy()

    def read(self) -> pl.DataFrame:
        """
        Eagerly read the data into memory.

        Returns
        -------
        pl.DataFrame
            A Polars DataFrame loaded into memory.
        """
        if self._cached_df is None:
            if self._format == "parquet":
                self._cached_df = pl.read_parquet(self._file_path)
            else:
                self._cached_df = pl.read_csv(self._file_path)
        return self._cached_df

    def columns(self) -> str:
        """
        Get the schema of the table as a formatted string.

        Returns
        -------
        str
            A string representation of the table schema showing
            column names and their data types.

        Examples
        --------
        >>> print(table.columns())
        shape: (3, 2)
        ┌─────────┬─────────┐
        │ column  ┆ dtype   │
        │ ---     ┆ ---     │
        │ str     ┆ str     │
        ╞═════════╪═════════╡
        │ type    ┆ String  │
        │ variety ┆ String  │
        │ price   ┆ Float64 │
        └─────────┴─────────┘
        """
        schema = self.scan().collect_schema()
        with pl.Config(tbl_rows=-1):
            return str(
                pl.DataFrame(
                    {
                        "column": list(schema.keys()),
                        "dtype": [str(t) for t in schema.values()],
                    }
                )
            )


def get_fruits_table(file_path: str | None = None) -> Table:
    """
    Return the table the examples query.

    Uses ``file_path`` when given, then the ``FRUITS_PATH`` environment
    variable, and falls back to the built-in nine-row sample.
    """
    path = file_path or os.getenv("FRUITS_PATH")
    if path:
        return Table(path)
    return Table.from_frame(load_sample_fruits())

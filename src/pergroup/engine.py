"""Run a technique against DuckDB or Polars and time it."""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

import duckdb
import polars as pl

from pergroup.data import get_fruits_table
from pergroup.queries import QuerySpec, Technique, build_frame_query, build_sql, quote_ident


class Backend(str, Enum):
    """Where a technique is evaluated."""

    SQL = "sql"
    POLARS = "polars"


@dataclass
class QueryResult:
    """One result set and how it was produced."""

    technique: Technique
    backend: Backend
    frame: pl.DataFrame
    elapsed: float
    sql: str | None = None

    @property
    def label(self) -> str:
        return f"{self.technique.value}/{self.backend.value}"

    @property
    def row_count(self) -> int:
        return self.frame.height

    def as_set(self) -> set[tuple[Any, ...]]:
        """The rows as an order-insensitive set of tuples."""
        return set(self.frame.iter_rows())

    def to_dict(self) -> dict[str, Any]:
        return {
            "technique": self.technique.value,
            "backend": self.backend.value,
            "sql": self.sql,
            "elapsed": self.elapsed,
            "row_count": self.row_count,
            "rows": self.frame.to_dicts(),
        }


class SqlEngine:
    """
    An in-memory DuckDB connection with one table registered.

    Parameters
    ----------
    frame : pl.DataFrame
        The rows to query. Registered as a view, never copied or modified.
    table_name : str
        Name the SQL statements refer to.

    Examples
    --------
    >>> with SqlEngine(load_sample_fruits(), "fruits") as engine:
    ...     engine.execute('SELECT COUNT(*) AS n FROM "fruits"')
    """

    def __init__(self, frame: pl.DataFrame, table_name: str) -> None:
        self.table_name = table_name
        self._con = duckdb.connect(":memory:")
        self._con.register(table_name, frame)

    def execute(self, sql: str) -> pl.DataFrame:
        """Run one statement and fetch its result set."""
        return self._con.execute(sql).pl()

    def groups(self, column: str) -> list[Any]:
        """Distinct non-NULL values of ``column``, sorted."""
        col = quote_ident(column)
        rows = self._con.execute(
            f"SELECT DISTINCT {col} FROM {quote_ident(self.table_name)} "
            f"WHERE {col} IS NOT NULL ORDER BY {col}"
        ).fetchall()
        return [row[0] for row in rows]

    def close(self) -> None:
        self._con.close()

    def __enter__(self) -> "SqlEngine":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _check_columns(frame: pl.DataFrame, spec: QuerySpec) -> None:
    for col_name in (spec.group_column, spec.value_column):
        if col_name not in frame.columns:
            raise ValueError(
                f"Unknown column: '{col_name}'. Available columns: {frame.columns}"
            )


def run_technique(
    technique: Technique | str,
    spec: QuerySpec | None = None,
    frame: pl.DataFrame | None = None,
    backend: Backend | str = Backend.SQL,
) -> QueryResult:
    """
    Evaluate one technique and return its result set.

    Parameters
    ----------
    technique : Technique or str
        Which formulation to run.
    spec : QuerySpec, optional
        Defaults to the minimum price per fruit type.
    frame : pl.DataFrame, optional
        The table to query. Defaults to ``FRUITS_PATH`` or the sample.
    backend : Backend or str
        ``"sql"`` runs the SQL text on DuckDB, ``"polars"`` runs the
        expression rendition.

    Returns
    -------
    QueryResult
        The rows, the SQL text (SQL backend only) and the elapsed time.

    Raises
    ------
    ValueError
        If the technique or backend is unknown, a column is missing, or the
        technique cannot answer ``spec``.
    duckdb.Error
        If DuckDB rejects the statement.

    Examples
    --------
    >>> from pergroup.engine import run_technique
    >>> result = run_technique("correlated")
    >>> result.frame
    >>>
    >>> # Top two per group, with Polars
    >>> result = run_technique("count_top_n", QuerySpec(limit=2), backend="polars")
    """
    technique = Technique.parse(technique)
    backend = Backend(backend)
    spec = spec or QuerySpec()
    if frame is None:
        frame = get_fruits_table().read()
    _check_columns(frame, spec)

    if backend == Backend.POLARS:
        start = time.perf_counter()
        result = build_frame_query(technique, frame.lazy(), spec).collect()
        return QueryResult(technique, backend, result, time.perf_counter() - start)

    with SqlEngine(frame, spec.table) as engine:
        groups = engine.groups(spec.group_column) if technique == Technique.UNION_ALL else None
        sql = build_sql(technique, spec, groups)
        start = time.perf_counter()
        result = engine.execute(sql)
        elapsed = time.perf_counter() - start
    return QueryResult(technique, backend, result, elapsed, sql=sql)

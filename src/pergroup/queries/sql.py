"""SQL text for each technique.

Example usage:
    from pergroup.queries import QuerySpec, Technique, build_sql

    print(build_sql(Technique.CORRELATED, QuerySpec()))
"""

import datetime
import math
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from ._shared import QuerySpec, Technique, check_supported


def quote_ident(name: str) -> str:
    """Quote an identifier for SQL."""
    return '"' + name.replace('"', '""') + '"'


def _quoted(text: str) -> str:
    escaped = text.replace("'", "''")
    return f"'{escaped}'"


def sql_literal(value: Any) -> str:
    """Convert a Python value to a SQL literal."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, str):
        return _quoted(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            # nan/inf would otherwise parse as identifiers
            return f"{_quoted(repr(value))}::DOUBLE"
        return f"{value!r}"
    if isinstance(value, (int, Decimal)):
        return str(value)
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime.datetime):
        kind = "TIMESTAMPTZ" if value.tzinfo is not None else "TIMESTAMP"
        return f"{kind} {_quoted(value.isoformat(sep=' '))}"
    if isinstance(value, datetime.date):
        return f"DATE {_quoted(value.isoformat())}"
    if isinstance(value, datetime.time):
        return f"TIME {_quoted(value.isoformat())}"
    return _quoted(str(value))


def _self_join(spec: QuerySpec) -> str:
    t = quote_ident(spec.table)
    g = quote_ident(spec.group_column)
    v = quote_ident(spec.value_column)
    m = quote_ident(f"{spec.aggregate.lower()}{spec.value_column}")
    return (
        f"SELECT f.*\n"
        f"FROM (\n"
        f"    SELECT {g}, {spec.aggregate}({v}) AS {m}\n"
        f"    FROM {t}\n"
        f"    GROUP BY {g}\n"
        f") AS x\n"
        f"INNER JOIN {t} AS f ON f.{g} = x.{g} AND f.{v} = x.{m}"
    )


def _correlated(spec: QuerySpec) -> str:
    t = quote_ident(spec.table)
    g = quote_ident(spec.group_column)
    v = quote_ident(spec.value_column)
    return (
        f"SELECT *\n"
        f"FROM {t}\n"
        f"WHERE {v} = (\n"
        f"    SELECT {spec.aggregate}({v}) FROM {t} AS f WHERE f.{g} = {t}.{g}\n"
        f")"
    )


def _count_top_n(spec: QuerySpec) -> str:
    t = quote_ident(spec.table)
    g = quote_ident(spec.group_column)
    v = quote_ident(spec.value_column)
    return (
        f"SELECT *\n"
        f"FROM {t}\n"
        f"WHERE (\n"
        f"    SELECT COUNT(*) FROM {t} AS f\n"
        f"    WHERE f.{g} = {t}.{g} AND f.{v} {spec.comparison} {t}.{v}\n"
        f") <= {spec.limit}"
    )


def _union_all(spec: QuerySpec, groups: Sequence[Any]) -> str:
    if not groups:
        raise ValueError("UNION ALL needs at least one group to enumerate")
    t = quote_ident(spec.table)
    g = quote_ident(spec.group_column)
    v = quote_ident(spec.value_column)
    parts = [
        f"(SELECT * FROM {t} WHERE {g} = {sql_literal(group)} "
        f"ORDER BY {v} {spec.direction} NULLS LAST LIMIT {spec.limit})"
        for group in groups
    ]
    return "\nUNION ALL\n".join(parts)


def _window(spec: QuerySpec) -> str:
    t = quote_ident(spec.table)
    g = quote_ident(spec.group_column)
    v = quote_ident(spec.value_column)
    return (
        f"SELECT *\n"
        f"FROM {t}\n"
        f"QUALIFY ROW_NUMBER() OVER (\n"
        f"    PARTITION BY {g} ORDER BY {v} {spec.direction} NULLS LAST\n"
        f") <= {spec.limit}"
    )


def build_sql(
    technique: Technique | str,
    spec: QuerySpec | None = None,
    groups: Sequence[Any] | None = None,
) -> str:
    """
    Render the SQL statement for one technique.

    Parameters
    ----------
    technique : Technique or str
        Which formulation to render.
    spec : QuerySpec, optional
        Table, columns, N and direction. Defaults to the minimum price per
        fruit type.
    groups : sequence, optional
        The group values to enumerate. Required by ``union_all`` only.

    Returns
    -------
    str
        A single SQL statement.

    Raises
    ------
    ValueError
        If the technique is unknown, cannot return more than one row per
        group while ``spec.limit > 1``, or is ``union_all`` without groups.
    """
    technique = Technique.parse(technique)
    spec = spec or QuerySpec()
    check_supported(technique, spec)

    if technique == Technique.SELF_JOIN:
        return _self_join(spec)
    elif technique == Technique.CORRELATED:
        return _correlated(spec)
    elif technique == Technique.COUNT_TOP_N:
        return _count_top_n(spec)
    elif technique == Technique.UNION_ALL:
        return _union_all(spec, groups or [])
    return _window(spec)

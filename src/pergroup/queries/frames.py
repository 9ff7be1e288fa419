"""The same techniques written with Polars expressions.

Each builder returns a LazyFrame with the input's columns, keeping the rows
the matching SQL statement keeps, including its handling of NULLs.

Example usage:
    from pergroup.data import load_fruits
    from pergroup.queries import QuerySpec, Technique, build_frame_query

    cheapest = build_frame_query(
        Technique.SELF_JOIN, load_fruits().lazy(), QuerySpec()
    ).collect()
"""

import polars as pl

from ._shared import QuerySpec, Technique, check_supported


def _self_join(lf: pl.LazyFrame, spec: QuerySpec) -> pl.LazyFrame:
    g, v = spec.group_column, spec.value_column
    extreme = f"{spec.aggregate.lower()}{v}"
    agg = pl.col(v).max() if spec.largest else pl.col(v).min()
    grouped = lf.group_by(g).agg(agg.alias(extreme))
    return lf.join(grouped, left_on=[g, v], right_on=[g, extreme], how="inner")


def _correlated(lf: pl.LazyFrame, spec: QuerySpec) -> pl.LazyFrame:
    g, v = spec.group_column, spec.value_column
    extreme = pl.col(v).max() if spec.largest else pl.col(v).min()
    # NULL = NULL never holds, so rows without a group drop out
    return lf.filter(pl.col(g).is_not_null(), pl.col(v) == extreme.over(g))


def _count_top_n(lf: pl.LazyFrame, spec: QuerySpec) -> pl.LazyFrame:
    g, v = spec.group_column, spec.value_column
    # rank "max" = number of rows in the group at or before this one
    at_or_before = pl.col(v).rank("max", descending=spec.largest).over(g)
    # A NULL group or value compares to nothing, COUNT(*) is 0, and 0 <= N
    return lf.filter(
        pl.col(g).is_null() | pl.col(v).is_null() | (at_or_before <= spec.limit)
    )


def _union_all(lf: pl.LazyFrame, spec: QuerySpec) -> pl.LazyFrame:
    g, v = spec.group_column, spec.value_column
    groups = (
        lf.select(pl.col(g).drop_nulls().unique().sort()).collect().get_column(g).to_list()
    )
    if not groups:
        raise ValueError("UNION ALL needs at least one group to enumerate")
    return pl.concat(
        [
            lf.filter(pl.col(g) == group)
            .sort(v, descending=spec.largest, nulls_last=True, maintain_order=True)
            .head(spec.limit)
            for group in groups
        ]
    )


def _window(lf: pl.LazyFrame, spec: QuerySpec) -> pl.LazyFrame:
    g, v = spec.group_column, spec.value_column
    return lf.sort(v, descending=spec.largest, nulls_last=True, maintain_order=True).filter(
        pl.int_range(pl.len()).over(g) < spec.limit
    )


_BUILDERS = {
    Technique.SELF_JOIN: _self_join,
    Technique.CORRELATED: _correlated,
    Technique.COUNT_TOP_N: _count_top_n,
    Technique.UNION_ALL: _union_all,
    Technique.WINDOW: _window,
}


def build_frame_query(
    technique: Technique | str, lf: pl.LazyFrame, spec: QuerySpec | None = None
) -> pl.LazyFrame:
    """
    Build the Polars rendition of one technique.

    Parameters
    ----------
    technique : Technique or str
        Which formulation to build.
    lf : pl.LazyFrame
        The table to select from.
    spec : QuerySpec, optional
        Columns, N and direction. Defaults to the minimum price per fruit type.

    Returns
    -------
    pl.LazyFrame
        A lazy query with the same columns as ``lf``.

    Raises
    ------
    ValueError
        If the technique is unknown, cannot answer ``spec``, or the table
        has no groups to enumerate (``union_all``).
    """
    technique = Technique.parse(technique)
    spec = spec or QuerySpec()
    check_supported(technique, spec)

    columns = lf.collect_schema().names()
    return _BUILDERS[technique](lf, spec).select(columns)

"""Builders for the per-group techniques, as SQL text and as Polars queries."""

from ._shared import (
    FOUR_TECHNIQUES,
    TECHNIQUE_DESCRIPTIONS,
    QuerySpec,
    Technique,
    check_supported,
)
from .frames import build_frame_query
from .sql import build_sql, quote_ident, sql_literal

__all__ = [
    "FOUR_TECHNIQUES",
    "TECHNIQUE_DESCRIPTIONS",
    "QuerySpec",
    "Technique",
    "check_supported",
    "build_frame_query",
    "build_sql",
    "quote_ident",
    "sql_literal",
]

"""Shared types for the per-group query builders."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from pergroup.data.columns import FruitColumn
from pergroup.data.sample import SAMPLE_TABLE_NAME


class Technique(str, Enum):
    """The ways of picking rows per group."""

    SELF_JOIN = "self_join"
    CORRELATED = "correlated"
    COUNT_TOP_N = "count_top_n"
    UNION_ALL = "union_all"
    # Reference answer only, not one of the four techniques
    WINDOW = "window"

    @property
    def supports_top_n(self) -> bool:
        return self not in (Technique.SELF_JOIN, Technique.CORRELATED)

    @classmethod
    def parse(cls, name: "str | Technique") -> "Technique":
        """Look up a technique by name, accepting dashes for underscores."""
        if isinstance(name, Technique):
            return name
        key = str(name).strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(
                f"Unknown technique: '{name}'. Available: {[t.value for t in cls]}"
            ) from None


FOUR_TECHNIQUES = [
    Technique.SELF_JOIN,
    Technique.CORRELATED,
    Technique.COUNT_TOP_N,
    Technique.UNION_ALL,
]

TECHNIQUE_DESCRIPTIONS = {
    Technique.SELF_JOIN: (
        "Self-join against a grouped subquery: compute the minimum per group, "
        "then join back to the table on (group, minimum) to recover the full row."
    ),
    Technique.CORRELATED: (
        "Correlated subquery: keep each row whose value equals the minimum of "
        "its own group, computed by a subquery that refers to the outer row."
    ),
    Technique.COUNT_TOP_N: (
        "Correlated COUNT: for each row, count the rows of its group whose value "
        "is less than or equal to it, and keep rows where that count is at most N."
    ),
    Technique.UNION_ALL: (
        "UNION ALL: enumerate every group explicitly, sort it, cap it with "
        "LIMIT N, and concatenate the pieces."
    ),
    Technique.WINDOW: (
        "ROW_NUMBER() over each group, kept where the row number is at most N. "
        "Used as the reference answer."
    ),
}


class QuerySpec(BaseModel):
    """What to select: which table, grouped by what, ordered by what, how many."""

    table: str = SAMPLE_TABLE_NAME
    group_column: str = FruitColumn.TYPE.value
    value_column: str = FruitColumn.PRICE.value
    limit: int = Field(default=1, ge=1)
    largest: bool = False

    @field_validator("group_column", "value_column", mode="before")
    @classmethod
    def _column_name(cls, v: Any) -> Any:
        if isinstance(v, Enum):
            return v.value
        return v

    @property
    def aggregate(self) -> str:
        return "MAX" if self.largest else "MIN"

    @property
    def direction(self) -> str:
        return "DESC" if self.largest else "ASC"

    @property
    def comparison(self) -> str:
        """Operator matching rows that rank at or before the outer row."""
        return ">=" if self.largest else "<="


def check_supported(technique: Technique, spec: QuerySpec) -> None:
    """Raise if ``technique`` cannot answer ``spec``."""
    if spec.limit > 1 and not technique.supports_top_n:
        raise ValueError(
            f"Technique '{technique.value}' selects a single row per group; "
            f"got limit={spec.limit}. Use one of: "
            f"{[t.value for t in Technique if t.supports_top_n]}"
        )

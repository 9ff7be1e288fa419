"""Check that the techniques agree on a dataset."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import polars as pl

from pergroup.data import get_fruits_table
from pergroup.engine import Backend, QueryResult, run_technique
from pergroup.queries import FOUR_TECHNIQUES, QuerySpec, Technique

# Answers for the sample table, (type, variety, price)
EXPECTED_MIN_PER_GROUP = {
    ("apple", "fuji", 0.24),
    ("orange", "valencia", 3.59),
    ("pear", "bartlett", 2.14),
    ("cherry", "bing", 2.55),
}

EXPECTED_TOP_TWO_PER_GROUP = {
    ("apple", "fuji", 0.24),
    ("apple", "gala", 2.79),
    ("orange", "valencia", 3.59),
    ("orange", "navel", 9.36),
    ("pear", "bartlett", 2.14),
    ("pear", "bradford", 6.05),
    ("cherry", "bing", 2.55),
    ("cherry", "chelan", 6.33),
}


@dataclass
class Mismatch:
    """Rows one result has, or lacks, compared with the first result."""

    label: str
    missing: set[tuple[Any, ...]]
    extra: set[tuple[Any, ...]]


@dataclass
class EquivalenceReport:
    """Results of running several techniques on the same table."""

    spec: QuerySpec
    results: list[QueryResult] = field(default_factory=list)
    mismatches: list[Mismatch] = field(default_factory=list)

    @property
    def equivalent(self) -> bool:
        return not self.mismatches

    @property
    def reference(self) -> QueryResult | None:
        return self.results[0] if self.results else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "spec": self.spec.model_dump(),
            "equivalent": self.equivalent,
            "results": [r.to_dict() for r in self.results],
            "mismatches": [
                {
                    "label": m.label,
                    "missing": [list(row) for row in m.missing],
                    "extra": [list(row) for row in m.extra],
                }
                for m in self.mismatches
            ],
        }


def default_techniques(spec: QuerySpec) -> list[Technique]:
    """The four techniques, minus those that cannot return N rows per group."""
    return [t for t in FOUR_TECHNIQUES if spec.limit == 1 or t.supports_top_n]


def compare_techniques(
    spec: QuerySpec | None = None,
    frame: pl.DataFrame | None = None,
    techniques: Iterable[Technique | str] | None = None,
    backends: Iterable[Backend | str] = (Backend.SQL, Backend.POLARS),
) -> EquivalenceReport:
    """
    Run every technique on every backend and compare the result sets.

    Result sets are compared as sets of rows, ignoring order. The first
    result is the reference the others are checked against.

    Parameters
    ----------
    spec : QuerySpec, optional
        Defaults to the minimum price per fruit type.
    frame : pl.DataFrame, optional
        Defaults to ``FRUITS_PATH`` or the sample.
    techniques : iterable, optional
        Defaults to the four techniques that can answer ``spec``.
    backends : iterable
        Backends to run each technique on.

    Returns
    -------
    EquivalenceReport

    Raises
    ------
    ValueError
        If an explicitly requested technique cannot answer ``spec``.
    """
    spec = spec or QuerySpec()
    if frame is None:
        frame = get_fruits_table().read()
    if techniques is None:
        techniques = default_techniques(spec)
    # backends is walked once per technique
    techniques = list(techniques)
    backends = list(backends)

    report = EquivalenceReport(spec=spec)
    for technique in techniques:
        for backend in backends:
            report.results.append(run_technique(technique, spec, frame, backend))

    if report.reference is None:
        return report

    expected = report.reference.as_set()
    for result in report.results[1:]:
        actual = result.as_set()
        if actual != expected:
            report.mismatches.append(
                Mismatch(result.label, missing=expected - actual, extra=actual - expected)
            )
    return report

"""
Aggregation (records -> yearly counts)
======================================

The chart only needs one number per year: how many executions happened in
it. We build a simple index (year -> count) in one pass and then emit it
sorted by year.

The category tallies (`count_by`) and `age_summary` feed the DOCX report.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import numpy as np
from .models import ExecutionRecord, YearlyCount

CATEGORY_FIELDS = ("state", "method", "race", "sex")


@dataclass(frozen=True)
class AgeSummary:
    minimum: int
    median: float
    mean: float
    maximum: int


def count_by_year(records: Iterable[ExecutionRecord]) -> List[YearlyCount]:
    """Group records by year and count each group.

    Returns one YearlyCount per distinct year, ascending by year.
    """
    year_to_count: Dict[int, int] = {}
    for r in records:
        year_to_count[r.year] = year_to_count.get(r.year, 0) + 1
    return [YearlyCount(year=y, count=year_to_count[y]) for y in sorted(year_to_count)]


def count_by(records: Iterable[ExecutionRecord], field: str, top_n: Optional[int] = None) -> List[Tuple[str, int]]:
    """Tally a categorical field, most frequent first (ties by label)."""
    if field not in CATEGORY_FIELDS:
        raise ValueError(f"field must be one of {CATEGORY_FIELDS}")
    counts: Dict[str, int] = {}
    for r in records:
        key = getattr(r, field) or "(blank)"
        counts[key] = counts.get(key, 0) + 1
    out = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return out[:top_n] if top_n is not None else out


def age_summary(records: Sequence[ExecutionRecord]) -> Optional[AgeSummary]:
    if not records:
        return None
    ages = np.array([r.age for r in records], dtype=float)
    return AgeSummary(
        minimum=int(ages.min()),
        median=float(np.median(ages)),
        mean=float(ages.mean()),
        maximum=int(ages.max()),
    )

"""
Pipeline (load -> build)
========================

The work happens in two explicit stages:

1) `load_stage` reads and validates the data file. It never raises for data
   problems; it returns a `LoadResult` holding either the records or the
   error that stopped loading.
2) `build_chart_data` is pure: records in, yearly counts + scales + bar
   geometry out. It is only called on a successful load.

`run` chains both stages. The exports write the yearly counts as CSV/JSON.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import csv
import json
import logging
import os
from .aggregate import count_by_year
from .loader import ExecvizError, MIN_YEAR, load_executions
from .models import Bar, ExecutionRecord, YearlyCount
from .scales import ChartScales, build_scales

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of the load stage: records on success, error on failure."""
    path: str
    records: List[ExecutionRecord] = field(default_factory=list)
    error: Optional[ExecvizError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ChartData:
    """Everything needed to draw the chart, computed once."""
    aggregates: List[YearlyCount]
    scales: ChartScales
    bars: List[Bar]
    width: float
    height: float

    @property
    def total(self) -> int:
        return sum(a.count for a in self.aggregates)


def load_stage(path: str, min_year: int = MIN_YEAR, on_invalid: str = "raise") -> LoadResult:
    try:
        records = load_executions(path, min_year=min_year, on_invalid=on_invalid)
    except ExecvizError as e:
        logger.error("Loading %s failed: %s", path, e)
        return LoadResult(path=path, error=e)
    return LoadResult(path=path, records=records)


def layout_bars(aggregates: List[YearlyCount], scales: ChartScales, width: float, height: float) -> List[Bar]:
    """Bind each aggregate to one bar (the data join, by position)."""
    if not aggregates:
        return []
    bar_width = width / len(aggregates)
    bars: List[Bar] = []
    for i, a in enumerate(aggregates):
        top = scales.y(a.count)
        bars.append(Bar(
            index=i,
            year=a.year,
            count=a.count,
            x=scales.x(i),
            y=top,
            width=bar_width,
            height=height - top,
        ))
    return bars


def build_chart_data(records: List[ExecutionRecord], width: float = 600, height: float = 400) -> ChartData:
    aggregates = count_by_year(records)
    scales = build_scales(aggregates, width=width, height=height)
    bars = layout_bars(aggregates, scales, width, height)
    logger.info("Aggregated %d records into %d years", len(records), len(aggregates))
    return ChartData(aggregates=aggregates, scales=scales, bars=bars, width=width, height=height)


def run(path: str, width: float = 600, height: float = 400, min_year: int = MIN_YEAR,
        on_invalid: str = "raise") -> ChartData:
    """Load then build. Raises the load error if the first stage failed."""
    result = load_stage(path, min_year=min_year, on_invalid=on_invalid)
    if not result.ok:
        raise result.error
    return build_chart_data(result.records, width=width, height=height)


def export_csv(aggregates: List[YearlyCount], path: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["year", "count"])
        for a in aggregates:
            w.writerow([a.year, a.count])


def export_json(aggregates: List[YearlyCount], path: str) -> None:
    """Export the yearly counts as a JSON list of {year, count} objects."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    payload = [{"year": a.year, "count": a.count} for a in aggregates]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

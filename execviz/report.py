"""
execviz report generator
------------------------
This module writes a DOCX summary of the loaded executions:

- the yearly bar chart (same drawing code as the interactive chart)
- a table of executions per year
- breakdowns by state, method, race and sex
- age statistics
- a citation and reproducibility footer

python-docx is imported lazily so the chart and the CLI work without it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import os
import tempfile

from .aggregate import age_summary, count_by
from .engine import ChartData
from .models import ExecutionRecord


@dataclass
class DatasetCitation:
    """Minimal dataset citation metadata for the DOCX report."""
    database_name: str = "Execution Database"
    institutional_author: str = "Death Penalty Information Center"
    website: str = "https://deathpenaltyinfo.org"
    file_name: Optional[str] = None


@dataclass
class ReportConfig:
    title: str = "U.S. Executions Report"
    subtitle: str = "Executions per year"
    citation: DatasetCitation = field(default_factory=DatasetCitation)

    # How many categories to show in the breakdown tables
    top_n: int = 10

    # Optional: CLI arguments used for this run
    command_log: Optional[List[str]] = None


def generate_docx_report(
    records: Sequence[ExecutionRecord],
    data: ChartData,
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
    min_year: Optional[int] = None,
) -> str:
    """Write the report to `out_path` and return the path.

    An empty record set still produces a report (with an empty chart).
    """
    config = config or ReportConfig()

    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    from .chart import ChartConfig, close_chart, draw_chart, save_chart

    # -----------------------------
    # 1) Chart image
    # -----------------------------
    tmpdir = tempfile.mkdtemp(prefix="execviz_report_")
    chart = draw_chart(data, ChartConfig())
    chart_path = save_chart(chart, os.path.join(tmpdir, "executions_by_year.png"), dpi=200)
    close_chart(chart)

    # -----------------------------
    # 2) Document
    # -----------------------------
    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    def _table(headers: List[str], rows: List[List[str]]) -> None:
        t = doc.add_table(rows=1, cols=len(headers))
        for i, h in enumerate(headers):
            t.rows[0].cells[i].text = h
        for row in rows:
            cells = t.add_row().cells
            for i, v in enumerate(row):
                cells[i].text = v

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Records in scope", str(len(records)))
    if min_year is not None:
        _kv("Years included", f"{min_year} onward")
    if data.aggregates:
        _kv("Year range", f"{data.aggregates[0].year} to {data.aggregates[-1].year}")
        busiest = max(data.aggregates, key=lambda a: (a.count, -a.year))
        _kv("Busiest year", f"{busiest.year} ({busiest.count} executions)")

    doc.add_heading("Dataset citation", level=1)
    cit = config.citation
    if cit.file_name:
        doc.add_paragraph(f"Data file used: {cit.file_name}")
    doc.add_paragraph(f"{cit.institutional_author}. {cit.database_name}. {cit.website}.")

    doc.add_heading("Executions per year", level=1)
    doc.add_picture(chart_path, width=Inches(6.5))
    _table(["Year", "Executions"], [[str(a.year), str(a.count)] for a in data.aggregates])

    doc.add_heading("Breakdowns", level=1)
    for fname, title in (("state", "State"), ("method", "Method"), ("race", "Race"), ("sex", "Sex")):
        tally = count_by(records, fname, top_n=config.top_n)
        if not tally:
            continue
        doc.add_paragraph(f"Top {config.top_n} by {title}")
        _table([title, "Executions"], [[k, str(v)] for k, v in tally])
        doc.add_paragraph("")

    ages = age_summary(records)
    if ages is not None:
        doc.add_heading("Age at execution", level=1)
        _table(
            ["Minimum", "Median", "Mean", "Maximum"],
            [[str(ages.minimum), f"{ages.median:.1f}", f"{ages.mean:.1f}", str(ages.maximum)]],
        )

    # -----------------------------
    # Reproducibility footer
    # -----------------------------
    doc.add_heading("Reproducibility footer", level=1)
    from . import __version__ as execviz_version
    from datetime import datetime as _dt
    doc.add_paragraph(f"execviz version: {execviz_version}")
    doc.add_paragraph(f"Report generated at: {_dt.now().isoformat(timespec='seconds')}")
    if config.command_log:
        doc.add_paragraph("Command used:")
        for line in config.command_log:
            doc.add_paragraph(line, style="List Bullet")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path

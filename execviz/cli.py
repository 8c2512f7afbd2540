"""
execviz Command Line Interface (CLI)
====================================

Run it like:

    python -m execviz.cli --data execution_database.csv

Steps:
1) Load and validate the CSV (stage 1)
2) Count executions per year, build scales and bars (stage 2)
3) Print the yearly counts, then save/export/report and/or open the chart

The CLI never modifies the data file.
"""

from __future__ import annotations
import argparse, logging, os, sys
from typing import List, Optional
from .engine import build_chart_data, export_csv, export_json, load_stage
from .loader import MIN_YEAR


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="execviz", description="Bar chart of U.S. executions per year.")
    ap.add_argument("--data", required=True, help="Path to the execution database CSV (or .xlsx)")
    ap.add_argument("--min-year", type=int, default=MIN_YEAR, help="First year to include (default: 2000)")
    ap.add_argument("--skip-invalid", action="store_true",
                    help="Skip rows with an unreadable date/age instead of stopping")
    ap.add_argument("--save", default="", help="Save the chart to this PNG/SVG/PDF path")
    ap.add_argument("--report", default="", help="Write a DOCX report to this path")
    ap.add_argument("--export", default="", help="Export yearly counts to this .csv or .json path")
    ap.add_argument("--no-show", action="store_true", help="Do not open the interactive chart window")
    ap.add_argument("--width", type=int, default=600)
    ap.add_argument("--height", type=int, default=400)
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("Loading dataset...")
    result = load_stage(args.data, min_year=args.min_year,
                        on_invalid="skip" if args.skip_invalid else "raise")
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    data = build_chart_data(result.records, width=args.width, height=args.height)
    print(f"Loaded {len(result.records)} executions from {args.min_year} onward, {len(data.aggregates)} years.")
    for a in data.aggregates:
        print(f"  {a.year}: {a.count}")

    if args.export:
        if args.export.lower().endswith(".json"):
            export_json(data.aggregates, args.export)
        else:
            export_csv(data.aggregates, args.export)
        print(f"Exported yearly counts to {args.export}")

    if args.report:
        from .report import DatasetCitation, ReportConfig, generate_docx_report
        cfg = ReportConfig(
            citation=DatasetCitation(file_name=os.path.basename(args.data)),
            command_log=[" ".join(["execviz"] + list(argv if argv is not None else sys.argv[1:]))],
        )
        generate_docx_report(result.records, data, args.report, config=cfg, min_year=args.min_year)
        print(f"Report written to {args.report}")

    if args.save or not args.no_show:
        from .chart import ChartConfig, close_chart, draw_chart, save_chart, show_chart
        chart = draw_chart(data, ChartConfig())
        if args.save:
            save_chart(chart, args.save)
            print(f"Saved: {args.save}")
        if not args.no_show:
            show_chart(chart)
        close_chart(chart)
    return 0


if __name__ == "__main__":
    sys.exit(main())

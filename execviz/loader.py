"""
Dataset loader (CSV -> ExecutionRecord list)
============================================

This module reads the execution database export and converts each row into
an `ExecutionRecord`.

Key ideas:
- Column names are resolved leniently ("Date", "date", " DATE ") because
  exports of the database vary.
- The year is the last "/"-separated token of the Date column.
- Rows before `min_year` are dropped silently. Rows that cannot be parsed are
  either rejected (`on_invalid="raise"`, the default) or skipped with a
  warning (`on_invalid="skip"`). Nothing is ever turned into NaN.
"""

from __future__ import annotations
from typing import Dict, List, Mapping, Optional
from datetime import date, datetime
import logging
import os
import re
import pandas as pd
from .models import ExecutionRecord

logger = logging.getLogger(__name__)

MIN_YEAR = 2000

# canonical field -> accepted header spellings
COLUMNS: Dict[str, tuple] = {
    "date": ("Date", "Execution Date"),
    "state": ("State",),
    "age": ("Age",),
    "sex": ("Sex", "Gender"),
    "race": ("Race",),
    "method": ("Method",),
}

POLICIES = ("raise", "skip")

# ASCII digits only ("²" passes str.isdigit but not int)
_DIGITS = re.compile(r"[0-9]+")


class ExecvizError(Exception):
    """Base class for errors raised by execviz."""


class DataLoadError(ExecvizError):
    """The input file could not be read or lacks a required column."""


class InvalidRowError(ExecvizError, ValueError):
    """A row has a field that cannot be converted to its typed value."""

    def __init__(self, message: str, *, field: str, value: object, row_number: Optional[int] = None):
        self.field = field
        self.value = value
        self.row_number = row_number
        if row_number is not None:
            message = f"row {row_number}: {message}"
        super().__init__(message)

    def at_row(self, row_number: int) -> "InvalidRowError":
        """Return a copy of this error tagged with a data row number."""
        return InvalidRowError(str(self), field=self.field, value=self.value, row_number=row_number)


def _to_str(x) -> str:
    if x is None or pd.isna(x): return ""
    # Excel date cells arrive as datetimes; write them the way the CSV does
    if isinstance(x, (datetime, date)): return x.strftime("%m/%d/%Y")
    return str(x).strip()

def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())

def _col(df: pd.DataFrame, *names: str) -> str:
    cols = list(df.columns)
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise DataLoadError(f"Missing required column. Tried={names}. Available={cols}")


def parse_year(date_text: object) -> int:
    """Return the year of a "MM/DD/YYYY"-like date (its last "/" token)."""
    text = _to_str(date_text)
    token = text.split("/")[-1].strip()
    if not _DIGITS.fullmatch(token):
        raise InvalidRowError(f"cannot read a year from Date={text!r}", field="date", value=date_text)
    return int(token)


def parse_age(age_text: object) -> int:
    """Parse the Age cell. Spreadsheet-style "42.0" is accepted."""
    text = _to_str(age_text)
    if text.endswith(".0"):
        text = text[:-2]
    if not _DIGITS.fullmatch(text):
        raise InvalidRowError(f"Age must be a whole number, got {text!r}", field="age", value=age_text)
    return int(text)


def parse_row(row: Mapping[str, object], min_year: int = MIN_YEAR) -> Optional[ExecutionRecord]:
    """Convert one raw row (canonical keys) to a record.

    Returns None when the row's year is before `min_year`.
    Raises InvalidRowError when the date or age cannot be parsed.
    """
    year = parse_year(row.get("date"))
    if year < min_year:
        return None
    return ExecutionRecord(
        year=year,
        state=_to_str(row.get("state")),
        age=parse_age(row.get("age")),
        sex=_to_str(row.get("sex")),
        race=_to_str(row.get("race")),
        method=_to_str(row.get("method")),
    )


def _read_table(path: str) -> pd.DataFrame:
    if not os.path.exists(path):
        raise DataLoadError(f"Data file not found: {path}")
    try:
        if path.lower().endswith((".xlsx", ".xlsm")):
            return pd.read_excel(path, engine="openpyxl")
        return pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except (OSError, ValueError, pd.errors.ParserError) as e:
        raise DataLoadError(f"Could not read {path}: {e}") from e


def load_execution_rows(path: str) -> List[Dict[str, str]]:
    """Read the file and return its rows as dicts keyed by canonical field name."""
    df = _read_table(path)
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    cols = {field: _col(df, *names) for field, names in COLUMNS.items()}

    rows: List[Dict[str, str]] = []
    for _, r in df.iterrows():
        rows.append({field: _to_str(r[col]) for field, col in cols.items()})
    logger.info("Read %d rows from %s", len(rows), path)
    return rows


def load_executions(path: str, min_year: int = MIN_YEAR, on_invalid: str = "raise") -> List[ExecutionRecord]:
    """Load the execution database and keep records with year >= `min_year`.

    `on_invalid` decides what happens to a row with an unparseable date or age:
    "raise" stops with InvalidRowError, "skip" logs a warning and drops it.
    """
    if on_invalid not in POLICIES:
        raise ValueError(f"on_invalid must be one of {POLICIES}, got {on_invalid!r}")

    records: List[ExecutionRecord] = []
    skipped = 0
    for i, row in enumerate(load_execution_rows(path), start=1):
        try:
            rec = parse_row(row, min_year=min_year)
        except InvalidRowError as e:
            if on_invalid == "raise":
                raise e.at_row(i) from e
            logger.warning("Skipping row %d: %s", i, e)
            skipped += 1
            continue
        if rec is not None:
            records.append(rec)

    logger.info("Kept %d records from %d onward (%d invalid rows skipped)", len(records), min_year, skipped)
    return records

"""
Data model
==========

Each kept CSV row becomes an `ExecutionRecord`. Records are grouped into
`YearlyCount` aggregates, and each aggregate is bound to one `Bar`.

All three are immutable (`frozen=True`): they are built once per run and
never edited afterwards.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionRecord:
    """One execution from the database, year 2000 onward."""
    year: int
    state: str
    age: int
    sex: str
    race: str
    method: str


@dataclass(frozen=True)
class YearlyCount:
    """Number of executions in one year."""
    year: int
    count: int

    @property
    def label(self) -> str:
        return str(self.year)


@dataclass(frozen=True)
class Bar:
    """Pixel geometry for one aggregate.

    Coordinates follow screen convention: origin at the top-left corner,
    y grows downward.
    """
    index: int
    year: int
    count: int
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height

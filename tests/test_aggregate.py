import pytest

from execviz.aggregate import age_summary, count_by, count_by_year
from execviz.models import ExecutionRecord, YearlyCount


def _rec(year, state="TX", age=40, method="Lethal Injection", sex="Male", race="White"):
    return ExecutionRecord(year=year, state=state, age=age, sex=sex, race=race, method=method)


def test_count_by_year_example():
    records = [_rec(2000), _rec(2000), _rec(2001)]
    assert count_by_year(records) == [YearlyCount(2000, 2), YearlyCount(2001, 1)]


def test_count_by_year_sorted_unique_and_complete():
    years = [2010, 2003, 2010, 2001, 2003, 2010, 2015]
    aggregates = count_by_year([_rec(y) for y in years])
    keys = [a.year for a in aggregates]
    assert keys == sorted(set(years))
    assert sum(a.count for a in aggregates) == len(years)
    assert all(a.count >= 1 for a in aggregates)


def test_count_by_year_empty():
    assert count_by_year([]) == []


def test_count_by_orders_by_count_then_label():
    records = [_rec(2000, state="VA"), _rec(2000, state="TX"), _rec(2001, state="TX"), _rec(2002, state="OK")]
    assert count_by(records, "state") == [("TX", 2), ("OK", 1), ("VA", 1)]
    assert count_by(records, "state", top_n=1) == [("TX", 2)]


def test_count_by_blank_and_unknown_field():
    assert count_by([_rec(2000, method="")], "method") == [("(blank)", 1)]
    with pytest.raises(ValueError):
        count_by([], "age")


def test_age_summary():
    summary = age_summary([_rec(2000, age=30), _rec(2001, age=40), _rec(2002, age=59)])
    assert summary.minimum == 30
    assert summary.maximum == 59
    assert summary.median == 40.0
    assert summary.mean == pytest.approx(43.0)
    assert age_summary([]) is None

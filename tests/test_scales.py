import pytest

from execviz.models import YearlyCount
from execviz.scales import BandScale, LinearScale, build_scales


def test_linear_scale_maps_and_inverts():
    s = LinearScale(domain=(0, 50), range=(400, 0))
    assert s(0) == 400
    assert s(50) == 0
    assert s(25) == 200
    assert s.invert(100) == pytest.approx(37.5)


def test_linear_scale_degenerate_domain_maps_to_midpoint():
    s = LinearScale(domain=(3, 3), range=(0, 600))
    assert s(3) == 300
    assert s(10) == 300


def test_ticks_are_round_and_inside_domain():
    assert LinearScale(domain=(0, 98)).ticks(10) == [float(v) for v in range(0, 100, 10)]
    assert LinearScale(domain=(0, 5)).ticks(10) == [0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0]
    ticks = LinearScale(domain=(0, 1)).ticks(5)
    assert ticks == pytest.approx([0.0, 0.2, 0.4, 0.6, 0.8, 1.0])
    assert LinearScale(domain=(0, 0)).ticks() == [0.0]
    assert LinearScale(domain=(0, 10)).ticks(0) == []


def test_band_scale_equal_slots_cover_range():
    years = ["2000", "2001", "2002", "2003"]
    band = BandScale(domain=years, range=(0, 600))
    starts = [band(y) for y in years]
    assert starts == [0, 150, 300, 450]
    assert band.bandwidth == 150
    assert band.step == 150
    assert band.center("2001") == 225
    # slots are non-overlapping and end at the range end
    for a, b in zip(starts, starts[1:]):
        assert a + band.bandwidth <= b
    assert starts[-1] + band.bandwidth == 600


def test_band_scale_unknown_label_and_duplicates():
    band = BandScale(domain=["2000", "2000", "2001"], range=(0, 100))
    assert band.domain == ["2000", "2001"]
    assert len(band) == 2
    with pytest.raises(KeyError):
        band("1999")


def test_band_scale_padding():
    band = BandScale(domain=["a", "b"], range=(0, 100), padding_inner=0.5, padding_outer=0.25)
    # step = 100 / (2 - 0.5 + 0.5) = 50
    assert band.step == 50
    assert band.bandwidth == 25
    assert band("a") == 12.5
    with pytest.raises(ValueError):
        BandScale(domain=["a"], padding_inner=2)


def test_build_scales_domains():
    aggregates = [YearlyCount(2000, 85), YearlyCount(2001, 66), YearlyCount(2002, 71)]
    scales = build_scales(aggregates, width=600, height=400)
    assert scales.y.domain == (0, 85)
    assert scales.y.range == (400, 0)
    assert scales.y(0) == 400
    assert scales.y(85) == 0
    assert scales.x.domain == (0, 3)
    assert scales.x(1) == 200
    assert scales.year.domain == ["2000", "2001", "2002"]
    assert scales.year("2002") == 400


def test_build_scales_empty_falls_back():
    scales = build_scales([], width=600, height=400)
    assert scales.y.domain == (0, 1)
    assert scales.x.domain == (0, 1)
    assert scales.y(0) == 400
    assert len(scales.year) == 0

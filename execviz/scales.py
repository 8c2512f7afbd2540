"""
Scales (data values -> pixel coordinates)
=========================================

A scale is a small callable object that maps a value from a *domain*
(counts, bar indices, year labels) to a *range* (pixels).

- `LinearScale` interpolates linearly. Its range may be inverted, which is
  how the vertical axis gets large counts near the top of the chart.
- `BandScale` splits a pixel range into equal slots, one per label.

`build_scales` wires the three scales the bar chart needs.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Hashable, List, Sequence, Tuple
from matplotlib import ticker
from .models import YearlyCount


class LinearScale:
    """Linear map from domain [d0, d1] to range [r0, r1]."""

    def __init__(self, domain: Tuple[float, float] = (0.0, 1.0), range: Tuple[float, float] = (0.0, 1.0)):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d0 == d1:
            # degenerate domain: everything lands mid-range
            return (r0 + r1) / 2.0
        t = (float(value) - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r0 == r1:
            return (d0 + d1) / 2.0
        t = (float(pixel) - r0) / (r1 - r0)
        return d0 + t * (d1 - d0)

    def ticks(self, count: int = 10) -> List[float]:
        """Round tick values inside the domain (steps of 1, 2 or 5 x 10^k)."""
        d0, d1 = self.domain
        lo, hi = min(d0, d1), max(d0, d1)
        if count <= 0:
            return []
        if lo == hi:
            return [lo]
        locator = ticker.MaxNLocator(nbins=count, steps=[1, 2, 5, 10])
        eps = (hi - lo) * 1e-9
        out = [float(t) for t in locator.tick_values(lo, hi) if lo - eps <= t <= hi + eps]
        return out if d0 <= d1 else out[::-1]

    def __repr__(self) -> str:
        return f"LinearScale(domain={self.domain}, range={self.range})"


class BandScale:
    """Categorical scale: each distinct label gets an equal-width slot."""

    def __init__(
        self,
        domain: Sequence[Hashable] = (),
        range: Tuple[float, float] = (0.0, 1.0),
        padding_inner: float = 0.0,
        padding_outer: float = 0.0,
        align: float = 0.5,
    ):
        if not 0.0 <= padding_inner <= 1.0:
            raise ValueError("padding_inner must be within [0, 1]")
        # keep first occurrence of each label
        self.domain: List[Hashable] = list(dict.fromkeys(domain))
        self._index: Dict[Hashable, int] = {k: i for i, k in enumerate(self.domain)}
        self.range = (float(range[0]), float(range[1]))
        self.padding_inner = float(padding_inner)
        self.padding_outer = float(padding_outer)
        self.align = float(align)
        self._rescale()

    def _rescale(self) -> None:
        n = len(self.domain)
        r0, r1 = self.range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        step = (stop - start) / max(1.0, n - self.padding_inner + self.padding_outer * 2)
        start += (stop - start - step * (n - self.padding_inner)) * self.align
        self.step = step
        self.bandwidth = step * (1 - self.padding_inner)
        positions = [start + step * i for i in range(n)]
        self._positions = positions[::-1] if reverse else positions

    def __call__(self, label: Hashable) -> float:
        """Start (left edge) of the label's slot."""
        return self._positions[self._index[label]]

    def center(self, label: Hashable) -> float:
        return self(label) + self.bandwidth / 2.0

    def __len__(self) -> int:
        return len(self.domain)

    def __repr__(self) -> str:
        return f"BandScale(domain={self.domain}, range={self.range})"


@dataclass(frozen=True)
class ChartScales:
    """The three scales of the yearly bar chart."""
    y: LinearScale
    x: LinearScale
    year: BandScale


def build_scales(aggregates: Sequence[YearlyCount], width: float, height: float) -> ChartScales:
    """Build the vertical, horizontal and year-label scales.

    - y: count -> pixel row, domain [0, max count], range [height, 0]
    - x: bar index -> pixel column, domain [0, n], range [0, width]
    - year: year label -> slot, range [0, width] (axis labels only)

    An empty aggregate list falls back to domain [0, 1] for both linear scales.
    """
    n = len(aggregates)
    y_max = max((a.count for a in aggregates), default=0)
    y = LinearScale(domain=(0, y_max if y_max > 0 else 1), range=(height, 0))
    x = LinearScale(domain=(0, n if n > 0 else 1), range=(0, width))
    year = BandScale(domain=[a.label for a in aggregates], range=(0, width))
    return ChartScales(y=y, x=x, year=year)

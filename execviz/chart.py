"""
Bar chart rendering (matplotlib)
================================

`draw_chart` turns a `ChartData` into a matplotlib figure:

- the axes use pixel coordinates: x in [0, width], y in [0, height] with
  the y axis inverted, so bar geometry from `engine.layout_bars` is drawn as is
- one Rectangle per bar
- a left axis from the count scale's ticks, a bottom axis with one label
  per year (band centres)
- axis lines and tick marks are hidden

Hovering a bar fades in a tooltip with its count; leaving fades it out.
The tooltip and the active bar live on the `BarChart` object.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import math
import os
import matplotlib.pyplot as plt
from matplotlib import ticker
from matplotlib.patches import Rectangle
from .engine import ChartData
from .models import Bar


@dataclass
class ChartConfig:
    """Knobs for the figure and the tooltip.

    The plotting area size comes from `ChartData.width/height`.
    """
    bar_color: str = "#3333FF"
    title: Optional[str] = "U.S. executions per year"

    # space around the plotting area, in pixels
    margin_left: int = 50
    margin_right: int = 20
    margin_top: int = 30
    margin_bottom: int = 50
    dpi: int = 100

    y_ticks: int = 10
    rotate_year_labels: bool = True

    # tooltip: fade in/out durations, opacity when shown
    tooltip_opacity: float = 0.9
    fade_in_ms: int = 200
    fade_out_ms: int = 500
    tooltip_offset_px: float = 28
    frame_ms: int = 20


class Tooltip:
    """Floating label showing the count of the hovered bar."""

    def __init__(self, ax, config: ChartConfig):
        self.ax = ax
        self.config = config
        self.text = ax.text(
            0, 0, "",
            ha="center", va="bottom", fontsize=9, zorder=10, clip_on=False,
            bbox=dict(boxstyle="round,pad=0.4", facecolor="lightsteelblue", edgecolor="none"),
        )
        self.alpha = 0.0
        self._target = 0.0
        self._rate = 0.0  # alpha units per ms
        self._timer = None
        self._apply(0.0)

    @property
    def visible(self) -> bool:
        return self.alpha > 0

    @property
    def label(self) -> str:
        return self.text.get_text()

    def show(self, count: int, x: float, y: float) -> None:
        self.text.set_text(f"{count}\nexecutions")
        self.move(x, y)
        self._fade(self.config.tooltip_opacity, self.config.fade_in_ms)

    def hide(self) -> None:
        self._fade(0.0, self.config.fade_out_ms)

    def move(self, x: float, y: float) -> None:
        # y axis is inverted: subtracting moves the label up
        self.text.set_position((x, y - self.config.tooltip_offset_px))

    def advance(self, elapsed_ms: float) -> bool:
        """Step the current fade by `elapsed_ms`. Returns True while still fading."""
        if self.alpha == self._target:
            return False
        delta = self._rate * elapsed_ms
        remaining = self._target - self.alpha
        if abs(remaining) <= delta + 1e-9:
            new = self._target
        else:
            new = self.alpha + math.copysign(delta, remaining)
        self._apply(new)
        return new != self._target

    def _fade(self, target: float, duration_ms: float) -> None:
        self._target = target
        if duration_ms <= 0:
            self._apply(target)
            return
        self._rate = abs(target - self.alpha) / duration_ms
        self._start_timer()

    def _start_timer(self) -> None:
        if self._timer is None:
            self._timer = self.ax.figure.canvas.new_timer(interval=self.config.frame_ms)
            self._timer.add_callback(self._on_tick)
        self._timer.start()

    def _on_tick(self) -> None:
        # must not return a falsy value: matplotlib drops callbacks that return 0
        if not self.advance(self.config.frame_ms):
            self._timer.stop()
        self.ax.figure.canvas.draw_idle()

    def _apply(self, alpha: float) -> None:
        self.alpha = alpha
        self.text.set_alpha(alpha)
        self.text.get_bbox_patch().set_alpha(alpha)
        self.text.set_visible(alpha > 0)


@dataclass
class BarChart:
    """A drawn chart: figure, axes, one patch per bar and the tooltip."""
    figure: object
    ax: object
    data: ChartData
    patches: List[Rectangle]
    tooltip: Tooltip
    active: Optional[int] = None
    _cid: Optional[int] = field(default=None, repr=False)

    def bar_at(self, x: float, y: float) -> Optional[Bar]:
        for bar in self.data.bars:
            if bar.contains(x, y):
                return bar
        return None

    def hover(self, bar: Optional[Bar], x: float = 0.0, y: float = 0.0) -> None:
        """Pointer is over `bar` (or over no bar when None)."""
        if bar is None:
            if self.active is not None:
                self.active = None
                self.tooltip.hide()
                self.figure.canvas.draw_idle()
            return
        if bar.index != self.active:
            self.active = bar.index
            self.tooltip.show(bar.count, x, y)
        else:
            self.tooltip.move(x, y)
        self.figure.canvas.draw_idle()

    def on_move(self, event) -> None:
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            self.hover(None)
            return
        self.hover(self.bar_at(event.xdata, event.ydata), event.xdata, event.ydata)

    def connect(self) -> "BarChart":
        if self._cid is None:
            self._cid = self.figure.canvas.mpl_connect("motion_notify_event", self.on_move)
        return self

    def disconnect(self) -> None:
        if self._cid is not None:
            self.figure.canvas.mpl_disconnect(self._cid)
            self._cid = None


def draw_chart(data: ChartData, config: Optional[ChartConfig] = None, ax=None) -> BarChart:
    """Draw the yearly bar chart. Zero aggregates draws empty axes."""
    config = config or ChartConfig()
    width, height = data.width, data.height

    if ax is None:
        total_w = width + config.margin_left + config.margin_right
        total_h = height + config.margin_top + config.margin_bottom
        fig = plt.figure(figsize=(total_w / config.dpi, total_h / config.dpi), dpi=config.dpi)
        ax = fig.add_axes([
            config.margin_left / total_w,
            config.margin_bottom / total_h,
            width / total_w,
            height / total_h,
        ])
    else:
        fig = ax.figure

    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)

    patches: List[Rectangle] = []
    for bar in data.bars:
        rect = Rectangle((bar.x, bar.y), bar.width, bar.height, facecolor=config.bar_color)
        ax.add_patch(rect)
        patches.append(rect)

    # left axis: count ticks
    ticks = data.scales.y.ticks(config.y_ticks) if data.aggregates else []
    y_scale = data.scales.y
    ax.yaxis.set_major_locator(ticker.FixedLocator([y_scale(t) for t in ticks]))
    # tick positions are pixels: label them with the count they stand for
    ax.yaxis.set_major_formatter(ticker.FuncFormatter(lambda px, pos: f"{y_scale.invert(px):g}"))

    # bottom axis: one label per year slot
    band = data.scales.year
    ax.set_xticks([band.center(label) for label in band.domain])
    ax.set_xticklabels(band.domain, rotation=45 if config.rotate_year_labels else 0,
                       ha="right" if config.rotate_year_labels else "center")

    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.tick_params(length=0)
    if config.title:
        ax.set_title(config.title)

    tooltip = Tooltip(ax, config)
    return BarChart(figure=fig, ax=ax, data=data, patches=patches, tooltip=tooltip)


def save_chart(chart: BarChart, path: str, dpi: Optional[int] = None) -> str:
    """Write the chart to PNG/SVG/PDF (picked from the file suffix)."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    chart.figure.savefig(path, dpi=dpi or chart.figure.dpi)
    return path


def show_chart(chart: BarChart) -> None:
    """Open an interactive window with hover tooltips."""
    chart.connect()
    plt.show()


def close_chart(chart: BarChart) -> None:
    chart.disconnect()
    plt.close(chart.figure)

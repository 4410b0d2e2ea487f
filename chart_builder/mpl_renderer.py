"""matplotlib backend for the chart.

Bars are Rectangle patches in the chart's pixel space: the axes span the inner
drawing area with x in [0, width] and y running top-down (ylim height -> 0),
so the chart's SVG geometry is used as-is. Transitions are played on a canvas
timer; pointer motion is hit-tested against the patches and forwarded to the
chart's hover handlers.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from pathlib import Path
from typing import Callable, Dict, Optional

from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

import params
from .config import ChartConfig
from .errors import ConfigError
from .renderer import AxisSpec, Overlay, PointerEvent, PointerHandlers
from .transitions import TransitionQueue

logger = logging.getLogger(__name__)

FRAME_INTERVAL = 16  # ms between animation steps
DPI = 100

# attributes an update transition starts from wherever the patch currently is
LIVE_KEYS = ("x", "y", "width", "height", "fill")


def _now_ms() -> float:
    return time.monotonic() * 1000.0


class MatplotlibRenderer:
    def __init__(self, figure: Optional[Figure] = None, dpi: int = DPI, clock: Callable[[], float] = _now_ms,
                 animate: bool = True):
        self._figure = figure
        self.dpi = dpi
        self.clock = clock
        self.animate = animate
        self.fig: Optional[Figure] = None
        self.ax = None
        self.patches: Dict[str, Rectangle] = {}
        self.queue = TransitionQueue()
        self.tooltip = None
        self.no_data = None
        self.hover: Optional[str] = None
        self._handlers: Optional[PointerHandlers] = None
        self._timer = None
        self._baseline = 0.0
        self._page_height = 0.0

    def mount(self, config: ChartConfig, width: float, height: float, handlers: PointerHandlers):
        if self.fig is not None:
            raise ConfigError("Renderer is already mounted")
        if not config.parent_element:
            raise ConfigError("Chart needs a parent element to attach to")
        W, H = config.container_width, config.container_height
        fig = self._figure
        if fig is None:
            fig = Figure(figsize=(W / self.dpi, H / self.dpi), dpi=self.dpi)
        else:
            fig.set_size_inches(W / self.dpi, H / self.dpi)
            fig.set_dpi(self.dpi)
        fig.set_label(config.parent_element)
        self.fig = fig
        self._handlers = handlers
        self._baseline = height
        self._page_height = H

        m = config.margin
        ax = fig.add_axes((m.left / W, m.bottom / H, width / W, height / H))
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.spines["top"].set_visible(False)
        ax.spines["right"].set_visible(False)
        ax.set_xlabel(params.X_AXIS_TITLE)
        ax.set_ylabel(params.Y_AXIS_TITLE)
        self.ax = ax

        self.no_data = ax.text(width / 2, height / 2, params.NO_DATA_TEXT, ha="center", va="center", visible=False)
        self.tooltip = fig.text(0, 0, "", ha="left", va="top", fontsize=9, zorder=10, visible=False,
                                bbox=dict(boxstyle="round,pad=0.5", fc="white", ec="#999999", alpha=0.95))

        canvas = fig.canvas
        canvas.mpl_connect("motion_notify_event", self._on_motion)
        canvas.mpl_connect("axes_leave_event", self._on_leave)
        canvas.mpl_connect("figure_leave_event", self._on_leave)
        self._timer = canvas.new_timer(interval=FRAME_INTERVAL)
        self._timer.add_callback(self.step)

    # drawing

    def _current(self, patch: Rectangle) -> Dict[str, object]:
        r, g, b, _ = patch.get_facecolor()
        return {
            "x": patch.get_x(), "y": patch.get_y(),
            "width": patch.get_width(), "height": patch.get_height(),
            "fill": "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255)),
        }

    @staticmethod
    def _apply(patch: Rectangle, values: Dict[str, object]):
        for k, v in values.items():
            if k == "x":
                patch.set_x(v)
            elif k == "y":
                patch.set_y(v)
            elif k == "width":
                patch.set_width(v)
            elif k == "height":
                patch.set_height(v)
            elif k == "fill":
                patch.set_facecolor(v)
            elif k == "opacity":
                patch.set_alpha(v)

    def draw_bars(self, frame):
        now = self.clock()
        for bar in frame.bars:
            patch = self.patches.get(bar.key)
            if patch is None:
                patch = Rectangle((bar.x, self._baseline), bar.width, 0.0, facecolor=bar.fill, linewidth=0)
                patch.set_gid(bar.key)
                self.ax.add_patch(patch)
                self.patches[bar.key] = patch
            # a new frame interrupts whatever this bar was doing
            self.queue.cancel(bar.key)
            if not self.animate or not bar.transitions:
                self._apply(patch, {"x": bar.x, "y": bar.y, "width": bar.width, "height": bar.height,
                                    "fill": bar.fill, "opacity": bar.opacity})
                continue
            live = self._current(patch)
            for t in bar.transitions.values():
                start = dict(t.start)
                for k in LIVE_KEYS:
                    if k in start:
                        start[k] = live[k]
                t = dataclasses.replace(t, start=start)
                self._apply(patch, t.values_at(0))
                self.queue.schedule(bar.key, t, now)
        for bar in frame.exited:
            if frame.remove_exited:
                self.queue.cancel(bar.key)
                patch = self.patches.pop(bar.key, None)
                if patch is not None:
                    patch.remove()
        self.no_data.set_visible(frame.empty)
        if len(self.queue):
            self._timer.start()
        self.fig.canvas.draw_idle()

    def step(self):
        """Advance running transitions to the current clock."""
        for key, values in self.queue.step(self.clock()):
            patch = self.patches.get(key)
            if patch is not None:
                self._apply(patch, values)
        if not len(self.queue):
            self._timer.stop()
        self.fig.canvas.draw_idle()

    def finish(self):
        """Jump every running transition to its end state."""
        for key, values in self.queue.finish():
            patch = self.patches.get(key)
            if patch is not None:
                self._apply(patch, values)
        self._timer.stop()
        self.fig.canvas.draw_idle()

    def draw_axes(self, x_axis: AxisSpec, y_axis: AxisSpec):
        # tick positions snap; matplotlib has no tick-position tween
        ax = self.ax
        ax.set_xticks([p for _, p in x_axis.ticks], [label for label, _ in x_axis.ticks], rotation=90, fontsize=7)
        ax.set_yticks([p for _, p in y_axis.ticks], [label for label, _ in y_axis.ticks], fontsize=7)
        ax.set_xlim(0, x_axis.length)
        ax.set_ylim(y_axis.length, 0)
        self.fig.canvas.draw_idle()

    # tooltip

    def show_overlay(self, overlay: Overlay):
        self.tooltip.set_text(overlay.text())
        self.tooltip.set_visible(True)
        self.move_overlay(overlay.left, overlay.top)

    def move_overlay(self, left: float, top: float):
        W = self.fig.get_figwidth() * self.fig.dpi
        H = self.fig.get_figheight() * self.fig.dpi
        self.tooltip.set_position((left / W, 1 - top / H))
        self.fig.canvas.draw_idle()

    def hide_overlay(self):
        self.hover = None
        self.tooltip.set_visible(False)
        self.fig.canvas.draw_idle()

    # pointer events

    def hit(self, event) -> Optional[str]:
        if event.inaxes is not self.ax:
            return None
        for key, patch in reversed(list(self.patches.items())):
            if patch.contains(event)[0]:
                return key
        return None

    def _page_event(self, event) -> PointerEvent:
        return PointerEvent(page_x=event.x, page_y=self.fig.get_figheight() * self.fig.dpi - event.y)

    def _on_motion(self, event):
        key = self.hit(event)
        page = self._page_event(event)
        if key != self.hover:
            if self.hover is not None:
                self._handlers.pointer_leave()
            self.hover = key
            if key is not None:
                self._handlers.pointer_over(key, page)
        elif key is not None:
            self._handlers.pointer_move(page)

    def _on_leave(self, event):
        if self.hover is not None:
            self.hover = None
            self._handlers.pointer_leave()

    def save(self, path: Path):
        self.finish()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.fig.savefig(path, dpi=self.dpi)
        logger.info("Wrote %s", path)

"""The bar chart component.

Chart owns the configuration, both scales and the data-to-bar binding. Each
update() recomputes the scale domains from the current data and render()
joins records to bars by state name, so a state keeps the same Bar object
(and on-screen element) across updates. Drawing is delegated to a Renderer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

import params
import utils
from .config import ChartConfig, validate_config
from .records import Record, ordered
from .renderer import AxisSpec, Overlay, PointerEvent, Renderer, SceneRenderer
from .scales import BandScale, LinearScale, format_tick
from .scene import Document
from .transitions import Transition

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Bar:
    """One rectangle; identity is stable per state for the life of the chart."""

    key: str
    record: Record
    index: int = 0
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    fill: str = params.FALLBACK_COLOR
    opacity: float = 1.0
    classes: str = "bar"
    entered: bool = False
    active: bool = True
    transitions: Dict[str, Transition] = field(default_factory=dict)


@dataclass
class Frame:
    """Result of one render pass."""

    bars: Tuple[Bar, ...]
    entered: Tuple[Bar, ...]
    exited: Tuple[Bar, ...]
    remove_exited: bool = False

    @property
    def empty(self) -> bool:
        return not self.bars


class Chart:
    def __init__(self, config: ChartConfig, data: Sequence[Record] = (), renderer: Optional[Renderer] = None):
        validate_config(config)
        self.config = config
        self.data: Tuple[Record, ...] = tuple(data)
        if renderer is None:
            renderer = SceneRenderer(Document(config.parent_element))
        self.renderer = renderer

        # inner drawing area; margins hold the axes and titles
        self.width = config.inner_width
        self.height = config.inner_height

        self.x_scale = BandScale(range=(0, self.width), padding_inner=params.BAND_PADDING_INNER)
        self.y_scale = LinearScale(domain=(0, 0), range=(self.height, 0))
        self.x_axis: Optional[AxisSpec] = None
        self.y_axis: Optional[AxisSpec] = None

        self._bars: Dict[str, Bar] = {}
        self._render_data: Tuple[Record, ...] = ()
        self.frame: Optional[Frame] = None
        self.hovered: Optional[str] = None
        self.overlay: Optional[Overlay] = None

        self.renderer.mount(config, self.width, self.height, self)
        logger.debug("Mounted chart on %s (%dx%d inner)", config.parent_element, self.width, self.height)

    @property
    def bars(self) -> Dict[str, Bar]:
        """Bars bound to the current data, in render order."""
        if self.frame is None:
            return {}
        return {b.key: b for b in self.frame.bars}

    @property
    def all_bars(self) -> Dict[str, Bar]:
        """Every bar on the surface, including stale ones kept after their state left the data."""
        return dict(self._bars)

    @property
    def render_data(self) -> Tuple[Record, ...]:
        return self._render_data

    def update(self, data: Optional[Sequence[Record]] = None):
        """Recompute scales for new (or the current) data and render.

        The caller's sequence is never modified; reverse_order is applied to a
        copy each time.
        """
        if data is not None:
            self.data = tuple(data)
        self._render_data = ordered(self.data, reverse=self.config.reverse_order)

        self.x_scale.domain = [r.state for r in self._render_data]
        top = max((r.percent for r in self._render_data), default=0.0)
        self.y_scale.domain = (0, top)
        self.render()

    def toggle_order(self):
        self.config.reverse_order = not self.config.reverse_order
        self.update()

    def render(self):
        bandwidth = self.x_scale.bandwidth
        baseline = self.y_scale(0)

        seen = set()
        active, entered = [], []
        for record in self._render_data:
            key = record.state
            if key in seen:
                logger.warning("Duplicate state %s in chart data; keeping the first row", key)
                continue
            seen.add(key)
            i = len(active)

            bar = self._bars.get(key)
            is_new = bar is None
            if is_new:
                bar = Bar(key=key, record=record)
                self._bars[key] = bar
                entered.append(bar)

            x = self.x_scale(key)
            y = self.y_scale(record.percent)
            height = self.height - y
            fill = utils.bucket_color(record.percent)

            if is_new:
                # placed at once; height grows up from the baseline, staggered by index
                enter = Transition("enter", params.ENTER_DURATION, delay=params.ENTER_STAGGER * i,
                                   start={"y": baseline, "height": 0.0}, end={"y": y, "height": height})
                update = Transition("update", params.UPDATE_DURATION,
                                    start={"opacity": params.UPDATE_START_OPACITY, "fill": fill},
                                    end={"opacity": 1.0, "fill": fill})
                bar.transitions = {"enter": enter, "update": update}
            else:
                update = Transition("update", params.UPDATE_DURATION,
                                    start={"opacity": params.UPDATE_START_OPACITY, "fill": bar.fill,
                                           "x": bar.x, "width": bar.width, "y": bar.y, "height": bar.height},
                                    end={"opacity": 1.0, "fill": fill,
                                         "x": x, "width": bandwidth, "y": y, "height": height})
                bar.transitions = {"update": update}

            bar.record = record
            bar.index = i
            bar.entered = is_new
            bar.active = True
            bar.classes = "bar"
            bar.x, bar.width, bar.y, bar.height = x, bandwidth, y, height
            bar.fill = fill
            bar.opacity = 1.0
            active.append(bar)

        exited = []
        for key, bar in list(self._bars.items()):
            if key in seen or not bar.active:
                continue
            bar.active = False
            bar.entered = False
            bar.transitions = {}
            exited.append(bar)
            if self.config.remove_exited:
                del self._bars[key]
        if self.hovered is not None and self.hovered not in seen:
            self.pointer_leave()

        self.frame = Frame(bars=tuple(active), entered=tuple(entered), exited=tuple(exited),
                           remove_exited=self.config.remove_exited)
        if self.frame.empty:
            logger.info("No data to draw on %s", self.config.parent_element)
        self.renderer.draw_bars(self.frame)

        self.x_axis = AxisSpec(
            orient="bottom",
            ticks=[(s, self.x_scale.center(s)) for s in self.x_scale.ticks()],
            title=params.X_AXIS_TITLE,
            length=self.width,
            transition=Transition("axis", params.X_AXIS_DURATION),
        )
        self.y_axis = AxisSpec(
            orient="left",
            ticks=[(format_tick(v), self.y_scale(v)) for v in self.y_scale.ticks(params.Y_TICK_COUNT)],
            title=params.Y_AXIS_TITLE,
            length=self.height,
        )
        self.renderer.draw_axes(self.x_axis, self.y_axis)
        return self.frame

    # pointer interaction

    def pointer_over(self, key: str, event: PointerEvent):
        bar = self._bars.get(key)
        if bar is None:
            return
        self.hovered = key
        self.overlay = Overlay.for_record(bar.record, event, self.config.tooltip_padding)
        self.renderer.show_overlay(self.overlay)

    def pointer_move(self, event: PointerEvent):
        if self.overlay is None:
            return
        pad = self.config.tooltip_padding
        self.overlay.left = event.page_x + pad
        self.overlay.top = event.page_y + pad
        self.renderer.move_overlay(self.overlay.left, self.overlay.top)

    def pointer_leave(self):
        self.hovered = None
        self.overlay = None
        self.renderer.hide_overlay()

"""Renderer interface and the scene-graph (SVG) renderer.

The chart computes bars, axes and the tooltip overlay; a Renderer puts them on
a surface. SceneRenderer builds an in-memory SVG tree and is what the static
page export and the tests use. MatplotlibRenderer (mpl_renderer.py) draws the
same frames on a matplotlib figure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, Tuple

import params
from .config import TOOLTIP_ELEMENT, ChartConfig
from .errors import ConfigError
from .records import Record
from .scene import Document, Element
from .transitions import Transition

if TYPE_CHECKING:
    from .chart import Bar, Frame


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in page pixels (origin top-left)."""

    page_x: float
    page_y: float


@dataclass
class AxisSpec:
    orient: str  # "bottom" or "left"
    ticks: List[Tuple[str, float]]  # (label, pixel position)
    title: str
    length: float
    transition: Optional[Transition] = None
    tick_size_inner: int = 6
    tick_size_outer: int = 0


@dataclass
class Overlay:
    record: Record
    left: float
    top: float
    fields: List[Tuple[str, object]] = field(default_factory=list)

    @classmethod
    def for_record(cls, record: Record, event: PointerEvent, padding: float) -> "Overlay":
        fields = [(label, getattr(record, name)) for name, label in params.TOOLTIP_FIELDS]
        return cls(record=record, left=event.page_x + padding, top=event.page_y + padding, fields=fields)

    def html(self) -> str:
        items = "".join(f"<li>{escape(label)}: {escape(str(value))}</li>" for label, value in self.fields)
        return f'<div class="tooltip-label"><ul>{items}</ul></div>'

    def text(self) -> str:
        return "\n".join(f"{label}: {value}" for label, value in self.fields)


class PointerHandlers(Protocol):
    def pointer_over(self, key: str, event: PointerEvent) -> None: ...

    def pointer_move(self, event: PointerEvent) -> None: ...

    def pointer_leave(self) -> None: ...


class Renderer(Protocol):
    def mount(self, config: ChartConfig, width: float, height: float, handlers: PointerHandlers) -> None: ...

    def draw_bars(self, frame: "Frame") -> None: ...

    def draw_axes(self, x_axis: AxisSpec, y_axis: AxisSpec) -> None: ...

    def show_overlay(self, overlay: Overlay) -> None: ...

    def move_overlay(self, left: float, top: float) -> None: ...

    def hide_overlay(self) -> None: ...


class SceneRenderer:
    """Render chart frames into a Document's SVG tree."""

    def __init__(self, document: Document):
        self.document = document
        self.svg: Optional[Element] = None
        self.chart: Optional[Element] = None
        self.x_axis_g: Optional[Element] = None
        self.y_axis_g: Optional[Element] = None
        self.tooltip: Optional[Element] = None
        self.no_data: Optional[Element] = None
        self.rects: Dict[str, Element] = {}
        self._handlers: Optional[PointerHandlers] = None

    @property
    def mounted(self) -> bool:
        return self.svg is not None

    def mount(self, config: ChartConfig, width: float, height: float, handlers: PointerHandlers):
        container = self.document.select(config.parent_element)
        if container is None:
            raise ConfigError(f"Parent element {config.parent_element!r} not found on the page")
        if self.mounted:
            raise ConfigError("Renderer is already mounted")
        self._handlers = handlers
        m = config.margin

        self.svg = container.append("svg", width=config.container_width, height=config.container_height,
                                    xmlns="http://www.w3.org/2000/svg")
        self.chart = self.svg.append("g", transform=f"translate({m.left},{m.top})")

        self.x_axis_g = self.chart.append("g", class_="axis x-axis", transform=f"translate(0,{height})")
        title = self.x_axis_g.append("text", class_="axis-label x", y=20, x=width / 2, dy="2.5em", fill="black")
        title.css(text_anchor="middle")
        title.text = params.X_AXIS_TITLE

        self.y_axis_g = self.chart.append("g", class_="axis y-axis")
        # rotated -90 around the origin: y moves it left, x moves it down
        title = self.y_axis_g.append("text", class_="axis-label y", transform="rotate(-90)",
                                     y=-m.top + 20, x=-height / 2, dy="1em", fill="black")
        title.css(text_anchor="middle")
        title.text = params.Y_AXIS_TITLE

        self.no_data = self.chart.append("text", class_="no-data", x=width / 2, y=height / 2, fill="black")
        self.no_data.css(text_anchor="middle", display="none")
        self.no_data.text = params.NO_DATA_TEXT

        self.tooltip = self.document.select(TOOLTIP_ELEMENT) or self.document.add(TOOLTIP_ELEMENT)
        self.tooltip.css(opacity=0)

    def _rect_for(self, key: str) -> Element:
        rect = self.rects.get(key)
        if rect is None:
            handlers = self._handlers
            rect = self.chart.append("rect", class_="bar")
            rect.attrs["data-state"] = key
            rect.on("mouseover", lambda event, key=key: handlers.pointer_over(key, event))
            rect.on("mousemove", lambda event: handlers.pointer_move(event))
            rect.on("mouseleave", lambda event=None: handlers.pointer_leave())
            self.rects[key] = rect
        return rect

    def draw_bars(self, frame: "Frame"):
        for bar in frame.bars:
            rect = self._rect_for(bar.key)
            rect.attr(class_=bar.classes, x=bar.x, y=bar.y, width=bar.width, height=bar.height, fill=bar.fill)
            rect.css(opacity=bar.opacity)
            for t in bar.transitions.values():
                rect.transition(t)
        for bar in frame.exited:
            if frame.remove_exited:
                rect = self.rects.pop(bar.key, None)
                if rect is not None:
                    rect.remove()
        self.no_data.css(display="inline" if frame.empty else "none")

    def draw_axes(self, x_axis: AxisSpec, y_axis: AxisSpec):
        for g, axis in ((self.x_axis_g, x_axis), (self.y_axis_g, y_axis)):
            for el in g.select_all(class_="tick") + g.select_all(class_="domain"):
                el.remove()
            self._draw_axis(g, axis)
            if axis.transition is not None:
                g.transition(axis.transition)

    def _draw_axis(self, g: Element, axis: AxisSpec):
        k = axis.tick_size_outer
        if axis.orient == "bottom":
            g.append("path", class_="domain", stroke="currentColor", d=f"M0,{k}V0H{axis.length}V{k}")
        else:
            g.append("path", class_="domain", stroke="currentColor", d=f"M{-k},{axis.length}H0V0H{-k}")
        for label, pos in axis.ticks:
            if axis.orient == "bottom":
                tick = g.append("g", class_="tick", transform=f"translate({pos:g},0)")
                tick.append("line", stroke="currentColor", y2=axis.tick_size_inner)
                text = tick.append("text", fill="currentColor", y=axis.tick_size_inner + 3, dy="0.71em")
            else:
                tick = g.append("g", class_="tick", transform=f"translate(0,{pos:g})")
                tick.append("line", stroke="currentColor", x2=-axis.tick_size_inner)
                text = tick.append("text", fill="currentColor", x=-(axis.tick_size_inner + 3), dy="0.32em")
            text.text = label

    def show_overlay(self, overlay: Overlay):
        self.tooltip.html = overlay.html()
        self.tooltip.css(opacity=1)
        self.move_overlay(overlay.left, overlay.top)

    def move_overlay(self, left: float, top: float):
        self.tooltip.css(left=f"{left:g}px", top=f"{top:g}px")

    def hide_overlay(self):
        self.tooltip.css(opacity=0)

    def svg_markup(self) -> str:
        if self.svg is None:
            return ""
        return self.svg.to_svg()

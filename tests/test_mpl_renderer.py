"""matplotlib backend: patches, timed transitions, hover and PNG output."""

from __future__ import annotations

import pytest
from matplotlib.backend_bases import MouseEvent
from matplotlib.colors import to_hex
from matplotlib.figure import Figure

from chart_builder.chart import Chart
from chart_builder.config import PARENT_ELEMENT, make_config
from chart_builder.errors import ConfigError
from chart_builder.main import build_interactive
from chart_builder.mpl_renderer import MatplotlibRenderer
from chart_builder.records import Filters

from conftest import rec


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def mpl_chart():
    clock = FakeClock()
    renderer = MatplotlibRenderer(clock=clock)
    chart = Chart(make_config(PARENT_ELEMENT), (), renderer)
    return chart, renderer, clock


def test_mount_lays_out_pixel_axes(mpl_chart):
    chart, renderer, _ = mpl_chart
    fig = renderer.fig
    assert tuple(fig.get_size_inches()) == pytest.approx((12, 7))
    assert renderer.ax.get_xlim() == pytest.approx((0, 1100))
    assert renderer.ax.get_ylim() == pytest.approx((530, 0))
    assert renderer.ax.get_xlabel() == "State"
    assert renderer.ax.get_ylabel() == "Percent Drinking"
    assert fig.get_label() == PARENT_ELEMENT
    with pytest.raises(ConfigError):
        Chart(make_config(PARENT_ELEMENT), (), renderer)


def test_new_bars_grow_from_the_baseline(mpl_chart):
    chart, renderer, clock = mpl_chart
    chart.update([rec("CA", 25.4), rec("TX", 18.0)])
    patch = renderer.patches["CA"]
    assert patch.get_height() == 0
    assert patch.get_y() == pytest.approx(530)
    assert patch.get_x() == pytest.approx(chart.bars["CA"].x)
    assert patch.get_alpha() == pytest.approx(0.5)

    clock.now = 1000
    renderer.step()
    assert patch.get_height() == pytest.approx(530)
    assert patch.get_y() == pytest.approx(0)
    assert patch.get_alpha() == pytest.approx(1)
    assert to_hex(patch.get_facecolor()) == "#36bbb7"
    assert len(renderer.queue) == 0


def test_update_animates_from_current_geometry(mpl_chart):
    chart, renderer, clock = mpl_chart
    chart.update([rec("CA", 25.4), rec("TX", 18.0)])
    clock.now = 2000
    renderer.step()
    tx = renderer.patches["TX"]
    start = tx.get_height()

    chart.update([rec("CA", 25.4), rec("TX", 22.0)])
    final = chart.bars["TX"].height
    assert tx.get_height() == pytest.approx(start)
    clock.now = 2500
    renderer.step()
    assert start < tx.get_height() < final
    renderer.finish()
    assert tx.get_height() == pytest.approx(final)
    assert to_hex(tx.get_facecolor()) == "#2ea29f"


def test_new_frame_interrupts_running_enter(mpl_chart):
    chart, renderer, clock = mpl_chart
    data = [rec("CA", 25.4), rec("TX", 12.7)]
    chart.update(data)
    clock.now = 250
    renderer.step()
    tx = renderer.patches["TX"]
    partial = tx.get_height()
    assert 0 < partial < 265

    chart.update(data)
    assert ("TX", "enter") not in renderer.queue
    assert ("TX", "update") in renderer.queue
    assert tx.get_height() == pytest.approx(partial)
    renderer.finish()
    assert tx.get_height() == pytest.approx(265)


def test_hover_move_and_leave(mpl_chart):
    chart, renderer, _ = mpl_chart
    chart.update([rec("CA", 25.4), rec("TX", 18.0)])
    renderer.finish()
    fig = renderer.fig
    bar = chart.bars["CA"]
    x, y = (int(v) for v in renderer.ax.transData.transform((bar.x + bar.width / 2, bar.y + bar.height / 2)))

    fig.canvas.callbacks.process("motion_notify_event", MouseEvent("motion_notify_event", fig.canvas, x, y))
    assert chart.hovered == "CA"
    assert renderer.tooltip.get_visible()
    assert renderer.tooltip.get_text().splitlines() == [
        "State: CA", "Gender: female", "Percent Drinking: 25.4", "Type: any",
    ]
    assert renderer.tooltip.get_position() == pytest.approx(((x + 15) / 1200, (y - 15) / 700))

    fig.canvas.callbacks.process("motion_notify_event", MouseEvent("motion_notify_event", fig.canvas, x + 10, y))
    assert chart.hovered == "CA"
    assert renderer.tooltip.get_position()[0] == pytest.approx((x + 25) / 1200)

    fig.canvas.callbacks.process("motion_notify_event", MouseEvent("motion_notify_event", fig.canvas, 5, 5))
    assert chart.hovered is None
    assert not renderer.tooltip.get_visible()


def test_removed_bars_drop_their_patch():
    renderer = MatplotlibRenderer(animate=False)
    chart = Chart(make_config(PARENT_ELEMENT, remove_exited=True), (), renderer)
    chart.update([rec("CA", 25.4), rec("TX", 18.0)])
    chart.update([rec("CA", 25.4)])
    assert list(renderer.patches) == ["CA"]
    assert len(renderer.ax.patches) == 1


def test_empty_frame_shows_no_data_text(mpl_chart):
    chart, renderer, _ = mpl_chart
    chart.update([])
    assert renderer.no_data.get_visible()


def test_save_png(tmp_path):
    renderer = MatplotlibRenderer()
    chart = Chart(make_config(PARENT_ELEMENT), (), renderer)
    chart.update([rec("CA", 25.4), rec("TX", 18.0)])
    out = tmp_path / "plots" / "chart.png"
    renderer.save(out)
    assert out.exists() and out.stat().st_size > 0
    assert len(renderer.queue) == 0


def test_interactive_controls_refilter_the_chart(rows):
    chart, get_filters, (sex_radio, type_radio, _) = build_interactive(Figure(), rows)
    assert get_filters() == Filters("female", "any")
    assert list(chart.bars) == ["CA", "TX", "NY", "WA"]

    sex_radio.set_active(1)
    assert get_filters() == Filters("male", "any")
    assert list(chart.bars) == ["CA", "TX"]

    type_radio.set_active(1)
    assert get_filters() == Filters("male", "beer")
    assert chart.frame.empty

    chart.toggle_order()
    sex_radio.set_active(0)
    type_radio.set_active(0)
    assert list(chart.bars) == ["WA", "NY", "TX", "CA"]


def test_hover_comes_back_after_bar_leaves_and_returns():
    renderer = MatplotlibRenderer(clock=FakeClock())
    chart = Chart(make_config(PARENT_ELEMENT, remove_exited=True), (), renderer)
    fig = renderer.fig

    def move_to(key):
        renderer.finish()
        bar = chart.bars[key]
        x, y = (int(v) for v in renderer.ax.transData.transform((bar.x + bar.width / 2, bar.y + bar.height / 2)))
        fig.canvas.callbacks.process("motion_notify_event", MouseEvent("motion_notify_event", fig.canvas, x, y))

    chart.update([rec("CA", 25.4), rec("TX", 18.0)])
    move_to("TX")
    assert chart.hovered == "TX"

    chart.update([rec("CA", 25.4), rec("NY", 41.2)])
    assert chart.hovered is None
    assert renderer.hover is None
    assert not renderer.tooltip.get_visible()

    chart.update([rec("CA", 25.4), rec("TX", 18.0)])
    move_to("TX")
    assert chart.hovered == "TX"
    assert renderer.tooltip.get_visible()

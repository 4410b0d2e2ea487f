import logging
from pathlib import Path
from typing import Callable, Sequence, Tuple

from .chart import Chart
from .config import CSV_PATH, OUT_DIR, PLOTS_DIR, PARENT_ELEMENT, make_config
from .io_utils import ensure_dirs, load_records
from .mpl_renderer import MatplotlibRenderer
from .pages import filter_choices, make_chart_page, slug
from .records import Filters, Record, filter_records, group_by_filters

logger = logging.getLogger(__name__)

# room above the chart for the radio groups and the sort button
CONTROLS_MARGIN_TOP = 170


def write_pngs(records: Sequence[Record], plots_dir: Path) -> int:
    """One PNG per sex/type combination, default order, transitions finished."""
    count = 0
    for filters, data in group_by_filters(records).items():
        renderer = MatplotlibRenderer(animate=False)
        chart = Chart(make_config(PARENT_ELEMENT), data, renderer)
        chart.update()
        renderer.save(plots_dir / f"{slug(filters.sex)}_{slug(filters.type)}.png")
        count += 1
    return count


def build_site(csv_path: Path = CSV_PATH, out_dir: Path = OUT_DIR, png: bool = False) -> Path:
    records = load_records(csv_path)
    ensure_dirs(out_dir, png=png)
    frames = make_chart_page(records, out_dir)

    pngs = 0
    if png:
        pngs = write_pngs(records, out_dir / PLOTS_DIR.name)

    index = out_dir / "index.html"
    print(f"Done. Built {index} with {frames} chart frames" + (f" and {pngs} PNGs." if png else "."))
    return index


def build_interactive(fig, records: Sequence[Record]) -> Tuple[Chart, Callable[[], Filters], tuple]:
    """Mount a chart on `fig` with sex/type radio groups and a sort button.

    Returns the chart, the filter query function and the widgets (keep a
    reference to them or matplotlib stops delivering their events).
    """
    from matplotlib.widgets import Button, RadioButtons

    sexes, types = filter_choices(records)
    config = make_config(PARENT_ELEMENT, margin={"top": CONTROLS_MARGIN_TOP})
    renderer = MatplotlibRenderer(figure=fig)
    chart = Chart(config, (), renderer)

    W, H = config.container_width, config.container_height
    panel_h = (CONTROLS_MARGIN_TOP - 30) / H
    sex_ax = fig.add_axes((40 / W, 1 - (CONTROLS_MARGIN_TOP - 10) / H, 140 / W, panel_h))
    type_ax = fig.add_axes((200 / W, 1 - (CONTROLS_MARGIN_TOP - 10) / H, 220 / W, panel_h))
    sort_ax = fig.add_axes((1 - 170 / W, 1 - 60 / H, 120 / W, 36 / H))
    sex_ax.set_title("Sex", fontsize=9, loc="left")
    type_ax.set_title("Type", fontsize=9, loc="left")
    sex_radio = RadioButtons(sex_ax, sexes, active=0)
    type_radio = RadioButtons(type_ax, types, active=0)
    sort_button = Button(sort_ax, "Reverse order")

    def get_filters() -> Filters:
        return Filters(sex=sex_radio.value_selected, type=type_radio.value_selected)

    def refresh(_label=None):
        filters = get_filters()
        data = filter_records(records, filters)
        logger.debug("Filters %s -> %d rows", filters, len(data))
        chart.update(data)

    sex_radio.on_clicked(refresh)
    type_radio.on_clicked(refresh)
    sort_button.on_clicked(lambda _event: chart.toggle_order())

    refresh()
    return chart, get_filters, (sex_radio, type_radio, sort_button)


def run_interactive(csv_path: Path = CSV_PATH):
    import matplotlib.pyplot as plt

    records = load_records(csv_path)
    fig = plt.figure(num=PARENT_ELEMENT)
    chart, get_filters, widgets = build_interactive(fig, records)
    logger.info("Showing %d states for %s", len(chart.bars), get_filters())
    plt.show()
    return chart, widgets

import json
import logging
import re
from html import escape
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import params
from .chart import Chart
from .config import OUT_DIR, PARENT_ELEMENT, LAST_UPDATED, make_config
from .io_utils import write_text
from .records import Filters, Record, available_sexes, available_types, group_by_filters
from .renderer import SceneRenderer
from .scene import Document
from .templates import BASE_CSS, CHART_JS, PAGE_HTML

logger = logging.getLogger(__name__)

PAGE_TITLE = "Alcohol Consumption by U.S. State"


def slug(text: str) -> str:
    return re.sub(r"[^A-Za-z0-9]+", "-", text).strip("-").lower() or "none"


def filter_choices(records: Sequence[Record]) -> Tuple[List[str], List[str]]:
    """Sex and type choices for the toggle groups; defaults first when present."""
    sexes = available_sexes(records) or list(params.SEXES)
    types = available_types(records) or [params.DEFAULT_FILTERS["type"]]
    for choices, default in ((sexes, params.DEFAULT_FILTERS["sex"]), (types, params.DEFAULT_FILTERS["type"])):
        if default in choices:
            choices.remove(default)
            choices.insert(0, default)
    return sexes, types


def render_frame(data: Sequence[Record], reverse: bool = False) -> str:
    """Render one data set to SVG markup, with the tooltip fields on each rect."""
    config = make_config(PARENT_ELEMENT, reverse_order=reverse)
    renderer = SceneRenderer(Document(PARENT_ELEMENT))
    chart = Chart(config, data, renderer)
    chart.update()
    for key, bar in chart.bars.items():
        rect = renderer.rects[key]
        for name, _ in params.TOOLTIP_FIELDS:
            rect.attrs[f"data-{name}"] = str(getattr(bar.record, name))
    return renderer.svg_markup()


def render_controls(sexes: List[str], types: List[str]) -> str:
    lines = []
    for cls, choices in (("sex", sexes), ("type", types)):
        lines.append(f'      <div class="btn-group" role="group" data-group="{cls}">')
        for i, value in enumerate(choices):
            checked = " checked" if i == 0 else ""
            active = " active" if i == 0 else ""
            lines.append(
                f'        <label class="btn{active}"><input type="radio" name="{cls}" class="{cls}" '
                f'value="{escape(value)}"{checked} />{escape(value.title())}</label>'
            )
        lines.append("      </div>")
    return "\n".join(lines)


def make_chart_page(records: Sequence[Record], out_dir: Path = OUT_DIR) -> int:
    """Write index.html, styles.css and chart.js; return the number of chart frames.

    Every sex x type combination is rendered twice (default and reversed
    order); combinations missing from the data get the no-data frame.
    """
    sexes, types = filter_choices(records)
    groups: Dict[Filters, Tuple[Record, ...]] = group_by_filters(records)

    frames = []
    for sex in sexes:
        for type_ in types:
            data = groups.get(Filters(sex=sex, type=type_), ())
            if not data:
                logger.warning("No rows for sex=%s type=%s", sex, type_)
            for reverse in (False, True):
                order = "reversed" if reverse else "default"
                svg = render_frame(data, reverse=reverse)
                frames.append(
                    f'<div class="frame" data-sex="{escape(sex)}" data-type="{escape(type_)}" '
                    f'data-order="{order}" hidden>\n{svg}\n</div>'
                )

    html = PAGE_HTML.replace("%TITLE%", PAGE_TITLE)
    html = html.replace("%CONTROLS%", render_controls(sexes, types))
    html = html.replace("%FRAMES%", "\n".join(frames))
    html = html.replace("%LAST_UPDATED%", LAST_UPDATED)

    js = CHART_JS.replace("%TOOLTIP_PADDING%", str(params.TOOLTIP_PADDING))
    js = js.replace("%TOOLTIP_LABELS%", json.dumps(params.TOOLTIP_FIELDS))
    js = js.replace("%DEFAULT_SEX%", json.dumps(sexes[0])).replace("%DEFAULT_TYPE%", json.dumps(types[0]))

    write_text(out_dir / "index.html", html)
    write_text(out_dir / "styles.css", BASE_CSS)
    write_text(out_dir / "chart.js", js)
    return len(frames)

from dataclasses import dataclass, field
from pathlib import Path
import datetime

import params
from .errors import ConfigError

# Paths
CSV_PATH = Path("data/all_drinking_v2.csv")
OUT_DIR = Path("docs")
PLOTS_DIR = OUT_DIR / "plots"

# Element id the chart attaches to on the page
PARENT_ELEMENT = "#vis"
TOOLTIP_ELEMENT = "#tooltip"

# timestamp used in the page footer (UTC at build time)
LAST_UPDATED = datetime.datetime.now(datetime.UTC).strftime("%Y-%m-%d %H:%M UTC")

FOOTER_TEXT = "Percent of adults drinking, by state, sex and beverage type. Built as static HTML from CSV."


@dataclass(frozen=True)
class Margin:
    top: int = params.MARGIN["top"]
    right: int = params.MARGIN["right"]
    bottom: int = params.MARGIN["bottom"]
    left: int = params.MARGIN["left"]


@dataclass
class ChartConfig:
    """Per-chart settings.

    Only reverse_order is meant to change after the chart is built; flip it
    and call Chart.update() (or use Chart.toggle_order()) to re-sort.
    remove_exited drops bars for states that leave the data set; by default
    they stay on the surface with their last geometry.
    """

    parent_element: str
    container_width: int = params.CONTAINER_WIDTH
    container_height: int = params.CONTAINER_HEIGHT
    margin: Margin = field(default_factory=Margin)
    reverse_order: bool = False
    tooltip_padding: int = params.TOOLTIP_PADDING
    remove_exited: bool = False

    @property
    def inner_width(self) -> int:
        return self.container_width - self.margin.left - self.margin.right

    @property
    def inner_height(self) -> int:
        return self.container_height - self.margin.top - self.margin.bottom


def make_config(parent_element: str, **overrides) -> ChartConfig:
    """Build a ChartConfig, filling defaults for any option left out or passed as None.

    margin may be a Margin or a dict with any of top/right/bottom/left.
    """
    overrides = {k: v for k, v in overrides.items() if v is not None}
    margin = overrides.pop("margin", None)
    if isinstance(margin, dict):
        unknown_sides = set(margin) - set(Margin.__dataclass_fields__)
        if unknown_sides:
            raise ConfigError(f"Unknown margin sides: {', '.join(sorted(unknown_sides))}")
        margin = Margin(**{**params.MARGIN, **margin})
    if margin is not None:
        overrides["margin"] = margin
    unknown = set(overrides) - set(ChartConfig.__dataclass_fields__)
    if unknown:
        raise ConfigError(f"Unknown chart options: {', '.join(sorted(unknown))}")
    config = ChartConfig(parent_element=parent_element, **overrides)
    validate_config(config)
    return config


def validate_config(config: ChartConfig):
    if not config.parent_element or not str(config.parent_element).strip():
        raise ConfigError("Chart needs a parent element to attach to")
    m = config.margin
    for side in ("top", "right", "bottom", "left"):
        value = getattr(m, side)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"Margin {side} must be a number (got {value!r})")
        if value < 0:
            raise ConfigError(f"Margin {side} must not be negative (got {value})")
    if config.inner_width <= 0 or config.inner_height <= 0:
        raise ConfigError(
            f"Container {config.container_width}x{config.container_height} leaves no drawing area "
            f"after margins ({config.inner_width}x{config.inner_height})"
        )
    if config.tooltip_padding < 0:
        raise ConfigError(f"Tooltip padding must not be negative (got {config.tooltip_padding})")

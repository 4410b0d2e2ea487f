"""Error types raised by the chart builder."""


class ChartError(Exception):
    """Base class for chart builder failures."""


class LoadError(ChartError):
    """The data source is unreachable or malformed."""


class ConfigError(ChartError):
    """Invalid chart configuration (container, margins, dimensions)."""

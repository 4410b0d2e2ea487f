import math
from bisect import bisect_right
from typing import List, Tuple

import params

_BUCKET_LOWS = [lo for lo, _ in params.BUCKET_COLORS]


def bucket_color(percent) -> str:
    """Return the bar color for a percent value.

    Buckets are half-open [lo, next_lo) except the last, which is closed at
    params.BUCKET_UPPER_BOUND. Anything outside the table gets FALLBACK_COLOR.
    """
    try:
        p = float(percent)
    except (ValueError, TypeError):
        return params.FALLBACK_COLOR
    if math.isnan(p) or p < _BUCKET_LOWS[0] or p > params.BUCKET_UPPER_BOUND:
        return params.FALLBACK_COLOR
    return params.BUCKET_COLORS[bisect_right(_BUCKET_LOWS, p) - 1][1]


def bucket_bounds() -> List[Tuple[float, float, str]]:
    """The bucket table as contiguous (lo, hi, color) ranges."""
    highs = _BUCKET_LOWS[1:] + [params.BUCKET_UPPER_BOUND]
    return [(lo, hi, color) for (lo, color), hi in zip(params.BUCKET_COLORS, highs)]


def percent_str(value) -> str:
    """Format a percent for tick labels (ex. 12.0, 7.5)."""
    if value is None:
        return ''
    return params.TICK_FORMAT.format(float(value))

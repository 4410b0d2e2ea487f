"""Band and linear scales with d3-compatible output.

The band scale places one bar per state across the inner width; the linear
scale maps percent to a y pixel (range runs bottom -> top, so larger values
get a smaller y).
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

import params
import utils

E10 = math.sqrt(50)
E5 = math.sqrt(10)
E2 = math.sqrt(2)


def _js_round(x: float) -> int:
    # Math.round: halves go up, not to even
    return math.floor(x + 0.5)


def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= E10 else 5 if error >= E5 else 2 if error >= E2 else 1
    if power < 0:
        inc = 10 ** -power / factor
        i1 = _js_round(start * inc)
        i2 = _js_round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10 ** power * factor
        i1 = _js_round(start / inc)
        i2 = _js_round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1
    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def ticks(start: float, stop: float, count: int) -> List[float]:
    """Nicely rounded tick values (steps of 1, 2 or 5 x 10^k) covering [start, stop]."""
    if count <= 0:
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    i1, i2, inc = _tick_spec(start, stop, count)
    if i2 < i1:
        return []
    n = i2 - i1 + 1
    if inc < 0:
        out = [(i1 + i) / -inc for i in range(n)]
    else:
        out = [(i1 + i) * inc for i in range(n)]
    return out[::-1] if reverse else out


def format_tick(value: float) -> str:
    return utils.percent_str(value)


class BandScale:
    """Discrete scale: each domain key gets a band of equal width."""

    def __init__(self, domain: Iterable[str] = (), range: Tuple[float, float] = (0.0, 1.0),
                 padding_inner: float = params.BAND_PADDING_INNER, padding_outer: float = 0.0,
                 align: float = 0.5):
        self._range = (float(range[0]), float(range[1]))
        self.padding_inner = padding_inner
        self.padding_outer = padding_outer
        self.align = align
        self.domain = domain

    @property
    def domain(self) -> List[str]:
        return list(self._domain)

    @domain.setter
    def domain(self, values: Iterable[str]):
        # duplicates collapse onto the first occurrence
        self._domain = list(dict.fromkeys(values))
        self._index = {k: i for i, k in enumerate(self._domain)}
        self._rescale()

    @property
    def range(self) -> Tuple[float, float]:
        return self._range

    @range.setter
    def range(self, value: Tuple[float, float]):
        self._range = (float(value[0]), float(value[1]))
        self._rescale()

    def _rescale(self):
        n = len(self._domain)
        r0, r1 = self._range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        self.step = (stop - start) / max(1, n - self.padding_inner + self.padding_outer * 2)
        start += (stop - start - self.step * (n - self.padding_inner)) * self.align
        self.bandwidth = self.step * (1 - self.padding_inner)
        values = [start + self.step * i for i in range(n)]
        self._values = values[::-1] if reverse else values

    def __call__(self, key: str) -> Optional[float]:
        i = self._index.get(key)
        return None if i is None else self._values[i]

    def center(self, key: str) -> Optional[float]:
        x = self(key)
        return None if x is None else x + self.bandwidth / 2

    def ticks(self) -> List[str]:
        return self.domain


class LinearScale:
    """Continuous scale mapping [d0, d1] onto [r0, r1].

    A degenerate domain (d0 == d1) maps everything to r0, the baseline of the
    chart, so empty and all-zero data sets draw flat bars.
    """

    def __init__(self, domain: Sequence[float] = (0.0, 1.0), range: Sequence[float] = (0.0, 1.0)):
        self.domain = domain
        self.range = range

    @property
    def domain(self) -> Tuple[float, float]:
        return self._domain

    @domain.setter
    def domain(self, value: Sequence[float]):
        d0, d1 = (float(v) for v in value)
        if math.isnan(d0) or math.isnan(d1):
            raise ValueError(f"Scale domain must be numeric, got {tuple(value)!r}")
        self._domain = (d0, d1)

    @property
    def range(self) -> Tuple[float, float]:
        return self._range

    @range.setter
    def range(self, value: Sequence[float]):
        r0, r1 = (float(v) for v in value)
        self._range = (r0, r1)

    def __call__(self, value: float) -> float:
        d0, d1 = self._domain
        r0, r1 = self._range
        if d1 == d0:
            return r0
        t = (float(value) - d0) / (d1 - d0)
        return r0 + (r1 - r0) * t

    def invert(self, pixel: float) -> float:
        d0, d1 = self._domain
        r0, r1 = self._range
        if r1 == r0:
            return d0
        return d0 + (d1 - d0) * (float(pixel) - r0) / (r1 - r0)

    def ticks(self, count: int = params.Y_TICK_COUNT) -> List[float]:
        return ticks(self._domain[0], self._domain[1], count)

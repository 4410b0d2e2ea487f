"""Animated attribute transitions.

A Transition holds the start and end values of a few attributes plus timing.
The chart only describes transitions; renderers that animate (matplotlib)
play them through a TransitionQueue, and renderers that don't (static SVG)
jump to the end values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, Iterator, Tuple, Union

Value = Union[float, str]

_HEX = re.compile(r"^#([0-9a-fA-F]{6})$")


def ease_cubic_in_out(t: float) -> float:
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


def _rgb(color: str) -> Tuple[int, int, int]:
    m = _HEX.match(color)
    if not m:
        raise ValueError(f"Not a #rrggbb color: {color!r}")
    h = m.group(1)
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def interpolate(a: Value, b: Value, t: float) -> Value:
    """Interpolate numbers or #rrggbb colors; anything else switches at the end."""
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a + (b - a) * t
    if isinstance(a, str) and isinstance(b, str) and _HEX.match(a) and _HEX.match(b):
        ra, rb = _rgb(a), _rgb(b)
        mixed = (round(x + (y - x) * t) for x, y in zip(ra, rb))
        return "#{:02x}{:02x}{:02x}".format(*mixed)
    return b if t >= 1 else a


@dataclass
class Transition:
    name: str
    duration: float
    delay: float = 0.0
    start: Dict[str, Value] = field(default_factory=dict)
    end: Dict[str, Value] = field(default_factory=dict)
    ease: Callable[[float], float] = ease_cubic_in_out

    @property
    def total(self) -> float:
        return self.delay + self.duration

    def progress(self, elapsed: float) -> float:
        """Eased progress in [0, 1] after `elapsed` ms (delay included)."""
        if elapsed <= self.delay:
            return 0.0
        if self.duration <= 0 or elapsed >= self.total:
            return 1.0
        return self.ease((elapsed - self.delay) / self.duration)

    def values_at(self, elapsed: float) -> Dict[str, Value]:
        t = self.progress(elapsed)
        out = {}
        for key, end in self.end.items():
            start = self.start.get(key, end)
            out[key] = interpolate(start, end, t)
        return out

    def done(self, elapsed: float) -> bool:
        return elapsed >= self.total


class TransitionQueue:
    """Running transitions keyed by (element key, transition name).

    Scheduling a transition with a key and name already running replaces the
    running one: last writer wins, nothing is queued.
    """

    def __init__(self):
        self._running: Dict[Tuple[Hashable, str], Tuple[Transition, float]] = {}

    def __len__(self) -> int:
        return len(self._running)

    def __contains__(self, item: Tuple[Hashable, str]) -> bool:
        return item in self._running

    def schedule(self, key: Hashable, transition: Transition, now: float):
        self._running[(key, transition.name)] = (transition, now)

    def cancel(self, key: Hashable):
        for k in [k for k in self._running if k[0] == key]:
            del self._running[k]

    def step(self, now: float) -> Iterator[Tuple[Hashable, Dict[str, Value]]]:
        """Yield (element key, current values) and drop finished transitions."""
        finished = []
        for (key, name), (transition, started) in list(self._running.items()):
            elapsed = now - started
            yield key, transition.values_at(elapsed)
            if transition.done(elapsed):
                finished.append(((key, name), transition))
        for k, transition in finished:
            # a transition scheduled mid-step under the same name stays
            if self._running.get(k, (None, 0.0))[0] is transition:
                del self._running[k]

    def finish(self) -> Iterator[Tuple[Hashable, Dict[str, Value]]]:
        """Yield every transition's end values and clear the queue."""
        running, self._running = self._running, {}
        for (key, _), (transition, _) in running.items():
            yield key, dict(transition.end)

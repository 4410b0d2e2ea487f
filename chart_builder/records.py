import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import params


@dataclass(frozen=True)
class Record:
    state: str
    sex: str
    type: str
    percent: float

    def __post_init__(self):
        if isinstance(self.percent, bool) or not isinstance(self.percent, (int, float)):
            raise ValueError(f"percent for {self.state} must be a number, got {self.percent!r}")
        if not math.isfinite(self.percent):
            raise ValueError(f"percent for {self.state} must be finite, got {self.percent!r}")
        if self.percent < 0:
            raise ValueError(f"percent for {self.state} must not be negative, got {self.percent!r}")
        object.__setattr__(self, "percent", float(self.percent))


@dataclass(frozen=True)
class Filters:
    sex: str = params.DEFAULT_FILTERS["sex"]
    type: str = params.DEFAULT_FILTERS["type"]

    def matches(self, record: Record) -> bool:
        return record.sex == self.sex and record.type == self.type


def filter_records(records: Iterable[Record], filters: Filters) -> Tuple[Record, ...]:
    return tuple(r for r in records if filters.matches(r))


def ordered(records: Sequence[Record], reverse: bool = False) -> Tuple[Record, ...]:
    """Return the records in render order as a new tuple; the input is left alone."""
    out = tuple(records)
    return out[::-1] if reverse else out


def _first_seen(values: Iterable[str]) -> List[str]:
    # dict keeps insertion order
    return list(dict.fromkeys(values))


def distinct_states(records: Iterable[Record]) -> List[str]:
    return _first_seen(r.state for r in records)


def available_sexes(records: Iterable[Record]) -> List[str]:
    return _first_seen(r.sex for r in records)


def available_types(records: Iterable[Record]) -> List[str]:
    return _first_seen(r.type for r in records)


def group_by_filters(records: Iterable[Record]) -> Dict[Filters, Tuple[Record, ...]]:
    """Split records into one data set per (sex, type) combination, keeping row order."""
    groups: Dict[Filters, List[Record]] = {}
    for r in records:
        groups.setdefault(Filters(sex=r.sex, type=r.type), []).append(r)
    return {k: tuple(v) for k, v in groups.items()}

"""Bucket color lookup."""

from __future__ import annotations

import pytest

import params
import utils


@pytest.mark.parametrize(
    "percent, color",
    [
        (5, "#247881"),
        (11.99, "#247881"),
        (12, "#2B9699"),
        (18.0, "#18AFAB"),
        (25.4, "#36BBB7"),
        (46.9, "#2ABEC3"),
        (72, "#38F5FB"),
        (75, "#38F5FB"),
    ],
)
def test_bucket_color_boundaries(percent, color):
    assert utils.bucket_color(percent) == color


@pytest.mark.parametrize("percent", [0, 4.99, 75.01, 100, float("nan"), None, "abc"])
def test_out_of_range_gets_fallback(percent):
    assert utils.bucket_color(percent) == params.FALLBACK_COLOR


def test_buckets_are_contiguous_and_cover_5_to_75():
    bounds = utils.bucket_bounds()
    assert len(bounds) == 13
    assert bounds[0][0] == 5
    assert bounds[-1][1] == 75
    for (lo, hi, _), (next_lo, _, _) in zip(bounds, bounds[1:]):
        assert lo < hi == next_lo


def test_color_is_constant_within_each_bucket():
    for lo, hi, color in utils.bucket_bounds():
        samples = [lo + (hi - lo) * f for f in (0, 0.25, 0.5, 0.999)]
        assert {utils.bucket_color(p) for p in samples} == {color}


def test_percent_str():
    assert utils.percent_str(7) == "7.0"
    assert utils.percent_str(12.345) == "12.3"
    assert utils.percent_str(None) == ""

"""Transition easing, interpolation and the running queue."""

from __future__ import annotations

import pytest

from chart_builder.transitions import Transition, TransitionQueue, ease_cubic_in_out, interpolate


def test_cubic_easing_endpoints_and_midpoint():
    assert ease_cubic_in_out(0) == 0
    assert ease_cubic_in_out(0.5) == pytest.approx(0.5)
    assert ease_cubic_in_out(1) == pytest.approx(1)
    assert ease_cubic_in_out(0.25) < 0.25


def test_interpolate_numbers_and_colors():
    assert interpolate(0, 10, 0.3) == pytest.approx(3)
    assert interpolate("#000000", "#ffffff", 0.5) == "#808080"
    assert interpolate("#247881", "#247881", 0.7) == "#247881"
    assert interpolate("bar", "bar wide", 0.5) == "bar"
    assert interpolate("bar", "bar wide", 1) == "bar wide"


def test_transition_respects_delay_and_duration():
    t = Transition("enter", 500, delay=10, start={"height": 0.0}, end={"height": 100.0})
    assert t.values_at(0) == {"height": 0.0}
    assert t.values_at(10) == {"height": 0.0}
    assert t.values_at(260)["height"] == pytest.approx(50)
    assert t.values_at(510) == {"height": 100.0}
    assert not t.done(509) and t.done(510)


def test_missing_start_value_holds_the_end():
    t = Transition("update", 100, start={}, end={"fill": "#2B9699"})
    assert t.values_at(0) == {"fill": "#2B9699"}


def test_queue_last_writer_wins_per_key_and_name():
    q = TransitionQueue()
    first = Transition("update", 1000, start={"y": 0.0}, end={"y": 100.0})
    second = Transition("update", 1000, start={"y": 50.0}, end={"y": 10.0})
    enter = Transition("enter", 500, start={"height": 0.0}, end={"height": 5.0})
    q.schedule("CA", first, now=0)
    q.schedule("CA", enter, now=0)
    q.schedule("CA", second, now=200)
    assert len(q) == 2
    values = dict()
    for key, v in q.step(now=200):
        values.update(v)
    assert values["y"] == 50.0


def test_queue_drops_finished_and_finish_jumps_to_end():
    q = TransitionQueue()
    q.schedule("CA", Transition("update", 100, start={"y": 0.0}, end={"y": 10.0}), now=0)
    q.schedule("TX", Transition("update", 1000, start={"y": 0.0}, end={"y": 20.0}), now=0)
    list(q.step(now=150))
    assert ("CA", "update") not in q
    assert ("TX", "update") in q
    assert list(q.finish()) == [("TX", {"y": 20.0})]
    assert len(q) == 0


def test_queue_cancel():
    q = TransitionQueue()
    q.schedule("CA", Transition("update", 100), now=0)
    q.schedule("CA", Transition("enter", 100), now=0)
    q.schedule("TX", Transition("update", 100), now=0)
    q.cancel("CA")
    assert len(q) == 1

"""Shared fixtures: small data sets, a CSV writer and a headless chart."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from chart_builder.chart import Chart
from chart_builder.config import PARENT_ELEMENT, make_config
from chart_builder.records import Record
from chart_builder.renderer import SceneRenderer
from chart_builder.scene import Document

CSV_HEADER = "state,sex,type,percent\n"


def rec(state: str, percent: float, sex: str = "female", type_: str = "any") -> Record:
    return Record(state=state, sex=sex, type=type_, percent=percent)


@pytest.fixture
def rows():
    """Female/any rows for four states plus a few male and beer rows."""
    return (
        rec("CA", 25.4),
        rec("TX", 18.0),
        rec("NY", 41.2),
        rec("WA", 8.5),
        rec("CA", 33.0, sex="male"),
        rec("TX", 29.9, sex="male"),
        rec("CA", 12.0, type_="beer"),
    )


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text (header added unless given) and return its path."""

    def _write(body: str, header: str = CSV_HEADER, name: str = "drinking.csv"):
        path = tmp_path / name
        path.write_text(header + body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def scene():
    """A Document with the #vis container and its renderer."""
    document = Document(PARENT_ELEMENT)
    return document, SceneRenderer(document)


@pytest.fixture
def chart(scene):
    _, renderer = scene
    return Chart(make_config(PARENT_ELEMENT), (), renderer)

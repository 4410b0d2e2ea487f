"""Static page build."""

from __future__ import annotations

import pytest

from chart_builder.errors import LoadError
from chart_builder.io_utils import load_records
from chart_builder.main import build_site
from chart_builder.pages import filter_choices, make_chart_page, render_frame, slug

from conftest import rec

CSV_BODY = (
    "CA,female,any,25.4\n"
    "TX,female,any,18.0\n"
    "CA,male,any,33.0\n"
    "TX,male,any,29.9\n"
    "CA,female,beer,12.0\n"
)


def test_filter_choices_put_defaults_first():
    records = [rec("CA", 1, sex="male", type_="beer"), rec("CA", 2, sex="female", type_="any")]
    assert filter_choices(records) == (["female", "male"], ["any", "beer"])


def test_render_frame_carries_tooltip_data():
    svg = render_frame([rec("CA", 25.4), rec("TX", 18.0)])
    assert 'data-state="CA"' in svg
    assert 'data-percent="18.0"' in svg
    assert 'data-percent="25.4"' in svg
    assert 'data-sex="female"' in svg
    assert svg.index('data-state="CA"') < svg.index('data-state="TX"')


def test_render_frame_keeps_exact_percent_text():
    svg = render_frame([rec("CA", 25.0), rec("TX", 12.345)])
    assert 'data-percent="25.0"' in svg
    assert 'data-percent="12.345"' in svg


def test_render_frame_reversed():
    svg = render_frame([rec("CA", 25.4), rec("TX", 18.0)], reverse=True)
    assert svg.index('data-state="TX"') < svg.index('data-state="CA"')


def test_make_chart_page_renders_every_combination(tmp_path, write_csv):
    records = load_records(write_csv(CSV_BODY))
    frames = make_chart_page(records, tmp_path / "docs")
    # 2 sexes x 2 types x 2 orders; male/beer has no rows and gets the no-data frame
    assert frames == 8
    html = (tmp_path / "docs" / "index.html").read_text(encoding="utf-8")
    assert html.count('class="frame"') == 8
    assert 'data-sex="male" data-type="beer" data-order="default"' in html
    assert 'id="sorting"' in html
    assert 'class="sex" value="female" checked' in html
    assert "%" + "FRAMES%" not in html
    js = (tmp_path / "docs" / "chart.js").read_text(encoding="utf-8")
    assert "const pad = 15;" in js
    assert '"Percent Drinking"' in js
    assert (tmp_path / "docs" / "styles.css").exists()


def test_build_site(tmp_path, write_csv, capsys):
    index = build_site(write_csv(CSV_BODY), tmp_path / "site")
    assert index == tmp_path / "site" / "index.html"
    assert index.exists()
    assert "Done." in capsys.readouterr().out


def test_build_site_with_pngs(tmp_path, write_csv):
    build_site(write_csv(CSV_BODY), tmp_path / "site", png=True)
    pngs = sorted(p.name for p in (tmp_path / "site" / "plots").iterdir())
    assert pngs == ["female_any.png", "female_beer.png", "male_any.png"]


def test_build_site_missing_csv(tmp_path):
    with pytest.raises(LoadError):
        build_site(tmp_path / "missing.csv", tmp_path / "site")
    assert not (tmp_path / "site").exists()


def test_slug():
    assert slug("Any Type") == "any-type"
    assert slug("beer/wine") == "beer-wine"
    assert slug("??") == "none"

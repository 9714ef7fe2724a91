import json
from pathlib import Path

from railmap.filters_view import filter_by_text, reset
from railmap.map.stations_map import build_stations_map, render_stations_map
from railmap.report import export_reports
from railmap.stations import Station


def build_stations():
    return [
        Station("Idu Station", 9.03, 7.33, "major", "Abuja terminus"),
        Station("Kano Station", 12.0, 8.53, "development", "Planned <terminus>"),
    ]


def test_render_stations_map(tmp_path: Path):
    out = tmp_path / "map.html"
    render_stations_map(reset(build_stations()), out)
    text = out.read_text(encoding="utf-8")
    assert "Idu Station" in text
    assert "Abuja terminus" in text
    assert "pink" in text
    assert "red" in text


def test_map_centers_on_focus():
    m = build_stations_map(filter_by_text(build_stations(), "kano"))
    assert m.location == [12.0, 8.53]


def test_export_reports(tmp_path: Path):
    paths = export_reports(filter_by_text(build_stations(), "idu"), tmp_path / "out")
    assert paths["map"].exists()
    geojson = json.loads(paths["geojson"].read_text(encoding="utf-8"))
    assert len(geojson["features"]) == 1
    feature = geojson["features"][0]
    assert feature["geometry"]["coordinates"] == [7.33, 9.03]
    assert feature["properties"]["marker_style"] == "red"

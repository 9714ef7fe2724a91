"""Export a filtered station view (GeoJSON, HTML map)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, Optional

from .filters_view import FilterResult, resolve_marker_style
from .map.stations_map import render_stations_map
from .stations import Station


def write_geojson(stations: Iterable[Station], path: str | Path) -> None:
    features = []
    for s in stations:
        props = s.to_record()
        props.pop("latitude")
        props.pop("longitude")
        props["marker_style"] = resolve_marker_style(s.type)
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [s.longitude, s.latitude]},
                "properties": props,
            }
        )
    geojson = {"type": "FeatureCollection", "features": features}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(geojson, f, ensure_ascii=False)


def export_reports(
    result: FilterResult, out_dir: str | Path, *, active: Optional[str] = None, zoom: Optional[int] = None
) -> Dict[str, Path]:
    """Write GeoJSON and HTML map outputs for a filtered view."""
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    geojson_path = out_path / "stations.geojson"
    write_geojson(result.items, geojson_path)
    kwargs = {"zoom": zoom} if zoom else {}
    html_path = render_stations_map(result, out_path / "stations_map.html", active=active, **kwargs)
    return {"geojson": geojson_path, "map": html_path}

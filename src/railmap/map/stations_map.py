"""Render an interactive stations map using folium."""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Optional, Tuple

import folium

from ..filters_view import FilterResult, resolve_marker_style
from ..stations import Station

# Central Nigeria
DEFAULT_CENTER = (9.0765, 7.3986)
DEFAULT_ZOOM = 9
FOCUS_ZOOM = 12


def _popup_html(station: Station) -> str:
    return f"<h4>{escape(station.name)}</h4><p>{escape(station.details)}</p>"


def _find(result: FilterResult, name: Optional[str]) -> Optional[Station]:
    if not name:
        return None
    return next((s for s in result.items if s.name == name), None)


def build_stations_map(
    result: FilterResult,
    *,
    active: Optional[str] = None,
    center: Tuple[float, float] = DEFAULT_CENTER,
    zoom: int = DEFAULT_ZOOM,
) -> folium.Map:
    target = _find(result, active or result.focus)
    if target is not None:
        m = folium.Map(location=[target.latitude, target.longitude], zoom_start=FOCUS_ZOOM)
    else:
        m = folium.Map(location=list(center), zoom_start=zoom)

    layer = folium.FeatureGroup(name="Stations", show=True)
    for station in result.items:
        popup = folium.Popup(_popup_html(station), max_width=300, show=station is target)
        folium.Marker(
            location=[station.latitude, station.longitude],
            icon=folium.Icon(color=resolve_marker_style(station.type), icon="train", prefix="fa"),
            popup=popup,
            tooltip=station.name,
        ).add_to(layer)
    m.add_child(layer)
    return m


def render_stations_map(
    result: FilterResult,
    out_path: str | Path,
    *,
    active: Optional[str] = None,
    center: Tuple[float, float] = DEFAULT_CENTER,
    zoom: int = DEFAULT_ZOOM,
) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    m = build_stations_map(result, active=active, center=center, zoom=zoom)
    m.save(out_path)
    return out_path

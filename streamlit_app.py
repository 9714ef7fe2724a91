"""Streamlit viewer for the railway stations map with a demo admin page."""

from __future__ import annotations

import argparse

import pandas as pd
import pydeck as pdk
import streamlit as st

from railmap.filters_view import resolve_marker_style, station_types
from railmap.map.stations_map import DEFAULT_CENTER, DEFAULT_ZOOM, FOCUS_ZOOM
from railmap.stations import Station, StationLoadError, load_stations, stations_to_frame
from railmap.storage import (
    KEEP,
    MemoryCache,
    cached_stations,
    create_station,
    delete_station,
    form_changes,
    init_cache,
    update_station,
)
from railmap.viewer import MapViewState, get_prev_next

STYLE_RGBA = {
    "red": [220, 40, 40, 200],
    "blue": [40, 90, 220, 200],
    "pink": [235, 90, 180, 200],
}


@st.cache_data(show_spinner=False)
def _cached_load(source: str | None) -> list[Station]:
    return load_stations(source)


def _view_state(stations: list[Station]) -> MapViewState:
    # One MapViewState per session; rebuilt when the dataset changes.
    state = st.session_state.get("view_state")
    if state is None or state.stations != tuple(stations):
        state = MapViewState(stations)
        st.session_state["view_state"] = state
    return state


def _session_cache(stations: list[Station]) -> MemoryCache:
    cache = st.session_state.get("station_cache")
    if cache is None:
        cache = MemoryCache()
        st.session_state["station_cache"] = cache
    init_cache(cache, stations)
    return cache


def prepare_map(state: MapViewState):
    df_map = stations_to_frame(state.result.items)
    if df_map.empty:
        st.info("No stations to render.")
        return
    df_map["color"] = [STYLE_RGBA[resolve_marker_style(t)] for t in df_map["type"]]
    active = state.active_station()
    if active is not None:
        initial_view = {"latitude": active.latitude, "longitude": active.longitude, "zoom": FOCUS_ZOOM}
    else:
        initial_view = {"latitude": DEFAULT_CENTER[0], "longitude": DEFAULT_CENTER[1], "zoom": DEFAULT_ZOOM - 3}
    layer = pdk.Layer(
        "ScatterplotLayer",
        data=df_map,
        get_position=["longitude", "latitude"],
        get_radius=4000,
        get_fill_color="color",
        pickable=True,
    )
    tooltip = {
        "html": "<b>{name}</b><br>Type: {type}<br>{details}",
        "style": {"color": "white"},
    }
    deck = pdk.Deck(layers=[layer], initial_view_state=pdk.ViewState(**initial_view), tooltip=tooltip)
    st.pydeck_chart(deck)


def render_home(state: MapViewState):
    st.subheader("Stations map")
    cols = st.columns([3, 2, 1])
    query = cols[0].text_input("Search station", key="home_query")
    types = station_types(state.stations)
    type_choice = cols[1].selectbox("Station type", ["(all)"] + types, key="home_type")
    if cols[0].button("Search"):
        state.search(query)
    if cols[1].button("Filter by type") and type_choice != "(all)":
        state.show_type(type_choice)
    if cols[2].button("Show all"):
        state.show_all()

    if state.not_found_message:
        st.warning(state.not_found_message)

    names = state.result.names
    if names:
        current = state.active_marker if state.active_marker in names else None
        idx = st.selectbox(
            "Select station",
            options=range(len(names) + 1),
            index=names.index(current) + 1 if current else 0,
            format_func=lambda i: "(none)" if i == 0 else names[i - 1],
        )
        if idx == 0 and state.active_marker is not None:
            state.clear_selection()
        elif idx > 0:
            state.select(names[idx - 1])

    prepare_map(state)

    station = state.active_station()
    if station is not None:
        st.markdown(f"### {station.name}")
        st.write(station.details or "(no details)")
        prev_name, next_name = get_prev_next(names, station.name)
        c1, c2, c3 = st.columns(3)
        if prev_name and c1.button("Prev"):
            state.select(prev_name)
            st.rerun()
        if next_name and c2.button("Next"):
            state.select(next_name)
            st.rerun()
        if c3.button("Close"):
            state.clear_selection()
            st.rerun()

    st.caption(f"Showing {len(state.result.items)} / {len(state.stations)} stations")


def render_admin(stations: list[Station]):
    st.subheader("Admin (local cache copy only)")
    st.caption("Changes are written to the session cache; the source dataset and the map stay unchanged.")
    cache = _session_cache(stations)

    with st.form("add_station"):
        st.markdown("**Add station**")
        name = st.text_input("Name")
        c1, c2 = st.columns(2)
        lat = c1.text_input("Latitude")
        lon = c2.text_input("Longitude")
        stype = st.selectbox("Type", ["major", "minor", "development"])
        details = st.text_area("Details")
        if st.form_submit_button("Add"):
            record = {"name": name, "latitude": lat, "longitude": lon, "type": stype, "details": details}
            try:
                create_station(cache, stations, record)
                st.success(f"Station added: {name}")
            except ValueError as exc:
                st.error(f"Invalid station: {exc}")

    names = [s.name for s in stations]
    with st.form("update_station"):
        st.markdown("**Update station**")
        target = st.selectbox("Station", names, key="update_target")
        new_details = st.text_area("New details", value=KEEP, help=f"Leave {KEEP} to keep the current details; empty clears them.")
        new_type = st.selectbox("New type", [KEEP, "major", "minor", "development"])
        if st.form_submit_button("Update"):
            changes = form_changes({"details": new_details, "type": new_type})
            update_station(cache, stations, target, changes)
            st.success(f"Station updated: {target}")

    with st.form("delete_station"):
        st.markdown("**Delete station**")
        target = st.selectbox("Station", names, key="delete_target")
        if st.form_submit_button("Delete"):
            delete_station(cache, stations, target)
            st.success(f"Station deleted: {target}")

    st.markdown("**Cached copy**")
    cached = cached_stations(cache)
    st.dataframe(stations_to_frame(cached) if cached else pd.DataFrame(), use_container_width=True)


def main():
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--dataset", help="Station dataset (.json/.csv path or URL).")
    args, _ = parser.parse_known_args()

    st.set_page_config(page_title="Railway Stations Map", layout="wide")
    st.title("Nigerian Railway Stations Map")

    st.sidebar.subheader("Data")
    dataset_input = st.sidebar.text_input("Dataset (empty = bundled)", value=args.dataset or "")
    page = st.sidebar.radio("View", ["Home", "Admin"], key="page")

    with st.spinner("Loading stations..."):
        try:
            stations = _cached_load(dataset_input or None)
        except StationLoadError as exc:
            st.error(f"Error fetching stations: {exc}")
            return

    if page == "Admin":
        render_admin(stations)
        return
    render_home(_view_state(stations))


if __name__ == "__main__":
    main()

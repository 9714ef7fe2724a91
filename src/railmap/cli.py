"""Command-line interface for railmap."""

from __future__ import annotations

import argparse
from typing import Any, Dict, Sequence

from . import __version__
from .filters_view import FilterResult, describe_result, filter_by_text, filter_by_type, reset
from .profiles import apply_profile, env_defaults, load_profiles
from .report import export_reports
from .stations import StationLoadError, load_stations
from .storage import (
    DEFAULT_CACHE_PATH,
    SQLiteCache,
    cached_stations,
    create_station,
    delete_station,
    init_cache,
    update_station,
)

DEFAULT_OUT = "out/map"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="railmap",
        description="Railway station map: search, filter by type and render an HTML map.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--profile", type=str, default="", help="Profile name from the profiles file.")
    parser.add_argument("--profiles-file", type=str, default=None, help="Profiles YAML (default config/profiles.yaml).")
    parser.add_argument(
        "--dataset",
        type=str,
        default=None,
        help="Station dataset (.json/.csv path or http(s) URL). Default: bundled dataset.",
    )
    parser.add_argument("--cache", type=str, default=None, help=f"SQLite cache path (default {DEFAULT_CACHE_PATH}).")

    subparsers = parser.add_subparsers(dest="command", required=False)

    search_parser = subparsers.add_parser("search", help="Search stations by name.")
    search_parser.add_argument("query", nargs="?", default="", help="Case-insensitive name substring.")
    search_parser.set_defaults(func=search_command)

    type_parser = subparsers.add_parser("type", help="List stations of one type.")
    type_parser.add_argument("station_type", help="major, minor or development.")
    type_parser.set_defaults(func=type_command)

    map_parser = subparsers.add_parser(
        "map",
        help="Render the HTML map and GeoJSON.",
        description="Writes stations_map.html and stations.geojson for the filtered view.",
    )
    group = map_parser.add_mutually_exclusive_group()
    group.add_argument("--query", type=str, default=None, help="Filter by name substring.")
    group.add_argument("--type", dest="station_type", type=str, default=None, help="Filter by station type.")
    map_parser.add_argument("--zoom", type=int, default=None, help="Initial zoom when no station is focused.")
    map_parser.add_argument("--out", type=str, default=None, help=f"Output directory (default {DEFAULT_OUT}).")
    map_parser.set_defaults(func=map_command)

    add_parser = subparsers.add_parser("add", help="Add a station to the local cache copy (demo).")
    add_parser.add_argument("name")
    add_parser.add_argument("latitude")
    add_parser.add_argument("longitude")
    add_parser.add_argument("--type", dest="station_type", type=str, default="")
    add_parser.add_argument("--details", type=str, default="")
    add_parser.set_defaults(func=add_command)

    update_parser = subparsers.add_parser("update", help="Update a station in the local cache copy (demo).")
    update_parser.add_argument("name")
    update_parser.add_argument("--latitude", type=str, default=None)
    update_parser.add_argument("--longitude", type=str, default=None)
    update_parser.add_argument("--type", dest="station_type", type=str, default=None)
    update_parser.add_argument("--details", type=str, default=None)
    update_parser.set_defaults(func=update_command)

    delete_parser = subparsers.add_parser("delete", help="Delete a station from the local cache copy (demo).")
    delete_parser.add_argument("name")
    delete_parser.set_defaults(func=delete_command)

    cached_parser = subparsers.add_parser("cached", help="Show the local cache copy.")
    cached_parser.set_defaults(func=cached_command)

    return parser


def _settings(args: argparse.Namespace) -> Dict[str, Any]:
    explicit = {
        "dataset": args.dataset,
        "cache": args.cache,
        "out": getattr(args, "out", None),
        "zoom": getattr(args, "zoom", None),
    }
    profiles = load_profiles(args.profiles_file) if args.profile else {}
    return env_defaults(apply_profile(args.profile, profiles, explicit))


def _load(settings: Dict[str, Any]):
    try:
        return load_stations(settings.get("dataset"))
    except StationLoadError as exc:
        print(f"Failed to load stations: {exc}")
        return None


def _cache(settings: Dict[str, Any]) -> SQLiteCache:
    return SQLiteCache(settings.get("cache") or DEFAULT_CACHE_PATH)


def _print_result(result: FilterResult) -> None:
    if not result.matched:
        print(describe_result(result))
        return
    for s in result.items:
        print(f"{s.name} ({s.type or '-'})")
    if result.focus:
        print(f"Focus: {result.focus}")


def search_command(args: argparse.Namespace) -> int:
    stations = _load(_settings(args))
    if stations is None:
        return 1
    _print_result(filter_by_text(stations, args.query))
    return 0


def type_command(args: argparse.Namespace) -> int:
    stations = _load(_settings(args))
    if stations is None:
        return 1
    _print_result(filter_by_type(stations, args.station_type))
    return 0


def map_command(args: argparse.Namespace) -> int:
    settings = _settings(args)
    stations = _load(settings)
    if stations is None:
        return 1
    if args.query is not None:
        result = filter_by_text(stations, args.query)
    elif args.station_type is not None:
        result = filter_by_type(stations, args.station_type)
    else:
        result = reset(stations)
    if not result.matched:
        print(describe_result(result))
    paths = export_reports(result, settings.get("out") or DEFAULT_OUT, zoom=settings.get("zoom"))
    print(f"Stations on map: {len(result.items)}; map: {paths['map']}; geojson: {paths['geojson']}")
    return 0


def add_command(args: argparse.Namespace) -> int:
    settings = _settings(args)
    stations = _load(settings)
    if stations is None:
        return 1
    cache = _cache(settings)
    init_cache(cache, stations)
    record = {
        "name": args.name,
        "latitude": args.latitude,
        "longitude": args.longitude,
        "type": args.station_type,
        "details": args.details,
    }
    try:
        data = create_station(cache, stations, record)
    except ValueError as exc:
        print(f"Invalid station: {exc}")
        return 1
    print(f"Station added; cached stations: {len(data)}")
    return 0


def update_command(args: argparse.Namespace) -> int:
    settings = _settings(args)
    stations = _load(settings)
    if stations is None:
        return 1
    if not any(s.name == args.name for s in stations):
        print(f"Station not found: {args.name}")
        return 1
    cache = _cache(settings)
    init_cache(cache, stations)
    changes = {
        "latitude": args.latitude,
        "longitude": args.longitude,
        "type": args.station_type,
        "details": args.details,
    }
    try:
        data = update_station(cache, stations, args.name, changes)
    except ValueError as exc:
        print(f"Invalid station: {exc}")
        return 1
    print(f"Station updated; cached stations: {len(data)}")
    return 0


def delete_command(args: argparse.Namespace) -> int:
    settings = _settings(args)
    stations = _load(settings)
    if stations is None:
        return 1
    cache = _cache(settings)
    init_cache(cache, stations)
    data = delete_station(cache, stations, args.name)
    print(f"Station deleted; cached stations: {len(data)}")
    return 0


def cached_command(args: argparse.Namespace) -> int:
    data = cached_stations(_cache(_settings(args)))
    if not data:
        print("Cache is empty.")
        return 0
    for s in data:
        print(f"{s.name} ({s.type or '-'}) {s.latitude:.4f},{s.longitude:.4f}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    return args.func(args)

from railmap.filters_view import (
    NOT_FOUND_MESSAGE,
    describe_result,
    filter_by_text,
    filter_by_type,
    reset,
    resolve_marker_style,
    station_types,
)
from railmap.stations import Station


def build_stations():
    return [
        Station("Kaduna", 10.52, 7.35, "major", "Kaduna terminus"),
        Station("Kubwa", 9.15, 7.32, "minor", "Abuja suburb"),
        Station("Idu", 9.03, 7.33, "major", "Abuja terminus"),
        Station("Kano", 12.0, 8.53, "development", "Planned"),
    ]


def test_filter_by_text_focus_is_first_match_in_input_order():
    stations = build_stations()
    result = filter_by_text(stations, "ku")
    # "Kaduna" does not contain "ku".
    assert result.names == ["Kubwa"]
    assert result.focus == "Kubwa"
    assert result.matched is True

    result = filter_by_text(stations, "K")
    assert result.names == ["Kaduna", "Kubwa", "Kano"]
    assert result.focus == "Kaduna"


def test_filter_by_text_is_case_insensitive_and_stable():
    stations = build_stations()
    result = filter_by_text(stations, "DU")
    assert result.names == ["Kaduna", "Idu"]
    for s in stations:
        assert (s in result.items) == ("du" in s.name.lower())


def test_empty_query_matches_everything():
    stations = build_stations()
    for query in ("", None):
        result = filter_by_text(stations, query)
        assert list(result.items) == stations
        assert result.matched is True
        assert result.focus == "Kaduna"


def test_no_match():
    result = filter_by_text(build_stations(), "lagos")
    assert result.items == ()
    assert result.matched is False
    assert result.focus is None
    assert describe_result(result) == NOT_FOUND_MESSAGE


def test_empty_dataset():
    result = filter_by_text([], "")
    assert result.items == ()
    assert result.matched is False


def test_filter_by_type():
    stations = build_stations()
    result = filter_by_type(stations, "major")
    assert result.names == ["Kaduna", "Idu"]
    assert result.focus is None
    assert result.matched is True

    empty = filter_by_type(stations, "heritage")
    assert empty.items == ()
    assert empty.matched is False
    assert empty.focus is None


def test_reset():
    stations = build_stations()
    result = reset(stations)
    assert list(result.items) == stations
    assert result.focus is None
    assert result.matched is True
    assert describe_result(result) == ""


def test_resolve_marker_style():
    assert resolve_marker_style("major") == "red"
    assert resolve_marker_style("minor") == "blue"
    assert resolve_marker_style("development") == "pink"
    assert resolve_marker_style("unknown") == "blue"
    assert resolve_marker_style("") == "blue"
    assert resolve_marker_style(None) == "blue"


def test_station_types_first_seen_order():
    assert station_types(build_stations()) == ["major", "minor", "development"]

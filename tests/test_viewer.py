from railmap.filters_view import NOT_FOUND_MESSAGE
from railmap.stations import Station
from railmap.viewer import MapViewState, get_prev_next


def build_state():
    return MapViewState(
        [
            Station("Kaduna", 10.52, 7.35, "major", ""),
            Station("Kubwa", 9.15, 7.32, "minor", ""),
            Station("Idu", 9.03, 7.33, "major", ""),
        ]
    )


def test_search_selects_focus_and_notifies(mocker):
    state = build_state()
    listener = mocker.Mock()
    state.subscribe(listener)
    state.search("kub")
    assert state.active_marker == "Kubwa"
    assert state.active_station().name == "Kubwa"
    assert state.not_found_message == ""
    listener.assert_called_once_with(state)


def test_not_found_message_cleared_by_show_all():
    state = build_state()
    state.search("lagos")
    assert state.not_found_message == NOT_FOUND_MESSAGE
    assert state.active_marker is None
    state.show_all()
    assert state.not_found_message == ""
    assert len(state.result.items) == 3


def test_show_type_clears_selection():
    state = build_state()
    state.search("kaduna")
    state.show_type("major")
    assert state.result.names == ["Kaduna", "Idu"]
    assert state.active_marker is None


def test_select_only_visible_and_changed(mocker):
    state = build_state()
    state.show_type("major")
    listener = mocker.Mock()
    state.subscribe(listener)
    assert state.select("Kubwa") is False
    assert state.select("Idu") is True
    assert state.select("Idu") is False
    assert listener.call_count == 1
    state.clear_selection()
    assert state.active_station() is None


def test_unsubscribe():
    state = build_state()
    calls = []
    state.subscribe(calls.append)
    state.unsubscribe(calls.append)
    state.show_all()
    assert calls == []


def test_get_prev_next():
    names = ["a", "b", "c"]
    assert get_prev_next(names, "b") == ("a", "c")
    assert get_prev_next(names, "a") == (None, "b")
    assert get_prev_next(names, "x") == (None, None)

"""Map viewer state (no Streamlit dependencies).

Each user event recomputes the FilterResult through the filter engine and then
calls the registered listeners with the new state.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from . import filters_view
from .filters_view import FilterResult
from .stations import Station

Listener = Callable[["MapViewState"], None]


class MapViewState:
    def __init__(self, stations: Sequence[Station]):
        self.stations: Tuple[Station, ...] = tuple(stations)
        self.result: FilterResult = filters_view.reset(self.stations)
        self.active_marker: Optional[str] = None
        self.not_found_message: str = ""
        self._listeners: List[Listener] = []

    def subscribe(self, callback: Listener) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    def _apply(self, result: FilterResult, active: Optional[str]) -> None:
        self.result = result
        self.active_marker = active
        self.not_found_message = filters_view.describe_result(result)
        self._notify()

    def search(self, query: Optional[str]) -> FilterResult:
        result = filters_view.filter_by_text(self.stations, query)
        self._apply(result, result.focus)
        return result

    def show_type(self, station_type: str) -> FilterResult:
        result = filters_view.filter_by_type(self.stations, station_type)
        self._apply(result, None)
        return result

    def show_all(self) -> FilterResult:
        result = filters_view.reset(self.stations)
        self._apply(result, None)
        return result

    def select(self, name: str) -> bool:
        """Open the info panel for a visible station; False when nothing changed."""
        if name == self.active_marker or name not in self.result.names:
            return False
        self.active_marker = name
        self._notify()
        return True

    def clear_selection(self) -> None:
        self.active_marker = None
        self._notify()

    def active_station(self) -> Optional[Station]:
        if self.active_marker is None:
            return None
        return next((s for s in self.result.items if s.name == self.active_marker), None)


def get_prev_next(view_names: Iterable[str], current: Optional[str]) -> Tuple[str | None, str | None]:
    names = [str(x) for x in view_names]
    if not names or current not in names:
        return None, None
    idx = names.index(current)
    prev_name = names[idx - 1] if idx > 0 else None
    next_name = names[idx + 1] if idx < len(names) - 1 else None
    return prev_name, next_name

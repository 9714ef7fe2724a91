"""Filtering helpers for the station map viewer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .stations import Station

NOT_FOUND_MESSAGE = "No station found"
DEFAULT_STYLE = "blue"
MARKER_STYLES = {
    "major": "red",
    "minor": "blue",
    "development": "pink",
}


@dataclass(frozen=True)
class FilterResult:
    items: Tuple[Station, ...]
    focus: Optional[str] = None
    matched: bool = True

    @property
    def names(self) -> List[str]:
        return [s.name for s in self.items]


def filter_by_text(all_stations: Sequence[Station], query: Optional[str]) -> FilterResult:
    """Case-insensitive substring match on name; focus is the first match."""
    needle = (query or "").lower()
    items = tuple(s for s in all_stations if needle in s.name.lower())
    if not items:
        return FilterResult(items=(), focus=None, matched=False)
    return FilterResult(items=items, focus=items[0].name, matched=True)


def filter_by_type(all_stations: Sequence[Station], station_type: str) -> FilterResult:
    # Category browsing never selects a station.
    items = tuple(s for s in all_stations if s.type == station_type)
    return FilterResult(items=items, focus=None, matched=bool(items))


def reset(all_stations: Sequence[Station]) -> FilterResult:
    return FilterResult(items=tuple(all_stations), focus=None, matched=True)


def resolve_marker_style(station_type: Optional[str]) -> str:
    return MARKER_STYLES.get(station_type or "", DEFAULT_STYLE)


def station_types(all_stations: Iterable[Station]) -> List[str]:
    """Distinct station types in first-seen order."""
    seen: List[str] = []
    for s in all_stations:
        if s.type and s.type not in seen:
            seen.append(s.type)
    return seen


def describe_result(result: FilterResult) -> str:
    return "" if result.matched else NOT_FOUND_MESSAGE

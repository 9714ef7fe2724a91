"""Local key-value cache mirroring the station dataset, and the demo write path.

Writes never touch the source dataset: every operation derives its result from
the source list it is given and stores the outcome in the cache.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from .stations import Station, parse_stations

DEFAULT_CACHE_PATH = Path("data/railmap_cache.sqlite")
CACHE_KEY = "railStations"
KEEP = "(keep)"


class StationCache(Protocol):
    def get(self) -> Optional[List[Dict[str, Any]]]: ...

    def set(self, dataset: Sequence[Mapping[str, Any]]) -> None: ...


class MemoryCache:
    """Dict-backed cache, one value per key."""

    def __init__(self, key: str = CACHE_KEY):
        self.key = key
        self._store: Dict[str, str] = {}

    def get(self) -> Optional[List[Dict[str, Any]]]:
        raw = self._store.get(self.key)
        return json.loads(raw) if raw is not None else None

    def set(self, dataset: Sequence[Mapping[str, Any]]) -> None:
        self._store[self.key] = json.dumps([dict(r) for r in dataset], ensure_ascii=False)


def _ensure_db(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS kv_cache (
            key TEXT PRIMARY KEY,
            value TEXT,
            ts TEXT
        )
        """
    )
    conn.commit()


class SQLiteCache:
    """Key-value cache stored as JSON text in a SQLite table."""

    def __init__(self, path: str | Path = DEFAULT_CACHE_PATH, key: str = CACHE_KEY):
        self.path = Path(path)
        self.key = key

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.path)

    def get(self) -> Optional[List[Dict[str, Any]]]:
        conn = self._connect()
        try:
            _ensure_db(conn)
            row = conn.execute("SELECT value FROM kv_cache WHERE key = ?", (self.key,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        return json.loads(row[0])

    def set(self, dataset: Sequence[Mapping[str, Any]]) -> None:
        payload = json.dumps([dict(r) for r in dataset], ensure_ascii=False)
        conn = self._connect()
        try:
            _ensure_db(conn)
            conn.execute(
                "INSERT OR REPLACE INTO kv_cache(key, value, ts) VALUES (?, ?, ?)",
                (self.key, payload, datetime.utcnow().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()


def _write(cache: StationCache, stations: List[Station]) -> List[Station]:
    cache.set([s.to_record() for s in stations])
    return stations


def init_cache(cache: StationCache, stations: Sequence[Station]) -> bool:
    """Seed the cache with the source dataset unless it already holds one."""
    if cache.get() is not None:
        return False
    _write(cache, list(stations))
    return True


def cached_stations(cache: StationCache) -> List[Station]:
    data = cache.get()
    return parse_stations(data) if data else []


def create_station(
    cache: StationCache, source: Sequence[Station], new_station: Station | Mapping[str, Any]
) -> List[Station]:
    station = new_station if isinstance(new_station, Station) else Station.from_record(new_station)
    return _write(cache, [*source, station])


def update_station(
    cache: StationCache, source: Sequence[Station], name: str, changes: Mapping[str, Any]
) -> List[Station]:
    """Merge ``changes`` into every record named ``name``.

    Names are not enforced unique; with duplicates every match is updated.
    """
    updated = []
    for s in source:
        if s.name == name:
            merged = s.to_record()
            merged.update({k: v for k, v in changes.items() if v is not None})
            updated.append(Station.from_record(merged))
        else:
            updated.append(s)
    return _write(cache, updated)


def delete_station(cache: StationCache, source: Sequence[Station], name: str) -> List[Station]:
    return _write(cache, [s for s in source if s.name != name])


def form_changes(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop fields left at KEEP; an empty string is a real value and clears the field."""
    return {k: v for k, v in fields.items() if v != KEEP}

"""Station records and dataset loading (bundled JSON, local file or URL)."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd
import requests

BUNDLED_DATASET = "rail_stations.json"
FETCH_TIMEOUT = 30

_COORD_ALIASES = {
    "latitude": ("latitude", "lat"),
    "longitude": ("longitude", "lon", "lng"),
}


class StationLoadError(RuntimeError):
    """Raised when the station dataset cannot be read or parsed."""


@dataclass(frozen=True)
class Station:
    name: str
    latitude: float
    longitude: float
    type: str = ""
    details: str = ""

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Station":
        """Build a station from a dataset record; raises ValueError on bad input."""
        if not isinstance(record, Mapping):
            raise ValueError(f"Station record must be an object, got {record!r}")
        raw_name = next((record[k] for k in ("name", "station_name") if k in record and not _is_missing(record[k])), None)
        name = _text(raw_name)
        if not name:
            raise ValueError(f"Station record without name: {dict(record)!r}")
        coords = {}
        for field, keys in _COORD_ALIASES.items():
            raw = next((record[k] for k in keys if k in record and not _is_missing(record[k])), None)
            if raw is None:
                raise ValueError(f"Station {name!r} is missing {field}.")
            try:
                coords[field] = float(raw)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Station {name!r} has non-numeric {field}: {raw!r}") from exc
        return cls(
            name=name,
            latitude=coords["latitude"],
            longitude=coords["longitude"],
            type=_text(record.get("type")),
            details=_text(record.get("details")),
        )

    def to_record(self) -> dict:
        return asdict(self)


def _is_missing(val: Any) -> bool:
    if val is None:
        return True
    if isinstance(val, str):
        return val.strip() == ""
    try:
        return bool(pd.isna(val))
    except (TypeError, ValueError):
        return False


def _text(val: Any) -> str:
    return "" if _is_missing(val) else str(val).strip()


def parse_stations(records: Iterable[Mapping[str, Any]]) -> List[Station]:
    """Parse raw records, keeping dataset order."""
    return [Station.from_record(r) for r in records]


def _read_bundled() -> list:
    text = resources.files("railmap.data").joinpath(BUNDLED_DATASET).read_text(encoding="utf-8")
    return json.loads(text)


def _read_local(path: Path) -> list:
    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path)
        df.columns = [c.strip() for c in df.columns]
        return df.to_dict(orient="records")
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _read_remote(url: str, timeout: float) -> list:
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.json()


def load_stations(source: Optional[str | Path] = None, *, timeout: float = FETCH_TIMEOUT) -> List[Station]:
    """Load the station list once.

    ``source`` may be None (bundled dataset), a local .json/.csv path or an
    http(s) URL serving the same JSON array.
    """
    try:
        if source is None:
            data = _read_bundled()
        elif str(source).startswith(("http://", "https://")):
            data = _read_remote(str(source), timeout)
        else:
            data = _read_local(Path(source))
        if isinstance(data, dict) and "stations" in data:
            data = data["stations"]
        if not isinstance(data, list):
            raise ValueError("Station dataset must be a list of records.")
        return parse_stations(data)
    except (OSError, requests.RequestException, ValueError) as exc:
        raise StationLoadError(f"{source or BUNDLED_DATASET}: {exc}") from exc


def stations_to_frame(stations: Iterable[Station]) -> pd.DataFrame:
    """DataFrame view of stations for table/map display."""
    rows = [s.to_record() for s in stations]
    return pd.DataFrame(rows, columns=["name", "latitude", "longitude", "type", "details"])

"""Static table of road distances between city pairs.

Routes are undirected: each unordered city pair is stored once and
``RouteCatalog.find_distance`` checks both orientations. Labels are matched
case-insensitively: queries are trimmed and lower-cased, stored labels are
lower-cased as they are. There is no fuzzy matching or accent folding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Mapping

import pandas as pd

LOGGER = logging.getLogger("route_catalog")

REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_ROUTES_FILE = REPO_ROOT / "data" / "routes" / "brazil_routes.csv"

REQUIRED_COLUMNS = ("origin", "destination", "distance_km")


def normalize_city(label: str) -> str:
    """Return the comparison key for a city label."""
    return label.strip().lower()


@dataclass(frozen=True)
class Route:
    """Distance between two cities, traversable in either direction."""

    origin: str
    destination: str
    distance_km: float


class RouteCatalog:
    """Immutable, ordered collection of routes with order-independent lookup."""

    def __init__(self, routes: Iterable[Route]):
        self._routes: tuple[Route, ...] = tuple(routes)
        self._index: dict[tuple[str, str], float] = {}
        for route in self._routes:
            key = (route.origin.lower(), route.destination.lower())
            # first record wins, matching a front-to-back scan
            self._index.setdefault(key, route.distance_km)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, object]]) -> "RouteCatalog":
        routes = [
            Route(
                origin=str(record["origin"]),
                destination=str(record["destination"]),
                distance_km=float(record["distance_km"]),  # type: ignore[arg-type]
            )
            for record in records
        ]
        return cls(routes)

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def list_cities(self) -> list[str]:
        """Return every distinct city label, sorted by code point."""
        cities: set[str] = set()
        for route in self._routes:
            cities.add(route.origin)
            cities.add(route.destination)
        return sorted(cities)

    def find_distance(self, origin: str, destination: str) -> float | None:
        """Return the distance between two cities, or ``None`` when unknown.

        The stored ``origin -> destination`` orientation is checked first, then
        the reverse. ``None`` is an expected outcome: the caller should ask
        for a manual distance.
        """
        a = normalize_city(origin)
        b = normalize_city(destination)
        forward = self._index.get((a, b))
        if forward is not None:
            return forward
        reverse = self._index.get((b, a))
        if reverse is None:
            LOGGER.debug("No route between '%s' and '%s'", origin, destination)
        return reverse


def load_routes(path: Path | str) -> RouteCatalog:
    """Load a route table from CSV (``origin,destination,distance_km``)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Route table not found: {path}")
    df = pd.read_csv(path, comment="#")
    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(
            f"Route table '{path}' is missing columns {missing}. "
            f"Expected: {list(REQUIRED_COLUMNS)}"
        )

    df = df[list(REQUIRED_COLUMNS)].copy()
    df["origin"] = df["origin"].fillna("").astype(str).str.strip()
    df["destination"] = df["destination"].fillna("").astype(str).str.strip()
    empty = df[(df["origin"] == "") | (df["destination"] == "")]
    if not empty.empty:
        rows = ", ".join(str(i + 1) for i in empty.index)
        raise ValueError(f"Route table '{path}' has empty city labels in rows: {rows}")

    distances = pd.to_numeric(df["distance_km"], errors="coerce")
    invalid = df[distances.isna() | (distances <= 0)]
    if not invalid.empty:
        rows = ", ".join(str(i + 1) for i in invalid.index)
        raise ValueError(
            f"Route table '{path}' needs positive numeric distances; check rows: {rows}"
        )
    df["distance_km"] = distances.astype(float)

    pair_keys = [
        "|".join(sorted((normalize_city(o), normalize_city(d))))
        for o, d in zip(df["origin"], df["destination"])
    ]
    duplicated = pd.Series(pair_keys).duplicated()
    if duplicated.any():
        dupes = df.loc[duplicated.to_numpy(), ["origin", "destination"]]
        pairs = "; ".join(f"{o} <-> {d}" for o, d in dupes.itertuples(index=False))
        raise ValueError(f"Route table '{path}' repeats city pairs: {pairs}")

    catalog = RouteCatalog.from_records(df.to_dict(orient="records"))
    LOGGER.debug("Loaded %d routes from %s", len(catalog), path)
    return catalog


def load_default_catalog() -> RouteCatalog:
    """Return the route table bundled under ``data/routes``."""
    return load_routes(DEFAULT_ROUTES_FILE)

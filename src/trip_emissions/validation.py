from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import TransportMode
from .errors import TripInputError, UnknownModeError


def parse_mode(value: TransportMode | str | None) -> TransportMode:
    """Return the ``TransportMode`` for ``value`` or raise ``UnknownModeError``."""
    if isinstance(value, TransportMode):
        return value
    if value is None:
        raise UnknownModeError(value)
    try:
        return TransportMode(str(value).strip().lower())
    except ValueError as exc:
        raise UnknownModeError(value) from exc


def parse_distance(value: float | int | str | None) -> float:
    """Return ``value`` as a positive distance in km."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise TripInputError("Enter a valid distance in kilometres.")
    try:
        distance = float(value)
    except (TypeError, ValueError) as exc:
        raise TripInputError("Enter a valid distance in kilometres.") from exc
    if math.isnan(distance) or math.isinf(distance):
        raise TripInputError("Enter a valid distance in kilometres.")
    if distance <= 0:
        raise TripInputError("Distance must be greater than 0 km.")
    return distance


@dataclass(frozen=True)
class TripRequest:
    origin: str
    destination: str
    mode: TransportMode
    distance_km: float | None


def validate_trip_request(
    origin: str | None,
    destination: str | None,
    mode: TransportMode | str | None,
    distance_km: float | int | str | None = None,
) -> TripRequest:
    """Check the fields a user submits before any calculation runs.

    ``distance_km`` may be omitted when the distance is to be looked up in the
    route catalog; when given it must be a positive number.
    """
    origin = (origin or "").strip()
    destination = (destination or "").strip()
    if not origin:
        raise TripInputError("Enter an origin city.")
    if not destination:
        raise TripInputError("Enter a destination city.")
    if mode is None or (isinstance(mode, str) and not mode.strip()):
        raise TripInputError("Select a transport mode.")
    parsed_mode = parse_mode(mode)
    distance = None if distance_km is None else parse_distance(distance_km)
    return TripRequest(origin, destination, parsed_mode, distance)

"""Exceptions raised by the trip emission estimator."""

from __future__ import annotations


class TripInputError(ValueError):
    """User-supplied trip input is missing or malformed."""


class UnknownModeError(TripInputError):
    """A transport mode outside the enumerated set was requested."""

    def __init__(self, mode: object):
        self.mode = mode
        super().__init__(f"Transport mode '{mode}' is not recognised.")


class RouteNotFoundError(LookupError):
    """No catalogued route joins the two cities; a manual distance is required."""

    def __init__(self, origin: str, destination: str):
        self.origin = origin
        self.destination = destination
        super().__init__(
            f"No route between '{origin}' and '{destination}'. "
            "Enter the distance manually."
        )

from .calculator import (
    CarbonCreditResult,
    CreditPrice,
    EmissionCalculator,
    EmissionResult,
    ModeComparison,
    SavingsResult,
    TripEstimate,
    estimate_trip,
    run_from_config,
)
from .constants import BASELINE_MODE, TRANSPORT_MODES, TransportMode
from .errors import RouteNotFoundError, TripInputError, UnknownModeError
from .settings import CalculatorConfig, load_config

__all__ = [
    "BASELINE_MODE",
    "TRANSPORT_MODES",
    "CalculatorConfig",
    "CarbonCreditResult",
    "CreditPrice",
    "EmissionCalculator",
    "EmissionResult",
    "ModeComparison",
    "RouteNotFoundError",
    "SavingsResult",
    "TransportMode",
    "TripEstimate",
    "TripInputError",
    "UnknownModeError",
    "estimate_trip",
    "load_config",
    "run_from_config",
]

"""Estimate trip CO₂ emissions, compare transport modes and price carbon credits.

Every figure is a pure function of its arguments and the injected
``CalculatorConfig``; rounding follows :mod:`trip_emissions.rounding`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import pandas as pd

from route_catalog import RouteCatalog, load_default_catalog, load_routes

from .constants import BASELINE_MODE, TRANSPORT_MODES, TransportMode
from .errors import RouteNotFoundError, UnknownModeError
from .rounding import round2, round4, round_array
from .settings import CalculatorConfig, load_config
from .validation import parse_mode, validate_trip_request

LOGGER = logging.getLogger("trip_emissions")
if not LOGGER.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    LOGGER.addHandler(handler)
LOGGER.setLevel(logging.INFO)
LOGGER.propagate = False


@dataclass(frozen=True)
class EmissionResult:
    mode: TransportMode
    distance_km: float
    emission_kg: float


@dataclass(frozen=True)
class ModeComparison:
    mode: TransportMode
    emission: float
    percentage_vs_car: float


@dataclass(frozen=True)
class SavingsResult:
    """Emission avoided relative to the baseline; negative when the mode emits more."""

    saved_kg: float
    percentage: float


@dataclass(frozen=True)
class CreditPrice:
    min: float
    max: float
    average: float


@dataclass(frozen=True)
class CarbonCreditResult:
    credits: float
    price_min: float
    price_max: float
    price_average: float


@dataclass(frozen=True)
class TripEstimate:
    """Everything computed for one submitted trip."""

    origin: str
    destination: str
    distance_km: float
    distance_source: str
    mode: TransportMode
    emission: EmissionResult
    baseline_emission: float
    savings: SavingsResult
    comparison: list[ModeComparison]
    credits: CarbonCreditResult
    currency: str


class EmissionCalculator:
    """Emission arithmetic over a fixed ``CalculatorConfig``."""

    def __init__(self, config: CalculatorConfig | None = None):
        self.config = config if config is not None else CalculatorConfig()

    def calculate_emission(self, distance_km: float, mode: TransportMode | str) -> float:
        """Return ``distance_km * factor(mode)`` in kg CO₂, rounded to 2 decimals.

        An unrecognised mode is logged and yields ``0.0``, which callers must
        read as "no result". Distances are not validated here.
        """
        try:
            transport_mode = parse_mode(mode)
        except UnknownModeError as exc:
            LOGGER.error("%s", exc)
            return 0.0
        return round2(distance_km * self.config.factor(transport_mode))

    def emission_result(self, distance_km: float, mode: TransportMode | str) -> EmissionResult:
        transport_mode = parse_mode(mode)
        return EmissionResult(
            mode=transport_mode,
            distance_km=distance_km,
            emission_kg=self.calculate_emission(distance_km, transport_mode),
        )

    def calculate_all_modes(self, distance_km: float) -> list[ModeComparison]:
        """Emission for every mode with its share of the car emission, lowest first.

        Ties keep the declaration order of ``TransportMode``.
        """
        car_emission = self.calculate_emission(distance_km, BASELINE_MODE)
        results = []
        for mode in TransportMode:
            emission = self.calculate_emission(distance_km, mode)
            percentage = 0.0
            if car_emission > 0:
                percentage = round2((emission / car_emission) * 100)
            results.append(ModeComparison(mode, emission, percentage))
        # sorted() is stable, so equal emissions stay in enum order
        return sorted(results, key=lambda item: item.emission)

    def calculate_savings(self, emission: float, baseline_emission: float) -> SavingsResult:
        saved = baseline_emission - emission
        percentage = 0.0
        if baseline_emission > 0:
            percentage = round2((saved / baseline_emission) * 100)
        return SavingsResult(saved_kg=round2(saved), percentage=percentage)

    def calculate_carbon_credits(self, emission_kg: float) -> float:
        return round4(emission_kg / self.config.kg_per_credit)

    def estimate_credit_price(self, credits: float) -> CreditPrice:
        min_price = round2(credits * self.config.price_min_per_credit)
        max_price = round2(credits * self.config.price_max_per_credit)
        return CreditPrice(
            min=min_price,
            max=max_price,
            average=round2((min_price + max_price) / 2),
        )

    def carbon_credit_result(self, emission_kg: float) -> CarbonCreditResult:
        credits = self.calculate_carbon_credits(emission_kg)
        price = self.estimate_credit_price(credits)
        return CarbonCreditResult(
            credits=credits,
            price_min=price.min,
            price_max=price.max,
            price_average=price.average,
        )

    def comparison_frame(self, distance_km: float) -> pd.DataFrame:
        """Return :meth:`calculate_all_modes` as a table for reports."""
        rows = self.calculate_all_modes(distance_km)
        return comparison_to_frame(rows, self.config.factor)


def comparison_to_frame(
    rows: list[ModeComparison],
    factor: Callable[[TransportMode], float] | None = None,
) -> pd.DataFrame:
    """Tabulate a mode comparison, adding the kg saved against the car."""
    df = pd.DataFrame(
        {
            "mode": [row.mode.value for row in rows],
            "label": [TRANSPORT_MODES[row.mode]["label"] for row in rows],
            "emission_kg": [row.emission for row in rows],
            "percentage_vs_car": [row.percentage_vs_car for row in rows],
        }
    )
    if factor is not None:
        df.insert(2, "factor_kg_per_km", [factor(row.mode) for row in rows])
    car_rows = df.loc[df["mode"] == BASELINE_MODE.value, "emission_kg"]
    car_emission = float(car_rows.iloc[0]) if not car_rows.empty else 0.0
    df["saved_vs_car_kg"] = round_array(car_emission - df["emission_kg"].to_numpy(), 2)
    return df


def estimate_trip(
    origin: str,
    destination: str,
    mode: TransportMode | str,
    *,
    distance_km: float | str | None = None,
    catalog: RouteCatalog | None = None,
    calculator: EmissionCalculator | None = None,
) -> TripEstimate:
    """Validate a trip, resolve its distance and compute all derived figures.

    When ``distance_km`` is omitted the distance is looked up in ``catalog``;
    an unknown pair raises ``RouteNotFoundError`` so the caller can ask for a
    manual distance.
    """
    request = validate_trip_request(origin, destination, mode, distance_km)
    calculator = calculator or EmissionCalculator()

    if request.distance_km is not None:
        distance = request.distance_km
        source = "manual"
    else:
        catalog = catalog if catalog is not None else load_default_catalog()
        found = catalog.find_distance(request.origin, request.destination)
        if found is None:
            raise RouteNotFoundError(request.origin, request.destination)
        distance = found
        source = "catalog"
    LOGGER.info(
        "Estimating %s -> %s, %.1f km (%s) by %s",
        request.origin,
        request.destination,
        distance,
        source,
        request.mode,
    )

    emission = calculator.emission_result(distance, request.mode)
    baseline = calculator.calculate_emission(distance, BASELINE_MODE)
    savings = calculator.calculate_savings(emission.emission_kg, baseline)
    comparison = calculator.calculate_all_modes(distance)
    credits = calculator.carbon_credit_result(emission.emission_kg)
    LOGGER.debug("Emission %s: %.2f kg CO2 (baseline %.2f)", request.mode, emission.emission_kg, baseline)
    LOGGER.debug("Savings: %.2f kg (%.2f%%)", savings.saved_kg, savings.percentage)
    LOGGER.debug("Credits: %.4f, average price %.2f", credits.credits, credits.price_average)

    return TripEstimate(
        origin=request.origin,
        destination=request.destination,
        distance_km=distance,
        distance_source=source,
        mode=request.mode,
        emission=emission,
        baseline_emission=baseline,
        savings=savings,
        comparison=comparison,
        credits=credits,
        currency=calculator.config.currency,
    )


def run_from_config(
    config_path: Path | str | None,
    origin: str,
    destination: str,
    mode: TransportMode | str,
    *,
    distance_km: float | str | None = None,
) -> TripEstimate:
    """Load config.yaml, its route table and estimate one trip."""
    config = load_config(config_path)
    catalog = load_routes(config.routes_file) if config.routes_file else load_default_catalog()
    return estimate_trip(
        origin,
        destination,
        mode,
        distance_km=distance_km,
        catalog=catalog,
        calculator=EmissionCalculator(config),
    )

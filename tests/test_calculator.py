import math

import numpy as np
import pandas as pd
import pytest

from route_catalog import Route, RouteCatalog
from trip_emissions import (
    CalculatorConfig,
    EmissionCalculator,
    RouteNotFoundError,
    TransportMode,
    TripInputError,
    UnknownModeError,
    estimate_trip,
    run_from_config,
)
from trip_emissions.calculator import CreditPrice, SavingsResult, comparison_to_frame
from trip_emissions.rounding import round2


@pytest.fixture
def calculator() -> EmissionCalculator:
    return EmissionCalculator()


@pytest.mark.parametrize("distance", [0.0, 1.0, 13.0, 100.0, 430.0, 2487.0, 57.35])
@pytest.mark.parametrize("mode", list(TransportMode))
def test_calculate_emission_is_distance_times_factor(calculator, distance, mode):
    expected = round2(distance * calculator.config.factor(mode))
    assert calculator.calculate_emission(distance, mode) == expected


@pytest.mark.parametrize("distance", [0.0, 10.0, 2487.0])
def test_bicycle_never_emits(calculator, distance):
    assert calculator.calculate_emission(distance, TransportMode.BICYCLE) == 0


def test_calculate_emission_accepts_mode_strings(calculator):
    assert calculator.calculate_emission(100, "car") == 12.0
    assert calculator.calculate_emission(100, "TRUCK") == 96.0


def test_unknown_mode_yields_zero(calculator):
    assert calculator.calculate_emission(100, "plane") == 0.0


def test_emission_result_rejects_unknown_mode(calculator):
    with pytest.raises(UnknownModeError):
        calculator.emission_result(100, "plane")


def test_negative_distance_passes_through(calculator):
    assert calculator.calculate_emission(-100, TransportMode.CAR) == -12.0


def test_calculate_all_modes_sorted_by_emission(calculator):
    rows = calculator.calculate_all_modes(100)
    assert [row.mode for row in rows] == [
        TransportMode.BICYCLE,
        TransportMode.BUS,
        TransportMode.CAR,
        TransportMode.TRUCK,
    ]
    assert [row.emission for row in rows] == [0.0, 8.9, 12.0, 96.0]
    assert [row.percentage_vs_car for row in rows] == [0.0, 74.17, 100.0, 800.0]


def test_calculate_all_modes_zero_distance_keeps_declaration_order(calculator):
    rows = calculator.calculate_all_modes(0)
    assert [row.mode for row in rows] == list(TransportMode)
    assert all(row.percentage_vs_car == 0 for row in rows)


def test_calculate_all_modes_ties_follow_declaration_order():
    config = CalculatorConfig(
        emission_factors={"bicycle": 0.0, "car": 0.1, "bus": 0.1, "truck": 0.5}
    )
    rows = EmissionCalculator(config).calculate_all_modes(50)
    assert [row.mode for row in rows] == [
        TransportMode.BICYCLE,
        TransportMode.CAR,
        TransportMode.BUS,
        TransportMode.TRUCK,
    ]


def test_calculate_savings(calculator):
    assert calculator.calculate_savings(12, 12) == SavingsResult(saved_kg=0, percentage=0)
    assert calculator.calculate_savings(8.9, 12) == SavingsResult(saved_kg=3.1, percentage=25.83)


def test_calculate_savings_keeps_negative_values(calculator):
    result = calculator.calculate_savings(96, 12)
    assert result.saved_kg == -84
    assert result.percentage == -700


def test_calculate_savings_zero_baseline(calculator):
    result = calculator.calculate_savings(5, 0)
    assert result.saved_kg == -5
    assert result.percentage == 0


def test_carbon_credits_and_price(calculator):
    assert calculator.calculate_carbon_credits(1000) == 1.0
    assert calculator.calculate_carbon_credits(38.27) == 0.0383
    assert calculator.calculate_carbon_credits(0) == 0
    assert calculator.estimate_credit_price(1.0) == CreditPrice(min=50, max=150, average=100)


def test_credit_price_uses_injected_config():
    config = CalculatorConfig(kg_per_credit=500, price_min_per_credit=10, price_max_per_credit=25)
    calc = EmissionCalculator(config)
    assert calc.calculate_carbon_credits(1000) == 2.0
    assert calc.estimate_credit_price(2.0) == CreditPrice(min=20, max=50, average=35)
    # the default calculator is unaffected
    assert EmissionCalculator().estimate_credit_price(1.0).max == 150


def test_carbon_credit_result_combines_credits_and_price(calculator):
    result = calculator.carbon_credit_result(96)
    assert result.credits == 0.096
    assert result.price_min == 4.8
    assert result.price_max == 14.4
    assert result.price_average == 9.6


def test_calculations_are_idempotent(calculator):
    assert calculator.calculate_all_modes(430) == calculator.calculate_all_modes(430)
    assert calculator.calculate_savings(3, 7) == calculator.calculate_savings(3, 7)
    assert calculator.estimate_credit_price(0.37) == calculator.estimate_credit_price(0.37)
    assert calculator.calculate_emission(57.35, "bus") == calculator.calculate_emission(57.35, "bus")


def test_comparison_frame(calculator):
    df = calculator.comparison_frame(100)
    assert isinstance(df, pd.DataFrame)
    assert df["mode"].tolist() == ["bicycle", "bus", "car", "truck"]
    np.testing.assert_allclose(df["factor_kg_per_km"], [0.0, 0.089, 0.12, 0.96])
    np.testing.assert_allclose(df["saved_vs_car_kg"], [12.0, 3.1, 0.0, -84.0])


@pytest.fixture
def small_catalog() -> RouteCatalog:
    return RouteCatalog([Route("São Paulo, SP", "Rio de Janeiro, RJ", 430.0)])


def test_estimate_trip_uses_catalog_distance(small_catalog):
    estimate = estimate_trip(
        "Rio de Janeiro, RJ", " são paulo, sp ", "bus", catalog=small_catalog
    )
    assert estimate.distance_km == 430
    assert estimate.distance_source == "catalog"
    assert estimate.mode is TransportMode.BUS
    assert estimate.emission.emission_kg == 38.27
    assert estimate.baseline_emission == 51.6
    assert estimate.savings.saved_kg == 13.33
    assert len(estimate.comparison) == len(TransportMode)
    assert estimate.credits.credits == 0.0383
    assert estimate.currency == "BRL"


def test_estimate_trip_manual_distance_overrides_catalog(small_catalog):
    estimate = estimate_trip(
        "São Paulo, SP", "Rio de Janeiro, RJ", "truck", distance_km="100", catalog=small_catalog
    )
    assert estimate.distance_source == "manual"
    assert estimate.emission.emission_kg == 96
    assert estimate.savings.saved_kg == -84


def test_estimate_trip_unknown_route(small_catalog):
    with pytest.raises(RouteNotFoundError):
        estimate_trip("Timbuktu", "Nowhere", "car", catalog=small_catalog)


@pytest.mark.parametrize(
    "origin, destination, mode, distance",
    [
        ("", "B", "car", 10),
        ("A", "  ", "car", 10),
        ("A", "B", None, 10),
        ("A", "B", "plane", 10),
        ("A", "B", "car", 0),
        ("A", "B", "car", -3),
        ("A", "B", "car", "abc"),
    ],
)
def test_estimate_trip_validates_input(small_catalog, origin, destination, mode, distance):
    with pytest.raises(TripInputError):
        estimate_trip(origin, destination, mode, distance_km=distance, catalog=small_catalog)


def test_run_from_config_uses_repo_config(repo_root):
    estimate = run_from_config(
        repo_root / "config.yaml", "Curitiba, PR", "Florianópolis, SC", "car"
    )
    assert estimate.distance_km == 300
    assert estimate.emission.emission_kg == 36.0
    assert estimate.savings.percentage == 0


def test_nan_distance_yields_nan_emission(calculator):
    assert math.isnan(calculator.calculate_emission(float("nan"), TransportMode.CAR))


def test_comparison_frame_without_factor_column(calculator):
    df = comparison_to_frame(calculator.calculate_all_modes(100))
    assert "factor_kg_per_km" not in df.columns
    assert df["saved_vs_car_kg"].tolist() == [12.0, 3.1, 0.0, -84.0]

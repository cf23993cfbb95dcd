from __future__ import annotations

from enum import Enum


class TransportMode(str, Enum):
    """Transport modes known to the calculator, in declaration order."""

    BICYCLE = "bicycle"
    CAR = "car"
    BUS = "bus"
    TRUCK = "truck"

    def __str__(self) -> str:
        return self.value


BASELINE_MODE = TransportMode.CAR

# kg CO2 per km
DEFAULT_EMISSION_FACTORS: dict[TransportMode, float] = {
    TransportMode.BICYCLE: 0.0,
    TransportMode.CAR: 0.12,
    TransportMode.BUS: 0.089,
    TransportMode.TRUCK: 0.96,
}

DEFAULT_KG_PER_CREDIT = 1000.0
DEFAULT_PRICE_MIN_PER_CREDIT = 50.0
DEFAULT_PRICE_MAX_PER_CREDIT = 150.0
DEFAULT_CURRENCY = "BRL"

EMISSION_UNIT = "kg CO2"

TRANSPORT_MODES: dict[TransportMode, dict[str, str]] = {
    TransportMode.BICYCLE: {"label": "Bicicleta", "icon": "🚲", "color": "#3b82f6"},
    TransportMode.CAR: {"label": "Carro", "icon": "🚗", "color": "#ef4444"},
    TransportMode.BUS: {"label": "Ônibus", "icon": "🚌", "color": "#f59e0b"},
    TransportMode.TRUCK: {"label": "Caminhão", "icon": "🚛", "color": "#8b5cf6"},
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "BRL": "R$",
    "USD": "US$",
    "EUR": "€",
}

"""pt-BR style number and currency formatting for printed results."""

from __future__ import annotations

from .constants import CURRENCY_SYMBOLS, TRANSPORT_MODES, TransportMode
from .rounding import round_half_away_from_zero


def format_number(value: float, decimals: int = 2) -> str:
    """Format ``value`` with ``.`` thousands and ``,`` decimal separators (``1.234,56``)."""
    rounded = round_half_away_from_zero(float(value), decimals)
    text = f"{rounded:,.{decimals}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(value: float, currency: str = "BRL") -> str:
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())
    amount = format_number(abs(value), 2)
    sign = "-" if round_half_away_from_zero(float(value), 2) < 0 else ""
    return f"{sign}{symbol} {amount}"


def mode_label(mode: TransportMode) -> str:
    meta = TRANSPORT_MODES[mode]
    return f"{meta['icon']} {meta['label']}"

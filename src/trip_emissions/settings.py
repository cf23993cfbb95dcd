"""Load calculator configuration from the ``trip_emissions`` section of config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

from .constants import (
    DEFAULT_CURRENCY,
    DEFAULT_EMISSION_FACTORS,
    DEFAULT_KG_PER_CREDIT,
    DEFAULT_PRICE_MAX_PER_CREDIT,
    DEFAULT_PRICE_MIN_PER_CREDIT,
    TransportMode,
)

SECTION = "trip_emissions"


@dataclass(frozen=True)
class CalculatorConfig:
    """Static emission factors and carbon-credit pricing."""

    emission_factors: Mapping[TransportMode, float] = field(
        default_factory=lambda: dict(DEFAULT_EMISSION_FACTORS)
    )
    kg_per_credit: float = DEFAULT_KG_PER_CREDIT
    price_min_per_credit: float = DEFAULT_PRICE_MIN_PER_CREDIT
    price_max_per_credit: float = DEFAULT_PRICE_MAX_PER_CREDIT
    currency: str = DEFAULT_CURRENCY
    routes_file: Path | None = None

    def __post_init__(self) -> None:
        factors = _normalise_factors(self.emission_factors)
        object.__setattr__(self, "emission_factors", MappingProxyType(factors))
        if self.kg_per_credit <= 0:
            raise ValueError("carbon_credit.kg_per_credit must be positive.")
        if self.price_min_per_credit < 0 or self.price_max_per_credit < 0:
            raise ValueError("carbon_credit prices must not be negative.")
        if self.price_min_per_credit > self.price_max_per_credit:
            raise ValueError("carbon_credit.price_min must not exceed price_max.")

    def __hash__(self) -> int:
        return hash(
            (
                tuple(self.emission_factors.items()),
                self.kg_per_credit,
                self.price_min_per_credit,
                self.price_max_per_credit,
                self.currency,
                self.routes_file,
            )
        )

    def factor(self, mode: TransportMode) -> float:
        return self.emission_factors[mode]


def _normalise_factors(raw: Mapping[TransportMode | str, float]) -> dict[TransportMode, float]:
    factors: dict[TransportMode, float] = {}
    unknown = []
    for key, value in raw.items():
        try:
            mode = key if isinstance(key, TransportMode) else TransportMode(str(key).strip().lower())
        except ValueError:
            unknown.append(str(key))
            continue
        factor = float(value)
        if factor < 0:
            raise ValueError(f"Emission factor for '{mode}' must not be negative.")
        factors[mode] = factor
    if unknown:
        known = ", ".join(mode.value for mode in TransportMode)
        raise ValueError(f"Unknown transport modes in emission_factors: {unknown}. Known: {known}")
    missing = [mode.value for mode in TransportMode if mode not in factors]
    if missing:
        raise ValueError(f"emission_factors is missing transport modes: {missing}")
    # keep declaration order regardless of file order
    return {mode: factors[mode] for mode in TransportMode}


def config_from_mapping(module_cfg: Mapping[str, object], root: Path | None = None) -> CalculatorConfig:
    """Build a ``CalculatorConfig`` from an already-parsed ``trip_emissions`` mapping."""
    from config_paths import resolve_config_relative, set_config_root  # local import to avoid cycle

    factors = module_cfg.get("emission_factors") or DEFAULT_EMISSION_FACTORS
    if not isinstance(factors, Mapping):
        raise ValueError("'emission_factors' must map transport modes to kg CO2 per km.")

    credit_cfg = module_cfg.get("carbon_credit") or {}
    if not isinstance(credit_cfg, Mapping):
        raise ValueError("'carbon_credit' must be a mapping.")

    routes_file = None
    routes_setting = module_cfg.get("routes_file")
    if routes_setting:
        anchor: dict[str, object] = {}
        if root is not None:
            set_config_root(anchor, root)
        routes_file = resolve_config_relative(str(routes_setting), anchor, data_subdir="routes")

    return CalculatorConfig(
        emission_factors=factors,
        kg_per_credit=float(credit_cfg.get("kg_per_credit", DEFAULT_KG_PER_CREDIT)),
        price_min_per_credit=float(credit_cfg.get("price_min", DEFAULT_PRICE_MIN_PER_CREDIT)),
        price_max_per_credit=float(credit_cfg.get("price_max", DEFAULT_PRICE_MAX_PER_CREDIT)),
        currency=str(credit_cfg.get("currency", DEFAULT_CURRENCY)).strip().upper() or DEFAULT_CURRENCY,
        routes_file=routes_file,
    )


def load_config(config_path: Path | str | None = None) -> CalculatorConfig:
    """Read ``config.yaml`` (or ``TRIP_EMISSIONS_CONFIG_PATH``) into a ``CalculatorConfig``."""
    from config_paths import get_config_path  # local import to avoid cycle

    config_path = Path(config_path) if config_path is not None else get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    with config_path.open(encoding="utf-8") as handle:
        config = yaml.safe_load(handle) or {}

    module_cfg = config.get(SECTION, {})
    if not module_cfg:
        raise ValueError(f"'{SECTION}' section missing from {config_path.name}")
    if not isinstance(module_cfg, Mapping):
        raise ValueError(f"'{SECTION}' section must be a mapping.")
    return config_from_mapping(module_cfg, root=config_path.parent)

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from .constants import EMISSION_UNIT

if TYPE_CHECKING:  # pragma: no cover
    from .calculator import TripEstimate


def write_comparison_csv(estimate: TripEstimate, destination: Path | str) -> Path:
    """Write the mode comparison of ``estimate`` to CSV with commented trip metadata."""
    from .calculator import comparison_to_frame

    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = comparison_to_frame(estimate.comparison)
    with path.open("w", encoding="utf-8") as fh:
        fh.write(f"# unit: {EMISSION_UNIT}\n")
        fh.write(f"# origin: {estimate.origin}\n")
        fh.write(f"# destination: {estimate.destination}\n")
        fh.write(f"# distance_km: {estimate.distance_km} ({estimate.distance_source})\n")
        fh.write(f"# selected_mode: {estimate.mode.value}\n")
        df.to_csv(fh, index=False)
    return path


def estimate_to_dict(estimate: TripEstimate) -> dict[str, object]:
    return {
        "origin": estimate.origin,
        "destination": estimate.destination,
        "distance_km": estimate.distance_km,
        "distance_source": estimate.distance_source,
        "mode": estimate.mode.value,
        "emission_kg": estimate.emission.emission_kg,
        "baseline_emission_kg": estimate.baseline_emission,
        "savings": {
            "saved_kg": estimate.savings.saved_kg,
            "percentage": estimate.savings.percentage,
        },
        "comparison": [
            {
                "mode": row.mode.value,
                "emission_kg": row.emission,
                "percentage_vs_car": row.percentage_vs_car,
            }
            for row in estimate.comparison
        ],
        "carbon_credits": {
            "credits": estimate.credits.credits,
            "price_min": estimate.credits.price_min,
            "price_max": estimate.credits.price_max,
            "price_average": estimate.credits.price_average,
            "currency": estimate.currency,
        },
    }


def write_estimate_summary(estimate: TripEstimate, destination: Path | str) -> Path:
    """Write the full estimate as YAML."""
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(estimate_to_dict(estimate), fh, sort_keys=False, allow_unicode=True)
    return path

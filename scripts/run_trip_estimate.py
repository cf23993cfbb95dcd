"""Estimate the CO₂ emission of a trip between two cities.

The distance is looked up in the configured route table; pass ``--distance``
to enter it manually when the pair is not catalogued. The script prints the
emission for the chosen mode, the savings against travelling by car, a
comparison of every transport mode and the carbon credits needed to offset
the trip. ``--output``/``--summary`` additionally write the comparison as CSV
and the full estimate as YAML.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

sys.path.insert(0, str(ROOT / "src"))

from config_paths import get_config_path  # noqa: E402
from route_catalog import load_default_catalog, load_routes  # noqa: E402
from trip_emissions import (  # noqa: E402
    EmissionCalculator,
    RouteNotFoundError,
    TransportMode,
    TripEstimate,
    TripInputError,
    estimate_trip,
    load_config,
)
from trip_emissions.formatting import format_currency, format_number, mode_label  # noqa: E402
from trip_emissions.writers import write_comparison_csv, write_estimate_summary  # noqa: E402

LOGGER = logging.getLogger("trip_emissions.run")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate trip CO2 emissions, compare transport modes and price carbon credits"
    )
    parser.add_argument("--config", help="Explicit path to a config.yaml file")
    parser.add_argument("--origin", help="Origin city, e.g. 'São Paulo, SP'")
    parser.add_argument("--destination", help="Destination city, e.g. 'Rio de Janeiro, RJ'")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in TransportMode],
        help="Transport mode used for the trip",
    )
    parser.add_argument(
        "--distance",
        help="Manual distance in km; overrides the route table lookup",
    )
    parser.add_argument(
        "--list-cities",
        action="store_true",
        help="List the cities known to the route table and exit",
    )
    parser.add_argument("--output", help="Write the mode comparison to this CSV file")
    parser.add_argument("--summary", help="Write the full estimate to this YAML file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def render_estimate(estimate: TripEstimate) -> str:
    """Return a human-readable report for ``estimate``."""
    lines = [
        f"{estimate.origin} -> {estimate.destination}",
        f"Distance: {format_number(estimate.distance_km, 1)} km ({estimate.distance_source})",
        f"Mode: {mode_label(estimate.mode)}",
        f"Emission: {format_number(estimate.emission.emission_kg, 2)} kg CO2",
    ]
    if estimate.mode is not TransportMode.CAR:
        saved = estimate.savings
        verb = "saved" if saved.saved_kg >= 0 else "extra"
        lines.append(
            f"Versus car: {format_number(abs(saved.saved_kg), 2)} kg {verb} "
            f"({format_number(saved.percentage, 2)}%)"
        )

    lines.append("")
    lines.append("Mode comparison:")
    for row in estimate.comparison:
        marker = "*" if row.mode is estimate.mode else " "
        lines.append(
            f" {marker} {mode_label(row.mode):<14} {format_number(row.emission, 2):>10} kg CO2"
            f"  {format_number(row.percentage_vs_car, 2):>8}% of car"
        )

    credits = estimate.credits
    lines.append("")
    lines.append(f"Carbon credits: {format_number(credits.credits, 4)}")
    lines.append(
        f"Estimated price: {format_currency(credits.price_average, estimate.currency)} "
        f"({format_currency(credits.price_min, estimate.currency)} to "
        f"{format_currency(credits.price_max, estimate.currency)})"
    )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    if args.verbose:
        package_logger = logging.getLogger("trip_emissions")
        package_logger.setLevel(logging.DEBUG)
        # the package logger does not propagate; its own handler filters too
        for handler in package_logger.handlers:
            handler.setLevel(logging.DEBUG)
        logging.getLogger("route_catalog").setLevel(logging.DEBUG)

    config_path = Path(args.config) if args.config else get_config_path()
    try:
        config = load_config(config_path)
        catalog = load_routes(config.routes_file) if config.routes_file else load_default_catalog()
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    if args.list_cities:
        for city in catalog.list_cities():
            print(city)
        return 0

    if not args.origin or not args.destination or not args.mode:
        parser.error("--origin, --destination and --mode are required (or use --list-cities).")

    try:
        estimate = estimate_trip(
            args.origin,
            args.destination,
            args.mode,
            distance_km=args.distance,
            catalog=catalog,
            calculator=EmissionCalculator(config),
        )
    except RouteNotFoundError as exc:
        LOGGER.warning("%s", exc)
        print(f"{exc} Re-run with --distance <km>.", file=sys.stderr)
        return 2
    except TripInputError as exc:
        parser.error(str(exc))

    print(render_estimate(estimate))

    if args.output:
        path = write_comparison_csv(estimate, args.output)
        LOGGER.info("Mode comparison written to %s", path)
    if args.summary:
        path = write_estimate_summary(estimate, args.summary)
        LOGGER.info("Estimate summary written to %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Moving map navaid cache builder.

Command line entry point: loads a navigation database, the beacon file and
a flight plan, builds the leg and airport chart caches once, and prints a
summary.

Typical usage:
    movingmap --navdata data/navaids.csv --plan plans/uuee_urss.yaml
    movingmap --navdata data/navaids.csv --plan plan.yaml --aircraft-lat 55.97 --aircraft-lon 37.41
"""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from movingmap.core.config import ConfigLoader
from movingmap.core.logging_system import get_logger, initialize_logging, shutdown_logging
from movingmap.core.resource_path import get_beacon_db_path, get_config_path, get_resource_path
from movingmap.navigation.airport_chart import AirportChartEntry
from movingmap.navigation.beacon_names import BeaconNameTable
from movingmap.navigation.beacons import BeaconStore
from movingmap.navigation.cache import AirportChartCache, CacheOrchestrator, NavaidCache
from movingmap.navigation.flight_plan import FlightPlan, StaticPosition
from movingmap.navigation.navdata import NavDatabase
from movingmap.navigation.settings import CacheSettings

logger = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Build moving map navaid caches for a flight plan")

    parser.add_argument("--navdata", required=True, type=Path, help="Navigation database CSV")
    parser.add_argument("--plan", required=True, type=Path, help="Flight plan YAML")
    parser.add_argument("--config", type=Path, help="User configuration merged over the defaults")
    parser.add_argument("--beacons", type=Path, help="Beacon database file (overrides the default)")
    parser.add_argument("--aircraft-lat", type=float, help="Current aircraft latitude")
    parser.add_argument("--aircraft-lon", type=float, help="Current aircraft longitude")
    parser.add_argument("--radius", type=float, help="Airport chart radius in NM")

    args = parser.parse_args(argv)
    if (args.aircraft_lat is None) != (args.aircraft_lon is None):
        parser.error("--aircraft-lat and --aircraft-lon must be given together")
    return args


def load_settings(args: argparse.Namespace) -> CacheSettings:
    config = ConfigLoader.load_layered(get_config_path("movingmap.yaml"), args.config)
    if args.radius is not None:
        config.set("navaid_cache.airport_radius_nm", args.radius)
    return CacheSettings.from_config(config)


def build_orchestrator(args: argparse.Namespace, settings: CacheSettings) -> CacheOrchestrator:
    navdata = NavDatabase()
    navdata.load_from_csv(args.navdata)

    names = BeaconNameTable.load_from_yaml(get_resource_path(settings.beacon_names_file))
    beacon_path = args.beacons or get_beacon_db_path(settings.beacon_file)
    beacons = BeaconStore(beacon_path, names)

    position = None
    if args.aircraft_lat is not None:
        position = StaticPosition(args.aircraft_lat, args.aircraft_lon)

    return CacheOrchestrator(navdata, beacons, position_provider=position, settings=settings)


def _format_airport(role: str, entry: AirportChartEntry) -> list[str]:
    if not entry.valid:
        return [f"{role}: not available"]
    lines = [f"{role}: {entry.icao} {entry.name} elev {entry.elevation_m} m"]
    for nav in entry.navaids:
        lines.append(f"    {nav} {nav.distance_nm:6.1f} NM {nav.bearing_deg:05.1f}")
    return lines


def format_summary(plan: FlightPlan, navaid_cache: NavaidCache, airport_cache: AirportChartCache) -> str:
    """Render both caches as plain text."""
    lines = _format_airport("Departure", airport_cache.departure)
    lines += _format_airport("Arrival", airport_cache.arrival)

    for index, leg in plan.numbered_legs():
        entry = navaid_cache.legs.get(index)
        if entry is None or not entry.valid:
            lines.append(f"Leg {index} {leg.name}: unresolved")
            continue
        lines.append(f"Leg {index} {leg.name}: {len(entry.navaids)} navaids")
        for nav in entry.navaids:
            lines.append(f"    {nav} S={nav.s_offset_km:7.1f} km Z={nav.z_offset_km:6.1f} km")

    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success).
    """
    args = parse_args(argv)

    logging_config = get_config_path("logging.yaml")
    initialize_logging(logging_config if logging_config.exists() else None)

    try:
        settings = load_settings(args)
        plan = FlightPlan.load(args.plan)
        orchestrator = build_orchestrator(args, settings)
        navaid_cache, airport_cache = orchestrator.rebuild(plan)
        print(format_summary(plan, navaid_cache, airport_cache))
        return 0
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.exception("Fatal error: %s", e)
        return 1
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())

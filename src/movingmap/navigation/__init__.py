"""Navaid lookup, waypoint resolution and moving map caches.

This package resolves flight plan legs to coordinates, collects the navaids
along each leg corridor and around the departure and arrival airports.

Typical usage:
    from movingmap.navigation import BeaconStore, CacheOrchestrator, FlightPlan, NavDatabase

    db = NavDatabase()
    db.load_from_csv("data/navaids.csv")
    orchestrator = CacheOrchestrator(db, BeaconStore("data/rsbn.dat"))
    navaid_cache, airport_cache = orchestrator.rebuild(FlightPlan.load("plan.yaml"))
"""

from movingmap.navigation.airport_chart import (
    AirportChartBuilder,
    AirportChartEntry,
    extract_airports,
)
from movingmap.navigation.beacon_names import BeaconNameTable
from movingmap.navigation.beacons import BeaconRecord, BeaconStore, parse_beacon_line
from movingmap.navigation.cache import AirportChartCache, CacheOrchestrator, NavaidCache
from movingmap.navigation.collector import LegCacheEntry, LegNavaidCollector
from movingmap.navigation.flight_plan import (
    FlightPlan,
    FlightPlanError,
    Leg,
    PositionProvider,
    StaticPosition,
)
from movingmap.navigation.legs import LegCoordinateBuilder, split_leg_name
from movingmap.navigation.navdata import (
    Navaid,
    NavaidInfo,
    NavaidType,
    NavDatabase,
    NavDataError,
    NavDataService,
)
from movingmap.navigation.projection import geo_to_leg
from movingmap.navigation.query import NavaidQueryAdapter, navaid_exists
from movingmap.navigation.resolver import WaypointResolver
from movingmap.navigation.settings import CacheSettings

__all__ = [
    "AirportChartBuilder",
    "AirportChartCache",
    "AirportChartEntry",
    "BeaconNameTable",
    "BeaconRecord",
    "BeaconStore",
    "CacheOrchestrator",
    "CacheSettings",
    "FlightPlan",
    "FlightPlanError",
    "Leg",
    "LegCacheEntry",
    "LegCoordinateBuilder",
    "LegNavaidCollector",
    "Navaid",
    "NavaidCache",
    "NavaidInfo",
    "NavaidQueryAdapter",
    "NavaidType",
    "NavDatabase",
    "NavDataError",
    "NavDataService",
    "PositionProvider",
    "StaticPosition",
    "WaypointResolver",
    "extract_airports",
    "geo_to_leg",
    "navaid_exists",
    "parse_beacon_line",
    "split_leg_name",
]

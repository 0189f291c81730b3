"""Departure and arrival airport charts.

The departure and arrival ICAO codes are taken from the plan name
("UUEE-URSS ..."), otherwise from the first leg (departure) and the last
leg (arrival). Each airport is looked up strictly as an airport, and the
navaids around it are gathered by sampling a compass ring at half the chart
radius plus the airport itself.
"""

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from movingmap.navigation.beacons import BeaconStore
from movingmap.navigation.flight_plan import FlightPlan
from movingmap.navigation.geo import FEET_TO_METERS, bearing_deg, destination, distance_nm
from movingmap.navigation.navdata import Navaid, NavaidType
from movingmap.navigation.query import NavaidQueryAdapter
from movingmap.navigation.settings import CacheSettings

logger = logging.getLogger(__name__)


def is_icao_code(text: str) -> bool:
    """True for exactly four upper-case ASCII letters.

    Examples:
        >>> is_icao_code("UUEE")
        True
        >>> is_icao_code("uuee"), is_icao_code("UUE1"), is_icao_code("UUEEX")
        (False, False, False)
    """
    return len(text) == 4 and text.isascii() and text.isalpha() and text.isupper()


def airports_from_plan_name(name: str | None) -> tuple[str, str] | None:
    """Match "XXXX-YYYY" at the start of a plan name."""
    if not name or len(name) < 9:
        return None
    dep, dash, arr = name[:4], name[4], name[5:9]
    if dash == "-" and is_icao_code(dep) and is_icao_code(arr):
        return dep, arr
    return None


def departure_from_leg_name(name: str | None) -> str | None:
    """Match "XXXX-..." first, then a standalone "XXXX"."""
    if not name:
        return None
    if len(name) > 4 and name[4] == "-" and is_icao_code(name[:4]):
        return name[:4]
    if is_icao_code(name):
        return name
    return None


def arrival_from_leg_name(name: str | None) -> str | None:
    """Match "...-XXXX" first, then a standalone "XXXX"."""
    if not name:
        return None
    if len(name) > 4 and name[-5] == "-" and is_icao_code(name[-4:]):
        return name[-4:]
    if is_icao_code(name):
        return name
    return None


def extract_airports(plan: FlightPlan | None) -> tuple[str | None, str | None]:
    """Extract departure and arrival ICAO codes from a plan.

    Returns:
        (departure, arrival); either may be None.

    Examples:
        >>> extract_airports(FlightPlan(name="UUEE-URSS"))
        ('UUEE', 'URSS')
    """
    if plan is None:
        return None, None

    dep = arr = None

    from_name = airports_from_plan_name(plan.name)
    if from_name is not None:
        dep, arr = from_name
        logger.debug("Extracted airports from plan name: %s -> %s", dep, arr)

    if dep is None and plan.legs:
        dep = departure_from_leg_name(plan.legs[0].name)
        if dep is not None:
            logger.debug("Extracted departure from first leg: %s", dep)

    if arr is None and plan.legs:
        arr = arrival_from_leg_name(plan.legs[-1].name)
        if arr is not None:
            logger.debug("Extracted arrival from last leg: %s", arr)

    return dep, arr


@dataclass
class AirportChartEntry:
    """Chart data for one airport.

    Attributes:
        icao: ICAO code
        name: Display name (the ICAO code when the database has none)
        latitude: Airport latitude
        longitude: Airport longitude
        elevation_m: Elevation in whole meters
        navaids: Surrounding navaids, ascending by distance
        valid: False if the airport could not be found
    """

    icao: str | None = None
    name: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    elevation_m: int | None = None
    navaids: list[Navaid] = field(default_factory=list)
    valid: bool = False


class AirportChartBuilder:
    """Build departure and arrival chart entries.

    Attributes:
        query: Navigation database adapter
        beacons: Beacon store
        settings: Radius, ring and category parameters
    """

    def __init__(
        self,
        query: NavaidQueryAdapter,
        beacons: BeaconStore,
        settings: CacheSettings | None = None,
    ) -> None:
        self.query = query
        self.beacons = beacons
        self.settings = settings or CacheSettings()

    def ring_points(self, latitude: float, longitude: float, radius_nm: float) -> list[tuple[float, float]]:
        """Compass ring at half the radius, followed by the airport itself."""
        count = self.settings.airport_ring_points
        bearings = np.arange(count) * (360.0 / count)
        points = [destination(latitude, longitude, float(b), radius_nm / 2) for b in bearings]
        points.append((latitude, longitude))
        return points

    def query_airport_navaids(
        self, latitude: float, longitude: float, radius_nm: float | None = None
    ) -> list[Navaid]:
        """Navaids within ``radius_nm`` of an airport, nearest first.

        Each navaid is stamped with distance and bearing from the airport.
        Equal distances keep discovery order.
        """
        if radius_nm is None:
            radius_nm = self.settings.airport_radius_nm

        navaids: list[Navaid] = []
        seen: set[tuple[str, NavaidType]] = set()

        def admit(nav: Navaid) -> None:
            if nav.key in seen:
                return
            dist = distance_nm(latitude, longitude, nav.latitude, nav.longitude)
            if dist > radius_nm:
                return
            seen.add(nav.key)
            nav.distance_nm = dist
            nav.bearing_deg = bearing_deg(latitude, longitude, nav.latitude, nav.longitude)
            navaids.append(nav)

        for lat, lon in self.ring_points(latitude, longitude, radius_nm):
            for nav in self.query.query_near(lat, lon, self.settings.airport_navaid_types):
                admit(nav)

        for nav in self.beacons.query_near(latitude, longitude, radius_nm):
            admit(nav)

        navaids.sort(key=lambda nav: nav.distance_nm)

        logger.debug("Found %d navaids within %.0f NM", len(navaids), radius_nm)
        return navaids

    def build_entry(self, icao: str | None, role: str = "airport") -> AirportChartEntry:
        """Look up ``icao`` as an airport and gather its chart.

        Returns:
            A valid entry, or an invalid empty one when the code is missing,
            the airport is unknown, or it has no coordinates.
        """
        if not icao:
            return AirportChartEntry()

        airport = self.query.find_by_identifier(icao, NavaidType.AIRPORT)
        if airport is None:
            logger.warning("Could not find %s airport %s", role, icao)
            return AirportChartEntry()

        elevation_m = math.floor(airport.elevation * FEET_TO_METERS) if airport.elevation else 0
        entry = AirportChartEntry(
            icao=icao,
            name=airport.name or icao,
            latitude=airport.latitude,
            longitude=airport.longitude,
            elevation_m=elevation_m,
            navaids=self.query_airport_navaids(airport.latitude, airport.longitude),
            valid=True,
        )
        logger.info("Cached %s %s (%s)", role, icao, entry.name)
        return entry

    def build(self, plan: FlightPlan | None) -> tuple[AirportChartEntry, AirportChartEntry]:
        """Build (departure, arrival) entries for a plan."""
        dep_icao, arr_icao = extract_airports(plan)
        return self.build_entry(dep_icao, "departure"), self.build_entry(arr_icao, "arrival")

"""Waypoint name resolution.

Flight plan legs name their waypoints with free text: ICAO airport codes,
two or three letter station identifiers, five letter fix names. The same
string can exist in several categories, so the category search order
depends on the shape of the name:

    length 4      AIRPORT, FIX, VOR, NDB
    length 2, 3   VOR, NDB, FIX, AIRPORT
    otherwise     FIX, VOR, NDB, AIRPORT

The first category that yields coordinates wins.
"""

import logging

from movingmap.navigation.navdata import Navaid, NavaidType
from movingmap.navigation.query import NavaidQueryAdapter

logger = logging.getLogger(__name__)

AIRPORT_FIRST = (NavaidType.AIRPORT, NavaidType.FIX, NavaidType.VOR, NavaidType.NDB)
STATION_FIRST = (NavaidType.VOR, NavaidType.NDB, NavaidType.FIX, NavaidType.AIRPORT)
FIX_FIRST = (NavaidType.FIX, NavaidType.VOR, NavaidType.NDB, NavaidType.AIRPORT)


def normalize_name(name: str | None) -> str:
    """Trim surrounding whitespace and upper-case."""
    return (name or "").strip().upper()


def search_order(name: str) -> tuple[NavaidType, ...]:
    """Category search order for an already normalized name."""
    if len(name) == 4:
        return AIRPORT_FIRST
    if len(name) in (2, 3):
        return STATION_FIRST
    return FIX_FIRST


class WaypointResolver:
    """Resolve waypoint names to coordinates.

    Examples:
        >>> resolver = WaypointResolver(NavaidQueryAdapter(db))
        >>> resolver.resolve(" uuee ")
        (55.972, 37.414)
    """

    def __init__(self, query: NavaidQueryAdapter) -> None:
        self.query = query

    def resolve_navaid(self, name: str | None) -> Navaid | None:
        """Find the navaid a waypoint name refers to.

        Airports are looked up by identifier only; the other categories
        must also match the name as a name fragment.
        """
        name = normalize_name(name)
        if not name:
            return None

        for navaid_type in search_order(name):
            fragment = None if navaid_type is NavaidType.AIRPORT else name
            navaid = self.query.find_by_identifier(name, navaid_type, name_fragment=fragment)
            if navaid is not None:
                logger.debug(
                    "Resolved '%s' as %s to lat=%s, lon=%s",
                    name,
                    navaid_type.value,
                    navaid.latitude,
                    navaid.longitude,
                )
                return navaid

        logger.warning("Could not resolve waypoint '%s'", name)
        return None

    def resolve(self, name: str | None) -> tuple[float, float] | None:
        """Resolve a waypoint name to ``(latitude, longitude)``, or None."""
        navaid = self.resolve_navaid(name)
        if navaid is None:
            return None
        return navaid.latitude, navaid.longitude

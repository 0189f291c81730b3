"""Navaid lookups against the navigation database.

Wraps the reference-based ``NavDataService`` lookups into ``Navaid`` records
and provides the identity check used to deduplicate results.

Note:
    ``query_near`` is a nearest-neighbor lookup, not a radius search: it
    returns at most one navaid per requested type, the one closest to the
    query point.
"""

import logging
from collections.abc import Iterable

from movingmap.navigation.navdata import Navaid, NavaidInfo, NavaidType, NavDataService

logger = logging.getLogger(__name__)


def navaid_exists(navaids: Iterable[Navaid], identifier: str, navaid_type: NavaidType) -> bool:
    """Check whether a navaid with this identity is already in ``navaids``."""
    return any(nav.identifier == identifier and nav.type is navaid_type for nav in navaids)


class NavaidQueryAdapter:
    """Uniform ``Navaid`` view over the navigation database.

    Examples:
        >>> adapter = NavaidQueryAdapter(db)
        >>> nearest = adapter.query_near(55.9, 37.4, [NavaidType.VOR, NavaidType.NDB])
        >>> airport = adapter.find_by_identifier("UUEE", NavaidType.AIRPORT)
    """

    def __init__(self, navdata: NavDataService) -> None:
        self.navdata = navdata

    def query_near(
        self, latitude: float, longitude: float, navaid_types: Iterable[NavaidType]
    ) -> list[Navaid]:
        """Nearest navaid of each requested type.

        Types the database cannot answer, and entries without coordinates,
        are skipped.
        """
        results = []
        for navaid_type in navaid_types:
            navaid = self.find_by_position(latitude, longitude, navaid_type)
            if navaid is not None:
                results.append(navaid)
        return results

    def find_by_position(
        self, latitude: float, longitude: float, navaid_type: NavaidType
    ) -> Navaid | None:
        if not navaid_type.in_database:
            return None
        ref = self.navdata.find_navaid(None, None, latitude, longitude, navaid_type)
        return self._lookup(ref)

    def find_by_identifier(
        self, identifier: str, navaid_type: NavaidType, name_fragment: str | None = None
    ) -> Navaid | None:
        """Look up a navaid by identifier, optionally also matching a name fragment.

        Returns:
            The navaid, or None if not found or without coordinates.
        """
        if not navaid_type.in_database:
            return None
        ref = self.navdata.find_navaid(name_fragment, identifier, None, None, navaid_type)
        return self._lookup(ref)

    def _lookup(self, ref) -> Navaid | None:
        if ref is None:
            return None
        return self.to_navaid(self.navdata.get_navaid_info(ref))

    @staticmethod
    def to_navaid(info: NavaidInfo) -> Navaid | None:
        """Convert database attributes to a ``Navaid``; None without coordinates."""
        if info.latitude is None or info.longitude is None:
            return None
        return Navaid(
            type=info.type,
            latitude=info.latitude,
            longitude=info.longitude,
            identifier=info.identifier or "",
            name=info.name or "",
            elevation=info.altitude,
            frequency=info.frequency,
            has_dme=bool(info.has_dme),
        )

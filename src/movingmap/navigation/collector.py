"""Navaid collection along a leg corridor.

The leg is sampled at evenly spaced fractions of its lat/lon span. At each
sample the navigation database is asked for the nearest navaid of every
configured type and the beacon store for all beacons in range. Each new
navaid is projected onto the leg and kept only if it lies inside the
corridor.
"""

import logging
import math
from dataclasses import dataclass, field, replace

import numpy as np

from movingmap.navigation.beacons import BeaconStore
from movingmap.navigation.flight_plan import Leg
from movingmap.navigation.geo import NM_TO_KM, distance_nm
from movingmap.navigation.navdata import Navaid, NavaidType
from movingmap.navigation.projection import geo_to_leg
from movingmap.navigation.query import NavaidQueryAdapter
from movingmap.navigation.settings import CacheSettings

logger = logging.getLogger(__name__)


@dataclass
class LegCacheEntry:
    """Navaids relevant to one leg, in discovery order.

    ``valid`` is False when the leg endpoints could not be resolved; such
    an entry carries no navaids.
    """

    navaids: list[Navaid] = field(default_factory=list)
    valid: bool = False


def leg_length_km(leg: Leg) -> float:
    """Along-track length of the leg, falling back to the endpoint distance."""
    if leg.s_km is not None:
        return leg.s_km
    if leg.is_resolved:
        return distance_nm(leg.start_lat, leg.start_lon, leg.end_lat, leg.end_lon) * NM_TO_KM
    return 0.0


class LegNavaidCollector:
    """Build ``LegCacheEntry`` objects for resolved legs.

    Attributes:
        query: Navigation database adapter
        beacons: Beacon store
        settings: Sampling and corridor parameters
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

    def sample_count(self, leg: Leg) -> int:
        """Number of sample intervals: one per spacing, never below the minimum."""
        return max(
            self.settings.min_samples,
            math.floor(leg_length_km(leg) / self.settings.sample_spacing_km),
        )

    def sample_points(self, leg: Leg) -> list[tuple[float, float]]:
        """Sample positions at fractions j/n of the leg, j = 0..n inclusive."""
        n = self.sample_count(leg)
        lats = np.linspace(leg.start_lat, leg.end_lat, n + 1)
        lons = np.linspace(leg.start_lon, leg.end_lon, n + 1)
        return list(zip(lats.tolist(), lons.tolist()))

    def collect(self, leg_index: int, leg: Leg) -> LegCacheEntry:
        """Collect corridor navaids for a leg.

        Returns:
            A valid entry (possibly empty) for a resolved leg, otherwise an
            invalid empty entry.
        """
        if not leg.is_resolved:
            return LegCacheEntry(valid=False)

        navaids: list[Navaid] = []
        seen: set[tuple[str, NavaidType]] = set()

        for lat, lon in self.sample_points(leg):
            found = self.query.query_near(lat, lon, self.settings.leg_navaid_types)
            found += self.beacons.query_near(lat, lon, self.settings.beacon_radius_nm)

            for nav in found:
                if nav.key in seen:
                    continue
                seen.add(nav.key)

                s_offset, z_offset = geo_to_leg(leg, nav.latitude, nav.longitude)
                if abs(z_offset) <= self.settings.corridor_km:
                    navaids.append(replace(nav, s_offset_km=s_offset, z_offset_km=z_offset))

        logger.debug("Leg %d found %d navaids", leg_index, len(navaids))
        return LegCacheEntry(navaids=navaids, valid=True)

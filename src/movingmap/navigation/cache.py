"""Navaid and airport chart caches for the moving map.

The orchestrator rebuilds both caches from scratch whenever the flight plan
changes. A rebuild works on fresh objects and publishes them together with
one reference swap, so readers never observe a half-built cache.

Typical usage:
    orchestrator = CacheOrchestrator(db, beacons, position_provider=aircraft)
    orchestrator.rebuild(plan)

    for index, entry in orchestrator.navaid_cache.legs.items():
        if entry.valid:
            draw(index, entry.navaids)
"""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from movingmap.navigation.airport_chart import AirportChartBuilder, AirportChartEntry
from movingmap.navigation.beacons import BeaconStore
from movingmap.navigation.collector import LegCacheEntry, LegNavaidCollector
from movingmap.navigation.flight_plan import FlightPlan, PositionProvider
from movingmap.navigation.legs import LegCoordinateBuilder
from movingmap.navigation.navdata import NavDataService
from movingmap.navigation.query import NavaidQueryAdapter
from movingmap.navigation.resolver import WaypointResolver
from movingmap.navigation.settings import CacheSettings

logger = logging.getLogger(__name__)


@dataclass
class NavaidCache:
    """Leg index (1-based) to leg entry, plus the time of the last build."""

    legs: dict[int, LegCacheEntry] = field(default_factory=dict)
    last_update: float = 0.0

    @property
    def total_navaids(self) -> int:
        return sum(len(entry.navaids) for entry in self.legs.values())


@dataclass
class AirportChartCache:
    """Departure and arrival chart entries, plus the time of the last build."""

    departure: AirportChartEntry = field(default_factory=AirportChartEntry)
    arrival: AirportChartEntry = field(default_factory=AirportChartEntry)
    last_update: float = 0.0


class CacheOrchestrator:
    """Sequence airport charts, leg resolution and leg collection.

    Rebuilds are synchronous and must not overlap on one orchestrator;
    reads may come from any thread.

    Attributes:
        settings: Cache parameters
        resolver: Waypoint resolver shared by the pipeline
        legs_builder: Leg endpoint resolver/chainer
        collector: Leg corridor navaid collector
        airport_builder: Airport chart builder
    """

    def __init__(
        self,
        navdata: NavDataService,
        beacons: BeaconStore,
        position_provider: PositionProvider | None = None,
        settings: CacheSettings | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.settings = settings or CacheSettings()
        query = NavaidQueryAdapter(navdata)
        self.resolver = WaypointResolver(query)
        self.legs_builder = LegCoordinateBuilder(self.resolver, position_provider)
        self.collector = LegNavaidCollector(query, beacons, self.settings)
        self.airport_builder = AirportChartBuilder(query, beacons, self.settings)
        self._clock = clock

        self._lock = threading.Lock()
        self._navaid_cache = NavaidCache()
        self._airport_cache = AirportChartCache()

    @property
    def navaid_cache(self) -> NavaidCache:
        with self._lock:
            return self._navaid_cache

    @property
    def airport_chart_cache(self) -> AirportChartCache:
        with self._lock:
            return self._airport_cache

    def snapshot(self) -> tuple[NavaidCache, AirportChartCache]:
        """Both caches from the same build."""
        with self._lock:
            return self._navaid_cache, self._airport_cache

    def _publish(self, navaid_cache: NavaidCache, airport_cache: AirportChartCache) -> None:
        with self._lock:
            self._navaid_cache = navaid_cache
            self._airport_cache = airport_cache

    def rebuild(self, plan: FlightPlan | None) -> tuple[NavaidCache, AirportChartCache]:
        """Rebuild both caches for ``plan``.

        A missing plan or a plan without legs yields an empty leg cache.
        Legs whose endpoints stay unresolved get an invalid entry.

        Returns:
            The published (navaid cache, airport chart cache).
        """
        navaid_cache = NavaidCache()
        airport_cache = AirportChartCache()

        airport_cache.departure, airport_cache.arrival = self.airport_builder.build(plan)
        airport_cache.last_update = self._clock()

        if plan is None:
            logger.debug("No flight plan available")
            self._publish(navaid_cache, airport_cache)
            return navaid_cache, airport_cache

        if not plan.legs:
            logger.debug("Flight plan has no legs")
            self._publish(navaid_cache, airport_cache)
            return navaid_cache, airport_cache

        self.legs_builder.build(plan.legs)

        for index, leg in plan.numbered_legs():
            navaid_cache.legs[index] = self.collector.collect(index, leg)

        navaid_cache.last_update = self._clock()
        self._publish(navaid_cache, airport_cache)

        logger.info(
            "Cache built for %d legs, %d total navaids",
            len(plan.legs),
            navaid_cache.total_navaids,
        )
        return navaid_cache, airport_cache

"""Tests for the cache orchestrator."""

import threading
import time

import pytest

from movingmap.navigation.cache import CacheOrchestrator, NavaidCache
from movingmap.navigation.flight_plan import FlightPlan, Leg, StaticPosition
from movingmap.navigation.settings import CacheSettings


def make_plan(*leg_names: str, name: str = "AAAA-CCCC") -> FlightPlan:
    return FlightPlan(name=name, legs=[Leg(name=n) for n in leg_names])


@pytest.fixture
def orchestrator(navdb, beacons) -> CacheOrchestrator:
    return CacheOrchestrator(navdb, beacons, clock=lambda: 1234.5)


class TestRebuild:
    """Test full cache rebuilds."""

    def test_initial_caches_empty(self, orchestrator):
        """Test nothing is cached before the first rebuild."""
        navaid_cache, airport_cache = orchestrator.snapshot()

        assert navaid_cache.legs == {}
        assert navaid_cache.last_update == 0.0
        assert not airport_cache.departure.valid
        assert not airport_cache.arrival.valid

    def test_full_rebuild(self, orchestrator):
        """Test legs are chained, collected and stamped."""
        plan = make_plan("AAAA-BBBB", "CCCC")

        navaid_cache, airport_cache = orchestrator.rebuild(plan)

        assert sorted(navaid_cache.legs) == [1, 2]
        assert all(entry.valid for entry in navaid_cache.legs.values())
        assert (plan.legs[1].start_lat, plan.legs[1].start_lon) == (0.0, 1.0)
        assert navaid_cache.last_update == 1234.5
        assert navaid_cache.total_navaids == sum(len(e.navaids) for e in navaid_cache.legs.values())

        assert airport_cache.departure.icao == "AAAA"
        assert airport_cache.arrival.icao == "CCCC"
        assert airport_cache.last_update == 1234.5

    def test_leg_contents(self, orchestrator):
        """Test the first leg holds the corridor navaids in discovery order."""
        navaid_cache, _ = orchestrator.rebuild(make_plan("AAAA-BBBB", "CCCC"))

        assert [n.identifier for n in navaid_cache.legs[1].navaids] == ["ABC", "AAAA", "RB1", "RB2", "BBBB"]

    def test_unresolvable_leg_isolated(self, orchestrator):
        """Test an unresolvable leg is invalid while the others stay valid."""
        navaid_cache, _ = orchestrator.rebuild(make_plan("AAAA-BBBB", "NOPE", "CCCC"))

        assert navaid_cache.legs[1].valid
        assert not navaid_cache.legs[2].valid
        assert navaid_cache.legs[2].navaids == []
        # NOPE has no end, so CCCC has nothing to chain from
        assert not navaid_cache.legs[3].valid

    def test_first_leg_from_aircraft_position(self, navdb, beacons):
        """Test a single-name first leg starts at the aircraft."""
        orchestrator = CacheOrchestrator(navdb, beacons, position_provider=StaticPosition(0.0, 0.0))

        navaid_cache, _ = orchestrator.rebuild(make_plan("BBBB", "CCCC"))

        assert navaid_cache.legs[1].valid
        assert navaid_cache.legs[2].valid

    def test_first_leg_without_position(self, orchestrator):
        """Test a single-name first leg is invalid without a position."""
        navaid_cache, _ = orchestrator.rebuild(make_plan("BBBB", "CCCC"))

        assert not navaid_cache.legs[1].valid
        assert navaid_cache.legs[2].valid

    def test_rebuild_after_plan_edit(self, orchestrator):
        """Test chaining follows the edited plan on the next rebuild."""
        plan = make_plan("AAAA-BBBB", "CCCC")
        orchestrator.rebuild(plan)

        plan.legs[0].name = "BBBB-AAAA"
        orchestrator.rebuild(plan)

        assert (plan.legs[1].start_lat, plan.legs[1].start_lon) == (0.0, 0.0)
        assert (plan.legs[1].end_lat, plan.legs[1].end_lon) == (0.0, 2.0)

    def test_rebuild_after_aircraft_moves(self, navdb, beacons):
        """Test the first leg starts at the current aircraft position."""
        position = StaticPosition(0.0, 0.0)
        orchestrator = CacheOrchestrator(navdb, beacons, position_provider=position)
        plan = make_plan("BBBB")
        orchestrator.rebuild(plan)

        position.longitude = 0.5
        navaid_cache, _ = orchestrator.rebuild(plan)

        assert (plan.legs[0].start_lat, plan.legs[0].start_lon) == (0.0, 0.5)
        assert navaid_cache.legs[1].valid

    @pytest.mark.parametrize("plan", [None, FlightPlan(name="AAAA-CCCC")])
    def test_missing_or_empty_plan(self, orchestrator, plan):
        """Test no legs yields an empty leg cache without error."""
        navaid_cache, airport_cache = orchestrator.rebuild(plan)

        assert navaid_cache.legs == {}
        assert navaid_cache.total_navaids == 0
        assert navaid_cache.last_update == 0.0
        assert airport_cache.last_update == 1234.5

    def test_airports_from_empty_plan_name(self, orchestrator):
        """Test airport charts are built even when the plan has no legs."""
        _, airport_cache = orchestrator.rebuild(FlightPlan(name="AAAA-CCCC"))

        assert airport_cache.departure.valid
        assert airport_cache.arrival.valid

    def test_custom_settings_reach_pipeline(self, navdb, beacons):
        """Test settings are shared with the collector and chart builder."""
        settings = CacheSettings(corridor_km=5.0, airport_radius_nm=20.0)
        orchestrator = CacheOrchestrator(navdb, beacons, settings=settings)

        navaid_cache, airport_cache = orchestrator.rebuild(make_plan("AAAA-BBBB"))

        assert "ABC" not in {n.identifier for n in navaid_cache.legs[1].navaids}
        assert [n.identifier for n in airport_cache.departure.navaids] == ["RB2"]


class TestPublication:
    """Test how rebuilt caches become visible."""

    def test_properties_return_published_caches(self, orchestrator):
        """Test readers see exactly what the rebuild returned."""
        navaid_cache, airport_cache = orchestrator.rebuild(make_plan("AAAA-BBBB"))

        assert orchestrator.navaid_cache is navaid_cache
        assert orchestrator.airport_chart_cache is airport_cache
        assert orchestrator.snapshot() == (navaid_cache, airport_cache)

    def test_rebuild_replaces_rather_than_mutates(self, orchestrator):
        """Test a held cache is unaffected by a later rebuild."""
        first, first_airports = orchestrator.rebuild(make_plan("AAAA-BBBB", "CCCC"))
        first_legs = dict(first.legs)

        second, _ = orchestrator.rebuild(make_plan("AAAA-BBBB"))

        assert second is not first
        assert first.legs == first_legs
        assert sorted(first.legs) == [1, 2]
        assert sorted(second.legs) == [1]
        assert first_airports.arrival.icao == "CCCC"

    def test_concurrent_readers_see_whole_caches(self, orchestrator):
        """Test a reader never observes a partially built leg cache."""
        plan_legs = ("AAAA-BBBB", "CCCC")
        observed: list[NavaidCache] = []
        stop = threading.Event()

        def reader() -> None:
            while True:
                observed.append(orchestrator.navaid_cache)
                if stop.is_set():
                    break
                time.sleep(0)

        thread = threading.Thread(target=reader)
        thread.start()
        try:
            for _ in range(3):
                orchestrator.rebuild(make_plan(*plan_legs))
        finally:
            stop.set()
            thread.join()

        assert observed
        for cache in observed:
            assert len(cache.legs) in (0, len(plan_legs))

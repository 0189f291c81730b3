"""Tests for the flight plan model."""

import pytest

from movingmap.navigation.flight_plan import FlightPlan, FlightPlanError, Leg, StaticPosition


class TestLeg:
    """Test Leg."""

    def test_new_leg_unresolved(self):
        """Test a new leg has no coordinates."""
        leg = Leg(name="UUEE-MR", s_km=42.0)

        assert not leg.has_start
        assert not leg.has_end
        assert not leg.is_resolved

    def test_set_endpoints(self):
        """Test setting and clearing endpoints."""
        leg = Leg()
        leg.set_start((1.0, 2.0))
        leg.set_end((3.0, 4.0))

        assert leg.is_resolved
        assert (leg.start_lat, leg.start_lon, leg.end_lat, leg.end_lon) == (1.0, 2.0, 3.0, 4.0)

        leg.set_end(None)
        assert leg.end_lat is None
        assert not leg.is_resolved

    def test_from_dict(self):
        """Test plan file entries."""
        leg = Leg.from_dict({"name": "MR-ANIKI", "s_km": "120.5", "dtk": 185})

        assert leg.name == "MR-ANIKI"
        assert leg.s_km == 120.5
        assert leg.dtk == 185.0

    def test_from_bare_name(self):
        """Test a bare string entry is a leg name."""
        assert Leg.from_dict("ANIKI") == Leg(name="ANIKI")


class TestFlightPlan:
    """Test FlightPlan."""

    def test_numbered_legs_start_at_one(self):
        """Test leg numbering is 1-based."""
        plan = FlightPlan(name="P", legs=[Leg(name="A"), Leg(name="B")])
        assert [(i, leg.name) for i, leg in plan.numbered_legs()] == [(1, "A"), (2, "B")]

    def test_load_yaml(self, tmp_path):
        """Test loading a plan file."""
        path = tmp_path / "plan.yaml"
        path.write_text(
            "name: UUEE-URSS\nlegs:\n  - {name: UUEE-MR, s_km: 42}\n  - ANIKI\n",
            encoding="utf-8",
        )

        plan = FlightPlan.load(path)

        assert plan.name == "UUEE-URSS"
        assert [leg.name for leg in plan.legs] == ["UUEE-MR", "ANIKI"]
        assert plan.legs[0].s_km == 42.0
        assert plan.legs[1].s_km is None

    def test_load_empty_plan(self, tmp_path):
        """Test an empty file is a plan without legs."""
        path = tmp_path / "plan.yaml"
        path.write_text("", encoding="utf-8")

        plan = FlightPlan.load(path)

        assert plan.name == ""
        assert plan.legs == []

    def test_load_missing(self, tmp_path):
        """Test a missing file raises FlightPlanError."""
        with pytest.raises(FlightPlanError, match="not found"):
            FlightPlan.load(tmp_path / "nope.yaml")

    @pytest.mark.parametrize("content", ["- just\n- a list\n", "legs: [1, 2]\n", "legs: [{s_km: abc}]\n"])
    def test_load_malformed(self, tmp_path, content):
        """Test malformed plans raise FlightPlanError."""
        path = tmp_path / "plan.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(FlightPlanError):
            FlightPlan.load(path)


class TestStaticPosition:
    """Test StaticPosition."""

    def test_get_position(self):
        """Test the fixed position is returned."""
        assert StaticPosition(55.97, 37.41).get_position() == (55.97, 37.41)

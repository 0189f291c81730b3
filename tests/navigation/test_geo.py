"""Tests for great-circle helpers."""

import pytest

from movingmap.navigation.geo import bearing_deg, destination, distance_nm


class TestDistance:
    """Test distance_nm."""

    def test_one_degree_on_equator(self):
        """Test one degree of longitude on the equator is ~60 NM."""
        assert distance_nm(0.0, 0.0, 0.0, 1.0) == pytest.approx(60.04, abs=0.01)

    def test_zero_distance(self):
        """Test identical points."""
        assert distance_nm(55.0, 37.0, 55.0, 37.0) == 0.0

    def test_symmetric(self):
        """Test distance does not depend on direction."""
        a = distance_nm(55.97, 37.41, 59.80, 30.26)
        b = distance_nm(59.80, 30.26, 55.97, 37.41)
        assert a == pytest.approx(b)


class TestBearing:
    """Test bearing_deg."""

    @pytest.mark.parametrize(
        "lat2,lon2,expected",
        [(1.0, 0.0, 0.0), (0.0, 1.0, 90.0), (-1.0, 0.0, 180.0), (0.0, -1.0, 270.0)],
    )
    def test_cardinal_directions(self, lat2, lon2, expected):
        """Test bearings to the four cardinal directions."""
        assert bearing_deg(0.0, 0.0, lat2, lon2) == pytest.approx(expected)

    def test_range(self):
        """Test bearings are normalized to [0, 360)."""
        assert 0.0 <= bearing_deg(10.0, 10.0, 9.0, 9.0) < 360.0


class TestDestination:
    """Test destination."""

    def test_east_on_equator(self):
        """Test 60.04 NM east on the equator lands at 1 degree."""
        lat, lon = destination(0.0, 0.0, 90.0, distance_nm(0.0, 0.0, 0.0, 1.0))
        assert lat == pytest.approx(0.0, abs=1e-9)
        assert lon == pytest.approx(1.0)

    def test_consistent_with_distance_and_bearing(self):
        """Test the destination lies at the requested distance and bearing."""
        lat, lon = destination(55.97, 37.41, 135.0, 25.0)
        assert distance_nm(55.97, 37.41, lat, lon) == pytest.approx(25.0)
        assert bearing_deg(55.97, 37.41, lat, lon) == pytest.approx(135.0, abs=1e-6)

    def test_longitude_normalized(self):
        """Test crossing the antimeridian wraps the longitude."""
        _, lon = destination(0.0, 179.9, 90.0, 30.0)
        assert -180.0 <= lon < 0.0

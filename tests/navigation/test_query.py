"""Tests for the navaid query adapter."""

from movingmap.navigation.navdata import Navaid, NavaidInfo, NavaidType, NavDatabase
from movingmap.navigation.query import NavaidQueryAdapter, navaid_exists


class TestQueryNear:
    """Test nearest-of-type queries."""

    def test_one_result_per_type(self, navdb):
        """Test each requested type yields its single nearest navaid."""
        adapter = NavaidQueryAdapter(navdb)

        found = adapter.query_near(0.0, 0.0, [NavaidType.VOR, NavaidType.NDB, NavaidType.AIRPORT])

        assert [(n.type, n.identifier) for n in found] == [
            (NavaidType.VOR, "ABC"),
            (NavaidType.NDB, "XY"),
            (NavaidType.AIRPORT, "AAAA"),
        ]

    def test_missing_types_skipped(self):
        """Test types with no entries produce nothing."""
        db = NavDatabase()
        db.add_navaid(NavaidInfo(NavaidType.VOR, 1.0, 1.0, identifier="V"))
        adapter = NavaidQueryAdapter(db)

        found = adapter.query_near(0.0, 0.0, [NavaidType.NDB, NavaidType.VOR, NavaidType.FIX])

        assert [n.identifier for n in found] == ["V"]

    def test_beacon_type_not_sent_to_database(self, recording_navdb):
        """Test BEACON is never looked up in the navigation database."""
        adapter = NavaidQueryAdapter(recording_navdb)

        assert adapter.query_near(0.0, 0.0, [NavaidType.BEACON]) == []
        assert recording_navdb.calls == []

    def test_fields_copied(self, navdb):
        """Test database attributes map onto the Navaid record."""
        (vor,) = NavaidQueryAdapter(navdb).query_near(0.0, 0.0, [NavaidType.VOR])

        assert vor.latitude == 0.1
        assert vor.longitude == 0.5
        assert vor.frequency == 114.3
        assert vor.name == "ABC VOR"
        assert vor.has_dme is True


class TestFindByIdentifier:
    """Test identifier lookups."""

    def test_found(self, navdb):
        """Test an existing identifier resolves to a Navaid."""
        airport = NavaidQueryAdapter(navdb).find_by_identifier("BBBB", NavaidType.AIRPORT)
        assert (airport.latitude, airport.longitude) == (0.0, 1.0)

    def test_not_found(self, navdb):
        """Test an unknown identifier returns None."""
        assert NavaidQueryAdapter(navdb).find_by_identifier("ZZZZ", NavaidType.AIRPORT) is None

    def test_without_coordinates(self):
        """Test entries without coordinates count as not found."""
        db = NavDatabase()
        db.add_navaid(NavaidInfo(NavaidType.AIRPORT, None, None, identifier="NOWH"))

        assert NavaidQueryAdapter(db).find_by_identifier("NOWH", NavaidType.AIRPORT) is None

    def test_missing_identifier_and_name_default_empty(self):
        """Test missing text attributes become empty strings."""
        navaid = NavaidQueryAdapter.to_navaid(NavaidInfo(NavaidType.FIX, 1.0, 2.0))

        assert navaid.identifier == ""
        assert navaid.name == ""
        assert navaid.has_dme is False


class TestNavaidExists:
    """Test identity checks."""

    def test_matches_identifier_and_type(self):
        """Test only the same identifier and type count as existing."""
        navaids = [Navaid(NavaidType.VOR, 0.0, 0.0, identifier="MR")]

        assert navaid_exists(navaids, "MR", NavaidType.VOR)
        assert not navaid_exists(navaids, "MR", NavaidType.NDB)
        assert not navaid_exists(navaids, "MO", NavaidType.VOR)

"""Pytest configuration and shared fixtures.

The fixtures describe a small synthetic world on the equator, where one
degree of longitude is about 60 NM and legs run due east:

    AAAA  airport (0, 0), 1000 ft      BBBB  airport (0, 1)
    CCCC  airport (0, 2)               ABC   VOR (0.1, 0.5), ~11 km left of AAAA-BBBB
    FAR   NDB (3, 0.5), far outside any corridor
    DUPE  fix (10, 10) and airport (20, 20), same identifier
    XY    NDB (1, 1) and fix (2, 2), same identifier

Beacons: RB1 (0.2, 1.5), RB2 (0, -0.3), RB9 (30, 30).
"""

from pathlib import Path

import pytest

from movingmap.navigation.beacons import BeaconStore
from movingmap.navigation.navdata import NavaidInfo, NavaidType, NavDatabase

BEACON_LINES = [
    "12|RB ONE|RB1|0|0.2|1.5|150",
    "14|RB TWO|RB2|0|0.0|-0.3|90",
    "20|RB NINE|RB9|0|30.0|30.0|10",
]


class RecordingNavDatabase(NavDatabase):
    """NavDatabase that records the type of every lookup."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[NavaidType] = []

    def find_navaid(self, name_fragment, identifier, latitude, longitude, navaid_type):
        self.calls.append(navaid_type)
        return super().find_navaid(name_fragment, identifier, latitude, longitude, navaid_type)


def build_world(db: NavDatabase) -> NavDatabase:
    entries = [
        NavaidInfo(NavaidType.AIRPORT, 0.0, 0.0, altitude=1000.0, identifier="AAAA", name="Alpha Field"),
        NavaidInfo(NavaidType.AIRPORT, 0.0, 1.0, identifier="BBBB", name="Bravo Field"),
        NavaidInfo(NavaidType.AIRPORT, 0.0, 2.0, identifier="CCCC"),
        NavaidInfo(NavaidType.VOR, 0.1, 0.5, frequency=114.3, identifier="ABC", name="ABC VOR", has_dme=True),
        NavaidInfo(NavaidType.NDB, 3.0, 0.5, frequency=350.0, identifier="FAR", name="FAR NDB"),
        NavaidInfo(NavaidType.FIX, 10.0, 10.0, identifier="DUPE", name="DUPE"),
        NavaidInfo(NavaidType.AIRPORT, 20.0, 20.0, identifier="DUPE", name="Duplicate Field"),
        NavaidInfo(NavaidType.NDB, 1.0, 1.0, frequency=400.0, identifier="XY", name="XY NDB"),
        NavaidInfo(NavaidType.FIX, 2.0, 2.0, identifier="XY", name="XY"),
    ]
    for info in entries:
        db.add_navaid(info)
    return db


@pytest.fixture
def navdb() -> NavDatabase:
    """Navigation database with the synthetic world."""
    return build_world(NavDatabase())


@pytest.fixture
def recording_navdb() -> RecordingNavDatabase:
    """Synthetic world that records lookup types."""
    return build_world(RecordingNavDatabase())


@pytest.fixture
def beacon_file(tmp_path: Path) -> Path:
    """Beacon database file with the synthetic beacons."""
    path = tmp_path / "rsbn.dat"
    path.write_text("\n".join(BEACON_LINES) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def beacons(beacon_file: Path) -> BeaconStore:
    """Beacon store over the synthetic beacon file."""
    return BeaconStore(beacon_file)


@pytest.fixture
def empty_beacons(tmp_path: Path) -> BeaconStore:
    """Beacon store whose file does not exist."""
    return BeaconStore(tmp_path / "missing.dat")

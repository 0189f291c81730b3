"""Navigation aid records and the navigation database interface.

The navigation database is an external service answering two questions:
"which navaid matches this identifier / name / position / type?" (returning
an opaque reference, or None when not found) and "what are the attributes of
this reference?". ``NavDataService`` describes that contract and
``NavDatabase`` is an in-memory implementation loaded from CSV.

Beacons are not part of the navigation database: they come from the
beacon store (see ``movingmap.navigation.beacons``) but share the
``Navaid`` record and the ``NavaidType`` enum.

Typical usage:
    db = NavDatabase()
    db.load_from_csv("data/navaids.csv")

    ref = db.find_navaid(None, "UUEE", None, None, NavaidType.AIRPORT)
    if ref is not None:
        info = db.get_navaid_info(ref)
"""

import csv
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from movingmap.navigation.geo import distance_nm

logger = logging.getLogger(__name__)


class NavDataError(Exception):
    """Raised when the navigation database cannot be loaded."""


class NavaidType(Enum):
    """Navigation aid category.

    Attributes:
        VOR: VHF Omnidirectional Range
        NDB: Non-Directional Beacon
        AIRPORT: Airport reference point
        FIX: Named intersection / waypoint
        BEACON: Short-range distance/bearing beacon from the local beacon file
    """

    VOR = "VOR"
    NDB = "NDB"
    AIRPORT = "AIRPORT"
    FIX = "FIX"
    BEACON = "BEACON"

    @property
    def in_database(self) -> bool:
        """True for categories served by the navigation database."""
        return self is not NavaidType.BEACON

    @classmethod
    def parse(cls, text: str) -> "NavaidType":
        """Parse a category name case-insensitively.

        Raises:
            ValueError: If the name is not a known category.
        """
        try:
            return cls[text.strip().upper()]
        except KeyError as e:
            raise ValueError(f"Unknown navaid type: {text!r}") from e


@dataclass
class Navaid:
    """Navigation aid as seen by the moving map.

    Identity for deduplication is ``(identifier, type)``: a VOR and an NDB
    may share an identifier.

    Attributes:
        type: Category of the navaid
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        identifier: Identifier string (e.g. "SFO", "UUEE")
        name: Display name
        elevation: Elevation as reported by the source, if any
        frequency: Frequency, or channel for beacons
        has_dme: True if the navaid provides distance measurement
        distance_nm: Distance from the query reference point
        bearing_deg: Bearing from the query reference point
        s_offset_km: Along-track offset relative to a leg
        z_offset_km: Cross-track offset relative to a leg, positive right
    """

    type: NavaidType
    latitude: float
    longitude: float
    identifier: str = ""
    name: str = ""
    elevation: float | None = None
    frequency: float | None = None
    has_dme: bool = False
    distance_nm: float | None = None
    bearing_deg: float | None = None
    s_offset_km: float | None = None
    z_offset_km: float | None = None

    @property
    def key(self) -> tuple[str, NavaidType]:
        """Deduplication identity."""
        return (self.identifier, self.type)

    def __str__(self) -> str:
        if self.frequency:
            return f"{self.identifier} ({self.type.value} {self.frequency:g})"
        return f"{self.identifier} ({self.type.value})"


@dataclass(frozen=True)
class NavaidInfo:
    """Attributes of a navigation database entry.

    Any field other than ``type`` may be missing depending on the category
    (fixes have no frequency, airports no DME, and so on).
    """

    type: NavaidType
    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    frequency: float | None = None
    heading: float | None = None
    identifier: str | None = None
    name: str | None = None
    has_dme: bool | None = None


class NavDataService(Protocol):
    """Lookup interface of the navigation database."""

    def find_navaid(
        self,
        name_fragment: str | None,
        identifier: str | None,
        latitude: float | None,
        longitude: float | None,
        navaid_type: NavaidType,
    ) -> Any | None:
        """Return an opaque reference to the best match, or None if not found."""
        ...

    def get_navaid_info(self, ref: Any) -> NavaidInfo:
        """Return the attributes behind a reference."""
        ...


class NavDatabase:
    """In-memory navigation database.

    References are indexes into the entry list. Lookups scan linearly.

    Matching rules for ``find_navaid``:
        - the entry type must equal ``navaid_type``
        - ``identifier`` must equal the entry identifier (case-insensitive)
        - ``name_fragment`` must occur in the entry name or identifier
        - with a position, the nearest match wins; otherwise the first added

    Examples:
        >>> db = NavDatabase()
        >>> ref = db.add_navaid(NavaidInfo(NavaidType.VOR, 55.5, 37.5, identifier="MR"))
        >>> db.find_navaid("MR", "MR", None, None, NavaidType.VOR) == ref
        True
    """

    def __init__(self) -> None:
        self.entries: list[NavaidInfo] = []

    def add_navaid(self, info: NavaidInfo) -> int:
        """Add an entry and return its reference.

        Raises:
            ValueError: If the entry is a beacon.
        """
        if not info.type.in_database:
            raise ValueError("Beacons are served by the beacon store, not the navigation database")
        self.entries.append(info)
        return len(self.entries) - 1

    def find_navaid(
        self,
        name_fragment: str | None,
        identifier: str | None,
        latitude: float | None,
        longitude: float | None,
        navaid_type: NavaidType,
    ) -> int | None:
        ident = identifier.upper() if identifier else None
        fragment = name_fragment.upper() if name_fragment else None
        use_position = latitude is not None and longitude is not None

        best_ref: int | None = None
        best_dist = float("inf")

        for ref, info in enumerate(self.entries):
            if info.type is not navaid_type:
                continue
            if ident is not None and (info.identifier or "").upper() != ident:
                continue
            if fragment is not None and fragment not in (info.name or "").upper() and (
                fragment not in (info.identifier or "").upper()
            ):
                continue

            if not use_position:
                return ref
            if info.latitude is None or info.longitude is None:
                continue

            dist = distance_nm(latitude, longitude, info.latitude, info.longitude)
            if dist < best_dist:
                best_ref, best_dist = ref, dist

        return best_ref

    def get_navaid_info(self, ref: int) -> NavaidInfo:
        return self.entries[ref]

    def load_from_csv(self, csv_path: str | Path) -> int:
        """Load entries from a CSV file.

        Expected columns:
            identifier,name,type,latitude,longitude[,elevation_ft,frequency,heading,has_dme]

        Rows with an unknown type, a beacon type, or unparseable coordinates
        are skipped with a warning.

        Returns:
            Number of entries loaded.

        Raises:
            NavDataError: If the file cannot be read.
        """
        path = Path(csv_path)
        if not path.exists():
            raise NavDataError(f"Navaid CSV not found: {csv_path}")

        count = 0
        try:
            with path.open(encoding="utf-8", newline="") as f:
                for row in csv.DictReader(f):
                    try:
                        self.add_navaid(self._parse_row(row))
                        count += 1
                    except (KeyError, ValueError) as e:
                        logger.warning("Skipping invalid navaid row: %s", e)
        except OSError as e:
            raise NavDataError(f"Failed to read navaid CSV: {e}") from e

        logger.info("Loaded %d navaids from %s", count, path)
        return count

    @staticmethod
    def _parse_row(row: dict[str, str]) -> NavaidInfo:
        def optional_float(column: str) -> float | None:
            value = (row.get(column) or "").strip()
            return float(value) if value else None

        return NavaidInfo(
            type=NavaidType.parse(row["type"]),
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            altitude=optional_float("elevation_ft"),
            frequency=optional_float("frequency"),
            heading=optional_float("heading"),
            identifier=row["identifier"].strip(),
            name=(row.get("name") or "").strip(),
            has_dme=(row.get("has_dme") or "").strip().lower() in ("1", "true", "yes"),
        )

    def count(self) -> int:
        """Return total number of entries."""
        return len(self.entries)

"""Beacon store backed by the local beacon database file.

Beacons are distance/bearing stations that the navigation database does not
know about. They are listed one per line in a pipe-delimited text file:

    channel|name|code|frequency|latitude|longitude|elevation

The file is read at most once per store, on first use. A file that cannot be
read leaves the store empty for the rest of its lifetime.

Typical usage:
    store = BeaconStore(get_beacon_db_path("rsbn.dat"), names)
    nearby = store.query_near(55.97, 37.41, max_distance_nm=100)
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from movingmap.navigation.beacon_names import BeaconNameTable
from movingmap.navigation.geo import distance_nm
from movingmap.navigation.navdata import Navaid, NavaidType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BeaconRecord:
    """One line of the beacon database.

    Attributes:
        channel: Channel number, shown in place of a frequency
        name: Localized display name
        code: Station code, may be empty
        frequency: Frequency field of the file, 0 when absent
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        elevation: Elevation in meters, 0 when absent
    """

    channel: int
    name: str
    code: str
    frequency: float
    latitude: float
    longitude: float
    elevation: float

    def to_navaid(self, dist_nm: float | None = None) -> Navaid:
        return Navaid(
            type=NavaidType.BEACON,
            latitude=self.latitude,
            longitude=self.longitude,
            identifier=self.code,
            name=self.name,
            elevation=self.elevation,
            frequency=self.channel,
            has_dme=True,
            distance_nm=dist_nm,
        )


def _to_float(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def _to_int(text: str) -> int | None:
    value = _to_float(text)
    if value is None or not value.is_integer():
        return None
    return int(value)


def parse_beacon_line(line: str, translate: Callable[[str], str] | None = None) -> BeaconRecord | None:
    """Parse one beacon database line.

    Seven fields are the full form. Six fields omit the elevation; five
    fields omit both the code and the elevation
    (``channel|name|frequency|latitude|longitude``). Empty optional fields
    take their defaults.

    Returns:
        The record, or None when channel, latitude or longitude is missing
        or unparseable.

    Examples:
        >>> parse_beacon_line("12|MOSCOW|MR|0|55.7|37.6|180").channel
        12
        >>> parse_beacon_line("garbage") is None
        True
    """
    fields = [field.strip() for field in line.rstrip("\r\n").split("|")]

    if len(fields) == 5:
        channel_text, name, freq_text, lat_text, lon_text = fields
        code, elev_text = "", ""
    elif len(fields) >= 6:
        channel_text, name, code, freq_text, lat_text, lon_text = fields[:6]
        elev_text = fields[6] if len(fields) > 6 else ""
    else:
        return None

    channel = _to_int(channel_text)
    lat = _to_float(lat_text)
    lon = _to_float(lon_text)
    if channel is None or lat is None or lon is None:
        return None

    if translate is not None:
        name = translate(name)

    return BeaconRecord(
        channel=channel,
        name=name,
        code=code,
        frequency=_to_float(freq_text) or 0.0,
        latitude=lat,
        longitude=lon,
        elevation=_to_float(elev_text) or 0.0,
    )


class BeaconStore:
    """Lazily loaded, read-only list of beacons with proximity queries.

    Attributes:
        path: Beacon database file

    Examples:
        >>> store = BeaconStore("rsbn.dat")
        >>> store.load()
        >>> store.loaded
        True
    """

    def __init__(self, path: str | Path, name_table: BeaconNameTable | None = None) -> None:
        self.path = Path(path)
        self._names = name_table or BeaconNameTable()
        self._records: tuple[BeaconRecord, ...] = ()
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def records(self) -> tuple[BeaconRecord, ...]:
        return self._records

    def load(self) -> None:
        """Read the beacon file once.

        Unparseable lines are dropped without logging. An unreadable file
        logs a warning and leaves the store empty; either way the store is
        marked loaded and the file is never read again.
        """
        if self._loaded:
            return

        with self._lock:
            if self._loaded:
                return

            records: list[BeaconRecord] = []
            try:
                with open(self.path, encoding="utf-8") as f:
                    for line in f:
                        record = parse_beacon_line(line, self._names.translate)
                        if record is not None:
                            records.append(record)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not read beacon database %s: %s", self.path, e)
                records = []
            else:
                logger.info("Loaded %d beacons from %s", len(records), self.path)

            self._records = tuple(records)
            self._loaded = True

    def query_near(self, latitude: float, longitude: float, max_distance_nm: float) -> list[Navaid]:
        """Return every beacon within ``max_distance_nm`` (inclusive).

        Results keep file order and carry ``distance_nm`` from the query point.
        """
        self.load()

        results = []
        for record in self._records:
            dist = distance_nm(latitude, longitude, record.latitude, record.longitude)
            if dist <= max_distance_nm:
                results.append(record.to_navaid(dist))
        return results

    def __len__(self) -> int:
        return len(self._records)

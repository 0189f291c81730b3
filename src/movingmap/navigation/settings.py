"""Tunables for navaid cache construction.

Values come from the ``navaid_cache`` section of the configuration; any key
left out keeps its default.
"""

from dataclasses import dataclass, field

from movingmap.core.config import ConfigError, ConfigLoader
from movingmap.navigation.navdata import NavaidType

DEFAULT_LEG_TYPES = (NavaidType.VOR, NavaidType.NDB, NavaidType.AIRPORT, NavaidType.FIX)
DEFAULT_AIRPORT_TYPES = (NavaidType.VOR, NavaidType.NDB)


@dataclass(frozen=True)
class CacheSettings:
    """Navaid cache parameters.

    Attributes:
        corridor_km: Maximum |Z| for a navaid to be kept on a leg
        sample_spacing_km: Distance between leg sample points
        min_samples: Minimum number of sample intervals per leg
        beacon_radius_nm: Beacon search radius around each leg sample
        airport_radius_nm: Radius of the airport chart
        airport_ring_points: Compass samples around an airport
        leg_navaid_types: Categories queried at each leg sample
        airport_navaid_types: Categories queried around airports
        beacon_file: Beacon database filename below the aircraft root
        beacon_names_file: Beacon name translation table, relative to the
            project root
    """

    corridor_km: float = 80.0
    sample_spacing_km: float = 50.0
    min_samples: int = 3
    beacon_radius_nm: float = 100.0
    airport_radius_nm: float = 50.0
    airport_ring_points: int = 8
    leg_navaid_types: tuple[NavaidType, ...] = field(default=DEFAULT_LEG_TYPES)
    airport_navaid_types: tuple[NavaidType, ...] = field(default=DEFAULT_AIRPORT_TYPES)
    beacon_file: str = "rsbn.dat"
    beacon_names_file: str = "config/beacon_names.yaml"

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "CacheSettings":
        """Read settings from the ``navaid_cache`` section.

        Raises:
            ConfigError: If a value has the wrong type, is not positive, or
                names an unknown navaid type.
        """
        defaults = cls()
        section = "navaid_cache"

        def value(key: str, kind: type):
            raw = config.get(f"{section}.{key}", getattr(defaults, key))
            try:
                result = kind(raw)
                if kind is int and result != float(raw):
                    raise ValueError(raw)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Invalid value for {section}.{key}: {raw!r}") from e
            if kind is not str and result <= 0:
                raise ConfigError(f"{section}.{key} must be positive, got {raw!r}")
            return result

        def types(key: str) -> tuple[NavaidType, ...]:
            raw = config.get(f"{section}.{key}")
            if raw is None:
                return getattr(defaults, key)
            if not isinstance(raw, list):
                raise ConfigError(f"{section}.{key} must be a list of navaid types")
            try:
                return tuple(NavaidType.parse(str(name)) for name in raw)
            except ValueError as e:
                raise ConfigError(f"Invalid value for {section}.{key}: {e}") from e

        return cls(
            corridor_km=value("corridor_km", float),
            sample_spacing_km=value("sample_spacing_km", float),
            min_samples=value("min_samples", int),
            beacon_radius_nm=value("beacon_radius_nm", float),
            airport_radius_nm=value("airport_radius_nm", float),
            airport_ring_points=value("airport_ring_points", int),
            leg_navaid_types=types("leg_navaid_types"),
            airport_navaid_types=types("airport_navaid_types"),
            beacon_file=value("beacon_file", str),
            beacon_names_file=value("beacon_names_file", str),
        )

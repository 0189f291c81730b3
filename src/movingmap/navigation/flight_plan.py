"""Flight plan model consumed by the navaid caches.

A plan is a display name (often "UUEE-URSS ...") and an ordered list of legs.
Each leg is named "START-END" or just "END", and carries its along-track
length. Leg endpoints are resolved later by the leg coordinate builder,
which is the only writer of the four coordinate fields.

Typical usage:
    from movingmap.navigation.flight_plan import FlightPlan

    plan = FlightPlan.load("plans/uuee_urss.yaml")
    for index, leg in plan.numbered_legs():
        print(index, leg.name, leg.s_km)
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import yaml

logger = logging.getLogger(__name__)


class FlightPlanError(Exception):
    """Raised when a flight plan file cannot be loaded."""


@dataclass
class Leg:
    """One segment of a flight plan.

    Attributes:
        name: Leg name, "START-END" or a single waypoint name
        s_km: Along-track length of the leg in kilometers, if known
        dtk: Desired track entered by the crew, in degrees (informational)
        start_lat: Resolved start latitude
        start_lon: Resolved start longitude
        end_lat: Resolved end latitude
        end_lon: Resolved end longitude

    Examples:
        >>> leg = Leg(name="UUEE-MR", s_km=42.0)
        >>> leg.is_resolved
        False
    """

    name: str = ""
    s_km: float | None = None
    dtk: float | None = None
    start_lat: float | None = None
    start_lon: float | None = None
    end_lat: float | None = None
    end_lon: float | None = None

    @property
    def has_start(self) -> bool:
        return self.start_lat is not None and self.start_lon is not None

    @property
    def has_end(self) -> bool:
        return self.end_lat is not None and self.end_lon is not None

    @property
    def is_resolved(self) -> bool:
        """True when both endpoints have coordinates."""
        return self.has_start and self.has_end

    def set_start(self, position: tuple[float, float] | None) -> None:
        self.start_lat, self.start_lon = position if position else (None, None)

    def set_end(self, position: tuple[float, float] | None) -> None:
        self.end_lat, self.end_lon = position if position else (None, None)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | str) -> "Leg":
        """Build a leg from a plan file entry (a mapping or a bare name)."""
        if isinstance(data, str):
            return cls(name=data)
        s_km = data.get("s_km")
        dtk = data.get("dtk")
        return cls(
            name=str(data.get("name", "")),
            s_km=float(s_km) if s_km is not None else None,
            dtk=float(dtk) if dtk is not None else None,
        )


@dataclass
class FlightPlan:
    """Named, ordered sequence of legs.

    Attributes:
        name: Plan name, e.g. "UUEE-URSS"
        legs: Legs in flight order
    """

    name: str = ""
    legs: list[Leg] = field(default_factory=list)

    def numbered_legs(self) -> Iterator[tuple[int, Leg]]:
        """Iterate legs with their 1-based index."""
        return enumerate(self.legs, start=1)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FlightPlan":
        return cls(
            name=str(data.get("name") or ""),
            legs=[Leg.from_dict(entry) for entry in data.get("legs") or []],
        )

    @classmethod
    def load(cls, path: str | Path) -> "FlightPlan":
        """Load a plan from YAML.

        Expected format::

            name: UUEE-URSS
            legs:
              - {name: UUEE-MR, s_km: 42}
              - {name: ANIKI, s_km: 120, dtk: 185}

        Raises:
            FlightPlanError: If the file is missing, unreadable or malformed.
        """
        path = Path(path)
        if not path.exists():
            raise FlightPlanError(f"Flight plan not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise FlightPlanError(f"Failed to load flight plan: {e}") from e

        if not isinstance(data, dict):
            raise FlightPlanError(f"Flight plan root must be a mapping: {path}")

        try:
            plan = cls.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise FlightPlanError(f"Malformed flight plan {path}: {e}") from e

        logger.info("Loaded flight plan '%s' with %d legs", plan.name, len(plan.legs))
        return plan


class PositionProvider(Protocol):
    """Source of the current aircraft position."""

    def get_position(self) -> tuple[float, float] | None:
        """Return (latitude, longitude), or None if unknown."""
        ...


@dataclass
class StaticPosition:
    """Fixed aircraft position, for tools and tests."""

    latitude: float
    longitude: float

    def get_position(self) -> tuple[float, float] | None:
        return self.latitude, self.longitude

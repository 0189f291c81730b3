"""Leg endpoint resolution and chaining.

Each leg name is either "START-END" (exactly one dash, both sides
non-empty) or a single waypoint that becomes the leg's end. Legs without a
start of their own inherit the previous leg's end; the first leg falls back
to the aircraft position.
"""

import logging
from collections.abc import Sequence

from movingmap.navigation.flight_plan import Leg, PositionProvider
from movingmap.navigation.resolver import WaypointResolver

logger = logging.getLogger(__name__)


def split_leg_name(name: str | None) -> tuple[str, str] | None:
    """Split "START-END" into its two waypoint names.

    Returns:
        (start, end), or None unless the name has exactly one dash with
        text on both sides.

    Examples:
        >>> split_leg_name("UUEE-MR")
        ('UUEE', 'MR')
        >>> split_leg_name("ANIKI") is None
        True
        >>> split_leg_name("A-B-C") is None
        True
    """
    if not name:
        return None
    parts = name.split("-")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return None
    return parts[0], parts[1]


class LegCoordinateBuilder:
    """Resolve and chain the endpoints of a sequence of legs.

    Attributes:
        resolver: Waypoint name resolver
        position_provider: Aircraft position used for an unresolved first
            leg start (optional)
    """

    def __init__(
        self, resolver: WaypointResolver, position_provider: PositionProvider | None = None
    ) -> None:
        self.resolver = resolver
        self.position_provider = position_provider

    def resolve_leg(self, leg: Leg) -> None:
        """Resolve a single leg from its name.

        "START-END" sets both endpoints; a single name sets only the end.
        Coordinates from an earlier build are discarded first.
        """
        leg.set_start(None)
        leg.set_end(None)

        waypoints = split_leg_name(leg.name)
        if waypoints is not None:
            start, end = waypoints
            leg.set_start(self.resolver.resolve(start))
            leg.set_end(self.resolver.resolve(end))
        else:
            leg.set_end(self.resolver.resolve(leg.name))

    @staticmethod
    def chain(legs: Sequence[Leg]) -> None:
        """Fill each missing start from the previous leg's end.

        Already resolved starts are never overwritten.
        """
        for prev_leg, leg in zip(legs, legs[1:]):
            if prev_leg.has_end and not leg.has_start:
                leg.start_lat, leg.start_lon = prev_leg.end_lat, prev_leg.end_lon

    def apply_aircraft_position(self, legs: Sequence[Leg]) -> None:
        """Start the first leg at the aircraft when it has no start."""
        if not legs or legs[0].has_start or self.position_provider is None:
            return
        position = self.position_provider.get_position()
        if position is not None:
            legs[0].set_start(position)
            logger.debug("First leg starts at aircraft position %.4f, %.4f", *position)

    def build(self, legs: Sequence[Leg]) -> None:
        """Resolve every leg, chain starts, then apply the aircraft fallback.

        Legs that remain incomplete are left as they are.
        """
        for leg in legs:
            self.resolve_leg(leg)
        self.chain(legs)
        self.apply_aircraft_position(legs)

        unresolved = sum(1 for leg in legs if not leg.is_resolved)
        if unresolved:
            logger.debug("%d of %d legs have unresolved endpoints", unresolved, len(legs))

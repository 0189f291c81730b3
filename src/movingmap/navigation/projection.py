"""Projection of geographic points onto a leg.

S is the along-track distance from the leg start, Z the cross-track
distance, positive to the right of the leg direction, both in kilometers.
The projection is planar around the leg start, which holds for offsets
small compared to the earth radius (the navaid corridor is 80 km wide on
each side).
"""

import math

from movingmap.navigation.flight_plan import Leg
from movingmap.navigation.geo import NM_TO_KM, bearing_deg, distance_nm


def geo_to_leg(leg: Leg, latitude: float, longitude: float) -> tuple[float, float]:
    """Convert a point to (S, Z) offsets in kilometers relative to ``leg``.

    The leg direction is the bearing between the resolved endpoints, not the
    crew-entered desired track. Returns (0.0, 0.0) if the leg is not
    resolved.

    Examples:
        >>> leg = Leg(start_lat=0.0, start_lon=0.0, end_lat=0.0, end_lon=1.0)
        >>> s, z = geo_to_leg(leg, 0.0, 0.5)
        >>> round(s, 1), round(z, 6)
        (55.6, 0.0)
    """
    if not leg.is_resolved:
        return 0.0, 0.0

    dist_to_start = distance_nm(leg.start_lat, leg.start_lon, latitude, longitude)
    bearing_to_point = bearing_deg(leg.start_lat, leg.start_lon, latitude, longitude)
    leg_bearing = bearing_deg(leg.start_lat, leg.start_lon, leg.end_lat, leg.end_lon)

    angle_diff = math.radians(bearing_to_point - leg_bearing)

    s_offset = dist_to_start * math.cos(angle_diff) * NM_TO_KM
    z_offset = dist_to_start * math.sin(angle_diff) * NM_TO_KM
    return s_offset, z_offset

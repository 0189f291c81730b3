"""Great-circle helpers on a spherical earth.

Distances are in nautical miles, angles in degrees true. Positions are
plain ``(latitude, longitude)`` pairs in decimal degrees.
"""

import math

EARTH_RADIUS_NM = 3440.065
NM_TO_KM = 1.852
FEET_TO_METERS = 0.3048


def distance_nm(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great circle distance between two points (Haversine formula).

    Examples:
        >>> round(distance_nm(0.0, 0.0, 0.0, 1.0), 2)
        60.04
    """
    phi1, lam1 = math.radians(lat1), math.radians(lon1)
    phi2, lam2 = math.radians(lat2), math.radians(lon2)

    dphi = phi2 - phi1
    dlam = lam2 - lam1
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    c = 2 * math.asin(min(1.0, math.sqrt(a)))

    return c * EARTH_RADIUS_NM


def bearing_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial bearing from the first point to the second, in [0, 360).

    Examples:
        >>> bearing_deg(0.0, 0.0, 0.0, 1.0)
        90.0
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dlam = math.radians(lon2 - lon1)

    y = math.sin(dlam) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlam)

    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def destination(lat: float, lon: float, bearing: float, dist_nm: float) -> tuple[float, float]:
    """Point reached from ``(lat, lon)`` after ``dist_nm`` along ``bearing``.

    Returns:
        (latitude, longitude), longitude normalized to [-180, 180).
    """
    delta = dist_nm / EARTH_RADIUS_NM
    phi1 = math.radians(lat)
    lam1 = math.radians(lon)
    theta = math.radians(bearing)

    phi2 = math.asin(
        math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    )
    lam2 = lam1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )

    lon2 = (math.degrees(lam2) + 180.0) % 360.0 - 180.0
    return math.degrees(phi2), lon2

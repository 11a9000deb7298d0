"""Distance calculation and display."""

import math

from coffee_note.errors import PreconditionError

METERS_PER_MILE = 1609.34
NEARBY_MILES = 0.1
EARTH_RADIUS_M = 6_371_008.8


def format_distance(meters: float) -> str:
    """Render a distance as a short human label."""
    if meters < 0:
        raise PreconditionError("Distance must be non-negative")
    miles = meters / METERS_PER_MILE
    if miles < NEARBY_MILES:
        return "Nearby"
    if miles < 1.0:
        return f"{miles:.1f} mi away"
    return f"{miles:.0f} mi away"


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two coordinates in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))

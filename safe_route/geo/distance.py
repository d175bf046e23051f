"""
distance.py — Great-circle distance between (lat, lon) points.

Uses the haversine formula on a sphere of mean Earth radius.  Over a few
kilometres a planar approximation would be close, but degree
differencing is wrong at any scale, so only the great-circle form is
provided.
"""

import math

EARTH_RADIUS_KM = 6371.0088


def haversine_km(p1: tuple[float, float], p2: tuple[float, float]) -> float:
    """
    Haversine distance in kilometres between two (lat, lon) points.

    Args:
        p1: (latitude, longitude) in decimal degrees.
        p2: (latitude, longitude) in decimal degrees.

    Returns:
        Distance along the sphere surface in km.
    """
    lat1, lon1 = math.radians(p1[0]), math.radians(p1[1])
    lat2, lon2 = math.radians(p2[0]), math.radians(p2[1])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

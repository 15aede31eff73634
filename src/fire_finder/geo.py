"""Geographic utility functions — pure Python, no external deps."""

from __future__ import annotations

import math

from fire_finder.models import BoundingBox, GeoPoint

EARTH_RADIUS_MILES = 3958.8

# Miles per degree of latitude (and of longitude at the equator)
MILES_PER_DEGREE = 69.0

# Floor for cos(latitude) so the longitude span stays finite at the poles
COS_EPSILON = 1e-6


def haversine_miles(
    lat1: float, lon1: float, lat2: float, lon2: float,
    earth_radius: float = EARTH_RADIUS_MILES,
) -> float:
    """Great-circle distance between two points on Earth in miles.

    Uses the Haversine formula. Inputs are WGS84 decimal degrees.
    """
    rlat1, rlon1 = math.radians(lat1), math.radians(lon1)
    rlat2, rlon2 = math.radians(lat2), math.radians(lon2)

    dlat = rlat2 - rlat1
    dlon = rlon2 - rlon1

    a = math.sin(dlat / 2) ** 2 + math.cos(rlat1) * math.cos(rlat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return earth_radius * c


def distance_miles(a: GeoPoint, b: GeoPoint, earth_radius: float = EARTH_RADIUS_MILES) -> float:
    """Haversine distance between two GeoPoints."""
    return haversine_miles(a.latitude, a.longitude, b.latitude, b.longitude, earth_radius)


def bounding_box(center: GeoPoint, radius_miles: float) -> BoundingBox:
    """Axis-aligned box approximating a circle of ``radius_miles`` around ``center``.

    One degree of latitude is ~69 miles everywhere; a degree of longitude
    shrinks with cos(latitude), which is floored at COS_EPSILON.
    """
    lat_delta = radius_miles / MILES_PER_DEGREE
    cos_lat = max(math.cos(math.radians(center.latitude)), COS_EPSILON)
    lng_delta = radius_miles / (MILES_PER_DEGREE * cos_lat)

    return BoundingBox(
        min_lat=center.latitude - lat_delta,
        max_lat=center.latitude + lat_delta,
        min_lng=center.longitude - lng_delta,
        max_lng=center.longitude + lng_delta,
    )

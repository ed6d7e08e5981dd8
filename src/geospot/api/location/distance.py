"""
Great-Circle Distance

Spherical-Earth distance helpers used to filter proximity candidates and
to size geohash cells.
"""

from __future__ import annotations

import math

from geospot.api.core.constants import EARTH_RADIUS_KM, KM_PER_DEGREE
from geospot.api.core.types import Coordinate


__all__ = [
    "cell_size_degrees",
    "cell_size_km",
    "destination_point",
    "haversine_km",
]


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in kilometers on the mean-radius sphere
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2.0) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    # Rounding can push h slightly above 1 for antipodal points
    h = min(1.0, h)
    return 2.0 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def destination_point(origin: Coordinate, bearing_deg: float, distance_km: float) -> Coordinate:
    """
    Find the point reached by travelling along a great circle.

    Args:
        origin: Starting point
        bearing_deg: Initial bearing in degrees clockwise from north
        distance_km: Distance to travel in kilometers

    Returns:
        Destination, with longitude normalised to -180..180
    """
    angular = distance_km / EARTH_RADIUS_KM
    bearing = math.radians(bearing_deg)
    lat1 = math.radians(origin.latitude)
    lon1 = math.radians(origin.longitude)

    sin_lat2 = math.sin(lat1) * math.cos(angular) + math.cos(lat1) * math.sin(angular) * math.cos(bearing)
    lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
    lon2 = lon1 + math.atan2(
        math.sin(bearing) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2),
    )

    latitude = max(-90.0, min(90.0, math.degrees(lat2)))
    longitude = (math.degrees(lon2) + 540.0) % 360.0 - 180.0
    return Coordinate(latitude, longitude)


def cell_size_degrees(precision: int) -> tuple[float, float]:
    """
    Get the size of a geohash cell in degrees.

    Longitude takes the extra bit when 5 * precision is odd.

    Returns:
        Tuple of (height_deg, width_deg)
    """
    bits = 5 * precision
    lat_bits = bits // 2
    lon_bits = bits - lat_bits
    return 180.0 / (2**lat_bits), 360.0 / (2**lon_bits)


def cell_size_km(precision: int, latitude: float = 0.0) -> tuple[float, float]:
    """
    Get the size of a geohash cell in kilometers.

    Args:
        precision: Geohash length
        latitude: Latitude at which the width is measured

    Returns:
        Tuple of (height_km, width_km); width shrinks with cos(latitude)
    """
    height_deg, width_deg = cell_size_degrees(precision)
    height_km = height_deg * KM_PER_DEGREE
    width_km = width_deg * KM_PER_DEGREE * max(0.0, math.cos(math.radians(latitude)))
    return height_km, width_km

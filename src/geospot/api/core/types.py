"""
Type definitions for geospot.

This module contains the value types shared by the geohash codec,
the proximity planner and the spot model.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

import deal

from geospot.api.core.exceptions import InvalidCoordinateError


__all__ = [
    "LATITUDE_MESSAGE",
    "LONGITUDE_MESSAGE",
    "BoundingBox",
    "Coordinate",
    "is_valid_latitude",
    "is_valid_longitude",
    "validate_coordinate",
]


LATITUDE_MESSAGE = "Invalid latitude: must be a finite number of degrees from -90 to 90"
LONGITUDE_MESSAGE = "Invalid longitude: must be a finite number of degrees from -180 to 180"


def is_valid_latitude(latitude: Any) -> bool:
    """Return True for a finite number of degrees from -90 to 90."""
    return isinstance(latitude, Real) and math.isfinite(latitude) and -90.0 <= latitude <= 90.0


def is_valid_longitude(longitude: Any) -> bool:
    """Return True for a finite number of degrees from -180 to 180."""
    return isinstance(longitude, Real) and math.isfinite(longitude) and -180.0 <= longitude <= 180.0


@deal.pre(
    lambda latitude, longitude: is_valid_latitude(latitude),
    message=LATITUDE_MESSAGE,
    exception=InvalidCoordinateError,
)
@deal.pre(
    lambda latitude, longitude: is_valid_longitude(longitude),
    message=LONGITUDE_MESSAGE,
    exception=InvalidCoordinateError,
)
def validate_coordinate(latitude: float, longitude: float) -> None:
    """
    Check that a latitude/longitude pair can be indexed.

    Args:
        latitude: Latitude in degrees (-90 to +90)
        longitude: Longitude in degrees (-180 to +180)

    Raises:
        InvalidCoordinateError: If either value is not a number, NaN, infinite or out of range
    """


@dataclass(frozen=True)
class Coordinate:
    """
    A point on the Earth's surface (WGS84 degrees).

    Attributes:
        latitude: Latitude in degrees (-90 to +90, positive=North, negative=South)
        longitude: Longitude in degrees (-180 to +180, positive=East, negative=West)
    """

    latitude: float
    longitude: float

    @deal.pre(lambda self: is_valid_latitude(self.latitude), message=LATITUDE_MESSAGE, exception=InvalidCoordinateError)  # type: ignore[misc,arg-type]
    @deal.pre(lambda self: is_valid_longitude(self.longitude), message=LONGITUDE_MESSAGE, exception=InvalidCoordinateError)  # type: ignore[misc,arg-type]
    def __post_init__(self) -> None:
        pass

    def __str__(self) -> str:
        lat_dir = "N" if self.latitude >= 0 else "S"
        lon_dir = "E" if self.longitude >= 0 else "W"
        return f"{abs(self.latitude):.4f}°{lat_dir}, {abs(self.longitude):.4f}°{lon_dir}"


@dataclass(frozen=True)
class BoundingBox:
    """
    Rectangular lat/lon cell, as covered by a geohash.

    Attributes:
        lat_min: Southern edge in degrees
        lat_max: Northern edge in degrees
        lon_min: Western edge in degrees
        lon_max: Eastern edge in degrees
    """

    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    @property
    def center(self) -> Coordinate:
        return Coordinate((self.lat_min + self.lat_max) / 2.0, (self.lon_min + self.lon_max) / 2.0)

    @property
    def lat_err(self) -> float:
        """Half the cell height in degrees."""
        return (self.lat_max - self.lat_min) / 2.0

    @property
    def lon_err(self) -> float:
        """Half the cell width in degrees."""
        return (self.lon_max - self.lon_min) / 2.0

    def contains(self, latitude: float, longitude: float) -> bool:
        """Return True if the point lies inside the box (edges inclusive)."""
        return self.lat_min <= latitude <= self.lat_max and self.lon_min <= longitude <= self.lon_max

    def __str__(self) -> str:
        return f"[{self.lat_min:.6f}, {self.lat_max:.6f}] x [{self.lon_min:.6f}, {self.lon_max:.6f}]"

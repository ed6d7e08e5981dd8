"""
Geohash utilities for spatial indexing.

Geohash encodes geographic coordinates into short strings that can be used for
hierarchical spatial indexing and proximity searches. Points with similar geohashes
are geographically close together, and every prefix of a geohash is the cell
that contains it.

Neighbor expansion uses the standard per-direction lookup tables. Which table
applies depends on whether the geohash has an even or odd number of characters:
an odd-length last character spans 8 columns x 4 rows, an even-length one
4 columns x 8 rows, so the two parities step and wrap differently.

Reference: https://en.wikipedia.org/wiki/Geohash
"""

from __future__ import annotations

import logging
from typing import Any

import deal

from geospot.api.core.constants import (
    DEFAULT_STORAGE_PRECISION,
    GEOHASH_ALPHABET,
    MAX_PRECISION,
    MIN_PRECISION,
)
from geospot.api.core.enums import Direction
from geospot.api.core.exceptions import InvalidCoordinateError, InvalidGeohashError, InvalidPrecisionError
from geospot.api.core.types import (
    LATITUDE_MESSAGE,
    LONGITUDE_MESSAGE,
    BoundingBox,
    Coordinate,
    is_valid_latitude,
    is_valid_longitude,
)


logger = logging.getLogger(__name__)


__all__ = [
    "GEOHASH_ALPHABET",
    "adjacent",
    "decode",
    "decode_bbox",
    "encode",
    "encode_from_point",
    "is_valid_precision",
    "latitude_row",
    "neighbor_map",
    "neighbors",
    "neighbors_with_self",
    "normalise_geohash",
    "validate_precision",
]


# Neighbor and border tables, as (even length, odd length).
# The neighbor of a last character c is GEOHASH_ALPHABET[table.index(c)];
# a character listed in the border string sits on the edge of its parent
# cell, so the step carries into the parent prefix.
_NEIGHBORS: dict[Direction, tuple[str, str]] = {
    Direction.NORTH: ("p0r21436x8zb9dcf5h7kjnmqesgutwvy", "bc01fg45238967deuvhjyznpkmstqrwx"),
    Direction.SOUTH: ("14365h7k9dcfesgujnmqp0r2twvyx8zb", "238967debc01fg45kmstqrwxuvhjyznp"),
    Direction.EAST: ("bc01fg45238967deuvhjyznpkmstqrwx", "p0r21436x8zb9dcf5h7kjnmqesgutwvy"),
    Direction.WEST: ("238967debc01fg45kmstqrwxuvhjyznp", "14365h7k9dcfesgujnmqp0r2twvyx8zb"),
}

_BORDERS: dict[Direction, tuple[str, str]] = {
    Direction.NORTH: ("prxz", "bcfguvyz"),
    Direction.SOUTH: ("028b", "0145hjnp"),
    Direction.EAST: ("bcfguvyz", "prxz"),
    Direction.WEST: ("0145hjnp", "028b"),
}


PRECISION_MESSAGE = f"Precision must be an integer from {MIN_PRECISION} to {MAX_PRECISION}"


def is_valid_precision(precision: Any) -> bool:
    """Return True for a supported geohash length."""
    if isinstance(precision, bool) or not isinstance(precision, int):
        return False
    return MIN_PRECISION <= precision <= MAX_PRECISION


@deal.pre(lambda precision: is_valid_precision(precision), message=PRECISION_MESSAGE, exception=InvalidPrecisionError)
def validate_precision(precision: int) -> None:
    """
    Check that a precision is a supported geohash length.

    Raises:
        InvalidPrecisionError: If precision is not an integer from 1 to 12
    """


@deal.raises(InvalidGeohashError)
def normalise_geohash(geohash: str) -> str:
    """
    Lower-case a geohash and check every character is in the alphabet.

    Args:
        geohash: Geohash string (may be empty)

    Returns:
        Normalised geohash

    Raises:
        InvalidGeohashError: If the string contains a character outside the alphabet
    """
    if not isinstance(geohash, str):
        raise InvalidGeohashError(f"Geohash must be a string, got {type(geohash).__name__}")

    normalised = geohash.strip().lower()
    for char in normalised:
        if char not in GEOHASH_ALPHABET:
            raise InvalidGeohashError(f"Invalid geohash character: {char!r} in {geohash!r}")
    return normalised


@deal.pre(
    lambda latitude, longitude, precision=DEFAULT_STORAGE_PRECISION: is_valid_latitude(latitude),
    message=LATITUDE_MESSAGE,
    exception=InvalidCoordinateError,
)
@deal.pre(
    lambda latitude, longitude, precision=DEFAULT_STORAGE_PRECISION: is_valid_longitude(longitude),
    message=LONGITUDE_MESSAGE,
    exception=InvalidCoordinateError,
)
@deal.pre(
    lambda latitude, longitude, precision=DEFAULT_STORAGE_PRECISION: is_valid_precision(precision),
    message=PRECISION_MESSAGE,
    exception=InvalidPrecisionError,
)
@deal.post(lambda result: all(char in GEOHASH_ALPHABET for char in result), message="Geohash must use the alphabet")
def encode(latitude: float, longitude: float, precision: int = DEFAULT_STORAGE_PRECISION) -> str:
    """
    Encode latitude and longitude into a geohash string.

    Args:
        latitude: Latitude in degrees (-90 to 90)
        longitude: Longitude in degrees (-180 to 180)
        precision: Number of characters in geohash (1-12, default: 12)
                  Each character adds 5 bits of precision
                  - 1 char: ~5000km
                  - 5 chars: ~5km
                  - 7 chars: ~150m
                  - 9 chars: ~5m
                  - 12 chars: ~4cm

    Returns:
        Geohash string

    Raises:
        InvalidCoordinateError: If the coordinates are non-finite or out of range
        InvalidPrecisionError: If precision is outside 1-12

    Example:
        >>> encode(57.64911, 10.40744, 6)
        'u4pruy'
    """
    lat_min, lat_max = -90.0, 90.0
    lon_min, lon_max = -180.0, 180.0

    geohash: list[str] = []
    is_even = True  # Even bits are longitude, odd bits are latitude
    bit = 0
    ch = 0

    while len(geohash) < precision:
        if is_even:
            mid = (lon_min + lon_max) / 2.0
            if longitude >= mid:
                ch |= 1 << (4 - bit)
                lon_min = mid
            else:
                lon_max = mid
        else:
            mid = (lat_min + lat_max) / 2.0
            if latitude >= mid:
                ch |= 1 << (4 - bit)
                lat_min = mid
            else:
                lat_max = mid

        is_even = not is_even

        # Every 5 bits, encode to base32 character
        if bit < 4:
            bit += 1
        else:
            geohash.append(GEOHASH_ALPHABET[ch])
            bit = 0
            ch = 0

    return "".join(geohash)


def encode_from_point(point: Coordinate, precision: int = DEFAULT_STORAGE_PRECISION) -> str:
    """Encode a Coordinate into a geohash string."""
    return encode(point.latitude, point.longitude, precision)


@deal.raises(InvalidGeohashError)
def decode_bbox(geohash: str) -> BoundingBox:
    """
    Decode a geohash string into the cell it covers.

    Args:
        geohash: Geohash string (empty string is the whole world)

    Returns:
        Bounding box of the cell

    Raises:
        InvalidGeohashError: If the string contains a character outside the alphabet
    """
    lat_min, lat_max = -90.0, 90.0
    lon_min, lon_max = -180.0, 180.0

    is_even = True

    for char in normalise_geohash(geohash):
        idx = GEOHASH_ALPHABET.index(char)

        # Decode 5 bits
        for mask in (16, 8, 4, 2, 1):
            if is_even:  # Longitude bit
                if idx & mask:
                    lon_min = (lon_min + lon_max) / 2.0
                else:
                    lon_max = (lon_min + lon_max) / 2.0
            else:  # Latitude bit
                if idx & mask:
                    lat_min = (lat_min + lat_max) / 2.0
                else:
                    lat_max = (lat_min + lat_max) / 2.0
            is_even = not is_even

    return BoundingBox(lat_min=lat_min, lat_max=lat_max, lon_min=lon_min, lon_max=lon_max)


def decode(geohash: str) -> tuple[float, float, float, float]:
    """
    Decode a geohash string into its center point and error margins.

    Args:
        geohash: Geohash string

    Returns:
        Tuple of (latitude, longitude, lat_error, lon_error)
        where errors are the half-extents of the cell

    Example:
        >>> decode('u4pruy')
        (57.6480..., 10.4095..., 0.00274..., 0.00549...)
    """
    bbox = decode_bbox(geohash)
    center = bbox.center
    return center.latitude, center.longitude, bbox.lat_err, bbox.lon_err


def adjacent(geohash: str, direction: Direction | str) -> str | None:
    """
    Get the geohash of the same precision one cell away in a cardinal direction.

    Steps that leave the parent cell carry into the parent prefix, one
    character at a time, until a character that is not on the border is reached.
    East and west wrap around the antimeridian. North of the northernmost row
    and south of the southernmost row there is no cell.

    Args:
        geohash: Geohash string
        direction: NORTH, EAST, SOUTH or WEST

    Returns:
        Adjacent geohash, "" for an empty geohash, or None beyond a pole

    Raises:
        ValueError: If direction is not a cardinal direction
    """
    step = Direction(direction)
    if not step.is_cardinal:
        raise ValueError(f"adjacent() takes a cardinal direction, got {step.name}")

    chars = list(normalise_geohash(geohash))
    if not chars:
        return ""

    for i in range(len(chars) - 1, -1, -1):
        parity = (i + 1) % 2
        last = chars[i]
        chars[i] = GEOHASH_ALPHABET[_NEIGHBORS[step][parity].index(last)]
        if last not in _BORDERS[step][parity]:
            return "".join(chars)

    # Carried past the first character
    if step in (Direction.NORTH, Direction.SOUTH):
        return None
    return "".join(chars)


def neighbor_map(geohash: str) -> dict[Direction, str | None]:
    """
    Get the 8 neighboring geohashes keyed by direction.

    Diagonal neighbors are composed from two cardinal steps
    (NORTH_EAST is EAST of NORTH, SOUTH_WEST is WEST of SOUTH, ...).

    Args:
        geohash: Non-empty geohash string

    Returns:
        Mapping in N, NE, E, SE, S, SW, W, NW order; None beyond a pole

    Raises:
        InvalidGeohashError: If the geohash is empty or malformed
    """
    cell = normalise_geohash(geohash)
    if not cell:
        raise InvalidGeohashError("Cannot compute neighbors of an empty geohash")

    result: dict[Direction, str | None] = {}
    for direction in Direction:
        neighbor: str | None = cell
        for step in direction.steps:
            neighbor = adjacent(neighbor, step)
            if neighbor is None:
                break
        result[direction] = neighbor

    return result


def neighbors(geohash: str) -> list[str]:
    """
    Get the neighboring geohashes (north, south, east, west, and diagonals).

    Args:
        geohash: Non-empty geohash string

    Returns:
        Neighbors in N, NE, E, SE, S, SW, W, NW order. All 8 away from the
        poles; cells beyond a pole are left out for the polar rows.
    """
    return [cell for cell in neighbor_map(geohash).values() if cell is not None]


def neighbors_with_self(geohash: str) -> list[str]:
    """
    Get a geohash and its neighbors, the covering set for a proximity query.

    Args:
        geohash: Non-empty geohash string

    Returns:
        The geohash first, then its neighbors, without duplicates (at most 9)
    """
    cell = normalise_geohash(geohash)
    covering = list(dict.fromkeys([cell, *neighbors(cell)]))
    logger.debug(f"Covering set for {cell}: {covering}")
    return covering


def latitude_row(geohash: str) -> list[str]:
    """
    Get every cell in the same latitude row as a geohash.

    Walks east from the geohash until it wraps around the antimeridian back to
    the start. A row has 2 ** (longitude bits) cells, 8 at precision 1 and 32
    at precision 2, so this is only practical for short geohashes.

    Args:
        geohash: Non-empty geohash string

    Returns:
        The row's cells, starting with the geohash and going east

    Raises:
        InvalidGeohashError: If the geohash is empty or malformed
    """
    start = normalise_geohash(geohash)
    if not start:
        raise InvalidGeohashError("Cannot compute the row of an empty geohash")

    row = [start]
    cell = adjacent(start, Direction.EAST)
    while cell is not None and cell != start:
        row.append(cell)
        cell = adjacent(cell, Direction.EAST)
    return row

"""
Proximity Query Planning

Turns "records within R km of a point" into a handful of prefix range
queries over a stored geohash field, then removes the false positives
with an exact great-circle distance check.

A search runs in three steps:
    1. Pick a precision whose cells are large enough for the radius
    2. Query the center cell and its 8 neighbors by geohash prefix
       (or the whole polar row when the circle contains a pole)
    3. Union the rows and keep those within the radius
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import math
from collections.abc import Awaitable, Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from geospot.api.core.constants import (
    COVERAGE_SAFETY_FACTOR,
    KM_PER_DEGREE,
    MAX_PRECISION,
    MIN_PRECISION,
    POLAR_ROW_MAX_PRECISION,
    RANGE_END_SENTINEL,
)
from geospot.api.core.exceptions import InvalidCoordinateError
from geospot.api.core.types import Coordinate
from geospot.api.location.distance import cell_size_degrees, cell_size_km, haversine_km
from geospot.api.location.geohash_utils import (
    encode,
    encode_from_point,
    latitude_row,
    neighbors_with_self,
    normalise_geohash,
    validate_precision,
)


logger = logging.getLogger(__name__)


__all__ = [
    "NearbyMatch",
    "RangeQuery",
    "candidate_keys",
    "covered_radius_km",
    "filter_within_radius",
    "get_precision_for_radius",
    "polar_cap_keys",
    "prefix_bounds",
    "record_coordinate",
    "record_id",
    "search_keys",
    "search_nearby",
]


T = TypeVar("T")

RangeQuery = Callable[[str, str], Iterable[Any] | Awaitable[Iterable[Any]]]
"""Callable answering an inclusive (start, end) range query over the stored geohash."""


@dataclass(frozen=True)
class NearbyMatch(Generic[T]):
    """A record found by a proximity search and its distance from the center."""

    record: T
    distance_km: float


def _validate_radius(radius_km: float) -> float:
    try:
        radius = float(radius_km)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Radius must be a number, got {radius_km!r}") from e
    if not math.isfinite(radius) or radius < 0:
        raise ValueError(f"Radius must be a finite, non-negative number of km, got {radius_km!r}")
    return radius


def candidate_keys(center: Coordinate, precision: int) -> list[str]:
    """
    Get the covering set of geohash prefixes for a proximity query.

    Args:
        center: Search center
        precision: Length of the prefixes to query

    Returns:
        The center's geohash followed by its neighbors (at most 9 keys)
    """
    keys = neighbors_with_self(encode_from_point(center, precision))
    logger.debug(f"Candidate keys for {center} at precision {precision}: {keys}")
    return keys


def prefix_bounds(key: str) -> tuple[str, str]:
    """
    Get the start-at / end-at bounds selecting every geohash with a prefix.

    Args:
        key: Geohash prefix

    Returns:
        Tuple of (start, end) for an inclusive ordered-string range query
    """
    prefix = normalise_geohash(key)
    return prefix, prefix + RANGE_END_SENTINEL


def covered_radius_km(geohash_or_precision: str | int, latitude: float = 0.0) -> float:
    """
    Calculate the radius guaranteed to lie inside a 3x3 covering set.

    Any point within this distance of a center inside the middle cell is in
    one of the nine cells. The cell width is measured at the poleward edge of
    the 3x3 block, where it is narrowest.

    Args:
        geohash_or_precision: Geohash (its length is used) or precision
        latitude: Latitude of the search center

    Returns:
        Covered radius in km (0 when the block reaches a pole)
    """
    if isinstance(geohash_or_precision, str):
        precision = len(normalise_geohash(geohash_or_precision))
    else:
        precision = geohash_or_precision
    validate_precision(precision)

    height_deg, _ = cell_size_degrees(precision)
    edge_latitude = abs(latitude) + 2.0 * height_deg
    if edge_latitude >= 90.0:
        return 0.0

    height_km, _ = cell_size_km(precision)
    _, width_km = cell_size_km(precision, edge_latitude)

    return COVERAGE_SAFETY_FACTOR * min(height_km, width_km)


def get_precision_for_radius(radius_km: float, latitude: float = 0.0) -> int:
    """
    Get the geohash precision to use for a search radius.

    Args:
        radius_km: Search radius in kilometers
        latitude: Latitude of the search center (cells narrow toward the poles)

    Returns:
        Largest precision whose covering set contains the whole radius, or 1
        when even the coarsest cells are too small

    Raises:
        ValueError: If the radius is negative or not finite
    """
    radius = _validate_radius(radius_km)

    for precision in range(MAX_PRECISION, MIN_PRECISION - 1, -1):
        if covered_radius_km(precision, latitude) >= radius:
            return precision

    return MIN_PRECISION


def polar_cap_keys(center: Coordinate, radius_km: float) -> tuple[int, list[str]] | None:
    """
    Get the covering set for a search circle that contains a pole.

    Such a circle spans every longitude, so no 3x3 block can cover it. It does
    fit inside the polar cap reaching (distance to pole + radius) from the
    pole, which is covered by the whole polar row of cells at the longest
    precision whose cell height is at least the cap depth.

    Args:
        center: Search center
        radius_km: Search radius in km

    Returns:
        Tuple of (precision, keys), or None when the circle does not contain a
        pole or the cap is deeper than the coarsest row
    """
    radius_deg = _validate_radius(radius_km) / KM_PER_DEGREE
    pole_distance_deg = 90.0 - abs(center.latitude)
    if radius_deg < pole_distance_deg:
        return None

    depth_deg = pole_distance_deg + radius_deg
    pole_latitude = 90.0 if center.latitude >= 0 else -90.0

    for precision in range(POLAR_ROW_MAX_PRECISION, MIN_PRECISION - 1, -1):
        height_deg, _ = cell_size_degrees(precision)
        if height_deg >= depth_deg:
            keys = latitude_row(encode(pole_latitude, 0.0, precision))
            logger.debug(f"Search around {center} contains a pole, querying {len(keys)} polar cells")
            return precision, keys

    return None


def search_keys(center: Coordinate, radius_km: float, precision: int | None = None) -> tuple[int, list[str]]:
    """
    Plan the prefix range queries for a proximity search.

    Without an explicit precision, a circle containing a pole is covered by
    its polar row and any other circle by the 3x3 block at the precision
    derived from the radius. A warning is logged whenever the block covers
    less than the radius, so records near the edge of the circle may be missed.

    Args:
        center: Search center
        radius_km: Search radius in km
        precision: Prefix length to query (default: derived from the radius)

    Returns:
        Tuple of (precision, keys)

    Raises:
        ValueError: If the radius is negative or not finite
        InvalidPrecisionError: If precision is outside 1-12
    """
    radius = _validate_radius(radius_km)

    if precision is None:
        polar = polar_cap_keys(center, radius)
        if polar is not None:
            return polar
        precision = get_precision_for_radius(radius, center.latitude)
    else:
        validate_precision(precision)

    covered = covered_radius_km(precision, center.latitude)
    if radius > covered:
        logger.warning(
            f"Radius {radius:.3f}km exceeds the {covered:.3f}km covered at precision {precision}; "
            "results near the edge may be missed"
        )

    return precision, candidate_keys(center, precision)


def record_coordinate(record: Any) -> Coordinate:
    """
    Get the coordinate of a record.

    Accepts a Coordinate, an object with latitude/longitude attributes, or a
    mapping with latitude/longitude keys (optionally nested under "location").

    Raises:
        InvalidCoordinateError: If the record has no usable coordinate
    """
    if isinstance(record, Coordinate):
        return record

    if isinstance(record, Mapping):
        source: Any = record.get("location", record)
        if isinstance(source, Mapping):
            latitude = source.get("latitude")
            longitude = source.get("longitude")
        else:
            latitude = longitude = None
    else:
        latitude = getattr(record, "latitude", None)
        longitude = getattr(record, "longitude", None)

    if latitude is None or longitude is None:
        raise InvalidCoordinateError(f"Record has no coordinate: {record!r}")
    try:
        return Coordinate(float(latitude), float(longitude))
    except (TypeError, ValueError) as e:
        raise InvalidCoordinateError(f"Record coordinate is not a number: {record!r}") from e


def record_id(record: Any) -> Hashable:
    """
    Get the identity used to merge rows returned by several range queries.

    Uses the record's "id" when it has one, else the record itself, or the
    object identity for unhashable records such as plain dicts.
    """
    if isinstance(record, Mapping):
        identity = record.get("id")
    else:
        identity = getattr(record, "id", None)
    if identity is not None:
        return identity
    try:
        hash(record)
    except TypeError:
        return id(record)
    return record


def filter_within_radius(
    center: Coordinate,
    radius_km: float,
    records: Iterable[T],
    location: Callable[[T], Coordinate] = record_coordinate,
) -> list[NearbyMatch[T]]:
    """
    Keep the records within a great-circle distance of the center.

    Args:
        center: Search center
        radius_km: Maximum distance in km (inclusive)
        records: Candidate records
        location: Extracts a record's coordinate

    Returns:
        Matches sorted by distance, nearest first
    """
    radius = _validate_radius(radius_km)

    matches: list[NearbyMatch[T]] = []
    for record in records:
        try:
            point = location(record)
        except InvalidCoordinateError as e:
            logger.warning(f"Skipping record without a valid coordinate: {e}")
            continue

        distance = haversine_km(center, point)
        if distance <= radius:
            matches.append(NearbyMatch(record=record, distance_km=distance))

    matches.sort(key=lambda match: match.distance_km)
    return matches


async def search_nearby(
    center: Coordinate,
    radius_km: float,
    query: RangeQuery,
    precision: int | None = None,
    key: Callable[[Any], Hashable] = record_id,
    location: Callable[[Any], Coordinate] = record_coordinate,
) -> list[NearbyMatch[Any]]:
    """
    Find the records within a radius using prefix range queries.

    One range query is issued per covering key, concurrently. Errors raised
    by the query propagate unchanged.

    Args:
        center: Search center
        radius_km: Search radius in km
        query: Range query over the stored geohash, sync or async
        precision: Prefix length to query (default: derived from the radius)
        key: Identity used to merge rows from different queries
        location: Extracts a record's coordinate

    Returns:
        Matches within the radius, nearest first
    """
    radius = _validate_radius(radius_km)
    _, keys = search_keys(center, radius, precision)

    async def _run(prefix: str) -> list[Any]:
        start, end = prefix_bounds(prefix)
        rows = query(start, end)
        if inspect.isawaitable(rows):
            rows = await rows
        return list(rows)

    batches = await asyncio.gather(*(_run(prefix) for prefix in keys))

    merged: dict[Hashable, Any] = {}
    for rows in batches:
        for row in rows:
            merged.setdefault(key(row), row)

    logger.debug(f"{len(merged)} candidate rows from {len(keys)} range queries")
    return filter_within_radius(center, radius, merged.values(), location=location)

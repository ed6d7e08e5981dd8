"""
Geocoding

Place name to coordinate lookups (and the reverse) through OpenStreetMap's
Nominatim service via aiohttp. Used to center a proximity search on a place
and to fill in a spot's address, city and country code.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from geospot.api.core.exceptions import GeocodingError, LocationNotFoundError
from geospot.api.core.settings import Settings, get_settings
from geospot.api.core.types import Coordinate, validate_coordinate


logger = logging.getLogger(__name__)


__all__ = [
    "GeocodedPlace",
    "geocode_address",
    "geocode_batch",
    "reverse_geocode",
]


class GeocodedPlace(BaseModel):
    """A place returned by the geocoder."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    display_name: str
    city: str | None = None
    country_code: str | None = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


def _city_from_address(address: dict[str, Any]) -> str | None:
    # Nominatim names the locality by its size
    for field in ("city", "town", "village", "municipality", "hamlet"):
        value = address.get(field)
        if value:
            return str(value)
    return None


def _place_from_result(result: dict[str, Any], fallback_name: str) -> GeocodedPlace:
    address = result.get("address") or {}
    country_code = address.get("country_code")
    try:
        return GeocodedPlace(
            latitude=float(result["lat"]),
            longitude=float(result["lon"]),
            display_name=result.get("display_name") or fallback_name,
            city=_city_from_address(address),
            country_code=country_code.upper() if country_code else None,
        )
    except (KeyError, TypeError, ValueError, ValidationError) as e:
        raise GeocodingError(f"Unexpected geocoding response: {e}") from e


async def _get_json(path: str, params: dict[str, str | int | float], settings: Settings) -> Any:
    url = f"{settings.nominatim_url}/{path}"
    headers = {
        "User-Agent": settings.user_agent,
    }

    try:
        async with (
            aiohttp.ClientSession() as session,
            session.get(
                url, params=params, headers=headers, timeout=aiohttp.ClientTimeout(total=settings.request_timeout)
            ) as response,
        ):
            if response.status != 200:
                raise GeocodingError(f"Geocoding API returned HTTP {response.status}")

            return await response.json()
    except (TimeoutError, aiohttp.ClientError) as e:
        raise GeocodingError(f"Failed to reach geocoding API: {e}") from e


async def geocode_address(query: str, settings: Settings | None = None) -> GeocodedPlace:
    """
    Geocode a place from city name, address, or ZIP code.

    Args:
        query: Location query (e.g., "Amsterdam", "10 Downing St, London")
        settings: Settings to use (default: get_settings())

    Returns:
        Best match for the query

    Raises:
        ValueError: If the query is blank
        LocationNotFoundError: If nothing matches the query
        GeocodingError: If the API request fails
    """
    if not query or not query.strip():
        raise ValueError("Query must be non-empty")

    settings = settings or get_settings()
    params: dict[str, str | int | float] = {
        "q": query.strip(),
        "format": "json",
        "limit": 1,
        "addressdetails": 1,
    }

    logger.debug(f"Geocoding '{query}'")
    data = await _get_json("search", params, settings)

    if not data:
        raise LocationNotFoundError(f"Could not find location: '{query}'")

    return _place_from_result(data[0], query)


async def reverse_geocode(latitude: float, longitude: float, settings: Settings | None = None) -> GeocodedPlace:
    """
    Look up the address of a coordinate.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        settings: Settings to use (default: get_settings())

    Returns:
        Place with display name, city and upper-case country code

    Raises:
        InvalidCoordinateError: If the coordinate is out of range
        LocationNotFoundError: If there is no address at the coordinate
        GeocodingError: If the API request fails
    """
    validate_coordinate(latitude, longitude)

    settings = settings or get_settings()
    params: dict[str, str | int | float] = {
        "lat": latitude,
        "lon": longitude,
        "format": "json",
        "addressdetails": 1,
    }

    logger.debug(f"Reverse geocoding ({latitude}, {longitude})")
    data = await _get_json("reverse", params, settings)

    if not data or "error" in data:
        raise LocationNotFoundError(f"No address found at ({latitude}, {longitude})")

    return _place_from_result(data, f"{latitude}, {longitude}")


async def geocode_batch(queries: list[str], settings: Settings | None = None) -> dict[str, GeocodedPlace]:
    """
    Geocode multiple places concurrently.

    Args:
        queries: List of location queries

    Returns:
        Dictionary mapping queries to places (failed queries excluded)
    """
    tasks = [geocode_address(query, settings) for query in queries]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    data_map: dict[str, GeocodedPlace] = {}
    for query, result in zip(queries, results, strict=False):
        if isinstance(result, Exception):
            logger.warning(f"Error geocoding '{query}': {result}")
        elif isinstance(result, GeocodedPlace):
            data_map[query] = result

    return data_map

"""
Spot Records

The spot record as stored in the remote document database, with the
camelCase document schema it is read from and written to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from geospot.api.core.constants import DEFAULT_STORAGE_PRECISION
from geospot.api.core.exceptions import InvalidCatalogFormatError
from geospot.api.core.types import Coordinate
from geospot.api.location.geohash_utils import encode


logger = logging.getLogger(__name__)


__all__ = [
    "Spot",
]


def _parse_timestamp(value: Any, field_name: str) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise InvalidCatalogFormatError(f"Invalid {field_name} timestamp: {value!r}") from e
    raise InvalidCatalogFormatError(f"Invalid {field_name} timestamp: {value!r}")


def _parse_float(value: Any, field_name: str) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidCatalogFormatError(f"Invalid {field_name}: {value!r}") from e


def _string_tuple(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


@dataclass(frozen=True)
class Spot:
    """
    A user-contributed location.

    Attributes:
        name: Display name
        latitude: Latitude in degrees (None when the record has no coordinate)
        longitude: Longitude in degrees (None when the record has no coordinate)
        id: Document id in the remote store
        description: Free-text description
        geohash: Lower-case geohash of the coordinate at the storage precision
        address: Street address from reverse geocoding
        city: City, town or village
        country_code: ISO 3166-1 alpha-2 country code, upper case
        image_urls: Image URLs, in display order
        tags: Free-form tags
        created_by: User id of the author
        created_by_name: Display name of the author
        created_at: Creation time
        updated_at: Last modification time
        is_public: Whether the spot is listed publicly
        duplicate_of: Id of the spot this one duplicates, if any
    """

    name: str
    latitude: float | None
    longitude: float | None
    id: str | None = None
    description: str = ""
    geohash: str | None = None
    address: str | None = None
    city: str | None = None
    country_code: str | None = None
    image_urls: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    created_by: str | None = None
    created_by_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_public: bool = True
    duplicate_of: str | None = None

    @property
    def coordinate(self) -> Coordinate:
        """
        The spot's coordinate.

        Raises:
            InvalidCoordinateError: If the coordinate is missing or out of range
        """
        return Coordinate(self.latitude, self.longitude)  # type: ignore[arg-type]

    def with_location(
        self, latitude: float, longitude: float, precision: int = DEFAULT_STORAGE_PRECISION
    ) -> Spot:
        """Return a copy moved to a new coordinate with its geohash recomputed."""
        geohash = encode(latitude, longitude, precision)
        return replace(self, latitude=float(latitude), longitude=float(longitude), geohash=geohash)

    @classmethod
    def from_document(cls, doc_id: str | None, data: dict[str, Any]) -> Spot:
        """
        Create a spot from a stored document.

        Legacy documents with a single ``imageUrl`` or a nested
        ``location: {latitude, longitude}`` are accepted.

        Args:
            doc_id: Document id
            data: Document fields

        Returns:
            Spot

        Raises:
            InvalidCatalogFormatError: If a field has the wrong type
        """
        if not isinstance(data, dict):
            raise InvalidCatalogFormatError(f"Spot document must be an object, got {type(data).__name__}")

        latitude = data.get("latitude")
        longitude = data.get("longitude")
        location = data.get("location")
        if (latitude is None or longitude is None) and isinstance(location, dict):
            latitude = location.get("latitude")
            longitude = location.get("longitude")

        if data.get("imageUrls") is not None:
            image_urls = _string_tuple(data["imageUrls"])
        else:
            image_urls = _string_tuple(data.get("imageUrl"))

        geohash = data.get("geohash")
        country_code = data.get("countryCode")

        return cls(
            id=doc_id,
            name=data.get("name") or "",
            description=data.get("description") or "",
            latitude=_parse_float(latitude, "latitude"),
            longitude=_parse_float(longitude, "longitude"),
            geohash=str(geohash).lower() if geohash else None,
            address=data.get("address"),
            city=data.get("city"),
            country_code=str(country_code).upper() if country_code else None,
            image_urls=image_urls,
            tags=_string_tuple(data.get("tags")),
            created_by=data.get("createdBy"),
            created_by_name=data.get("createdByName"),
            created_at=_parse_timestamp(data.get("createdAt"), "createdAt"),
            updated_at=_parse_timestamp(data.get("updatedAt"), "updatedAt"),
            is_public=True if data.get("isPublic") is None else bool(data["isPublic"]),
            duplicate_of=data.get("duplicateOf"),
        )

    def to_document(self) -> dict[str, Any]:
        """Convert to a document for storage (the id is kept outside the document)."""
        return {
            "name": self.name,
            "description": self.description,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "geohash": self.geohash,
            "address": self.address,
            "city": self.city,
            "countryCode": self.country_code,
            "imageUrls": list(self.image_urls),
            "tags": list(self.tags),
            "createdBy": self.created_by,
            "createdByName": self.created_by_name,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "isPublic": self.is_public,
            "duplicateOf": self.duplicate_of,
        }

    def __str__(self) -> str:
        return f"{self.name} ({self.latitude}, {self.longitude})"

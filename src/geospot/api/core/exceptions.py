"""
Custom exception classes for geospot.

This module defines specific exceptions for the errors that can occur
while indexing coordinates, planning proximity queries, geocoding places
and loading spot catalogs.
"""

from __future__ import annotations


__all__ = [
    # Catalog exceptions
    "CatalogError",
    "CatalogNotFoundError",
    # Configuration exceptions
    "ConfigurationError",
    # Geohash exceptions
    "GeohashError",
    "GeocodingError",
    # Base exception
    "GeospotError",
    "InvalidCatalogFormatError",
    "InvalidConfigurationError",
    "InvalidCoordinateError",
    "InvalidGeohashError",
    "InvalidPrecisionError",
    # Location exceptions
    "LocationError",
    "LocationNotFoundError",
]


class GeospotError(Exception):
    """
    Base exception for all geospot errors.

    All custom exceptions in this library inherit from this base class,
    making it easy to catch every library error in one place.
    """

    pass


# ============================================================================
# Geohash Exceptions
# ============================================================================


class GeohashError(GeospotError):
    """Base exception for geohash encoding and neighbor expansion errors."""

    pass


class InvalidCoordinateError(GeohashError, ValueError):
    """
    Raised when coordinates are out of valid range.

    This occurs when attempting to index or search with coordinates that are:
    - Latitude outside -90 to +90 degrees
    - Longitude outside -180 to +180 degrees
    - NaN or infinite
    """

    pass


class InvalidGeohashError(GeohashError, ValueError):
    """
    Raised when a geohash string cannot be interpreted.

    This occurs when the string is empty where a cell is required, or
    contains characters outside the base-32 geohash alphabet
    (the letters a, i, l and o are never valid).
    """

    pass


class InvalidPrecisionError(GeohashError, ValueError):
    """Raised when a geohash precision is outside 1-12 characters."""

    pass


# ============================================================================
# Location Exceptions
# ============================================================================


class LocationError(GeospotError):
    """Base exception for location-related errors."""

    pass


class LocationNotFoundError(LocationError):
    """Raised when a place cannot be found via geocoding."""

    pass


class GeocodingError(LocationError):
    """Raised when the geocoding API fails."""

    pass


# ============================================================================
# Catalog Exceptions
# ============================================================================


class CatalogError(GeospotError):
    """Base exception for spot catalog errors."""

    pass


class CatalogNotFoundError(CatalogError):
    """Raised when a catalog file doesn't exist."""

    pass


class InvalidCatalogFormatError(CatalogError):
    """Raised when catalog data format is invalid."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(GeospotError):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid."""

    pass

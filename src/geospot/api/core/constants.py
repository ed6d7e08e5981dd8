"""
Geodetic and Indexing Constants

Constants used throughout the geospot API for encoding and distance calculations.
"""

from typing import Final


__all__ = [
    "COVERAGE_SAFETY_FACTOR",
    "DEFAULT_STORAGE_PRECISION",
    "EARTH_RADIUS_KM",
    "GEOHASH_ALPHABET",
    "KM_PER_DEGREE",
    "MAX_PRECISION",
    "MIN_PRECISION",
    "POLAR_ROW_MAX_PRECISION",
    "RANGE_END_SENTINEL",
]


# Geohash base32 alphabet (excludes a, i, l, o to avoid confusion)
GEOHASH_ALPHABET: Final[str] = "0123456789bcdefghjkmnpqrstuvwxyz"
"""The 32 symbols of the geohash alphabet, indexed by 5-bit value."""

MIN_PRECISION: Final[int] = 1
"""Shortest geohash (one character, ~5000km cell)."""

MAX_PRECISION: Final[int] = 12
"""Longest geohash supported (12 characters, ~3.7cm x 1.9cm cell)."""

DEFAULT_STORAGE_PRECISION: Final[int] = 12
"""Precision of the geohash stored on every spot record."""

RANGE_END_SENTINEL: Final[str] = "\uf8ff"
"""Appended to a prefix to form the end-at bound of an ordered string range query."""

# Geodetic constants
EARTH_RADIUS_KM: Final[float] = 6371.0088
"""Mean Earth radius (IUGG) in kilometers."""

KM_PER_DEGREE: Final[float] = 111.19508
"""Great-circle kilometers per degree of arc on the mean-radius sphere."""

COVERAGE_SAFETY_FACTOR: Final[float] = 0.9
"""Fraction of the smallest 3x3 block half-extent guaranteed to be covered."""

POLAR_ROW_MAX_PRECISION: Final[int] = 2
"""Longest prefix used when a search circle contains a pole (a whole row of 32 cells)."""

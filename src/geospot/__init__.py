"""
geospot: Geohash Indexing and Proximity Search for Spot Directories

Encodes coordinates as geohashes, expands a cell into its compass neighbors,
and plans proximity searches as a few prefix range queries against any store
that keeps a geohash index field.

Example:
    >>> from geospot import Coordinate, candidate_keys, encode, prefix_bounds
    >>> encode(57.64911, 10.40744, 6)
    'u4pruy'
    >>> center = Coordinate(52.3676, 4.9041)
    >>> for key in candidate_keys(center, 7):
    ...     start, end = prefix_bounds(key)
    ...     rows = store.where_geohash_between(start, end)
"""

# Exceptions
from geospot.api.core.exceptions import (
    CatalogError,
    GeocodingError,
    GeohashError,
    GeospotError,
    InvalidCoordinateError,
    InvalidGeohashError,
    InvalidPrecisionError,
    LocationNotFoundError,
)

# Core types
from geospot.api.core.enums import Direction
from geospot.api.core.settings import Settings, get_settings
from geospot.api.core.types import BoundingBox, Coordinate

# Geohash codec and neighbors
from geospot.api.location.geohash_utils import (
    adjacent,
    decode,
    decode_bbox,
    encode,
    encode_from_point,
    latitude_row,
    neighbor_map,
    neighbors,
    neighbors_with_self,
)

# Distance and proximity search
from geospot.api.location.distance import destination_point, haversine_km
from geospot.api.location.proximity import (
    NearbyMatch,
    candidate_keys,
    covered_radius_km,
    filter_within_radius,
    get_precision_for_radius,
    polar_cap_keys,
    prefix_bounds,
    search_keys,
    search_nearby,
)

# Geocoding
from geospot.api.location.geocoding import GeocodedPlace, geocode_address, reverse_geocode

# Spots
from geospot.api.spots import (
    BackfillReport,
    Spot,
    SpotCatalog,
    backfill_missing_geohashes,
    index_spot,
    prepare_new_spot,
    prepare_spot_update,
)


__version__ = "0.1.0"

__all__ = [
    "BackfillReport",
    "BoundingBox",
    "CatalogError",
    "Coordinate",
    "Direction",
    "GeocodedPlace",
    "GeocodingError",
    "GeohashError",
    "GeospotError",
    "InvalidCoordinateError",
    "InvalidGeohashError",
    "InvalidPrecisionError",
    "LocationNotFoundError",
    "NearbyMatch",
    "Settings",
    "Spot",
    "SpotCatalog",
    "adjacent",
    "backfill_missing_geohashes",
    "candidate_keys",
    "covered_radius_km",
    "decode",
    "decode_bbox",
    "destination_point",
    "encode",
    "encode_from_point",
    "filter_within_radius",
    "geocode_address",
    "get_precision_for_radius",
    "get_settings",
    "haversine_km",
    "index_spot",
    "latitude_row",
    "neighbor_map",
    "neighbors",
    "neighbors_with_self",
    "polar_cap_keys",
    "prefix_bounds",
    "prepare_new_spot",
    "prepare_spot_update",
    "reverse_geocode",
    "search_keys",
    "search_nearby",
]

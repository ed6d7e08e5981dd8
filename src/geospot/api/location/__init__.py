"""Location subpackage: geohash codec, neighbor expansion, proximity planning and geocoding."""

from geospot.api.location.distance import cell_size_degrees, cell_size_km, destination_point, haversine_km
from geospot.api.location.geocoding import GeocodedPlace, geocode_address, geocode_batch, reverse_geocode
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


__all__ = [
    "GeocodedPlace",
    "NearbyMatch",
    "adjacent",
    "candidate_keys",
    "cell_size_degrees",
    "cell_size_km",
    "covered_radius_km",
    "decode",
    "decode_bbox",
    "destination_point",
    "encode",
    "encode_from_point",
    "filter_within_radius",
    "geocode_address",
    "geocode_batch",
    "get_precision_for_radius",
    "haversine_km",
    "latitude_row",
    "neighbor_map",
    "neighbors",
    "neighbors_with_self",
    "polar_cap_keys",
    "prefix_bounds",
    "reverse_geocode",
    "search_keys",
    "search_nearby",
]

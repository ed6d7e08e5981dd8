"""Spots subpackage: spot records, geohash indexing and the in-memory catalog."""

from geospot.api.spots.catalog import SpotCatalog
from geospot.api.spots.indexing import (
    BackfillReport,
    backfill_missing_geohashes,
    index_spot,
    needs_geohash,
    prepare_new_spot,
    prepare_spot_update,
)
from geospot.api.spots.models import Spot


__all__ = [
    "BackfillReport",
    "Spot",
    "SpotCatalog",
    "backfill_missing_geohashes",
    "index_spot",
    "needs_geohash",
    "prepare_new_spot",
    "prepare_spot_update",
]

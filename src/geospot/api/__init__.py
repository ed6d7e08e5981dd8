"""Library API: geohash indexing, proximity search, spots and geocoding."""

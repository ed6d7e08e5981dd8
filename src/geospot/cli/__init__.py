"""
geospot CLI

Command-line interface for geohash indexing, proximity search and geocoding.
"""

from geospot import __version__


__all__ = ["__version__"]

"""Core subpackage for shared types, settings, and exceptions."""

from geospot.api.core.enums import Direction
from geospot.api.core.settings import Settings, get_settings, load_settings, reset_settings
from geospot.api.core.types import BoundingBox, Coordinate, validate_coordinate


__all__ = [
    "BoundingBox",
    "Coordinate",
    "Direction",
    "Settings",
    "get_settings",
    "load_settings",
    "reset_settings",
    "validate_coordinate",
]

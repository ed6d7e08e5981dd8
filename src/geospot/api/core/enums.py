"""
Common Enums

Enumerations used throughout the geospot API.
"""

from enum import StrEnum


__all__ = [
    "CARDINAL_DIRECTIONS",
    "Direction",
]


class Direction(StrEnum):
    """Compass directions between adjacent geohash cells."""

    NORTH = "n"
    NORTH_EAST = "ne"
    EAST = "e"
    SOUTH_EAST = "se"
    SOUTH = "s"
    SOUTH_WEST = "sw"
    WEST = "w"
    NORTH_WEST = "nw"

    @property
    def is_cardinal(self) -> bool:
        """True for the four single-axis directions."""
        return len(self.value) == 1

    @property
    def steps(self) -> tuple["Direction", ...]:
        """
        Cardinal steps that reach this direction.

        Diagonals are a vertical step followed by a horizontal one,
        e.g. NORTH_EAST is EAST of NORTH.
        """
        if self.is_cardinal:
            return (self,)
        return (Direction(self.value[0]), Direction(self.value[1]))


CARDINAL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)

"""
Unit tests for geohash_utils module.

Tests geohash encoding, decoding, and neighbor expansion.
"""

import math
import unittest

from geospot.api.core.constants import GEOHASH_ALPHABET
from geospot.api.core.enums import CARDINAL_DIRECTIONS, Direction
from geospot.api.core.exceptions import InvalidCoordinateError, InvalidGeohashError, InvalidPrecisionError
from geospot.api.core.types import Coordinate
from geospot.api.location.geohash_utils import (
    adjacent,
    decode,
    decode_bbox,
    encode,
    encode_from_point,
    is_valid_precision,
    latitude_row,
    neighbor_map,
    neighbors,
    neighbors_with_self,
    normalise_geohash,
    validate_precision,
)


# Cells away from the poles and the antimeridian, including carries across
# the equator and the prime meridian ("7zzzzz", "s0000")
SAMPLE_GEOHASHES = ["u4pruy", "u09tvw0", "ezs42", "9q8yyk", "dr5ru7", "s0000", "7zzzzz", "kpbpbp", "gcpvj0", "6gkzwgjz"]


class TestEncode(unittest.TestCase):
    """Test suite for encode function"""

    def test_encode_basic(self):
        """Test basic geohash encoding"""
        # Paris coordinates
        result = encode(48.8566, 2.3522, 7)
        self.assertEqual(result, "u09tvw0")
        self.assertEqual(len(result), 7)

    def test_encode_reference_vector(self):
        """Test the reference coordinate from the geohash definition"""
        self.assertEqual(encode(57.64911, 10.40744, 6), "u4pruy")

    def test_encode_different_precisions(self):
        """Test encoding with different precision levels"""
        lat, lon = 40.7128, -74.0060  # New York

        for precision in range(1, 13):
            result = encode(lat, lon, precision)
            self.assertEqual(len(result), precision)
            self.assertTrue(all(char in GEOHASH_ALPHABET for char in result))

    def test_encode_default_precision(self):
        """Test that the default precision is the storage precision"""
        self.assertEqual(len(encode(52.3676, 4.9041)), 12)

    def test_encode_prefix_property(self):
        """Test that a shorter geohash is a prefix of a longer one"""
        lat, lon = -33.8688, 151.2093  # Sydney
        full = encode(lat, lon, 12)
        for precision in range(1, 12):
            self.assertTrue(full.startswith(encode(lat, lon, precision)))

    def test_encode_edge_cases(self):
        """Test encoding with edge case coordinates"""
        self.assertEqual(encode(90.0, 180.0, 5), "zzzzz")
        self.assertEqual(encode(-90.0, -180.0, 5), "00000")

        # Equator, prime meridian
        self.assertEqual(encode(0.0, 0.0, 5), "s0000")

        # International date line
        self.assertEqual(len(encode(0.0, 180.0, 5)), 5)
        self.assertEqual(len(encode(0.0, -180.0, 5)), 5)

    def test_encode_from_point(self):
        """Test encoding a Coordinate"""
        point = Coordinate(57.64911, 10.40744)
        self.assertEqual(encode_from_point(point, 6), "u4pruy")

    def test_encode_invalid_coordinates(self):
        """Test that invalid coordinates raise instead of being clamped"""
        for lat, lon in [(100.0, 0.0), (-90.5, 0.0), (0.0, 180.1), (0.0, -181.0), (math.nan, 0.0), (0.0, math.inf)]:
            with self.subTest(lat=lat, lon=lon), self.assertRaises(InvalidCoordinateError):
                encode(lat, lon, 5)

    def test_encode_invalid_precision(self):
        """Test that precision outside 1-12 raises"""
        for precision in (0, -1, 13, 2.5, True):
            with self.subTest(precision=precision), self.assertRaises(InvalidPrecisionError):
                encode(0.0, 0.0, precision)

    def test_encode_contract_messages(self):
        """Test that rejected arguments report which value is wrong"""
        with self.assertRaises(InvalidCoordinateError) as context:
            encode(math.inf, 0.0)
        self.assertIn("Invalid latitude", str(context.exception))

        with self.assertRaises(InvalidCoordinateError) as context:
            encode(0.0, "east")
        self.assertIn("Invalid longitude", str(context.exception))

        with self.assertRaises(InvalidPrecisionError) as context:
            encode(0.0, 0.0, 13)
        self.assertIn("Precision must be an integer", str(context.exception))

    def test_invalid_errors_are_value_errors(self):
        """Test that validation errors can be caught as ValueError"""
        with self.assertRaises(ValueError):
            encode(91.0, 0.0)
        with self.assertRaises(ValueError):
            encode(0.0, 0.0, 0)


class TestDecode(unittest.TestCase):
    """Test suite for decode function"""

    def test_decode_basic(self):
        """Test basic geohash decoding"""
        lat, lon, lat_err, lon_err = decode("u4pruy")

        self.assertAlmostEqual(lat, 57.64911, delta=lat_err)
        self.assertAlmostEqual(lon, 10.40744, delta=lon_err)
        self.assertAlmostEqual(lat_err, 180.0 / 2**16, places=9)
        self.assertAlmostEqual(lon_err, 360.0 / 2**16, places=9)

    def test_decode_roundtrip(self):
        """Test that re-encoding a decoded center gives the same geohash"""
        for geohash in SAMPLE_GEOHASHES:
            with self.subTest(geohash=geohash):
                lat, lon, _, _ = decode(geohash)
                self.assertEqual(encode(lat, lon, len(geohash)), geohash)

    def test_decode_uppercase(self):
        """Test that geohashes are case-insensitive"""
        self.assertEqual(decode("U4PRUY"), decode("u4pruy"))

    def test_decode_invalid_character(self):
        """Test decoding with invalid characters"""
        for geohash in ("u4pruya", "hello", "u4 pr", "i"):
            with self.subTest(geohash=geohash), self.assertRaises(InvalidGeohashError) as context:
                decode(geohash)
            self.assertIn("Invalid geohash character", str(context.exception))

    def test_decode_bbox_contains_point(self):
        """Test that the decoded cell contains the encoded point"""
        bbox = decode_bbox(encode(48.8566, 2.3522, 7))
        self.assertTrue(bbox.contains(48.8566, 2.3522))

    def test_decode_empty_is_world(self):
        """Test that the empty geohash is the whole world"""
        bbox = decode_bbox("")
        self.assertEqual((bbox.lat_min, bbox.lat_max, bbox.lon_min, bbox.lon_max), (-90.0, 90.0, -180.0, 180.0))


class TestNormaliseGeohash(unittest.TestCase):
    """Test suite for normalise_geohash function"""

    def test_lowercases_and_strips(self):
        """Test normalising case and whitespace"""
        self.assertEqual(normalise_geohash("  U4PRUY "), "u4pruy")

    def test_rejects_non_string(self):
        """Test that non-strings are rejected"""
        with self.assertRaises(InvalidGeohashError):
            normalise_geohash(12345)  # type: ignore[arg-type]


class TestAdjacent(unittest.TestCase):
    """Test suite for adjacent function"""

    def test_adjacent_first_level(self):
        """Test single-character steps"""
        self.assertEqual(adjacent("7", Direction.NORTH), "e")
        self.assertEqual(adjacent("u", Direction.SOUTH), "s")
        self.assertEqual(adjacent("s", Direction.NORTH), "u")

    def test_adjacent_empty(self):
        """Test that the empty geohash has an empty neighbor"""
        self.assertEqual(adjacent("", Direction.EAST), "")

    def test_adjacent_accepts_string_direction(self):
        """Test passing the direction as its short name"""
        self.assertEqual(adjacent("u", "s"), adjacent("u", Direction.SOUTH))

    def test_adjacent_rejects_diagonal(self):
        """Test that diagonal directions are rejected"""
        with self.assertRaises(ValueError):
            adjacent("u4pruy", Direction.NORTH_EAST)

    def test_adjacent_is_one_cell_away(self):
        """Test that every cardinal neighbor is exactly one cell away along one axis"""
        for geohash in SAMPLE_GEOHASHES:
            lat, lon, lat_err, lon_err = decode(geohash)
            for direction in CARDINAL_DIRECTIONS:
                with self.subTest(geohash=geohash, direction=direction):
                    neighbor = adjacent(geohash, direction)
                    self.assertIsNotNone(neighbor)
                    self.assertEqual(len(neighbor), len(geohash))

                    n_lat, n_lon, _, _ = decode(neighbor)
                    d_lat = round((n_lat - lat) / (2 * lat_err))
                    d_lon = round((n_lon - lon) / (2 * lon_err))
                    expected = {
                        Direction.NORTH: (1, 0),
                        Direction.SOUTH: (-1, 0),
                        Direction.EAST: (0, 1),
                        Direction.WEST: (0, -1),
                    }[direction]
                    self.assertEqual((d_lat, d_lon), expected)

    def test_adjacent_opposite_steps_return(self):
        """Test that stepping there and back returns to the start"""
        for geohash in SAMPLE_GEOHASHES:
            with self.subTest(geohash=geohash):
                self.assertEqual(adjacent(adjacent(geohash, Direction.NORTH), Direction.SOUTH), geohash)
                self.assertEqual(adjacent(adjacent(geohash, Direction.EAST), Direction.WEST), geohash)

    def test_adjacent_wraps_antimeridian(self):
        """Test that east and west wrap around the antimeridian"""
        self.assertEqual(adjacent("z", Direction.EAST), "b")
        self.assertEqual(adjacent("b", Direction.WEST), "z")

        east_edge = encode(10.0, 179.9999, 6)
        wrapped = adjacent(east_edge, Direction.EAST)
        self.assertLess(decode(wrapped)[1], -179.0)
        self.assertAlmostEqual(decode(wrapped)[0], decode(east_edge)[0])

    def test_adjacent_beyond_pole(self):
        """Test that there is no cell beyond a pole"""
        self.assertIsNone(adjacent("u", Direction.NORTH))
        self.assertIsNone(adjacent(encode(89.999, 10.0, 6), Direction.NORTH))
        self.assertIsNone(adjacent(encode(-89.999, 10.0, 6), Direction.SOUTH))


class TestNeighbors(unittest.TestCase):
    """Test suite for neighbors function"""

    def test_neighbors_count(self):
        """Test that neighbors returns 8 geohashes"""
        result = neighbors("u4pruy")
        self.assertEqual(len(result), 8)
        self.assertEqual(len(set(result)), 8)
        self.assertTrue(all(len(n) == 6 for n in result))
        self.assertNotIn("u4pruy", result)

    def test_neighbors_order(self):
        """Test that neighbors follow N, NE, E, SE, S, SW, W, NW order"""
        by_direction = neighbor_map("u4pruy")
        self.assertEqual(list(by_direction), list(Direction))
        self.assertEqual(neighbors("u4pruy"), list(by_direction.values()))

    def test_diagonals_are_composed(self):
        """Test that diagonals are two cardinal steps"""
        by_direction = neighbor_map("dr5ru7")
        north = adjacent("dr5ru7", Direction.NORTH)
        south = adjacent("dr5ru7", Direction.SOUTH)
        self.assertEqual(by_direction[Direction.NORTH_EAST], adjacent(north, Direction.EAST))
        self.assertEqual(by_direction[Direction.NORTH_WEST], adjacent(north, Direction.WEST))
        self.assertEqual(by_direction[Direction.SOUTH_EAST], adjacent(south, Direction.EAST))
        self.assertEqual(by_direction[Direction.SOUTH_WEST], adjacent(south, Direction.WEST))

    def test_neighbors_surround_cell(self):
        """Test that the 8 neighbors form the ring around the cell"""
        lat, lon, lat_err, lon_err = decode("9q8yyk")
        offsets = set()
        for neighbor in neighbors("9q8yyk"):
            n_lat, n_lon, _, _ = decode(neighbor)
            offsets.add((round((n_lat - lat) / (2 * lat_err)), round((n_lon - lon) / (2 * lon_err))))
        expected = {(d_lat, d_lon) for d_lat in (-1, 0, 1) for d_lon in (-1, 0, 1)} - {(0, 0)}
        self.assertEqual(offsets, expected)

    def test_neighbors_polar_row(self):
        """Test that cells beyond the pole are omitted"""
        by_direction = neighbor_map("b")
        self.assertIsNone(by_direction[Direction.NORTH])
        self.assertIsNone(by_direction[Direction.NORTH_EAST])
        self.assertIsNone(by_direction[Direction.NORTH_WEST])
        self.assertEqual(len(neighbors("b")), 5)

    def test_neighbors_empty(self):
        """Test that an empty geohash has no neighbors"""
        with self.assertRaises(InvalidGeohashError):
            neighbors("")


class TestNeighborsWithSelf(unittest.TestCase):
    """Test suite for neighbors_with_self function"""

    def test_includes_self_first(self):
        """Test that the cell itself comes first"""
        result = neighbors_with_self("u4pruy")
        self.assertEqual(result[0], "u4pruy")
        self.assertEqual(len(result), 9)
        self.assertEqual(len(set(result)), 9)

    def test_normalises_input(self):
        """Test that the cell is returned in lower case"""
        self.assertEqual(neighbors_with_self("U4PRUY")[0], "u4pruy")

    def test_polar_cell(self):
        """Test the covering set of a polar cell"""
        result = neighbors_with_self(encode(89.99, 0.0, 4))
        self.assertLessEqual(len(result), 9)
        self.assertEqual(len(result), 6)

    def test_no_duplicates_at_low_precision(self):
        """Test de-duplication when the ring wraps onto itself"""
        for geohash in GEOHASH_ALPHABET:
            with self.subTest(geohash=geohash):
                result = neighbors_with_self(geohash)
                self.assertEqual(len(result), len(set(result)))
                self.assertIn(geohash, result)


class TestValidatePrecision(unittest.TestCase):
    """Test suite for validate_precision and is_valid_precision functions"""

    def test_valid(self):
        """Test that every supported length passes"""
        for precision in range(1, 13):
            with self.subTest(precision=precision):
                self.assertTrue(is_valid_precision(precision))
                validate_precision(precision)

    def test_invalid(self):
        """Test that out-of-range, fractional and boolean precisions are rejected"""
        for precision in (0, 13, 2.0, "5", None, True):
            with self.subTest(precision=precision):
                self.assertFalse(is_valid_precision(precision))
                with self.assertRaises(InvalidPrecisionError) as context:
                    validate_precision(precision)
                self.assertIn("Precision must be an integer from 1 to 12", str(context.exception))


class TestLatitudeRow(unittest.TestCase):
    """Test suite for latitude_row function"""

    def test_top_row_precision_1(self):
        """Test the northernmost row of single-character cells"""
        row = latitude_row("b")
        self.assertEqual(row, ["b", "c", "f", "g", "u", "v", "y", "z"])
        self.assertTrue(all(decode_bbox(cell).lat_max == 90.0 for cell in row))

    def test_row_precision_2(self):
        """Test that a two-character row has 32 distinct cells"""
        row = latitude_row(encode(-90.0, 0.0, 2))
        self.assertEqual(len(row), 32)
        self.assertEqual(len(set(row)), 32)
        self.assertTrue(all(decode_bbox(cell).lat_min == -90.0 for cell in row))

    def test_row_shares_latitude(self):
        """Test that every cell in a row spans the same latitudes"""
        row = latitude_row("u4")
        boxes = [decode_bbox(cell) for cell in row]
        self.assertTrue(all(box.lat_min == boxes[0].lat_min for box in boxes))
        self.assertTrue(all(box.lat_max == boxes[0].lat_max for box in boxes))

    def test_empty_geohash(self):
        """Test that an empty geohash raises"""
        with self.assertRaises(InvalidGeohashError):
            latitude_row("")


if __name__ == "__main__":
    unittest.main()

"""
Unit tests for types module.

Tests the Coordinate and BoundingBox value types.
"""

import math
import unittest
from dataclasses import FrozenInstanceError

from geospot.api.core.exceptions import InvalidCoordinateError
from geospot.api.core.types import BoundingBox, Coordinate, validate_coordinate


class TestValidateCoordinate(unittest.TestCase):
    """Test suite for validate_coordinate function"""

    def test_valid(self):
        """Test valid coordinates including the extremes"""
        for lat, lon in [(0.0, 0.0), (90.0, 180.0), (-90.0, -180.0), (52.3676, 4.9041)]:
            with self.subTest(lat=lat, lon=lon):
                validate_coordinate(lat, lon)

    def test_out_of_range(self):
        """Test out of range coordinates"""
        with self.assertRaises(InvalidCoordinateError) as context:
            validate_coordinate(90.1, 0.0)
        self.assertIn("Invalid latitude", str(context.exception))

        with self.assertRaises(InvalidCoordinateError) as context:
            validate_coordinate(0.0, -180.1)
        self.assertIn("Invalid longitude", str(context.exception))

    def test_non_finite(self):
        """Test NaN and infinite coordinates"""
        for lat, lon in [(math.nan, 0.0), (0.0, math.nan), (math.inf, 0.0), (0.0, -math.inf)]:
            with self.subTest(lat=lat, lon=lon), self.assertRaises(InvalidCoordinateError):
                validate_coordinate(lat, lon)

    def test_not_a_number(self):
        """Test non-numeric coordinates"""
        with self.assertRaises(InvalidCoordinateError):
            validate_coordinate("north", 0.0)  # type: ignore[arg-type]
        with self.assertRaises(InvalidCoordinateError):
            validate_coordinate(None, 0.0)  # type: ignore[arg-type]


class TestCoordinate(unittest.TestCase):
    """Test suite for Coordinate dataclass"""

    def test_creation(self):
        """Test creating a Coordinate"""
        point = Coordinate(52.3676, 4.9041)
        self.assertEqual(point.latitude, 52.3676)
        self.assertEqual(point.longitude, 4.9041)

    def test_frozen(self):
        """Test that Coordinate is immutable"""
        point = Coordinate(0.0, 0.0)
        with self.assertRaises(FrozenInstanceError):
            point.latitude = 1.0  # type: ignore[misc]

    def test_validates(self):
        """Test that construction validates"""
        with self.assertRaises(InvalidCoordinateError):
            Coordinate(100.0, 0.0)

    def test_validates_messages(self):
        """Test that construction reports which value is invalid"""
        with self.assertRaises(InvalidCoordinateError) as context:
            Coordinate(91.0, 0.0)
        self.assertIn("Invalid latitude", str(context.exception))

        with self.assertRaises(InvalidCoordinateError) as context:
            Coordinate(0.0, math.nan)
        self.assertIn("Invalid longitude", str(context.exception))

        with self.assertRaises(ValueError):
            Coordinate(math.inf, 0.0)

    def test_str(self):
        """Test string formatting"""
        self.assertEqual(str(Coordinate(52.3676, 4.9041)), "52.3676°N, 4.9041°E")
        self.assertEqual(str(Coordinate(-33.8688, -70.6693)), "33.8688°S, 70.6693°W")


class TestBoundingBox(unittest.TestCase):
    """Test suite for BoundingBox dataclass"""

    def test_center_and_errors(self):
        """Test center point and half-extents"""
        bbox = BoundingBox(lat_min=10.0, lat_max=20.0, lon_min=30.0, lon_max=50.0)
        self.assertEqual(bbox.center, Coordinate(15.0, 40.0))
        self.assertEqual(bbox.lat_err, 5.0)
        self.assertEqual(bbox.lon_err, 10.0)

    def test_contains(self):
        """Test point containment with inclusive edges"""
        bbox = BoundingBox(lat_min=10.0, lat_max=20.0, lon_min=30.0, lon_max=50.0)
        self.assertTrue(bbox.contains(15.0, 40.0))
        self.assertTrue(bbox.contains(10.0, 50.0))
        self.assertFalse(bbox.contains(9.9, 40.0))
        self.assertFalse(bbox.contains(15.0, 50.1))


if __name__ == "__main__":
    unittest.main()

"""
Unit tests for distance module.

Tests great-circle distance, destination points and geohash cell sizes.
"""

import unittest

from geospot.api.core.constants import KM_PER_DEGREE
from geospot.api.core.types import Coordinate
from geospot.api.location.distance import cell_size_degrees, cell_size_km, destination_point, haversine_km


PARIS = Coordinate(48.8566, 2.3522)
LONDON = Coordinate(51.5074, -0.1278)


class TestHaversine(unittest.TestCase):
    """Test suite for haversine_km function"""

    def test_same_point(self):
        """Test distance from a point to itself"""
        self.assertEqual(haversine_km(PARIS, PARIS), 0.0)

    def test_known_distance(self):
        """Test Paris to London"""
        self.assertAlmostEqual(haversine_km(PARIS, LONDON), 343.5, delta=1.0)

    def test_symmetric(self):
        """Test that distance does not depend on argument order"""
        self.assertAlmostEqual(haversine_km(PARIS, LONDON), haversine_km(LONDON, PARIS), places=9)

    def test_one_degree_of_latitude(self):
        """Test that one degree of arc matches KM_PER_DEGREE"""
        self.assertAlmostEqual(haversine_km(Coordinate(0.0, 0.0), Coordinate(1.0, 0.0)), KM_PER_DEGREE, places=4)

    def test_across_antimeridian(self):
        """Test a short hop across the antimeridian"""
        distance = haversine_km(Coordinate(0.0, 179.5), Coordinate(0.0, -179.5))
        self.assertAlmostEqual(distance, KM_PER_DEGREE, places=3)

    def test_antipodal(self):
        """Test antipodal points are half the circumference apart"""
        distance = haversine_km(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
        self.assertAlmostEqual(distance, 180.0 * KM_PER_DEGREE, places=2)


class TestDestinationPoint(unittest.TestCase):
    """Test suite for destination_point function"""

    def test_due_north(self):
        """Test travelling due north along a meridian"""
        point = destination_point(Coordinate(0.0, 0.0), 0.0, KM_PER_DEGREE)
        self.assertAlmostEqual(point.latitude, 1.0, places=4)
        self.assertAlmostEqual(point.longitude, 0.0, places=6)

    def test_distance_is_preserved(self):
        """Test that the destination is the requested distance away"""
        origin = Coordinate(52.3676, 4.9041)
        for bearing in (0.0, 45.0, 137.0, 270.0, 359.0):
            with self.subTest(bearing=bearing):
                point = destination_point(origin, bearing, 12.5)
                self.assertAlmostEqual(haversine_km(origin, point), 12.5, places=6)

    def test_zero_distance(self):
        """Test that a zero distance returns the origin"""
        point = destination_point(PARIS, 123.0, 0.0)
        self.assertAlmostEqual(point.latitude, PARIS.latitude, places=9)
        self.assertAlmostEqual(point.longitude, PARIS.longitude, places=9)

    def test_longitude_wraps(self):
        """Test that longitude is normalised across the antimeridian"""
        point = destination_point(Coordinate(0.0, 179.5), 90.0, KM_PER_DEGREE)
        self.assertAlmostEqual(point.longitude, -179.5, places=3)


class TestCellSize(unittest.TestCase):
    """Test suite for cell_size_degrees and cell_size_km functions"""

    def test_cell_size_degrees(self):
        """Test cell dimensions in degrees"""
        self.assertEqual(cell_size_degrees(1), (45.0, 45.0))
        self.assertEqual(cell_size_degrees(2), (5.625, 11.25))
        self.assertEqual(cell_size_degrees(7), (180.0 / 2**17, 360.0 / 2**18))

    def test_cell_size_km_shrinks_with_latitude(self):
        """Test that cell width shrinks away from the equator"""
        height_eq, width_eq = cell_size_km(5, 0.0)
        height_60, width_60 = cell_size_km(5, 60.0)
        self.assertEqual(height_eq, height_60)
        self.assertAlmostEqual(width_60, width_eq * 0.5, places=9)

    def test_cell_size_km_at_pole(self):
        """Test that cell width vanishes at the pole"""
        _, width = cell_size_km(5, 90.0)
        self.assertAlmostEqual(width, 0.0, places=9)


if __name__ == "__main__":
    unittest.main()

"""
Tests for the distance and eligibility helpers.
"""
import unittest
from unittest.mock import MagicMock

from retail_ordering.core.geo import (
    ELIGIBILITY_RADIUS, calculate_distance, distance, is_eligible, stores_within_radius
)


def located(latitude, longitude):
    obj = MagicMock()
    obj.coordinates = (latitude, longitude)
    return obj


class TestGeo(unittest.TestCase):
    def test_distance_to_self_is_zero(self):
        self.assertEqual(distance((12.5, 40.0), (12.5, 40.0)), 0)

    def test_distance_is_symmetric(self):
        a, b = (3.0, 7.0), (51.2, 18.9)
        self.assertEqual(distance(a, b), distance(b, a))

    def test_calculate_distance_is_euclidean(self):
        self.assertAlmostEqual(calculate_distance(0, 0, 3, 4), 5.0)

    def test_radius_boundary_is_inclusive(self):
        store = located(0, 0)
        self.assertTrue(is_eligible(located(30, 0), store))
        self.assertFalse(is_eligible(located(30.0001, 0), store))

    def test_store_scenario(self):
        """Store at (0,0); customer at (20,0) may order, at (40,0) may not."""
        store = located(0, 0)
        self.assertTrue(is_eligible(located(20, 0), store))
        self.assertFalse(is_eligible(located(40, 0), store))

    def test_custom_radius(self):
        self.assertFalse(is_eligible(located(20, 0), located(0, 0), radius=10))

    def test_stores_within_radius(self):
        near, far = located(10, 10), located(90, 90)
        self.assertEqual(stores_within_radius(located(0, 0), [near, far]), [near])
        self.assertEqual(ELIGIBILITY_RADIUS, 30.0)


if __name__ == '__main__':
    unittest.main()

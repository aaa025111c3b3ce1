# retail_ordering/core/geo.py
import math
from typing import Iterable, List, Tuple

# Coordinates live in a flat synthetic space, so plain Euclidean distance
# is used instead of a great-circle formula.
ELIGIBILITY_RADIUS = 30.0

Coordinate = Tuple[float, float]

def calculate_distance(lat1: float, long1: float, lat2: float, long2: float) -> float:
    """Calculate the Euclidean distance between two latitude/longitude pairs.

    Args:
        lat1: Latitude of the first point
        long1: Longitude of the first point
        lat2: Latitude of the second point
        long2: Longitude of the second point

    Returns:
        Non-negative distance
    """
    t1 = (lat1 - lat2) * (lat1 - lat2)
    t2 = (long1 - long2) * (long1 - long2)
    return math.sqrt(t1 + t2)

def distance(a: Coordinate, b: Coordinate) -> float:
    """Distance between two (latitude, longitude) pairs."""
    return calculate_distance(a[0], a[1], b[0], b[1])

def is_eligible(user, store, radius: float = ELIGIBILITY_RADIUS) -> bool:
    """Check whether a store is close enough for the user to order from.

    Args:
        user: Object exposing ``coordinates``
        store: Object exposing ``coordinates``
        radius: Maximum distance, inclusive

    Returns:
        True if the store lies within the radius
    """
    return distance(user.coordinates, store.coordinates) <= radius

def stores_within_radius(user, stores: Iterable, radius: float = ELIGIBILITY_RADIUS) -> List:
    """Filter stores down to the ones the user may order from."""
    return [store for store in stores if is_eligible(user, store, radius)]

from .geo import (
    ELIGIBILITY_RADIUS, calculate_distance, distance,
    is_eligible, stores_within_radius
)
from .permissions import Capability, ROLE_CAPABILITIES, capabilities_for, has_capability

__all__ = [
    'ELIGIBILITY_RADIUS',
    'calculate_distance',
    'distance',
    'is_eligible',
    'stores_within_radius',
    'Capability',
    'ROLE_CAPABILITIES',
    'capabilities_for',
    'has_capability'
]

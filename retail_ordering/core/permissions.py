# retail_ordering/core/permissions.py
import enum
from typing import Dict, FrozenSet

from ..models import UserRole

class Capability(enum.Enum):
    BROWSE_CATALOG = 'browse_catalog'
    PLACE_ORDER = 'place_order'
    VIEW_OWN_ORDERS = 'view_own_orders'
    UPDATE_OWN_STORE_PRODUCT = 'update_own_store_product'
    VIEW_STORE_ANALYTICS = 'view_store_analytics'
    REQUEST_SUPPLY = 'request_supply'
    UPDATE_ANY_PRODUCT = 'update_any_product'
    MANAGE_USERS = 'manage_users'
    MANAGE_PRODUCTS = 'manage_products'

_CUSTOMER = frozenset({
    Capability.BROWSE_CATALOG,
    Capability.PLACE_ORDER,
    Capability.VIEW_OWN_ORDERS,
})

_MANAGER = _CUSTOMER | frozenset({
    Capability.UPDATE_OWN_STORE_PRODUCT,
    Capability.VIEW_STORE_ANALYTICS,
    Capability.REQUEST_SUPPLY,
})

# Admins keep the catalog/CRUD side but not the store-scoped manager screens
_ADMIN = _CUSTOMER | frozenset({
    Capability.UPDATE_ANY_PRODUCT,
    Capability.MANAGE_USERS,
    Capability.MANAGE_PRODUCTS,
})

ROLE_CAPABILITIES: Dict[UserRole, FrozenSet[Capability]] = {
    UserRole.CUSTOMER: _CUSTOMER,
    UserRole.MANAGER: _MANAGER,
    UserRole.ADMIN: _ADMIN,
}

def capabilities_for(role: UserRole) -> FrozenSet[Capability]:
    """Get the capabilities granted to a role."""
    return ROLE_CAPABILITIES.get(role, frozenset())

def has_capability(role: UserRole, capability: Capability) -> bool:
    """Check whether a role grants a capability."""
    return capability in capabilities_for(role)

from .access_service import AccessService
from .catalog_service import CatalogService
from .inventory_service import InventoryService
from .order_service import OrderService
from .supply_service import SupplyService
from .admin_service import AdminService
from .auth_service import AuthService
from .reporting_service import ReportingService

__all__ = [
    'AccessService',
    'CatalogService',
    'InventoryService',
    'OrderService',
    'SupplyService',
    'AdminService',
    'AuthService',
    'ReportingService'
]

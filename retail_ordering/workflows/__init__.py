from .base import UserContext, Workflow
from .order_workflow import OrderWorkflow, OrderState
from .product_update_workflow import ProductUpdateWorkflow
from .supply_workflow import SupplyRequestWorkflow
from .admin_workflow import AdminWorkflow
from .reports import ReportViews

__all__ = [
    'UserContext',
    'Workflow',
    'OrderWorkflow',
    'OrderState',
    'ProductUpdateWorkflow',
    'SupplyRequestWorkflow',
    'AdminWorkflow',
    'ReportViews'
]

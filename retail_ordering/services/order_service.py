# retail_ordering/services/order_service.py
import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from retail_ordering.config import config
from retail_ordering.models import Order, Store
from retail_ordering.core.geo import is_eligible
from retail_ordering.core.permissions import Capability
from retail_ordering.services.access_service import AccessService
from retail_ordering.services.catalog_service import CatalogService
from retail_ordering.services.inventory_service import InventoryService
from retail_ordering.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

class OrderService:
    """Service for placing customer orders and reading order history."""

    def __init__(self, session: Session):
        """Initialize the order service.

        Args:
            session: Database session
        """
        self.session = session
        self.access = AccessService(session)
        self.catalog = CatalogService(session)
        self.inventory = InventoryService(session)

    def place_order(self, identity: str, store_id: int, product_name: str, units: int) -> Order:
        """Commit an order and its stock decrement.

        Both writes happen in the caller's transaction. The decrement is the
        conditional update of ``InventoryService.apply_delta``; if stock moved
        since the customer saw it and is now too low, nothing is written and
        InsufficientStockError is raised.

        Args:
            identity: Ordering user
            store_id: Store ID
            product_name: Product name within the store
            units: Units ordered

        Returns:
            The new Order
        """
        customer = self.access.require(identity, Capability.PLACE_ORDER)
        store = self.catalog.validate_store(store_id)

        radius = config.business_rules['eligibility_radius']
        if not is_eligible(customer, store, radius):
            raise InvalidInputError(
                f"Invalid store ID. Store is not within {radius:g} miles.",
                code='STORE_OUT_OF_RANGE',
                details={'store_id': store_id}
            )

        product = self.catalog.validate_product(store_id, product_name)
        self.catalog.validate_stock(product, units)

        remaining = self.inventory.apply_delta(store_id, product_name, -units)

        order = Order(
            customer_id=customer.user_id,
            store_id=store_id,
            product_name=product_name,
            units_ordered=units
        )
        self.session.add(order)
        self.session.flush()

        logger.info(
            f"Order {order.order_number}: {identity} ordered {units} x {product_name} "
            f"at store {store_id}, {remaining} left"
        )
        return order

    def recent_orders(self, identity: str, limit: int = None) -> List[Dict]:
        """Get the most recent orders of a customer.

        Args:
            identity: Customer
            limit: Number of orders, defaults to the configured value

        Returns:
            List of dictionaries, newest first
        """
        customer = self.access.require(identity, Capability.VIEW_OWN_ORDERS)
        if limit is None:
            limit = config.business_rules['recent_orders_limit']

        rows = (
            self.session.query(Order, Store.name)
            .join(Store, Order.store_id == Store.store_id)
            .filter(Order.customer_id == customer.user_id)
            .order_by(Order.order_time.desc(), Order.order_number.desc())
            .limit(limit)
            .all()
        )

        return [
            {
                'order_number': order.order_number,
                'store_id': order.store_id,
                'store_name': store_name,
                'product_name': order.product_name,
                'units_ordered': order.units_ordered,
                'order_time': order.order_time
            }
            for order, store_name in rows
        ]

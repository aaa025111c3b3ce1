# retail_ordering/services/reporting_service.py
import logging
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from retail_ordering.config import config
from retail_ordering.models import Order, Store, User, ProductUpdate
from retail_ordering.core.permissions import Capability
from retail_ordering.services.access_service import AccessService

logger = logging.getLogger(__name__)

class ReportingService:
    """Service for manager analytics, scoped to the stores a manager runs."""

    def __init__(self, session: Session):
        """Initialize the reporting service.

        Args:
            session: Database session
        """
        self.session = session
        self.access = AccessService(session)

    def _manager(self, identity: str) -> User:
        return self.access.require(identity, Capability.VIEW_STORE_ANALYTICS)

    def recent_updates(self, identity: str, limit: int = None) -> List[Dict]:
        """Get the latest product updates authored by a user.

        Args:
            identity: Manager or admin
            limit: Number of rows, defaults to the configured value

        Returns:
            List of dictionaries, newest first
        """
        author = self.access.get_user(identity)
        if limit is None:
            limit = config.business_rules['recent_updates_limit']

        updates = (
            self.session.query(ProductUpdate)
            .filter(ProductUpdate.manager_id == author.user_id)
            .order_by(ProductUpdate.updated_on.desc(), ProductUpdate.update_number.desc())
            .limit(limit)
            .all()
        )

        return [
            {
                'update_number': update.update_number,
                'store_id': update.store_id,
                'product_name': update.product_name,
                'updated_on': update.updated_on
            }
            for update in updates
        ]

    def popular_products(self, identity: str, limit: int = None) -> List[Dict]:
        """Get the most ordered products across the manager's stores.

        Popularity is the number of orders, not the number of units.
        """
        manager = self._manager(identity)
        if limit is None:
            limit = config.business_rules['popular_items_limit']

        order_count = func.count(Order.order_number).label('number_of_orders')
        rows = (
            self.session.query(Order.product_name, order_count)
            .join(Store, Order.store_id == Store.store_id)
            .filter(Store.manager_id == manager.user_id)
            .group_by(Order.product_name)
            .order_by(order_count.desc(), Order.product_name)
            .limit(limit)
            .all()
        )

        return [{'product_name': row.product_name, 'number_of_orders': row.number_of_orders} for row in rows]

    def popular_customers(self, identity: str, limit: int = None) -> List[Dict]:
        """Get the customers with the most orders across the manager's stores."""
        manager = self._manager(identity)
        if limit is None:
            limit = config.business_rules['popular_customers_limit']

        order_count = func.count(Order.order_number).label('number_of_orders')
        rows = (
            self.session.query(User.user_id, User.name, order_count)
            .join(Order, Order.customer_id == User.user_id)
            .join(Store, Order.store_id == Store.store_id)
            .filter(Store.manager_id == manager.user_id)
            .group_by(User.user_id, User.name)
            .order_by(order_count.desc(), User.name)
            .limit(limit)
            .all()
        )

        return [
            {'user_id': row.user_id, 'name': row.name, 'number_of_orders': row.number_of_orders}
            for row in rows
        ]

    def store_orders(self, identity: str) -> List[Dict]:
        """Get every order placed at the manager's stores."""
        manager = self._manager(identity)

        rows = (
            self.session.query(Order, User.name)
            .join(User, Order.customer_id == User.user_id)
            .join(Store, Order.store_id == Store.store_id)
            .filter(Store.manager_id == manager.user_id)
            .order_by(Order.order_time.desc(), Order.order_number.desc())
            .all()
        )

        return [
            {
                'order_number': order.order_number,
                'customer_name': customer_name,
                'store_id': order.store_id,
                'product_name': order.product_name,
                'units_ordered': order.units_ordered,
                'order_time': order.order_time
            }
            for order, customer_name in rows
        ]

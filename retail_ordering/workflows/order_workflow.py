# retail_ordering/workflows/order_workflow.py
"""
Interactive order placement.

The customer walks through store, product and quantity selection; each
selection step repeats until its input is valid. Only the final commit
writes, and it writes the order row and the stock decrement together.
"""
import enum
import logging
from typing import Dict, Optional

from retail_ordering.config import config
from retail_ordering.core.geo import is_eligible
from retail_ordering.core.permissions import Capability
from retail_ordering.services.access_service import AccessService
from retail_ordering.services.catalog_service import CatalogService, check_quantity
from retail_ordering.services.order_service import OrderService
from retail_ordering.utils.validation import parse_int, parse_name
from retail_ordering.exceptions import (
    AccessDeniedError, InsufficientStockError, InvalidInputError,
    NotFoundError, PersistenceError, RetailError
)
from .base import Workflow

logger = logging.getLogger(__name__)

class OrderState(enum.Enum):
    SELECT_STORE = 'select_store'
    SELECT_PRODUCT = 'select_product'
    SELECT_QUANTITY = 'select_quantity'
    COMMIT = 'commit'
    DONE = 'done'
    FAILED = 'failed'

class OrderWorkflow(Workflow):
    """State machine turning a customer's choices into a committed order."""

    def __init__(self, context, terminal, database=None):
        super().__init__(context, terminal, database)
        self.state = OrderState.SELECT_STORE
        self.store_id: Optional[int] = None
        self.product_name: Optional[str] = None
        # Stock as read when the product was chosen; the quantity is checked against it
        self.available_units: Optional[int] = None
        self.units: Optional[int] = None
        self.order_number: Optional[int] = None

    def run(self) -> Optional[Dict]:
        """Run the workflow to completion.

        Returns:
            Dictionary describing the order, or None if nothing was ordered
        """
        handlers = {
            OrderState.SELECT_STORE: self.select_store,
            OrderState.SELECT_PRODUCT: self.select_product,
            OrderState.SELECT_QUANTITY: self.select_quantity,
            OrderState.COMMIT: self.commit,
        }

        try:
            with self.scope() as session:
                AccessService(session).require(self.identity, Capability.PLACE_ORDER)
        except (AccessDeniedError, NotFoundError) as e:
            self.fail(e)
            return None

        while self.state not in (OrderState.DONE, OrderState.FAILED):
            self.state = handlers[self.state]()

        if self.state == OrderState.FAILED:
            return None

        self.say(f"\tOrder for {self.units} items of {self.product_name} has been confirmed. ")
        return {
            'order_number': self.order_number,
            'store_id': self.store_id,
            'product_name': self.product_name,
            'units_ordered': self.units
        }

    def select_store(self) -> OrderState:
        try:
            store_id = parse_int(self.terminal.read_line("\tEnter store ID: "), 'store ID')
            with self.scope() as session:
                customer = AccessService(session).get_user(self.identity)
                store = CatalogService(session).validate_store(store_id)
                radius = config.business_rules['eligibility_radius']
                if not is_eligible(customer, store, radius):
                    raise InvalidInputError(f"Invalid store ID. Store is not within {radius:g} miles. ")
        except (InvalidInputError, NotFoundError) as e:
            self.say(f"\t{e.message}")
            return OrderState.SELECT_STORE

        self.store_id = store_id
        return OrderState.SELECT_PRODUCT

    def select_product(self) -> OrderState:
        try:
            product_name = parse_name(self.terminal.read_line("\tEnter product name: "), 'product name')
            with self.scope() as session:
                product = CatalogService(session).validate_product(self.store_id, product_name)
                available_units = product.number_of_units
        except (InvalidInputError, NotFoundError) as e:
            self.say(f"\t{e.message}")
            return OrderState.SELECT_PRODUCT

        if available_units <= 0:
            self.say("\tThe store is out of stock on this product. Please choose another product. ")
            return OrderState.SELECT_PRODUCT

        self.product_name = product_name
        self.available_units = available_units
        return OrderState.SELECT_QUANTITY

    def select_quantity(self) -> OrderState:
        try:
            units = parse_int(self.terminal.read_line("\tEnter number of units: "), 'number of units')
            check_quantity(units, self.available_units)
        except (InvalidInputError, InsufficientStockError) as e:
            self.say(f"\t{e.message}")
            return OrderState.SELECT_QUANTITY

        self.units = units
        return OrderState.COMMIT

    def commit(self) -> OrderState:
        try:
            with self.scope() as session:
                order = OrderService(session).place_order(
                    self.identity, self.store_id, self.product_name, self.units
                )
                self.order_number = order.order_number
        except InsufficientStockError as e:
            # Stock moved between selection and commit
            logger.warning(f"Order by {self.identity} not placed: {e}")
            self.say(f"\tOrder not placed. {e.message}")
            return OrderState.FAILED
        except PersistenceError as e:
            logger.error(f"Order by {self.identity} not placed: {e}")
            self.say("\tOrder not placed. The order could not be saved, please try again later.")
            return OrderState.FAILED
        except RetailError as e:
            self.say(f"\tOrder not placed. {e.message}")
            return OrderState.FAILED

        return OrderState.DONE

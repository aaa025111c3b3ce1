# retail_ordering/workflows/product_update_workflow.py
import logging
from typing import Optional

from retail_ordering.core.permissions import Capability, has_capability
from retail_ordering.services.access_service import AccessService
from retail_ordering.services.catalog_service import CatalogService
from retail_ordering.services.inventory_service import InventoryService
from retail_ordering.utils.validation import (
    parse_int, parse_name, parse_non_negative_int, parse_non_negative_float
)
from retail_ordering.exceptions import (
    AccessDeniedError, InvalidInputError, NotFoundError, RetailError
)
from .base import Workflow

logger = logging.getLogger(__name__)

CHANGE_UNITS = 1
CHANGE_PRICE = 2

class ProductUpdateWorkflow(Workflow):
    """Manager/admin change of a product's unit count or price.

    Managers are limited to the stores they run; admins may pick any store.
    """

    def run(self) -> Optional[float]:
        """Run the workflow.

        Returns:
            The new unit count or price, or None if nothing changed
        """
        try:
            with self.scope() as session:
                role = AccessService(session).role_of(self.identity)
            if not (has_capability(role, Capability.UPDATE_ANY_PRODUCT)
                    or has_capability(role, Capability.UPDATE_OWN_STORE_PRODUCT)):
                raise AccessDeniedError("You must be a manager or an admin to update products information. ")

            store_id = self._select_store()
        except (AccessDeniedError, NotFoundError) as e:
            self.fail(e)
            return None

        product_name = self._select_product(store_id)

        selection = self.terminal.ask(
            "\t1. Change number of units.\n\t2. Change the price per unit. \n\tEnter your selection: ",
            self._parse_selection
        )

        try:
            if selection == CHANGE_UNITS:
                units = self.terminal.ask("\tEnter new amount of units: ",
                                          lambda v: parse_non_negative_int(v, 'number of units'))
                with self.scope() as session:
                    result = InventoryService(session).update_units(self.identity, store_id, product_name, units)
                self.say("Product quantity Updated. ")
            else:
                price = self.terminal.ask(f"\tEnter new price per unit for {product_name}: ",
                                          lambda v: parse_non_negative_float(v, 'price per unit'))
                with self.scope() as session:
                    result = InventoryService(session).update_price(self.identity, store_id, product_name, price)
                self.say("Product price updated. ")
        except RetailError as e:
            logger.warning(f"Product update by {self.identity} failed: {e}")
            self.fail(e)
            return None

        return result

    @staticmethod
    def _parse_selection(value: str) -> int:
        selection = parse_int(value, 'selection')
        if selection not in (CHANGE_UNITS, CHANGE_PRICE):
            raise InvalidInputError("Invalid selection. Choose 1 or 2.")
        return selection

    def _select_store(self) -> int:
        """Ask for a store the user may edit.

        An unknown store is asked again; a store a manager does not run
        ends the workflow with AccessDeniedError.
        """
        while True:
            try:
                store_id = parse_int(self.terminal.read_line("\tEnter store ID: "), 'store ID')
                with self.scope() as session:
                    access = AccessService(session)
                    user = access.get_user(self.identity)
                    if has_capability(user.role, Capability.UPDATE_ANY_PRODUCT):
                        CatalogService(session).validate_store(store_id)
                    else:
                        access.require_store_manager(self.identity, Capability.UPDATE_OWN_STORE_PRODUCT, store_id)
                return store_id
            except InvalidInputError as e:
                self.say(f"\t{e.message}")
            except NotFoundError as e:
                if e.code == 'USER_NOT_FOUND':
                    raise
                self.say(f"\t{e.message}")

    def _select_product(self, store_id: int) -> str:
        while True:
            try:
                product_name = parse_name(self.terminal.read_line("\tEnter product name: "), 'product name')
                with self.scope() as session:
                    CatalogService(session).validate_product(store_id, product_name)
                return product_name
            except (InvalidInputError, NotFoundError) as e:
                self.say(f"\t{e.message}")

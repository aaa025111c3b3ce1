# retail_ordering/workflows/supply_workflow.py
import logging
from typing import Optional

from retail_ordering.core.permissions import Capability
from retail_ordering.services.access_service import AccessService
from retail_ordering.services.catalog_service import CatalogService
from retail_ordering.services.supply_service import SupplyService
from retail_ordering.utils.validation import parse_int, parse_name, parse_positive_int
from retail_ordering.exceptions import (
    AccessDeniedError, InvalidInputError, NotFoundError, RetailError
)
from .base import Workflow

logger = logging.getLogger(__name__)

class SupplyRequestWorkflow(Workflow):
    """Manager restock request: store, product, units, warehouse, commit."""

    def run(self) -> Optional[int]:
        """Run the workflow.

        Returns:
            ID of the new supply request, or None if nothing was filed
        """
        try:
            with self.scope() as session:
                AccessService(session).require(self.identity, Capability.REQUEST_SUPPLY)
            store_id = self._select_store()
        except (AccessDeniedError, NotFoundError) as e:
            self.fail(e)
            return None

        product_name = self._select_product(store_id)
        units = self.terminal.ask("\tEnter units: ", lambda v: parse_positive_int(v, 'number of units'))
        warehouse_id = self._select_warehouse()

        try:
            with self.scope() as session:
                supply_request = SupplyService(session).request_supply(
                    self.identity, store_id, product_name, warehouse_id, units
                )
                request_id = supply_request.request_id
        except RetailError as e:
            logger.warning(f"Supply request by {self.identity} failed: {e}")
            self.fail(e)
            return None

        self.say("\tRequest placed.\n")
        return request_id

    def _select_store(self) -> int:
        """Ask for a store the manager runs.

        An unknown store is asked again; someone else's store ends the
        workflow with AccessDeniedError.
        """
        while True:
            try:
                store_id = parse_int(self.terminal.read_line("\tEnter store ID: "), 'store ID')
                with self.scope() as session:
                    AccessService(session).require_store_manager(self.identity, Capability.REQUEST_SUPPLY, store_id)
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

    def _select_warehouse(self) -> int:
        while True:
            try:
                warehouse_id = parse_int(self.terminal.read_line("\tEnter warehouse ID: "), 'warehouse ID')
                with self.scope() as session:
                    CatalogService(session).validate_warehouse(warehouse_id)
                return warehouse_id
            except (InvalidInputError, NotFoundError) as e:
                self.say(f"\t{e.message}")

# retail_ordering/services/supply_service.py
import logging

from sqlalchemy.orm import Session

from retail_ordering.models import SupplyRequest
from retail_ordering.core.permissions import Capability
from retail_ordering.services.access_service import AccessService
from retail_ordering.services.catalog_service import CatalogService
from retail_ordering.services.inventory_service import InventoryService
from retail_ordering.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

class SupplyService:
    """Service for manager restock requests against warehouses."""

    def __init__(self, session: Session):
        """Initialize the supply service.

        Args:
            session: Database session
        """
        self.session = session
        self.access = AccessService(session)
        self.catalog = CatalogService(session)
        self.inventory = InventoryService(session)

    def request_supply(
        self,
        identity: str,
        store_id: int,
        product_name: str,
        warehouse_id: int,
        units: int
    ) -> SupplyRequest:
        """File a supply request and add the units to the store's stock.

        There is no separate fulfilment step: the stock is increased as soon
        as the request is recorded, in the same transaction.

        Args:
            identity: Requesting manager
            store_id: Store ID, must be managed by the requester
            product_name: Product name within the store
            warehouse_id: Warehouse supplying the units
            units: Units requested

        Returns:
            The new SupplyRequest
        """
        manager = self.access.require_store_manager(identity, Capability.REQUEST_SUPPLY, store_id)
        self.catalog.validate_product(store_id, product_name)

        if units <= 0:
            raise InvalidInputError("Please enter a number of units bigger than 0.", code='NOT_POSITIVE')

        self.catalog.validate_warehouse(warehouse_id)

        supply_request = SupplyRequest(
            manager_id=manager.user_id,
            warehouse_id=warehouse_id,
            store_id=store_id,
            product_name=product_name,
            units_requested=units
        )
        self.session.add(supply_request)
        self.session.flush()

        new_units = self.inventory.apply_delta(store_id, product_name, units)

        logger.info(
            f"Supply request {supply_request.request_id}: {identity} requested {units} x {product_name} "
            f"for store {store_id} from warehouse {warehouse_id}, stock now {new_units}"
        )
        return supply_request

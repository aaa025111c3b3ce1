# retail_ordering/services/inventory_service.py
import logging

from sqlalchemy import and_, update
from sqlalchemy.orm import Session

from retail_ordering.models import Product, ProductUpdate, User
from retail_ordering.services.access_service import AccessService
from retail_ordering.services.catalog_service import CatalogService
from retail_ordering.exceptions import InsufficientStockError, InvalidInputError

logger = logging.getLogger(__name__)

class InventoryService:
    """Service for every write to a product's stock or price.

    All methods work inside the caller's session; the caller's
    ``session_scope`` decides the transaction boundary, so a stock write and
    its paired insert (order, audit or supply row) commit or roll back
    together.
    """

    def __init__(self, session: Session):
        """Initialize the inventory service.

        Args:
            session: Database session
        """
        self.session = session
        self.access = AccessService(session)
        self.catalog = CatalogService(session)

    @staticmethod
    def _product_key(store_id: int, product_name: str):
        return and_(Product.store_id == store_id, Product.product_name == product_name)

    def _refresh(self, store_id: int, product_name: str) -> Product:
        # The UPDATE bypasses the identity map, so reload any cached copy
        return self.session.get(Product, (store_id, product_name), populate_existing=True)

    def apply_delta(self, store_id: int, product_name: str, delta: int) -> int:
        """Add ``delta`` units to a product's stock.

        The check and the write are a single conditional UPDATE, so two
        sessions racing on the same row can never drive it negative: the
        second one simply matches no row.

        Args:
            store_id: Store ID
            product_name: Product name within the store
            delta: Units to add (negative for an order decrement)

        Returns:
            New unit count

        Raises:
            NotFoundError if the product does not exist
            InsufficientStockError if the result would be negative
        """
        stmt = (
            update(Product)
            .where(
                self._product_key(store_id, product_name),
                Product.number_of_units + delta >= 0
            )
            .values(number_of_units=Product.number_of_units + delta)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)

        if result.rowcount == 0:
            # Nothing matched: either no such product or not enough stock
            self.catalog.validate_product(store_id, product_name)
            available = self._refresh(store_id, product_name).number_of_units
            logger.warning(
                f"Rejected stock change of {delta} for {product_name} at store {store_id}: "
                f"{available} units available"
            )
            raise InsufficientStockError(
                "Invalid number of units. Store does not carry enough in stock.",
                code='NOT_ENOUGH_STOCK',
                details={'available': available, 'delta': delta}
            )

        new_units = self._refresh(store_id, product_name).number_of_units
        logger.info(f"Stock of {product_name} at store {store_id} changed by {delta} to {new_units}")
        return new_units

    def _record_update(self, actor: User, store_id: int, product_name: str) -> ProductUpdate:
        """Append the audit row for a manager/admin change."""
        product_update = ProductUpdate(
            manager_id=actor.user_id,
            store_id=store_id,
            product_name=product_name
        )
        self.session.add(product_update)
        self.session.flush()
        return product_update

    def update_units(self, identity: str, store_id: int, product_name: str, units: int) -> int:
        """Set the unit count of a product and record who did it.

        Args:
            identity: Acting manager or admin
            store_id: Store ID
            product_name: Product name within the store
            units: New absolute unit count

        Returns:
            New unit count
        """
        actor = self.access.require_product_editor(identity, store_id)

        if units < 0:
            raise InvalidInputError("The number of units cannot be negative.", code='NEGATIVE')

        product = self.catalog.validate_product(store_id, product_name)
        product.number_of_units = units
        self.session.flush()

        self._record_update(actor, store_id, product_name)
        logger.info(f"{identity} set units of {product_name} at store {store_id} to {units}")
        return product.number_of_units

    def update_price(self, identity: str, store_id: int, product_name: str, price: float) -> float:
        """Set the price per unit of a product and record who did it.

        Args:
            identity: Acting manager or admin
            store_id: Store ID
            product_name: Product name within the store
            price: New price per unit

        Returns:
            New price per unit
        """
        actor = self.access.require_product_editor(identity, store_id)

        if price < 0:
            raise InvalidInputError("The price per unit cannot be negative.", code='NEGATIVE')

        product = self.catalog.validate_product(store_id, product_name)
        product.price_per_unit = price
        self.session.flush()

        self._record_update(actor, store_id, product_name)
        logger.info(f"{identity} set price of {product_name} at store {store_id} to {price}")
        return product.price_per_unit

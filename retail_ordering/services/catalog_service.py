# retail_ordering/services/catalog_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from retail_ordering.models import Store, Product, Warehouse, User
from retail_ordering.core.geo import ELIGIBILITY_RADIUS, stores_within_radius
from retail_ordering.exceptions import AccessDeniedError, NotFoundError, InsufficientStockError

def check_quantity(requested_units: int, available_units: int) -> None:
    """Check a requested quantity against a known unit count.

    Raises:
        InsufficientStockError if the quantity is not positive or exceeds stock
    """
    if requested_units <= 0:
        raise InsufficientStockError("Please enter a number bigger than 0.", code='NOT_POSITIVE')

    if requested_units > available_units:
        raise InsufficientStockError(
            "Invalid number of units. Store does not carry enough in stock.",
            code='NOT_ENOUGH_STOCK',
            details={'available': available_units, 'requested': requested_units}
        )

class CatalogService:
    """Service for store, product and warehouse lookups."""

    def __init__(self, session: Session):
        """Initialize the catalog service.

        Args:
            session: Database session
        """
        self.session = session

    def get_store(self, store_id: int) -> Optional[Store]:
        """Get a store by ID.

        Args:
            store_id: Store ID

        Returns:
            Store object or None if not found
        """
        return self.session.get(Store, store_id)

    def get_stores(self) -> List[Store]:
        return self.session.query(Store).order_by(Store.store_id).all()

    def stores_near(self, user: User, radius: float = ELIGIBILITY_RADIUS) -> List[Store]:
        """Get the stores within ordering distance of a user."""
        return stores_within_radius(user, self.get_stores(), radius)

    def get_products(self, store_id: int) -> List[Product]:
        """Get all products sold by a store.

        Args:
            store_id: Store ID

        Returns:
            List of product objects
        """
        return (
            self.session.query(Product)
            .filter(Product.store_id == store_id)
            .order_by(Product.product_name)
            .all()
        )

    def validate_store(self, store_id: int) -> Store:
        """Get a store or raise NotFoundError."""
        store = self.get_store(store_id)
        if not store:
            raise NotFoundError(f"Invalid store ID {store_id}.", code='STORE_NOT_FOUND')
        return store

    def validate_product(self, store_id: int, product_name: str) -> Product:
        """Get a product of a store or raise NotFoundError.

        Product names are only unique inside a store, so both parts of the
        key are required.
        """
        product = self.session.get(Product, (store_id, product_name))
        if not product:
            raise NotFoundError(
                f"Invalid product name {product_name}. Store does not carry this product.",
                code='PRODUCT_NOT_FOUND'
            )
        return product

    @staticmethod
    def validate_stock(product: Product, requested_units: int) -> None:
        """Check a requested quantity against a stock snapshot.

        Args:
            product: Product as last read
            requested_units: Units the customer asked for

        Raises:
            InsufficientStockError if the quantity is not positive or exceeds stock
        """
        check_quantity(requested_units, product.number_of_units)

    def validate_managed_store(self, manager: User, store_id: int) -> Store:
        """Get a store the manager runs or raise AccessDeniedError.

        An unknown store raises NotFoundError. The store list is read from
        the database, never taken from the caller.
        """
        store = self.validate_store(store_id)
        if store_id not in {managed.store_id for managed in manager.stores}:
            raise AccessDeniedError(
                "Invalid store ID. You do not manage this store.",
                code='NOT_STORE_MANAGER',
                details={'identity': manager.name, 'store_id': store_id}
            )
        return store

    def validate_warehouse(self, warehouse_id: int) -> Warehouse:
        warehouse = self.session.get(Warehouse, warehouse_id)
        if not warehouse:
            raise NotFoundError(f"Invalid warehouse ID {warehouse_id}.", code='WAREHOUSE_NOT_FOUND')
        return warehouse

    def validate_user(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if not user:
            raise NotFoundError(f"Invalid userID {user_id}.", code='USER_NOT_FOUND')
        return user

    def validate_user_name(self, name: str) -> User:
        user = self.session.query(User).filter(User.name == name).first()
        if not user:
            raise NotFoundError(f"Invalid user name {name}.", code='USER_NOT_FOUND')
        return user

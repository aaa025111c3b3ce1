# retail_ordering/services/admin_service.py
import logging
from typing import List

from sqlalchemy.orm import Session

from retail_ordering.models import (
    User, Product, Order, Store, ProductUpdate, SupplyRequest, UserRole
)
from retail_ordering.core.permissions import Capability
from retail_ordering.services.access_service import AccessService
from retail_ordering.services.catalog_service import CatalogService
from retail_ordering.services.inventory_service import InventoryService
from retail_ordering.utils.validation import validate_user, validate_product
from retail_ordering.exceptions import DuplicateError, InvalidInputError

logger = logging.getLogger(__name__)

class AdminService:
    """Service for admin maintenance of users and products.

    Every method re-checks the caller's capability before touching anything.
    """

    def __init__(self, session: Session):
        """Initialize the admin service.

        Args:
            session: Database session
        """
        self.session = session
        self.access = AccessService(session)
        self.catalog = CatalogService(session)
        self.inventory = InventoryService(session)

    # Users

    def find_users_by_name(self, identity: str, name: str) -> List[User]:
        self.access.require(identity, Capability.MANAGE_USERS)
        self.catalog.validate_user_name(name)
        return self.session.query(User).filter(User.name == name).all()

    def list_users(self, identity: str) -> List[User]:
        self.access.require(identity, Capability.MANAGE_USERS)
        return self.session.query(User).order_by(User.user_id).all()

    def create_user(
        self,
        identity: str,
        name: str,
        password: str,
        latitude: float,
        longitude: float,
        role: UserRole
    ) -> User:
        """Insert a user with any role.

        Args:
            identity: Acting admin
            name: Unique user name
            password: Password
            latitude: Latitude
            longitude: Longitude
            role: Role of the new user

        Returns:
            The new User
        """
        self.access.require(identity, Capability.MANAGE_USERS)

        if self.session.query(User).filter(User.name == name).first():
            raise DuplicateError(f"User name {name} is already taken", code='USER_EXISTS')

        user = User(name=name, password=password, latitude=latitude, longitude=longitude, type=role.value)
        errors = validate_user(user)
        if errors:
            raise InvalidInputError("Invalid user", code='INVALID_USER', details=errors)

        self.session.add(user)
        self.session.flush()

        logger.info(f"{identity} created user {name} ({role.value})")
        return user

    def delete_user(self, identity: str, user_id: int) -> None:
        """Delete a user that nothing else refers to.

        Orders, managed stores, audit rows and supply requests keep their
        author, so a user that still has any of them cannot be deleted.
        """
        self.access.require(identity, Capability.MANAGE_USERS)
        user = self.catalog.validate_user(user_id)

        references = {
            'orders': self.session.query(Order).filter(Order.customer_id == user_id).count(),
            'stores': self.session.query(Store).filter(Store.manager_id == user_id).count(),
            'product_updates': self.session.query(ProductUpdate).filter(ProductUpdate.manager_id == user_id).count(),
            'supply_requests': self.session.query(SupplyRequest).filter(SupplyRequest.manager_id == user_id).count(),
        }
        references = {table: count for table, count in references.items() if count}
        if references:
            raise InvalidInputError(
                f"User {user_id} is still referenced and cannot be deleted",
                code='USER_REFERENCED',
                details=references
            )

        self.session.delete(user)
        self.session.flush()
        logger.info(f"{identity} deleted user {user.name} (user {user_id})")

    def update_user_name(self, identity: str, user_id: int, new_name: str) -> User:
        """Rename a user other than the acting admin.

        The logged-in session is keyed by name, so an admin renaming
        themselves would lose it.
        """
        admin = self.access.require(identity, Capability.MANAGE_USERS)
        user = self.catalog.validate_user(user_id)
        if user.user_id == admin.user_id:
            raise InvalidInputError("You cannot rename the account you are logged in with.", code='SELF_RENAME')

        clash = self.session.query(User).filter(User.name == new_name, User.user_id != user_id).first()
        if clash:
            raise DuplicateError(f"User name {new_name} is already taken", code='USER_EXISTS')

        old_name = user.name
        user.name = new_name
        self.session.flush()
        logger.info(f"{identity} renamed user {user_id} from {old_name} to {new_name}")
        return user

    def update_user_password(self, identity: str, user_id: int, new_password: str) -> User:
        self.access.require(identity, Capability.MANAGE_USERS)
        user = self.catalog.validate_user(user_id)
        user.password = new_password
        self.session.flush()
        logger.info(f"{identity} changed the password of user {user_id}")
        return user

    def update_user_location(self, identity: str, user_id: int, latitude: float, longitude: float) -> User:
        self.access.require(identity, Capability.MANAGE_USERS)
        user = self.catalog.validate_user(user_id)
        user.latitude = latitude
        user.longitude = longitude
        self.session.flush()
        logger.info(f"{identity} moved user {user_id} to ({latitude}, {longitude})")
        return user

    def update_user_role(self, identity: str, user_id: int, role: UserRole) -> User:
        """Change the role of a user.

        Takes effect on the user's next operation since roles are never cached.
        """
        self.access.require(identity, Capability.MANAGE_USERS)
        if not isinstance(role, UserRole):
            raise InvalidInputError(
                "Invalid user type. Choose either manager, customer, or admin",
                code='INVALID_ROLE'
            )

        user = self.catalog.validate_user(user_id)
        user.role = role
        self.session.flush()
        logger.info(f"{identity} changed the type of user {user_id} to {role.value}")
        return user

    # Products

    def create_product(
        self,
        identity: str,
        store_id: int,
        product_name: str,
        units: int,
        price: float
    ) -> Product:
        """Add a product to a store's catalog.

        Args:
            identity: Acting admin
            store_id: Store ID
            product_name: Name, unique within the store
            units: Initial unit count
            price: Price per unit

        Returns:
            The new Product
        """
        self.access.require(identity, Capability.MANAGE_PRODUCTS)
        self.catalog.validate_store(store_id)

        if self.session.get(Product, (store_id, product_name)):
            raise DuplicateError(
                f"Store {store_id} already carries {product_name}",
                code='PRODUCT_EXISTS'
            )

        product = Product(
            store_id=store_id,
            product_name=product_name,
            number_of_units=units,
            price_per_unit=price
        )
        errors = validate_product(product)
        if errors:
            raise InvalidInputError("Invalid product", code='INVALID_PRODUCT', details=errors)

        self.session.add(product)
        self.session.flush()
        logger.info(f"{identity} added {product_name} to store {store_id} ({units} units at {price})")
        return product

    def delete_product(self, identity: str, store_id: int, product_name: str) -> None:
        self.access.require(identity, Capability.MANAGE_PRODUCTS)
        self.catalog.validate_store(store_id)
        product = self.catalog.validate_product(store_id, product_name)

        self.session.delete(product)
        self.session.flush()
        logger.info(f"{identity} removed {product_name} from store {store_id}")

    def update_product_units(self, identity: str, store_id: int, product_name: str, units: int) -> int:
        """Set a product's unit count in any store."""
        self.access.require(identity, Capability.UPDATE_ANY_PRODUCT)
        self.catalog.validate_store(store_id)
        return self.inventory.update_units(identity, store_id, product_name, units)

    def update_product_price(self, identity: str, store_id: int, product_name: str, price: float) -> float:
        """Set a product's price in any store."""
        self.access.require(identity, Capability.UPDATE_ANY_PRODUCT)
        self.catalog.validate_store(store_id)
        return self.inventory.update_price(identity, store_id, product_name, price)

# retail_ordering/models.py
from sqlalchemy import (
    Column, Integer, String, Float, Date, DateTime, ForeignKey,
    CheckConstraint, Index
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func
import enum

Base = declarative_base()

class UserRole(enum.Enum):
    """Enum for user capability tiers.

    Values:
        CUSTOMER ('customer'): browses stores and places orders
        MANAGER ('manager'): maintains the inventory of the stores it manages
        ADMIN ('admin'): maintains users and products of every store
    """
    CUSTOMER = 'customer'
    MANAGER = 'manager'
    ADMIN = 'admin'

    def __str__(self):
        """Return the string value of the enum."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> 'UserRole':
        """Create a UserRole from a string value.

        Args:
            value: String value ('customer', 'manager', 'admin')

        Returns:
            UserRole enum value

        Raises:
            ValueError if the string value is not valid
        """
        try:
            return cls((value or '').strip().lower())
        except ValueError:
            raise ValueError(f"Invalid user type: {value}. Valid values are: customer, manager, admin")

class User(Base):
    __tablename__ = 'users'

    user_id = Column(Integer, primary_key=True)
    name = Column(String(50), nullable=False, unique=True)
    # Stored as entered, no hashing
    password = Column(String(50), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    type = Column(String(8), nullable=False, default=UserRole.CUSTOMER.value)

    stores = relationship("Store", back_populates="manager")
    orders = relationship("Order", back_populates="customer")

    @property
    def role(self) -> UserRole:
        """Get the user type as an enum value."""
        return UserRole.from_string(self.type)

    @role.setter
    def role(self, value: UserRole):
        """Set the user type from an enum value."""
        self.type = value.value

    @property
    def coordinates(self):
        return (self.latitude, self.longitude)

class Store(Base):
    __tablename__ = 'store'

    store_id = Column(Integer, primary_key=True)
    name = Column(String(30), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    manager_id = Column(Integer, ForeignKey('users.user_id'))
    date_established = Column(Date)

    manager = relationship("User", back_populates="stores")
    products = relationship("Product", back_populates="store")

    @property
    def coordinates(self):
        return (self.latitude, self.longitude)

class Product(Base):
    """Stock line of one store; the product name is only unique per store."""
    __tablename__ = 'product'

    store_id = Column(Integer, ForeignKey('store.store_id'), primary_key=True)
    product_name = Column(String(30), primary_key=True)
    number_of_units = Column(Integer, nullable=False, default=0)
    price_per_unit = Column(Float, nullable=False, default=0.0)

    store = relationship("Store", back_populates="products")

    __table_args__ = (
        CheckConstraint('number_of_units >= 0', name='ck_product_units_non_negative'),
        CheckConstraint('price_per_unit >= 0', name='ck_product_price_non_negative'),
    )

class Order(Base):
    """One product line ordered by a customer; never updated after insert."""
    __tablename__ = 'orders'

    order_number = Column(Integer, primary_key=True)
    customer_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)
    store_id = Column(Integer, ForeignKey('store.store_id'), nullable=False)
    product_name = Column(String(30), nullable=False)
    units_ordered = Column(Integer, nullable=False)
    order_time = Column(DateTime, nullable=False, server_default=func.now())

    customer = relationship("User", back_populates="orders")
    store = relationship("Store")

    __table_args__ = (
        CheckConstraint('units_ordered > 0', name='ck_order_units_positive'),
        Index('ix_orders_customer_time', 'customer_id', 'order_time'),
        Index('ix_orders_store', 'store_id'),
    )

class ProductUpdate(Base):
    """Audit row appended for every manager or admin stock/price change."""
    __tablename__ = 'product_updates'

    update_number = Column(Integer, primary_key=True)
    manager_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)
    store_id = Column(Integer, nullable=False)
    product_name = Column(String(30), nullable=False)
    updated_on = Column(DateTime, nullable=False, server_default=func.now())

    manager = relationship("User")

    __table_args__ = (
        Index('ix_product_updates_manager_time', 'manager_id', 'updated_on'),
    )

class Warehouse(Base):
    __tablename__ = 'warehouse'

    warehouse_id = Column(Integer, primary_key=True)
    area = Column(Float)
    latitude = Column(Float)
    longitude = Column(Float)

class SupplyRequest(Base):
    __tablename__ = 'product_supply_requests'

    request_id = Column(Integer, primary_key=True)
    manager_id = Column(Integer, ForeignKey('users.user_id'), nullable=False)
    warehouse_id = Column(Integer, ForeignKey('warehouse.warehouse_id'), nullable=False)
    store_id = Column(Integer, ForeignKey('store.store_id'), nullable=False)
    product_name = Column(String(30), nullable=False)
    units_requested = Column(Integer, nullable=False)

    manager = relationship("User")
    warehouse = relationship("Warehouse")

    __table_args__ = (
        CheckConstraint('units_requested > 0', name='ck_supply_units_positive'),
    )

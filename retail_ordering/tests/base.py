"""
Shared fixtures for tests that need a real schema.
"""
import io
import unittest
from datetime import date

from retail_ordering.db import db
from retail_ordering.models import User, Store, Product, Warehouse, UserRole
from retail_ordering.terminal import TerminalIO


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory SQLite schema for every test."""

    connection_string = 'sqlite://'

    def setUp(self):
        """Set up test fixtures."""
        db.initialize(self.connection_string)
        db.create_all_tables()

    def tearDown(self):
        """Tear down test fixtures."""
        db.drop_all_tables()

    def add_user(self, name, role=UserRole.CUSTOMER, latitude=0.0, longitude=0.0, password=None):
        with db.session_scope() as session:
            user = User(
                name=name,
                password=password or name,
                latitude=latitude,
                longitude=longitude,
                type=role.value
            )
            session.add(user)
            session.flush()
            return user.user_id

    def add_store(self, name, latitude=0.0, longitude=0.0, manager_id=None):
        with db.session_scope() as session:
            store = Store(
                name=name,
                latitude=latitude,
                longitude=longitude,
                manager_id=manager_id,
                date_established=date(2020, 1, 1)
            )
            session.add(store)
            session.flush()
            return store.store_id

    def add_product(self, store_id, product_name, units=10, price=1.0):
        with db.session_scope() as session:
            session.add(Product(
                store_id=store_id,
                product_name=product_name,
                number_of_units=units,
                price_per_unit=price
            ))

    def add_warehouse(self, area=1000.0, latitude=0.0, longitude=0.0):
        with db.session_scope() as session:
            warehouse = Warehouse(area=area, latitude=latitude, longitude=longitude)
            session.add(warehouse)
            session.flush()
            return warehouse.warehouse_id

    def product_state(self, store_id, product_name):
        """Return (units, price) as committed."""
        with db.session_scope() as session:
            product = session.get(Product, (store_id, product_name))
            return product.number_of_units, product.price_per_unit

    def count(self, model):
        with db.session_scope() as session:
            return session.query(model).count()


def scripted_terminal(*lines):
    """TerminalIO fed with the given input lines, capturing output."""
    stdin = io.StringIO(''.join(f"{line}\n" for line in lines))
    return TerminalIO(stdin=stdin, stdout=io.StringIO())

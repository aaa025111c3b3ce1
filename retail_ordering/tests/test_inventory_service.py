"""
Tests for manager and admin stock/price changes and their audit rows.
"""
from retail_ordering.db import db
from retail_ordering.models import Product, ProductUpdate, UserRole
from retail_ordering.services.inventory_service import InventoryService
from retail_ordering.exceptions import (
    AccessDeniedError, InsufficientStockError, InvalidInputError, NotFoundError
)
from retail_ordering.tests.base import DatabaseTestCase


class TestInventoryService(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.manager_id = self.add_user('mia', role=UserRole.MANAGER)
        self.other_manager_id = self.add_user('otto', role=UserRole.MANAGER)
        self.add_user('ada', role=UserRole.ADMIN)
        self.add_user('carol')

        self.store_id = self.add_store('Mia Market', manager_id=self.manager_id)
        self.other_store_id = self.add_store('Otto Outlet', manager_id=self.other_manager_id)
        self.add_product(self.store_id, 'Widget', units=10, price=2.0)
        self.add_product(self.other_store_id, 'Widget', units=7, price=3.0)

    def test_manager_updates_units_of_own_store(self):
        with db.session_scope() as session:
            units = InventoryService(session).update_units('mia', self.store_id, 'Widget', 25)

        self.assertEqual(units, 25)
        self.assertEqual(self.product_state(self.store_id, 'Widget'), (25, 2.0))
        with db.session_scope() as session:
            updates = session.query(ProductUpdate).all()
            self.assertEqual(len(updates), 1)
            self.assertEqual(updates[0].manager_id, self.manager_id)
            self.assertEqual(updates[0].store_id, self.store_id)
            self.assertEqual(updates[0].product_name, 'Widget')
            self.assertIsNotNone(updates[0].updated_on)

    def test_manager_updates_price_of_own_store(self):
        with db.session_scope() as session:
            InventoryService(session).update_price('mia', self.store_id, 'Widget', 4.5)

        self.assertEqual(self.product_state(self.store_id, 'Widget'), (10, 4.5))
        self.assertEqual(self.count(ProductUpdate), 1)

    def test_manager_price_on_unmanaged_store_is_denied(self):
        with self.assertRaises(AccessDeniedError) as ctx:
            with db.session_scope() as session:
                InventoryService(session).update_price('mia', self.other_store_id, 'Widget', 0.5)

        self.assertEqual(ctx.exception.code, 'NOT_STORE_MANAGER')
        self.assertEqual(self.product_state(self.other_store_id, 'Widget'), (7, 3.0))
        self.assertEqual(self.count(ProductUpdate), 0)

    def test_admin_updates_any_store(self):
        with db.session_scope() as session:
            InventoryService(session).update_units('ada', self.other_store_id, 'Widget', 0)

        self.assertEqual(self.product_state(self.other_store_id, 'Widget')[0], 0)
        self.assertEqual(self.count(ProductUpdate), 1)

    def test_customer_is_denied(self):
        for change in ('update_units', 'update_price'):
            with self.assertRaises(AccessDeniedError):
                with db.session_scope() as session:
                    getattr(InventoryService(session), change)('carol', self.store_id, 'Widget', 1)

        self.assertEqual(self.product_state(self.store_id, 'Widget'), (10, 2.0))
        self.assertEqual(self.count(ProductUpdate), 0)

    def test_negative_values_are_rejected(self):
        with self.assertRaises(InvalidInputError):
            with db.session_scope() as session:
                InventoryService(session).update_units('mia', self.store_id, 'Widget', -1)

        with self.assertRaises(InvalidInputError):
            with db.session_scope() as session:
                InventoryService(session).update_price('mia', self.store_id, 'Widget', -0.01)

        self.assertEqual(self.product_state(self.store_id, 'Widget'), (10, 2.0))
        self.assertEqual(self.count(ProductUpdate), 0)

    def test_unknown_product(self):
        with self.assertRaises(NotFoundError):
            with db.session_scope() as session:
                InventoryService(session).update_units('mia', self.store_id, 'Gadget', 3)
        self.assertEqual(self.count(ProductUpdate), 0)

    def test_apply_delta(self):
        with db.session_scope() as session:
            inventory = InventoryService(session)
            self.assertEqual(inventory.apply_delta(self.store_id, 'Widget', -10), 0)
            self.assertEqual(inventory.apply_delta(self.store_id, 'Widget', 3), 3)

        self.assertEqual(self.product_state(self.store_id, 'Widget')[0], 3)

    def test_apply_delta_refuses_negative_stock(self):
        with self.assertRaises(InsufficientStockError) as ctx:
            with db.session_scope() as session:
                InventoryService(session).apply_delta(self.store_id, 'Widget', -11)

        self.assertEqual(ctx.exception.details['available'], 10)
        self.assertEqual(self.product_state(self.store_id, 'Widget')[0], 10)

    def test_apply_delta_unknown_product(self):
        with self.assertRaises(NotFoundError):
            with db.session_scope() as session:
                InventoryService(session).apply_delta(self.store_id, 'Gadget', 1)

    def test_apply_delta_refreshes_cached_product(self):
        with db.session_scope() as session:
            product = session.get(Product, (self.store_id, 'Widget'))
            InventoryService(session).apply_delta(self.store_id, 'Widget', -4)
            self.assertEqual(product.number_of_units, 6)

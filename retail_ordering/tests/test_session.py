"""
Tests for the menu loop and the report screens.
"""
from retail_ordering.db import db
from retail_ordering.main import run_session
from retail_ordering.models import Order, User, UserRole
from retail_ordering.tests.base import DatabaseTestCase, scripted_terminal


class TestSession(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.add_user('carol', latitude=5.0, longitude=5.0, password='pw')
        self.store_id = self.add_store('Corner Shop', 0.0, 0.0)
        self.add_store('Far Away', 90.0, 90.0)
        self.add_product(self.store_id, 'Widget', units=10, price=2.0)

    def run_session(self, *lines):
        terminal = scripted_terminal(*lines)
        run_session(terminal, db)
        return terminal.stdout.getvalue()

    def test_register_login_order_and_history(self):
        output = self.run_session(
            1, 'erin', 'secret', '1.0', '1.0',
            2, 'erin', 'secret',
            1,
            3, self.store_id, 'Widget', 2,
            4,
            20,
            9,
        )

        self.assertIn("User successfully created!", output)
        self.assertIn("Corner Shop", output)
        self.assertNotIn("Far Away", output)
        self.assertIn("Order for 2 items of Widget has been confirmed.", output)
        self.assertTrue(output.rstrip().endswith("Bye!"))
        with db.session_scope() as session:
            erin = session.query(User).filter(User.name == 'erin').one()
            self.assertEqual(erin.role, UserRole.CUSTOMER)
            self.assertEqual(session.query(Order).filter(Order.customer_id == erin.user_id).count(), 1)

    def test_wrong_password_stays_in_main_menu(self):
        output = self.run_session(2, 'carol', 'nope', 9)
        self.assertIn("Invalid user name or password", output)
        self.assertNotIn("20. Log out", output)

    def test_denied_operations_return_to_menu(self):
        output = self.run_session(2, 'carol', 'pw', 7, 9, 11, 42, 'x', 20, 9)

        self.assertGreaterEqual(output.count("You do not have access to this feature!"), 3)
        self.assertIn("Unrecognized choice!", output)
        self.assertIn("Your input is invalid!", output)
        self.assertIn("Bye!", output)

    def test_product_list(self):
        output = self.run_session(2, 'carol', 'pw', 2, 'abc', self.store_id, 20, 9)
        self.assertIn("Widget", output)
        self.assertIn("is not a whole number", output)

    def test_end_of_input_ends_session(self):
        output = self.run_session(2, 'carol', 'pw')
        self.assertIn("Bye!", output)

"""
Tests for the interactive admin menu.
"""
from retail_ordering.db import db
from retail_ordering.models import Product, User, UserRole
from retail_ordering.workflows import AdminWorkflow, UserContext
from retail_ordering.tests.base import DatabaseTestCase, scripted_terminal


class TestAdminWorkflow(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.admin_id = self.add_user('ada', role=UserRole.ADMIN)
        self.manager_id = self.add_user('mia', role=UserRole.MANAGER)
        self.customer_id = self.add_user('carol')
        self.store_id = self.add_store('Mia Market', manager_id=self.manager_id)
        self.add_product(self.store_id, 'Widget', units=10, price=2.0)

    def run_workflow(self, identity, *lines):
        terminal = scripted_terminal(*lines)
        result = AdminWorkflow(UserContext(identity), terminal).run()
        return result, terminal.stdout.getvalue()

    def test_change_user_type_reprompts_on_unknown_type(self):
        result, output = self.run_workflow('ada', 2, 999, self.customer_id, 4, 'boss', 'manager')

        self.assertTrue(result)
        self.assertIn("Invalid userID 999.", output)
        self.assertIn("Invalid user type: boss", output)
        with db.session_scope() as session:
            self.assertEqual(session.get(User, self.customer_id).role, UserRole.MANAGER)

    def test_rename_user(self):
        result, output = self.run_workflow('ada', 2, self.customer_id, 1, 'caroline')

        self.assertTrue(result)
        with db.session_scope() as session:
            self.assertEqual(session.get(User, self.customer_id).name, 'caroline')

    def test_rename_self_is_refused(self):
        result, output = self.run_workflow('ada', 2, self.admin_id, 1, 'ada2')

        self.assertFalse(result)
        self.assertIn("You cannot rename the account you are logged in with.", output)
        with db.session_scope() as session:
            self.assertEqual(session.get(User, self.admin_id).name, 'ada')

    def test_add_user(self):
        result, output = self.run_workflow('ada', 4, 'erin', 'pw', '1.5', '2.5', 'admin')

        self.assertTrue(result)
        self.assertIn("User successfully created!", output)
        with db.session_scope() as session:
            erin = session.query(User).filter(User.name == 'erin').one()
            self.assertEqual(erin.role, UserRole.ADMIN)

    def test_view_users(self):
        result, output = self.run_workflow('ada', 3, 'nobody', 'carol')

        self.assertTrue(result)
        self.assertIn("Invalid user name nobody.", output)
        self.assertIn("carol", output)

    def test_delete_referenced_user_reports_error(self):
        result, output = self.run_workflow('ada', 5, 'mia', self.manager_id)

        self.assertFalse(result)
        self.assertIn("cannot be deleted", output)
        self.assertEqual(self.count(User), 3)

    def test_add_and_delete_product(self):
        result, output = self.run_workflow('ada', 6, 'Gadget', self.store_id, '3.5', 12)
        self.assertTrue(result)
        self.assertEqual(self.product_state(self.store_id, 'Gadget'), (12, 3.5))

        result, output = self.run_workflow('ada', 7, self.store_id, 'Gizmo', 'Gadget')
        self.assertTrue(result)
        self.assertIn("Store does not carry this product.", output)
        with db.session_scope() as session:
            self.assertIsNone(session.get(Product, (self.store_id, 'Gadget')))

    def test_product_update_through_admin_menu(self):
        result, output = self.run_workflow('ada', 1, self.store_id, 'Widget', 1, 0)

        self.assertTrue(result)
        self.assertEqual(self.product_state(self.store_id, 'Widget')[0], 0)

    def test_non_admins_are_turned_away(self):
        for identity in ('mia', 'carol'):
            result, output = self.run_workflow(identity)
            self.assertFalse(result)
            self.assertIn("You do not have access to this feature!", output)

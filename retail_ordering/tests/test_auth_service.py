"""
Tests for registration and login.
"""
from retail_ordering.db import db
from retail_ordering.models import User, UserRole
from retail_ordering.services.auth_service import AuthService
from retail_ordering.exceptions import AuthenticationError, DuplicateError
from retail_ordering.tests.base import DatabaseTestCase


class TestAuthService(DatabaseTestCase):
    def test_register_creates_customer(self):
        with db.session_scope() as session:
            user_id = AuthService(session).register('erin', 'pw', 10.0, 20.0).user_id

        with db.session_scope() as session:
            user = session.get(User, user_id)
            self.assertEqual(user.role, UserRole.CUSTOMER)
            self.assertEqual(user.coordinates, (10.0, 20.0))

    def test_register_duplicate_name(self):
        self.add_user('erin')
        with self.assertRaises(DuplicateError):
            with db.session_scope() as session:
                AuthService(session).register('erin', 'other', 0.0, 0.0)
        self.assertEqual(self.count(User), 1)

    def test_login(self):
        self.add_user('erin', password='pw')
        with db.session_scope() as session:
            self.assertEqual(AuthService(session).login('erin', 'pw').name, 'erin')

    def test_login_wrong_password(self):
        self.add_user('erin', password='pw')
        with self.assertRaises(AuthenticationError):
            with db.session_scope() as session:
                AuthService(session).login('erin', 'PW')

        with self.assertRaises(AuthenticationError):
            with db.session_scope() as session:
                AuthService(session).login('nobody', 'pw')

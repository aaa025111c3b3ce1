# retail_ordering/workflows/admin_workflow.py
import logging

from retail_ordering.core.permissions import Capability
from retail_ordering.services.access_service import AccessService
from retail_ordering.services.admin_service import AdminService
from retail_ordering.services.catalog_service import CatalogService
from retail_ordering.utils.validation import (
    parse_int, parse_float, parse_name, parse_role,
    parse_non_negative_int, parse_non_negative_float
)
from retail_ordering.exceptions import (
    AccessDeniedError, InvalidInputError, NotFoundError, RetailError
)
from .base import Workflow
from .product_update_workflow import ProductUpdateWorkflow

logger = logging.getLogger(__name__)

ADMIN_MENU = (
    "\tPress 1 for product update\n"
    "\tPress 2 for user update\n"
    "\tPress 3 to view users\n"
    "\tPress 4 to add a user\n"
    "\tPress 5 to delete a user\n"
    "\tPress 6 to add a product\n"
    "\tPress 7 to delete a product: "
)

USER_UPDATE_MENU = (
    "\t1. Change user name.\n"
    "\t2. Change user password. \n"
    "\t3. Change user location.\n"
    "\t4. Change user type.\n"
    "\tEnter your selection: "
)

def _menu_choice(low: int, high: int):
    def parse(value: str) -> int:
        choice = parse_int(value, 'selection')
        if not low <= choice <= high:
            raise InvalidInputError(f"Invalid selection. Choose a number from {low} to {high}.")
        return choice
    return parse

class AdminWorkflow(Workflow):
    """Admin maintenance menu for users and products."""

    def run(self) -> bool:
        """Run one admin action.

        Returns:
            True if the action completed
        """
        try:
            with self.scope() as session:
                AccessService(session).require(self.identity, Capability.MANAGE_USERS)
        except (AccessDeniedError, NotFoundError) as e:
            self.fail(e)
            return False

        choice = self.terminal.ask(ADMIN_MENU, _menu_choice(1, 7))
        actions = {
            1: self.update_product,
            2: self.update_user,
            3: self.view_users,
            4: self.add_user,
            5: self.delete_user,
            6: self.add_product,
            7: self.delete_product,
        }

        try:
            return actions[choice]()
        except RetailError as e:
            logger.warning(f"Admin action {choice} by {self.identity} failed: {e}")
            self.fail(e)
            return False

    def update_product(self) -> bool:
        return ProductUpdateWorkflow(self.context, self.terminal, self.database).run() is not None

    def _ask_existing_user_id(self) -> int:
        while True:
            try:
                user_id = parse_int(self.terminal.read_line("\tEnter userID: "), 'userID')
                with self.scope() as session:
                    CatalogService(session).validate_user(user_id)
                return user_id
            except (InvalidInputError, NotFoundError) as e:
                self.say(f"\t{e.message}")

    def _ask_existing_user_name(self) -> str:
        while True:
            try:
                name = parse_name(self.terminal.read_line("\tEnter user name: "), 'user name')
                with self.scope() as session:
                    CatalogService(session).validate_user_name(name)
                return name
            except (InvalidInputError, NotFoundError) as e:
                self.say(f"\t{e.message}")

    def _ask_existing_store_id(self) -> int:
        while True:
            try:
                store_id = parse_int(self.terminal.read_line("\tEnter store ID: "), 'store ID')
                with self.scope() as session:
                    CatalogService(session).validate_store(store_id)
                return store_id
            except (InvalidInputError, NotFoundError) as e:
                self.say(f"\t{e.message}")

    def update_user(self) -> bool:
        user_id = self._ask_existing_user_id()
        selection = self.terminal.ask(USER_UPDATE_MENU, _menu_choice(1, 4))

        if selection == 1:
            new_name = self.terminal.ask(f"\tEnter new user name for user with userID {user_id}: ",
                                         lambda v: parse_name(v, 'user name'))
            with self.scope() as session:
                AdminService(session).update_user_name(self.identity, user_id, new_name)
            self.say("User name updated. ")
        elif selection == 2:
            new_password = self.terminal.ask(f"\tEnter new password for user with userID {user_id}: ",
                                             lambda v: parse_name(v, 'password'))
            with self.scope() as session:
                AdminService(session).update_user_password(self.identity, user_id, new_password)
            self.say("Password updated. ")
        elif selection == 3:
            latitude = self.terminal.ask("\tEnter new latitude: ", lambda v: parse_float(v, 'latitude'))
            longitude = self.terminal.ask("\tEnter new longitude: ", lambda v: parse_float(v, 'longitude'))
            with self.scope() as session:
                AdminService(session).update_user_location(self.identity, user_id, latitude, longitude)
            self.say("Location updated.")
        else:
            role = self.terminal.ask("\tEnter new user type: ", parse_role)
            with self.scope() as session:
                AdminService(session).update_user_role(self.identity, user_id, role)
            self.say("\tUser type updated")

        return True

    def view_users(self) -> bool:
        name = self._ask_existing_user_name()
        with self.scope() as session:
            users = AdminService(session).find_users_by_name(self.identity, name)
            rows = [
                {
                    'userID': user.user_id,
                    'name': user.name,
                    'latitude': user.latitude,
                    'longitude': user.longitude,
                    'type': user.type
                }
                for user in users
            ]
        self.terminal.print_table(rows)
        return True

    def add_user(self) -> bool:
        name = self.terminal.ask("\tEnter user name: ", lambda v: parse_name(v, 'user name'))
        password = self.terminal.ask("\tEnter new user pass: ", lambda v: parse_name(v, 'password'))
        latitude = self.terminal.ask("\tEnter new user latitude: ", lambda v: parse_float(v, 'latitude'))
        longitude = self.terminal.ask("\tEnter new user longitude: ", lambda v: parse_float(v, 'longitude'))
        role = self.terminal.ask("\tEnter new user type: ", parse_role)

        with self.scope() as session:
            AdminService(session).create_user(self.identity, name, password, latitude, longitude, role)
        self.say("User successfully created!")
        return True

    def delete_user(self) -> bool:
        self.view_users()
        user_id = self._ask_existing_user_id()

        with self.scope() as session:
            AdminService(session).delete_user(self.identity, user_id)
        self.say("User deleted.")
        return True

    def add_product(self) -> bool:
        product_name = self.terminal.ask("\tEnter product name: ", lambda v: parse_name(v, 'product name'))
        store_id = self._ask_existing_store_id()
        price = self.terminal.ask("\tEnter price per unit of product: ",
                                  lambda v: parse_non_negative_float(v, 'price per unit'))
        units = self.terminal.ask("\tEnter number of units of product: ",
                                  lambda v: parse_non_negative_int(v, 'number of units'))

        with self.scope() as session:
            AdminService(session).create_product(self.identity, store_id, product_name, units, price)
        self.say("Product added.")
        return True

    def delete_product(self) -> bool:
        store_id = self._ask_existing_store_id()
        while True:
            try:
                product_name = parse_name(self.terminal.read_line("\tEnter product name: "), 'product name')
                with self.scope() as session:
                    CatalogService(session).validate_product(store_id, product_name)
                break
            except (InvalidInputError, NotFoundError) as e:
                self.say(f"\t{e.message}")

        with self.scope() as session:
            AdminService(session).delete_product(self.identity, store_id, product_name)
        self.say("Product deleted.")
        return True

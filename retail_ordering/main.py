import argparse
import sys
from typing import Optional

from retail_ordering.config import config
from retail_ordering.db import db
from retail_ordering.logging_setup import logger, get_logger, log_exception
from retail_ordering.services.auth_service import AuthService
from retail_ordering.terminal import TerminalIO
from retail_ordering.utils.validation import parse_float, parse_name
from retail_ordering.workflows import (
    UserContext, OrderWorkflow, ProductUpdateWorkflow, SupplyRequestWorkflow,
    AdminWorkflow, ReportViews
)
from retail_ordering.exceptions import (
    AuthenticationError, DuplicateError, PersistenceError, RetailError
)

log = get_logger('app')

MAIN_MENU = (
    "MAIN MENU",
    "---------",
    "1. Create user",
    "2. Log in",
    "9. < EXIT",
)

USER_MENU = (
    "MAIN MENU",
    "---------",
    "1. View Stores within 30 miles",
    "2. View Product List",
    "3. Place a Order",
    "4. View 5 recent orders",
    ".........................",
    "5. Update Product",
    "6. View 5 recent Product Updates Info",
    "7. View 5 Popular Items",
    "8. View 5 Popular Customers",
    "9. Place Product Supply Request to Warehouse",
    "10. Check Manager Order Info",
    "11. Admin Update",
    ".........................",
    "20. Log out",
)

LOG_OUT = 20
EXIT = 9

def init_application(connection_string=None):
    """Initialize application components."""
    db.initialize(connection_string)

    log.info("Retail Ordering System initialized")
    log.info(f"Using database: {config.get('DATABASE', 'engine')} at "
             f"{config.get('DATABASE', 'host')}:{config.get('DATABASE', 'port')}")

    return True

def create_user(terminal: TerminalIO, database) -> None:
    name = terminal.ask("\tEnter name: ", lambda v: parse_name(v, 'name'))
    password = terminal.ask("\tEnter password: ", lambda v: parse_name(v, 'password'))
    latitude = terminal.ask("\tEnter latitude: ", lambda v: parse_float(v, 'latitude'))
    longitude = terminal.ask("\tEnter longitude: ", lambda v: parse_float(v, 'longitude'))

    try:
        with database.session_scope() as session:
            AuthService(session).register(name, password, latitude, longitude)
    except DuplicateError as e:
        terminal.write_line(f"\t{e.message}")
        return

    terminal.write_line("User successfully created!")

def log_in(terminal: TerminalIO, database) -> Optional[UserContext]:
    """Ask for credentials.

    Returns:
        UserContext of the logged-in user, or None on a failed login
    """
    name = terminal.read_line("\tEnter name: ").strip()
    password = terminal.read_line("\tEnter password: ")

    try:
        with database.session_scope() as session:
            user = AuthService(session).login(name, password)
            identity = user.name
    except AuthenticationError as e:
        terminal.write_line(f"\t{e.message}")
        return None

    return UserContext(identity)

def user_menu(context: UserContext, terminal: TerminalIO, database) -> None:
    """Run the menu of a logged-in user until they log out."""
    views = ReportViews(context, terminal, database)
    actions = {
        1: views.stores_near,
        2: views.store_products,
        3: lambda: OrderWorkflow(context, terminal, database).run(),
        4: views.recent_orders,
        5: lambda: ProductUpdateWorkflow(context, terminal, database).run(),
        6: views.recent_updates,
        7: views.popular_products,
        8: views.popular_customers,
        9: lambda: SupplyRequestWorkflow(context, terminal, database).run(),
        10: views.store_orders,
        11: lambda: AdminWorkflow(context, terminal, database).run(),
    }

    while True:
        terminal.write_line("\n".join(USER_MENU))
        choice = terminal.read_choice()

        if choice == LOG_OUT:
            log.info(f"{context.identity} logged out")
            return

        action = actions.get(choice)
        if action is None:
            terminal.write_line("Unrecognized choice!")
            continue

        try:
            action()
        except PersistenceError as e:
            log_exception('app', e, f"Operation {choice} for {context.identity} failed")
            terminal.write_line("\tThe operation could not be completed, please try again later.")
        except RetailError as e:
            log.warning(f"Operation {choice} for {context.identity} failed: {e}")
            terminal.write_line(f"\t{e.message}")

def run_session(terminal: TerminalIO, database=None) -> None:
    """Run the interactive session until the user exits or input ends."""
    database = database or db

    try:
        while True:
            terminal.write_line("\n".join(MAIN_MENU))
            choice = terminal.read_choice()

            if choice == EXIT:
                break

            try:
                if choice == 1:
                    create_user(terminal, database)
                elif choice == 2:
                    context = log_in(terminal, database)
                    if context is not None:
                        user_menu(context, terminal, database)
                else:
                    terminal.write_line("Unrecognized choice!")
            except RetailError as e:
                log.error(f"Main menu operation {choice} failed: {e}")
                terminal.write_line(f"\t{e.message}")
    except EOFError:
        log.info("Input closed, ending session")

    terminal.write_line("Bye!")

def main():
    """Main application entry point."""
    parser = argparse.ArgumentParser(description='Retail Ordering System')

    # Add command-line arguments
    parser.add_argument('--setup-db', action='store_true',
                        help='Set up the database schema')
    parser.add_argument('--drop-db', action='store_true',
                        help='Drop existing tables before setup')
    parser.add_argument('--sample-data', action='store_true',
                        help='Load sample users, stores, products and warehouses after setup')

    args = parser.parse_args()

    if args.setup_db:
        from retail_ordering.scripts.setup_db import setup_database
        ok = setup_database(args.drop_db, args.sample_data)
        sys.exit(0 if ok else 1)

    # Normal application initialization
    init_application()

    logger.app_logger.info("Retail Ordering System ready")
    run_session(TerminalIO())

if __name__ == "__main__":
    main()

# retail_ordering/scripts/setup_db.py
import argparse
import sys
from datetime import date

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from retail_ordering.db import db
from retail_ordering.models import User, Store, Product, Warehouse, UserRole
from retail_ordering.logging_setup import get_logger
from retail_ordering.exceptions import RetailError

logger = get_logger('db_setup')

SAMPLE_USERS = [
    # name, password, latitude, longitude, role
    ('admin', 'admin', 50.0, 50.0, UserRole.ADMIN),
    ('mgr_north', 'mgr_north', 20.0, 80.0, UserRole.MANAGER),
    ('mgr_south', 'mgr_south', 80.0, 20.0, UserRole.MANAGER),
    ('alice', 'alice', 25.0, 70.0, UserRole.CUSTOMER),
    ('bob', 'bob', 75.0, 30.0, UserRole.CUSTOMER),
]

SAMPLE_STORES = [
    # name, latitude, longitude, manager name
    ('North Market', 20.0, 80.0, 'mgr_north'),
    ('Harbor Goods', 30.0, 60.0, 'mgr_north'),
    ('South Depot', 80.0, 20.0, 'mgr_south'),
]

SAMPLE_PRODUCTS = [
    # product name, units, price per unit
    ('Egg', 40, 2.5),
    ('Milk', 25, 3.0),
    ('Bread', 30, 4.25),
    ('Apple', 60, 0.75),
    ('Coffee', 10, 12.0),
]

SAMPLE_WAREHOUSES = [
    # area, latitude, longitude
    (1200.0, 10.0, 90.0),
    (2500.0, 90.0, 10.0),
]

def setup_database(drop_existing=False, sample_data=False, connection_string=None):
    """Set up the database schema.

    Args:
        drop_existing: If True, drop existing tables before creating new ones
        sample_data: If True, load the sample users, stores, products and warehouses
        connection_string: Optional database URL overriding the configuration

    Returns:
        True if setup was successful, False otherwise
    """
    try:
        db.initialize(connection_string)

        if drop_existing:
            logger.info("Dropping all existing tables...")
            db.drop_all_tables()
            logger.info("All tables dropped successfully.")

        logger.info("Creating database tables...")
        db.create_all_tables()
        logger.info("Database tables created successfully.")

        if sample_data:
            load_sample_data()

        return True
    except (SQLAlchemyError, RetailError) as e:
        logger.error(f"Error setting up database: {str(e)}")
        logger.exception(e)
        return False

def load_sample_data():
    """Insert the sample data set unless users already exist."""
    with db.session_scope() as session:
        if session.query(User).first():
            logger.info("Users already present. Skipping sample data.")
            return

        users = {}
        for name, password, latitude, longitude, role in SAMPLE_USERS:
            user = User(name=name, password=password, latitude=latitude, longitude=longitude, type=role.value)
            session.add(user)
            users[name] = user
        session.flush()

        for name, latitude, longitude, manager_name in SAMPLE_STORES:
            store = Store(
                name=name,
                latitude=latitude,
                longitude=longitude,
                manager_id=users[manager_name].user_id,
                date_established=date(2020, 1, 1)
            )
            session.add(store)
            session.flush()

            for product_name, units, price in SAMPLE_PRODUCTS:
                session.add(Product(
                    store_id=store.store_id,
                    product_name=product_name,
                    number_of_units=units,
                    price_per_unit=price
                ))

        for area, latitude, longitude in SAMPLE_WAREHOUSES:
            session.add(Warehouse(area=area, latitude=latitude, longitude=longitude))

        logger.info(
            f"Sample data loaded: {len(SAMPLE_USERS)} users, {len(SAMPLE_STORES)} stores, "
            f"{len(SAMPLE_STORES) * len(SAMPLE_PRODUCTS)} products, {len(SAMPLE_WAREHOUSES)} warehouses"
        )

def main():
    """Main function for database setup script."""
    parser = argparse.ArgumentParser(description='Set up the Retail Ordering database.')
    parser.add_argument('--drop', action='store_true', help='Drop existing tables before creating new ones')
    parser.add_argument('--sample-data', action='store_true', help='Load sample data after creating tables')
    parser.add_argument('--test-connection', action='store_true', help='Test database connection')

    args = parser.parse_args()

    if args.test_connection:
        try:
            db.initialize()
            with db.session_scope() as session:
                session.execute(text("SELECT 1"))
            logger.info("Database connection test passed.")
            return
        except RetailError as e:
            logger.error(f"Connection test failed: {str(e)}")
            sys.exit(1)

    logger.info("Starting database setup...")

    if setup_database(args.drop, args.sample_data):
        logger.info("Database setup completed successfully.")
    else:
        logger.error("Database setup failed.")
        sys.exit(1)

if __name__ == '__main__':
    main()

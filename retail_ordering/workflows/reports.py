# retail_ordering/workflows/reports.py
"""
Read-only screens of the user menu, printed with tabulate.
"""
from retail_ordering.config import config
from retail_ordering.services.access_service import AccessService
from retail_ordering.services.catalog_service import CatalogService
from retail_ordering.services.order_service import OrderService
from retail_ordering.services.reporting_service import ReportingService
from retail_ordering.utils.validation import parse_int
from retail_ordering.exceptions import AccessDeniedError, InvalidInputError, NotFoundError
from .base import Workflow

class ReportViews(Workflow):
    """Listing screens. Each returns the number of rows printed."""

    def stores_near(self) -> int:
        radius = config.business_rules['eligibility_radius']
        with self.scope() as session:
            user = AccessService(session).get_user(self.identity)
            stores = CatalogService(session).stores_near(user, radius)
            rows = [
                {
                    'storeID': store.store_id,
                    'name': store.name,
                    'latitude': store.latitude,
                    'longitude': store.longitude
                }
                for store in stores
            ]
        return self.terminal.print_table(rows)

    def store_products(self) -> int:
        while True:
            try:
                store_id = parse_int(self.terminal.read_line("\tEnter store ID: "), 'store ID')
                with self.scope() as session:
                    CatalogService(session).validate_store(store_id)
                    rows = [
                        {
                            'product_name': product.product_name,
                            'number_of_units': product.number_of_units,
                            'price_per_unit': product.price_per_unit
                        }
                        for product in CatalogService(session).get_products(store_id)
                    ]
                break
            except (InvalidInputError, NotFoundError) as e:
                self.say(f"\t{e.message}")

        return self.terminal.print_table(rows)

    def recent_orders(self) -> int:
        try:
            with self.scope() as session:
                rows = OrderService(session).recent_orders(self.identity)
        except AccessDeniedError as e:
            self.fail(e)
            return 0
        return self.terminal.print_table(rows)

    def recent_updates(self) -> int:
        with self.scope() as session:
            rows = ReportingService(session).recent_updates(self.identity)
        return self.terminal.print_table(rows)

    def popular_products(self) -> int:
        try:
            with self.scope() as session:
                rows = ReportingService(session).popular_products(self.identity)
        except AccessDeniedError as e:
            self.fail(e)
            return 0
        return self.terminal.print_table(rows)

    def popular_customers(self) -> int:
        try:
            with self.scope() as session:
                rows = ReportingService(session).popular_customers(self.identity)
        except AccessDeniedError as e:
            self.fail(e)
            return 0
        return self.terminal.print_table(rows)

    def store_orders(self) -> int:
        try:
            with self.scope() as session:
                rows = ReportingService(session).store_orders(self.identity)
        except AccessDeniedError as e:
            self.fail(e)
            return 0
        return self.terminal.print_table(rows)

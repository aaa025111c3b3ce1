"""
Tests for settings, validation helpers, the terminal adapter and the error types.
"""
import io
import os
import tempfile
import unittest
from unittest.mock import MagicMock

from retail_ordering.config import Config, config
from retail_ordering.db import Database
from retail_ordering.models import Product, User
from retail_ordering.terminal import TerminalIO
from retail_ordering.logging_setup import get_logger, log_exception
from retail_ordering.utils.validation import (
    parse_int, parse_positive_int, parse_non_negative_float, parse_name,
    validate_user, validate_product
)
from retail_ordering.exceptions import (
    AccessDeniedError, ConfigError, InvalidInputError, NotFoundError, RetailError
)


class TestConfig(unittest.TestCase):
    def test_singleton(self):
        self.assertIs(Config(), config)

    def test_business_rules(self):
        rules = config.business_rules
        self.assertEqual(rules['eligibility_radius'], 30.0)
        self.assertEqual(rules['recent_orders_limit'], 5)
        self.assertEqual(rules['popular_customers_limit'], 5)

    def test_url_setting_wins(self):
        self.assertEqual(config.get_db_url(), 'sqlite://')

    def test_set_persists(self):
        config.set('SCRATCH', 'answer', 42)
        self.assertEqual(config.get_int('SCRATCH', 'answer'), 42)

    def test_bad_database_url(self):
        with self.assertRaises(ConfigError):
            Database().initialize('not a url')

    def test_url_built_from_parts(self):
        saved_path = config._config_path
        fd, path = tempfile.mkstemp(suffix='.ini')
        os.close(fd)
        with open(path, 'w') as f:
            f.write("[DATABASE]\nengine = postgresql\nusername = shop\npassword = p@ss\n"
                    "host = db\nport = 5433\ndatabase = retail\n")
        try:
            config.reload(path)
            self.assertEqual(config.get_db_url(), 'postgresql://shop:p%40ss@db:5433/retail')
            self.assertEqual(config.get_int('DATABASE', 'missing', 7), 7)
        finally:
            config.reload(saved_path)
            os.remove(path)


class TestValidation(unittest.TestCase):
    def test_parsers(self):
        self.assertEqual(parse_int(' 42 '), 42)
        self.assertEqual(parse_positive_int('3'), 3)
        self.assertEqual(parse_non_negative_float('0'), 0.0)
        self.assertEqual(parse_name('  Widget '), 'Widget')

    def test_parsers_reject(self):
        for parse, value in [
            (parse_int, '4.5'),
            (parse_int, None),
            (parse_positive_int, '0'),
            (parse_non_negative_float, '-1'),
            (parse_name, '   '),
        ]:
            with self.assertRaises(InvalidInputError):
                parse(value)

    def test_validate_user(self):
        user = User(name='', password='', latitude=None, longitude=1.0, type='boss')
        self.assertEqual(set(validate_user(user)), {'name', 'password', 'latitude', 'type'})

    def test_validate_product(self):
        product = Product(store_id=1, product_name='Widget', number_of_units=-1, price_per_unit=1.0)
        self.assertEqual(set(validate_product(product)), {'number_of_units'})


class TestTerminalIO(unittest.TestCase):
    def test_ask_reprompts(self):
        terminal = TerminalIO(io.StringIO("x\n-1\n5\n"), io.StringIO())
        self.assertEqual(terminal.ask("Units> ", lambda v: parse_positive_int(v, 'quantity')), 5)
        self.assertEqual(terminal.stdout.getvalue().count("Units> "), 3)

    def test_read_line_eof(self):
        terminal = TerminalIO(io.StringIO(""), io.StringIO())
        with self.assertRaises(EOFError):
            terminal.read_line()

    def test_print_table(self):
        terminal = TerminalIO(io.StringIO(), io.StringIO())
        self.assertEqual(terminal.print_table([]), 0)
        self.assertEqual(terminal.print_table([{'a': 1}, {'a': 2}]), 2)
        output = terminal.stdout.getvalue()
        self.assertIn("No records found.", output)
        self.assertIn("a", output)

    def test_write_line_uses_stream(self):
        stdout = MagicMock()
        TerminalIO(io.StringIO(), stdout).write_line("hi")
        stdout.write.assert_called_once_with("hi\n")


class TestExceptions(unittest.TestCase):
    def test_str_and_dict(self):
        error = NotFoundError("Invalid store ID 3.", code='STORE_NOT_FOUND', details={'store_id': 3})
        self.assertEqual(str(error), "[STORE_NOT_FOUND] Invalid store ID 3.")
        self.assertEqual(error.to_dict(), {
            'error': 'NotFoundError',
            'message': "Invalid store ID 3.",
            'code': 'STORE_NOT_FOUND',
            'details': {'store_id': 3},
        })

    def test_defaults(self):
        self.assertEqual(AccessDeniedError().message, "You do not have access to this feature!")
        self.assertIsInstance(InvalidInputError(), RetailError)


class TestLogger(unittest.TestCase):
    def test_named_logger_has_own_file(self):
        named = get_logger('test_named')

        self.assertIs(get_logger('test_named'), named)
        self.assertFalse(named.propagate)
        self.assertEqual(len(named.handlers), 1)
        self.assertTrue(named.handlers[0].baseFilename.endswith('test_named.log'))

    def test_log_exception_writes_message(self):
        log_exception('test_errors', ValueError('boom'), 'Saving failed')

        log_file = get_logger('test_errors').handlers[0].baseFilename
        with open(log_file) as f:
            self.assertIn("Saving failed: boom", f.read())

from .validation import (
    parse_int, parse_float, parse_positive_int, parse_non_negative_int,
    parse_non_negative_float, parse_role, parse_name,
    validate_user, validate_product
)

__all__ = [
    'parse_int',
    'parse_float',
    'parse_positive_int',
    'parse_non_negative_int',
    'parse_non_negative_float',
    'parse_role',
    'parse_name',
    'validate_user',
    'validate_product'
]

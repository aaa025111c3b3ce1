from typing import Dict, Optional

from retail_ordering.models import User, Product, UserRole
from retail_ordering.exceptions import InvalidInputError

def parse_int(value: Optional[str], field: str = 'value') -> int:
    """Parse an integer typed at the terminal.

    Args:
        value: Raw input line
        field: Field name used in the error message

    Returns:
        Parsed integer

    Raises:
        InvalidInputError if the value is not an integer
    """
    try:
        return int((value or '').strip())
    except ValueError:
        raise InvalidInputError(f"Invalid {field}: {value!r} is not a whole number", code='NOT_AN_INTEGER')

def parse_float(value: Optional[str], field: str = 'value') -> float:
    """Parse a real number typed at the terminal."""
    try:
        return float((value or '').strip())
    except ValueError:
        raise InvalidInputError(f"Invalid {field}: {value!r} is not a number", code='NOT_A_NUMBER')

def parse_positive_int(value: Optional[str], field: str = 'value') -> int:
    """Parse an integer that must be bigger than 0."""
    number = parse_int(value, field)
    if number <= 0:
        raise InvalidInputError(f"Please enter a {field} bigger than 0.", code='NOT_POSITIVE')
    return number

def parse_non_negative_int(value: Optional[str], field: str = 'value') -> int:
    number = parse_int(value, field)
    if number < 0:
        raise InvalidInputError(f"The {field} cannot be negative.", code='NEGATIVE')
    return number

def parse_non_negative_float(value: Optional[str], field: str = 'value') -> float:
    number = parse_float(value, field)
    if number < 0:
        raise InvalidInputError(f"The {field} cannot be negative.", code='NEGATIVE')
    return number

def parse_role(value: Optional[str]) -> UserRole:
    """Parse a user type, accepting only customer, manager or admin."""
    try:
        return UserRole.from_string(value)
    except ValueError as e:
        raise InvalidInputError(str(e), code='INVALID_ROLE')

def parse_name(value: Optional[str], field: str = 'name') -> str:
    name = (value or '').strip()
    if not name:
        raise InvalidInputError(f"The {field} cannot be empty.", code='EMPTY')
    return name

def validate_user(user: User) -> Dict[str, str]:
    """Validate a user.

    Args:
        user: User to validate

    Returns:
        Dictionary with validation errors
    """
    errors = {}

    if not user.name or not user.name.strip():
        errors['name'] = 'User name is required'

    if not user.password:
        errors['password'] = 'Password is required'

    if user.latitude is None:
        errors['latitude'] = 'Latitude is required'

    if user.longitude is None:
        errors['longitude'] = 'Longitude is required'

    try:
        UserRole.from_string(user.type)
    except ValueError:
        errors['type'] = f"Invalid user type: {user.type}"

    return errors

def validate_product(product: Product) -> Dict[str, str]:
    """Validate a product.

    Args:
        product: Product to validate

    Returns:
        Dictionary with validation errors
    """
    errors = {}

    if product.store_id is None:
        errors['store_id'] = 'Store ID is required'

    if not product.product_name or not product.product_name.strip():
        errors['product_name'] = 'Product name is required'

    if product.number_of_units is None or product.number_of_units < 0:
        errors['number_of_units'] = 'Number of units cannot be negative'

    if product.price_per_unit is None or product.price_per_unit < 0:
        errors['price_per_unit'] = 'Price per unit cannot be negative'

    return errors

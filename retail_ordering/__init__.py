from .config import config
from .db import db, session_scope
from .logging_setup import logger, get_logger
from .exceptions import (
    RetailError, PersistenceError, InvalidInputError, NotFoundError,
    AccessDeniedError, InsufficientStockError, AuthenticationError
)

__all__ = [
    'config',
    'db',
    'session_scope',
    'logger',
    'get_logger',
    'RetailError',
    'PersistenceError',
    'InvalidInputError',
    'NotFoundError',
    'AccessDeniedError',
    'InsufficientStockError',
    'AuthenticationError'
]

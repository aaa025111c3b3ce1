class RetailError(Exception):
    """Base exception for Retail Ordering System errors."""

    def __init__(self, message=None, code=None, details=None):
        """Initialize the exception.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
        """
        self.message = message or "An error occurred in the Retail Ordering System"
        self.code = code
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        """String representation of the error."""
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def to_dict(self):
        """Convert the exception to a dictionary."""
        error_dict = {
            'error': self.__class__.__name__,
            'message': self.message,
        }

        if self.code:
            error_dict['code'] = self.code

        if self.details:
            error_dict['details'] = self.details

        return error_dict


class ConfigError(RetailError):
    """Exception raised for configuration errors."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Configuration error"
        super().__init__(message, code, details)


class PersistenceError(RetailError):
    """Exception raised when the database rejects or cannot execute a statement."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Database error"
        super().__init__(message, code, details)


class InvalidInputError(RetailError):
    """Exception raised for unparsable or out-of-range input."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Invalid input"
        super().__init__(message, code, details)


class NotFoundError(RetailError):
    """Exception raised when a requested resource is not found."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Resource not found"
        super().__init__(message, code, details)


class AccessDeniedError(RetailError):
    """Exception raised when a role lacks the capability for an operation."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "You do not have access to this feature!"
        super().__init__(message, code, details)


class InsufficientStockError(RetailError):
    """Exception raised when a stock change would leave a negative unit count."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Insufficient stock"
        super().__init__(message, code, details)


class AuthenticationError(RetailError):
    """Exception raised when a name/password pair does not match a user."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Invalid user name or password"
        super().__init__(message, code, details)


class DuplicateError(RetailError):
    """Exception raised when a unique key is already taken."""

    def __init__(self, message=None, code=None, details=None):
        message = message or "Record already exists"
        super().__init__(message, code, details)

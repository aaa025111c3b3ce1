# retail_ordering/services/auth_service.py
import logging

from sqlalchemy.orm import Session

from retail_ordering.models import User, UserRole
from retail_ordering.exceptions import AuthenticationError, DuplicateError

logger = logging.getLogger(__name__)

class AuthService:
    """Service for self-registration and login.

    Passwords are compared as stored, in clear text.
    """

    def __init__(self, session: Session):
        """Initialize the auth service.

        Args:
            session: Database session
        """
        self.session = session

    def register(self, name: str, password: str, latitude: float, longitude: float) -> User:
        """Create a customer account.

        Args:
            name: Unique user name
            password: Password
            latitude: Latitude, by convention in [0, 100]
            longitude: Longitude, by convention in [0, 100]

        Returns:
            The new User
        """
        if self.session.query(User).filter(User.name == name).first():
            raise DuplicateError(f"User name {name} is already taken", code='USER_EXISTS')

        user = User(
            name=name,
            password=password,
            latitude=latitude,
            longitude=longitude,
            type=UserRole.CUSTOMER.value
        )
        self.session.add(user)
        self.session.flush()

        logger.info(f"Registered customer {name} (user {user.user_id})")
        return user

    def login(self, name: str, password: str) -> User:
        """Check a name/password pair.

        Returns:
            The matching User

        Raises:
            AuthenticationError if there is no such pair
        """
        user = (
            self.session.query(User)
            .filter(User.name == name, User.password == password)
            .first()
        )
        if not user:
            logger.warning(f"Failed login for {name}")
            raise AuthenticationError()

        logger.info(f"{name} logged in")
        return user

# retail_ordering/services/access_service.py
import logging

from sqlalchemy.orm import Session

from retail_ordering.models import User, UserRole
from retail_ordering.core.permissions import Capability, has_capability
from retail_ordering.services.catalog_service import CatalogService
from retail_ordering.exceptions import AccessDeniedError, NotFoundError

logger = logging.getLogger(__name__)

class AccessService:
    """Resolves identities to roles and gates operations by capability.

    Nothing is cached: the role is read from the database on every call so
    that a change made by an admin applies to the very next operation.
    """

    def __init__(self, session: Session):
        """Initialize the access service.

        Args:
            session: Database session
        """
        self.session = session

    def get_user(self, identity: str) -> User:
        """Get the user behind an identity.

        Args:
            identity: User name returned by a successful login

        Returns:
            User object

        Raises:
            NotFoundError if no user has that name
        """
        user = self.session.query(User).filter(User.name == identity).first()
        if not user:
            raise NotFoundError(f"User {identity} not found", code='USER_NOT_FOUND')
        return user

    def role_of(self, identity: str) -> UserRole:
        """Get the current role of an identity."""
        return self.get_user(identity).role

    def require(self, identity: str, capability: Capability) -> User:
        """Check that an identity may perform an operation.

        Args:
            identity: User name
            capability: Capability the operation needs

        Returns:
            The acting user

        Raises:
            AccessDeniedError if the role does not grant the capability
        """
        user = self.get_user(identity)
        if not has_capability(user.role, capability):
            logger.warning(f"Access denied: {identity} ({user.type}) lacks {capability.value}")
            raise AccessDeniedError(details={'identity': identity, 'capability': capability.value})
        return user

    def require_store_manager(self, identity: str, capability: Capability, store_id: int) -> User:
        """Check a manager capability and ownership of the store.

        The store list comes from the database, never from the caller.
        """
        user = self.require(identity, capability)
        try:
            CatalogService(self.session).validate_managed_store(user, store_id)
        except AccessDeniedError:
            logger.warning(f"Access denied: {identity} does not manage store {store_id}")
            raise
        return user

    def require_product_editor(self, identity: str, store_id: int) -> User:
        """Check that an identity may change stock or price at a store.

        Admins may edit any store; managers only the stores they run.
        """
        user = self.get_user(identity)
        role = user.role

        if has_capability(role, Capability.UPDATE_ANY_PRODUCT):
            return user

        if has_capability(role, Capability.UPDATE_OWN_STORE_PRODUCT):
            return self.require_store_manager(identity, Capability.UPDATE_OWN_STORE_PRODUCT, store_id)

        logger.warning(f"Access denied: {identity} ({user.type}) may not update products")
        raise AccessDeniedError(
            "You must be a manager or an admin to update products information.",
            details={'identity': identity, 'store_id': store_id}
        )

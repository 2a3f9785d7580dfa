"""
Base service classes.
Services contain business logic and orchestrate between repositories.
"""
from typing import Optional
import logging

from core.exceptions import UnauthorizedError
from core.repositories import EntityStore

logger = logging.getLogger(__name__)


class BaseService:
    """
    Base service class providing common functionality.
    Services should contain business logic and use repositories for data access.
    """

    def __init__(self, store: EntityStore):
        self.store = store
        self.logger = logging.getLogger(self.__class__.__name__)

    def log_info(self, message: str, **context):
        """Log info message with context"""
        self.logger.info(f"{message} | Context: {context}")

    def log_warning(self, message: str, **context):
        self.logger.warning(f"{message} | Context: {context}")

    def log_error(self, message: str, error: Exception = None, **context):
        """Log error message with context"""
        if error:
            self.logger.error(f"{message} | Context: {context}", exc_info=error)
        else:
            self.logger.error(f"{message} | Context: {context}")

    def deny(self, user, action: str, message: Optional[str] = None):
        """Log the denied action and raise UnauthorizedError"""
        self.log_warning(
            f"Access denied: {action}",
            user_id=getattr(user, 'id', None),
            role=getattr(user, 'role', None),
        )
        raise UnauthorizedError(message or f"Not permitted to {action}", code="FORBIDDEN")

    def require_user(self, user):
        """Raise UnauthorizedError when no session user is present"""
        if user is None:
            raise UnauthorizedError("No active session", code="NO_SESSION")
        return user

"""
Service layer foundations.

- The ServiceError hierarchy shared by HTTP routes and socket handlers
- BaseService.transaction(), one commit or rollback per unit of work
"""

from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from sqlalchemy.exc import SQLAlchemyError

from bidroom import db
from bidroom.logger import get_logger

logger = get_logger(__name__)


class ServiceError(Exception):
    """Base exception for service layer errors.

    Attributes:
        message: Human-readable error message, safe to show to clients.
        status_code: HTTP status code used when the error reaches a route.
    """

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {'success': False, 'error': self.message}


class NotFoundError(ServiceError):
    """A referenced auction, team or player does not exist."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, 404)


class ValidationError(ServiceError):
    """Input failed validation."""

    def __init__(self, message: str):
        super().__init__(message, 400)


class AuthorizationError(ServiceError):
    """A password or access code did not match."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, 401)


class BidRejected(ValidationError):
    """A live room event was malformed or out of order.

    The room state is left untouched and nothing is broadcast to the room.
    """


class BaseService:
    """Base class for services that write to the database.

    Example:
        class TeamService(BaseService):
            def rename(self, team_id: int, name: str):
                with self.transaction('rename team'):
                    ...
    """

    @contextmanager
    def transaction(self, label: Optional[str] = None) -> Generator[None, None, None]:
        """Commit the block's writes, or roll them all back.

        ServiceErrors raised inside the block pass through unchanged.
        Database and unexpected errors are logged and surface as a
        ServiceError with status 500.

        Args:
            label: Short description of the work, used in log messages.
        """
        what = label or 'transaction'
        try:
            yield
            db.session.commit()
        except ServiceError:
            db.session.rollback()
            raise
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Database error during {what}: {e}", exc_info=True)
            raise ServiceError("Database operation failed", 500)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Unexpected error during {what}: {e}", exc_info=True)
            raise ServiceError("An unexpected error occurred", 500)

    def flush(self) -> None:
        """Flush pending changes so generated ids are available."""
        db.session.flush()

"""
Service layer for business logic.

This module provides service classes that encapsulate business logic,
separating it from HTTP and socket handling and from data access in
repositories.
"""

from bidroom.services.base import (
    AuthorizationError,
    BaseService,
    BidRejected,
    NotFoundError,
    ServiceError,
    ValidationError,
)

__all__ = [
    'BaseService',
    'ServiceError',
    'NotFoundError',
    'ValidationError',
    'AuthorizationError',
    'BidRejected',
]

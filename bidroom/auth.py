"""
Authentication utilities for the auction room server.

Access codes and the super-admin password are checked against bcrypt
hashes.
"""

import hmac

import bcrypt
from flask import current_app

from bidroom.logger import get_logger

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    """Hash a password or access code using bcrypt.

    Example:
        >>> hashed = hash_password('room-42')
        >>> verify_password('room-42', hashed)
        True
    """
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a bcrypt hash.

    Returns:
        True if the password matches, False otherwise.
    """
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except (ValueError, TypeError):
        return False


def verify_super_admin(password: str) -> bool:
    """Check the super-admin password against the configured hash or secret.

    SUPER_ADMIN_PASSWORD_HASH takes precedence over the plaintext
    SUPER_ADMIN_PASSWORD. With neither configured every attempt fails.
    """
    if not password:
        return False

    hashed = current_app.config.get('SUPER_ADMIN_PASSWORD_HASH')
    if hashed:
        return verify_password(password, hashed)

    expected = current_app.config.get('SUPER_ADMIN_PASSWORD')
    if not expected:
        logger.warning("Super admin login attempted but no password is configured")
        return False
    return hmac.compare_digest(password.encode('utf-8'), expected.encode('utf-8'))

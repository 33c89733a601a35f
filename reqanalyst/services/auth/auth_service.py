"""Authentication service for password and token hashing."""

import hashlib
import logging
from functools import cache

import bcrypt

from reqanalyst.config import settings

logger = logging.getLogger(__name__)


@cache
def _dummy_hash() -> str:
    return AuthService.hash_password("dummy-password-for-timing")


class AuthService:
    """Service for hashing operations."""

    @staticmethod
    def get_dummy_hash() -> str:
        """Get a dummy password hash for timing-consistent verification.

        Used when the user doesn't exist, so unknown emails cost the same
        bcrypt check as wrong passwords.
        """
        return _dummy_hash()

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        """Verify a password against its hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except Exception as e:
            logger.error(f"Password verification error: {e}")
            return False

    @staticmethod
    def hash_token(token: str) -> str:
        """Hash a token using SHA-256 (reset tokens are looked up by hash)."""
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

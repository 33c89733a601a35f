"""Authentication services.

Handles password hashing, signed session cookies, password reset tokens
and the façade route handlers call into.
"""

from .auth_facade import AuthFacade
from .auth_service import AuthService
from .reset_token_service import ResetTokenService
from .session_codec import SessionCodec, SessionData

__all__ = [
    "AuthFacade",
    "AuthService",
    "ResetTokenService",
    "SessionCodec",
    "SessionData",
]

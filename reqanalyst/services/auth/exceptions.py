"""Authentication error taxonomy.

Messages are deliberately generic. None of them reveal whether an email
is registered.
"""


class AuthErrorKind:
    """Constants for auth failure kinds reported in result objects."""

    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
    NOTIFIER_FAILURE = "notifier_failure"


class AuthError(Exception):
    """Base exception for authentication operations."""

    kind: str = ""


class DuplicateEmailError(AuthError):
    """Registration with an email that is already in use."""

    kind = AuthErrorKind.DUPLICATE_EMAIL

    def __init__(self, email: str):
        self.email = email
        super().__init__("Email already registered")


class InvalidCredentialsError(AuthError):
    """Login mismatch. Never says whether the email or the password was wrong."""

    kind = AuthErrorKind.INVALID_CREDENTIALS

    def __init__(self):
        super().__init__("Invalid email or password")


class InvalidOrExpiredTokenError(AuthError):
    """Reset token is unknown, expired or already used."""

    kind = AuthErrorKind.INVALID_OR_EXPIRED_TOKEN

    def __init__(self):
        super().__init__("Invalid or expired reset token")


class NotifierError(AuthError):
    """Outbound email could not be sent."""

    kind = AuthErrorKind.NOTIFIER_FAILURE

    def __init__(self):
        super().__init__("Unable to send email, please try again later")


class SessionDecodeError(Exception):
    """Session cookie could not be decoded. Internal to the session codec."""

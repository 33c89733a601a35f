"""Password reset token lifecycle."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from reqanalyst.services.email_service import EmailService
from reqanalyst.services.repositories import UserRepository

from .auth_service import AuthService
from .exceptions import AuthErrorKind, NotifierError
from .results import ResetRequestResult, ResetResult

logger = logging.getLogger(__name__)


class ResetTokenService:
    """Issues and consumes single-use, time-limited password reset tokens.

    Only the SHA-256 of a token is stored on the user. The raw token exists
    in the reset link handed to the email service and nowhere else.
    """

    def __init__(
        self,
        db: Session,
        email_service: EmailService,
        app_url: str,
        expire_hours: int = 24,
    ) -> None:
        self._db = db
        self._users = UserRepository(db)
        self._email_service = email_service
        self._app_url = app_url.rstrip("/")
        self._expire_hours = expire_hours

    def reset_url(self, token: str) -> str:
        return f"{self._app_url}/reset-password/{token}"

    def issue(self, email: str) -> ResetRequestResult:
        """Issue a reset token for the email, if it belongs to a user.

        Returns the same result whether or not the email is registered.

        Raises:
            NotifierError: The reset email could not be sent.
        """
        user = self._users.find_by_email(email)
        if not user:
            logger.info("Password reset requested for unknown email")
            return ResetRequestResult(success=True)

        token = secrets.token_hex(32)
        expires_at = datetime.now(UTC) + timedelta(hours=self._expire_hours)

        # Replaces any outstanding token for this user, committed only once the link is sent
        self._users.set_reset_token(user.id, AuthService.hash_token(token), expires_at)

        result = self._email_service.send_password_reset_email(email, self.reset_url(token))
        if not result.success:
            self._db.rollback()
            logger.error(f"Password reset email failed for user {user.id}")
            raise NotifierError()

        self._db.commit()

        logger.info(f"Password reset email sent to user {user.id}")
        return ResetRequestResult(success=True, preview_url=result.preview_url)

    def consume(self, token: str, new_password: str) -> ResetResult:
        """Set a new password if the token is valid, invalidating the token."""
        token_hash = AuthService.hash_token(token)
        user = self._users.find_by_valid_reset_hash(token_hash)
        if not user:
            return ResetResult(success=False, error=AuthErrorKind.INVALID_OR_EXPIRED_TOKEN)

        new_hash = AuthService.hash_password(new_password)

        # Conditional on the token still being valid: a concurrent consumer
        # that got here first leaves nothing to update.
        updated = self._users.update_password_hash(
            user.id, new_hash, reset_token_hash=token_hash
        )
        if not updated:
            self._db.rollback()
            logger.warning(f"Reset token for user {user.id} was consumed concurrently")
            return ResetResult(success=False, error=AuthErrorKind.INVALID_OR_EXPIRED_TOKEN)

        self._db.commit()
        logger.info(f"Password reset for user {user.id}")
        return ResetResult(success=True)

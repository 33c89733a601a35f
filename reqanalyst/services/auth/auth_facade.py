"""Entry points route handlers use to touch identity state."""

import logging
from urllib.parse import urlencode

from sqlalchemy.orm import Session
from starlette.requests import Request

from reqanalyst.models import User
from reqanalyst.services.repositories import DuplicateError, UserRepository

from .auth_service import AuthService
from .exceptions import DuplicateEmailError
from .reset_token_service import ResetTokenService
from .results import Authenticated, Redirect, ResetRequestResult, ResetResult, SessionResult
from .session_codec import SessionCodec

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
HOME_PATH = "/"
DEFAULT_REDIRECT = "/dashboard"


def safe_redirect(to: str | None, default: str = DEFAULT_REDIRECT) -> str:
    """Only allow local paths as redirect targets."""
    if not to or not to.startswith("/") or to.startswith("//") or "\\" in to:
        return default
    return to


class AuthFacade:
    """Register, login, session gate, logout and password reset."""

    def __init__(
        self,
        db: Session,
        sessions: SessionCodec,
        resets: ResetTokenService,
    ) -> None:
        self._db = db
        self._users = UserRepository(db)
        self._sessions = sessions
        self._resets = resets

    def register(self, email: str, password: str, name: str) -> User:
        """Create a user account.

        Raises:
            DuplicateEmailError: The email is already registered.
        """
        try:
            user = self._users.create(
                email=email,
                password_hash=AuthService.hash_password(password),
                name=name,
            )
        except DuplicateError as e:
            raise DuplicateEmailError(email) from e
        self._db.commit()
        logger.info(f"User registered: {user.id}")
        return user

    def login(self, email: str, password: str) -> User | None:
        """Return the user for matching credentials, None for any mismatch."""
        user = self._users.find_by_email(email)
        if not user:
            # Same bcrypt cost as a wrong password, so timing doesn't reveal the email
            AuthService.verify_password(password, AuthService.get_dummy_hash())
            return None

        if not AuthService.verify_password(password, user.password_hash):
            return None

        logger.info(f"User logged in: {user.id}")
        return user

    def create_session(self, user_id: str, redirect_to: str | None = None) -> Redirect:
        cookie = self._sessions.serialize(self._sessions.create(user_id))
        return Redirect(to=safe_redirect(redirect_to), headers={"set-cookie": cookie})

    def get_user_id(self, request: Request) -> str | None:
        return self._sessions.read_request(request)

    def get_user(self, request: Request) -> User | None:
        """Return the signed-in user, None if the session is absent or stale."""
        user_id = self.get_user_id(request)
        if user_id is None:
            return None
        return self._users.find_by_id(user_id)

    def require_session(self, request: Request, redirect_to: str | None = None) -> SessionResult:
        """Gate for protected routes.

        Returns Authenticated with the user id, or a Redirect to the login page
        carrying a redirectTo back-reference.
        """
        user_id = self.get_user_id(request)
        if user_id is not None:
            return Authenticated(user_id=user_id)
        return self.login_redirect(redirect_to or request.url.path)

    @staticmethod
    def login_redirect(back: str) -> Redirect:
        return Redirect(to=f"{LOGIN_PATH}?{urlencode({'redirectTo': back})}")

    def logout(self, request: Request) -> Redirect:
        """Redirect home with a cookie that clears the session. Never fails."""
        user_id = self.get_user_id(request)
        if user_id:
            logger.info(f"User logged out: {user_id}")
        return Redirect(to=HOME_PATH, headers={"set-cookie": self._sessions.destroy()})

    def request_password_reset(self, email: str) -> ResetRequestResult:
        return self._resets.issue(email)

    def consume_password_reset(self, token: str, new_password: str) -> ResetResult:
        return self._resets.consume(token, new_password)

"""Signed session cookies.

A session is a JWT carrying a single ``userId`` claim, stored in an
HTTP-only cookie. Nothing is kept server-side: logging out overwrites the
cookie with an already-expired one.

``read`` has exactly two outcomes, a user id or ``None``. A tampered,
expired or garbled cookie is treated the same as no cookie at all.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from starlette.requests import Request, cookie_parser
from starlette.responses import Response

from reqanalyst.config import settings

from .exceptions import SessionDecodeError

logger = logging.getLogger(__name__)

SESSION_CLAIM = "userId"
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True)
class SessionData:
    user_id: str


class SessionCodec:
    """Creates, reads and destroys the session cookie."""

    def __init__(
        self,
        secret: str,
        cookie_name: str = "ai_requirements_session",
        max_age: timedelta = timedelta(days=30),
        secure: bool = False,
        algorithm: str = "HS256",
    ) -> None:
        self.secret = secret
        self.cookie_name = cookie_name
        self.max_age = max_age
        self.secure = secure
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls) -> "SessionCodec":
        return cls(
            secret=settings.session_secret,
            cookie_name=settings.session_cookie_name,
            max_age=timedelta(days=settings.session_max_age_days),
            secure=settings.is_production,
            algorithm=settings.jwt_algorithm,
        )

    def create(self, user_id: str) -> SessionData:
        return SessionData(user_id=user_id)

    def encode(self, session: SessionData) -> str:
        """Sign the session into a token."""
        now = datetime.now(UTC)
        payload = {
            SESSION_CLAIM: session.user_id,
            "iat": now,
            "exp": now + self.max_age,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def serialize(self, session: SessionData) -> str:
        """Build the Set-Cookie header value for a session."""
        return self._cookie_header(
            self.encode(session), max_age=int(self.max_age.total_seconds())
        )

    def destroy(self, session: SessionData | None = None) -> str:
        """Build a Set-Cookie header value that makes the client drop the session."""
        return self._cookie_header("", max_age=0, expires=EPOCH)

    def read(self, carrier: str | None) -> str | None:
        """Return the user id from a Cookie (or Set-Cookie) header value, or None."""
        if not carrier:
            return None
        try:
            token = cookie_parser(carrier).get(self.cookie_name)
        except Exception:
            logger.debug("Unparseable cookie header")
            return None
        return self.read_token(token)

    def read_request(self, request: Request) -> str | None:
        """Return the user id carried by the request's session cookie, or None."""
        try:
            token = request.cookies.get(self.cookie_name)
        except Exception:
            logger.debug("Unparseable cookie header")
            return None
        return self.read_token(token)

    def read_token(self, token: str | None) -> str | None:
        if not token:
            return None
        try:
            return self._decode(token)
        except SessionDecodeError as e:
            logger.debug(f"Ignoring session cookie: {e}")
            return None

    def _decode(self, token: str) -> str:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise SessionDecodeError("session expired") from e
        except jwt.InvalidTokenError as e:
            raise SessionDecodeError(f"invalid session token: {e}") from e

        user_id = payload.get(SESSION_CLAIM)
        if not isinstance(user_id, str) or not user_id:
            raise SessionDecodeError("session has no user id")
        return user_id

    def _cookie_header(self, value: str, max_age: int, expires: datetime | None = None) -> str:
        response = Response()
        response.set_cookie(
            key=self.cookie_name,
            value=value,
            max_age=max_age,
            expires=expires,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )
        return response.headers["set-cookie"]

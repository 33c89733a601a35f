"""Authentication dependencies for protected routes."""

from fastapi import Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from reqanalyst.config import settings
from reqanalyst.database import get_db
from reqanalyst.models.user import User
from reqanalyst.services.auth import AuthFacade, ResetTokenService, SessionCodec
from reqanalyst.services.auth.results import Authenticated, Redirect
from reqanalyst.services.email_service import EmailService
from reqanalyst.services.generation import GenerationService


class LoginRequired(Exception):
    """Raised by the session gate. Turned into a redirect by the app."""

    def __init__(self, redirect: Redirect):
        self.redirect = redirect
        super().__init__(redirect.to)


def redirect_response(redirect: Redirect) -> RedirectResponse:
    """Realize a façade Redirect as a 303 response."""
    return RedirectResponse(
        url=redirect.to, status_code=status.HTTP_303_SEE_OTHER, headers=redirect.headers
    )


def get_session_codec(request: Request) -> SessionCodec:
    return request.app.state.session_codec


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_generation_service(request: Request) -> GenerationService:
    return request.app.state.generation_service


def get_auth_facade(
    db: Session = Depends(get_db),
    sessions: SessionCodec = Depends(get_session_codec),
    email_service: EmailService = Depends(get_email_service),
) -> AuthFacade:
    resets = ResetTokenService(
        db,
        email_service,
        app_url=settings.app_url,
        expire_hours=settings.reset_token_expire_hours,
    )
    return AuthFacade(db, sessions, resets)


def require_user_id(
    request: Request,
    auth: AuthFacade = Depends(get_auth_facade),
) -> str:
    """
    Get the signed-in user's id, or redirect to the login page.

    Usage:
        @router.get("/protected")
        def protected_route(user_id: str = Depends(require_user_id)):
            return {"user_id": user_id}
    """
    result = auth.require_session(request)
    if isinstance(result, Authenticated):
        return result.user_id
    raise LoginRequired(result)


def get_current_user(
    request: Request,
    auth: AuthFacade = Depends(get_auth_facade),
) -> User:
    """Get the signed-in user. A session for a deleted user counts as no session."""
    user = auth.get_user(request)
    if not user:
        raise LoginRequired(AuthFacade.login_redirect(request.url.path))
    return user

"""Authentication router."""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from reqanalyst.dependencies.auth import get_auth_facade, get_current_user, redirect_response
from reqanalyst.models.user import User
from reqanalyst.rate_limiter import FORGOT_PASSWORD_LIMIT, LOGIN_LIMIT, REGISTER_LIMIT, limiter
from reqanalyst.schemas.auth import (
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    MessageResponse,
    ResetPasswordRequest,
    SessionResponse,
    UserInfo,
    UserLogin,
    UserRegister,
)
from reqanalyst.services.auth import AuthFacade
from reqanalyst.services.auth.exceptions import InvalidCredentialsError, InvalidOrExpiredTokenError
from reqanalyst.services.auth.results import Redirect

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _session_response(user: User, redirect: Redirect, status_code: int) -> JSONResponse:
    """JSON body for the client plus the session cookie from the façade."""
    body = SessionResponse(user=UserInfo.model_validate(user), redirect_to=redirect.to)
    return JSONResponse(
        content=body.model_dump(mode="json"),
        status_code=status_code,
        headers=redirect.headers,
    )


@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTER_LIMIT)
def register(
    request: Request, data: UserRegister, auth: AuthFacade = Depends(get_auth_facade)
) -> JSONResponse:
    """Register a new user and sign them in."""
    user = auth.register(data.email, data.password, data.name)
    return _session_response(
        user, auth.create_session(user.id, data.redirect_to), status.HTTP_201_CREATED
    )


@router.post("/login", response_model=SessionResponse)
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request, data: UserLogin, auth: AuthFacade = Depends(get_auth_facade)
) -> JSONResponse:
    """Check credentials and set the session cookie."""
    user = auth.login(data.email, data.password)
    if not user:
        raise InvalidCredentialsError()
    return _session_response(
        user, auth.create_session(user.id, data.redirect_to), status.HTTP_200_OK
    )


@router.post("/logout")
def logout(request: Request, auth: AuthFacade = Depends(get_auth_facade)) -> RedirectResponse:
    """Clear the session cookie and go home."""
    return redirect_response(auth.logout(request))


@router.post("/forgot-password", response_model=ForgotPasswordResponse)
@limiter.limit(FORGOT_PASSWORD_LIMIT)
def forgot_password(
    request: Request, data: ForgotPasswordRequest, auth: AuthFacade = Depends(get_auth_facade)
) -> dict:
    """Request password reset email."""
    result = auth.request_password_reset(data.email)

    # Always the same message (don't reveal if email exists)
    return {
        "message": "If that email is registered, we sent a password reset link.",
        "preview_url": result.preview_url,
    }


@router.post("/reset-password/{token}", response_model=MessageResponse)
def reset_password(
    token: str, data: ResetPasswordRequest, auth: AuthFacade = Depends(get_auth_facade)
) -> dict:
    """Reset password with token from email."""
    result = auth.consume_password_reset(token, data.password)
    if not result.success:
        raise InvalidOrExpiredTokenError()
    return {"message": "Password reset successfully. You can now log in with your new password."}


@router.get("/me", response_model=UserInfo)
def get_me(current_user: User = Depends(get_current_user)) -> User:
    """Get the current signed-in user's information."""
    return current_user

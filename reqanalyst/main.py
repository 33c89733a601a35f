"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from reqanalyst.config import DEV_SESSION_SECRET, settings
from reqanalyst.dependencies.auth import LoginRequired, redirect_response
from reqanalyst.rate_limiter import limiter
from reqanalyst.services.auth import SessionCodec
from reqanalyst.services.auth.exceptions import (
    AuthError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    NotifierError,
)
from reqanalyst.services.email_service import EmailService
from reqanalyst.services.generation import GenerationService, LLMClient

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

RETRY_LATER = "Service temporarily unavailable, please try again later"

AUTH_ERROR_STATUS = {
    DuplicateEmailError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    InvalidOrExpiredTokenError: status.HTTP_400_BAD_REQUEST,
    NotifierError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the outbound collaborators once and share them through app.state."""
    if settings.session_secret == DEV_SESSION_SECRET:
        logger.warning("SESSION_SECRET is not set, using an insecure development secret")

    app.state.session_codec = SessionCodec.from_settings()
    app.state.email_service = EmailService.from_settings()
    app.state.generation_service = GenerationService(LLMClient.from_settings())
    try:
        yield
    finally:
        app.state.generation_service.close()


# Create FastAPI app
app = FastAPI(
    title="AI Requirements Analyst API",
    description="Derive user stories, entities and database designs from requirements documents",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add rate limiter to app state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired) -> RedirectResponse:
    return redirect_response(exc.redirect)


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    status_code = AUTH_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, NotifierError):
        logger.error(f"Notifier failure on {request.url.path}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": RETRY_LATER}
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "AI Requirements Analyst API", "version": "0.1.0", "status": "running"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Import and include routers
from reqanalyst.routers import auth, projects  # noqa: E402

app.include_router(auth.router, prefix="/api")
app.include_router(projects.router)


def run() -> None:
    import uvicorn

    uvicorn.run("reqanalyst.main:app", host="0.0.0.0", port=8000, reload=settings.debug)


if __name__ == "__main__":
    run()

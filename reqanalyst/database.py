"""Database configuration and session management."""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from reqanalyst.config import settings


# Base class for ORM models
class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    pass


def _engine_options(database_url: str) -> dict:
    """Engine options with a bounded wait on the store for each backend."""
    if database_url.startswith("sqlite"):
        return {
            "connect_args": {
                "check_same_thread": False,
                "timeout": settings.store_timeout_seconds,
            },
        }

    timeout_ms = settings.store_timeout_seconds * 1000
    return {
        "pool_pre_ping": True,  # Enable connection health checks
        "pool_size": 10,
        "max_overflow": 20,
        "pool_recycle": 3600,  # Recycle connections after 1 hour
        "isolation_level": "READ COMMITTED",
        "connect_args": {
            # Fail fast instead of waiting indefinitely on locks or slow statements
            "options": f"-c lock_timeout={timeout_ms} -c statement_timeout={timeout_ms}"
        },
    }


engine = create_engine(settings.database_url, echo=False, **_engine_options(settings.database_url))

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,  # Prevent lazy loading errors after commit
)


# Dependency for FastAPI routes
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Yields:
        Session: SQLAlchemy database session

    Example:
        @router.get("/projects")
        def list_projects(db: Session = Depends(get_db)):
            return ProjectRepository(db).list_for_user(user_id)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

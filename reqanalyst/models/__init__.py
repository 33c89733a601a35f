"""SQLAlchemy ORM models."""

from reqanalyst.models.project import Project
from reqanalyst.models.user import User

__all__ = [
    "Project",
    "User",
]

"""Services layer - business logic and external integrations.

This module is organized into domain-based subpackages:
- auth/: Passwords, sessions and password reset
- generation/: Language model generation of project artifacts
- repositories/: Data access layer
- shared/: Shared utilities

Common imports for convenience:
    from reqanalyst.services import ProjectRepository, UserRepository
"""

# Re-export commonly used components for convenience
from reqanalyst.services.repositories import (
    DuplicateError,
    NotFoundError,
    ProjectRepository,
    RepositoryError,
    UserRepository,
)

__all__ = [
    # Repositories
    "DuplicateError",
    "NotFoundError",
    "ProjectRepository",
    "RepositoryError",
    "UserRepository",
]

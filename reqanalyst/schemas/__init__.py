"""Pydantic schemas for API request/response validation."""

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
from reqanalyst.schemas.project import (
    GeneratedArtifact,
    Project,
    ProjectCreate,
    ProjectSummary,
    RequirementsUpdate,
)

__all__ = [
    "ForgotPasswordRequest",
    "ForgotPasswordResponse",
    "GeneratedArtifact",
    "MessageResponse",
    "Project",
    "ProjectCreate",
    "ProjectSummary",
    "RequirementsUpdate",
    "ResetPasswordRequest",
    "SessionResponse",
    "UserInfo",
    "UserLogin",
    "UserRegister",
]

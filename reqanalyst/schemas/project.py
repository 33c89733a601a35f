"""Pydantic schemas for Project model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProjectCreate(BaseModel):
    """Schema for creating a new Project."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)


class RequirementsUpdate(BaseModel):
    """Schema for replacing a project's requirements document."""

    requirement_doc: str


class ProjectSummary(BaseModel):
    """Project as listed on the dashboard."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class Project(ProjectSummary):
    """Schema for full Project responses."""

    requirement_doc: str | None = None
    user_stories: str | None = None
    entities: str | None = None
    db_design: str | None = None


class GeneratedArtifact(BaseModel):
    """Content generated for one artifact of a project."""

    artifact: str
    content: str

"""Projects API router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from reqanalyst.database import get_db
from reqanalyst.dependencies.auth import get_generation_service, require_user_id
from reqanalyst.models.project import Project
from reqanalyst.schemas.project import GeneratedArtifact, ProjectCreate, ProjectSummary, RequirementsUpdate
from reqanalyst.schemas.project import Project as ProjectSchema
from reqanalyst.services.generation import (
    ArtifactKind,
    GenerationError,
    GenerationNotConfiguredError,
    GenerationService,
)
from reqanalyst.services.repositories import NotFoundError, ProjectRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])

# URL segment -> artifact kind
ARTIFACT_SLUGS = {
    "user-stories": ArtifactKind.USER_STORIES,
    "entities": ArtifactKind.ENTITIES,
    "db-design": ArtifactKind.DB_DESIGN,
}


def _get_project(repo: ProjectRepository, project_id: str, user_id: str) -> Project:
    try:
        return repo.get_for_user(project_id, user_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")


@router.get("", response_model=list[ProjectSummary])
def list_projects(
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user_id),
) -> list[Project]:
    """Get the current user's projects, most recently updated first."""
    return ProjectRepository(db).list_for_user(user_id)


@router.post("", response_model=ProjectSchema, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user_id),
) -> Project:
    """Create a new project for the current user."""
    project = ProjectRepository(db).create(user_id, data.name, data.description)
    db.commit()
    db.refresh(project)
    logger.info(f"Project created: {project.id} for user {user_id}")
    return project


@router.get("/{project_id}", response_model=ProjectSchema)
def get_project(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user_id),
) -> Project:
    """Get a project with its requirements and generated artifacts."""
    return _get_project(ProjectRepository(db), project_id, user_id)


@router.put("/{project_id}/requirements", response_model=ProjectSchema)
def update_requirements(
    project_id: str,
    data: RequirementsUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user_id),
) -> Project:
    """Replace the project's requirements document."""
    repo = ProjectRepository(db)
    project = repo.update_requirements(_get_project(repo, project_id, user_id), data.requirement_doc)
    db.commit()
    db.refresh(project)
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user_id),
) -> Response:
    """Delete a project."""
    repo = ProjectRepository(db)
    repo.delete(_get_project(repo, project_id, user_id))
    db.commit()
    logger.info(f"Project deleted: {project_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{project_id}/generate/{artifact}", response_model=GeneratedArtifact)
def generate_artifact(
    project_id: str,
    artifact: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user_id),
    generation: GenerationService = Depends(get_generation_service),
) -> dict:
    """Generate one artifact from the project's requirements and store it."""
    kind = ARTIFACT_SLUGS.get(artifact)
    if kind is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown artifact. Valid options: {', '.join(ARTIFACT_SLUGS)}",
        )

    repo = ProjectRepository(db)
    project = _get_project(repo, project_id, user_id)
    if not project.requirement_doc or not project.requirement_doc.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Add a requirements document before generating",
        )

    try:
        content = generation.generate(kind, project.requirement_doc)
    except GenerationNotConfiguredError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except GenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    repo.save_artifact(project, kind.value, content)
    db.commit()
    return {"artifact": artifact, "content": content}

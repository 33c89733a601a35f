"""Project data access layer."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from reqanalyst.models import Project

from .exceptions import NotFoundError

logger = logging.getLogger(__name__)

# Artifact kind -> Project column
ARTIFACT_COLUMNS = {
    "user_stories": "user_stories",
    "entities": "entities",
    "db_design": "db_design",
}


class ProjectRepository:
    """Project data access, always scoped to the owning user."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def list_for_user(self, user_id: str) -> list[Project]:
        """List a user's projects, most recently updated first."""
        return (
            self._db.query(Project)
            .filter(Project.user_id == user_id)
            .order_by(Project.updated_at.desc(), Project.created_at.desc())
            .all()
        )

    def find_for_user(self, project_id: str, user_id: str) -> Project | None:
        """Find a project by id, only if it belongs to the user."""
        return (
            self._db.query(Project)
            .filter(Project.id == project_id, Project.user_id == user_id)
            .first()
        )

    def get_for_user(self, project_id: str, user_id: str) -> Project:
        """Get a user's project, raising NotFoundError if missing or not owned."""
        project = self.find_for_user(project_id, user_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    def create(self, user_id: str, name: str, description: str | None = None) -> Project:
        project = Project(user_id=user_id, name=name, description=description)
        self._db.add(project)
        self._db.flush()
        return project

    def update_requirements(self, project: Project, requirement_doc: str) -> Project:
        project.requirement_doc = requirement_doc
        project.updated_at = datetime.now(UTC)
        self._db.flush()
        return project

    def save_artifact(self, project: Project, kind: str, content: str) -> Project:
        """Store generated content in the column for the artifact kind."""
        column = ARTIFACT_COLUMNS.get(kind)
        if column is None:
            raise ValueError(f"Unknown artifact kind: {kind}")
        setattr(project, column, content)
        project.updated_at = datetime.now(UTC)
        self._db.flush()
        return project

    def delete(self, project: Project) -> None:
        self._db.delete(project)
        self._db.flush()

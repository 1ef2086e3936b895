"""Project routes."""
from fastapi import APIRouter, status

from kanban.api.deps import CurrentScope, DatabaseSession
from kanban.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from kanban.services import project_service

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=ProjectListResponse)
def list_projects(scope: CurrentScope, db: DatabaseSession):
    """List the current user's projects."""
    return ProjectListResponse(data=project_service.list_projects(db, scope))


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(project_data: ProjectCreate, scope: CurrentScope, db: DatabaseSession):
    """
    Create a project.

    The project starts with a "Main Board" holding the columns To Do,
    In Progress and Done.
    """
    return project_service.create_project(
        db, scope, project_data.name, project_data.description
    )


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(project_id: int, scope: CurrentScope, db: DatabaseSession):
    """Get a project."""
    return project_service.get_project(db, scope, project_id)


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    scope: CurrentScope,
    db: DatabaseSession,
):
    """Update a project."""
    return project_service.update_project(
        db, scope, project_id, project_data.model_dump(exclude_unset=True)
    )


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: int, scope: CurrentScope, db: DatabaseSession):
    """Delete a project and everything in it."""
    project_service.delete_project(db, scope, project_id)

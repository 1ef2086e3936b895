"""Project service: CRUD plus default board bootstrap."""
import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from kanban.core.errors import ValidationError
from kanban.core.positions import append_position
from kanban.core.scope import Scope, authorize_project
from kanban.models import Board, Column, Project

logger = logging.getLogger(__name__)

DEFAULT_BOARD_NAME = "Main Board"
DEFAULT_COLUMN_NAMES = ("To Do", "In Progress", "Done")


def create_project(
    db: Session,
    scope: Scope,
    name: str,
    description: str | None = None,
) -> Project:
    """
    Create a project with a default board and three default columns.

    The project, board and columns are written in one transaction: if any
    insert fails, none of them is kept.

    Args:
        db: Database session
        scope: Authorization scope
        name: Project name
        description: Project description

    Returns:
        Created project

    Raises:
        ValidationError: If the name is blank
    """
    if not name or not name.strip():
        raise ValidationError("name is required")

    try:
        project = Project(
            name=name.strip(),
            description=description or "",
            owner_id=scope.user_id,
        )
        db.add(project)
        db.flush()

        board = Board(project_id=project.id, name=DEFAULT_BOARD_NAME)
        db.add(board)
        db.flush()

        positions: list[float] = []
        for column_name in DEFAULT_COLUMN_NAMES:
            position = append_position(positions)
            positions.append(position)
            db.add(Column(board_id=board.id, name=column_name, position=position))

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(project)
    logger.info(f"Created project {project.id} with default board {board.id}")
    return project


def get_project(db: Session, scope: Scope, project_id: int) -> Project:
    """
    Get a project owned by the caller.

    Raises:
        NotFoundError: If the project does not exist
        ForbiddenError: If the caller is not the owner
    """
    return authorize_project(db, project_id, scope.user_id)


def list_projects(db: Session, scope: Scope) -> list[Project]:
    """List the caller's projects, newest first."""
    stmt = (
        select(Project)
        .where(Project.owner_id == scope.user_id)
        .order_by(Project.inserted_at.desc(), Project.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def update_project(
    db: Session,
    scope: Scope,
    project_id: int,
    updates: dict[str, Any],
) -> Project:
    """
    Update a project's name and/or description.

    Raises:
        NotFoundError: If the project does not exist
        ForbiddenError: If the caller is not the owner
        ValidationError: If the name is set to blank
    """
    project = authorize_project(db, project_id, scope.user_id)

    if updates.get("name") is not None:
        if not updates["name"].strip():
            raise ValidationError("name cannot be empty")
        project.name = updates["name"].strip()
    if updates.get("description") is not None:
        project.description = updates["description"]

    project.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(project)

    return project


def delete_project(db: Session, scope: Scope, project_id: int) -> None:
    """
    Delete a project together with its boards, columns, tasks and labels.

    Raises:
        NotFoundError: If the project does not exist
        ForbiddenError: If the caller is not the owner
    """
    project = authorize_project(db, project_id, scope.user_id)
    db.delete(project)
    db.commit()

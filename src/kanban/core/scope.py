"""Scope and ownership-chain authorization.

Every entity below a project stores only its parent's id, so deciding who may
touch a task means walking task -> column -> board -> project and comparing
the project's owner. Each ``authorize_*`` function loads one entity and
delegates to the function one hop up, so a missing link is always reported
(``NotFoundError``) before a wrong owner (``ForbiddenError``).
"""
from dataclasses import dataclass
from typing import TypeVar

from sqlalchemy.orm import Session

from kanban.core.errors import ForbiddenError, NotFoundError
from kanban.core.security import AccessClaims
from kanban.models import Board, Column, Label, Project, Task

ModelT = TypeVar("ModelT")


@dataclass(frozen=True)
class Scope:
    """Identity of the caller, taken from a verified access token."""

    user_id: int
    email: str
    role: str

    @classmethod
    def from_claims(cls, claims: AccessClaims) -> "Scope":
        return cls(user_id=claims.user_id, email=claims.email, role=claims.role)


def _load(db: Session, model: type[ModelT], entity_id: int) -> ModelT:
    entity = db.get(model, entity_id)
    if entity is None:
        raise NotFoundError(model.__name__, entity_id)
    return entity


def authorize_project(db: Session, project_id: int, owner_id: int) -> Project:
    """
    Check that ``owner_id`` owns the project.

    Args:
        db: Database session
        project_id: Project ID
        owner_id: Claimed owner (the caller)

    Returns:
        The project

    Raises:
        NotFoundError: If the project does not exist
        ForbiddenError: If the project belongs to someone else
    """
    project = _load(db, Project, project_id)
    if project.owner_id != owner_id:
        raise ForbiddenError("not the owner of this project")
    return project


def authorize_board(db: Session, board_id: int, owner_id: int) -> Board:
    """Check ownership of a board through its project."""
    board = _load(db, Board, board_id)
    authorize_project(db, board.project_id, owner_id)
    return board


def authorize_column(db: Session, column_id: int, owner_id: int) -> Column:
    """Check ownership of a column through its board and project."""
    column = _load(db, Column, column_id)
    authorize_board(db, column.board_id, owner_id)
    return column


def authorize_task(db: Session, task_id: int, owner_id: int) -> Task:
    """Check ownership of a task through its column, board and project."""
    task = _load(db, Task, task_id)
    authorize_column(db, task.column_id, owner_id)
    return task


def authorize_label(db: Session, label_id: int, owner_id: int) -> Label:
    """Check ownership of a label through its project."""
    label = _load(db, Label, label_id)
    authorize_project(db, label.project_id, owner_id)
    return label


def project_id_for_task(db: Session, task: Task) -> int:
    """
    Resolve the project a task belongs to.

    Raises:
        NotFoundError: If the column or board link is broken
    """
    column = _load(db, Column, task.column_id)
    board = _load(db, Board, column.board_id)
    return board.project_id

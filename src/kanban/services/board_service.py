"""Board service for boards and their ordered columns."""
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from kanban.core.errors import ValidationError
from kanban.core.positions import append_position, move, renumber
from kanban.core.scope import Scope, authorize_board, authorize_column, authorize_project
from kanban.models import Board, Column


def _require_name(name: str | None, message: str = "name is required") -> str:
    if name is None or not name.strip():
        raise ValidationError(message)
    return name.strip()


def create_board(db: Session, scope: Scope, project_id: int, name: str) -> Board:
    """
    Create a board in a project.

    Raises:
        NotFoundError: If the project does not exist
        ForbiddenError: If the caller does not own the project
        ValidationError: If the name is blank
    """
    authorize_project(db, project_id, scope.user_id)

    board = Board(project_id=project_id, name=_require_name(name))
    db.add(board)
    db.commit()
    db.refresh(board)

    return board


def get_board(db: Session, scope: Scope, board_id: int) -> Board:
    """Get a board the caller owns."""
    return authorize_board(db, board_id, scope.user_id)


def list_boards(db: Session, scope: Scope, project_id: int) -> list[Board]:
    """List the boards of a project the caller owns."""
    authorize_project(db, project_id, scope.user_id)

    stmt = select(Board).where(Board.project_id == project_id).order_by(Board.id)
    return list(db.execute(stmt).scalars().all())


def update_board(db: Session, scope: Scope, board_id: int, updates: dict[str, Any]) -> Board:
    """
    Rename a board.

    Raises:
        NotFoundError: If the board or its project does not exist
        ForbiddenError: If the caller does not own the project
        ValidationError: If the name is set to blank
    """
    board = authorize_board(db, board_id, scope.user_id)

    if "name" in updates and updates["name"] is not None:
        board.name = _require_name(updates["name"], "name cannot be empty")

    board.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(board)

    return board


def delete_board(db: Session, scope: Scope, board_id: int) -> None:
    """Delete a board with its columns and tasks."""
    board = authorize_board(db, board_id, scope.user_id)
    db.delete(board)
    db.commit()


def create_column(db: Session, scope: Scope, board_id: int, name: str) -> Column:
    """
    Append a column to the end of a board.

    Raises:
        NotFoundError: If the board or its project does not exist
        ForbiddenError: If the caller does not own the project
        ValidationError: If the name is blank
    """
    authorize_board(db, board_id, scope.user_id)
    name = _require_name(name)

    stmt = select(Column.position).where(Column.board_id == board_id)
    position = append_position(db.execute(stmt).scalars().all())

    column = Column(board_id=board_id, name=name, position=position)
    db.add(column)
    db.commit()
    db.refresh(column)

    return column


def list_columns(db: Session, scope: Scope, board_id: int) -> list[Column]:
    """List a board's columns ordered by position."""
    authorize_board(db, board_id, scope.user_id)

    stmt = (
        select(Column)
        .where(Column.board_id == board_id)
        .order_by(Column.position, Column.id)
    )
    return list(db.execute(stmt).scalars().all())


def update_column(
    db: Session, scope: Scope, column_id: int, updates: dict[str, Any]
) -> Column:
    """
    Rename and/or reposition a column.

    A supplied position moves the column within its board and is stored
    exactly as given.

    Raises:
        NotFoundError: If a link of the ownership chain is missing
        ForbiddenError: If the caller does not own the project
        ValidationError: If the name is set to blank
    """
    column = authorize_column(db, column_id, scope.user_id)

    if "name" in updates and updates["name"] is not None:
        column.name = _require_name(updates["name"], "name cannot be empty")
    if "position" in updates and updates["position"] is not None:
        move(column, "board_id", column.board_id, updates["position"])

    column.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(column)

    return column


def delete_column(db: Session, scope: Scope, column_id: int) -> None:
    """Delete a column with its tasks."""
    column = authorize_column(db, column_id, scope.user_id)
    db.delete(column)
    db.commit()


def rebalance_columns(db: Session, scope: Scope, board_id: int) -> list[Column]:
    """
    Renumber a board's columns to 1000, 2000, ... keeping their order.

    Returns:
        Columns in their new order
    """
    authorize_board(db, board_id, scope.user_id)

    stmt = select(Column).where(Column.board_id == board_id)
    columns = renumber(list(db.execute(stmt).scalars().all()))
    db.commit()

    return columns

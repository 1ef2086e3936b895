"""Board and column routes."""
from fastapi import APIRouter, status

from kanban.api.deps import CurrentScope, DatabaseSession
from kanban.schemas.board import (
    BoardCreate,
    BoardListResponse,
    BoardResponse,
    BoardUpdate,
    ColumnCreate,
    ColumnListResponse,
    ColumnResponse,
    ColumnUpdate,
)
from kanban.services import board_service

router = APIRouter(tags=["boards"])


@router.get("/projects/{project_id}/boards", response_model=BoardListResponse)
def list_boards(project_id: int, scope: CurrentScope, db: DatabaseSession):
    """List a project's boards."""
    return BoardListResponse(data=board_service.list_boards(db, scope, project_id))


@router.post(
    "/projects/{project_id}/boards",
    response_model=BoardResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_board(
    project_id: int, board_data: BoardCreate, scope: CurrentScope, db: DatabaseSession
):
    """Create a board in a project."""
    return board_service.create_board(db, scope, project_id, board_data.name)


@router.get("/boards/{board_id}", response_model=BoardResponse)
def get_board(board_id: int, scope: CurrentScope, db: DatabaseSession):
    """Get a board."""
    return board_service.get_board(db, scope, board_id)


@router.patch("/boards/{board_id}", response_model=BoardResponse)
def update_board(
    board_id: int, board_data: BoardUpdate, scope: CurrentScope, db: DatabaseSession
):
    """Rename a board."""
    return board_service.update_board(
        db, scope, board_id, board_data.model_dump(exclude_unset=True)
    )


@router.delete("/boards/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_board(board_id: int, scope: CurrentScope, db: DatabaseSession):
    """Delete a board with its columns and tasks."""
    board_service.delete_board(db, scope, board_id)


@router.get("/boards/{board_id}/columns", response_model=ColumnListResponse)
def list_columns(board_id: int, scope: CurrentScope, db: DatabaseSession):
    """List a board's columns in display order."""
    return ColumnListResponse(data=board_service.list_columns(db, scope, board_id))


@router.post(
    "/boards/{board_id}/columns",
    response_model=ColumnResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_column(
    board_id: int, column_data: ColumnCreate, scope: CurrentScope, db: DatabaseSession
):
    """Append a column to a board."""
    return board_service.create_column(db, scope, board_id, column_data.name)


@router.post("/boards/{board_id}/columns/rebalance", response_model=ColumnListResponse)
def rebalance_columns(board_id: int, scope: CurrentScope, db: DatabaseSession):
    """Renumber a board's column positions to 1000, 2000, ..."""
    return ColumnListResponse(data=board_service.rebalance_columns(db, scope, board_id))


@router.patch("/columns/{column_id}", response_model=ColumnResponse)
def update_column(
    column_id: int, column_data: ColumnUpdate, scope: CurrentScope, db: DatabaseSession
):
    """Rename a column and/or move it to a new position."""
    return board_service.update_column(
        db, scope, column_id, column_data.model_dump(exclude_unset=True)
    )


@router.delete("/columns/{column_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_column(column_id: int, scope: CurrentScope, db: DatabaseSession):
    """Delete a column with its tasks."""
    board_service.delete_column(db, scope, column_id)

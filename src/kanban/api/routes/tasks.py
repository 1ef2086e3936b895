"""Task routes."""
from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from kanban.api.deps import CurrentScope, DatabaseSession
from kanban.models import TaskPriority
from kanban.schemas.task import (
    TaskCreate,
    TaskListResponse,
    TaskMove,
    TaskResponse,
    TaskUpdate,
)
from kanban.services import task_service

router = APIRouter(tags=["tasks"])


@router.post(
    "/columns/{column_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    column_id: int, task_data: TaskCreate, scope: CurrentScope, db: DatabaseSession
):
    """
    Create a task at the bottom of a column.

    Args:
        column_id: Column ID
        task_data: Task creation data
        scope: Current user scope
        db: Database session

    Returns:
        Created task
    """
    return task_service.create_task(
        db,
        scope,
        column_id,
        title=task_data.title,
        description=task_data.description,
        priority=task_data.priority.value,
        assignee_id=task_data.assignee_id,
    )


@router.post("/columns/{column_id}/tasks/rebalance", response_model=TaskListResponse)
def rebalance_tasks(column_id: int, scope: CurrentScope, db: DatabaseSession):
    """Renumber a column's task positions to 1000, 2000, ..."""
    return TaskListResponse(data=task_service.rebalance_tasks(db, scope, column_id))


@router.get("/boards/{board_id}/tasks", response_model=TaskListResponse)
def list_board_tasks(
    board_id: int,
    scope: CurrentScope,
    db: DatabaseSession,
    column_id: Annotated[int | None, Query(description="Filter by column")] = None,
    priority: Annotated[TaskPriority | None, Query(description="Filter by priority")] = None,
    assignee_id: Annotated[int | None, Query(description="Filter by assignee")] = None,
):
    """
    List a board's tasks in board order.

    Args:
        board_id: Board ID
        scope: Current user scope
        db: Database session
        column_id: Optional column filter
        priority: Optional priority filter
        assignee_id: Optional assignee filter

    Returns:
        List of tasks
    """
    tasks = task_service.list_tasks_for_board(
        db,
        scope,
        board_id,
        column_id=column_id,
        priority=priority.value if priority else None,
        assignee_id=assignee_id,
    )
    return TaskListResponse(data=tasks)


@router.get("/boards/{board_id}/tasks/export")
def export_board_tasks(board_id: int, scope: CurrentScope, db: DatabaseSession):
    """Download a board's tasks as CSV."""
    content = task_service.export_tasks_csv(db, scope, board_id)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="board-{board_id}-tasks.csv"'},
    )


@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, scope: CurrentScope, db: DatabaseSession):
    """Get a task."""
    return task_service.get_task(db, scope, task_id)


@router.patch("/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int, task_data: TaskUpdate, scope: CurrentScope, db: DatabaseSession
):
    """Update a task."""
    updates = task_data.model_dump(exclude_unset=True)
    if updates.get("priority") is not None:
        updates["priority"] = updates["priority"].value
    return task_service.update_task(db, scope, task_id, updates)


@router.put("/tasks/{task_id}/move", response_model=TaskResponse)
def move_task(task_id: int, move_data: TaskMove, scope: CurrentScope, db: DatabaseSession):
    """Move a task to a column at the given position."""
    return task_service.move_task(db, scope, task_id, move_data.column_id, move_data.position)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, scope: CurrentScope, db: DatabaseSession):
    """Delete a task."""
    task_service.delete_task(db, scope, task_id)

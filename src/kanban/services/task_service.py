"""Task service for CRUD, moves and board exports."""
import csv
import io
import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from kanban.core.errors import ValidationError
from kanban.core.positions import append_position, move, renumber
from kanban.core.scope import Scope, authorize_board, authorize_column, authorize_task
from kanban.models import Column, Task, TaskPriority, User

logger = logging.getLogger(__name__)

CSV_HEADER = ["Title", "Description", "Priority", "Column", "Created"]
VALID_PRIORITIES = {p.value for p in TaskPriority}


def _validate_priority(priority: str) -> str:
    value = priority.value if isinstance(priority, TaskPriority) else priority
    if value not in VALID_PRIORITIES:
        raise ValidationError(f"priority must be one of: {', '.join(sorted(VALID_PRIORITIES))}")
    return value


def _validate_assignee(db: Session, assignee_id: int | None) -> int | None:
    if assignee_id is not None and db.get(User, assignee_id) is None:
        raise ValidationError(f"assignee does not exist: {assignee_id}")
    return assignee_id


def create_task(
    db: Session,
    scope: Scope,
    column_id: int,
    title: str,
    description: str | None = None,
    priority: str = TaskPriority.MEDIUM.value,
    assignee_id: int | None = None,
) -> Task:
    """
    Create a task at the bottom of a column.

    Args:
        db: Database session
        scope: Authorization scope
        column_id: Column to create the task in
        title: Task title
        description: Task description
        priority: One of low, medium, high
        assignee_id: Optional assigned user

    Returns:
        Created task

    Raises:
        NotFoundError: If a link of the ownership chain is missing
        ForbiddenError: If the caller does not own the project
        ValidationError: If the title is blank, the priority unknown or the
            assignee does not exist
    """
    authorize_column(db, column_id, scope.user_id)

    if not title or not title.strip():
        raise ValidationError("title is required")
    priority = _validate_priority(priority or TaskPriority.MEDIUM.value)
    _validate_assignee(db, assignee_id)

    stmt = select(Task.position).where(Task.column_id == column_id)
    position = append_position(db.execute(stmt).scalars().all())

    task = Task(
        column_id=column_id,
        title=title.strip(),
        description=description or "",
        priority=priority,
        assignee_id=assignee_id,
        position=position,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    logger.info(f"Created task {task.id} in column {column_id} at {position}")
    return task


def get_task(db: Session, scope: Scope, task_id: int) -> Task:
    """Get a task the caller owns."""
    return authorize_task(db, task_id, scope.user_id)


def list_tasks_for_board(
    db: Session,
    scope: Scope,
    board_id: int,
    column_id: int | None = None,
    priority: str | None = None,
    assignee_id: int | None = None,
) -> list[Task]:
    """
    List a board's tasks ordered by column position, then task position.

    Args:
        db: Database session
        scope: Authorization scope
        board_id: Board ID
        column_id: Only tasks in this column
        priority: Only tasks with this priority
        assignee_id: Only tasks assigned to this user

    Returns:
        List of tasks
    """
    authorize_board(db, board_id, scope.user_id)

    stmt = select(Task).join(Column, Task.column_id == Column.id).where(Column.board_id == board_id)

    if column_id is not None:
        stmt = stmt.where(Task.column_id == column_id)
    if priority is not None:
        stmt = stmt.where(Task.priority == _validate_priority(priority))
    if assignee_id is not None:
        stmt = stmt.where(Task.assignee_id == assignee_id)

    stmt = stmt.order_by(Column.position, Column.id, Task.position, Task.id)
    return list(db.execute(stmt).scalars().all())


def update_task(db: Session, scope: Scope, task_id: int, updates: dict[str, Any]) -> Task:
    """
    Update a task's fields.

    ``assignee_id`` may be set to None explicitly to unassign.

    Raises:
        NotFoundError: If a link of the ownership chain is missing
        ForbiddenError: If the caller does not own the project
        ValidationError: On a blank title, unknown priority or assignee
    """
    task = authorize_task(db, task_id, scope.user_id)

    if updates.get("title") is not None:
        if not updates["title"].strip():
            raise ValidationError("title cannot be empty")
        task.title = updates["title"].strip()
    if updates.get("description") is not None:
        task.description = updates["description"]
    if updates.get("priority") is not None:
        task.priority = _validate_priority(updates["priority"])
    if "assignee_id" in updates:
        task.assignee_id = _validate_assignee(db, updates["assignee_id"])

    task.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(task)

    return task


def move_task(
    db: Session, scope: Scope, task_id: int, column_id: int, position: float
) -> Task:
    """
    Move a task to a column at a client-chosen position.

    The caller must own both the task and the target column. The position is
    stored verbatim; siblings are not renumbered.

    Raises:
        NotFoundError: If the task, the target column, or a link above either
            is missing
        ForbiddenError: If the caller does not own either chain
    """
    task = authorize_task(db, task_id, scope.user_id)
    authorize_column(db, column_id, scope.user_id)

    move(task, "column_id", column_id, position)
    db.commit()
    db.refresh(task)

    logger.debug(f"Moved task {task.id} to column {column_id} at {position}")
    return task


def delete_task(db: Session, scope: Scope, task_id: int) -> None:
    """Delete a task with its comments and label links."""
    task = authorize_task(db, task_id, scope.user_id)
    db.delete(task)
    db.commit()


def rebalance_tasks(db: Session, scope: Scope, column_id: int) -> list[Task]:
    """
    Renumber a column's tasks to 1000, 2000, ... keeping their order.

    Returns:
        Tasks in their new order
    """
    authorize_column(db, column_id, scope.user_id)

    stmt = select(Task).where(Task.column_id == column_id)
    tasks = renumber(list(db.execute(stmt).scalars().all()))
    db.commit()

    logger.info(f"Rebalanced {len(tasks)} tasks in column {column_id}")
    return tasks


def export_tasks_csv(db: Session, scope: Scope, board_id: int) -> str:
    """
    Export a board's tasks as CSV.

    Rows follow board order (column position, then task position) with the
    header ``Title,Description,Priority,Column,Created``; the creation date
    is written as ``YYYY-MM-DD``.

    Returns:
        CSV document
    """
    authorize_board(db, board_id, scope.user_id)

    stmt = (
        select(Task, Column.name)
        .join(Column, Task.column_id == Column.id)
        .where(Column.board_id == board_id)
        .order_by(Column.position, Column.id, Task.position, Task.id)
    )

    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADER)
    for task, column_name in db.execute(stmt).all():
        writer.writerow(
            [
                task.title,
                task.description,
                task.priority,
                column_name,
                task.inserted_at.strftime("%Y-%m-%d"),
            ]
        )

    return buffer.getvalue()
